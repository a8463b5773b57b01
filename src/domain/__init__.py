"""Domain package for business rules and core models."""

from .constants import BASE_CURRENCY, CORE_COLLECTIONS, TRANSACTION_KINDS
from .errors import (
    LedgerError,
    LedgerValidationError,
    MissingReferenceError,
    StoreError,
)
from .models import (
    Account,
    AccountBalance,
    AssetSummary,
    BillingWindow,
    Card,
    Currency,
    Schedule,
    Transaction,
    UpcomingPayment,
)
from .policies import ensure_account_deletable, filter_transactions
from .services import (
    CurrencyTable,
    build_currency_table,
    compute_account_balances,
    compute_asset_summary,
    compute_billing_window,
    compute_card_due,
)

__all__ = [
    "BASE_CURRENCY",
    "CORE_COLLECTIONS",
    "TRANSACTION_KINDS",
    "LedgerError",
    "LedgerValidationError",
    "MissingReferenceError",
    "StoreError",
    "Account",
    "AccountBalance",
    "AssetSummary",
    "BillingWindow",
    "Card",
    "Currency",
    "Schedule",
    "Transaction",
    "UpcomingPayment",
    "ensure_account_deletable",
    "filter_transactions",
    "CurrencyTable",
    "build_currency_table",
    "compute_account_balances",
    "compute_asset_summary",
    "compute_billing_window",
    "compute_card_due",
]
