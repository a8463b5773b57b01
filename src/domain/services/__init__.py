"""Domain services package."""

from .billing import compute_billing_window, compute_card_due
from .finance import compute_asset_summary, compute_upcoming_payments
from .fx import CurrencyTable, build_currency_table
from .ledger import (
    compute_account_balances,
    compute_all_balances,
    total_in_krw,
)
from .normalization import normalize_label, normalize_symbol
from .reports import compute_category_totals, compute_monthly_cashflow
from .validation import (
    validate_account,
    validate_card,
    validate_currency,
    validate_transaction,
)

__all__ = [
    "CurrencyTable",
    "build_currency_table",
    "compute_account_balances",
    "compute_all_balances",
    "total_in_krw",
    "compute_billing_window",
    "compute_card_due",
    "compute_asset_summary",
    "compute_upcoming_payments",
    "compute_category_totals",
    "compute_monthly_cashflow",
    "normalize_label",
    "normalize_symbol",
    "validate_account",
    "validate_card",
    "validate_currency",
    "validate_transaction",
]
