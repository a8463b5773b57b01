"""Domain models package."""

from .accounts import Account, Card
from .currencies import Currency
from .finance import (
    AccountBalance,
    AssetSummary,
    BillingWindow,
    CategoryAmount,
    MonthlyCashflow,
    UpcomingPayment,
)
from .schedules import Schedule
from .transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    ForeignAmount,
    IncomeTransaction,
    PaymentTransaction,
    Transaction,
    TransferTransaction,
)

__all__ = [
    "Account",
    "Card",
    "Currency",
    "Schedule",
    "AccountBalance",
    "AssetSummary",
    "BillingWindow",
    "CategoryAmount",
    "MonthlyCashflow",
    "UpcomingPayment",
    "ForeignAmount",
    "IncomeTransaction",
    "ExpenseTransaction",
    "CardExpenseTransaction",
    "TransferTransaction",
    "PaymentTransaction",
    "Transaction",
]
