"""Domain policies package."""

from .account_deletion import ensure_account_deletable
from .transaction_filters import (
    TransactionFilter,
    filter_transactions,
)

__all__ = [
    "ensure_account_deletable",
    "TransactionFilter",
    "filter_transactions",
]
