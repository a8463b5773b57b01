"""Filters applied to the transaction list."""

from collections.abc import Iterable
from dataclasses import dataclass

from src.domain.models.transactions import (
    Transaction,
    referenced_account_ids,
)

ALL = "all"


@dataclass(frozen=True)
class TransactionFilter:
    """Selection made in the transactions view; ``"all"`` disables a field."""

    kind: str = ALL
    account_id: str = ALL
    year: int | str = ALL
    month: int | str = ALL


def matches(transaction: Transaction, criteria: TransactionFilter) -> bool:
    """Return True when the transaction passes every active criterion.

    Args:
        transaction: Transaction to evaluate.
        criteria: Active filter selection.

    Returns:
        bool: True when the transaction should be listed.
    """
    if criteria.kind != ALL and transaction.kind != criteria.kind:
        return False
    if criteria.account_id != ALL:
        if criteria.account_id not in referenced_account_ids(transaction):
            return False
    if criteria.year != ALL and transaction.occurred_at.year != int(
        criteria.year
    ):
        return False
    if criteria.month != ALL and transaction.occurred_at.month != int(
        criteria.month
    ):
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: TransactionFilter,
) -> list[Transaction]:
    """Return matching transactions, newest first."""
    selected = [t for t in transactions if matches(t, criteria)]
    return sorted(selected, key=lambda t: t.occurred_at, reverse=True)


__all__ = ["ALL", "TransactionFilter", "matches", "filter_transactions"]
