"""Spending and cashflow reports over the transaction history."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal

from src.domain.constants import BASE_CURRENCY, UNCATEGORIZED
from src.domain.models import Account, CategoryAmount, MonthlyCashflow
from src.domain.models.transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    IncomeTransaction,
    Transaction,
)
from src.domain.services.fx import CurrencyTable
from src.domain.services.ledger import effective_amount


def amount_in_krw(
    transaction: Transaction,
    accounts_by_id: Mapping[str, Account],
    currency_table: CurrencyTable,
) -> Decimal | None:
    """Return the KRW value of an income or spending transaction.

    Card expenses are booked in KRW unless an original foreign amount was
    entered.

    Returns:
        Decimal | None: KRW value, or None when the account is gone.
    """
    if isinstance(transaction, CardExpenseTransaction):
        if transaction.original is not None:
            return currency_table.to_krw(
                transaction.original.amount,
                transaction.original.currency,
            )
        return currency_table.to_krw(transaction.amount, BASE_CURRENCY)
    account = accounts_by_id.get(getattr(transaction, "account_id", ""))
    if account is None:
        return None
    currency, amount = effective_amount(transaction, account)
    return currency_table.to_krw(amount, currency)


def _in_range(
    moment: datetime,
    start: datetime | None,
    end: datetime | None,
) -> bool:
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


def compute_category_totals(
    transactions: Iterable[Transaction],
    accounts_by_id: Mapping[str, Account],
    currency_table: CurrencyTable,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[CategoryAmount]:
    """Aggregate spending per category, largest first.

    Args:
        transactions: Full transaction set.
        accounts_by_id: Known accounts.
        currency_table: Rates for KRW conversion.
        start: Optional inclusive lower bound.
        end: Optional inclusive upper bound.

    Returns:
        list[CategoryAmount]: Spending per category in KRW.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if not isinstance(
            transaction,
            (ExpenseTransaction, CardExpenseTransaction),
        ):
            continue
        if not _in_range(transaction.occurred_at, start, end):
            continue
        amount = amount_in_krw(transaction, accounts_by_id, currency_table)
        if amount is None:
            continue
        category = transaction.category or UNCATEGORIZED
        totals[category] = totals.get(category, Decimal("0")) + amount
    return [
        CategoryAmount(category=category, amount=amount)
        for category, amount in sorted(
            totals.items(),
            key=lambda item: (-item[1], item[0]),
        )
    ]


def compute_monthly_cashflow(
    transactions: Iterable[Transaction],
    accounts_by_id: Mapping[str, Account],
    currency_table: CurrencyTable,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[MonthlyCashflow]:
    """Aggregate income and spending per calendar month, oldest first.

    Transfers and card payments move money between the user's own
    containers and are left out.
    """
    income: dict[str, Decimal] = {}
    expense: dict[str, Decimal] = {}
    for transaction in transactions:
        if not _in_range(transaction.occurred_at, start, end):
            continue
        if isinstance(transaction, IncomeTransaction):
            bucket = income
        elif isinstance(
            transaction,
            (ExpenseTransaction, CardExpenseTransaction),
        ):
            bucket = expense
        else:
            continue
        amount = amount_in_krw(transaction, accounts_by_id, currency_table)
        if amount is None:
            continue
        month = transaction.occurred_at.strftime("%Y-%m")
        bucket[month] = bucket.get(month, Decimal("0")) + amount

    months = sorted(set(income) | set(expense))
    return [
        MonthlyCashflow(
            month=month,
            income=income.get(month, Decimal("0")),
            expense=expense.get(month, Decimal("0")),
        )
        for month in months
    ]


__all__ = [
    "amount_in_krw",
    "compute_category_totals",
    "compute_monthly_cashflow",
]
