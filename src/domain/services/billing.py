"""Credit-card billing-cycle windows and due amounts."""

from calendar import monthrange
from collections.abc import Iterable
from datetime import date, datetime, time
from decimal import Decimal

from src.domain.models import BillingWindow, Card
from src.domain.models.transactions import (
    CardExpenseTransaction,
    Transaction,
)


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp a day-of-month to the last day of the given month.

    Day 31 in April becomes 30 and day 30 in February becomes 28 or 29,
    so a window bound never spills into the following month.
    """
    return max(1, min(day, monthrange(year, month)[1]))


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return (year, month) moved by ``offset`` calendar months."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def compute_billing_window(card: Card, now: datetime) -> BillingWindow:
    """Return the open usage window of a card as of ``now``.

    Before the payment day the window opened in the previous month; from
    the payment day on it opens in the current month. The window ends on
    ``usage_end_day`` of the month after it opened.

    Args:
        card: Card with its cycle-day configuration.
        now: Evaluation time; callers pass the wall clock.

    Returns:
        BillingWindow: Inclusive start and end of the window.
    """
    offset = -1 if now.day < card.payment_day else 0
    start_year, start_month = shift_month(now.year, now.month, offset)
    end_year, end_month = shift_month(start_year, start_month, 1)

    start_day = clamp_day(start_year, start_month, card.usage_start_day)
    end_day = clamp_day(end_year, end_month, card.usage_end_day)
    start = datetime.combine(
        date(start_year, start_month, start_day), time.min, now.tzinfo
    )
    end = datetime.combine(
        date(end_year, end_month, end_day), time.max, now.tzinfo
    )
    return BillingWindow(start=start, end=end)


def unpaid_card_expenses(
    card: Card,
    transactions: Iterable[Transaction],
    window: BillingWindow,
) -> list[CardExpenseTransaction]:
    """Return unpaid card expenses of ``card`` that fall inside ``window``."""
    return [
        transaction
        for transaction in transactions
        if isinstance(transaction, CardExpenseTransaction)
        and transaction.card_id == card.id
        and not transaction.is_paid
        and window.contains(transaction.occurred_at)
    ]


def compute_card_due(
    card: Card,
    transactions: Iterable[Transaction],
    now: datetime,
) -> tuple[BillingWindow, Decimal, list[CardExpenseTransaction]]:
    """Compute the amount due for the currently open window.

    Args:
        card: Card to evaluate.
        transactions: Full transaction set.
        now: Evaluation time.

    Returns:
        tuple: The window, the due amount and the contributing expenses.
    """
    window = compute_billing_window(card, now)
    expenses = unpaid_card_expenses(card, transactions, window)
    amount = sum((expense.amount for expense in expenses), Decimal("0"))
    return window, amount, expenses


__all__ = [
    "clamp_day",
    "shift_month",
    "compute_billing_window",
    "unpaid_card_expenses",
    "compute_card_due",
]
