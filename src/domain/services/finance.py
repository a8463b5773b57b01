"""Domain services for dashboard aggregates."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from logging import Logger

from src.domain.models import (
    Account,
    AssetSummary,
    Card,
    UpcomingPayment,
)
from src.domain.models.transactions import Transaction
from src.domain.services.billing import compute_card_due
from src.domain.services.fx import CurrencyTable
from src.domain.services.ledger import compute_account_balances
from src.domain.services.validation import warn_on_negative_balance


def compute_upcoming_payments(
    cards: Iterable[Card],
    transactions: Iterable[Transaction],
    now: datetime,
) -> list[UpcomingPayment]:
    """Return one entry per card that has unpaid charges in its open window.

    Args:
        cards: Cards to evaluate.
        transactions: Full transaction set.
        now: Evaluation time.

    Returns:
        list[UpcomingPayment]: Cards whose due amount is positive.
    """
    transactions = list(transactions)
    payments = []
    for card in cards:
        window, amount, expenses = compute_card_due(card, transactions, now)
        if amount <= 0:
            continue
        payments.append(
            UpcomingPayment(
                card_id=card.id,
                card_name=card.name,
                linked_account_id=card.linked_account_id,
                amount=amount,
                window=window,
                transaction_ids=tuple(
                    expense.id for expense in expenses if expense.id
                ),
            )
        )
    return payments


def compute_asset_summary(
    accounts: Iterable[Account],
    cards: Iterable[Card],
    transactions: Iterable[Transaction],
    currency_table: CurrencyTable,
    *,
    now: datetime,
    logger: Logger | None = None,
) -> AssetSummary:
    """Compute cash, upcoming-payment and total asset figures.

    Unpaid card charges in each open window are treated as a liability
    against the cash total. Missing rates convert at 1 and transactions of
    deleted accounts contribute nothing.

    Args:
        accounts: All accounts of the user.
        cards: All cards of the user.
        transactions: Full transaction set.
        currency_table: Rates for KRW conversion.
        now: Evaluation time for the billing windows.
        logger: Optional logger used for warnings.

    Returns:
        AssetSummary: Dashboard totals.
    """
    transactions = list(transactions)
    total_cash = Decimal("0")
    by_currency: dict[str, Decimal] = {}

    for account in accounts:
        balances = compute_account_balances(account, transactions)
        for currency, amount in balances.items():
            if logger is not None:
                warn_on_negative_balance(account, currency, amount, logger)
            by_currency[currency] = (
                by_currency.get(currency, Decimal("0")) + amount
            )
            total_cash += currency_table.to_krw(amount, currency)

    upcoming = compute_upcoming_payments(cards, transactions, now)
    upcoming_total = sum(
        (payment.amount for payment in upcoming),
        Decimal("0"),
    )

    return AssetSummary(
        total_cash_krw=total_cash,
        total_asset_krw=total_cash - upcoming_total,
        upcoming_payments=upcoming,
        assets_by_currency=dict(sorted(by_currency.items())),
        assets_by_currency_krw={
            currency: currency_table.to_krw(amount, currency)
            for currency, amount in sorted(by_currency.items())
        },
    )


__all__ = ["compute_upcoming_payments", "compute_asset_summary"]
