"""Validation of transactions, cards and currencies before any write."""

from collections.abc import Mapping
from decimal import Decimal
from logging import Logger

from src.domain.constants import ACCOUNT_CATEGORIES, BASE_CURRENCY
from src.domain.errors import LedgerValidationError
from src.domain.models import Account, Card, Currency
from src.domain.models.transactions import (
    PaymentTransaction,
    Transaction,
    TransferTransaction,
)


def validate_transaction(
    transaction: Transaction,
    accounts_by_id: Mapping[str, Account],
) -> None:
    """Reject malformed transactions.

    Args:
        transaction: Transaction about to be written.
        accounts_by_id: Known accounts, used for transfer currency checks.

    Raises:
        LedgerValidationError: When the transaction cannot be recorded.
    """
    if transaction.amount <= 0:
        raise LedgerValidationError("Amount must be greater than zero.")
    if not transaction.description.strip():
        raise LedgerValidationError("Description is required.")
    if transaction.original is not None and transaction.original.amount <= 0:
        raise LedgerValidationError(
            "Original amount must be greater than zero."
        )
    if isinstance(transaction, TransferTransaction):
        if transaction.account_id == transaction.to_account_id:
            raise LedgerValidationError("Cannot transfer to the same account.")
        source = accounts_by_id.get(transaction.account_id)
        destination = accounts_by_id.get(transaction.to_account_id)
        if (
            source is not None
            and destination is not None
            and transaction.original is None
            and source.currency != destination.currency
        ):
            raise LedgerValidationError(
                "Transfers between accounts in different currencies "
                "are not supported: "
                f"{source.currency} -> {destination.currency}"
            )
    if isinstance(transaction, PaymentTransaction):
        if not transaction.paid_card_transaction_ids:
            raise LedgerValidationError(
                "A payment must settle at least one card expense."
            )


def validate_account(account: Account) -> None:
    """Reject accounts with an unknown category or a blank name."""
    if not account.name.strip():
        raise LedgerValidationError("Account name is required.")
    if account.category not in ACCOUNT_CATEGORIES:
        raise LedgerValidationError(
            f"Unknown account category: {account.category}"
        )
    if not account.currency:
        raise LedgerValidationError("Account currency is required.")


def validate_card(card: Card) -> None:
    """Reject cards whose cycle days are outside 1-31."""
    if not card.name.strip():
        raise LedgerValidationError("Card name is required.")
    for label, day in (
        ("paymentDay", card.payment_day),
        ("usageStartDay", card.usage_start_day),
        ("usageEndDay", card.usage_end_day),
    ):
        if not 1 <= day <= 31:
            raise LedgerValidationError(f"{label} must be within 1-31: {day}")


def validate_currency(currency: Currency) -> None:
    """Reject edits of the base currency and non-positive rates."""
    if currency.symbol == BASE_CURRENCY or currency.is_base:
        raise LedgerValidationError(
            "The base currency (KRW) cannot be modified."
        )
    if currency.rate <= 0:
        raise LedgerValidationError("Rate must be greater than zero.")


def warn_on_negative_balance(
    account: Account,
    currency: str,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when a derived balance drops below zero."""
    if balance < 0:
        logger.warning(
            f"Negative balance for account={account.id} "
            f"({account.name}) in {currency}: {balance}"
        )


__all__ = [
    "validate_transaction",
    "validate_account",
    "validate_card",
    "validate_currency",
    "warn_on_negative_balance",
]
