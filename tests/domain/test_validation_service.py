"""Tests for write-time validation."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.domain.errors import LedgerValidationError
from src.domain.models import Account, Card, Currency
from src.domain.models.transactions import (
    ExpenseTransaction,
    ForeignAmount,
    PaymentTransaction,
    TransferTransaction,
)
from src.domain.services.validation import (
    validate_account,
    validate_card,
    validate_currency,
    validate_transaction,
)

WHEN = datetime(2024, 3, 1)
ACCOUNTS = {
    "a": Account(id="a", name="A", category="bank", currency="KRW"),
    "b": Account(id="b", name="B", category="bank", currency="KRW"),
    "u": Account(id="u", name="U", category="bank", currency="USD"),
}


def _transfer(source, destination, original=None):
    return TransferTransaction(
        occurred_at=WHEN,
        description="Move",
        amount=Decimal("10"),
        account_id=source,
        to_account_id=destination,
        original=original,
    )


@pytest.mark.parametrize("amount", ["0", "-1"])
def test_non_positive_amount_is_rejected(amount):
    expense = ExpenseTransaction(
        occurred_at=WHEN,
        description="Coffee",
        amount=Decimal(amount),
        account_id="a",
    )

    with pytest.raises(LedgerValidationError, match="greater than zero"):
        validate_transaction(expense, ACCOUNTS)


def test_blank_description_is_rejected():
    expense = ExpenseTransaction(
        occurred_at=WHEN,
        description="   ",
        amount=Decimal("1"),
        account_id="a",
    )

    with pytest.raises(LedgerValidationError, match="Description"):
        validate_transaction(expense, ACCOUNTS)


def test_self_transfer_is_rejected():
    with pytest.raises(LedgerValidationError, match="same account"):
        validate_transaction(_transfer("a", "a"), ACCOUNTS)


def test_cross_currency_transfer_needs_original_pair():
    with pytest.raises(LedgerValidationError, match="different currencies"):
        validate_transaction(_transfer("a", "u"), ACCOUNTS)

    validate_transaction(
        _transfer("a", "u", ForeignAmount(Decimal("1"), "USD")),
        ACCOUNTS,
    )


def test_same_currency_transfer_passes():
    validate_transaction(_transfer("a", "b"), ACCOUNTS)


def test_payment_requires_settled_expenses():
    payment = PaymentTransaction(
        occurred_at=WHEN,
        description="Card payment",
        amount=Decimal("10"),
        account_id="a",
        card_id="card-1",
    )

    with pytest.raises(LedgerValidationError, match="at least one"):
        validate_transaction(payment, ACCOUNTS)


def test_account_category_must_be_known():
    account = Account(id="x", name="X", category="pension", currency="KRW")

    with pytest.raises(LedgerValidationError, match="category"):
        validate_account(account)


@pytest.mark.parametrize("day", [0, 32])
def test_card_days_must_be_in_range(day):
    card = Card(
        id="c",
        name="Card",
        payment_day=day,
        usage_start_day=1,
        usage_end_day=31,
    )

    with pytest.raises(LedgerValidationError, match="paymentDay"):
        validate_card(card)


def test_base_currency_cannot_be_edited():
    with pytest.raises(LedgerValidationError, match="base currency"):
        validate_currency(Currency("KRW", "Won", Decimal("1")))


def test_currency_rate_must_be_positive():
    with pytest.raises(LedgerValidationError, match="Rate"):
        validate_currency(Currency("USD", "Dollar", Decimal("0")))
