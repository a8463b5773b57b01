"""Tests for account deletion and transaction filter policies."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.domain.errors import LedgerValidationError
from src.domain.models import Card
from src.domain.models.transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    TransferTransaction,
)
from src.domain.policies import (
    TransactionFilter,
    ensure_account_deletable,
    filter_transactions,
)
from src.domain.services.normalization import (
    normalize_label,
    normalize_symbol,
)


def _card(name, account_id):
    return Card(
        id=name.lower(),
        name=name,
        payment_day=15,
        usage_start_day=1,
        usage_end_day=31,
        linked_account_id=account_id,
    )


def test_account_with_linked_card_cannot_be_deleted():
    cards = [_card("Blue", "acc-a"), _card("Amber", "acc-a")]

    with pytest.raises(LedgerValidationError, match="Amber, Blue"):
        ensure_account_deletable("acc-a", cards)


def test_account_without_cards_is_deletable():
    ensure_account_deletable("acc-b", [_card("Blue", "acc-a")])


def _transactions():
    return [
        ExpenseTransaction(
            id="old",
            occurred_at=datetime(2023, 12, 30),
            description="Gift",
            amount=Decimal("1"),
            account_id="acc-a",
        ),
        TransferTransaction(
            id="move",
            occurred_at=datetime(2024, 1, 3),
            description="Move",
            amount=Decimal("1"),
            account_id="acc-b",
            to_account_id="acc-a",
        ),
        CardExpenseTransaction(
            id="card",
            occurred_at=datetime(2024, 1, 9),
            description="Taxi",
            amount=Decimal("1"),
            card_id="card-1",
        ),
    ]


def test_default_filter_lists_everything_newest_first():
    listed = filter_transactions(_transactions(), TransactionFilter())

    assert [t.id for t in listed] == ["card", "move", "old"]


def test_account_filter_matches_transfer_destination():
    listed = filter_transactions(
        _transactions(),
        TransactionFilter(account_id="acc-a"),
    )

    assert [t.id for t in listed] == ["move", "old"]


def test_kind_and_period_filters_combine():
    listed = filter_transactions(
        _transactions(),
        TransactionFilter(kind="card-expense", year="2024", month=1),
    )

    assert [t.id for t in listed] == ["card"]


def test_normalizers_handle_blanks():
    assert normalize_symbol(" usd ") == "USD"
    assert normalize_symbol("  ") is None
    assert normalize_label("  Eating   out ") == "Eating out"
    assert normalize_label("") is None


def test_normalize_symbol_reads_numeric_codes_as_text():
    assert normalize_symbol(840) == "840"
