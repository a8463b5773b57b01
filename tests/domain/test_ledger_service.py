"""Tests for balance reconstruction."""

import random
from datetime import datetime
from decimal import Decimal

from src.domain.models import Account, Currency
from src.domain.models.transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    ForeignAmount,
    IncomeTransaction,
    PaymentTransaction,
    TransferTransaction,
)
from src.domain.services.fx import build_currency_table
from src.domain.services.ledger import (
    compute_account_balances,
    compute_all_balances,
    signed_effect,
    total_in_krw,
)

WHEN = datetime(2024, 3, 5, 12, 0)


def _account(account_id="acc-a", currency="KRW", initial="1000"):
    return Account(
        id=account_id,
        name=account_id.upper(),
        category="bank",
        currency=currency,
        initial_balance=Decimal(initial),
    )


def _history():
    return [
        IncomeTransaction(
            id="t1",
            occurred_at=WHEN,
            description="Salary",
            amount=Decimal("500"),
            account_id="acc-a",
        ),
        ExpenseTransaction(
            id="t2",
            occurred_at=WHEN,
            description="Groceries",
            amount=Decimal("200"),
            account_id="acc-a",
        ),
        TransferTransaction(
            id="t3",
            occurred_at=WHEN,
            description="To savings",
            amount=Decimal("100"),
            account_id="acc-a",
            to_account_id="acc-b",
        ),
        TransferTransaction(
            id="t4",
            occurred_at=WHEN,
            description="From savings",
            amount=Decimal("50"),
            account_id="acc-b",
            to_account_id="acc-a",
        ),
        PaymentTransaction(
            id="t5",
            occurred_at=WHEN,
            description="Card payment",
            amount=Decimal("30"),
            account_id="acc-a",
            card_id="card-1",
            paid_card_transaction_ids=("t6",),
        ),
        CardExpenseTransaction(
            id="t6",
            occurred_at=WHEN,
            description="Lunch",
            amount=Decimal("999"),
            card_id="card-1",
            is_paid=True,
        ),
    ]


def test_balance_applies_signs_per_kind():
    balances = compute_account_balances(_account(), _history())

    assert balances == {"KRW": Decimal("1220")}


def test_balance_is_permutation_invariant():
    account = _account()
    history = _history()
    expected = compute_account_balances(account, history)
    rng = random.Random(7)

    for _ in range(20):
        shuffled = list(history)
        rng.shuffle(shuffled)
        assert compute_account_balances(account, shuffled) == expected


def test_destination_of_transfer_is_credited():
    balances = compute_account_balances(
        _account("acc-b", initial="0"),
        _history(),
    )

    assert balances == {"KRW": Decimal("50")}


def test_card_expense_has_no_effect_on_accounts():
    expense = _history()[-1]

    assert signed_effect(expense, "acc-a") == 0


def test_original_currency_pair_is_tracked_separately():
    income = IncomeTransaction(
        occurred_at=WHEN,
        description="Refund",
        amount=Decimal("130000"),
        account_id="acc-a",
        original=ForeignAmount(amount=Decimal("100"), currency="usd"),
    )

    balances = compute_account_balances(_account(initial="0"), [income])

    assert balances == {"KRW": Decimal("0"), "USD": Decimal("100")}


def test_total_in_krw_converts_with_rate():
    table = build_currency_table(
        [Currency(symbol="USD", name="Dollar", rate=Decimal("1300"))]
    )

    total = total_in_krw({"USD": Decimal("100")}, table)

    assert total == Decimal("130000")


def test_total_in_krw_uses_rate_one_for_unknown_currency():
    table = build_currency_table([])

    total = total_in_krw(
        {"KRW": Decimal("10"), "JPY": Decimal("500")},
        table,
    )

    assert total == Decimal("510")


def test_orphan_transactions_contribute_zero():
    orphan = IncomeTransaction(
        id="orphan",
        occurred_at=WHEN,
        description="Old account",
        amount=Decimal("777"),
        account_id="deleted-account",
    )
    table = build_currency_table([])

    rows = compute_all_balances([_account()], [orphan], table)

    assert len(rows) == 1
    assert rows[0].balances == {"KRW": Decimal("1000")}
    assert rows[0].total_krw == Decimal("1000")
