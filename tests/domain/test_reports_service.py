"""Tests for spending and cashflow reports."""

from datetime import datetime
from decimal import Decimal

from src.domain.models import Account, Currency
from src.domain.models.transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    ForeignAmount,
    IncomeTransaction,
    TransferTransaction,
)
from src.domain.services.fx import build_currency_table
from src.domain.services.reports import (
    amount_in_krw,
    compute_category_totals,
    compute_monthly_cashflow,
)

ACCOUNTS = {
    "krw": Account(id="krw", name="Checking", category="bank", currency="KRW"),
    "usd": Account(id="usd", name="Dollars", category="bank", currency="USD"),
}
TABLE = build_currency_table(
    [Currency(symbol="USD", name="Dollar", rate=Decimal("1300"))]
)


def _transactions():
    return [
        ExpenseTransaction(
            id="e1",
            occurred_at=datetime(2024, 1, 5),
            description="Groceries",
            amount=Decimal("30000"),
            category="Food",
            account_id="krw",
        ),
        ExpenseTransaction(
            id="e2",
            occurred_at=datetime(2024, 2, 5),
            description="Books",
            amount=Decimal("10"),
            category="Hobby",
            account_id="usd",
        ),
        CardExpenseTransaction(
            id="c1",
            occurred_at=datetime(2024, 2, 9),
            description="Dinner",
            amount=Decimal("20000"),
            category="Food",
            card_id="card-1",
        ),
        CardExpenseTransaction(
            id="c2",
            occurred_at=datetime(2024, 2, 10),
            description="Souvenir",
            amount=Decimal("1"),
            card_id="card-1",
            original=ForeignAmount(amount=Decimal("5"), currency="USD"),
        ),
        IncomeTransaction(
            id="i1",
            occurred_at=datetime(2024, 2, 25),
            description="Salary",
            amount=Decimal("3000000"),
            account_id="krw",
        ),
        TransferTransaction(
            id="x1",
            occurred_at=datetime(2024, 2, 26),
            description="Savings",
            amount=Decimal("100000"),
            account_id="krw",
            to_account_id="usd",
        ),
        ExpenseTransaction(
            id="gone",
            occurred_at=datetime(2024, 2, 27),
            description="Deleted account",
            amount=Decimal("99999"),
            category="Food",
            account_id="missing",
        ),
    ]


def test_amount_in_krw_uses_original_pair_for_card_expense():
    souvenir = _transactions()[3]

    assert amount_in_krw(souvenir, ACCOUNTS, TABLE) == Decimal("6500")


def test_amount_in_krw_is_none_for_orphans():
    orphan = _transactions()[-1]

    assert amount_in_krw(orphan, ACCOUNTS, TABLE) is None


def test_category_totals_sorted_largest_first():
    totals = compute_category_totals(_transactions(), ACCOUNTS, TABLE)

    assert [(item.category, item.amount) for item in totals] == [
        ("Food", Decimal("50000")),
        ("Hobby", Decimal("13000")),
        ("Uncategorized", Decimal("6500")),
    ]


def test_category_totals_respect_date_range():
    totals = compute_category_totals(
        _transactions(),
        ACCOUNTS,
        TABLE,
        start=datetime(2024, 2, 1),
    )

    assert {item.category: item.amount for item in totals}["Food"] == (
        Decimal("20000")
    )


def test_monthly_cashflow_skips_transfers():
    months = compute_monthly_cashflow(_transactions(), ACCOUNTS, TABLE)

    assert [month.month for month in months] == ["2024-01", "2024-02"]
    assert months[0].expense == Decimal("30000")
    assert months[1].income == Decimal("3000000")
    assert months[1].expense == Decimal("39500")
    assert months[1].net == Decimal("2960500")
