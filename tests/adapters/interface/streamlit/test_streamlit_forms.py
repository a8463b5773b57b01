"""Tests for the data-entry pages of the Streamlit app."""

from contextlib import nullcontext
from datetime import date, datetime, time
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters.interface.streamlit import app
from src.domain.errors import LedgerValidationError


class _ScriptedStreamlit:
    """Streamlit stand-in answering widgets from a label -> value script.

    Widgets missing from the script return their default value, and
    buttons default to not clicked.
    """

    def __init__(self, script=None, page="Dashboard") -> None:
        self.script = script or {}
        self.sidebar = SimpleNamespace(
            selectbox=lambda label, options, **_kwargs: page
        )
        self.successes: list[str] = []
        self.captions: list[str] = []
        self.infos: list[str] = []
        self.errors: list[str] = []
        self.downloads: dict[str, str] = {}
        self.tables: list = []

    def form(self, _name):
        return nullcontext()

    def selectbox(self, label, options, index=0, format_func=str, **_kw):
        options = list(options)
        for option in options:
            format_func(option)
        return self.script.get(label, options[index] if options else None)

    def text_input(self, label, value="", **_kwargs):
        return self.script.get(label, value)

    def date_input(self, label, value=None, **_kwargs):
        return self.script.get(label, value)

    def time_input(self, label, value=None, **_kwargs):
        return self.script.get(label, value)

    def number_input(self, label, value=None, **_kwargs):
        return self.script.get(label, value)

    def form_submit_button(self, label):
        return self.script.get(label, False)

    def button(self, label, **_kwargs):
        return self.script.get(label, False)

    def file_uploader(self, label, **_kwargs):
        return self.script.get(label)

    def download_button(self, label, data, **_kwargs):
        self.downloads[label] = data

    def dataframe(self, data, **_kwargs):
        self.tables.append(data)

    def subheader(self, _text):
        pass

    def success(self, text):
        self.successes.append(text)

    def caption(self, text):
        self.captions.append(text)

    def info(self, text):
        self.infos.append(text)

    def error(self, text):
        self.errors.append(text)


@pytest.fixture
def ledger(document_store):
    document_store.seed(
        "accounts",
        "a",
        {"name": "Checking", "category": "bank", "currency": "KRW"},
    )
    document_store.seed(
        "cards",
        "card-1",
        {
            "name": "Blue",
            "paymentDay": 15,
            "usageStartDay": 1,
            "usageEndDay": 31,
            "linkedAccountId": "a",
        },
    )
    return document_store


def _use(monkeypatch, script=None, page="Dashboard"):
    fake_st = _ScriptedStreamlit(script, page)
    monkeypatch.setattr(app, "st", fake_st)
    return fake_st


def test_add_form_records_expense(monkeypatch, ledger):
    fake_st = _use(
        monkeypatch,
        {
            "Add transaction": True,
            "Type": "expense",
            "Date": date(2024, 3, 1),
            "Time": time(12, 30),
            "Description": "Lunch",
            "Amount": "12,000",
            "Account": "a",
        },
    )

    app._render_transaction_form(ledger, app._fetch_snapshot(ledger))

    (stored,) = ledger.collections["transactions"].values()
    assert stored["type"] == "expense"
    assert stored["amount"] == Decimal("12000")
    assert stored["accountId"] == "a"
    assert stored["date"] == datetime(2024, 3, 1, 12, 30)
    assert fake_st.successes == ["Transaction recorded."]


def test_edit_form_keeps_settled_charge_timestamp(monkeypatch, ledger):
    ledger.seed(
        "transactions",
        "c1",
        {
            "type": "card-expense",
            "date": datetime(2024, 3, 2, 19, 0, 45),
            "description": "Dinner",
            "amount": 30000,
            "cardId": "card-1",
            "isPaid": True,
        },
    )
    _use(monkeypatch, {"Save changes": True, "Description": "Dinner out"})
    snapshot = app._fetch_snapshot(ledger)

    app._render_transaction_editor(ledger, snapshot, snapshot.transactions)

    stored = ledger.doc("transactions", "c1")
    assert stored["description"] == "Dinner out"
    assert stored["date"] == datetime(2024, 3, 2, 19, 0, 45)
    assert stored["isPaid"] is True


def test_payments_can_only_be_deleted(monkeypatch, ledger):
    ledger.seed(
        "transactions",
        "c1",
        {
            "type": "card-expense",
            "date": datetime(2024, 3, 2),
            "description": "Dinner",
            "amount": 30000,
            "cardId": "card-1",
            "isPaid": True,
        },
    )
    ledger.seed(
        "transactions",
        "p1",
        {
            "type": "payment",
            "date": datetime(2024, 3, 15),
            "description": "Blue card payment",
            "amount": 30000,
            "accountId": "a",
            "cardId": "card-1",
            "paidCardTransactionIds": ["c1"],
        },
    )
    fake_st = _use(
        monkeypatch,
        {"Transaction": "p1", "Delete transaction": True},
    )
    snapshot = app._fetch_snapshot(ledger)

    app._render_transaction_editor(ledger, snapshot, snapshot.transactions)

    assert ledger.doc("transactions", "p1") is None
    assert ledger.doc("transactions", "c1")["isPaid"] is False
    assert "Payments cannot be edited" in fake_st.captions[0]


def test_schedule_page_adds_then_completes(monkeypatch, ledger):
    fake_st = _use(
        monkeypatch,
        {
            "Add schedule": True,
            "Schedule description": "Bonus",
            "Schedule amount": "300000",
            "Due date": date(2024, 4, 25),
            "Mark received - 2024-04-25 Bonus: 300,000": True,
        },
    )

    app._render_schedules(ledger)

    (schedule,) = ledger.collections["schedules"].values()
    assert schedule["isCompleted"] is True
    (income,) = ledger.collections["transactions"].values()
    assert income["type"] == "income"
    assert income["amount"] == Decimal("300000")
    assert fake_st.successes == [
        "Scheduled Bonus.",
        "Recorded income for Bonus.",
    ]


def test_schedule_page_needs_an_account(monkeypatch, document_store):
    fake_st = _use(monkeypatch, {"Add schedule": True})

    app._render_schedules(document_store)

    assert fake_st.infos[0] == "Add an account before scheduling incomes."
    assert "schedules" not in document_store.collections


def test_management_page_creates_account(monkeypatch, document_store):
    fake_st = _use(
        monkeypatch,
        {"Save account": True, "Account name": "Wallet", "Category": "cash"},
    )

    app._render_management(document_store)

    (account,) = document_store.collections["accounts"].values()
    assert account["name"] == "Wallet"
    assert account["currency"] == "KRW"
    assert account["initialBalance"] == Decimal("0")
    assert fake_st.successes == ["Saved account Wallet."]


def test_management_page_creates_card(monkeypatch, ledger):
    _use(
        monkeypatch,
        {
            "Save card": True,
            "Card name": "Green",
            "Payment day": 25,
            "Settlement account": "a",
        },
    )

    app._render_management(ledger)

    card = next(
        doc
        for doc in ledger.collections["cards"].values()
        if doc["name"] == "Green"
    )
    assert card["paymentDay"] == 25
    assert card["usageStartDay"] == 1
    assert card["linkedAccountId"] == "a"


def test_currency_page_saves_rate(monkeypatch, document_store):
    fake_st = _use(
        monkeypatch,
        {
            "Save currency": True,
            "Symbol": " usd ",
            "Rate (KRW per unit)": "1,350.5",
        },
    )

    app._render_currencies(document_store)

    stored = document_store.doc("currencies", "USD")
    assert stored["rate"] == Decimal("1350.5")
    assert stored["name"] == "USD"
    assert fake_st.successes == ["Saved currency USD."]


def test_data_page_exports_and_appends_csv(monkeypatch, ledger):
    upload = SimpleNamespace(
        name="extra.CSV",
        getvalue=lambda: (
            b"\xef\xbb\xbfdate,type,description,amount,account\n"
            b"2024-03-20,expense,Coffee,4500,Checking\n"
        ),
    )
    fake_st = _use(
        monkeypatch,
        {"Backup or CSV file": upload, "Import file": True},
    )

    app._render_data(ledger)

    assert set(fake_st.downloads) == {
        "Download JSON backup",
        "Download transactions CSV",
    }
    (coffee,) = ledger.collections["transactions"].values()
    assert coffee["accountId"] == "a"
    assert fake_st.successes == ["Imported {'transactions': 1}."]


def test_read_upload_rejects_binary_files():
    upload = SimpleNamespace(name="photo.json", getvalue=lambda: b"\xff\xd8")

    with pytest.raises(LedgerValidationError, match="photo.json"):
        app._read_upload(upload)


@pytest.mark.parametrize("raw", ["", "   ", "ten", "NaN"])
def test_parse_amount_rejects_bad_input(raw):
    with pytest.raises(LedgerValidationError):
        app._parse_amount(raw)


def test_build_transaction_rejects_payments():
    values = {
        "date": date(2024, 3, 1),
        "time": time(9, 0),
        "description": "Card bill",
        "amount": "1000",
    }

    with pytest.raises(LedgerValidationError, match="payment"):
        app._build_transaction("payment", values)


@pytest.mark.parametrize(
    ("page", "renderer"),
    [
        ("Schedule", "_render_schedules"),
        ("Management", "_render_management"),
        ("Currencies", "_render_currencies"),
        ("Data", "_render_data"),
    ],
)
def test_main_routes_data_entry_pages(monkeypatch, page, renderer):
    _use(monkeypatch, page=page)
    render = MagicMock()
    monkeypatch.setattr(app, renderer, render)
    monkeypatch.setattr(app, "_load_store", lambda: "store")
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    fake_st = app.st
    fake_st.set_page_config = MagicMock()
    fake_st.title = MagicMock()

    app.main()

    render.assert_called_once_with("store")
