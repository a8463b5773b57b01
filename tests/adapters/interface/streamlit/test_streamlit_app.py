"""Tests for the Streamlit app module."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.domain.errors import StoreError
from src.domain.models import AccountBalance, CategoryAmount


def test_build_store_uses_container(monkeypatch):
    """_build_store should delegate to the composition root."""
    monkeypatch.setattr(app, "build_user_document_store", lambda: "store")

    assert app._build_store() == "store"


def test_fetch_account_balances_reads_store(document_store):
    document_store.seed(
        "accounts",
        "a",
        {"name": "Cash", "category": "cash", "initialBalance": 7},
    )

    balances = app._fetch_account_balances(document_store)

    assert balances[0].total_krw == Decimal("7")


def test_format_helpers():
    assert app._format_krw(Decimal("1234567.4")) == "₩1,234,567"
    assert app._format_amount(Decimal("1500"), "KRW") == "₩1,500"
    assert app._format_amount(Decimal("12.5"), "USD") == "12.50 USD"


def test_prepare_donut_chart_data_groups_other():
    items = [
        CategoryAmount(category=f"c{i}", amount=Decimal(10 - i))
        for i in range(5)
    ] + [CategoryAmount(category="zero", amount=Decimal("0"))]

    data, total = app._prepare_donut_chart_data(items, max_categories=3)

    assert total == Decimal("40")
    assert [row["category"] for row in data] == ["c0", "c1", "c2", "Other"]
    assert data[-1]["amount"] == 13.0
    assert data[0]["share_label"] == "25.0%"


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options, **_kwargs):
        return self.page if label == "Page" else options[0]


class _FakeStreamlit:
    def __init__(self, page: str = "Accounts") -> None:
        self.sidebar = _FakeSidebar(page)
        self.config_kwargs = None
        self.title_text = None
        self.captions: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.dataframe_payload = None

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def subheader(self, _text: str):
        pass

    def text_input(self, *_args, **_kwargs):
        return ""

    def selectbox(self, _label, options, **_kwargs):
        return options[0]

    def caption(self, text: str):
        self.captions.append(text)

    def warning(self, text: str):
        self.warnings.append(text)

    def error(self, text: str):
        self.errors.append(text)

    def dataframe(self, data, **kwargs):
        self.dataframe_payload = (data, kwargs)


def _quiet_usage_logger(monkeypatch):
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)


def test_main_displays_accounts(monkeypatch):
    """main should render the dataframe when accounts exist."""
    fake_st = _FakeStreamlit()
    balances = [
        AccountBalance(
            account_id="a",
            name="Dollars",
            category="bank",
            currency="USD",
            balances={"USD": Decimal("10"), "KRW": Decimal("500")},
            total_krw=Decimal("13500"),
        )
    ]
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_store", lambda: "store")
    monkeypatch.setattr(app, "_fetch_account_balances", lambda _s: balances)
    _quiet_usage_logger(monkeypatch)

    app.main()

    assert fake_st.title_text == "Household Ledger"
    assert fake_st.warnings == []
    table_data, kwargs = fake_st.dataframe_payload
    assert table_data[0]["Balance"] == "₩500, 10.00 USD"
    assert table_data[0]["Total (KRW)"] == "₩13,500"
    assert kwargs["hide_index"] is True
    assert fake_st.captions == ["1 accounts shown"]


def test_main_warns_when_no_accounts(monkeypatch):
    """main should warn the user when the ledger has no accounts."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_store", lambda: "store")
    monkeypatch.setattr(app, "_fetch_account_balances", lambda _s: [])
    _quiet_usage_logger(monkeypatch)

    app.main()

    assert fake_st.warnings
    assert fake_st.dataframe_payload is None


def test_main_shows_ledger_errors(monkeypatch):
    fake_st = _FakeStreamlit(page="Reports")

    def failing_reports(_store):
        raise StoreError("Store transaction failed.")

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_store", lambda: "store")
    monkeypatch.setattr(app, "_fetch_reports", failing_reports)
    _quiet_usage_logger(monkeypatch)

    app.main()

    assert fake_st.errors == ["Store transaction failed."]


def test_assets_by_currency_uses_krw_values():
    summary = SimpleNamespace(
        assets_by_currency_krw={"USD": Decimal("13000")}
    )

    assert app._assets_by_currency_krw(summary) == [
        CategoryAmount(category="USD", amount=Decimal("13000"))
    ]
