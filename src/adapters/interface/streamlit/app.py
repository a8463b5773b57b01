"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import LedgerSnapshot, load_snapshot
from src.application.use_cases.add_schedule import AddScheduleUseCase
from src.application.use_cases.complete_schedule import (
    CompleteScheduleUseCase,
)
from src.application.use_cases.confirm_card_payment import (
    ConfirmCardPaymentUseCase,
)
from src.application.use_cases.delete_transaction import (
    DeleteTransactionUseCase,
)
from src.application.use_cases.edit_transaction import (
    EditTransactionUseCase,
)
from src.application.use_cases.export_data import ExportDataUseCase
from src.application.use_cases.get_account_balances import (
    AccountBalance,
    GetAccountBalancesUseCase,
)
from src.application.use_cases.get_asset_summary import (
    GetAssetSummaryUseCase,
)
from src.application.use_cases.get_reports import (
    GetReportsUseCase,
    LedgerReport,
)
from src.application.use_cases.get_schedule_overview import (
    GetScheduleOverviewUseCase,
    ScheduleOverview,
)
from src.application.use_cases.import_data import ImportDataUseCase
from src.application.use_cases.list_transactions import (
    ListTransactionsUseCase,
)
from src.application.use_cases.manage_accounts import (
    DeleteAccountUseCase,
    DeleteCardUseCase,
    SaveAccountUseCase,
    SaveCardUseCase,
)
from src.application.use_cases.manage_currencies import (
    DeleteCurrencyUseCase,
    SaveCurrencyUseCase,
)
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.domain.constants import (
    ACCOUNT_CATEGORIES,
    BASE_CURRENCY,
    CARD_EXPENSE,
    EXPENSE,
    INCOME,
    PAYMENT,
    TRANSACTION_KINDS,
    TRANSFER,
)
from src.domain.errors import LedgerError, LedgerValidationError
from src.domain.models import (
    Account,
    AssetSummary,
    Card,
    CategoryAmount,
    Currency,
)
from src.domain.models.transactions import (
    CardExpenseTransaction,
    ExpenseTransaction,
    IncomeTransaction,
    Transaction,
    TransferTransaction,
)
from src.domain.policies.transaction_filters import ALL, TransactionFilter
from src.domain.services.normalization import normalize_label
from src.infrastructure.container import build_user_document_store
from src.infrastructure.logging.logger import get_usage_logger
from src.utils.decimal_utils import coerce_decimal

PAGES = [
    "Dashboard",
    "Accounts",
    "Transactions",
    "Schedule",
    "Management",
    "Currencies",
    "Reports",
    "Data",
]

# Payments only come from confirming a card bill on the dashboard.
EDITABLE_KINDS = [INCOME, EXPENSE, CARD_EXPENSE, TRANSFER]
NEW_ENTRY = "(new)"


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that numpy and pandas are usable by Altair.

    Returns:
        tuple[bool, str | None]: Status and an error message when broken.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Charts unavailable: numpy is incomplete."
    if not hasattr(pandas, "Timestamp"):
        return False, "Charts unavailable: pandas is incomplete."
    return True, None


def _build_store() -> DocumentStorePort:
    """Resolve the user and open their document store."""
    return build_user_document_store()


@st.cache_resource(show_spinner=False)
def _load_store() -> DocumentStorePort:
    """Cached wrapper around _build_store for Streamlit sessions."""
    return _build_store()


def _fetch_asset_summary(store: DocumentStorePort) -> AssetSummary:
    """Compute the dashboard totals as of now."""
    return GetAssetSummaryUseCase(document_store=store).execute()


def _fetch_schedule_overview(store: DocumentStorePort) -> ScheduleOverview:
    """Collect pending incomes and upcoming card payments."""
    return GetScheduleOverviewUseCase(document_store=store).execute()


def _fetch_account_balances(
    store: DocumentStorePort,
) -> Sequence[AccountBalance]:
    """Derive account balances from the ledger."""
    return GetAccountBalancesUseCase(document_store=store).execute()


def _fetch_transactions(
    store: DocumentStorePort,
    criteria: TransactionFilter,
) -> Sequence[Transaction]:
    """List the transactions matching the sidebar filter."""
    return ListTransactionsUseCase(document_store=store).execute(criteria)


def _fetch_reports(store: DocumentStorePort) -> LedgerReport:
    """Build the spending and cashflow reports."""
    return GetReportsUseCase(document_store=store).execute()


def _fetch_snapshot(store: DocumentStorePort) -> LedgerSnapshot:
    """Read the accounts, cards and currencies offered by the forms."""
    return load_snapshot(store)


def _parse_amount(raw: str) -> Decimal:
    """Read a form amount such as ``12,500`` into a Decimal.

    Raises:
        LedgerValidationError: When the field is blank or not a number.
    """
    if not raw or not raw.strip():
        raise LedgerValidationError("Amount is required.")
    try:
        return coerce_decimal(raw)
    except ValueError as exc:
        raise LedgerValidationError(str(exc)) from exc


def _index_of(options: Sequence[str], value: str | None) -> int:
    """Return the position of ``value`` in a selectbox, or 0."""
    return list(options).index(value) if value in options else 0


def _build_transaction(
    kind: str,
    values: dict,
    current: Transaction | None = None,
) -> Transaction:
    """Build a typed transaction from the transaction form values.

    Args:
        kind: Selected transaction type; payments are not accepted.
        values: Form values keyed by field name.
        current: Stored transaction being edited, if any.

    Returns:
        Transaction: The new or edited transaction.

    Raises:
        LedgerValidationError: For a payment or a malformed amount.
    """
    occurred_at = datetime.combine(values["date"], values["time"])
    if current is not None and occurred_at == current.occurred_at.replace(
        second=0, microsecond=0
    ):
        # The time widget has minute precision.
        occurred_at = current.occurred_at
    amount = _parse_amount(values["amount"])
    original = None
    if current is not None and amount == current.amount:
        # A foreign entry stays valid while the booked amount is unchanged.
        original = current.original
    common = {
        "id": current.id if current is not None else None,
        "occurred_at": occurred_at,
        "description": values["description"].strip(),
        "amount": amount,
        "category": normalize_label(values.get("category")),
        "memo": normalize_label(values.get("memo")),
        "original": original,
    }
    account_id = values.get("account_id") or ""
    if kind == CARD_EXPENSE:
        return CardExpenseTransaction(
            **common, card_id=values.get("card_id") or ""
        )
    if kind == TRANSFER:
        return TransferTransaction(
            **common,
            account_id=account_id,
            to_account_id=values.get("to_account_id") or "",
        )
    if kind == INCOME:
        return IncomeTransaction(**common, account_id=account_id)
    if kind == EXPENSE:
        return ExpenseTransaction(**common, account_id=account_id)
    raise LedgerValidationError(
        f"Transactions of type {kind} cannot be entered by hand."
    )


def _read_upload(upload) -> str:
    """Decode an uploaded file, tolerating a UTF-8 byte order mark."""
    try:
        return upload.getvalue().decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise LedgerValidationError(
            f"{upload.name} is not a UTF-8 text file."
        ) from exc


def _format_krw(value: Decimal) -> str:
    """Format KRW values for display."""
    return f"₩{value:,.0f}"


def _format_amount(value: Decimal, currency_code: str) -> str:
    """Format native amounts for display."""
    if currency_code == "KRW":
        return _format_krw(value)
    return f"{value:,.2f} {currency_code}"


def _prepare_donut_chart_data(
    items: Sequence[CategoryAmount],
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Positive KRW amounts per label.
        max_categories: Maximum labels to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        (item for item in items if item.amount > 0),
        key=lambda item: item.amount,
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_items = sorted_items[max_categories:]
    other_amount = sum(
        (item.amount for item in other_items),
        start=Decimal("0"),
    )
    if other_items and other_amount != 0:
        top_items = [
            *top_items,
            CategoryAmount(category="Other", amount=other_amount),
        ]
    total_amount = sum(
        (item.amount for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": _format_krw(item.amount),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_donut_chart(
    items: Sequence[CategoryAmount],
    title: str,
    max_categories: int = 6,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of KRW amounts per label.

    Args:
        items: Amounts per label.
        title: Chart title to display above the donut.
        max_categories: Maximum labels before grouping into Other.
        chart_size: Width/height for the chart canvas.
    """
    st.subheader(title)
    data, _ = _prepare_donut_chart_data(items, max_categories=max_categories)
    if not data:
        st.info("No amounts available for the chart.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return

    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(
        stroke=None
    )
    st.altair_chart(chart, width="stretch")


def _assets_by_currency_krw(summary: AssetSummary) -> list[CategoryAmount]:
    """Return per-currency holdings in KRW for the donut chart."""
    return [
        CategoryAmount(category=currency, amount=amount)
        for currency, amount in summary.assets_by_currency_krw.items()
    ]


def _render_dashboard(store: DocumentStorePort) -> None:
    """Render totals, upcoming card payments and pending incomes."""
    summary = _fetch_asset_summary(store)
    overview = _fetch_schedule_overview(store)

    cash_col, upcoming_col, total_col = st.columns(3)
    cash_col.metric("Cash assets", _format_krw(summary.total_cash_krw))
    upcoming_col.metric(
        "Upcoming card payments",
        _format_krw(summary.upcoming_total_krw),
    )
    total_col.metric("Total assets", _format_krw(summary.total_asset_krw))

    st.subheader("Upcoming card payments")
    if not summary.upcoming_payments:
        st.info("No card payments are due.")
    for payment in summary.upcoming_payments:
        label = (
            f"{payment.card_name}: {_format_krw(payment.amount)} "
            f"({payment.window.start:%Y-%m-%d} to "
            f"{payment.window.end:%Y-%m-%d})"
        )
        if st.button(f"Confirm payment - {label}", key=payment.card_id):
            result = ConfirmCardPaymentUseCase(document_store=store).execute(
                payment.card_id
            )
            st.success(
                f"Paid {_format_krw(result.amount)} for {payment.card_name}."
            )

    st.subheader("Pending incomes")
    if not overview.pending:
        st.info("No pending incomes.")
    else:
        st.dataframe(
            [
                {
                    "Due": f"{schedule.due_date:%Y-%m-%d}",
                    "Description": schedule.description,
                    "Amount": f"{schedule.amount:,}",
                }
                for schedule in overview.pending
            ],
            width="stretch",
            hide_index=True,
        )

    _render_donut_chart(
        _assets_by_currency_krw(summary),
        "Assets by currency (KRW)",
    )


def _render_accounts(balances: Sequence[AccountBalance]) -> None:
    """Render the derived balances with light filtering."""
    st.subheader("Accounts")
    query = st.text_input("Search by name", placeholder="Type to filter")
    categories = sorted({row.category for row in balances})
    category_filter = st.selectbox(
        "Filter by category",
        options=["All"] + categories,
        index=0,
    )

    filtered = []
    query_lower = query.strip().lower()
    for row in balances:
        if category_filter != "All" and row.category != category_filter:
            continue
        if query_lower and query_lower not in row.name.lower():
            continue
        filtered.append(row)

    st.caption(f"{len(filtered)} accounts shown")
    data = [
        {
            "Name": row.name,
            "Category": row.category,
            "Balance": ", ".join(
                _format_amount(amount, currency)
                for currency, amount in sorted(row.balances.items())
            ),
            "Total (KRW)": _format_krw(row.total_krw),
        }
        for row in filtered
    ]
    st.dataframe(data, width="stretch", hide_index=True, height=420)


def _render_transactions(store: DocumentStorePort) -> None:
    """Render the filtered transaction history."""
    kind = st.sidebar.selectbox("Type", [ALL, *TRANSACTION_KINDS])
    year = st.sidebar.selectbox(
        "Year",
        [ALL] + [str(y) for y in range(datetime.now().year, 2014, -1)],
    )
    month = st.sidebar.selectbox(
        "Month",
        [ALL] + [str(m) for m in range(1, 13)],
    )
    transactions = _fetch_transactions(
        store,
        TransactionFilter(kind=kind, year=year, month=month),
    )
    st.caption(f"{len(transactions)} transactions shown")
    st.dataframe(
        [
            {
                "Date": f"{t.occurred_at:%Y-%m-%d %H:%M}",
                "Type": t.kind,
                "Description": t.description,
                "Amount": f"{t.amount:,}",
                "Category": t.category or "",
            }
            for t in transactions
        ],
        width="stretch",
        hide_index=True,
        height=480,
    )

    snapshot = _fetch_snapshot(store)
    st.subheader("Add transaction")
    _render_transaction_form(store, snapshot)
    _render_transaction_editor(store, snapshot, transactions)


def _render_transaction_form(
    store: DocumentStorePort,
    snapshot: LedgerSnapshot,
    current: Transaction | None = None,
) -> None:
    """Render the form that records or edits a transaction.

    Transfers use both account fields and card expenses use the card
    field; other fields left blank are ignored for that type.
    """
    prefix = f"edit-{current.id}" if current is not None else "add"
    names = {"": "-"}
    names.update({account.id: account.name for account in snapshot.accounts})
    names.update({card.id: card.name for card in snapshot.cards})
    account_ids = ["", *(account.id for account in snapshot.accounts)]
    card_ids = ["", *(card.id for card in snapshot.cards)]
    occurred_at = current.occurred_at if current is not None else (
        datetime.now()
    )

    with st.form(f"{prefix}-transaction"):
        kind = st.selectbox(
            "Type",
            EDITABLE_KINDS,
            index=_index_of(EDITABLE_KINDS, getattr(current, "kind", None)),
            key=f"{prefix}-kind",
        )
        values = {
            "date": st.date_input(
                "Date", value=occurred_at.date(), key=f"{prefix}-date"
            ),
            "time": st.time_input(
                "Time",
                value=occurred_at.time().replace(second=0, microsecond=0),
                key=f"{prefix}-time",
            ),
            "description": st.text_input(
                "Description",
                value=getattr(current, "description", ""),
                key=f"{prefix}-description",
            ),
            "amount": st.text_input(
                "Amount",
                value=str(current.amount) if current is not None else "",
                key=f"{prefix}-amount",
            ),
            "category": st.text_input(
                "Category",
                value=getattr(current, "category", None) or "",
                key=f"{prefix}-category",
            ),
            "memo": st.text_input(
                "Memo",
                value=getattr(current, "memo", None) or "",
                key=f"{prefix}-memo",
            ),
            "account_id": st.selectbox(
                "Account",
                account_ids,
                index=_index_of(
                    account_ids, getattr(current, "account_id", None)
                ),
                format_func=names.get,
                key=f"{prefix}-account",
            ),
            "to_account_id": st.selectbox(
                "To account (transfers)",
                account_ids,
                index=_index_of(
                    account_ids, getattr(current, "to_account_id", None)
                ),
                format_func=names.get,
                key=f"{prefix}-to-account",
            ),
            "card_id": st.selectbox(
                "Card (card expenses)",
                card_ids,
                index=_index_of(card_ids, getattr(current, "card_id", None)),
                format_func=names.get,
                key=f"{prefix}-card",
            ),
        }
        submitted = st.form_submit_button(
            "Save changes" if current is not None else "Add transaction"
        )
    if not submitted:
        return

    transaction = _build_transaction(kind, values, current)
    if current is None:
        RecordTransactionUseCase(document_store=store).execute(transaction)
        st.success("Transaction recorded.")
    else:
        EditTransactionUseCase(document_store=store).execute(transaction)
        st.success("Transaction updated.")


def _render_transaction_editor(
    store: DocumentStorePort,
    snapshot: LedgerSnapshot,
    transactions: Sequence[Transaction],
) -> None:
    """Render edit and delete controls for one listed transaction."""
    st.subheader("Edit or delete")
    listed = {t.id: t for t in transactions if t.id}
    if not listed:
        st.info("No transaction selected.")
        return
    selected = st.selectbox(
        "Transaction",
        list(listed),
        format_func=lambda tid: (
            f"{listed[tid].occurred_at:%Y-%m-%d} "
            f"{listed[tid].description} ({listed[tid].kind})"
        ),
        key="edit-select",
    )
    current = listed[selected]
    if current.kind == PAYMENT:
        st.caption(
            "Payments cannot be edited. Deleting one reopens the card "
            "charges it settled."
        )
    else:
        _render_transaction_form(store, snapshot, current)
    if st.button("Delete transaction", key=f"delete-{current.id}"):
        DeleteTransactionUseCase(document_store=store).execute(current.id)
        st.success("Transaction deleted.")


def _render_schedules(store: DocumentStorePort) -> None:
    """Render scheduled incomes with add and complete actions."""
    snapshot = _fetch_snapshot(store)
    names = {account.id: account.name for account in snapshot.accounts}

    st.subheader("Add scheduled income")
    if not names:
        st.info("Add an account before scheduling incomes.")
    else:
        with st.form("schedule-form"):
            description = st.text_input("Schedule description")
            amount = st.text_input("Schedule amount")
            due = st.date_input("Due date", value=date.today())
            account_id = st.selectbox(
                "Deposit account", list(names), format_func=names.get
            )
            submitted = st.form_submit_button("Add schedule")
        if submitted:
            AddScheduleUseCase(document_store=store).execute(
                description,
                _parse_amount(amount),
                datetime.combine(due, time.min),
                account_id,
            )
            st.success(f"Scheduled {description.strip()}.")

    overview = _fetch_schedule_overview(store)
    st.subheader("Pending incomes")
    if not overview.pending:
        st.info("No pending incomes.")
    for schedule in overview.pending:
        label = (
            f"{schedule.due_date:%Y-%m-%d} {schedule.description}: "
            f"{schedule.amount:,}"
        )
        if st.button(f"Mark received - {label}", key=schedule.id):
            CompleteScheduleUseCase(document_store=store).execute(
                schedule.id
            )
            st.success(f"Recorded income for {schedule.description}.")

    completed = [s for s in snapshot.schedules if s.is_completed]
    if completed:
        st.subheader("Completed")
        st.dataframe(
            [
                {
                    "Due": f"{schedule.due_date:%Y-%m-%d}",
                    "Description": schedule.description,
                    "Amount": f"{schedule.amount:,}",
                    "Account": names.get(schedule.account_id, "-"),
                }
                for schedule in completed
            ],
            width="stretch",
            hide_index=True,
        )


def _render_account_management(
    store: DocumentStorePort,
    snapshot: LedgerSnapshot,
) -> None:
    """Render the create, update and delete controls for accounts."""
    st.subheader("Accounts")
    accounts = {account.id: account for account in snapshot.accounts}
    symbols = [currency.symbol for currency in snapshot.currencies]
    if BASE_CURRENCY not in symbols:
        symbols.insert(0, BASE_CURRENCY)
    selected = st.selectbox(
        "Account to edit",
        [NEW_ENTRY, *accounts],
        format_func=lambda key: accounts[key].name if key in accounts else key,
        key="manage-account",
    )
    current = accounts.get(selected)

    with st.form("account-form"):
        name = st.text_input(
            "Account name", value=current.name if current else ""
        )
        category = st.selectbox(
            "Category",
            ACCOUNT_CATEGORIES,
            index=_index_of(
                ACCOUNT_CATEGORIES, current.category if current else None
            ),
        )
        currency = st.selectbox(
            "Currency",
            symbols,
            index=_index_of(symbols, current.currency if current else None),
        )
        initial = st.text_input(
            "Initial balance",
            value=str(current.initial_balance) if current else "0",
        )
        submitted = st.form_submit_button("Save account")
    if submitted:
        SaveAccountUseCase(document_store=store).execute(
            Account(
                id=current.id if current else "",
                name=name.strip(),
                category=category,
                currency=currency,
                initial_balance=_parse_amount(initial),
            )
        )
        st.success(f"Saved account {name.strip()}.")
    if current is not None and st.button(
        "Delete account", key=f"delete-account-{current.id}"
    ):
        DeleteAccountUseCase(document_store=store).execute(current.id)
        st.success(f"Deleted account {current.name}.")


def _render_card_management(
    store: DocumentStorePort,
    snapshot: LedgerSnapshot,
) -> None:
    """Render the create, update and delete controls for cards."""
    st.subheader("Cards")
    cards = {card.id: card for card in snapshot.cards}
    account_names = {"": "-"}
    account_names.update(
        {account.id: account.name for account in snapshot.accounts}
    )
    account_ids = list(account_names)
    selected = st.selectbox(
        "Card to edit",
        [NEW_ENTRY, *cards],
        format_func=lambda key: cards[key].name if key in cards else key,
        key="manage-card",
    )
    current = cards.get(selected)

    with st.form("card-form"):
        name = st.text_input(
            "Card name", value=current.name if current else ""
        )
        days = {
            label: int(
                st.number_input(
                    label,
                    min_value=1,
                    max_value=31,
                    value=getattr(current, field, default),
                    step=1,
                )
            )
            for label, field, default in (
                ("Payment day", "payment_day", 15),
                ("Usage start day", "usage_start_day", 1),
                ("Usage end day", "usage_end_day", 31),
            )
        }
        linked = st.selectbox(
            "Settlement account",
            account_ids,
            index=_index_of(
                account_ids, current.linked_account_id if current else None
            ),
            format_func=account_names.get,
        )
        submitted = st.form_submit_button("Save card")
    if submitted:
        SaveCardUseCase(document_store=store).execute(
            Card(
                id=current.id if current else "",
                name=name.strip(),
                payment_day=days["Payment day"],
                usage_start_day=days["Usage start day"],
                usage_end_day=days["Usage end day"],
                linked_account_id=linked or None,
            )
        )
        st.success(f"Saved card {name.strip()}.")
    if current is not None and st.button(
        "Delete card", key=f"delete-card-{current.id}"
    ):
        DeleteCardUseCase(document_store=store).execute(current.id)
        st.success(f"Deleted card {current.name}.")


def _render_management(store: DocumentStorePort) -> None:
    """Render account and card management."""
    snapshot = _fetch_snapshot(store)
    _render_account_management(store, snapshot)
    _render_card_management(store, snapshot)


def _render_currencies(store: DocumentStorePort) -> None:
    """Render the currency table with save and delete actions."""
    snapshot = _fetch_snapshot(store)
    st.subheader("Currencies")
    st.dataframe(
        [
            {
                "Symbol": currency.symbol,
                "Name": currency.name,
                "Rate (KRW)": f"{currency.rate:,}",
                "Base": "yes" if currency.is_base else "",
            }
            for currency in snapshot.currencies
        ],
        width="stretch",
        hide_index=True,
    )

    with st.form("currency-form"):
        symbol = st.text_input("Symbol", placeholder="USD")
        name = st.text_input("Currency name")
        rate = st.text_input("Rate (KRW per unit)")
        submitted = st.form_submit_button("Save currency")
    if submitted:
        saved = SaveCurrencyUseCase(document_store=store).execute(
            Currency(
                symbol=symbol,
                name=name.strip() or symbol.strip().upper(),
                rate=_parse_amount(rate),
            )
        )
        st.success(f"Saved currency {saved}.")

    for currency in snapshot.currencies:
        if currency.is_base:
            continue
        if st.button(
            f"Delete {currency.symbol}",
            key=f"delete-currency-{currency.symbol}",
        ):
            DeleteCurrencyUseCase(document_store=store).execute(
                currency.symbol
            )
            st.success(f"Deleted currency {currency.symbol}.")


def _render_data(store: DocumentStorePort) -> None:
    """Render backup downloads and file imports."""
    exporter = ExportDataUseCase(document_store=store)
    st.subheader("Export")
    st.download_button(
        "Download JSON backup",
        data=exporter.to_json(),
        file_name="ledger-backup.json",
        mime="application/json",
    )
    st.download_button(
        "Download transactions CSV",
        data=exporter.to_csv(),
        file_name="ledger-transactions.csv",
        mime="text/csv",
    )

    st.subheader("Import")
    st.caption(
        "A JSON backup replaces all existing data. "
        "A CSV file appends transactions."
    )
    upload = st.file_uploader("Backup or CSV file", type=["json", "csv"])
    if upload is None or not st.button("Import file"):
        return
    raw = _read_upload(upload)
    importer = ImportDataUseCase(document_store=store)
    if upload.name.lower().endswith(".csv"):
        result = importer.from_csv(raw)
    else:
        result = importer.from_json(raw)
    st.success(f"Imported {result.counts}.")
    for note in result.skipped:
        st.caption(note)


def _render_reports(store: DocumentStorePort) -> None:
    """Render spending per category and the monthly cashflow."""
    report = _fetch_reports(store)
    _render_donut_chart(report.categories, "Spending by category (KRW)")
    st.subheader("Monthly cashflow (KRW)")
    st.dataframe(
        [
            {
                "Month": row.month,
                "Income": _format_krw(row.income),
                "Expense": _format_krw(row.expense),
                "Net": _format_krw(row.net),
            }
            for row in report.cashflow
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Household Ledger", layout="wide")
    st.title("Household Ledger")

    page = st.sidebar.selectbox("Page", PAGES)
    get_usage_logger().info(f"Page viewed: {page}")

    try:
        store = _load_store()
        if page == "Dashboard":
            _render_dashboard(store)
        elif page == "Accounts":
            balances = _fetch_account_balances(store)
            if not balances:
                st.warning("No accounts found. Add or import accounts first.")
                return
            _render_accounts(balances)
        elif page == "Transactions":
            _render_transactions(store)
        elif page == "Schedule":
            _render_schedules(store)
        elif page == "Management":
            _render_management(store)
        elif page == "Currencies":
            _render_currencies(store)
        elif page == "Reports":
            _render_reports(store)
        else:
            _render_data(store)
    except LedgerError as exc:
        st.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
