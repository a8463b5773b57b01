"""Tests for the live ledger session."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.watch_ledger import WatchLedgerUseCase
from src.domain.errors import StoreError


def _clock():
    return datetime(2024, 3, 10, 9, 0)


def _seed(store) -> None:
    store.seed(
        "accounts",
        "a",
        {"name": "Cash", "category": "cash", "initialBalance": 1000},
    )


def test_execute_subscribes_every_collection(
    document_store, silent_logger
) -> None:
    """Opening the session should load every collection."""
    _seed(document_store)

    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=_clock
    ).execute()

    assert session.is_open
    assert session.snapshot.is_ready
    assert sorted(document_store.listeners) == [
        "accounts",
        "cards",
        "currencies",
        "schedules",
        "transactions",
    ]
    assert session.summary().total_cash_krw == Decimal("1000")


def test_session_creates_missing_base_currency_once(
    document_store, silent_logger
) -> None:
    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=_clock
    ).execute()

    assert document_store.doc("currencies", "KRW")["isBase"] is True
    assert [c.symbol for c in session.snapshot.currencies] == ["KRW"]
    assert document_store.transactions_run == 1


def test_base_currency_failure_is_logged(
    document_store, silent_logger
) -> None:
    ensure = MagicMock()
    ensure.execute.side_effect = StoreError("permission denied")

    WatchLedgerUseCase(
        document_store,
        silent_logger,
        clock=_clock,
        ensure_base_currency=ensure,
    ).execute()

    ensure.execute.assert_called_once()
    assert "permission denied" in silent_logger.messages["error"][0]


def test_observers_receive_updates_after_writes(
    document_store, silent_logger
) -> None:
    """Every pushed collection should notify observers."""
    _seed(document_store)
    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=_clock
    ).execute()
    seen = []
    session.add_observer(
        lambda snapshot, summary: seen.append(summary.total_cash_krw)
    )

    document_store.create(
        "transactions",
        {
            "type": "income",
            "date": datetime(2024, 3, 1),
            "description": "Gift",
            "amount": 500,
            "accountId": "a",
        },
    )

    assert seen == [Decimal("1500")]


def test_summary_is_memoized_per_snapshot_and_day(
    document_store, silent_logger
) -> None:
    _seed(document_store)
    now = [datetime(2024, 3, 10, 9, 0)]
    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=lambda: now[0]
    ).execute()

    first = session.summary()
    assert session.summary() is first

    now[0] = datetime(2024, 3, 11, 9, 0)
    assert session.summary() is not first


def test_close_unsubscribes_and_drops_observers(
    document_store, silent_logger
) -> None:
    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=_clock
    ).execute()
    observer = MagicMock()
    session.add_observer(observer)

    session.close()
    document_store.create("accounts", {"name": "Late", "category": "cash"})

    assert not session.is_open
    assert all(
        not listeners for listeners in document_store.listeners.values()
    )
    observer.assert_not_called()


def test_removed_observer_is_not_notified(
    document_store, silent_logger
) -> None:
    session = WatchLedgerUseCase(
        document_store, silent_logger, clock=_clock
    ).execute()
    observer = MagicMock()
    remove = session.add_observer(observer)

    remove()
    document_store.create("accounts", {"name": "New", "category": "cash"})

    observer.assert_not_called()
