"""Live session that keeps a ledger snapshot in sync with the store.

The session subscribes one listener per collection. Every pushed
collection is reduced into a new immutable snapshot, the asset summary is
recomputed (memoized on snapshot identity and evaluation day) and every
observer is notified.
"""

from collections.abc import Callable
from datetime import date, datetime

from src.application.ports.document_store import (
    Document,
    DocumentStorePort,
    Unsubscribe,
)
from src.application.snapshots import (
    LedgerSnapshot,
    SnapshotArrived,
    reduce_snapshot,
)
from src.application.use_cases.get_asset_summary import summarize_snapshot
from src.application.use_cases.manage_currencies import (
    EnsureBaseCurrencyUseCase,
)
from src.domain.constants import BASE_CURRENCY, CORE_COLLECTIONS, CURRENCIES
from src.domain.errors import LedgerError
from src.domain.models import AssetSummary
from src.infrastructure.logging.logger import get_app_logger

LedgerObserver = Callable[[LedgerSnapshot, AssetSummary], None]


class WatchLedgerUseCase:
    """Subscribe to every collection and publish derived views."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        logger=None,
        clock: Callable[[], datetime] = datetime.now,
        ensure_base_currency: EnsureBaseCurrencyUseCase | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Source of the evaluation time for billing windows.
            ensure_base_currency: Optional use case creating the base
                currency; built from ``document_store`` when omitted.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._ensure_base_currency = (
            ensure_base_currency
            or EnsureBaseCurrencyUseCase(document_store, logger=self._logger)
        )
        self._snapshot = LedgerSnapshot()
        self._observers: list[LedgerObserver] = []
        self._unsubscribes: list[Unsubscribe] = []
        self._summary_key: tuple[LedgerSnapshot, date] | None = None
        self._summary: AssetSummary | None = None
        self._base_requested = False

    @property
    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def is_open(self) -> bool:
        return bool(self._unsubscribes)

    def add_observer(self, observer: LedgerObserver) -> Unsubscribe:
        """Register an observer and return a callable removing it."""
        self._observers.append(observer)

        def remove() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return remove

    def execute(self) -> "WatchLedgerUseCase":
        """Open one subscription per core collection.

        Returns:
            WatchLedgerUseCase: The session itself, for chaining.
        """
        if self._unsubscribes:
            return self
        for collection in CORE_COLLECTIONS:
            self._unsubscribes.append(
                self._document_store.subscribe(
                    collection,
                    self._listener_for(collection),
                    on_error=self._error_listener_for(collection),
                )
            )
        self._logger.info(
            f"Watching {len(self._unsubscribes)} ledger collections"
        )
        return self

    def summary(self) -> AssetSummary:
        """Return the asset summary of the current snapshot."""
        now = self._clock()
        key = (self._snapshot, now.date())
        if (
            self._summary is None
            or self._summary_key is None
            or self._summary_key[0] is not key[0]
            or self._summary_key[1] != key[1]
        ):
            self._summary = summarize_snapshot(
                self._snapshot, now, logger=self._logger
            )
            self._summary_key = key
        return self._summary

    def close(self) -> None:
        """Unsubscribe every listener and drop the observers."""
        unsubscribes, self._unsubscribes = self._unsubscribes, []
        for unsubscribe in unsubscribes:
            unsubscribe()
        self._observers.clear()
        if unsubscribes:
            self._logger.info("Closed ledger session")

    def _listener_for(
        self,
        collection: str,
    ) -> Callable[[tuple[Document, ...]], None]:
        def listener(documents: tuple[Document, ...]) -> None:
            self._on_snapshot(SnapshotArrived(collection, tuple(documents)))

        return listener

    def _error_listener_for(
        self,
        collection: str,
    ) -> Callable[[Exception], None]:
        def on_error(exc: Exception) -> None:
            self._logger.error(
                f"Subscription to {collection} failed: {exc}"
            )

        return on_error

    def _on_snapshot(self, event: SnapshotArrived) -> None:
        self._snapshot = reduce_snapshot(
            self._snapshot, event, logger=self._logger
        )
        if event.collection == CURRENCIES:
            self._ensure_base(self._snapshot)
        summary = self.summary()
        for observer in list(self._observers):
            observer(self._snapshot, summary)

    def _ensure_base(self, snapshot: LedgerSnapshot) -> None:
        if self._base_requested:
            return
        if any(c.symbol == BASE_CURRENCY for c in snapshot.currencies):
            return
        self._base_requested = True
        try:
            self._ensure_base_currency.execute()
        except LedgerError as exc:
            self._logger.error(f"Could not create base currency: {exc}")


__all__ = ["WatchLedgerUseCase", "LedgerObserver"]
