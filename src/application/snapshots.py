"""Immutable ledger snapshots and the reducer that advances them.

The store pushes one collection at a time. Each push becomes a
``SnapshotArrived`` event, and ``reduce_snapshot`` returns a new
``LedgerSnapshot`` with that collection replaced. Snapshots are never
mutated, so derived values can be cached on snapshot identity.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from functools import cached_property
from logging import Logger

from src.application.documents import (
    account_from_document,
    card_from_document,
    currency_from_document,
    schedule_from_document,
    transaction_from_document,
)
from src.application.ports.document_store import Document, DocumentStorePort
from src.domain.constants import (
    ACCOUNTS,
    CARDS,
    CORE_COLLECTIONS,
    CURRENCIES,
    SCHEDULES,
    TRANSACTIONS,
)
from src.domain.errors import LedgerValidationError
from src.domain.models import Account, Card, Currency, Schedule
from src.domain.models.transactions import Transaction
from src.domain.services.fx import CurrencyTable, build_currency_table


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time view of every collection of one user.

    Attributes:
        accounts: Accounts in store order.
        cards: Cards in store order.
        transactions: Transactions, newest first.
        schedules: Schedules by due date, oldest first.
        currencies: Currency records.
        loaded: Collections that have delivered at least one snapshot.
    """

    accounts: tuple[Account, ...] = ()
    cards: tuple[Card, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    schedules: tuple[Schedule, ...] = ()
    currencies: tuple[Currency, ...] = ()
    loaded: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_ready(self) -> bool:
        """Return True once every core collection has arrived."""
        return self.loaded >= frozenset(CORE_COLLECTIONS)

    @cached_property
    def accounts_by_id(self) -> dict[str, Account]:
        return {account.id: account for account in self.accounts}

    @cached_property
    def cards_by_id(self) -> dict[str, Card]:
        return {card.id: card for card in self.cards}

    @cached_property
    def currency_table(self) -> CurrencyTable:
        return build_currency_table(self.currencies)


@dataclass(frozen=True)
class SnapshotArrived:
    """Fresh contents of one collection pushed by the store."""

    collection: str
    documents: tuple[Document, ...]


_MAPPERS: dict[str, tuple[str, Callable[[Document], object]]] = {
    ACCOUNTS: ("accounts", account_from_document),
    CARDS: ("cards", card_from_document),
    TRANSACTIONS: ("transactions", transaction_from_document),
    SCHEDULES: ("schedules", schedule_from_document),
    CURRENCIES: ("currencies", currency_from_document),
}


def _map_documents(
    collection: str,
    documents: Iterable[Document],
    mapper: Callable[[Document], object],
    logger: Logger | None,
) -> list:
    items = []
    for document in documents:
        try:
            items.append(mapper(document))
        except LedgerValidationError as exc:
            if logger is not None:
                logger.warning(
                    f"Skipping {collection}/{document.id}: {exc}"
                )
    return items


def reduce_snapshot(
    snapshot: LedgerSnapshot,
    event: SnapshotArrived,
    logger: Logger | None = None,
) -> LedgerSnapshot:
    """Return a new snapshot with the event's collection replaced.

    Documents that cannot be mapped are left out and logged; the rest of
    the collection is still applied.

    Args:
        snapshot: Current snapshot; left untouched.
        event: Collection contents pushed by the store.
        logger: Optional logger used for skipped documents.

    Returns:
        LedgerSnapshot: The next snapshot. Unknown collections return the
        input snapshot unchanged.
    """
    entry = _MAPPERS.get(event.collection)
    if entry is None:
        return snapshot
    attribute, mapper = entry
    items = _map_documents(
        event.collection, event.documents, mapper, logger
    )
    if event.collection == TRANSACTIONS:
        items.sort(
            key=lambda item: (item.occurred_at, item.id or ""),
            reverse=True,
        )
    elif event.collection == SCHEDULES:
        items.sort(key=lambda item: (item.due_date, item.id))
    return replace(
        snapshot,
        **{
            attribute: tuple(items),
            "loaded": snapshot.loaded | {event.collection},
        },
    )


def load_snapshot(
    store: DocumentStorePort,
    logger: Logger | None = None,
) -> LedgerSnapshot:
    """Read every core collection once and reduce them into a snapshot."""
    snapshot = LedgerSnapshot()
    for collection in CORE_COLLECTIONS:
        snapshot = reduce_snapshot(
            snapshot,
            SnapshotArrived(collection, store.fetch_all(collection)),
            logger=logger,
        )
    return snapshot


__all__ = [
    "LedgerSnapshot",
    "SnapshotArrived",
    "reduce_snapshot",
    "load_snapshot",
]
