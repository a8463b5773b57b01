"""Port for the per-user document store.

The store holds one set of collections per user (``accounts``, ``cards``,
``transactions``, ``schedules``, ``currencies``). It pushes collection
snapshots to subscribers and offers an atomic read-modify-write
transaction spanning several documents.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Document:
    """Immutable view of a stored document."""

    id: str
    data: Mapping[str, Any] = field(default_factory=dict)


SnapshotListener = Callable[[tuple[Document, ...]], None]
ErrorListener = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class StoreTransactionPort(Protocol):
    """Handle passed to the work function of ``run_transaction``.

    Writes are buffered and become visible to other readers only when the
    work function returns. Any exception discards every buffered write.
    """

    def get(self, collection: str, doc_id: str) -> Document | None:
        """Return a document, including writes buffered in this transaction."""

    def list(self, collection: str) -> tuple[Document, ...]:
        """Return every document of a collection."""

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: str | None = None,
    ) -> str:
        """Buffer a new document and return its id."""

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        """Buffer a full overwrite of a document."""

    def update(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        """Buffer a merge of fields into an existing document."""

    def delete(self, collection: str, doc_id: str) -> None:
        """Buffer the deletion of a document."""


class DocumentStorePort(Protocol):
    """Port exposing the user's collections."""

    def subscribe(
        self,
        collection: str,
        listener: SnapshotListener,
        on_error: ErrorListener | None = None,
    ) -> Unsubscribe:
        """Deliver the current snapshot now and after every change."""

    def fetch_all(self, collection: str) -> tuple[Document, ...]:
        """Return the current documents of a collection once."""

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: str | None = None,
    ) -> str:
        """Create a document and return its id."""

    def update(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        """Merge fields into an existing document."""

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""

    def run_transaction(
        self,
        work: Callable[[StoreTransactionPort], T],
    ) -> T:
        """Run ``work`` atomically and return its result."""


__all__ = [
    "Document",
    "SnapshotListener",
    "ErrorListener",
    "Unsubscribe",
    "StoreTransactionPort",
    "DocumentStorePort",
]
