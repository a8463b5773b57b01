"""Document store backed by a single SQL table.

Every document is one row keyed by (user, collection, document id) with a
JSON payload. Store transactions buffer their writes and flush them inside
one ``engine.begin()`` block, so a failing work function leaves the table
untouched. Subscribers registered in this process are notified with fresh
collection snapshots after every commit.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, TypeVar
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_store import (
    Document,
    DocumentStorePort,
    ErrorListener,
    SnapshotListener,
    StoreTransactionPort,
    Unsubscribe,
)
from src.domain.errors import MissingReferenceError, StoreError
from src.infrastructure.document_codec import decode_document, encode_document
from src.infrastructure.logging.logger import get_app_logger

T = TypeVar("T")

CREATE_DOCUMENTS_SQL = """
CREATE TABLE IF NOT EXISTS ledger_documents (
    user_id TEXT NOT NULL,
    collection TEXT NOT NULL,
    doc_id TEXT NOT NULL,
    payload TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (user_id, collection, doc_id)
)
"""

SELECT_COLLECTION_SQL = text(
    """
    SELECT doc_id, payload
    FROM ledger_documents
    WHERE user_id = :user_id AND collection = :collection
    ORDER BY doc_id
    """
)

SELECT_DOCUMENT_SQL = text(
    """
    SELECT doc_id, payload
    FROM ledger_documents
    WHERE user_id = :user_id
      AND collection = :collection
      AND doc_id = :doc_id
    """
)

DELETE_DOCUMENT_SQL = text(
    """
    DELETE FROM ledger_documents
    WHERE user_id = :user_id
      AND collection = :collection
      AND doc_id = :doc_id
    """
)

INSERT_DOCUMENT_SQL = text(
    """
    INSERT INTO ledger_documents (
        user_id,
        collection,
        doc_id,
        payload,
        updated_at
    )
    VALUES (
        :user_id,
        :collection,
        :doc_id,
        :payload,
        :updated_at
    )
    """
)


def _to_document(row) -> Document:
    return Document(id=row.doc_id, data=decode_document(row.payload))


class _BufferedTransaction(StoreTransactionPort):
    """Store transaction reading through pending writes."""

    def __init__(self, conn: Connection, user_id: str) -> None:
        self._conn = conn
        self._user_id = user_id
        # (collection, doc_id) -> data, or None for a pending delete.
        self._writes: dict[tuple[str, str], dict[str, Any] | None] = {}

    def get(self, collection: str, doc_id: str) -> Document | None:
        key = (collection, doc_id)
        if key in self._writes:
            data = self._writes[key]
            return None if data is None else Document(doc_id, dict(data))
        row = self._conn.execute(
            SELECT_DOCUMENT_SQL,
            {
                "user_id": self._user_id,
                "collection": collection,
                "doc_id": doc_id,
            },
        ).first()
        return _to_document(row) if row is not None else None

    def list(self, collection: str) -> tuple[Document, ...]:
        rows = self._conn.execute(
            SELECT_COLLECTION_SQL,
            {"user_id": self._user_id, "collection": collection},
        ).all()
        documents = {row.doc_id: _to_document(row) for row in rows}
        for (pending_collection, doc_id), data in self._writes.items():
            if pending_collection != collection:
                continue
            if data is None:
                documents.pop(doc_id, None)
            else:
                documents[doc_id] = Document(doc_id, dict(data))
        return tuple(documents[doc_id] for doc_id in sorted(documents))

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: str | None = None,
    ) -> str:
        doc_id = doc_id or uuid4().hex
        if self.get(collection, doc_id) is not None:
            raise StoreError(f"{collection}/{doc_id} already exists.")
        self._writes[(collection, doc_id)] = dict(data)
        return doc_id

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        self._writes[(collection, doc_id)] = dict(data)

    def update(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        current = self.get(collection, doc_id)
        if current is None:
            raise MissingReferenceError(
                f"{collection}/{doc_id} does not exist."
            )
        self._writes[(collection, doc_id)] = {**current.data, **data}

    def delete(self, collection: str, doc_id: str) -> None:
        self._writes[(collection, doc_id)] = None

    def flush(self) -> set[str]:
        """Write every buffered change and return the touched collections."""
        updated_at = datetime.now().isoformat()
        for (collection, doc_id), data in self._writes.items():
            params = {
                "user_id": self._user_id,
                "collection": collection,
                "doc_id": doc_id,
            }
            self._conn.execute(DELETE_DOCUMENT_SQL, params)
            if data is not None:
                self._conn.execute(
                    INSERT_DOCUMENT_SQL,
                    {
                        **params,
                        "payload": encode_document(data),
                        "updated_at": updated_at,
                    },
                )
        return {collection for collection, _ in self._writes}


class SqlAlchemyDocumentStore(DocumentStorePort):
    """DocumentStorePort implementation for one user on a SQL database."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing the ledger engine.
            user_id: Owner of every document read or written.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._user_id = user_id
        self._logger = logger or get_app_logger()
        self._table_ready = False
        self._listeners: dict[
            str, list[tuple[SnapshotListener, ErrorListener | None]]
        ] = {}

    def subscribe(
        self,
        collection: str,
        listener: SnapshotListener,
        on_error: ErrorListener | None = None,
    ) -> Unsubscribe:
        entry = (listener, on_error)
        self._listeners.setdefault(collection, []).append(entry)
        self._deliver(collection, [entry])

        def unsubscribe() -> None:
            entries = self._listeners.get(collection, [])
            if entry in entries:
                entries.remove(entry)

        return unsubscribe

    def fetch_all(self, collection: str) -> tuple[Document, ...]:
        engine = self._engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_COLLECTION_SQL,
                    {"user_id": self._user_id, "collection": collection},
                ).all()
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to read {collection}: {exc}")
            raise StoreError(f"Failed to read {collection}.") from exc
        return tuple(_to_document(row) for row in rows)

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: str | None = None,
    ) -> str:
        return self.run_transaction(
            lambda tx: tx.create(collection, data, doc_id)
        )

    def update(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
    ) -> None:
        self.run_transaction(lambda tx: tx.update(collection, doc_id, data))

    def delete(self, collection: str, doc_id: str) -> None:
        self.run_transaction(lambda tx: tx.delete(collection, doc_id))

    def run_transaction(
        self,
        work: Callable[[StoreTransactionPort], T],
    ) -> T:
        """Run ``work`` inside one database transaction.

        Exceptions raised by ``work`` roll the transaction back and
        propagate unchanged; database failures surface as StoreError.
        """
        engine = self._engine()
        try:
            with engine.begin() as conn:
                tx = _BufferedTransaction(conn, self._user_id)
                result = work(tx)
                touched = tx.flush()
        except SQLAlchemyError as exc:
            self._logger.error(f"Store transaction failed: {exc}")
            raise StoreError("Store transaction failed.") from exc
        for collection in sorted(touched):
            entries = list(self._listeners.get(collection, []))
            self._deliver(collection, entries)
        return result

    def _engine(self) -> Engine:
        engine = self._db_port.get_ledger_engine()
        if not self._table_ready:
            try:
                with engine.begin() as conn:
                    conn.execute(text(CREATE_DOCUMENTS_SQL))
            except SQLAlchemyError as exc:
                self._logger.error(f"Cannot prepare ledger_documents: {exc}")
                raise StoreError("Cannot prepare the document table.") from exc
            self._table_ready = True
        return engine

    def _deliver(
        self,
        collection: str,
        entries: list[tuple[SnapshotListener, ErrorListener | None]],
    ) -> None:
        if not entries:
            return
        try:
            documents = self.fetch_all(collection)
        except StoreError as exc:
            for _, on_error in entries:
                if on_error is not None:
                    on_error(exc)
            return
        for listener, _ in entries:
            try:
                listener(documents)
            except Exception as exc:
                # The write already committed.
                self._logger.error(
                    f"Snapshot listener for {collection} failed: {exc}"
                )


__all__ = ["SqlAlchemyDocumentStore", "CREATE_DOCUMENTS_SQL"]
