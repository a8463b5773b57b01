"""Shared fixtures: in-memory fakes of the application ports."""

from collections.abc import Callable, Mapping
from copy import deepcopy
from itertools import count
from typing import Any

import pytest

from src.application.ports.document_store import Document
from src.application.ports.identity import UserIdentity
from src.domain.errors import MissingReferenceError


class _FakeTransaction:
    def __init__(self, collections: dict[str, dict[str, dict]], ids) -> None:
        self.collections = collections
        self._ids = ids
        self.touched: set[str] = set()

    def get(self, collection, doc_id):
        data = self.collections.get(collection, {}).get(doc_id)
        return None if data is None else Document(doc_id, deepcopy(data))

    def list(self, collection):
        return tuple(
            Document(doc_id, deepcopy(data))
            for doc_id, data in self.collections.get(collection, {}).items()
        )

    def create(self, collection, data, doc_id=None):
        doc_id = doc_id or f"{collection[:-1]}-{next(self._ids)}"
        self.collections.setdefault(collection, {})[doc_id] = dict(data)
        self.touched.add(collection)
        return doc_id

    def set(self, collection, doc_id, data):
        self.collections.setdefault(collection, {})[doc_id] = dict(data)
        self.touched.add(collection)

    def update(self, collection, doc_id, data):
        current = self.collections.get(collection, {}).get(doc_id)
        if current is None:
            raise MissingReferenceError(f"{collection}/{doc_id} missing")
        current.update(data)
        self.touched.add(collection)

    def delete(self, collection, doc_id):
        self.collections.get(collection, {}).pop(doc_id, None)
        self.touched.add(collection)


class FakeDocumentStore:
    """DocumentStorePort fake keeping collections in dictionaries.

    ``run_transaction`` works on a deep copy and only swaps it in when the
    work function returns, so a raising work function leaves no trace.
    """

    def __init__(
        self,
        collections: Mapping[str, Mapping[str, dict]] | None = None,
    ) -> None:
        self.collections: dict[str, dict[str, dict]] = {
            name: {doc_id: dict(data) for doc_id, data in docs.items()}
            for name, docs in (collections or {}).items()
        }
        self.listeners: dict[str, list[Callable]] = {}
        self.transactions_run = 0
        self._ids = count(1)

    def seed(self, collection: str, doc_id: str, data: Mapping[str, Any]):
        self.collections.setdefault(collection, {})[doc_id] = dict(data)

    def subscribe(self, collection, listener, on_error=None):
        self.listeners.setdefault(collection, []).append(listener)
        listener(self.fetch_all(collection))

        def unsubscribe():
            self.listeners[collection].remove(listener)

        return unsubscribe

    def fetch_all(self, collection):
        return tuple(
            Document(doc_id, deepcopy(data))
            for doc_id, data in self.collections.get(collection, {}).items()
        )

    def create(self, collection, data, doc_id=None):
        return self.run_transaction(
            lambda tx: tx.create(collection, data, doc_id)
        )

    def update(self, collection, doc_id, data):
        self.run_transaction(lambda tx: tx.update(collection, doc_id, data))

    def delete(self, collection, doc_id):
        self.run_transaction(lambda tx: tx.delete(collection, doc_id))

    def run_transaction(self, work):
        self.transactions_run += 1
        tx = _FakeTransaction(deepcopy(self.collections), self._ids)
        result = work(tx)
        self.collections = tx.collections
        for collection in sorted(tx.touched):
            for listener in list(self.listeners.get(collection, [])):
                listener(self.fetch_all(collection))
        return result

    def doc(self, collection: str, doc_id: str) -> dict | None:
        return self.collections.get(collection, {}).get(doc_id)


class FakeIdentityProvider:
    """IdentityProviderPort fake with a preset current user."""

    def __init__(self, user: UserIdentity | None = None) -> None:
        self.user = user
        self.anonymous_calls = 0

    def current_user(self):
        return self.user

    def sign_in(self):
        return self.user

    def sign_in_anonymously(self):
        self.anonymous_calls += 1
        self.user = UserIdentity(uid="anon-1", is_anonymous=True)
        return self.user

    def sign_out(self):
        self.user = None

    def on_auth_state_changed(self, listener):
        listener(self.user)
        return lambda: None


@pytest.fixture
def document_store() -> FakeDocumentStore:
    """Return an empty in-memory document store."""
    return FakeDocumentStore()


@pytest.fixture
def identity_provider_factory():
    """Return the fake identity provider class."""
    return FakeIdentityProvider


@pytest.fixture
def silent_logger():
    """Return a logger stub recording messages per level."""

    class _Logger:
        def __init__(self) -> None:
            self.messages: dict[str, list[str]] = {}

        def _record(self, level: str, msg: str) -> None:
            self.messages.setdefault(level, []).append(msg)

        def info(self, msg: str) -> None:
            self._record("info", msg)

        def warning(self, msg: str) -> None:
            self._record("warning", msg)

        def error(self, msg: str) -> None:
            self._record("error", msg)

        def debug(self, msg: str) -> None:
            self._record("debug", msg)

    return _Logger()
