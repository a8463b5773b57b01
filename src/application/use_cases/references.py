"""Reference lookups shared by the mutation use cases.

All helpers read through the store transaction so checks and writes see
the same state.
"""

from src.application.documents import (
    account_from_document,
    card_from_document,
)
from src.application.ports.document_store import (
    Document,
    StoreTransactionPort,
)
from src.domain.constants import ACCOUNTS, CARDS
from src.domain.errors import LedgerValidationError, MissingReferenceError
from src.domain.models import Account, Card


def require_document(
    tx: StoreTransactionPort,
    collection: str,
    doc_id: str | None,
) -> Document:
    """Return a document or raise when it no longer exists.

    Raises:
        MissingReferenceError: When ``doc_id`` is empty or unknown.
    """
    document = tx.get(collection, doc_id) if doc_id else None
    if document is None:
        raise MissingReferenceError(
            f"{collection}/{doc_id} does not exist."
        )
    return document


def load_accounts(tx: StoreTransactionPort) -> dict[str, Account]:
    """Return every mappable account keyed by id."""
    accounts = {}
    for document in tx.list(ACCOUNTS):
        try:
            accounts[document.id] = account_from_document(document)
        except LedgerValidationError:
            continue
    return accounts


def load_cards(tx: StoreTransactionPort) -> list[Card]:
    """Return every mappable card."""
    cards = []
    for document in tx.list(CARDS):
        try:
            cards.append(card_from_document(document))
        except LedgerValidationError:
            continue
    return cards


__all__ = ["require_document", "load_accounts", "load_cards"]
