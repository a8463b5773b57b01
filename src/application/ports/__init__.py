"""Application ports package."""

from .database import DatabaseEnginePort
from .document_store import (
    Document,
    DocumentStorePort,
    StoreTransactionPort,
    Unsubscribe,
)
from .identity import IdentityProviderPort, UserIdentity

__all__ = [
    "DatabaseEnginePort",
    "Document",
    "DocumentStorePort",
    "StoreTransactionPort",
    "Unsubscribe",
    "IdentityProviderPort",
    "UserIdentity",
]
