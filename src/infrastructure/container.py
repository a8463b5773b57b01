"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_store import DocumentStorePort
from src.application.ports.identity import IdentityProviderPort, UserIdentity
from src.application.use_cases.resolve_user import ResolveUserUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.identity import EnvIdentityProvider
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.sqlalchemy_document_store import (
    SqlAlchemyDocumentStore,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_identity_provider(
    settings: LedgerSettings | None = None,
) -> IdentityProviderPort:
    """Return the identity provider configured from the environment."""
    resolved_settings = settings or LedgerSettings.from_env()
    return EnvIdentityProvider(resolved_settings, logger=get_app_logger())


def build_document_store(
    user: UserIdentity,
    db_port: DatabaseEnginePort | None = None,
) -> DocumentStorePort:
    """Return the document store holding the collections of ``user``."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyDocumentStore(
        resolved_db,
        user_id=user.uid,
        logger=get_app_logger(),
    )


def build_user_document_store(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> DocumentStorePort:
    """Resolve the current user and return their document store.

    Raises:
        RuntimeError: When no user can be resolved.
    """
    provider = build_identity_provider(settings)
    user = ResolveUserUseCase(provider, logger=get_app_logger()).execute()
    if user is None:
        raise RuntimeError("No user could be resolved.")
    return build_document_store(user, db_port=db_port)


__all__ = [
    "build_database_adapter",
    "build_identity_provider",
    "build_document_store",
    "build_user_document_store",
]
