"""Database ports for the household ledger.

This module defines the application-layer protocol for accessing the
database engine that backs the document store. Infrastructure
implementations provide the concrete adapter.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the database engine of the ledger documents."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the document tables.
        """


__all__ = ["DatabaseEnginePort"]
