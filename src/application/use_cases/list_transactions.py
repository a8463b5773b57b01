"""Use case to list transactions for the transactions view."""

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import load_snapshot
from src.domain.models.transactions import Transaction
from src.domain.policies.transaction_filters import (
    TransactionFilter,
    filter_transactions,
)
from src.infrastructure.logging.logger import get_app_logger


class ListTransactionsUseCase:
    """Return the transactions matching a filter, newest first."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        criteria: TransactionFilter | None = None,
    ) -> list[Transaction]:
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        selected = filter_transactions(
            snapshot.transactions,
            criteria or TransactionFilter(),
        )
        self._logger.info(
            f"Listed {len(selected)} of {len(snapshot.transactions)} "
            "transactions"
        )
        return selected


__all__ = ["ListTransactionsUseCase"]
