"""Use case to delete a transaction."""

from src.application.documents import transaction_from_document
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import require_document
from src.domain.constants import TRANSACTIONS
from src.domain.errors import LedgerValidationError
from src.domain.models.transactions import PaymentTransaction
from src.infrastructure.logging.logger import get_app_logger


class DeleteTransactionUseCase:
    """Delete a transaction and undo the settlement a payment made."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, transaction_id: str) -> None:
        """Delete the transaction in one store transaction.

        Deleting a payment flags every card expense it settled as unpaid
        again, so the charges reappear in their card's due amount.

        Args:
            transaction_id: Id of the transaction document.

        Raises:
            MissingReferenceError: When the transaction does not exist.
        """

        def work(tx: StoreTransactionPort) -> int:
            document = require_document(tx, TRANSACTIONS, transaction_id)
            try:
                transaction = transaction_from_document(document)
            except LedgerValidationError as exc:
                self._logger.warning(
                    f"Deleting unreadable transaction {transaction_id}: {exc}"
                )
                transaction = None
            reopened = 0
            if isinstance(transaction, PaymentTransaction):
                for expense_id in transaction.paid_card_transaction_ids:
                    if tx.get(TRANSACTIONS, expense_id) is None:
                        self._logger.warning(
                            f"Settled card expense {expense_id} of payment "
                            f"{transaction_id} no longer exists"
                        )
                        continue
                    tx.update(TRANSACTIONS, expense_id, {"isPaid": False})
                    reopened += 1
            tx.delete(TRANSACTIONS, transaction_id)
            return reopened

        reopened = self._document_store.run_transaction(work)
        self._logger.info(
            f"Deleted transaction {transaction_id}; "
            f"reopened {reopened} card expenses"
        )


__all__ = ["DeleteTransactionUseCase"]
