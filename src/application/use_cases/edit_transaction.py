"""Use case to replace an existing transaction."""

from src.application.documents import (
    transaction_from_document,
    transaction_to_document,
)
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.record_transaction import check_references
from src.application.use_cases.references import (
    load_accounts,
    require_document,
)
from src.domain.constants import TRANSACTIONS
from src.domain.errors import LedgerValidationError
from src.domain.models.transactions import (
    CardExpenseTransaction,
    PaymentTransaction,
    Transaction,
)
from src.domain.services.validation import validate_transaction
from src.infrastructure.logging.logger import get_app_logger


def _changes_settled_terms(
    current: CardExpenseTransaction,
    edited: CardExpenseTransaction,
) -> bool:
    # The payment records these; only labels may change once paid.
    return (
        current.amount != edited.amount
        or current.card_id != edited.card_id
        or current.occurred_at != edited.occurred_at
        or current.original != edited.original
    )


class EditTransactionUseCase:
    """Replace a stored transaction with an edited version.

    Balances are derived from the ledger, so replacing the document both
    reverses the old effect and applies the new one.
    """

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, transaction: Transaction) -> None:
        """Overwrite the stored transaction with the same id.

        Args:
            transaction: Edited transaction; ``id`` selects the document.

        Raises:
            LedgerValidationError: When the edit is malformed, touches a
                payment, or changes the kind of a settled card expense.
            MissingReferenceError: When the transaction or a referenced
                account or card is gone.
        """
        if isinstance(transaction, PaymentTransaction):
            raise LedgerValidationError(
                "Payments cannot be edited; delete and confirm again."
            )

        def work(tx: StoreTransactionPort) -> None:
            current = transaction_from_document(
                require_document(tx, TRANSACTIONS, transaction.id)
            )
            if isinstance(current, PaymentTransaction):
                raise LedgerValidationError(
                    "Payments cannot be edited; delete and confirm again."
                )
            settled = (
                isinstance(current, CardExpenseTransaction)
                and current.is_paid
            )
            if settled and not isinstance(
                transaction, CardExpenseTransaction
            ):
                raise LedgerValidationError(
                    "A settled card expense cannot change its type."
                )
            if settled and _changes_settled_terms(current, transaction):
                raise LedgerValidationError(
                    "A settled card expense cannot change its amount, "
                    "card or date; delete the payment first."
                )
            validate_transaction(transaction, load_accounts(tx))
            check_references(tx, transaction)
            data = transaction_to_document(transaction)
            if isinstance(transaction, CardExpenseTransaction):
                data["isPaid"] = settled
            tx.set(TRANSACTIONS, transaction.id, data)

        self._document_store.run_transaction(work)
        self._logger.info(
            f"Edited transaction {transaction.id} ({transaction.kind})"
        )


__all__ = ["EditTransactionUseCase"]
