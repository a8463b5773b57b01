"""Use case to record a new transaction."""

from src.application.documents import transaction_to_document
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import (
    load_accounts,
    require_document,
)
from src.domain.constants import ACCOUNTS, CARDS, TRANSACTIONS
from src.domain.errors import LedgerValidationError
from src.domain.models.transactions import (
    CardExpenseTransaction,
    PaymentTransaction,
    Transaction,
    referenced_account_ids,
)
from src.domain.services.validation import validate_transaction
from src.infrastructure.logging.logger import get_app_logger


def check_references(
    tx: StoreTransactionPort,
    transaction: Transaction,
) -> None:
    """Ensure every account and card a transaction names still exists.

    Raises:
        MissingReferenceError: When a referenced document is gone.
    """
    for account_id in referenced_account_ids(transaction):
        require_document(tx, ACCOUNTS, account_id)
    if isinstance(transaction, CardExpenseTransaction):
        require_document(tx, CARDS, transaction.card_id)


class RecordTransactionUseCase:
    """Validate and store a new income, expense, card expense or transfer."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, transaction: Transaction) -> str:
        """Store the transaction and return its new id.

        Card expenses are always stored unpaid. Payments are only created
        by confirming a card payment.

        Args:
            transaction: Transaction to record; its ``id`` is ignored.

        Returns:
            str: Id of the stored transaction document.

        Raises:
            LedgerValidationError: When the transaction is malformed.
            MissingReferenceError: When a referenced account or card is gone.
        """
        if isinstance(transaction, PaymentTransaction):
            raise LedgerValidationError(
                "Payments are recorded by confirming a card payment."
            )

        def work(tx: StoreTransactionPort) -> str:
            validate_transaction(transaction, load_accounts(tx))
            check_references(tx, transaction)
            data = transaction_to_document(transaction)
            if isinstance(transaction, CardExpenseTransaction):
                data["isPaid"] = False
            return tx.create(TRANSACTIONS, data)

        transaction_id = self._document_store.run_transaction(work)
        self._logger.info(
            f"Recorded {transaction.kind} transaction {transaction_id} "
            f"amount={transaction.amount}"
        )
        return transaction_id


__all__ = ["RecordTransactionUseCase", "check_references"]
