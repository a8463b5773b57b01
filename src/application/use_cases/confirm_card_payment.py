"""Use case to settle the open billing window of a card."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.application.documents import (
    card_from_document,
    transaction_from_document,
    transaction_to_document,
)
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import require_document
from src.domain.constants import ACCOUNTS, CARDS, TRANSACTIONS
from src.domain.errors import LedgerValidationError, MissingReferenceError
from src.domain.models import BillingWindow
from src.domain.models.transactions import PaymentTransaction
from src.domain.services.billing import compute_card_due
from src.infrastructure.logging.logger import get_app_logger

CARD_PAYMENT_CATEGORY = "Card payment"


@dataclass(frozen=True)
class CardPaymentResult:
    """Outcome of a confirmed card payment.

    Attributes:
        payment_id: Id of the created payment transaction.
        amount: Amount debited from the settlement account.
        window: Billing window that was settled.
        settled_ids: Ids of the card expenses flagged as paid.
    """

    payment_id: str
    amount: Decimal
    window: BillingWindow
    settled_ids: tuple[str, ...]


class ConfirmCardPaymentUseCase:
    """Create a payment for a card's open window and settle its charges."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        card_id: str,
        now: datetime | None = None,
    ) -> CardPaymentResult:
        """Settle every unpaid charge in the card's open window.

        The payment creation and the ``isPaid`` flags are written in a
        single store transaction: either all of them commit or none does.

        Args:
            card_id: Card to settle.
            now: Evaluation time of the billing window; defaults to now.

        Returns:
            CardPaymentResult: The payment and the settled charges.

        Raises:
            MissingReferenceError: When the card, its settlement account or
                a charge has vanished.
            LedgerValidationError: When nothing is due.
        """
        now = now or datetime.now()

        def work(tx: StoreTransactionPort) -> CardPaymentResult:
            card = card_from_document(require_document(tx, CARDS, card_id))
            if not card.linked_account_id:
                raise MissingReferenceError(
                    f"Card {card.name} has no settlement account."
                )
            require_document(tx, ACCOUNTS, card.linked_account_id)

            transactions = []
            for document in tx.list(TRANSACTIONS):
                try:
                    transactions.append(transaction_from_document(document))
                except LedgerValidationError:
                    continue
            window, amount, expenses = compute_card_due(
                card, transactions, now
            )
            if not expenses or amount <= 0:
                raise LedgerValidationError(
                    f"Nothing is due for card {card.name}."
                )

            settled_ids = tuple(expense.id for expense in expenses)
            for expense_id in settled_ids:
                require_document(tx, TRANSACTIONS, expense_id)

            payment = PaymentTransaction(
                occurred_at=now,
                description=f"{card.name} card payment",
                amount=amount,
                category=CARD_PAYMENT_CATEGORY,
                account_id=card.linked_account_id,
                card_id=card.id,
                paid_card_transaction_ids=settled_ids,
            )
            payment_id = tx.create(
                TRANSACTIONS, transaction_to_document(payment)
            )
            for expense_id in settled_ids:
                tx.update(TRANSACTIONS, expense_id, {"isPaid": True})
            return CardPaymentResult(
                payment_id=payment_id,
                amount=amount,
                window=window,
                settled_ids=settled_ids,
            )

        result = self._document_store.run_transaction(work)
        self._logger.info(
            f"Confirmed payment {result.payment_id} for card {card_id}: "
            f"{result.amount} KRW, {len(result.settled_ids)} charges"
        )
        return result


__all__ = [
    "ConfirmCardPaymentUseCase",
    "CardPaymentResult",
    "CARD_PAYMENT_CATEGORY",
]
