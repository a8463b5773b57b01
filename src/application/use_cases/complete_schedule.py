"""Use case to turn a pending schedule into a recorded income."""

from datetime import datetime

from src.application.documents import (
    schedule_from_document,
    transaction_to_document,
)
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import require_document
from src.domain.constants import ACCOUNTS, SCHEDULES, TRANSACTIONS
from src.domain.errors import LedgerValidationError
from src.domain.models.transactions import IncomeTransaction
from src.infrastructure.logging.logger import get_app_logger

SCHEDULED_INCOME_CATEGORY = "Scheduled income"


class CompleteScheduleUseCase:
    """Record the income of a schedule and mark the schedule completed."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        schedule_id: str,
        now: datetime | None = None,
    ) -> str:
        """Complete the schedule and return the new income transaction id.

        Args:
            schedule_id: Pending schedule to complete.
            now: Timestamp of the income; defaults to now.

        Raises:
            LedgerValidationError: When the schedule is already completed.
            MissingReferenceError: When the schedule or its account is gone.
        """
        now = now or datetime.now()

        def work(tx: StoreTransactionPort) -> str:
            schedule = schedule_from_document(
                require_document(tx, SCHEDULES, schedule_id)
            )
            if schedule.is_completed:
                raise LedgerValidationError(
                    f"Schedule '{schedule.description}' is already completed."
                )
            require_document(tx, ACCOUNTS, schedule.account_id)
            income = IncomeTransaction(
                occurred_at=now,
                description=schedule.description or "Scheduled income",
                amount=schedule.amount,
                category=SCHEDULED_INCOME_CATEGORY,
                account_id=schedule.account_id,
            )
            transaction_id = tx.create(
                TRANSACTIONS, transaction_to_document(income)
            )
            tx.update(SCHEDULES, schedule_id, {"isCompleted": True})
            return transaction_id

        transaction_id = self._document_store.run_transaction(work)
        self._logger.info(
            f"Completed schedule {schedule_id} as income {transaction_id}"
        )
        return transaction_id


__all__ = ["CompleteScheduleUseCase", "SCHEDULED_INCOME_CATEGORY"]
