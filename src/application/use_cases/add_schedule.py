"""Use case to plan a future income."""

from datetime import datetime
from decimal import Decimal

from src.application.documents import schedule_to_document
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import require_document
from src.domain.constants import ACCOUNTS, SCHEDULES
from src.domain.errors import LedgerValidationError
from src.domain.models import Schedule
from src.infrastructure.logging.logger import get_app_logger


class AddScheduleUseCase:
    """Create a pending schedule targeting an account."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        description: str,
        amount: Decimal,
        due_date: datetime,
        account_id: str,
        now: datetime | None = None,
    ) -> str:
        """Store a pending schedule and return its id.

        Raises:
            LedgerValidationError: For a blank description or a
                non-positive amount.
            MissingReferenceError: When the target account is gone.
        """
        if not description.strip():
            raise LedgerValidationError("Description is required.")
        if amount <= 0:
            raise LedgerValidationError("Amount must be greater than zero.")
        schedule = Schedule(
            id="",
            description=description.strip(),
            amount=amount,
            due_date=due_date,
            account_id=account_id,
            is_completed=False,
            created_at=now or datetime.now(),
        )

        def work(tx: StoreTransactionPort) -> str:
            require_document(tx, ACCOUNTS, account_id)
            return tx.create(SCHEDULES, schedule_to_document(schedule))

        schedule_id = self._document_store.run_transaction(work)
        self._logger.info(
            f"Added schedule {schedule_id} due {due_date:%Y-%m-%d}"
        )
        return schedule_id


__all__ = ["AddScheduleUseCase"]
