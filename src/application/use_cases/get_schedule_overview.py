"""Use case to list expected future cash movements."""

from dataclasses import dataclass, field
from datetime import datetime

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import load_snapshot
from src.domain.models import Schedule, UpcomingPayment
from src.domain.services.finance import compute_upcoming_payments
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ScheduleOverview:
    """Pending incomes and upcoming card payments.

    Attributes:
        pending: Schedules not yet completed, earliest due first.
        upcoming_payments: Cards with unpaid charges in their open window.
    """

    pending: list[Schedule] = field(default_factory=list)
    upcoming_payments: list[UpcomingPayment] = field(default_factory=list)


class GetScheduleOverviewUseCase:
    """Collect pending schedules and upcoming card payments."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, now: datetime | None = None) -> ScheduleOverview:
        now = now or datetime.now()
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        pending = [
            schedule
            for schedule in snapshot.schedules
            if not schedule.is_completed
        ]
        upcoming = compute_upcoming_payments(
            snapshot.cards, snapshot.transactions, now
        )
        return ScheduleOverview(pending=pending, upcoming_payments=upcoming)


__all__ = ["GetScheduleOverviewUseCase", "ScheduleOverview"]
