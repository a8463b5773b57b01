"""Use case to build the spending and cashflow reports."""

from dataclasses import dataclass, field
from datetime import datetime

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import load_snapshot
from src.domain.models import CategoryAmount, MonthlyCashflow
from src.domain.services.reports import (
    compute_category_totals,
    compute_monthly_cashflow,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerReport:
    """Reports over a date range, amounts in KRW.

    Attributes:
        categories: Spending per category, largest first.
        cashflow: Income and spending per month, oldest first.
    """

    categories: list[CategoryAmount] = field(default_factory=list)
    cashflow: list[MonthlyCashflow] = field(default_factory=list)


class GetReportsUseCase:
    """Aggregate spending per category and cashflow per month."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> LedgerReport:
        """Return the reports for the optional inclusive range.

        Args:
            start: Optional lower bound on transaction timestamps.
            end: Optional upper bound on transaction timestamps.

        Returns:
            LedgerReport: Category totals and monthly cashflow.
        """
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        categories = compute_category_totals(
            snapshot.transactions,
            snapshot.accounts_by_id,
            snapshot.currency_table,
            start=start,
            end=end,
        )
        cashflow = compute_monthly_cashflow(
            snapshot.transactions,
            snapshot.accounts_by_id,
            snapshot.currency_table,
            start=start,
            end=end,
        )
        self._logger.info(
            f"Reports computed: {len(categories)} categories, "
            f"{len(cashflow)} months"
        )
        return LedgerReport(categories=categories, cashflow=cashflow)


__all__ = ["GetReportsUseCase", "LedgerReport"]
