"""Use case to compute the dashboard asset summary."""

from datetime import datetime

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import LedgerSnapshot, load_snapshot
from src.domain.models import AssetSummary
from src.domain.services.finance import compute_asset_summary
from src.infrastructure.logging.logger import get_app_logger


def summarize_snapshot(
    snapshot: LedgerSnapshot,
    now: datetime,
    logger=None,
) -> AssetSummary:
    """Compute the asset summary of an already loaded snapshot."""
    return compute_asset_summary(
        snapshot.accounts,
        snapshot.cards,
        snapshot.transactions,
        snapshot.currency_table,
        now=now,
        logger=logger,
    )


class GetAssetSummaryUseCase:
    """Compute cash, upcoming card payments and total assets in KRW."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, now: datetime | None = None) -> AssetSummary:
        """Return the asset summary as of ``now``.

        Args:
            now: Evaluation time of the billing windows; defaults to now.

        Returns:
            AssetSummary: Dashboard totals.
        """
        now = now or datetime.now()
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        summary = summarize_snapshot(snapshot, now, logger=self._logger)
        self._logger.info(
            f"Asset summary computed: cash={summary.total_cash_krw}, "
            f"upcoming={summary.upcoming_total_krw}, "
            f"total={summary.total_asset_krw}"
        )
        return summary


__all__ = ["GetAssetSummaryUseCase", "summarize_snapshot"]
