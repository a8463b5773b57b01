"""Use case to compute account balances for the accounts view."""

from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import load_snapshot
from src.domain.models import AccountBalance
from src.domain.services.ledger import compute_all_balances
from src.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Derive every account balance from the transaction history."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self) -> list[AccountBalance]:
        """Return account balances with their KRW totals.

        Returns:
            list[AccountBalance]: Balances sorted by account name.
        """
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        balances = compute_all_balances(
            snapshot.accounts,
            snapshot.transactions,
            snapshot.currency_table,
        )
        balances = sorted(
            balances,
            key=lambda item: (item.name.lower(), item.account_id),
        )
        self._logger.info(f"Computed {len(balances)} account balances")
        return balances


__all__ = ["GetAccountBalancesUseCase", "AccountBalance"]
