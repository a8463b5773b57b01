"""Rules for deleting accounts.

Transactions are never cascade-deleted with their account. They stay in
the history as orphans and stop contributing to any balance.
"""

from collections.abc import Iterable

from src.domain.errors import LedgerValidationError
from src.domain.models import Card


def ensure_account_deletable(account_id: str, cards: Iterable[Card]) -> None:
    """Refuse to delete an account that still settles a card.

    Args:
        account_id: Account about to be deleted.
        cards: Current cards of the user.

    Raises:
        LedgerValidationError: When a card is linked to the account.
    """
    linked = sorted(
        card.name for card in cards if card.linked_account_id == account_id
    )
    if linked:
        raise LedgerValidationError(
            "Account is the settlement account of: " + ", ".join(linked)
        )


__all__ = ["ensure_account_deletable"]
