"""Domain models for accounts and credit cards."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Money container whose balance is derived from the ledger.

    Attributes:
        id: Document id.
        name: Display name.
        category: One of ``ACCOUNT_CATEGORIES``.
        currency: Currency symbol the account is held in.
        initial_balance: Opening balance in ``currency``.
    """

    id: str
    name: str
    category: str
    currency: str
    initial_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class Card:
    """Credit card settled monthly from a linked KRW account.

    Attributes:
        id: Document id.
        name: Display name.
        payment_day: Day of month the bill is paid (1-31).
        usage_start_day: First day of the usage window (1-31).
        usage_end_day: Last day of the usage window, one month later (1-31).
        linked_account_id: Settlement account debited on payment.
    """

    id: str
    name: str
    payment_day: int
    usage_start_day: int
    usage_end_day: int
    linked_account_id: str | None = None


__all__ = ["Account", "Card"]
