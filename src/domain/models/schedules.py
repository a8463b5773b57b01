"""Domain model for scheduled future incomes."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Schedule:
    """Pending income that becomes a transaction once completed."""

    id: str
    description: str
    amount: Decimal
    due_date: datetime
    account_id: str
    is_completed: bool = False
    created_at: datetime | None = None


__all__ = ["Schedule"]
