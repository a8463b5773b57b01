"""Domain model for currencies and their KRW rates."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Currency:
    """Currency with its rate expressed in KRW per unit."""

    symbol: str
    name: str
    rate: Decimal
    is_base: bool = False


__all__ = ["Currency"]
