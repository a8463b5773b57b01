"""Currency table and conversion into the base currency (KRW)."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from logging import Logger

from src.domain.constants import BASE_CURRENCY
from src.domain.models.currencies import Currency
from src.domain.services.normalization import normalize_symbol


@dataclass(frozen=True)
class CurrencyTable:
    """Mapping of currency symbol to KRW per unit.

    The base currency always converts at 1. Symbols missing from the table
    also convert at 1, so an incomplete table still yields face-value totals.
    """

    rates: dict[str, Decimal] = field(default_factory=dict)

    def rate_for(self, symbol: str | None) -> Decimal:
        """Return the KRW rate for a symbol, defaulting to 1."""
        normalized = normalize_symbol(symbol)
        if normalized is None or normalized == BASE_CURRENCY:
            return Decimal("1")
        return self.rates.get(normalized, Decimal("1"))

    def knows(self, symbol: str | None) -> bool:
        normalized = normalize_symbol(symbol)
        return normalized == BASE_CURRENCY or normalized in self.rates

    def to_krw(self, amount: Decimal, symbol: str | None) -> Decimal:
        """Convert an amount in ``symbol`` into KRW."""
        return amount * self.rate_for(symbol)


def build_currency_table(
    currencies: Iterable[Currency],
    logger: Logger | None = None,
) -> CurrencyTable:
    """Build the currency table from currency records.

    Args:
        currencies: Currency records from the store.
        logger: Optional logger used for warnings.

    Returns:
        CurrencyTable: Rates keyed by normalized symbol, base pinned to 1.
    """
    rates: dict[str, Decimal] = {BASE_CURRENCY: Decimal("1")}
    for currency in currencies:
        symbol = normalize_symbol(currency.symbol)
        if symbol is None or symbol == BASE_CURRENCY:
            continue
        if currency.rate <= 0:
            if logger is not None:
                logger.warning(
                    f"Ignoring non-positive rate for {symbol}: {currency.rate}"
                )
            continue
        rates[symbol] = currency.rate
    return CurrencyTable(rates=rates)


__all__ = ["CurrencyTable", "build_currency_table"]
