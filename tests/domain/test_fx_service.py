"""Tests for the currency table."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import Currency
from src.domain.services.fx import CurrencyTable, build_currency_table


def test_base_currency_always_converts_at_one():
    table = build_currency_table(
        [Currency(symbol="KRW", name="Won", rate=Decimal("5"), is_base=True)]
    )

    assert table.rate_for("KRW") == Decimal("1")
    assert table.to_krw(Decimal("250"), "krw") == Decimal("250")


def test_symbols_are_normalized():
    table = build_currency_table(
        [Currency(symbol=" usd ", name="Dollar", rate=Decimal("1300"))]
    )

    assert table.knows("USD")
    assert table.to_krw(Decimal("100"), "Usd") == Decimal("130000")


def test_unknown_symbol_falls_back_to_one():
    table = CurrencyTable()

    assert not table.knows("EUR")
    assert table.rate_for("EUR") == Decimal("1")
    assert table.rate_for(None) == Decimal("1")


def test_non_positive_rates_are_skipped_with_warning():
    logger = MagicMock()

    table = build_currency_table(
        [Currency(symbol="JPY", name="Yen", rate=Decimal("0"))],
        logger=logger,
    )

    assert not table.knows("JPY")
    logger.warning.assert_called_once()
