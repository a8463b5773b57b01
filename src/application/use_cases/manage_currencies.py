"""Use cases to maintain the currency table.

Currency documents are keyed by their upper-cased symbol. The base
currency (KRW) is managed by the application only: it is created when
missing and can be neither edited nor deleted.
"""

from decimal import Decimal

from src.application.documents import currency_to_document
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import require_document
from src.domain.constants import (
    BASE_CURRENCY,
    BASE_CURRENCY_NAME,
    CURRENCIES,
)
from src.domain.errors import LedgerValidationError
from src.domain.models import Currency
from src.domain.services.normalization import normalize_symbol
from src.domain.services.validation import validate_currency
from src.infrastructure.logging.logger import get_app_logger

BASE_CURRENCY_RECORD = Currency(
    symbol=BASE_CURRENCY,
    name=BASE_CURRENCY_NAME,
    rate=Decimal("1"),
    is_base=True,
)


class SaveCurrencyUseCase:
    """Insert or update a foreign currency and its KRW rate."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, currency: Currency) -> str:
        """Upsert the currency and return its symbol.

        Raises:
            LedgerValidationError: For a blank symbol, the base currency or
                a non-positive rate.
        """
        symbol = normalize_symbol(currency.symbol)
        if symbol is None:
            raise LedgerValidationError("Currency symbol is required.")
        currency = Currency(
            symbol=symbol,
            name=currency.name.strip() or symbol,
            rate=currency.rate,
            is_base=currency.is_base,
        )
        validate_currency(currency)

        def work(tx: StoreTransactionPort) -> str:
            tx.set(CURRENCIES, symbol, currency_to_document(currency))
            return symbol

        self._document_store.run_transaction(work)
        self._logger.info(f"Saved currency {symbol} rate={currency.rate}")
        return symbol


class DeleteCurrencyUseCase:
    """Delete a foreign currency.

    Balances held in the deleted currency keep converting at rate 1.
    """

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, symbol: str) -> None:
        normalized = normalize_symbol(symbol)
        if normalized == BASE_CURRENCY:
            raise LedgerValidationError(
                "The base currency (KRW) cannot be deleted."
            )

        def work(tx: StoreTransactionPort) -> None:
            require_document(tx, CURRENCIES, normalized)
            tx.delete(CURRENCIES, normalized)

        self._document_store.run_transaction(work)
        self._logger.info(f"Deleted currency {normalized}")


class EnsureBaseCurrencyUseCase:
    """Create the base currency document when it is missing."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self) -> bool:
        """Return True when the base currency had to be created."""

        def work(tx: StoreTransactionPort) -> bool:
            if tx.get(CURRENCIES, BASE_CURRENCY) is not None:
                return False
            tx.set(
                CURRENCIES,
                BASE_CURRENCY,
                currency_to_document(BASE_CURRENCY_RECORD),
            )
            return True

        created = self._document_store.run_transaction(work)
        if created:
            self._logger.info(f"Created base currency {BASE_CURRENCY}")
        return created


__all__ = [
    "BASE_CURRENCY_RECORD",
    "SaveCurrencyUseCase",
    "DeleteCurrencyUseCase",
    "EnsureBaseCurrencyUseCase",
]
