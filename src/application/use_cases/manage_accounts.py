"""Use cases to create, update and delete accounts and cards."""

from src.application.documents import account_to_document, card_to_document
from src.application.ports.document_store import (
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.references import (
    load_cards,
    require_document,
)
from src.domain.constants import ACCOUNTS, CARDS
from src.domain.models import Account, Card
from src.domain.policies.account_deletion import ensure_account_deletable
from src.domain.services.normalization import normalize_symbol
from src.domain.services.validation import validate_account, validate_card
from src.infrastructure.logging.logger import get_app_logger


class SaveAccountUseCase:
    """Create an account, or overwrite it when its id is already stored."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, account: Account) -> str:
        """Store the account and return its id.

        An empty ``id`` creates a new document.

        Raises:
            LedgerValidationError: For a blank name or unknown category.
            MissingReferenceError: When updating an account that is gone.
        """
        validate_account(account)
        data = account_to_document(account)
        data["currency"] = normalize_symbol(account.currency)

        def work(tx: StoreTransactionPort) -> str:
            if not account.id:
                return tx.create(ACCOUNTS, data)
            require_document(tx, ACCOUNTS, account.id)
            tx.set(ACCOUNTS, account.id, data)
            return account.id

        account_id = self._document_store.run_transaction(work)
        self._logger.info(f"Saved account {account_id} ({account.name})")
        return account_id


class DeleteAccountUseCase:
    """Delete an account, leaving its transactions as orphans."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, account_id: str) -> None:
        """Delete the account document.

        Raises:
            LedgerValidationError: While a card settles through the account.
            MissingReferenceError: When the account does not exist.
        """

        def work(tx: StoreTransactionPort) -> None:
            require_document(tx, ACCOUNTS, account_id)
            ensure_account_deletable(account_id, load_cards(tx))
            tx.delete(ACCOUNTS, account_id)

        self._document_store.run_transaction(work)
        self._logger.info(f"Deleted account {account_id}")


class SaveCardUseCase:
    """Create a card, or overwrite it when its id is already stored."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, card: Card) -> str:
        """Store the card and return its id.

        Raises:
            LedgerValidationError: When a cycle day is outside 1-31.
            MissingReferenceError: When the settlement account is gone.
        """
        validate_card(card)
        data = card_to_document(card)

        def work(tx: StoreTransactionPort) -> str:
            if card.linked_account_id:
                require_document(tx, ACCOUNTS, card.linked_account_id)
            if not card.id:
                return tx.create(CARDS, data)
            require_document(tx, CARDS, card.id)
            tx.set(CARDS, card.id, data)
            return card.id

        card_id = self._document_store.run_transaction(work)
        self._logger.info(f"Saved card {card_id} ({card.name})")
        return card_id


class DeleteCardUseCase:
    """Delete a card; its card expenses stay in the history."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def execute(self, card_id: str) -> None:
        def work(tx: StoreTransactionPort) -> None:
            require_document(tx, CARDS, card_id)
            tx.delete(CARDS, card_id)

        self._document_store.run_transaction(work)
        self._logger.info(f"Deleted card {card_id}")


__all__ = [
    "SaveAccountUseCase",
    "DeleteAccountUseCase",
    "SaveCardUseCase",
    "DeleteCardUseCase",
]
