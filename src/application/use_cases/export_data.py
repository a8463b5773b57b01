"""Use case to export the ledger as JSON or CSV.

The JSON export holds every core collection with document ids, so
references between documents survive a re-import. The CSV export is a
flat transaction listing meant for spreadsheets.
"""

import csv
import io
import json
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from src.application.documents import (
    account_to_document,
    card_to_document,
    currency_to_document,
    schedule_to_document,
    transaction_to_document,
)
from src.application.ports.document_store import DocumentStorePort
from src.application.snapshots import LedgerSnapshot, load_snapshot
from src.domain.constants import (
    ACCOUNTS,
    BASE_CURRENCY,
    CARDS,
    CURRENCIES,
    SCHEDULES,
    TRANSACTIONS,
)
from src.domain.models.transactions import (
    CardExpenseTransaction,
    PaymentTransaction,
    Transaction,
    TransferTransaction,
)
from src.infrastructure.logging.logger import get_app_logger

EXPORT_VERSION = 1

CSV_COLUMNS = (
    "id",
    "date",
    "type",
    "description",
    "amount",
    "currency",
    "category",
    "memo",
    "account",
    "accountId",
    "toAccount",
    "toAccountId",
    "card",
    "cardId",
    "isPaid",
    "originalAmount",
    "originalCurrency",
)


def to_plain(value: Any) -> Any:
    """Convert document values into JSON-compatible values.

    Timestamps become ISO-8601 strings and decimals become numbers.
    """
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def _record(doc_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
    return {"id": doc_id, **to_plain(data)}


def _csv_amount(value: Decimal | None) -> str:
    return "" if value is None else format(value, "f")


class ExportDataUseCase:
    """Serialize the user's collections."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def to_payload(self, now: datetime | None = None) -> dict[str, Any]:
        """Return the JSON-ready export of every core collection.

        Args:
            now: Export timestamp; defaults to now.

        Returns:
            dict[str, Any]: Export document with one list per collection.
        """
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        payload = {
            "version": EXPORT_VERSION,
            "exportedAt": (now or datetime.now()).isoformat(),
            ACCOUNTS: sorted(
                (
                    _record(account.id, account_to_document(account))
                    for account in snapshot.accounts
                ),
                key=lambda item: item["id"],
            ),
            CARDS: sorted(
                (
                    _record(card.id, card_to_document(card))
                    for card in snapshot.cards
                ),
                key=lambda item: item["id"],
            ),
            TRANSACTIONS: [
                _record(transaction.id, transaction_to_document(transaction))
                for transaction in snapshot.transactions
            ],
            SCHEDULES: [
                _record(schedule.id, schedule_to_document(schedule))
                for schedule in snapshot.schedules
            ],
            CURRENCIES: sorted(
                (
                    _record(currency.symbol, currency_to_document(currency))
                    for currency in snapshot.currencies
                ),
                key=lambda item: item["id"],
            ),
        }
        self._logger.info(
            f"Exported {len(payload[ACCOUNTS])} accounts, "
            f"{len(payload[TRANSACTIONS])} transactions"
        )
        return payload

    def to_json(self, now: datetime | None = None) -> str:
        """Return the export as an indented JSON document."""
        return json.dumps(
            self.to_payload(now=now),
            ensure_ascii=False,
            indent=2,
        )

    def to_csv(self) -> str:
        """Return every transaction as one CSV row, newest first."""
        snapshot = load_snapshot(self._document_store, logger=self._logger)
        buffer = io.StringIO()
        writer = csv.DictWriter(
            buffer,
            fieldnames=CSV_COLUMNS,
            lineterminator="\n",
        )
        writer.writeheader()
        for transaction in snapshot.transactions:
            writer.writerow(self._csv_row(transaction, snapshot))
        self._logger.info(
            f"Exported {len(snapshot.transactions)} transactions to CSV"
        )
        return buffer.getvalue()

    @staticmethod
    def _csv_row(
        transaction: Transaction,
        snapshot: LedgerSnapshot,
    ) -> dict[str, str]:
        accounts = snapshot.accounts_by_id
        cards = snapshot.cards_by_id
        account_id = getattr(transaction, "account_id", "")
        account = accounts.get(account_id)
        to_account_id = ""
        card_id = ""
        is_paid = ""
        if isinstance(transaction, TransferTransaction):
            to_account_id = transaction.to_account_id
        if isinstance(
            transaction, (CardExpenseTransaction, PaymentTransaction)
        ):
            card_id = transaction.card_id
        if isinstance(transaction, CardExpenseTransaction):
            is_paid = "true" if transaction.is_paid else "false"
            currency = BASE_CURRENCY
        else:
            currency = account.currency if account else ""
        to_account = accounts.get(to_account_id)
        card = cards.get(card_id)
        original = transaction.original
        return {
            "id": transaction.id or "",
            "date": transaction.occurred_at.isoformat(),
            "type": transaction.kind,
            "description": transaction.description,
            "amount": _csv_amount(transaction.amount),
            "currency": currency,
            "category": transaction.category or "",
            "memo": transaction.memo or "",
            "account": account.name if account else "",
            "accountId": account_id,
            "toAccount": to_account.name if to_account else "",
            "toAccountId": to_account_id,
            "card": card.name if card else "",
            "cardId": card_id,
            "isPaid": is_paid,
            "originalAmount": _csv_amount(
                original.amount if original else None
            ),
            "originalCurrency": original.currency if original else "",
        }


__all__ = [
    "ExportDataUseCase",
    "EXPORT_VERSION",
    "CSV_COLUMNS",
    "to_plain",
]
