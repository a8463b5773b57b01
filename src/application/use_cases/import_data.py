"""Use case to restore or extend the ledger from exported files.

A JSON import replaces every core collection in one store transaction. A
CSV import only appends transactions and never touches accounts.
"""

import csv
import io
import json
from dataclasses import dataclass, field
from typing import Any

from src.application.documents import (
    account_from_document,
    account_to_document,
    card_from_document,
    card_to_document,
    currency_from_document,
    currency_to_document,
    schedule_from_document,
    schedule_to_document,
    transaction_from_document,
    transaction_to_document,
)
from src.application.ports.document_store import (
    Document,
    DocumentStorePort,
    StoreTransactionPort,
)
from src.application.use_cases.manage_currencies import BASE_CURRENCY_RECORD
from src.application.use_cases.references import load_accounts, load_cards
from src.domain.constants import (
    ACCOUNTS,
    BASE_CURRENCY,
    CARD_EXPENSE,
    CARDS,
    CORE_COLLECTIONS,
    CURRENCIES,
    PAYMENT,
    SCHEDULES,
    TRANSACTIONS,
    TRANSFER,
)
from src.domain.errors import LedgerValidationError
from src.domain.services.validation import validate_transaction
from src.infrastructure.logging.logger import get_app_logger

_CODECS = {
    ACCOUNTS: (account_from_document, account_to_document),
    CARDS: (card_from_document, card_to_document),
    TRANSACTIONS: (transaction_from_document, transaction_to_document),
    SCHEDULES: (schedule_from_document, schedule_to_document),
    CURRENCIES: (currency_from_document, currency_to_document),
}


@dataclass(frozen=True)
class ImportResult:
    """Summary of an import run.

    Attributes:
        counts: Documents written per collection.
        skipped: Human-readable reasons for rows left out.
    """

    counts: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


class ImportDataUseCase:
    """Write exported data back into the store."""

    def __init__(self, document_store: DocumentStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            document_store: Port to the user's collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_store = document_store
        self._logger = logger or get_app_logger()

    def from_json(self, raw: str | bytes) -> ImportResult:
        """Replace every core collection with the content of a JSON export.

        All records are parsed and validated before the store transaction
        starts; the deletion of existing documents and the writes of the new
        ones then commit together.

        Args:
            raw: JSON document produced by ``ExportDataUseCase.to_json``.

        Returns:
            ImportResult: Documents written per collection.

        Raises:
            LedgerValidationError: When the file or any record is invalid.
        """
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise LedgerValidationError(f"Invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise LedgerValidationError("Import file must be a JSON object.")

        prepared = {
            collection: self._prepare_collection(
                collection, payload.get(collection)
            )
            for collection in CORE_COLLECTIONS
        }
        symbols = {doc_id for doc_id, _ in prepared[CURRENCIES]}
        if BASE_CURRENCY not in symbols:
            prepared[CURRENCIES].append(
                (BASE_CURRENCY, currency_to_document(BASE_CURRENCY_RECORD))
            )

        def work(tx: StoreTransactionPort) -> dict[str, int]:
            for collection in CORE_COLLECTIONS:
                for document in tx.list(collection):
                    tx.delete(collection, document.id)
            counts = {}
            for collection, records in prepared.items():
                for doc_id, data in records:
                    tx.set(collection, doc_id, data)
                counts[collection] = len(records)
            return counts

        counts = self._document_store.run_transaction(work)
        self._logger.info(f"Imported JSON backup: {counts}")
        return ImportResult(counts=counts)

    def from_csv(self, raw: str) -> ImportResult:
        """Append the transactions listed in a CSV export.

        Accounts and cards are resolved by ``accountId``/``cardId`` first and
        by name otherwise. Rows are validated together; a single invalid row
        rejects the whole file. Payment rows are skipped because settlements
        are only created by confirming a card payment.

        Args:
            raw: CSV text with at least date, type, description and amount.

        Returns:
            ImportResult: Appended transaction count and skipped rows.

        Raises:
            LedgerValidationError: When a row is invalid or references an
                unknown account or card.
        """
        reader = csv.DictReader(io.StringIO(raw.lstrip("\ufeff")))
        rows = list(reader)

        def work(tx: StoreTransactionPort) -> ImportResult:
            accounts = load_accounts(tx)
            cards = load_cards(tx)
            account_ids = _Resolver(
                {a.id: a.name for a in accounts.values()}
            )
            card_ids = _Resolver({c.id: c.name for c in cards})
            prepared = []
            skipped = []
            errors = []
            for line, row in enumerate(rows, start=2):
                if (row.get("type") or "").strip() == PAYMENT:
                    skipped.append(
                        f"line {line}: payment rows are not imported"
                    )
                    continue
                try:
                    data = _row_to_document(row, account_ids, card_ids)
                    transaction = transaction_from_document(
                        Document(id="", data=data)
                    )
                    validate_transaction(transaction, accounts)
                except LedgerValidationError as exc:
                    errors.append(f"line {line}: {exc}")
                    continue
                data = transaction_to_document(transaction)
                if transaction.kind == CARD_EXPENSE:
                    data["isPaid"] = False
                prepared.append(data)
            if errors:
                raise LedgerValidationError(
                    "CSV import rejected: " + "; ".join(errors)
                )
            for data in prepared:
                tx.create(TRANSACTIONS, data)
            return ImportResult(
                counts={TRANSACTIONS: len(prepared)},
                skipped=skipped,
            )

        result = self._document_store.run_transaction(work)
        self._logger.info(
            f"Imported {result.counts[TRANSACTIONS]} transactions from CSV; "
            f"skipped {len(result.skipped)} rows"
        )
        return result

    def _prepare_collection(
        self,
        collection: str,
        records: Any,
    ) -> list[tuple[str, dict[str, Any]]]:
        if records is None:
            return []
        if not isinstance(records, list):
            raise LedgerValidationError(f"'{collection}' must be a list.")
        from_document, to_document = _CODECS[collection]
        prepared = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise LedgerValidationError(
                    f"{collection}[{index}] must be an object."
                )
            data = {
                key: value for key, value in record.items() if key != "id"
            }
            doc_id = str(record.get("id") or "")
            if collection == CURRENCIES:
                doc_id = str(record.get("symbol") or doc_id).strip().upper()
            if not doc_id:
                raise LedgerValidationError(
                    f"{collection}[{index}] has no id."
                )
            try:
                model = from_document(Document(id=doc_id, data=data))
            except LedgerValidationError as exc:
                raise LedgerValidationError(
                    f"{collection}[{index}]: {exc}"
                ) from exc
            prepared.append((doc_id, to_document(model)))
        return prepared


class _Resolver:
    """Resolve a document id from an id or a display name."""

    def __init__(self, names_by_id: dict[str, str]) -> None:
        self._names_by_id = names_by_id
        self._ids_by_name = {
            name.strip().lower(): doc_id
            for doc_id, name in names_by_id.items()
        }

    def resolve(self, doc_id: str | None, name: str | None) -> str | None:
        doc_id = (doc_id or "").strip()
        if doc_id and doc_id in self._names_by_id:
            return doc_id
        name = (name or "").strip().lower()
        if name:
            return self._ids_by_name.get(name)
        return None


def _row_to_document(
    row: dict[str, str],
    accounts: _Resolver,
    cards: _Resolver,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "type": (row.get("type") or "").strip(),
        "date": row.get("date"),
        "description": row.get("description") or "",
        "amount": row.get("amount"),
        "category": row.get("category"),
        "memo": row.get("memo"),
        "originalAmount": row.get("originalAmount") or None,
        "originalCurrency": row.get("originalCurrency") or None,
    }
    if data["type"] == CARD_EXPENSE:
        card_id = cards.resolve(row.get("cardId"), row.get("card"))
        if card_id is None:
            raise LedgerValidationError(
                f"Unknown card: {row.get('cardId') or row.get('card')!r}"
            )
        data["cardId"] = card_id
        return data
    account_id = accounts.resolve(row.get("accountId"), row.get("account"))
    if account_id is None:
        raise LedgerValidationError(
            "Unknown account: "
            f"{row.get('accountId') or row.get('account')!r}"
        )
    data["accountId"] = account_id
    if data["type"] == TRANSFER:
        to_account_id = accounts.resolve(
            row.get("toAccountId"), row.get("toAccount")
        )
        if to_account_id is None:
            raise LedgerValidationError(
                "Unknown destination account: "
                f"{row.get('toAccountId') or row.get('toAccount')!r}"
            )
        data["toAccountId"] = to_account_id
    return data


__all__ = ["ImportDataUseCase", "ImportResult"]
