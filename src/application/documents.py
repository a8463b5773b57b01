"""Mapping between store documents and domain models.

Documents keep camelCase field names shared by every client of the store, so
exported files stay interchangeable with it.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    BASE_CURRENCY,
    CARD_EXPENSE,
    PAYMENT,
    TRANSFER,
)
from src.domain.errors import LedgerValidationError
from src.domain.models import Account, Card, Currency, Schedule
from src.domain.models.transactions import (
    TRANSACTION_TYPES,
    CardExpenseTransaction,
    ForeignAmount,
    PaymentTransaction,
    Transaction,
    TransferTransaction,
)
from src.domain.services.normalization import normalize_label, normalize_symbol
from src.application.ports.document_store import Document
from src.utils.decimal_utils import coerce_decimal, optional_decimal


def parse_timestamp(value: Any) -> datetime:
    """Read a stored timestamp (datetime, date or ISO-8601 string).

    Timezone-aware values are converted to naive local time, the convention
    used for every timestamp in the ledger.

    Raises:
        LedgerValidationError: When the value is not a timestamp.
    """
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _to_local_naive(datetime.fromisoformat(text))
        except ValueError as exc:
            raise LedgerValidationError(
                f"Invalid timestamp: {value!r}"
            ) from exc
    raise LedgerValidationError(f"Invalid timestamp: {value!r}")


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _required(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise LedgerValidationError(f"Missing field '{key}'")
    return value


def _number(data: Mapping[str, Any], key: str) -> Decimal:
    value = _required(data, key)
    try:
        return coerce_decimal(value)
    except ValueError as exc:
        raise LedgerValidationError(str(exc)) from exc


def _int(data: Mapping[str, Any], key: str) -> int:
    value = _required(data, key)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise LedgerValidationError(
            f"Field '{key}' must be an integer"
        ) from exc


def account_from_document(document: Document) -> Account:
    data = document.data
    raw_initial = data.get("initialBalance")
    if raw_initial is None:
        # Older revisions stored a running balance instead.
        raw_initial = data.get("balance")
    try:
        initial = optional_decimal(raw_initial) or Decimal("0")
    except ValueError as exc:
        raise LedgerValidationError(str(exc)) from exc
    return Account(
        id=document.id,
        name=str(data.get("name") or ""),
        category=str(data.get("category") or "other"),
        currency=normalize_symbol(data.get("currency")) or BASE_CURRENCY,
        initial_balance=initial,
    )


def account_to_document(account: Account) -> dict[str, Any]:
    return {
        "name": account.name,
        "category": account.category,
        "currency": account.currency,
        "initialBalance": account.initial_balance,
    }


def card_from_document(document: Document) -> Card:
    data = document.data
    return Card(
        id=document.id,
        name=str(data.get("name") or ""),
        payment_day=_int(data, "paymentDay"),
        usage_start_day=_int(data, "usageStartDay"),
        usage_end_day=_int(data, "usageEndDay"),
        linked_account_id=data.get("linkedAccountId") or None,
    )


def card_to_document(card: Card) -> dict[str, Any]:
    return {
        "name": card.name,
        "paymentDay": card.payment_day,
        "usageStartDay": card.usage_start_day,
        "usageEndDay": card.usage_end_day,
        "linkedAccountId": card.linked_account_id,
    }


def currency_from_document(document: Document) -> Currency:
    data = document.data
    symbol = normalize_symbol(data.get("symbol") or document.id)
    if symbol is None:
        raise LedgerValidationError("Missing field 'symbol'")
    is_base = bool(data.get("isBase")) or symbol == BASE_CURRENCY
    return Currency(
        symbol=symbol,
        name=str(data.get("name") or symbol),
        rate=Decimal("1") if is_base else _number(data, "rate"),
        is_base=is_base,
    )


def currency_to_document(currency: Currency) -> dict[str, Any]:
    return {
        "symbol": currency.symbol,
        "name": currency.name,
        "rate": currency.rate,
        "isBase": currency.is_base,
    }


def schedule_from_document(document: Document) -> Schedule:
    data = document.data
    created_at = data.get("createdAt")
    return Schedule(
        id=document.id,
        description=str(data.get("description") or ""),
        amount=_number(data, "amount"),
        due_date=parse_timestamp(_required(data, "date")),
        account_id=str(_required(data, "accountId")),
        is_completed=bool(data.get("isCompleted")),
        created_at=parse_timestamp(created_at) if created_at else None,
    )


def schedule_to_document(schedule: Schedule) -> dict[str, Any]:
    return {
        "description": schedule.description,
        "amount": schedule.amount,
        "date": schedule.due_date,
        "accountId": schedule.account_id,
        "isCompleted": schedule.is_completed,
        "createdAt": schedule.created_at,
    }


def transaction_from_document(document: Document) -> Transaction:
    """Build the typed transaction for a stored document.

    Raises:
        LedgerValidationError: For an unknown ``type`` or a missing field.
    """
    data = document.data
    kind = data.get("type")
    cls = TRANSACTION_TYPES.get(kind)
    if cls is None:
        raise LedgerValidationError(f"Unknown transaction type: {kind!r}")

    original = None
    original_amount = data.get("originalAmount")
    original_currency = normalize_symbol(data.get("originalCurrency"))
    if original_amount not in (None, "") and original_currency:
        original = ForeignAmount(
            amount=_number(data, "originalAmount"),
            currency=original_currency,
        )

    common = {
        "id": document.id,
        "occurred_at": parse_timestamp(_required(data, "date")),
        "description": str(data.get("description") or ""),
        "amount": _number(data, "amount"),
        "category": normalize_label(data.get("category")),
        "memo": normalize_label(data.get("memo")),
        "original": original,
    }
    if kind == CARD_EXPENSE:
        return CardExpenseTransaction(
            **common,
            card_id=str(_required(data, "cardId")),
            is_paid=bool(data.get("isPaid")),
        )
    if kind == TRANSFER:
        return TransferTransaction(
            **common,
            account_id=str(_required(data, "accountId")),
            to_account_id=str(_required(data, "toAccountId")),
        )
    if kind == PAYMENT:
        return PaymentTransaction(
            **common,
            account_id=str(_required(data, "accountId")),
            card_id=str(data.get("cardId") or ""),
            paid_card_transaction_ids=tuple(
                str(item) for item in data.get("paidCardTransactionIds") or ()
            ),
        )
    return cls(**common, account_id=str(_required(data, "accountId")))


def transaction_to_document(transaction: Transaction) -> dict[str, Any]:
    """Serialize a typed transaction into its document fields."""
    data: dict[str, Any] = {
        "type": transaction.kind,
        "date": transaction.occurred_at,
        "description": transaction.description,
        "amount": transaction.amount,
        "category": transaction.category,
        "memo": transaction.memo,
    }
    if transaction.original is not None:
        data["originalAmount"] = transaction.original.amount
        data["originalCurrency"] = transaction.original.currency
    if isinstance(transaction, CardExpenseTransaction):
        data["cardId"] = transaction.card_id
        data["isPaid"] = transaction.is_paid
        return data
    data["accountId"] = transaction.account_id
    if isinstance(transaction, TransferTransaction):
        data["toAccountId"] = transaction.to_account_id
    if isinstance(transaction, PaymentTransaction):
        data["cardId"] = transaction.card_id
        data["paidCardTransactionIds"] = list(
            transaction.paid_card_transaction_ids
        )
    return data


__all__ = [
    "parse_timestamp",
    "account_from_document",
    "account_to_document",
    "card_from_document",
    "card_to_document",
    "currency_from_document",
    "currency_to_document",
    "schedule_from_document",
    "schedule_to_document",
    "transaction_from_document",
    "transaction_to_document",
]
