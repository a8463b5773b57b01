"""Transaction records as a tagged union over the five ledger kinds.

Each kind carries only the references it needs. Amounts are always
positive; the kind decides the sign applied to an account.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Union

from src.domain.constants import (
    CARD_EXPENSE,
    EXPENSE,
    INCOME,
    PAYMENT,
    TRANSFER,
)


@dataclass(frozen=True)
class ForeignAmount:
    """Amount as originally entered in a currency other than the account's."""

    amount: Decimal
    currency: str


@dataclass(frozen=True, kw_only=True)
class _TransactionBase:
    id: str | None = None
    occurred_at: datetime
    description: str
    amount: Decimal
    category: str | None = None
    memo: str | None = None
    original: ForeignAmount | None = None


@dataclass(frozen=True, kw_only=True)
class IncomeTransaction(_TransactionBase):
    kind: ClassVar[str] = INCOME

    account_id: str


@dataclass(frozen=True, kw_only=True)
class ExpenseTransaction(_TransactionBase):
    kind: ClassVar[str] = EXPENSE

    account_id: str


@dataclass(frozen=True, kw_only=True)
class CardExpenseTransaction(_TransactionBase):
    kind: ClassVar[str] = CARD_EXPENSE

    card_id: str
    is_paid: bool = False


@dataclass(frozen=True, kw_only=True)
class TransferTransaction(_TransactionBase):
    kind: ClassVar[str] = TRANSFER

    account_id: str
    to_account_id: str


@dataclass(frozen=True, kw_only=True)
class PaymentTransaction(_TransactionBase):
    """Settlement of card expenses, posted against the linked account."""

    kind: ClassVar[str] = PAYMENT

    account_id: str
    card_id: str
    paid_card_transaction_ids: tuple[str, ...] = field(default_factory=tuple)


Transaction = Union[
    IncomeTransaction,
    ExpenseTransaction,
    CardExpenseTransaction,
    TransferTransaction,
    PaymentTransaction,
]

TRANSACTION_TYPES: dict[str, type] = {
    cls.kind: cls
    for cls in (
        IncomeTransaction,
        ExpenseTransaction,
        CardExpenseTransaction,
        TransferTransaction,
        PaymentTransaction,
    )
}


def referenced_account_ids(transaction: Transaction) -> tuple[str, ...]:
    """Return the ids of every account a transaction touches."""
    if isinstance(transaction, TransferTransaction):
        return (transaction.account_id, transaction.to_account_id)
    if isinstance(transaction, CardExpenseTransaction):
        return ()
    return (transaction.account_id,)


__all__ = [
    "ForeignAmount",
    "IncomeTransaction",
    "ExpenseTransaction",
    "CardExpenseTransaction",
    "TransferTransaction",
    "PaymentTransaction",
    "Transaction",
    "TRANSACTION_TYPES",
    "referenced_account_ids",
]
