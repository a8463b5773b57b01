"""Balance reconstruction by replaying the transaction history."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.models import Account, AccountBalance
from src.domain.models.transactions import (
    ExpenseTransaction,
    IncomeTransaction,
    PaymentTransaction,
    Transaction,
    TransferTransaction,
)
from src.domain.services.fx import CurrencyTable
from src.domain.services.normalization import normalize_symbol


def effective_amount(
    transaction: Transaction,
    account: Account,
) -> tuple[str, Decimal]:
    """Return the currency and amount a transaction posts to an account.

    The originally entered currency/amount pair wins when present; otherwise
    the stored amount is read in the account's own currency.

    Args:
        transaction: Transaction touching the account.
        account: Account the amount is posted to.

    Returns:
        tuple[str, Decimal]: Currency symbol and unsigned amount.
    """
    if transaction.original is not None:
        currency = normalize_symbol(transaction.original.currency)
        if currency:
            return currency, transaction.original.amount
    return normalize_symbol(account.currency) or account.currency, (
        transaction.amount
    )


def signed_effect(transaction: Transaction, account_id: str) -> int:
    """Return +1, -1 or 0 for the effect of a transaction on an account."""
    if isinstance(transaction, IncomeTransaction):
        return 1 if transaction.account_id == account_id else 0
    if isinstance(transaction, (ExpenseTransaction, PaymentTransaction)):
        return -1 if transaction.account_id == account_id else 0
    if isinstance(transaction, TransferTransaction):
        # A self-transfer is rejected on write; if one exists it nets to 0.
        effect = 0
        if transaction.account_id == account_id:
            effect -= 1
        if transaction.to_account_id == account_id:
            effect += 1
        return effect
    # Card expenses only move money once their payment is recorded.
    return 0


def compute_account_balances(
    account: Account,
    transactions: Iterable[Transaction],
) -> dict[str, Decimal]:
    """Replay transactions into a per-currency balance map.

    Summation is order independent, so any permutation of ``transactions``
    yields the same map.

    Args:
        account: Account whose balance is reconstructed.
        transactions: Full transaction set; unrelated entries are ignored.

    Returns:
        dict[str, Decimal]: Net balance per currency symbol.
    """
    native = normalize_symbol(account.currency) or account.currency
    balances: dict[str, Decimal] = {native: account.initial_balance}
    for transaction in transactions:
        sign = signed_effect(transaction, account.id)
        if sign == 0:
            continue
        currency, amount = effective_amount(transaction, account)
        balances[currency] = balances.get(currency, Decimal("0")) + (
            sign * amount
        )
    return balances


def total_in_krw(
    balances: Mapping[str, Decimal],
    currency_table: CurrencyTable,
) -> Decimal:
    """Convert a per-currency balance map into a single KRW amount."""
    return sum(
        (
            currency_table.to_krw(amount, currency)
            for currency, amount in balances.items()
        ),
        Decimal("0"),
    )


def compute_all_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    currency_table: CurrencyTable,
) -> list[AccountBalance]:
    """Compute derived balances for every account.

    Transactions whose accounts no longer exist are simply never matched,
    so they contribute nothing.

    Args:
        accounts: Accounts to reconstruct.
        transactions: Full transaction set.
        currency_table: Rates used for the KRW totals.

    Returns:
        list[AccountBalance]: One entry per account, in input order.
    """
    transactions = list(transactions)
    results = []
    for account in accounts:
        balances = compute_account_balances(account, transactions)
        results.append(
            AccountBalance(
                account_id=account.id,
                name=account.name,
                category=account.category,
                currency=account.currency,
                balances=balances,
                total_krw=total_in_krw(balances, currency_table),
            )
        )
    return results


__all__ = [
    "effective_amount",
    "signed_effect",
    "compute_account_balances",
    "total_in_krw",
    "compute_all_balances",
]
