"""Domain models for derived financial aggregates."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class AccountBalance:
    """Derived balance of one account.

    Attributes:
        account_id: Account document id.
        name: Account display name.
        category: Account category.
        currency: Native currency of the account.
        balances: Net balance per currency, native amounts.
        total_krw: Sum of ``balances`` converted to KRW.
    """

    account_id: str
    name: str
    category: str
    currency: str
    balances: dict[str, Decimal]
    total_krw: Decimal


@dataclass(frozen=True)
class BillingWindow:
    """Open usage window of a card, both bounds inclusive."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class UpcomingPayment:
    """Unpaid card charges due on the next payment day."""

    card_id: str
    card_name: str
    linked_account_id: str | None
    amount: Decimal
    window: BillingWindow
    transaction_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class AssetSummary:
    """Dashboard totals in KRW.

    Attributes:
        total_cash_krw: Sum of every account balance converted to KRW.
        total_asset_krw: Cash total minus all upcoming card payments.
        upcoming_payments: Cards with a positive due amount.
        assets_by_currency: Native balances summed per currency.
        assets_by_currency_krw: The same sums converted to KRW.
    """

    total_cash_krw: Decimal
    total_asset_krw: Decimal
    upcoming_payments: list[UpcomingPayment] = field(default_factory=list)
    assets_by_currency: dict[str, Decimal] = field(default_factory=dict)
    assets_by_currency_krw: dict[str, Decimal] = field(default_factory=dict)

    @property
    def upcoming_total_krw(self) -> Decimal:
        """Return the sum of all upcoming card payments."""
        return sum(
            (payment.amount for payment in self.upcoming_payments),
            Decimal("0"),
        )


@dataclass(frozen=True)
class CategoryAmount:
    """Spending aggregated for one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlyCashflow:
    """Income and spending for one calendar month, in KRW."""

    month: str
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expense."""
        return self.income - self.expense


__all__ = [
    "AccountBalance",
    "BillingWindow",
    "UpcomingPayment",
    "AssetSummary",
    "CategoryAmount",
    "MonthlyCashflow",
]
