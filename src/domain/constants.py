"""Domain constants for the household ledger."""

BASE_CURRENCY = "KRW"
BASE_CURRENCY_NAME = "South Korean Won"

ACCOUNT_CATEGORIES = (
    "bank",
    "brokerage",
    "crypto",
    "cash",
    "other",
)

INCOME = "income"
EXPENSE = "expense"
CARD_EXPENSE = "card-expense"
TRANSFER = "transfer"
PAYMENT = "payment"

TRANSACTION_KINDS = (INCOME, EXPENSE, CARD_EXPENSE, TRANSFER, PAYMENT)

# Kinds counted as spending in reports.
EXPENSE_KINDS = (EXPENSE, CARD_EXPENSE)

ACCOUNTS = "accounts"
CARDS = "cards"
TRANSACTIONS = "transactions"
SCHEDULES = "schedules"
CURRENCIES = "currencies"

CORE_COLLECTIONS = (ACCOUNTS, CARDS, TRANSACTIONS, SCHEDULES, CURRENCIES)

UNCATEGORIZED = "Uncategorized"


__all__ = [
    "BASE_CURRENCY",
    "BASE_CURRENCY_NAME",
    "ACCOUNT_CATEGORIES",
    "INCOME",
    "EXPENSE",
    "CARD_EXPENSE",
    "TRANSFER",
    "PAYMENT",
    "TRANSACTION_KINDS",
    "EXPENSE_KINDS",
    "ACCOUNTS",
    "CARDS",
    "TRANSACTIONS",
    "SCHEDULES",
    "CURRENCIES",
    "CORE_COLLECTIONS",
    "UNCATEGORIZED",
]
