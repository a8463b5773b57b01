"""Application use cases package."""

from .add_schedule import AddScheduleUseCase
from .complete_schedule import CompleteScheduleUseCase
from .confirm_card_payment import CardPaymentResult, ConfirmCardPaymentUseCase
from .delete_transaction import DeleteTransactionUseCase
from .edit_transaction import EditTransactionUseCase
from .export_data import ExportDataUseCase
from .get_account_balances import GetAccountBalancesUseCase
from .get_asset_summary import GetAssetSummaryUseCase
from .get_reports import GetReportsUseCase, LedgerReport
from .get_schedule_overview import GetScheduleOverviewUseCase, ScheduleOverview
from .import_data import ImportDataUseCase, ImportResult
from .list_transactions import ListTransactionsUseCase
from .manage_accounts import (
    DeleteAccountUseCase,
    DeleteCardUseCase,
    SaveAccountUseCase,
    SaveCardUseCase,
)
from .manage_currencies import (
    DeleteCurrencyUseCase,
    EnsureBaseCurrencyUseCase,
    SaveCurrencyUseCase,
)
from .record_transaction import RecordTransactionUseCase
from .resolve_user import ResolveUserUseCase
from .watch_ledger import WatchLedgerUseCase

__all__ = [
    "AddScheduleUseCase",
    "CompleteScheduleUseCase",
    "CardPaymentResult",
    "ConfirmCardPaymentUseCase",
    "DeleteTransactionUseCase",
    "EditTransactionUseCase",
    "ExportDataUseCase",
    "GetAccountBalancesUseCase",
    "GetAssetSummaryUseCase",
    "GetReportsUseCase",
    "LedgerReport",
    "GetScheduleOverviewUseCase",
    "ScheduleOverview",
    "ImportDataUseCase",
    "ImportResult",
    "ListTransactionsUseCase",
    "DeleteAccountUseCase",
    "DeleteCardUseCase",
    "SaveAccountUseCase",
    "SaveCardUseCase",
    "DeleteCurrencyUseCase",
    "EnsureBaseCurrencyUseCase",
    "SaveCurrencyUseCase",
    "RecordTransactionUseCase",
    "ResolveUserUseCase",
    "WatchLedgerUseCase",
]
