"""CLI adapter to import a ledger file for the configured user.

A JSON file replaces every collection; a CSV file appends transactions.
The source and the format come from ``IMPORT_PATH`` and ``IMPORT_FORMAT``.
"""

from src.application.use_cases.import_data import ImportDataUseCase
from src.domain.errors import LedgerError
from src.infrastructure.container import build_user_document_store
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def main() -> int:
    """Run the import and return the process exit code."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if settings.import_path is None or not settings.import_path.exists():
        print("Set IMPORT_PATH to an existing export file.")
        return 2

    content = settings.import_path.read_text(encoding="utf-8")
    try:
        store = build_user_document_store(settings)
        use_case = ImportDataUseCase(document_store=store, logger=logger)
        if settings.import_format == "csv":
            result = use_case.from_csv(content)
        else:
            result = use_case.from_json(content)
    except LedgerError as exc:
        logger.error(f"Import failed: {exc}")
        print(f"Import failed: {exc}")
        return 1

    written = ", ".join(
        f"{count} {collection}" for collection, count in result.counts.items()
    )
    print(f"Imported {written}.")
    for reason in result.skipped:
        print(f"Skipped {reason}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
