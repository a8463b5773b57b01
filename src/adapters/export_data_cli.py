"""CLI adapter to export the ledger of the configured user.

The destination and the format come from ``EXPORT_PATH`` and
``EXPORT_FORMAT`` (``json`` or ``csv``).
"""

from src.application.use_cases.export_data import ExportDataUseCase
from src.domain.errors import LedgerError
from src.infrastructure.container import build_user_document_store
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def main() -> int:
    """Write the export file and return the process exit code."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    try:
        store = build_user_document_store(settings)
        use_case = ExportDataUseCase(document_store=store, logger=logger)
        if settings.export_format == "csv":
            content = use_case.to_csv()
        else:
            content = use_case.to_json()
    except LedgerError as exc:
        logger.error(f"Export failed: {exc}")
        print(f"Export failed: {exc}")
        return 1

    settings.export_path.parent.mkdir(parents=True, exist_ok=True)
    settings.export_path.write_text(content, encoding="utf-8")
    print(
        f"Exported ledger as {settings.export_format} "
        f"to {settings.export_path}."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
