"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

import dotenv

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DATA_FORMATS = ("json", "csv")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for identity and the data import/export jobs.

    Attributes:
        user_id: Identity restored on start; anonymous when empty.
        display_name: Optional display name of the configured user.
        export_path: Destination file of the export CLI.
        export_format: ``json`` or ``csv``.
        import_path: Source file of the import CLI.
        import_format: ``json`` or ``csv``.
    """

    user_id: Optional[str] = None
    display_name: Optional[str] = None
    export_path: Optional[Path] = None
    export_format: str = "json"
    import_path: Optional[Path] = None
    import_format: str = "json"

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        export_format = cls._normalize_format(
            os.getenv("EXPORT_FORMAT"), logger=logger
        )
        raw_export = os.getenv("EXPORT_PATH")
        export_path = (
            cls._normalize_path(raw_export)
            if raw_export
            else cls._default_export_path(export_format)
        )
        raw_import = os.getenv("IMPORT_PATH")
        import_path = None
        if raw_import:
            import_path = cls._normalize_path(raw_import)
            if not import_path.exists():
                logger.warning(f"Import file does not exist at {import_path}")
        import_format = cls._normalize_format(
            os.getenv("IMPORT_FORMAT")
            or (import_path.suffix.lstrip(".") if import_path else None),
            logger=logger,
        )
        return cls(
            user_id=(os.getenv("LEDGER_USER_ID") or "").strip() or None,
            display_name=(os.getenv("LEDGER_DISPLAY_NAME") or "").strip()
            or None,
            export_path=export_path,
            export_format=export_format,
            import_path=import_path,
            import_format=import_format,
        )

    @staticmethod
    def _normalize_path(raw_path: str) -> Path:
        """Expand and resolve a filesystem path.

        Args:
            raw_path: Raw file path string.

        Returns:
            Path: Absolute filesystem path.
        """
        return Path(raw_path).expanduser().resolve()

    @staticmethod
    def _normalize_format(raw_format: str | None, logger) -> str:
        """Return a supported data format, defaulting to json.

        Args:
            raw_format: Raw format name.
            logger: Logger used for warnings.

        Returns:
            str: ``json`` or ``csv``.
        """
        value = (raw_format or "json").strip().lower()
        if value not in DATA_FORMATS:
            logger.warning(f"Unsupported data format {value!r}; using json")
            return "json"
        return value

    @staticmethod
    def _default_export_path(export_format: str) -> Path:
        """Return the default export file under data/.

        Args:
            export_format: ``json`` or ``csv``.

        Returns:
            Path: ``data/ledger_export.<format>`` in the project root.
        """
        return get_project_root() / "data" / f"ledger_export.{export_format}"


__all__ = ["LedgerSettings", "DATA_FORMATS"]
