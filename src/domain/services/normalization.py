"""Domain normalization helpers."""


def normalize_symbol(symbol: object) -> str | None:
    """Normalize currency symbols.

    Args:
        symbol: Raw symbol from a document, a form or a CSV cell.
            Non-string values such as numeric codes are read as text.

    Returns:
        str | None: Upper-cased symbol, or None when blank.
    """
    if not symbol:
        return None
    cleaned = str(symbol).strip()
    return cleaned.upper() if cleaned else None


def normalize_label(label: str | None) -> str | None:
    """Normalize free-text labels such as categories and memos.

    Args:
        label: Raw label value.

    Returns:
        str | None: Stripped label, or None when blank.
    """
    if label is None:
        return None
    cleaned = " ".join(str(label).split())
    return cleaned or None


__all__ = ["normalize_symbol", "normalize_label"]
