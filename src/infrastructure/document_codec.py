"""JSON encoding of document payloads stored in the SQL table.

Timestamps and decimals are wrapped in tagged objects so they come back
with their Python types:

    {"$date": "2024-03-05T10:00:00"}
    {"$decimal": "1300.50"}
"""

import json
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

DATE_TAG = "$date"
DECIMAL_TAG = "$decimal"


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return {DATE_TAG: value.isoformat()}
    if isinstance(value, Decimal):
        return {DECIMAL_TAG: str(value)}
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Cannot encode {type(value).__name__} in a document")


def _object_hook(obj: dict[str, Any]) -> Any:
    if len(obj) == 1:
        if DATE_TAG in obj:
            return datetime.fromisoformat(obj[DATE_TAG])
        if DECIMAL_TAG in obj:
            return Decimal(obj[DECIMAL_TAG])
    return obj


def encode_document(data: Mapping[str, Any]) -> str:
    """Serialize document fields into a JSON string."""
    return json.dumps(dict(data), default=_default, sort_keys=True)


def decode_document(payload: str) -> dict[str, Any]:
    """Parse a JSON string produced by ``encode_document``."""
    return json.loads(payload, object_hook=_object_hook)


__all__ = ["encode_document", "decode_document"]
