"""Small input-normalisation helpers shared by the request handlers."""

import math
from datetime import UTC, datetime
from typing import Any


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (the format stored on every document)."""
    return datetime.now(UTC).isoformat()


def normalize_text(value: Any, max_length: int = 4000) -> str:
    """Trim a string and cut it to ``max_length``; anything else becomes ''."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]


def to_number(value: Any) -> float | int | None:
    """Coerce ``value`` to a finite number, or None.

    Accepts ints, floats and numeric strings. Booleans and blanks are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def normalize_list(value: Any, max_items: int = 20) -> list[str]:
    """Accept a list of strings or a comma-separated string; drop blanks."""
    if isinstance(value, list):
        items = [item.strip() for item in value if isinstance(item, str)]
    elif isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    else:
        return []
    return [item for item in items if item][:max_items]
