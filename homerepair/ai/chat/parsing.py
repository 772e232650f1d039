"""Best-effort hints pulled out of an assistant reply."""

import json
import re
from typing import Any

UNKNOWN_DIFFICULTY = "Unknown"

_COST = re.compile(r"\$([0-9]+(?:,[0-9]{3})*(?:\.[0-9]{2})?)")
_DIFFICULTY = re.compile(r"\b(Easy|Medium|Hard|Professional Required)\b", re.IGNORECASE)
_STRUCTURED_JSON = re.compile(
    r"<structured_json>(.*?)</structured_json>", re.IGNORECASE | re.DOTALL
)


def extract_cost_estimate(text: str) -> str | None:
    """First dollar amount in the text, e.g. ``"$1,250.00"``."""
    match = _COST.search(text or "")
    return match.group(0) if match else None


def extract_difficulty(text: str) -> str:
    match = _DIFFICULTY.search(text or "")
    return match.group(0) if match else UNKNOWN_DIFFICULTY


def extract_structured_json(text: str) -> dict[str, Any] | None:
    """Parse the ``<structured_json>`` block, or None if absent or invalid."""
    match = _STRUCTURED_JSON.search(text or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(1))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
