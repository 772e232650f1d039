"""
Australian location parsing.

Best-effort normalisation of free-text and structured location input into
``{raw, suburb, city, state, postcode}``. Used by the product matcher and the
professional registration form.
"""

import re
from typing import Any

from pydantic import BaseModel

STATE_ABBREVIATIONS: dict[str, str] = {
    "NSW": "NSW",
    "NEW SOUTH WALES": "NSW",
    "VIC": "VIC",
    "VICTORIA": "VIC",
    "QLD": "QLD",
    "QUEENSLAND": "QLD",
    "WA": "WA",
    "WESTERN AUSTRALIA": "WA",
    "SA": "SA",
    "SOUTH AUSTRALIA": "SA",
    "TAS": "TAS",
    "TASMANIA": "TAS",
    "NT": "NT",
    "NORTHERN TERRITORY": "NT",
    "ACT": "ACT",
    "AUSTRALIAN CAPITAL TERRITORY": "ACT",
}

_POSTCODE = re.compile(r"\b(\d{4})\b")
_STATE_TOKEN = re.compile(
    r"\b(" + "|".join(sorted(STATE_ABBREVIATIONS, key=len, reverse=True)) + r")\b"
)


class Location(BaseModel):
    """Parsed location. Every field is optional."""

    raw: str | None = None
    suburb: str | None = None
    city: str | None = None
    state: str | None = None
    postcode: int | None = None

    def has_data(self) -> bool:
        return any(
            (self.raw, self.suburb, self.city, self.state, self.postcode is not None)
        )


def map_state(value: Any) -> str | None:
    """Map a state name or abbreviation to its abbreviation."""
    if not isinstance(value, str):
        return None
    return STATE_ABBREVIATIONS.get(value.strip().upper())


def find_state_in_text(text: str) -> str | None:
    match = _STATE_TOKEN.search(text.upper())
    return STATE_ABBREVIATIONS[match.group(1)] if match else None


def normalise_location(payload: dict[str, Any] | str | None) -> Location:
    """Parse ``location``/``state``/``postcode`` fields (or a bare string).

    Explicit ``state`` and ``postcode`` win over anything parsed out of the
    free text. The first comma-separated token becomes the city/suburb unless
    it is a postcode or a state.
    """
    if isinstance(payload, str):
        payload = {"location": payload}
    payload = payload or {}

    raw_value = payload.get("location")
    raw = raw_value.strip() if isinstance(raw_value, str) else ""
    location = Location(raw=raw or None)

    location.state = map_state(payload.get("state"))

    postcode = payload.get("postcode")
    if postcode is not None and str(postcode).strip().isdigit():
        location.postcode = int(str(postcode).strip())

    if raw:
        match = _POSTCODE.search(raw)
        if match and location.postcode is None:
            location.postcode = int(match.group(1))

        if location.state is None:
            location.state = find_state_in_text(raw)

        first = raw.split(",")[0].strip()
        if first and not re.fullmatch(r"\d{4}", first) and not map_state(first):
            location.city = first
            location.suburb = first

    return location
