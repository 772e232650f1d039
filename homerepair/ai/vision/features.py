"""
Region-aware visual feature selection.

Not every Image Analysis region supports every feature (Caption in
particular). Requests are cut down to what the endpoint's region is known to
support before calling it.
"""

from typing import Any
from urllib.parse import urlparse

SAFE_DEFAULT_FEATURES = ["Tags", "Objects"]

_RICH_REGION = ["Caption", "Tags", "Objects", "People", "Read", "DenseCaptions", "SmartCrops"]

SUPPORTED_BY_REGION: dict[str, list[str]] = {
    "eastus": _RICH_REGION,
    "westeurope": _RICH_REGION,
    "australiaeast": ["Tags", "Objects", "Read"],
}


def region_from_endpoint(endpoint: str) -> str | None:
    """Region of a ``<region>.api.cognitive.microsoft.com`` endpoint, else None."""
    host = (urlparse(endpoint).hostname or "").lower()
    parts = host.split(".")
    if len(parts) == 5 and parts[1:] == ["api", "cognitive", "microsoft", "com"]:
        return parts[0]
    return None


def supported_features(endpoint: str) -> list[str]:
    region = region_from_endpoint(endpoint)
    return SUPPORTED_BY_REGION.get(region or "", SAFE_DEFAULT_FEATURES)


def sanitize_features(requested: Any, endpoint: str) -> list[str]:
    """Keep the requested features the region supports; fall back to Tags+Objects."""
    supported = set(supported_features(endpoint))
    if not isinstance(requested, list) or not requested:
        requested = SAFE_DEFAULT_FEATURES
    kept = [f for f in requested if isinstance(f, str) and f in supported]
    return kept or list(SAFE_DEFAULT_FEATURES)
