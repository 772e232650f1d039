"""Reduce a raw image analysis to repair-oriented findings."""

from typing import Any

REPAIR_KEYWORDS = (
    "damage", "crack", "hole", "stain", "leak", "broken", "rust", "mold", "paint",
    "wall", "ceiling", "floor", "door", "window", "kitchen", "bathroom", "tile",
    "pipe", "water",
)


def _values(result: dict[str, Any], section: str) -> list[dict[str, Any]]:
    values = (result.get(section) or {}).get("values") or []
    return [v for v in values if isinstance(v, dict)]


def _is_repair_tag(name: str) -> bool:
    name = name.lower()
    return bool(name) and any(kw in name or name in kw for kw in REPAIR_KEYWORDS)


def generate_repair_suggestions(
    tag_names: list[str], description: str | None, problem_context: str | None
) -> list[dict[str, str]]:
    """Canned suggestions triggered by tags, the caption, or the user's own context."""
    haystack = f"{description or ''} {problem_context or ''}".lower()
    lowered_tags = [name.lower() for name in tag_names]

    def has(needle: str) -> bool:
        return any(needle in tag for tag in lowered_tags) or needle in haystack

    suggestions = []
    if has("crack"):
        suggestions.append(
            {
                "issue": "Visible cracks detected",
                "urgency": "medium",
                "action": "Measure width; hairline cracks can be patched; structural cracks need pro assessment.",
            }
        )
    if has("stain") or has("mold") or has("leak") or has("water"):
        suggestions.append(
            {
                "issue": "Staining / moisture indicator",
                "urgency": "high",
                "action": "Check for active leaks; dry thoroughly; treat mold; fix source (roof/pipe/caulk) before repainting.",
            }
        )
    if has("rust"):
        suggestions.append(
            {
                "issue": "Rust visible",
                "urgency": "medium",
                "action": "Remove rust, apply rust-inhibiting primer, repaint or replace corroded hardware.",
            }
        )
    if has("hole"):
        suggestions.append(
            {
                "issue": "Hole in surface",
                "urgency": "low",
                "action": "Patch with appropriate filler (spackle/drywall compound); sand and repaint.",
            }
        )
    if not suggestions:
        suggestions.append(
            {
                "issue": "General inspection",
                "urgency": "low",
                "action": "No specific repair patterns detected. Share more context or a closer photo for tailored advice.",
            }
        )
    return suggestions


def process_image_for_repairs(
    result: dict[str, Any], problem_context: str | None = None
) -> dict[str, Any]:
    """
    Summarise an Image Analysis 4.0 result for the repair assistant.

    Returns:
        dict: ``description``, ``confidence``, ``relevantTags``,
        ``detectedObjects``, ``ocr`` and ``repairSuggestions``
    """
    caption = result.get("captionResult") or {}
    caption_text = caption.get("text") or ""
    caption_confidence = caption.get("confidence") or None

    relevant_tags = [
        {"name": tag.get("name"), "confidence": tag.get("confidence")}
        for tag in _values(result, "tagsResult")
        if _is_repair_tag(str(tag.get("name") or ""))
    ]

    detected_objects = []
    for obj in _values(result, "objectsResult"):
        # 4.0 results name objects under tags[0].name; older shapes use name
        tags = obj.get("tags") or []
        first_tag = tags[0] if tags and isinstance(tags[0], dict) else {}
        entry: dict[str, Any] = {
            "object": obj.get("name") or first_tag.get("name") or "object",
            "confidence": obj.get("confidence", first_tag.get("confidence")),
        }
        box = obj.get("boundingBox")
        if isinstance(box, dict):
            entry["rectangle"] = {k: box.get(k) for k in ("x", "y", "w", "h")}
        detected_objects.append(entry)

    blocks = (result.get("readResult") or {}).get("blocks") or []
    ocr = [
        {"text": " ".join(str(line.get("text", "")) for line in block.get("lines") or [])}
        for block in blocks
        if isinstance(block, dict)
    ]

    return {
        "description": caption_text or None,
        "confidence": caption_confidence,
        "relevantTags": relevant_tags,
        "detectedObjects": detected_objects,
        "ocr": ocr,
        "repairSuggestions": generate_repair_suggestions(
            [tag["name"] for tag in relevant_tags if tag["name"]],
            caption_text,
            problem_context,
        ),
    }
