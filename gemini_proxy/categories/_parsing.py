"""Tolerant parsing of category answers from the model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gemini_proxy.categories.models import AnalysisResult
from gemini_proxy.core.errors import ResponseParseError
from gemini_proxy.core.parsing import load_json, preview

if TYPE_CHECKING:
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "לא ניתן היה לנתח את תוכן הסרטון. אנא נסה שוב או בדוק את הקישור."


def filter_to_vocabulary(items: list[Any], vocabulary: Sequence[str]) -> list[str]:
    """Keep string items whose trimmed value is in ``vocabulary``.

    The trimmed values are returned in their original order with duplicates
    removed.
    """
    allowed = set(vocabulary)
    result: list[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        label = item.strip()
        if label in allowed and label not in result:
            result.append(label)
    return result


def extract_categories_from_text(text: str, vocabulary: Sequence[str]) -> list[str]:
    """Find vocabulary entries mentioned anywhere in free text, ignoring case."""
    lowered = text.lower()
    return [category for category in vocabulary if category.lower() in lowered]


def _category_items(parsed: Any) -> list[Any]:
    if isinstance(parsed, dict) and isinstance(parsed.get("categories"), list):
        return parsed["categories"]
    if isinstance(parsed, list):
        return parsed
    msg = "Response is neither a categories object nor an array"
    raise ResponseParseError(msg)


def parse_categories(text: str, vocabulary: Sequence[str]) -> list[str]:
    """Extract the categories the model picked from ``vocabulary``.

    Accepts ``{"categories": [...]}`` or a bare array. When the response is not
    JSON of either shape, falls back to a substring scan of the raw text.
    Never raises.
    """
    try:
        items = _category_items(load_json(text))
    except ResponseParseError:
        LOGGER.warning("Could not parse categories response, scanning text: %s", preview(text))
        return extract_categories_from_text(text, vocabulary)
    return filter_to_vocabulary(items, vocabulary)


def parse_description_and_categories(text: str, vocabulary: Sequence[str]) -> AnalysisResult:
    """Extract a description and categories, or a placeholder result.

    Requires a non-empty string ``description`` and an array ``categories``.
    Never raises.
    """
    try:
        parsed = load_json(text)
        if not isinstance(parsed, dict):
            msg = "Response is not a JSON object"
            raise ResponseParseError(msg)
        description = parsed.get("description")
        if not isinstance(description, str) or not description.strip():
            msg = "Response does not contain a description"
            raise ResponseParseError(msg)
        categories = parsed.get("categories")
        if not isinstance(categories, list):
            msg = "Response categories field is not an array"
            raise ResponseParseError(msg)
    except ResponseParseError:
        LOGGER.warning("Could not parse description response: %s", preview(text))
        return AnalysisResult(description=FALLBACK_DESCRIPTION, categories=[])
    return AnalysisResult(
        description=description.strip(),
        categories=filter_to_vocabulary(categories, vocabulary),
    )
