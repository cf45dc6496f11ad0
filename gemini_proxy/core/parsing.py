"""Cleaning of raw model output before JSON decoding."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from gemini_proxy.core.errors import ResponseParseError

LOGGER = logging.getLogger(__name__)

_LEADING_JSON_FENCE = re.compile(r"^```json\s*")
_LEADING_FENCE = re.compile(r"^```(?:[\w+-]+(?=\s))?\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")

# Characters of raw model output shown in debug logs
PREVIEW_LENGTH = 200


def clean_response_text(text: str) -> str:
    """Strip surrounding whitespace and one pair of markdown code fences.

    Only a fence at the very start (optionally followed by a language tag)
    and a fence at the very end are removed. Fences in the middle of the text
    stay.
    """
    cleaned = text.strip()
    if _LEADING_JSON_FENCE.match(cleaned):
        cleaned = _LEADING_JSON_FENCE.sub("", cleaned, count=1)
    else:
        cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def load_json(text: str) -> Any:
    """Decode the JSON payload of a model response.

    Raises:
        ResponseParseError: If the cleaned text is not valid JSON.

    """
    cleaned = clean_response_text(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        msg = f"Response is not valid JSON: {e}"
        raise ResponseParseError(msg) from e


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """Shorten ``text`` for log output."""
    if len(text) <= limit:
        return text
    return text[:limit] + "…"
