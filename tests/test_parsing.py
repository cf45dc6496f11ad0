"""Tests for cleaning raw model output."""

from __future__ import annotations

import pytest

from gemini_proxy.core.errors import ResponseParseError
from gemini_proxy.core.parsing import clean_response_text, load_json, preview

PAYLOAD = '{"categories": ["Science"]}'


@pytest.mark.parametrize(
    "raw",
    [
        PAYLOAD,
        f"  {PAYLOAD}\n\n",
        f"```json\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"```json   \n\n{PAYLOAD}```",
        f"```python\n{PAYLOAD}\n```",
        f"\n  ```json\n{PAYLOAD}\n```  \n",
    ],
)
def test_clean_strips_fences_and_whitespace(raw: str) -> None:
    """Leading and trailing fences are removed, with or without a language tag."""
    assert clean_response_text(raw) == PAYLOAD


def test_clean_keeps_middle_fences() -> None:
    """Fences that are not at the very start or end stay in place."""
    text = "Here you go:\n```json\n{}\n```\nanything else?"
    assert clean_response_text(text) == text


def test_clean_without_fences_only_trims() -> None:
    assert clean_response_text("  plain text \n") == "plain text"


def test_clean_fenced_non_json_text() -> None:
    """Fence stripping does not depend on the content being JSON."""
    assert clean_response_text("```\nnot json\n```") == "not json"


def test_load_json_decodes_fenced_payload() -> None:
    assert load_json(f"```json\n{PAYLOAD}\n```") == {"categories": ["Science"]}


def test_load_json_raises_parse_error() -> None:
    with pytest.raises(ResponseParseError):
        load_json("not json")


def test_preview_truncates_long_text() -> None:
    assert preview("abc", limit=5) == "abc"
    assert preview("abcdefgh", limit=5) == "abcde…"
