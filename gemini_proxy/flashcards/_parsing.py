"""Tolerant parsing of flashcard answers from the model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from gemini_proxy.constants import ERROR_CARD_TYPE
from gemini_proxy.core.errors import ResponseParseError
from gemini_proxy.core.parsing import load_json, preview
from gemini_proxy.flashcards.models import Flashcard

LOGGER = logging.getLogger(__name__)


def error_card(front: str, back: str, context_logic: str, *extra_tags: str) -> Flashcard:
    """Build a placeholder card that marks a failed generation."""
    return Flashcard(
        type=ERROR_CARD_TYPE,
        front=front,
        back=back,
        context_logic=context_logic,
        tags=[ERROR_CARD_TYPE, *extra_tags],
    )


GENERIC_NO_VALID_CARDS = error_card(
    "Could not process the content",
    "The AI response did not contain valid flashcards. "
    "Please try again or adjust your system instruction.",
    "Ensure the content has enough substance to analyze and that "
    "the system instruction requests valid JSON output.",
)
GENERIC_PARSE_FAILED = error_card(
    "Failed to process AI response",
    "Could not parse the response. Please try again.",
    "There was an error processing the response from the AI.",
)


@dataclass
class FlashcardRules:
    """How strictly a domain validates the cards it receives.

    Attributes:
        card_types: Allowed values of ``type``, or ``None`` to accept any.
        require_context_logic: Drop cards without a non-blank ``context_logic``.
        default_tags: Tags given to cards without ``tags``, after the card type.
            ``None`` leaves such cards untagged.
        no_valid_cards: Returned when the answer parsed but held no usable card.
        parse_failed: Returned when the answer could not be parsed at all.

    """

    card_types: tuple[str, ...] | None = None
    require_context_logic: bool = False
    default_tags: tuple[str, ...] | None = None
    no_valid_cards: Flashcard = field(default_factory=lambda: GENERIC_NO_VALID_CARDS)
    parse_failed: Flashcard = field(default_factory=lambda: GENERIC_PARSE_FAILED)


def _clean_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _to_card(raw: Any, rules: FlashcardRules) -> Flashcard | None:
    if not isinstance(raw, dict):
        return None
    card_type = raw.get("type")
    if not isinstance(card_type, str):
        return None
    if rules.card_types and card_type not in rules.card_types:
        return None
    front = _clean_text(raw.get("front"))
    back = _clean_text(raw.get("back"))
    if front is None or back is None:
        return None
    context_logic = _clean_text(raw.get("context_logic"))
    if rules.require_context_logic and context_logic is None:
        return None

    tags = raw.get("tags")
    if isinstance(tags, list):
        tags = [tag for tag in tags if isinstance(tag, str)]
    elif rules.default_tags is not None:
        tags = [card_type, *rules.default_tags]
    else:
        tags = None
    return Flashcard(
        type=card_type,
        front=front,
        back=back,
        context_logic=context_logic,
        tags=tags,
    )


def parse_flashcards(text: str, rules: FlashcardRules | None = None) -> list[Flashcard]:
    """Extract the valid cards from a model answer.

    Invalid cards are dropped. When nothing valid remains, or the answer is
    not a JSON object with a ``flashcards`` array, a single error card is
    returned instead. Never raises.
    """
    rules = rules or FlashcardRules()
    try:
        parsed = load_json(text)
        if not isinstance(parsed, dict) or not isinstance(parsed.get("flashcards"), list):
            msg = "Response does not contain a flashcards array"
            raise ResponseParseError(msg)
    except ResponseParseError:
        LOGGER.warning("Failed to parse flashcards response: %s", preview(text, 500))
        return [rules.parse_failed.model_copy(deep=True)]

    cards = [card for raw in parsed["flashcards"] if (card := _to_card(raw, rules)) is not None]
    if not cards:
        LOGGER.warning("No valid flashcards found in response")
        return [rules.no_valid_cards.model_copy(deep=True)]
    dropped = len(parsed["flashcards"]) - len(cards)
    if dropped:
        LOGGER.debug("Dropped %d invalid flashcards", dropped)
    return cards


_PHILOSOPHY_FALLBACK_TEXT = {
    "he": {
        "front": "מהו הרעיון המרכזי בקטע זה של {thinker}?",
        "no_valid_cards": "לא ניתן היה לעבד את הפסקה. אנא נסה שוב או הזן פסקה ארוכה יותר.",
        "no_valid_cards_logic": "יש לוודא שהפסקה מכילה תוכן פילוסופי מספיק לניתוח.",
        "parse_failed": "לא ניתן היה לעבד את התשובה מהמערכת. אנא נסה שוב.",
        "parse_failed_logic": "אירעה שגיאה בעיבוד התשובה.",
    },
    "en": {
        "front": "What is the main idea of this passage by {thinker}?",
        "no_valid_cards": "The paragraph could not be processed. "
        "Please try again or enter a longer paragraph.",
        "no_valid_cards_logic": "Make sure the paragraph holds enough philosophical content to analyze.",
        "parse_failed": "The response from the system could not be processed. Please try again.",
        "parse_failed_logic": "An error occurred while processing the response.",
    },
}


def philosophy_rules(
    card_types: tuple[str, ...] | None,
    thinker: str,
    work: str,
    chapter: str | None = None,
    *,
    strict: bool = True,
    language: str = "he",
) -> FlashcardRules:
    """Rules for cards about one passage of a thinker's work."""
    text = _PHILOSOPHY_FALLBACK_TEXT.get(language, _PHILOSOPHY_FALLBACK_TEXT["he"])
    front = text["front"].format(thinker=thinker)
    default_tags = (thinker, work, chapter) if chapter else (thinker, work)
    return FlashcardRules(
        card_types=card_types,
        require_context_logic=strict,
        default_tags=default_tags,
        no_valid_cards=error_card(
            front,
            text["no_valid_cards"],
            text["no_valid_cards_logic"],
            thinker,
            work,
        ),
        parse_failed=error_card(
            front,
            text["parse_failed"],
            text["parse_failed_logic"],
            thinker,
            work,
        ),
    )
