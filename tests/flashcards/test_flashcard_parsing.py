"""Tests for parsing flashcard answers."""

from __future__ import annotations

import json

from gemini_proxy.constants import PHILOSOPHY_CARD_TYPES
from gemini_proxy.flashcards._parsing import (
    GENERIC_NO_VALID_CARDS,
    GENERIC_PARSE_FAILED,
    FlashcardRules,
    parse_flashcards,
    philosophy_rules,
)


def _answer(*cards: object) -> str:
    return json.dumps({"flashcards": list(cards)})


VALID = {
    "type": "Concept",
    "front": " What is the state of nature? ",
    "back": " A war of all against all. ",
    "context_logic": "Without a sovereign there is no security.",
    "tags": ["Concept", "Hobbes", 7],
}


class TestLenientRules:
    """Tests for the generic, lenient rules."""

    def test_valid_card_is_trimmed(self) -> None:
        [card] = parse_flashcards(_answer(VALID))
        assert card.front == "What is the state of nature?"
        assert card.back == "A war of all against all."
        assert card.tags == ["Concept", "Hobbes"]

    def test_invalid_cards_are_dropped(self) -> None:
        cards = parse_flashcards(
            _answer(
                VALID,
                {"type": "Concept", "front": "   ", "back": "b"},
                {"type": 3, "front": "f", "back": "b"},
                {"front": "f", "back": "b"},
                "not a card",
                {"type": "Example", "front": "f2", "back": "b2"},
            ),
        )
        assert [card.front for card in cards] == ["What is the state of nature?", "f2"]

    def test_context_logic_and_tags_are_optional(self) -> None:
        [card] = parse_flashcards(_answer({"type": "Any", "front": "f", "back": "b"}))
        assert card.context_logic is None
        assert card.tags is None

    def test_card_types_filter(self) -> None:
        rules = FlashcardRules(card_types=("Definition",))
        cards = parse_flashcards(
            _answer(
                {"type": "Definition", "front": "f1", "back": "b1"},
                {"type": "Example", "front": "f2", "back": "b2"},
            ),
            rules,
        )
        assert [card.type for card in cards] == ["Definition"]

    def test_zero_valid_cards_yields_error_card(self) -> None:
        cards = parse_flashcards(_answer({"type": "Concept", "front": "", "back": ""}))
        assert cards == [GENERIC_NO_VALID_CARDS]
        assert cards[0].type == "Error"
        assert "Error" in (cards[0].tags or [])

    def test_empty_array_yields_error_card(self) -> None:
        assert parse_flashcards('{"flashcards": []}') == [GENERIC_NO_VALID_CARDS]

    def test_missing_array_yields_parse_error_card(self) -> None:
        assert parse_flashcards('{"cards": []}') == [GENERIC_PARSE_FAILED]

    def test_not_json_yields_parse_error_card(self) -> None:
        [card] = parse_flashcards("not json")
        assert card.type == "Error"
        assert card == GENERIC_PARSE_FAILED

    def test_fallback_card_is_a_copy(self) -> None:
        [card] = parse_flashcards("not json")
        card.tags.append("mutated")  # type: ignore[union-attr]
        assert GENERIC_PARSE_FAILED.tags == ["Error"]


class TestStrictRules:
    """Tests for the philosophy rules."""

    def test_requires_known_type_and_context_logic(self) -> None:
        rules = philosophy_rules(PHILOSOPHY_CARD_TYPES, "Hobbes", "Leviathan")
        cards = parse_flashcards(
            _answer(
                VALID,
                {**VALID, "type": "Example"},
                {**VALID, "context_logic": None},
                {**VALID, "context_logic": "  "},
            ),
            rules,
        )
        assert len(cards) == 1
        assert cards[0].context_logic == "Without a sovereign there is no security."

    def test_default_tags(self) -> None:
        rules = philosophy_rules(PHILOSOPHY_CARD_TYPES, "Hobbes", "Leviathan", "13")
        card = {key: value for key, value in VALID.items() if key != "tags"}
        [parsed] = parse_flashcards(_answer(card), rules)
        assert parsed.tags == ["Concept", "Hobbes", "Leviathan", "13"]

    def test_default_tags_without_chapter(self) -> None:
        rules = philosophy_rules(PHILOSOPHY_CARD_TYPES, "Hobbes", "Leviathan")
        card = {key: value for key, value in VALID.items() if key != "tags"}
        [parsed] = parse_flashcards(_answer(card), rules)
        assert parsed.tags == ["Concept", "Hobbes", "Leviathan"]

    def test_fallback_cards_mention_thinker(self) -> None:
        rules = philosophy_rules(PHILOSOPHY_CARD_TYPES, "הובס", "לויתן")
        [card] = parse_flashcards("not json", rules)
        assert card.type == "Error"
        assert "הובס" in card.front
        assert card.tags == ["Error", "הובס", "לויתן"]

        [card] = parse_flashcards('{"flashcards": [{"type": "Concept"}]}', rules)
        assert card.type == "Error"
        assert card.back.startswith("לא ניתן היה לעבד את הפסקה")

    def test_english_fallback(self) -> None:
        rules = philosophy_rules(PHILOSOPHY_CARD_TYPES, "Kant", "Groundwork", language="en")
        [card] = parse_flashcards("not json", rules)
        assert card.front == "What is the main idea of this passage by Kant?"

    def test_lenient_domain_keeps_cards_without_context_logic(self) -> None:
        rules = philosophy_rules(None, "Hobbes", "Leviathan", strict=False)
        [card] = parse_flashcards(_answer({"type": "Any", "front": "f", "back": "b"}), rules)
        assert card.tags == ["Any", "Hobbes", "Leviathan"]
