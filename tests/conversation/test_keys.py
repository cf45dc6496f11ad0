"""Tests for conversation key derivation."""

from __future__ import annotations

from gemini_proxy.conversation.keys import SubjectKey, fingerprint_key, switched_secondary


class TestFingerprintKey:
    """Tests for fingerprint_key."""

    def test_is_deterministic_and_short(self) -> None:
        key = fingerprint_key("You are a flashcard generator.", {"subject": "biology"})
        assert key == fingerprint_key("You are a flashcard generator.", {"subject": "biology"})
        assert len(key) == 16
        assert all(c in "0123456789abcdef" for c in key)

    def test_metadata_order_does_not_matter(self) -> None:
        a = fingerprint_key("instruction", {"a": "1", "b": "2"})
        b = fingerprint_key("instruction", {"b": "2", "a": "1"})
        assert a == b

    def test_differs_by_instruction_and_metadata(self) -> None:
        base = fingerprint_key("instruction", {"a": "1"})
        assert fingerprint_key("other instruction", {"a": "1"}) != base
        assert fingerprint_key("instruction", {"a": "2"}) != base
        assert fingerprint_key("instruction") != base

    def test_missing_and_empty_metadata_are_equal(self) -> None:
        assert fingerprint_key("instruction") == fingerprint_key("instruction", {})


class TestSubjectKey:
    """Tests for SubjectKey and the work-switch predicate."""

    def test_str_joins_subject_and_secondary(self) -> None:
        assert str(SubjectKey("הובס", "לויתן")) == "הובס|לויתן"

    def test_is_hashable_value(self) -> None:
        assert SubjectKey("Kant", "Critique") == SubjectKey("Kant", "Critique")
        assert len({SubjectKey("Kant", "Critique"), SubjectKey("Kant", "Critique")}) == 1

    def test_switched_secondary_matches_other_works_only(self) -> None:
        predicate = switched_secondary("Kant", "Groundwork")
        assert predicate(SubjectKey("Kant", "Critique"))
        assert not predicate(SubjectKey("Kant", "Groundwork"))
        assert not predicate(SubjectKey("Hobbes", "Critique"))

    def test_switched_secondary_ignores_string_keys(self) -> None:
        """A fingerprint key that happens to look like 'subject|work' is left alone."""
        predicate = switched_secondary("Kant", "Groundwork")
        assert not predicate("Kant|Critique")

    def test_subject_with_separator_is_not_confused(self) -> None:
        predicate = switched_secondary("A|B", "C")
        assert not predicate(SubjectKey("A", "B|C"))
