"""Flashcard generation over cached Gemini conversations."""

from __future__ import annotations

from gemini_proxy.flashcards.domains import KANT, POLITICAL_PHILOSOPHY, DomainPolicy
from gemini_proxy.flashcards.engine import FlashcardEngine
from gemini_proxy.flashcards.models import Flashcard, FlashcardResult

__all__ = [
    "KANT",
    "POLITICAL_PHILOSOPHY",
    "DomainPolicy",
    "Flashcard",
    "FlashcardEngine",
    "FlashcardResult",
]
