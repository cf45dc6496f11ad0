"""Flashcard data models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Flashcard(BaseModel):
    """A single Anki-style card."""

    type: str
    front: str
    back: str
    context_logic: str | None = None
    tags: list[str] | None = None


class FlashcardResult(BaseModel):
    """Cards generated for one request plus request metadata.

    ``metadata`` always carries ``totalCards``; conversational requests add
    ``conversationKey``.
    """

    flashcards: list[Flashcard]
    metadata: dict[str, Any] = Field(default_factory=dict)


class GenericFlashcardsRequest(BaseModel):
    """Request body for ``/flashcards/generate``."""

    model_config = ConfigDict(populate_by_name=True)

    content: str = ""
    system_instruction: str = Field(default="", alias="systemInstruction")
    context_metadata: dict[str, str] | None = Field(default=None, alias="contextMetadata")
    card_types: list[str] | None = Field(default=None, alias="cardTypes")
    language: str = "en"
    extra_cards: bool = Field(default=False, alias="extraCards")
    conversation_key: str | None = Field(default=None, alias="conversationKey")


class PhilosophyFlashcardsRequest(BaseModel):
    """Request body for the philosophy flashcard endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    paragraph: str = ""
    thinker: str = ""
    work: str = ""
    chapter: str | None = None
    language: Literal["he", "en"] = "he"
    extra_cards: bool = Field(default=False, alias="extraCards")
