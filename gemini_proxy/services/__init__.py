"""Generative model services used by the flashcard and category engines."""

from __future__ import annotations

from gemini_proxy.services.base import Attachment, ChatChannel, ChatTurn, GenerativeService

__all__ = ["Attachment", "ChatChannel", "ChatTurn", "GenerativeService"]
