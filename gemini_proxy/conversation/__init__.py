"""Multi-turn conversation cache with bounded history."""

from __future__ import annotations

from gemini_proxy.conversation.keys import SubjectKey, fingerprint_key, switched_secondary
from gemini_proxy.conversation.store import ConversationKey, ConversationStore

__all__ = [
    "ConversationKey",
    "ConversationStore",
    "SubjectKey",
    "fingerprint_key",
    "switched_secondary",
]
