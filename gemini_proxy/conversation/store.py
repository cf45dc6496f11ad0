"""In-memory conversation cache.

Each conversation holds an open channel to the model, the recorded history
and an initialized flag. The history is truncated after every exchange to
the first exchange plus the most recent one, which keeps the system
instruction (sent with the first message) in context while bounding the
size of the replayed history.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gemini_proxy.conversation.keys import SubjectKey
from gemini_proxy.services.base import ChatTurn

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from gemini_proxy.services.base import ChatChannel, GenerativeService

LOGGER = logging.getLogger(__name__)

ConversationKey = str | SubjectKey

# First exchange plus latest exchange, two turns each
MAX_HISTORY_TURNS = 4


@dataclass
class ConversationState:
    """Per-key state held by the store."""

    channel: ChatChannel
    history: list[ChatTurn] = field(default_factory=list)
    initialized: bool = False


def truncate_history(history: list[ChatTurn]) -> list[ChatTurn]:
    """Keep the first exchange and the latest exchange."""
    if len(history) <= MAX_HISTORY_TURNS:
        return history
    return [*history[:2], *history[-2:]]


class ConversationStore:
    """Conversation states keyed by :data:`ConversationKey`.

    Create one store per application and pass it to the engines that need it.
    """

    def __init__(self, service: GenerativeService) -> None:
        """Initialize an empty store that opens channels through ``service``."""
        self._service = service
        self._states: dict[ConversationKey, ConversationState] = {}
        self._locks: dict[ConversationKey, asyncio.Lock] = {}
        # Tasks holding or waiting for each lock
        self._lock_users: dict[ConversationKey, int] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def keys(self) -> list[ConversationKey]:
        """Return the keys of all live conversations."""
        return list(self._states)

    def get_or_create(self, key: ConversationKey) -> ChatChannel:
        """Return the channel for ``key``, opening one if needed.

        A new channel is seeded with the recorded history (empty for a fresh
        key).
        """
        state = self._states.get(key)
        if state is not None:
            LOGGER.debug("Reusing conversation %s", key)
            return state.channel
        channel = self._service.create_channel([])
        self._states[key] = ConversationState(channel=channel)
        LOGGER.info("Created conversation %s", key)
        return channel

    def is_first_message(self, key: ConversationKey) -> bool:
        """Whether the next message for ``key`` must carry the system instruction."""
        state = self._states.get(key)
        return state is None or not state.initialized

    def mark_initialized(self, key: ConversationKey) -> None:
        """Record that the first message for ``key`` has been prepared."""
        state = self._states.get(key)
        if state is not None:
            state.initialized = True

    def record_exchange(self, key: ConversationKey, user_text: str, model_text: str) -> None:
        """Append an exchange to the history of ``key`` and truncate it."""
        state = self._states.get(key)
        if state is None:
            return
        state.history.append(ChatTurn(role="user", text=user_text))
        state.history.append(ChatTurn(role="model", text=model_text))
        state.history = truncate_history(state.history)

    def history(self, key: ConversationKey) -> list[ChatTurn]:
        """Return a copy of the recorded history of ``key``."""
        state = self._states.get(key)
        return list(state.history) if state is not None else []

    def invalidate(self, key: ConversationKey) -> bool:
        """Drop all state for ``key``. Returns whether anything was dropped."""
        removed = self._states.pop(key, None) is not None
        if removed:
            LOGGER.info("Invalidated conversation %s", key)
        self._prune_lock(key)
        return removed

    def invalidate_if(self, predicate: Callable[[ConversationKey], bool]) -> list[ConversationKey]:
        """Drop every conversation whose key satisfies ``predicate``."""
        evicted = [key for key in self._states if predicate(key)]
        for key in evicted:
            del self._states[key]
            self._prune_lock(key)
            LOGGER.info("Evicted conversation %s", key)
        return evicted

    def clear(self) -> int:
        """Drop every conversation and return how many there were."""
        count = len(self._states)
        self._states.clear()
        for key in list(self._locks):
            self._prune_lock(key)
        return count

    @asynccontextmanager
    async def lock(self, key: ConversationKey) -> AsyncIterator[None]:
        """Serialize conversation turns for ``key``.

        The lock is forgotten once its conversation is gone and no task holds
        or waits for it.
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
            if key not in self._states:
                self._prune_lock(key)

    def _prune_lock(self, key: ConversationKey) -> None:
        if key not in self._lock_users:
            self._locks.pop(key, None)
