"""Abstract base classes for generative model services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from gemini_proxy.constants import YOUTUBE_MIME_TYPE

Role = Literal["user", "model"]


@dataclass(frozen=True)
class ChatTurn:
    """A single message in a conversation history."""

    role: Role
    text: str


@dataclass(frozen=True)
class Attachment:
    """A remote media reference sent alongside a prompt."""

    uri: str
    mime_type: str = YOUTUBE_MIME_TYPE


class ChatChannel(ABC):
    """A stateful conversation with the model.

    The channel keeps its own copy of the exchanges it has seen, so callers
    only send the new user message.
    """

    @abstractmethod
    async def send(self, text: str) -> str:
        """Send one user message and return the model's reply text.

        Raises:
            ProviderError: On any transport or provider failure, including a timeout.

        """
        ...


class GenerativeService(ABC):
    """Abstract base class for generative model services."""

    def __init__(self, *, model: str | None = None) -> None:
        """Initialize the generative service."""
        self.model = model

    @abstractmethod
    def create_channel(self, history: list[ChatTurn]) -> ChatChannel:
        """Open a conversation seeded with ``history``."""
        ...

    @abstractmethod
    async def generate(self, prompt: str, attachment: Attachment | None = None) -> str:
        """Run a single stateless request and return the reply text.

        Raises:
            ProviderError: On any transport or provider failure, including a timeout.

        """
        ...
