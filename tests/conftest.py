"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import io

import pytest
from rich.console import Console

from gemini_proxy.conversation.store import ConversationStore
from gemini_proxy.core.errors import ProviderError
from gemini_proxy.services.base import Attachment, ChatChannel, ChatTurn, GenerativeService


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


class FakeChannel(ChatChannel):
    """A channel that answers from a script and records what it was sent."""

    def __init__(self, service: FakeService, history: list[ChatTurn]) -> None:
        self.service = service
        self.history = list(history)
        self.sent: list[str] = []

    async def send(self, text: str) -> str:
        self.sent.append(text)
        self.service.sent.append(text)
        return self.service.next_reply()


class FakeService(GenerativeService):
    """In-memory generative service.

    Replies are taken from ``replies`` in order, repeating the last one. A reply
    that is an exception instance is raised instead of returned.
    """

    def __init__(self, replies: list[str | BaseException] | None = None) -> None:
        super().__init__(model="fake-model")
        self.replies: list[str | BaseException] = list(replies or ['{"categories": []}'])
        self.channels: list[FakeChannel] = []
        self.sent: list[str] = []
        self.prompts: list[tuple[str, Attachment | None]] = []

    @property
    def create_channel_calls(self) -> int:
        return len(self.channels)

    def next_reply(self) -> str:
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def create_channel(self, history: list[ChatTurn]) -> ChatChannel:
        channel = FakeChannel(self, history)
        self.channels.append(channel)
        return channel

    async def generate(self, prompt: str, attachment: Attachment | None = None) -> str:
        self.prompts.append((prompt, attachment))
        return self.next_reply()


@pytest.fixture
def mock_console() -> Console:
    """Provide a console that writes to a StringIO for testing."""
    return Console(file=io.StringIO(), width=80, force_terminal=True)


@pytest.fixture
def fake_service() -> FakeService:
    """A fake service answering with an empty categories object."""
    return FakeService()


@pytest.fixture
def store(fake_service: FakeService) -> ConversationStore:
    """A conversation store backed by the fake service."""
    return ConversationStore(fake_service)


@pytest.fixture
def provider_error() -> ProviderError:
    """A transport failure as raised by a real service."""
    return ProviderError("connection reset")


@pytest.fixture
def make_service() -> type[FakeService]:
    """The fake service class, for tests that script their own replies."""
    return FakeService
