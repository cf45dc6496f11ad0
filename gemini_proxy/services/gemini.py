"""Module for interacting with Google Gemini through the google-genai SDK."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google import genai
from google.genai import types

from gemini_proxy.core.errors import ProviderError
from gemini_proxy.services.base import Attachment, ChatChannel, ChatTurn, GenerativeService

if TYPE_CHECKING:
    from google.genai.chats import AsyncChat

    from gemini_proxy.config import GeminiConfig

LOGGER = logging.getLogger(__name__)


def _to_content(turn: ChatTurn) -> types.Content:
    return types.Content(role=turn.role, parts=[types.Part(text=turn.text)])


def _reply_text(response: types.GenerateContentResponse) -> str:
    text = response.text
    if text is None:
        msg = "Gemini returned a response without text"
        raise ProviderError(msg)
    return text.strip()


class GeminiChatChannel(ChatChannel):
    """A chat session on top of ``client.aio.chats``."""

    def __init__(self, chat: AsyncChat, timeout: float) -> None:
        """Wrap an SDK chat session."""
        self._chat = chat
        self._timeout = timeout

    async def send(self, text: str) -> str:
        """Send a message within the configured timeout."""
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._chat.send_message(text)
        except TimeoutError as e:
            msg = f"Gemini did not answer within {self._timeout:g} seconds"
            raise ProviderError(msg) from e
        except ProviderError:
            raise
        except Exception as e:
            msg = f"Gemini chat request failed: {e}"
            raise ProviderError(msg) from e
        return _reply_text(response)


class GeminiService(GenerativeService):
    """Generative service backed by the Gemini API."""

    def __init__(self, gemini_config: GeminiConfig) -> None:
        """Initialize the GeminiService.

        The SDK client is created on first use so that a missing API key only
        fails the requests that need it.
        """
        super().__init__(model=gemini_config.model)
        self.gemini_config = gemini_config
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        """The lazily created SDK client."""
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.gemini_config.api_key)
            except Exception as e:
                msg = f"Could not create the Gemini client: {e}"
                raise ProviderError(msg) from e
        return self._client

    def create_channel(self, history: list[ChatTurn]) -> ChatChannel:
        """Open a Gemini chat seeded with ``history``."""
        LOGGER.debug("Creating Gemini chat with %d history turns", len(history))
        try:
            chat = self.client.aio.chats.create(
                model=self.gemini_config.model,
                history=[_to_content(turn) for turn in history],
            )
        except ProviderError:
            raise
        except Exception as e:
            msg = f"Could not open a Gemini chat: {e}"
            raise ProviderError(msg) from e
        return GeminiChatChannel(chat, self.gemini_config.request_timeout)

    async def generate(self, prompt: str, attachment: Attachment | None = None) -> str:
        """Run a single ``generate_content`` call."""
        contents: list[str | types.Part] = [prompt]
        if attachment is not None:
            contents.append(
                types.Part(
                    file_data=types.FileData(
                        file_uri=attachment.uri,
                        mime_type=attachment.mime_type,
                    ),
                ),
            )
        timeout = self.gemini_config.request_timeout
        try:
            async with asyncio.timeout(timeout):
                response = await self.client.aio.models.generate_content(
                    model=self.gemini_config.model,
                    contents=contents,
                )
        except TimeoutError as e:
            msg = f"Gemini did not answer within {timeout:g} seconds"
            raise ProviderError(msg) from e
        except ProviderError:
            raise
        except Exception as e:
            msg = f"Gemini request failed: {e}"
            raise ProviderError(msg) from e
        return _reply_text(response)
