"""Flashcard generation engine.

One engine serves every flashcard domain. A domain only contributes its
prompt text, its card type vocabulary and how strictly cards are validated
(see :mod:`gemini_proxy.flashcards.domains`). Conversations are kept in a
shared :class:`~gemini_proxy.conversation.ConversationStore`, so the
system instruction is sent once per conversation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gemini_proxy.constants import MIN_CONTENT_LENGTH, MIN_SYSTEM_INSTRUCTION_LENGTH
from gemini_proxy.conversation.keys import SubjectKey, fingerprint_key, switched_secondary
from gemini_proxy.core.errors import InputValidationError, ProviderError
from gemini_proxy.core.parsing import preview
from gemini_proxy.flashcards._parsing import FlashcardRules, parse_flashcards, philosophy_rules
from gemini_proxy.flashcards._prompt import build_generic_message, build_philosophy_message
from gemini_proxy.flashcards.models import FlashcardResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from gemini_proxy.conversation.store import ConversationKey, ConversationStore
    from gemini_proxy.flashcards.domains import DomainPolicy
    from gemini_proxy.flashcards.models import (
        Flashcard,
        GenericFlashcardsRequest,
        PhilosophyFlashcardsRequest,
    )
    from gemini_proxy.services.base import GenerativeService

LOGGER = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate flashcards from content"


def validate_generic_request(request: GenericFlashcardsRequest) -> None:
    """Check a generic flashcard request before calling the model.

    Raises:
        InputValidationError: On missing or too short content or system instruction.

    """
    content = request.content.strip()
    if not content:
        msg = "Content is required and cannot be empty"
        raise InputValidationError(msg)
    if len(content) < MIN_CONTENT_LENGTH:
        msg = f"Content is too short. Please provide at least {MIN_CONTENT_LENGTH} characters"
        raise InputValidationError(msg)
    instruction = request.system_instruction.strip()
    if not instruction:
        msg = "System instruction is required"
        raise InputValidationError(msg)
    if len(instruction) < MIN_SYSTEM_INSTRUCTION_LENGTH:
        msg = (
            "System instruction is too short. Please provide detailed instructions "
            f"(at least {MIN_SYSTEM_INSTRUCTION_LENGTH} characters)"
        )
        raise InputValidationError(msg)


def validate_philosophy_request(request: PhilosophyFlashcardsRequest) -> None:
    """Check a philosophy flashcard request before calling the model.

    Raises:
        InputValidationError: On a missing or too short paragraph, or a blank thinker or work.

    """
    paragraph = request.paragraph.strip()
    if not paragraph:
        msg = "הפסקה לניתוח היא שדה חובה ולא יכולה להיות ריקה"
        raise InputValidationError(msg)
    if len(paragraph) < MIN_CONTENT_LENGTH:
        msg = f"הפסקה קצרה מדי. יש להזין לפחות {MIN_CONTENT_LENGTH} תווים"
        raise InputValidationError(msg)
    if not request.thinker.strip():
        msg = "שם ההוגה הוא שדה חובה"
        raise InputValidationError(msg)
    if not request.work.strip():
        msg = "שם היצירה הוא שדה חובה"
        raise InputValidationError(msg)


def _philosophy_metadata(request: PhilosophyFlashcardsRequest) -> dict[str, Any]:
    metadata: dict[str, Any] = {"thinker": request.thinker, "work": request.work}
    if request.chapter:
        metadata["chapter"] = request.chapter
    return metadata


def _policy_rules(policy: DomainPolicy, request: PhilosophyFlashcardsRequest) -> FlashcardRules:
    return philosophy_rules(
        policy.card_types,
        request.thinker,
        request.work,
        request.chapter,
        strict=policy.strict,
        language=request.language,
    )


class FlashcardEngine:
    """Generate flashcards through cached model conversations.

    Args:
        service: The generative service used for stateless requests.
        store: The conversation store shared by all domains.

    """

    def __init__(self, service: GenerativeService, store: ConversationStore) -> None:
        """Initialize the engine."""
        self.service = service
        self.store = store

    async def _converse(
        self,
        key: ConversationKey,
        build_message: Callable[[bool], str],
        rules: FlashcardRules,
        *,
        before_create: Callable[[], None] | None = None,
    ) -> list[Flashcard]:
        """Run one conversation turn for ``key`` and parse the answer.

        ``build_message`` receives whether this is the first message of the
        conversation. ``before_create`` runs only when a new channel is about
        to be opened.
        """
        async with self.store.lock(key):
            first = self.store.is_first_message(key)
            if before_create is not None and key not in self.store:
                before_create()
            try:
                channel = self.store.get_or_create(key)
                message = build_message(first)
                if first:
                    self.store.mark_initialized(key)
                    LOGGER.debug("System instruction included in first message for %s", key)
                LOGGER.debug("Sending message for %s (%d characters)", key, len(message))
                text = await channel.send(message)
            except ProviderError as e:
                LOGGER.exception("Flashcard generation failed for %s", key)
                self.store.invalidate(key)
                raise ProviderError(GENERATION_FAILED) from e
            except BaseException:
                # Covers cancellation: the entry may be marked initialized with no exchange
                self.store.invalidate(key)
                raise
            self.store.record_exchange(key, message, text)
        LOGGER.debug("Raw response for %s: %s", key, preview(text))
        cards = parse_flashcards(text, rules)
        LOGGER.info("Generated %d flashcards for %s", len(cards), key)
        return cards

    async def generate_generic(self, request: GenericFlashcardsRequest) -> FlashcardResult:
        """Generate cards from arbitrary content under a caller-supplied instruction."""
        validate_generic_request(request)
        key = request.conversation_key or fingerprint_key(
            request.system_instruction,
            request.context_metadata,
        )
        rules = FlashcardRules(card_types=tuple(request.card_types) if request.card_types else None)
        cards = await self._converse(
            key,
            lambda first: build_generic_message(
                request.content,
                request.system_instruction,
                request.context_metadata,
                extra_cards=request.extra_cards,
                first_message=first,
            ),
            rules,
        )
        metadata: dict[str, Any] = {"totalCards": len(cards), "conversationKey": key}
        if request.context_metadata:
            metadata["contextMetadata"] = request.context_metadata
        return FlashcardResult(flashcards=cards, metadata=metadata)

    async def generate_for_domain(
        self,
        policy: DomainPolicy,
        request: PhilosophyFlashcardsRequest,
    ) -> FlashcardResult:
        """Generate cards for a passage of a thinker's work in a philosophy domain.

        Conversations are keyed by thinker and work. Opening a conversation for
        a new work of a thinker drops that thinker's conversations about other
        works.
        """
        validate_philosophy_request(request)
        key = SubjectKey(request.thinker, request.work)

        def evict_other_works() -> None:
            evicted = self.store.invalidate_if(switched_secondary(request.thinker, request.work))
            if evicted:
                LOGGER.info("Switched work for %s, dropped %d conversations", request.thinker, len(evicted))

        cards = await self._converse(
            key,
            lambda first: build_philosophy_message(
                policy,
                request.paragraph,
                request.thinker,
                request.work,
                request.chapter,
                language=request.language,
                extra_cards=request.extra_cards,
                first_message=first,
            ),
            _policy_rules(policy, request),
            before_create=evict_other_works,
        )
        metadata = {"totalCards": len(cards), "conversationKey": str(key)}
        metadata.update(_philosophy_metadata(request))
        return FlashcardResult(flashcards=cards, metadata=metadata)

    async def generate_single_shot(
        self,
        policy: DomainPolicy,
        request: PhilosophyFlashcardsRequest,
    ) -> FlashcardResult:
        """Generate cards for a passage without keeping a conversation."""
        validate_philosophy_request(request)
        prompt = build_philosophy_message(
            policy,
            request.paragraph,
            request.thinker,
            request.work,
            request.chapter,
            language=request.language,
            extra_cards=request.extra_cards,
            first_message=True,
        )
        try:
            text = await self.service.generate(prompt)
        except ProviderError as e:
            LOGGER.exception("Single-shot flashcard generation failed")
            raise ProviderError(GENERATION_FAILED) from e
        cards = parse_flashcards(text, _policy_rules(policy, request))
        metadata: dict[str, Any] = {"totalCards": len(cards)}
        metadata.update(_philosophy_metadata(request))
        return FlashcardResult(flashcards=cards, metadata=metadata)
