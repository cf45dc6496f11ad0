"""Factory functions for creating service instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gemini_proxy.services.gemini import GeminiService

if TYPE_CHECKING:
    from gemini_proxy import config
    from gemini_proxy.services.base import GenerativeService


def get_generative_service(gemini_config: config.GeminiConfig) -> GenerativeService:
    """Get the generative service for the configured provider."""
    gemini_config.warn_if_unusable()
    return GeminiService(gemini_config)
