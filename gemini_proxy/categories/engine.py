"""Single-shot category identification use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlparse

from gemini_proxy.categories._parsing import parse_categories, parse_description_and_categories
from gemini_proxy.categories._prompt import build_category_prompt, build_youtube_prompt
from gemini_proxy.constants import YOUTUBE_HOSTS, YOUTUBE_MIME_TYPE
from gemini_proxy.core.errors import InputValidationError, ProviderError
from gemini_proxy.core.parsing import preview
from gemini_proxy.services.base import Attachment

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gemini_proxy.categories.models import AnalysisResult
    from gemini_proxy.services.base import GenerativeService

LOGGER = logging.getLogger(__name__)

# Placeholders used to validate a YouTube request's vocabulary alone
_VIDEO_TITLE = "YouTube Video"
_VIDEO_DESCRIPTION = "Video content analysis"


def validate_category_input(categories: Sequence[str], title: str, description: str) -> None:
    """Check the inputs shared by every category use case.

    Raises:
        InputValidationError: If the vocabulary is empty or a text field is blank.

    """
    if not categories:
        msg = "Categories array is required and must not be empty"
        raise InputValidationError(msg)
    if not title or not title.strip():
        msg = "Title is required and must be a non-empty string"
        raise InputValidationError(msg)
    if not description or not description.strip():
        msg = "Description is required and must be a non-empty string"
        raise InputValidationError(msg)


def extract_video_id(youtube_url: str) -> str:
    """Validate a YouTube link and return its video id.

    Supports ``youtube.com/watch?v=<id>`` and ``youtu.be/<id>`` links.

    Raises:
        InputValidationError: If the link is blank, malformed, not on YouTube or has no id.

    """
    if not youtube_url or not youtube_url.strip():
        msg = "YouTube URL is required"
        raise InputValidationError(msg)
    parsed = urlparse(youtube_url.strip())
    if not parsed.scheme or not parsed.netloc:
        msg = "Invalid YouTube URL format"
        raise InputValidationError(msg)
    host = parsed.hostname or ""
    if not any(host == h or host.endswith("." + h) for h in YOUTUBE_HOSTS):
        msg = "URL must be from YouTube (youtube.com or youtu.be)"
        raise InputValidationError(msg)

    if host.endswith("youtu.be"):
        video_id = parsed.path.lstrip("/").split("/", 1)[0]
    else:
        video_id = parse_qs(parsed.query).get("v", [""])[0]
    if not video_id:
        msg = "Invalid YouTube URL provided: no video id found"
        raise InputValidationError(msg)
    return video_id


class CategoryAnalyzer:
    """Identify categories of content with single stateless model calls.

    Args:
        service: The generative service used for every call.
        max_categories: Optional cap on the number of returned categories.

    """

    def __init__(self, service: GenerativeService, *, max_categories: int | None = None) -> None:
        """Initialize the analyzer."""
        self.service = service
        self.max_categories = max_categories

    def _cap(self, categories: list[str]) -> list[str]:
        if self.max_categories is None:
            return categories
        return categories[: self.max_categories]

    async def _generate(self, prompt: str, failure: str, attachment: Attachment | None = None) -> str:
        LOGGER.debug("Sending prompt (%d characters)", len(prompt))
        try:
            text = await self.service.generate(prompt, attachment)
        except ProviderError as e:
            LOGGER.exception("Gemini call failed")
            raise ProviderError(failure) from e
        LOGGER.debug("Raw response: %s", preview(text))
        return text

    async def identify_categories(
        self,
        categories: Sequence[str],
        title: str,
        description: str,
    ) -> list[str]:
        """Pick the categories of a title and description."""
        validate_category_input(categories, title, description)
        prompt = build_category_prompt(title, description, categories)
        text = await self._generate(prompt, "Failed to process category identification request")
        result = self._cap(parse_categories(text, categories))
        LOGGER.info("Identified %d of %d categories", len(result), len(categories))
        return result

    async def analyze_static_data(
        self,
        title: str,
        description: str,
        categories: Sequence[str],
        clarification: str | None = None,
    ) -> list[str]:
        """Pick the categories of a title and description with optional extra context."""
        validate_category_input(categories, title, description)
        prompt = build_category_prompt(
            title,
            description,
            categories,
            clarification=clarification.strip() if clarification else None,
        )
        text = await self._generate(prompt, "Failed to process static data analysis request")
        result = self._cap(parse_categories(text, categories))
        LOGGER.info("Static data analysis found %d categories", len(result))
        return result

    async def analyze_youtube_video(
        self,
        youtube_url: str,
        categories: Sequence[str],
    ) -> AnalysisResult:
        """Summarize a YouTube lecture in Hebrew and pick its categories."""
        video_id = extract_video_id(youtube_url)
        validate_category_input(categories, _VIDEO_TITLE, _VIDEO_DESCRIPTION)
        url = youtube_url.strip()
        prompt = build_youtube_prompt(categories, video_id, url)
        text = await self._generate(
            prompt,
            "Failed to process YouTube video analysis request",
            Attachment(uri=url, mime_type=YOUTUBE_MIME_TYPE),
        )
        result = parse_description_and_categories(text, categories)
        result.categories = self._cap(result.categories)
        LOGGER.info(
            "Video %s: %d characters of description, %d categories",
            video_id,
            len(result.description),
            len(result.categories),
        )
        return result
