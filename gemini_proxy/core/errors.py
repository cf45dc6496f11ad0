"""Exception hierarchy for gemini-proxy."""

from __future__ import annotations


class GeminiProxyError(Exception):
    """Base class for all gemini-proxy errors."""


class InputValidationError(GeminiProxyError, ValueError):
    """Raised when caller-supplied input violates a precondition.

    Always raised before any call to the model, so the HTTP layer can map it
    to a client error.
    """


class ProviderError(GeminiProxyError):
    """Raised when a call to the generative model fails or times out."""


class ResponseParseError(GeminiProxyError):
    """Raised when a model response is not the JSON shape we asked for.

    Only used inside the response parsers; it never escapes them.
    """
