"""Default configuration settings for the gemini-proxy package."""

from __future__ import annotations

# --- Gemini ---
DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_REQUEST_TIMEOUT = 120.0  # seconds
PLACEHOLDER_API_KEY = "your-google-api-key-here"

# --- Server ---
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3000

# --- Validation ---
MIN_CONTENT_LENGTH = 20
MIN_SYSTEM_INSTRUCTION_LENGTH = 50

# --- Flashcards ---
PHILOSOPHY_CARD_TYPES = ("Concept", "Argument", "Context", "Contrast")
ERROR_CARD_TYPE = "Error"

# --- Media ---
YOUTUBE_MIME_TYPE = "video/mp4"
YOUTUBE_HOSTS = ("youtube.com", "youtu.be")
