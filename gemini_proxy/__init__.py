"""Gemini proxy: prompt templating, tolerant response parsing and conversation caching."""

from __future__ import annotations

__version__ = "1.0.0"
