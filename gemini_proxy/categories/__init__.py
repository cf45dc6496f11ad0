"""Category identification for Jewish philosophy content.

Maps titles, descriptions and YouTube lectures onto a caller-supplied closed
vocabulary of category labels.
"""

from __future__ import annotations

from gemini_proxy.categories.engine import CategoryAnalyzer
from gemini_proxy.categories.models import AnalysisResult

__all__ = ["AnalysisResult", "CategoryAnalyzer"]
