"""Category identification data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    """A description of analysed content with its categories."""

    description: str
    categories: list[str] = Field(default_factory=list)


class IdentifyCategoriesRequest(BaseModel):
    """Request body for ``/identifyCategories``."""

    categories: list[str] = Field(default_factory=list)
    title: str = ""
    description: str = ""


class StaticDataRequest(BaseModel):
    """Request body for ``/analyzeStaticData``."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    categories: list[str] = Field(default_factory=list)
    clarification_paragraph: str | None = Field(default=None, alias="clarificationParagraph")


class YouTubeAnalysisRequest(BaseModel):
    """Request body for ``/analyzeYouTubeVideo``."""

    model_config = ConfigDict(populate_by_name=True)

    youtube_url: str = Field(default="", alias="youtubeUrl")
    categories: list[str] = Field(default_factory=list)
