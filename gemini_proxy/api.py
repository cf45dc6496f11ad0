"""FastAPI application factory for the Gemini proxy."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gemini_proxy.categories.engine import CategoryAnalyzer
from gemini_proxy.categories.models import (  # noqa: TC001
    IdentifyCategoriesRequest,
    StaticDataRequest,
    YouTubeAnalysisRequest,
)
from gemini_proxy.conversation.keys import SubjectKey
from gemini_proxy.conversation.store import ConversationStore
from gemini_proxy.core.errors import GeminiProxyError, InputValidationError, ProviderError
from gemini_proxy.flashcards.domains import KANT, POLITICAL_PHILOSOPHY
from gemini_proxy.flashcards.engine import FlashcardEngine
from gemini_proxy.flashcards.models import (  # noqa: TC001
    FlashcardResult,
    GenericFlashcardsRequest,
    PhilosophyFlashcardsRequest,
)

if TYPE_CHECKING:
    from gemini_proxy.services.base import GenerativeService

LOGGER = logging.getLogger(__name__)

# Value of the ``error`` field of failed responses, per route
ERROR_LABELS = {
    "/identifyCategories": "Failed to process category identification",
    "/analyzeStaticData": "Failed to process static data analysis",
    "/analyzeYouTubeVideo": "Failed to process YouTube video analysis",
    "/flashcards/generate": "Failed to generate flashcards",
    "/anki/philosophy/political": "Failed to generate flashcards",
    "/anki/philosophy/kant": "Failed to generate flashcards",
    "/generateFlashcards": "Failed to generate flashcards",
}


def _error_response(request: Request, exc: GeminiProxyError, status_code: int) -> JSONResponse:
    label = ERROR_LABELS.get(request.url.path, "Request failed")
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": label, "message": str(exc)},
    )


def _flashcards_body(result: FlashcardResult) -> dict[str, Any]:
    return {"success": True, **result.model_dump(exclude_none=True)}


def create_app(service: GenerativeService, store: ConversationStore | None = None) -> FastAPI:
    """Create the FastAPI app."""
    store = store if store is not None else ConversationStore(service)
    analyzer = CategoryAnalyzer(service)
    engine = FlashcardEngine(service, store)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):  # noqa: ANN202
        LOGGER.info("Gemini proxy ready (model: %s)", service.model)
        yield
        LOGGER.info("Shutting down, dropping %d conversations", store.clear())

    app = FastAPI(title="Gemini Proxy", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        client_ip = request.client.host if request.client else "unknown"
        LOGGER.info("%s %s from %s", request.method, request.url.path, client_ip)
        response = await call_next(request)
        if response.status_code >= 400:  # noqa: PLR2004
            LOGGER.warning(
                "Request failed: %s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
            )
        return response

    @app.exception_handler(InputValidationError)
    async def validation_error_handler(request: Request, exc: InputValidationError) -> JSONResponse:
        return _error_response(request, exc, 400)

    @app.exception_handler(ProviderError)
    async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
        return _error_response(request, exc, 500)

    @app.post("/identifyCategories")
    async def identify_categories(body: IdentifyCategoriesRequest) -> dict[str, Any]:
        """Pick the categories of a title and description."""
        matching = await analyzer.identify_categories(body.categories, body.title, body.description)
        return {
            "success": True,
            "matchingCategories": matching,
            "totalCategoriesProvided": len(body.categories),
        }

    @app.post("/analyzeStaticData")
    async def analyze_static_data(body: StaticDataRequest) -> dict[str, Any]:
        """Pick the categories of a title and description with optional clarification."""
        categories = await analyzer.analyze_static_data(
            body.title,
            body.description,
            body.categories,
            body.clarification_paragraph,
        )
        return {"success": True, "categories": categories}

    @app.post("/analyzeYouTubeVideo")
    async def analyze_youtube_video(body: YouTubeAnalysisRequest) -> dict[str, Any]:
        """Summarize a YouTube lecture and pick its categories."""
        result = await analyzer.analyze_youtube_video(body.youtube_url, body.categories)
        return {"success": True, "description": result.description, "categories": result.categories}

    @app.post("/flashcards/generate")
    async def generate_flashcards(body: GenericFlashcardsRequest) -> dict[str, Any]:
        """Generate flashcards under a caller-supplied system instruction."""
        return _flashcards_body(await engine.generate_generic(body))

    @app.post("/anki/philosophy/political")
    async def political_flashcards(body: PhilosophyFlashcardsRequest) -> dict[str, Any]:
        """Generate political philosophy flashcards."""
        return _flashcards_body(await engine.generate_for_domain(POLITICAL_PHILOSOPHY, body))

    @app.post("/anki/philosophy/kant")
    async def kant_flashcards(body: PhilosophyFlashcardsRequest) -> dict[str, Any]:
        """Generate Kantian philosophy flashcards."""
        return _flashcards_body(await engine.generate_for_domain(KANT, body))

    @app.post("/generateFlashcards")
    async def legacy_flashcards(body: PhilosophyFlashcardsRequest) -> dict[str, Any]:
        """Generate political philosophy flashcards without a conversation."""
        return _flashcards_body(await engine.generate_single_shot(POLITICAL_PHILOSOPHY, body))

    @app.delete("/conversations/{key:path}")
    def clear_conversation(key: str) -> dict[str, Any]:
        """Drop one conversation by its key."""
        cleared = store.invalidate(key)
        if not cleared:
            thinker, sep, work = key.partition("|")
            if sep:
                cleared = store.invalidate(SubjectKey(thinker, work))
        return {"success": True, "cleared": cleared}

    @app.delete("/conversations")
    def clear_conversations() -> dict[str, Any]:
        """Drop every conversation."""
        return {"success": True, "cleared": store.clear()}

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "model": service.model, "conversations": len(store)}

    return app
