"""Tests for the HTTP API."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from gemini_proxy.api import create_app
from gemini_proxy.conversation.keys import SubjectKey
from gemini_proxy.conversation.store import ConversationStore
from gemini_proxy.core.errors import ProviderError

if TYPE_CHECKING:
    from tests.conftest import FakeService

CATEGORIES = ["פילוסופיה פוליטית", "אתיקה", "היסטוריה"]
PARAGRAPH = "The life of man in the state of nature is solitary, poor, nasty, brutish and short."
CARD = {
    "type": "Argument",
    "front": "Why is the state of nature a state of war?",
    "back": "Equality of ability and scarcity without a common power.",
    "context_logic": "No sovereign means no security.",
}
CARDS_ANSWER = json.dumps({"flashcards": [CARD]})


def _client(service: FakeService) -> TestClient:
    return TestClient(create_app(service))


class TestCategoryRoutes:
    """Tests for the category endpoints."""

    def test_identify_categories(self, make_service: type[FakeService]) -> None:
        service = make_service(['```json\n{"categories": ["אתיקה", "מתמטיקה"]}\n```'])
        response = _client(service).post(
            "/identifyCategories",
            json={"categories": CATEGORIES, "title": "צדק", "description": "הרצאה על צדק חלוקתי"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "matchingCategories": ["אתיקה"],
            "totalCategoriesProvided": 3,
        }

    def test_empty_categories_rejected(self, make_service: type[FakeService]) -> None:
        service = make_service()
        response = _client(service).post(
            "/identifyCategories",
            json={"categories": [], "title": "צדק", "description": "הרצאה"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Failed to process category identification",
            "message": "Categories array is required and must not be empty",
        }
        assert service.prompts == []

    def test_provider_failure(self, make_service: type[FakeService]) -> None:
        service = make_service([ProviderError("reset")])
        response = _client(service).post(
            "/analyzeStaticData",
            json={"categories": CATEGORIES, "title": "צדק", "description": "הרצאה"},
        )
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Failed to process static data analysis"
        assert body["message"] == "Failed to process static data analysis request"

    def test_static_data_with_clarification(self, make_service: type[FakeService]) -> None:
        service = make_service(['{"categories": ["היסטוריה"]}'])
        response = _client(service).post(
            "/analyzeStaticData",
            json={
                "categories": CATEGORIES,
                "title": "המהפכה הצרפתית",
                "description": "סקירה",
                "clarificationParagraph": "הקורס עוסק בעת החדשה",
            },
        )
        assert response.json() == {"success": True, "categories": ["היסטוריה"]}
        assert "הקורס עוסק בעת החדשה" in service.prompts[0][0]

    def test_youtube(self, make_service: type[FakeService]) -> None:
        answer = {"description": "הרצאה על הובס", "categories": ["פילוסופיה פוליטית"]}
        service = make_service([json.dumps(answer, ensure_ascii=False)])
        response = _client(service).post(
            "/analyzeYouTubeVideo",
            json={"youtubeUrl": "https://youtu.be/abc123", "categories": CATEGORIES},
        )
        assert response.json() == {"success": True, **answer}
        _, attachment = service.prompts[0]
        assert attachment is not None
        assert attachment.uri == "https://youtu.be/abc123"

    def test_youtube_bad_host(self, make_service: type[FakeService]) -> None:
        response = _client(make_service()).post(
            "/analyzeYouTubeVideo",
            json={"youtubeUrl": "https://vimeo.com/1", "categories": CATEGORIES},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Failed to process YouTube video analysis"
        assert response.json()["message"] == "URL must be from YouTube (youtube.com or youtu.be)"


class TestFlashcardRoutes:
    """Tests for the flashcard endpoints."""

    def test_generic(self, make_service: type[FakeService]) -> None:
        service = make_service([CARDS_ANSWER])
        response = _client(service).post(
            "/flashcards/generate",
            json={
                "content": PARAGRAPH,
                "systemInstruction": "Create precise flashcards about early modern political thought.",
                "conversationKey": "deck",
            },
        )
        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["flashcards"] == [CARD]
        assert body["metadata"] == {"totalCards": 1, "conversationKey": "deck"}

    @pytest.mark.parametrize("route", ["/anki/philosophy/political", "/anki/philosophy/kant"])
    def test_philosophy_routes_keep_conversation(
        self,
        make_service: type[FakeService],
        route: str,
    ) -> None:
        service = make_service([CARDS_ANSWER])
        client = _client(service)
        payload = {"paragraph": PARAGRAPH, "thinker": "Hobbes", "work": "Leviathan"}

        client.post(route, json=payload)
        response = client.post(route, json=payload)

        assert service.create_channel_calls == 1
        card = response.json()["flashcards"][0]
        assert card["tags"] == ["Argument", "Hobbes", "Leviathan"]
        assert response.json()["metadata"]["conversationKey"] == "Hobbes|Leviathan"

    def test_philosophy_validation(self, make_service: type[FakeService]) -> None:
        response = _client(make_service()).post(
            "/anki/philosophy/political",
            json={"paragraph": PARAGRAPH, "thinker": "", "work": "Leviathan"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "שם ההוגה הוא שדה חובה"

    def test_philosophy_provider_failure(self, make_service: type[FakeService]) -> None:
        service = make_service([ProviderError("reset")])
        response = _client(service).post(
            "/anki/philosophy/kant",
            json={"paragraph": PARAGRAPH, "thinker": "Kant", "work": "Groundwork"},
        )
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to generate flashcards",
            "message": "Failed to generate flashcards from content",
        }

    def test_single_shot(self, make_service: type[FakeService]) -> None:
        service = make_service([CARDS_ANSWER])
        response = _client(service).post(
            "/generateFlashcards",
            json={"paragraph": PARAGRAPH, "thinker": "Hobbes", "work": "Leviathan"},
        )
        assert response.status_code == 200
        assert "conversationKey" not in response.json()["metadata"]
        assert service.create_channel_calls == 0


class TestConversationRoutes:
    """Tests for conversation management and health."""

    def test_clear_one(self, make_service: type[FakeService]) -> None:
        service = make_service([CARDS_ANSWER])
        store = ConversationStore(service)
        client = TestClient(create_app(service, store))
        client.post(
            "/anki/philosophy/political",
            json={"paragraph": PARAGRAPH, "thinker": "Hobbes", "work": "Leviathan"},
        )
        assert SubjectKey("Hobbes", "Leviathan") in store

        response = client.delete("/conversations/Hobbes|Leviathan")

        assert response.json() == {"success": True, "cleared": True}
        assert len(store) == 0
        assert client.delete("/conversations/Hobbes|Leviathan").json()["cleared"] is False

    def test_clear_all_and_health(self, make_service: type[FakeService]) -> None:
        service = make_service()
        store = ConversationStore(service)
        store.get_or_create("a")
        store.get_or_create("b")
        client = TestClient(create_app(service, store))

        assert client.get("/health").json() == {
            "status": "ok",
            "model": "fake-model",
            "conversations": 2,
        }
        assert client.delete("/conversations").json() == {"success": True, "cleared": 2}
        assert client.get("/health").json()["conversations"] == 0
