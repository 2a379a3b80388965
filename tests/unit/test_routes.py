"""Unit tests for the HTTP endpoints.

Services are swapped out through FastAPI dependency overrides; the
application lifespan is not started, so no database is touched.
"""

from typing import Dict, List, Optional, Sequence
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from plant_survey.dependencies import (
    get_question_repository,
    get_recommendation_service,
    get_submission_service,
)
from plant_survey.errors import ResponseNotFoundError, TranslationError
from plant_survey.main import app
from plant_survey.models.database import get_session_factory
from plant_survey.schemas.answer import SurveyAnswer
from plant_survey.schemas.catalog import PartnerAddress, PartnerCandidate, PlantCandidate
from plant_survey.schemas.rule import Condition, ConditionOperator, Rule
from plant_survey.services.language_normalizer import LanguageNormalizer
from plant_survey.services.question_repository import Question
from plant_survey.services.recommendation import RecommendationSelector
from plant_survey.services.survey_service import RecommendationService, SubmissionService


class InMemoryAnswerStore:
    def __init__(self):
        self.responses: Dict[str, List[SurveyAnswer]] = {}

    async def create_survey_response(
        self,
        answers: Sequence[SurveyAnswer],
        user_id: Optional[str] = None
    ) -> str:
        response_id = f"resp-{len(self.responses) + 1}"
        self.responses[response_id] = list(answers)
        return response_id

    async def get_answers_by_response_id(self, response_id: str) -> List[SurveyAnswer]:
        if not self.responses.get(response_id):
            raise ResponseNotFoundError(response_id)
        return self.responses[response_id]


class StaticRules:
    async def list_active_rules(self) -> List[Rule]:
        return [
            Rule(
                id="1",
                name="Aesthetic balconies",
                conditions=(
                    Condition(question_id="q_space", operator=ConditionOperator.EQUALS, values=("Balcony",)),
                ),
                affiliate_for="landscaping",
            )
        ]


class StaticCatalog:
    async def list_candidate_plants(self, plant_filter) -> List[PlantCandidate]:
        return [
            PlantCandidate(id=7, scientific_name="Nephrolepis exaltata", common_name="Boston fern",
                           space_types=("Balcony",), area_sizes=("Small",)),
        ]

    async def list_candidate_partners(self, partner_filter) -> List[PartnerCandidate]:
        return [
            PartnerCandidate(
                id=3,
                email="verde@example.com",
                mobile_number="+5511988887777",
                company_name="Verde",
                speciality=("Landscaping",),
                address=PartnerAddress(state="SP", city="São Paulo", zip_code="01000-000"),
                rating=4.5,
                status="active",
            )
        ]


class StaticQuestions:
    async def list_active_questions(self) -> List[Question]:
        return [Question(id="q_space", text="Where will the plants live?", options=("Balcony", "Garden"), order=0)]


class EnglishTranslator:
    async def detect_language(self, text: str) -> Optional[str]:
        return "en"

    async def translate(self, text: str, target_language: str) -> str:
        return text


def option(question_id: str, value: str) -> dict:
    return {"questionId": question_id, "type": 1, "selectedOption": value}


AESTHETIC_SUBMISSION = {
    "answers": [
        option("q_space", "Balcony"),
        option("q_area", "Small"),
        option("q_goal", "Aesthetic improvement"),
        option("q_tech", "Smart irrigation"),
        {"questionId": "q_location", "type": 2, "selectedAddress": {"state": "SP", "city": "São Paulo"}},
    ],
    "userId": "user-1",
}


@pytest.fixture
def store() -> InMemoryAnswerStore:
    return InMemoryAnswerStore()


@pytest.fixture
def client(store):
    """Test client with in-memory services."""
    app.dependency_overrides[get_submission_service] = lambda: SubmissionService(
        LanguageNormalizer(EnglishTranslator()), store
    )
    app.dependency_overrides[get_recommendation_service] = lambda: RecommendationService(
        store, StaticRules(), StaticCatalog(), RecommendationSelector()
    )
    app.dependency_overrides[get_question_repository] = lambda: StaticQuestions()

    yield TestClient(app)

    app.dependency_overrides.clear()


class TestSubmitAnswers:
    """Tests for POST /answers."""

    def test_submission_created(self, client, store):
        response = client.post("/answers", json=AESTHETIC_SUBMISSION)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Answers submitted successfully"
        assert body["data"]["responseId"] in store.responses

    def test_invalid_submission_rejected(self, client, store):
        response = client.post("/answers", json={"answers": [{"questionId": "q1", "type": 1}]})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["errors"]["issues"]
        assert store.responses == {}

    def test_empty_answers_rejected(self, client):
        response = client.post("/answers", json={"answers": []})

        assert response.status_code == 400

    def test_overlong_question_id_rejected(self, client, store):
        submission = {"answers": [option("q" * 65, "Balcony")]}

        response = client.post("/answers", json=submission)

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"
        assert store.responses == {}

    def test_translation_failure(self, client, store):
        translator = AsyncMock()
        translator.detect_language.side_effect = TranslationError()
        app.dependency_overrides[get_submission_service] = lambda: SubmissionService(
            LanguageNormalizer(translator), store
        )

        response = client.post("/answers", json=AESTHETIC_SUBMISSION)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to normalize answer language"}
        assert store.responses == {}


class TestRecommendations:
    """Tests for the recommendation endpoints."""

    def test_plant_recommendations(self, client):
        response_id = client.post("/answers", json=AESTHETIC_SUBMISSION).json()["data"]["responseId"]

        response = client.get(f"/answers/{response_id}/plants")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["responseId"] == response_id
        assert data["plantRecommendations"] == [{
            "id": 7,
            "name": "Boston fern",
            "scientific": "Nephrolepis exaltata",
            "image": None,
            "description": None,
            "score": 2,
            "whyRecommended": "Suits your space type (Balcony) and area size (Small)",
        }]

    def test_partner_recommendations(self, client):
        response_id = client.post("/answers", json=AESTHETIC_SUBMISSION).json()["data"]["responseId"]

        response = client.get(f"/answers/{response_id}/partners")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Partner recommendations fetched successfully"
        assert body["data"]["status"] == "matched"
        partner = body["data"]["partnerRecommendations"][0]
        assert partner["partnerId"] == 3
        assert partner["companyName"] == "Verde"
        assert partner["address"]["zipCode"] == "01000-000"
        assert partner["whyRecommended"].startswith("Matched rule 'Aesthetic balconies'")

    def test_partner_recommendations_not_applicable(self, client):
        submission = dict(AESTHETIC_SUBMISSION)
        submission["answers"] = [
            option("q_space", "Garden"),
            option("q_area", "Large"),
            option("q_goal", "Durability"),
        ]
        response_id = client.post("/answers", json=submission).json()["data"]["responseId"]

        response = client.get(f"/answers/{response_id}/partners")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "No partner recommendations applicable for this response"
        assert body["data"] == {
            "responseId": response_id,
            "status": "not_applicable",
            "partnerRecommendations": [],
        }

    @pytest.mark.parametrize("path", ["/answers/unknown/plants", "/answers/unknown/partners"])
    def test_unknown_response(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "No answers found for this responseId",
            "errors": {"responseId": "unknown"},
        }


class TestQuestions:
    """Tests for GET /questions."""

    def test_list_questions(self, client):
        response = client.get("/questions")

        assert response.status_code == 200
        assert response.json()["data"] == [
            {"id": "q_space", "text": "Where will the plants live?", "options": ["Balcony", "Garden"], "order": 0}
        ]


class TestUnexpectedErrors:
    """Tests for the global exception handler."""

    def test_unexpected_error_is_generic(self, store):
        failing = AsyncMock()
        failing.list_active_questions.side_effect = RuntimeError("secret connection string")
        app.dependency_overrides[get_question_repository] = lambda: failing

        try:
            response = TestClient(app, raise_server_exceptions=False).get("/questions")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "secret" not in body["message"]


class FakeSession:
    """Async session stand-in whose execute() result is configurable."""

    def __init__(self, error: Exception = None):
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def execute(self, statement):
        if self.error is not None:
            raise self.error


class TestHealth:
    """Tests for GET /health."""

    def test_healthy(self):
        app.dependency_overrides[get_session_factory] = lambda: FakeSession
        try:
            response = TestClient(app).get("/health")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["data"] == {"status": "healthy", "database": "connected"}

    def test_database_unavailable(self):
        app.dependency_overrides[get_session_factory] = lambda: (
            lambda: FakeSession(OperationalError("SELECT 1", {}, Exception("refused")))
        )
        try:
            response = TestClient(app).get("/health")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json()["success"] is False
