"""FastAPI dependency providers.

Services are assembled from settings and the session factory on each
request. Tests replace these providers through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plant_survey.config import Settings, get_settings
from plant_survey.models.database import get_session_factory
from plant_survey.services.answer_store import SqlAnswerStore
from plant_survey.services.catalog_repository import SqlCatalogRepository
from plant_survey.services.language_normalizer import LanguageNormalizer
from plant_survey.services.question_repository import QuestionRepository, SqlQuestionRepository
from plant_survey.services.recommendation import GateConfig, RecommendationSelector
from plant_survey.services.rule_repository import SqlRuleRepository
from plant_survey.services.survey_service import RecommendationService, SubmissionService
from plant_survey.services.translation import GoogleTranslateClient

SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_language_normalizer(settings: AppSettings) -> LanguageNormalizer:
    """Build the normalizer with the configured translation client."""
    translator = GoogleTranslateClient(
        api_url=settings.translation_api_url,
        timeout=settings.translation_timeout_seconds,
    )
    return LanguageNormalizer(
        translator=translator,
        canonical_language=settings.canonical_language,
        source_languages=settings.get_translate_from_languages(),
    )


def get_recommendation_selector(settings: AppSettings) -> RecommendationSelector:
    """Build the selector from the recommendation settings."""
    gate = GateConfig(
        signal=settings.partner_gate_signal,
        question_id=settings.partner_gate_question_id,
        position=settings.partner_gate_position,
    )
    return RecommendationSelector(
        gate=gate,
        plant_limit=settings.plant_recommendation_limit,
        location_filter=settings.partner_location_filter,
    )


def get_submission_service(
    session_factory: SessionFactory,
    normalizer: Annotated[LanguageNormalizer, Depends(get_language_normalizer)]
) -> SubmissionService:
    return SubmissionService(normalizer=normalizer, answer_store=SqlAnswerStore(session_factory))


def get_recommendation_service(
    session_factory: SessionFactory,
    selector: Annotated[RecommendationSelector, Depends(get_recommendation_selector)]
) -> RecommendationService:
    return RecommendationService(
        answer_store=SqlAnswerStore(session_factory),
        rule_repository=SqlRuleRepository(session_factory),
        catalog=SqlCatalogRepository(session_factory),
        selector=selector,
    )


def get_question_repository(session_factory: SessionFactory) -> QuestionRepository:
    return SqlQuestionRepository(session_factory)
