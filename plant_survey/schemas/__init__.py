"""Pydantic schemas for data validation.

This package contains the Pydantic models for survey answers, rules,
candidate pools and recommendation results.
"""

from plant_survey.schemas.answer import (
    AnswerType,
    SelectedAddress,
    SurveyAnswer,
    SubmitAnswersRequest,
    SubmitAnswersResult,
)
from plant_survey.schemas.rule import (
    ConditionOperator,
    Condition,
    Rule,
)
from plant_survey.schemas.catalog import (
    FieldIndex,
    PlantLocation,
    PlantCandidate,
    PartnerAddress,
    PartnerCandidate,
    PlantFilter,
    PartnerFilter,
)
from plant_survey.schemas.recommendation import (
    PartnerRecommendationStatus,
    PlantRecommendation,
    PartnerRecommendation,
    PartnerRecommendationResult,
)

__all__ = [
    "AnswerType",
    "SelectedAddress",
    "SurveyAnswer",
    "SubmitAnswersRequest",
    "SubmitAnswersResult",
    "ConditionOperator",
    "Condition",
    "Rule",
    "FieldIndex",
    "PlantLocation",
    "PlantCandidate",
    "PartnerAddress",
    "PartnerCandidate",
    "PlantFilter",
    "PartnerFilter",
    "PartnerRecommendationStatus",
    "PlantRecommendation",
    "PartnerRecommendation",
    "PartnerRecommendationResult",
]
