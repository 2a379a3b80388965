"""Database models and session management.

This package contains all SQLAlchemy ORM models and database utilities.
"""

from plant_survey.models.database import (
    Base,
    engine,
    AsyncSessionLocal,
    get_session_factory,
    init_models,
)
from plant_survey.models.question import QuestionRecord
from plant_survey.models.response import SurveyResponse, SurveyAnswerRecord
from plant_survey.models.rule import RuleRecord, RuleConditionRecord
from plant_survey.models.plant import PlantRecord
from plant_survey.models.partner import PartnerProfileRecord

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_session_factory",
    "init_models",
    "QuestionRecord",
    "SurveyResponse",
    "SurveyAnswerRecord",
    "RuleRecord",
    "RuleConditionRecord",
    "PlantRecord",
    "PartnerProfileRecord",
]
