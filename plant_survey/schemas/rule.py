"""Pydantic schemas for recommendation rules.

Rules are authored by administrators elsewhere; this service only reads
them. A rule is a named, ordered list of conditions that must all hold.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConditionOperator(str, Enum):
    """How a condition compares an answer against its values.

    EQUALS and OR currently evaluate identically; they remain distinct so
    operator-specific behavior can be attached later.
    """
    EQUALS = "equals"
    AND = "and"
    OR = "or"


class Condition(BaseModel):
    """Comparison clause over the answer to a single question.

    Attributes:
        question_id: Question whose answer is compared
        operator: Comparison operator
        values: Acceptable values (non-empty)
        question_text: Text of the referenced question, when known
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_id: str = Field(..., min_length=1, alias="questionId")
    operator: ConditionOperator
    values: tuple[str, ...] = Field(..., min_length=1)
    question_text: Optional[str] = Field(None, alias="questionText")


class Rule(BaseModel):
    """Administrator-authored recommendation rule.

    Attributes:
        id: Rule identifier
        name: Human-readable rule name
        conditions: Conditions that must all be satisfied
        affiliate_for: Speciality tag used to pick affiliate partners
            (blank tags become None)
        is_deleted: Soft-delete flag
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(..., min_length=1)
    conditions: tuple[Condition, ...] = Field(default_factory=tuple)
    affiliate_for: Optional[str] = Field(None, alias="affiliateFor")
    is_deleted: bool = Field(False, alias="isDeleted")

    @field_validator("affiliate_for")
    @classmethod
    def blank_tag_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank affiliate tag as no tag."""
        if v is None or not v.strip():
            return None
        return v.strip()
