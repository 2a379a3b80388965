"""Pydantic schemas for survey answers and submissions.

Answers arrive over the wire in camelCase with integer type codes
(1 = option, 2 = address). Exactly one of ``selectedOption`` or
``selectedAddress`` is populated, as selected by ``type``; unknown fields
are rejected at every level.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnswerType(IntEnum):
    """Kind of value carried by an answer."""
    OPTION = 1
    ADDRESS = 2


class SelectedAddress(BaseModel):
    """State and city picked for an address question."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    state: str = Field(..., min_length=1, max_length=100, description="State selected")
    city: str = Field(..., min_length=1, max_length=100, description="City selected")


class SurveyAnswer(BaseModel):
    """A single answer to a survey question.

    Attributes:
        question_id: Identifier of the answered question
        type: Whether the answer carries an option or an address
        selected_option: Option text (present iff type is OPTION)
        selected_address: State/city pair (present iff type is ADDRESS)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    question_id: str = Field(..., min_length=1, max_length=64, alias="questionId")
    type: AnswerType
    selected_option: Optional[str] = Field(None, min_length=1, alias="selectedOption")
    selected_address: Optional[SelectedAddress] = Field(None, alias="selectedAddress")

    @model_validator(mode="after")
    def validate_value_matches_type(self):
        """Ensure the populated value field agrees with the answer type."""
        if self.type == AnswerType.OPTION:
            if self.selected_option is None:
                raise ValueError("selectedOption is required when type=1")
            if self.selected_address is not None:
                raise ValueError("selectedAddress is not allowed when type=1")
        else:
            if self.selected_address is None:
                raise ValueError("selectedAddress is required when type=2")
            if self.selected_option is not None:
                raise ValueError("selectedOption is not allowed when type=2")
        return self

    @property
    def text_value(self) -> str:
        """Textual value used for rule comparison.

        Address answers are flattened to ``"state / city"``, the form they
        are stored and compared in.
        """
        if self.type == AnswerType.OPTION:
            return self.selected_option
        return f"{self.selected_address.state} / {self.selected_address.city}"

    def to_wire(self) -> dict:
        """Serialize using wire aliases, omitting the unused value field."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SubmitAnswersRequest(BaseModel):
    """Body of ``POST /answers``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    answers: list[SurveyAnswer] = Field(..., min_length=1)
    user_id: Optional[str] = Field(None, min_length=1, max_length=64, alias="userId")


class SubmitAnswersResult(BaseModel):
    """Data returned after a successful submission."""

    model_config = ConfigDict(populate_by_name=True)

    response_id: str = Field(..., serialization_alias="responseId")
