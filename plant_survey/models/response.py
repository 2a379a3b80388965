"""Survey response models.

A SurveyResponse is written once at submission time and owns its ordered
list of SurveyAnswerRecord rows. Answers are never updated; a new
submission produces a new response.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Index,
    String,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plant_survey.models.database import Base


class SurveyResponse(Base):
    """Model for one submitted set of survey answers.

    Attributes:
        id: UUID primary key, exposed to clients as responseId
        user_id: Submitting user (NULL for anonymous submissions)
        created_at: When the response was submitted
        is_deleted: Soft-delete flag
        answers: Ordered answers belonging to this response
    """

    __tablename__ = "survey_responses"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Response identifier (UUID)"
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="Submitting user, NULL for anonymous submissions"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the response was submitted"
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Soft-delete flag"
    )

    answers: Mapped[list["SurveyAnswerRecord"]] = relationship(
        "SurveyAnswerRecord",
        back_populates="response",
        cascade="all, delete-orphan",
        order_by="SurveyAnswerRecord.position",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<SurveyResponse(id={self.id}, "
            f"user_id={self.user_id}, "
            f"is_deleted={self.is_deleted})>"
        )


class SurveyAnswerRecord(Base):
    """Model for a single answer inside a survey response.

    Option answers populate ``selected_option``; address answers populate
    ``address_state`` and ``address_city``.

    Attributes:
        id: Primary key
        response_id: Foreign key to survey_responses table
        position: Zero-based position of the answer in the submission
        question_id: Answered question
        answer_type: 1 = option, 2 = address
        selected_option: Option text for option answers
        address_state: State for address answers
        address_city: City for address answers
    """

    __tablename__ = "survey_answers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    response_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("survey_responses.id", ondelete="CASCADE"),
        nullable=False,
        comment="Foreign key to survey_responses table"
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Position of the answer within the submission"
    )
    question_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Answered question"
    )
    answer_type: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="1 = option, 2 = address"
    )
    selected_option: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Selected option text (option answers)"
    )
    address_state: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Selected state (address answers)"
    )
    address_city: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Selected city (address answers)"
    )

    response: Mapped["SurveyResponse"] = relationship(
        "SurveyResponse",
        back_populates="answers",
    )

    __table_args__ = (
        UniqueConstraint("response_id", "position", name="uq_response_position"),
        Index("idx_survey_answers_response_id", "response_id"),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<SurveyAnswerRecord(response_id={self.response_id}, "
            f"position={self.position}, "
            f"question_id={self.question_id}, "
            f"answer_type={self.answer_type})>"
        )
