"""Question model.

Questions are soft-deleted only: historical answers keep referring to them.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Integer, Boolean, DateTime, JSON, text
from sqlalchemy.orm import Mapped, mapped_column

from plant_survey.models.database import Base


class QuestionRecord(Base):
    """Model for a survey question.

    Attributes:
        id: Question identifier referenced by answers and rule conditions
        question_text: Question text
        options: Ordered option texts
        order: Display order (NULL sorts last)
        is_deleted: Soft-delete flag
        created_at: Creation timestamp
    """

    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Question identifier"
    )
    question_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Question text"
    )
    options: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered option texts"
    )
    order: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Display order"
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Soft-delete flag"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Creation timestamp"
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<QuestionRecord(id={self.id}, order={self.order}, is_deleted={self.is_deleted})>"
