"""Rule and RuleCondition models.

Rules are authored through an administrative flow outside this service and
are soft-deleted, never removed, so historical matches stay explainable.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    JSON,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plant_survey.models.database import Base


class RuleRecord(Base):
    """Model for a recommendation rule.

    Attributes:
        id: Primary key (storage order is rule precedence)
        name: Human-readable rule name
        affiliate_for: Speciality tag surfaced when the rule matches
        is_deleted: Soft-delete flag
        created_at: Creation timestamp
        conditions: Ordered conditions of the rule
    """

    __tablename__ = "rules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Rule name"
    )
    affiliate_for: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Speciality tag used to select affiliate partners"
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Soft-delete flag"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Creation timestamp"
    )

    conditions: Mapped[list["RuleConditionRecord"]] = relationship(
        "RuleConditionRecord",
        back_populates="rule",
        cascade="all, delete-orphan",
        order_by="RuleConditionRecord.position",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<RuleRecord(id={self.id}, name={self.name}, "
            f"affiliate_for={self.affiliate_for}, is_deleted={self.is_deleted})>"
        )


class RuleConditionRecord(Base):
    """Model for one condition of a rule.

    Attributes:
        id: Primary key
        rule_id: Foreign key to rules table
        position: Order of the condition within its rule
        question_id: Question whose answer is compared
        operator: equals | and | or
        values: JSON list of acceptable values
    """

    __tablename__ = "rule_conditions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    rule_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to rules table"
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Order of the condition within its rule"
    )
    question_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Question whose answer is compared"
    )
    operator: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="equals | and | or"
    )
    values: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Acceptable values"
    )

    rule: Mapped["RuleRecord"] = relationship(
        "RuleRecord",
        back_populates="conditions",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<RuleConditionRecord(rule_id={self.rule_id}, "
            f"question_id={self.question_id}, operator={self.operator})>"
        )
