"""Rule repository.

Exposes the active, administrator-authored rules to the matcher. Rules are
read fresh on every call: a newly authored rule takes effect on the next
evaluation.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from plant_survey.models.question import QuestionRecord
from plant_survey.models.rule import RuleRecord
from plant_survey.schemas.rule import Condition, ConditionOperator, Rule
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


def stored_values(values) -> tuple:
    """Convert a stored JSON condition value list to a tuple.

    Raises:
        ValueError: If the stored value is not a JSON array
    """
    if values is None:
        return ()
    if not isinstance(values, list):
        raise ValueError(f"condition values must be a list, got {type(values).__name__}")
    return tuple(values)


class RuleRepository(Protocol):
    """Read-only contract for the active rule set."""

    async def list_active_rules(self) -> list[Rule]:
        """Return non-deleted rules in storage order."""
        ...


class SqlRuleRepository:
    """SQLAlchemy-backed rule repository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize rule repository.

        Args:
            session_factory: Factory used to open one session per read
        """
        self.session_factory = session_factory

    async def list_active_rules(self) -> list[Rule]:
        """Load every non-deleted rule with its ordered conditions.

        Condition question text is joined from active questions when
        available. Rules with an unknown operator or an empty value list
        are skipped.

        Returns:
            Rules ordered by id (storage order)
        """
        rules_stmt = (
            select(RuleRecord)
            .where(RuleRecord.is_deleted.is_(False))
            .options(selectinload(RuleRecord.conditions))
            .order_by(RuleRecord.id)
        )
        questions_stmt = select(QuestionRecord.id, QuestionRecord.question_text).where(
            QuestionRecord.is_deleted.is_(False)
        )

        async with self.session_factory() as session:
            records = (await session.scalars(rules_stmt)).all()
            question_texts = dict((await session.execute(questions_stmt)).all())

        rules = []
        for record in records:
            try:
                conditions = [
                    Condition(
                        question_id=condition.question_id,
                        operator=ConditionOperator(condition.operator.lower()),
                        values=stored_values(condition.values),
                        question_text=question_texts.get(condition.question_id),
                    )
                    for condition in record.conditions
                ]
            except ValueError as e:
                # Dropping one condition would widen the rule, so drop the rule
                logger.warning(
                    f"Skipping rule '{record.name}' with invalid condition: {e}",
                    extra={"rule_id": record.id}
                )
                continue
            rules.append(Rule(
                id=str(record.id),
                name=record.name,
                conditions=tuple(conditions),
                affiliate_for=record.affiliate_for,
                is_deleted=record.is_deleted,
            ))

        logger.debug(f"Loaded {len(rules)} active rules")
        return rules
