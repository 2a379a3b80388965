"""Question repository.

Read path for the active survey questions. Soft-deleted questions are
excluded here, never removed from storage.
"""

from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plant_survey.models.question import QuestionRecord


class Question(BaseModel):
    """Survey question as presented to clients."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: tuple[str, ...] = ()
    order: Optional[int] = Field(None, ge=0)


class QuestionRepository(Protocol):
    """Read-only contract for active questions."""

    async def list_active_questions(self) -> list[Question]:
        """Return non-deleted questions in display order."""
        ...


class SqlQuestionRepository:
    """SQLAlchemy-backed question repository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_active_questions(self) -> list[Question]:
        # Questions without an explicit order come last, in creation order
        stmt = (
            select(QuestionRecord)
            .where(QuestionRecord.is_deleted.is_(False))
            .order_by(QuestionRecord.order.is_(None), QuestionRecord.order, QuestionRecord.created_at)
        )
        async with self.session_factory() as session:
            records = (await session.scalars(stmt)).all()

        return [
            Question(
                id=record.id,
                text=record.question_text,
                options=tuple(record.options or ()),
                order=record.order,
            )
            for record in records
        ]
