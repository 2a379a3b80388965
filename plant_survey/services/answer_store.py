"""Answer store adapter.

Persists submitted survey responses and reads their answers back by
response id. Responses are write-once: there is no update path.
"""

import uuid
from typing import Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plant_survey.errors import ResponseNotFoundError
from plant_survey.models.response import SurveyAnswerRecord, SurveyResponse
from plant_survey.schemas.answer import AnswerType, SelectedAddress, SurveyAnswer
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


class AnswerStore(Protocol):
    """Contract for survey response persistence."""

    async def create_survey_response(
        self,
        answers: Sequence[SurveyAnswer],
        user_id: Optional[str] = None
    ) -> str:
        """Persist a response and return its id."""
        ...

    async def get_answers_by_response_id(self, response_id: str) -> list[SurveyAnswer]:
        """Return the stored answers of a response, in submission order."""
        ...


def answer_to_record(answer: SurveyAnswer, position: int) -> SurveyAnswerRecord:
    """Build the ORM row for an answer."""
    record = SurveyAnswerRecord(
        position=position,
        question_id=answer.question_id,
        answer_type=int(answer.type),
    )
    if answer.type == AnswerType.OPTION:
        record.selected_option = answer.selected_option
    else:
        record.address_state = answer.selected_address.state
        record.address_city = answer.selected_address.city
    return record


def record_to_answer(record: SurveyAnswerRecord) -> SurveyAnswer:
    """Rebuild an answer from its ORM row."""
    if record.answer_type == AnswerType.ADDRESS:
        return SurveyAnswer(
            question_id=record.question_id,
            type=AnswerType.ADDRESS,
            selected_address=SelectedAddress(state=record.address_state, city=record.address_city),
        )
    return SurveyAnswer(
        question_id=record.question_id,
        type=AnswerType.OPTION,
        selected_option=record.selected_option,
    )


class SqlAnswerStore:
    """SQLAlchemy-backed answer store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize answer store.

        Args:
            session_factory: Factory used to open one session per operation
        """
        self.session_factory = session_factory

    async def create_survey_response(
        self,
        answers: Sequence[SurveyAnswer],
        user_id: Optional[str] = None
    ) -> str:
        """Persist a response with its answers in a single transaction.

        Args:
            answers: Normalized answers, in submission order
            user_id: Submitting user, None for anonymous submissions

        Returns:
            The new response id
        """
        response = SurveyResponse(
            id=str(uuid.uuid4()),
            user_id=user_id,
            answers=[answer_to_record(answer, position) for position, answer in enumerate(answers)],
        )
        async with self.session_factory() as session:
            async with session.begin():
                session.add(response)

        logger.info(
            f"Stored survey response with {len(answers)} answers",
            extra={"response_id": response.id}
        )
        return response.id

    async def get_answers_by_response_id(self, response_id: str) -> list[SurveyAnswer]:
        """Read the answers of a response.

        Raises:
            ResponseNotFoundError: If the response is unknown, soft-deleted
                or has no answers
        """
        stmt = (
            select(SurveyAnswerRecord)
            .join(SurveyResponse, SurveyResponse.id == SurveyAnswerRecord.response_id)
            .where(
                SurveyAnswerRecord.response_id == response_id,
                SurveyResponse.is_deleted.is_(False),
            )
            .order_by(SurveyAnswerRecord.position)
        )
        async with self.session_factory() as session:
            records = (await session.scalars(stmt)).all()

        if not records:
            logger.info("No answers found", extra={"response_id": response_id})
            raise ResponseNotFoundError(response_id)

        return [record_to_answer(record) for record in records]
