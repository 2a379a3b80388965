"""Survey question endpoint."""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from plant_survey.dependencies import get_question_repository
from plant_survey.schemas.envelope import success_response
from plant_survey.services.question_repository import QuestionRepository

router = APIRouter()


@router.get("/questions")
async def list_questions(
    repository: Annotated[QuestionRepository, Depends(get_question_repository)]
) -> Dict[str, Any]:
    """List active survey questions in display order."""
    questions = await repository.list_active_questions()
    return success_response(
        [question.model_dump(mode="json") for question in questions],
        "Questions fetched successfully",
    )
