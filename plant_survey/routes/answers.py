"""Survey answer endpoints.

Submission stores a normalized survey response; the recommendation
endpoints read it back by response id.
"""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status

from plant_survey.dependencies import get_recommendation_service, get_submission_service
from plant_survey.schemas.answer import SubmitAnswersRequest, SubmitAnswersResult
from plant_survey.schemas.envelope import success_response
from plant_survey.schemas.recommendation import PartnerRecommendationStatus
from plant_survey.services.survey_service import RecommendationService, SubmissionService

router = APIRouter(prefix="/answers")


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_answers(
    request: SubmitAnswersRequest,
    service: Annotated[SubmissionService, Depends(get_submission_service)]
) -> Dict[str, Any]:
    """Submit a completed survey.

    Answers are translated to the canonical language when needed, then
    persisted as a new survey response.

    Example response:
        {
            "success": true,
            "message": "Answers submitted successfully",
            "data": {"responseId": "6f1c..."}
        }
    """
    response_id = await service.submit(request.answers, request.user_id)
    result = SubmitAnswersResult(response_id=response_id)
    return success_response(result.model_dump(by_alias=True), "Answers submitted successfully")


@router.get("/{response_id}/plants")
async def get_plant_recommendations(
    response_id: str,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)]
) -> Dict[str, Any]:
    """Recommend catalog plants for a stored survey response."""
    recommendations = await service.recommend_plants(response_id)
    return success_response(
        {
            "responseId": response_id,
            "plantRecommendations": [rec.model_dump(mode="json", by_alias=True) for rec in recommendations],
        },
        "Plant recommendations fetched successfully",
    )


@router.get("/{response_id}/partners")
async def get_partner_recommendations(
    response_id: str,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)]
) -> Dict[str, Any]:
    """Recommend professional partners for a stored survey response.

    ``status`` is ``not_applicable`` when the response does not ask for
    aesthetic work, ``no_matches`` when nothing qualified, ``matched``
    otherwise.
    """
    result = await service.recommend_partners(response_id)

    if result.status == PartnerRecommendationStatus.NOT_APPLICABLE:
        message = "No partner recommendations applicable for this response"
    elif result.status == PartnerRecommendationStatus.NO_MATCHES:
        message = "No matching partners found for this response"
    else:
        message = "Partner recommendations fetched successfully"

    return success_response(
        {
            "responseId": response_id,
            "status": result.status.value,
            "partnerRecommendations": [
                rec.model_dump(mode="json", by_alias=True) for rec in result.partners
            ],
        },
        message,
    )
