"""Pydantic schemas for recommendation results returned to clients."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from plant_survey.schemas.catalog import PartnerAddress


class PartnerRecommendationStatus(str, Enum):
    """Outcome of a partner recommendation request.

    NOT_APPLICABLE means the eligibility gate was not satisfied, which is
    different from NO_MATCHES (gate satisfied, nothing matched).
    """
    MATCHED = "matched"
    NO_MATCHES = "no_matches"
    NOT_APPLICABLE = "not_applicable"


class PlantRecommendation(BaseModel):
    """A recommended plant and why it was chosen."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    scientific: str
    image: Optional[str] = None
    description: Optional[str] = None
    score: int = Field(..., ge=0)
    why_recommended: str = Field(..., alias="whyRecommended")


class PartnerRecommendation(BaseModel):
    """A recommended professional partner and why it was chosen."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    partner_id: int = Field(..., alias="partnerId")
    email: str
    mobile_number: str = Field(..., alias="mobileNumber")
    company_name: Optional[str] = Field(None, alias="companyName")
    speciality: tuple[str, ...] = ()
    address: Optional[PartnerAddress] = None
    website: Optional[str] = None
    contact_person: Optional[str] = Field(None, alias="contactPerson")
    project_image_url: Optional[str] = Field(None, alias="projectImageUrl")
    rating: float
    why_recommended: str = Field(..., alias="whyRecommended")


class PartnerRecommendationResult(BaseModel):
    """Partner recommendations together with the outcome status."""

    model_config = ConfigDict(frozen=True)

    status: PartnerRecommendationStatus
    partners: tuple[PartnerRecommendation, ...] = ()
