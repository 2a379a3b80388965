"""Pydantic schemas for the recommendation candidate pools.

Plants and partner profiles are read-only reference data for this service.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldIndex(IntEnum):
    """Answer position feeding each plant attribute."""
    SPACE_TYPES = 0
    AREA_SIZES = 1
    CHALLENGES = 2
    TECH_PREFERENCES = 3
    LOCATIONS = 4


class PlantLocation(BaseModel):
    """A region a plant is suited to (``type`` is the state, ``value`` the city)."""

    model_config = ConfigDict(frozen=True)

    type: str
    value: str


class PlantCandidate(BaseModel):
    """Catalog plant eligible for recommendation."""

    model_config = ConfigDict(frozen=True)

    id: int
    scientific_name: str
    common_name: str
    image_search_url: Optional[str] = None
    description: Optional[str] = None
    space_types: tuple[str, ...] = ()
    area_sizes: tuple[str, ...] = ()
    challenges: tuple[str, ...] = ()
    tech_preferences: tuple[str, ...] = ()
    locations: tuple[PlantLocation, ...] = ()
    light: Optional[str] = None
    water_needs: Optional[str] = None
    maintenance_level: Optional[str] = None
    growth_form: Optional[str] = None
    native: Optional[bool] = None


class PartnerAddress(BaseModel):
    """Postal address of a partner."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")


class PartnerCandidate(BaseModel):
    """Professional partner eligible for recommendation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    email: str
    mobile_number: str = Field(..., alias="mobileNumber")
    company_name: Optional[str] = Field(None, alias="companyName")
    speciality: tuple[str, ...] = ()
    address: Optional[PartnerAddress] = None
    website: Optional[str] = None
    contact_person: Optional[str] = Field(None, alias="contactPerson")
    project_image_url: Optional[str] = Field(None, alias="projectImageUrl")
    rating: float = Field(0.0, ge=0, le=5)
    status: str = "pending"


class PlantFilter(BaseModel):
    """Read filter for the plant pool."""

    include_deleted: bool = False


class PartnerFilter(BaseModel):
    """Read filter for the partner pool."""

    status: str = "active"
