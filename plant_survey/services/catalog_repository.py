"""Candidate pool repository for plants and partner profiles."""

from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plant_survey.models.partner import PartnerProfileRecord
from plant_survey.models.plant import PlantRecord
from plant_survey.schemas.catalog import (
    PartnerAddress,
    PartnerCandidate,
    PartnerFilter,
    PlantCandidate,
    PlantFilter,
    PlantLocation,
)
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


class CatalogRepository(Protocol):
    """Read-only contract for recommendation candidate pools."""

    async def list_candidate_plants(self, plant_filter: PlantFilter) -> list[PlantCandidate]:
        """Return catalog plants in insertion order."""
        ...

    async def list_candidate_partners(self, partner_filter: PartnerFilter) -> list[PartnerCandidate]:
        """Return partner profiles in creation order."""
        ...


def plant_from_record(record: PlantRecord) -> PlantCandidate:
    """Convert a plant row into a candidate."""
    return PlantCandidate(
        id=record.id,
        scientific_name=record.scientific_name,
        common_name=record.common_name,
        image_search_url=record.image_search_url,
        description=record.description,
        space_types=tuple(record.space_types or ()),
        area_sizes=tuple(record.area_sizes or ()),
        challenges=tuple(record.challenges or ()),
        tech_preferences=tuple(record.tech_preferences or ()),
        locations=tuple(PlantLocation(**location) for location in record.locations or ()),
        light=record.light,
        water_needs=record.water_needs,
        maintenance_level=record.maintenance_level,
        growth_form=record.growth_form,
        native=record.native,
    )


def partner_from_record(record: PartnerProfileRecord) -> PartnerCandidate:
    """Convert a partner row into a candidate."""
    address: Optional[PartnerAddress] = None
    if any((record.street, record.city, record.state, record.country, record.zip_code)):
        address = PartnerAddress(
            street=record.street,
            city=record.city,
            state=record.state,
            country=record.country,
            zip_code=record.zip_code,
        )
    return PartnerCandidate(
        id=record.id,
        email=record.email,
        mobile_number=record.mobile_number,
        company_name=record.company_name,
        speciality=tuple(record.speciality or ()),
        address=address,
        website=record.website,
        contact_person=record.contact_person,
        project_image_url=record.project_image_url,
        rating=record.rating or 0.0,
        status=record.status,
    )


class SqlCatalogRepository:
    """SQLAlchemy-backed candidate pools."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize catalog repository.

        Args:
            session_factory: Factory used to open one session per read
        """
        self.session_factory = session_factory

    async def list_candidate_plants(self, plant_filter: PlantFilter) -> list[PlantCandidate]:
        """Load catalog plants, excluding soft-deleted ones unless requested."""
        stmt = select(PlantRecord).order_by(PlantRecord.id)
        if not plant_filter.include_deleted:
            stmt = stmt.where(PlantRecord.is_deleted.is_(False))

        async with self.session_factory() as session:
            records = (await session.scalars(stmt)).all()

        logger.debug(f"Loaded {len(records)} candidate plants")
        return [plant_from_record(record) for record in records]

    async def list_candidate_partners(self, partner_filter: PartnerFilter) -> list[PartnerCandidate]:
        """Load partner profiles with the requested status."""
        stmt = (
            select(PartnerProfileRecord)
            .where(PartnerProfileRecord.status == partner_filter.status)
            .order_by(PartnerProfileRecord.id)
        )

        async with self.session_factory() as session:
            records = (await session.scalars(stmt)).all()

        logger.debug(f"Loaded {len(records)} candidate partners")
        return [partner_from_record(record) for record in records]
