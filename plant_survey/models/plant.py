"""Plant catalog model.

Catalog plants are the candidate pool for plant recommendations. This is a
different entity from the plants a user owns in their profile.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Boolean, DateTime, JSON, text
from sqlalchemy.orm import Mapped, mapped_column

from plant_survey.models.database import Base


class PlantRecord(Base):
    """Model for a catalog plant.

    List attributes are stored as JSON arrays; ``locations`` holds objects
    of the form ``{"type": <state>, "value": <city>}``.

    Attributes:
        id: Primary key (insertion order breaks ranking ties)
        scientific_name: Botanical name
        common_name: Common name
        image_search_url: Image URL
        description: Free-text description
        space_types: Suitable space types (e.g., "Balcony", "Garden")
        area_sizes: Suitable area sizes
        challenges: Challenges the plant copes with
        tech_preferences: Matching technology preferences
        locations: Suitable state/city pairs
        light: Light requirement
        water_needs: Water requirement
        maintenance_level: Maintenance effort
        growth_form: Growth form
        native: Whether the plant is native
        is_deleted: Soft-delete flag
    """

    __tablename__ = "plants"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    scientific_name: Mapped[str] = mapped_column(String(255), nullable=False)
    common_name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_search_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    space_types: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    area_sizes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    challenges: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    tech_preferences: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    locations: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="List of {type: state, value: city} objects"
    )

    # Care metadata
    light: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    water_needs: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    maintenance_level: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    growth_form: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    native: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

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
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<PlantRecord(id={self.id}, scientific_name={self.scientific_name})>"
