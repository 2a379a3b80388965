"""Partner profile model.

Professional partners are the candidate pool for partner recommendations.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Index, String, Text, Float, DateTime, JSON, text
from sqlalchemy.orm import Mapped, mapped_column

from plant_survey.models.database import Base


class PartnerProfileRecord(Base):
    """Model for a professional partner profile.

    Attributes:
        id: Primary key (creation order breaks rating ties)
        email: Contact e-mail
        mobile_number: Contact phone number
        company_name: Company name
        speciality: JSON list of speciality tags
        street, city, state, country, zip_code: Flattened address
        website: Company website
        contact_person: Contact person name
        project_image_url: Showcase image URL
        rating: Average rating in [0, 5]
        status: pending | active | inactive
    """

    __tablename__ = "partner_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(20), nullable=False)
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    speciality: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Speciality tags"
    )

    # Address
    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_person: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    project_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Average rating in [0, 5]"
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        comment="pending | active | inactive"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_partner_profiles_status", "status"),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<PartnerProfileRecord(id={self.id}, company_name={self.company_name}, "
            f"status={self.status})>"
        )
