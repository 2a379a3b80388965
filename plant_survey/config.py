"""Application configuration management using Pydantic Settings.

This module loads and validates environment variables using Pydantic Settings.
All configuration is loaded from environment variables or a .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        database_url: Async SQLAlchemy connection string
        database_pool_size: Number of connections to maintain in pool
        database_max_overflow: Maximum overflow connections beyond pool_size
        environment: Application environment (development, staging, production)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        canonical_language: Language all answer text is normalized to
        translate_from_languages: Comma-separated language codes that trigger translation
        translation_api_url: Endpoint of the translation service
        translation_timeout_seconds: Timeout for a single translation call
        partner_gate_question_id: Question whose answer gates partner recommendations
        partner_gate_position: Answer position used when no gate question is configured
        partner_gate_signal: Substring that unlocks partner recommendations
        partner_location_filter: Restrict partners to the answered state/city
        plant_recommendation_limit: Maximum number of plants returned
        allowed_origins: List of allowed CORS origins
    """

    # Database Configuration
    database_url: str = Field(
        description="Async SQLAlchemy connection string"
    )
    database_pool_size: int = Field(
        default=5,
        description="Number of database connections in pool"
    )
    database_max_overflow: int = Field(
        default=10,
        description="Maximum overflow connections beyond pool size"
    )

    # Application Configuration
    environment: str = Field(
        default="development",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    # Translation Configuration
    canonical_language: str = Field(
        default="en",
        description="Language answers are normalized to before matching"
    )
    translate_from_languages: str = Field(
        default="pt",
        description="Comma-separated language code prefixes that trigger translation"
    )
    translation_api_url: str = Field(
        default="https://translate.googleapis.com/translate_a/single",
        description="Translation service endpoint"
    )
    translation_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single translation request"
    )

    # Recommendation Configuration
    partner_gate_question_id: Optional[str] = Field(
        default=None,
        description="Question ID whose answer gates partner recommendations"
    )
    partner_gate_position: int = Field(
        default=2,
        ge=0,
        description="Answer position used for the gate when no question ID is set"
    )
    partner_gate_signal: str = Field(
        default="aesthetic",
        min_length=1,
        description="Case-insensitive substring that unlocks partner recommendations"
    )
    partner_location_filter: bool = Field(
        default=True,
        description="Only recommend partners serving the answered state and city"
    )
    plant_recommendation_limit: int = Field(
        default=20,
        ge=1,
        description="Maximum number of plant recommendations"
    )

    # Security Configuration
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="Comma-separated list of allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v_upper

    @field_validator("canonical_language")
    @classmethod
    def validate_canonical_language(cls, v: str) -> str:
        """Validate canonical language is a bare language code (e.g., 'en')."""
        v = v.strip().lower()
        if not v.isalpha() or not 2 <= len(v) <= 3:
            raise ValueError("Canonical language must be a 2-3 letter language code")
        return v

    def get_allowed_origins_list(self) -> List[str]:
        """Parse allowed_origins string into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    def get_translate_from_languages(self) -> List[str]:
        """Parse translate_from_languages string into a list of lowercase codes."""
        return [
            code.strip().lower()
            for code in self.translate_from_languages.split(",")
            if code.strip()
        ]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton

    Note:
        Uses lru_cache to ensure settings are only loaded once
        and shared across the application.
    """
    return Settings()
