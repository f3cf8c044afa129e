"""
Configuration management for the PDF Chat service.
Handles environment variables and application settings.
"""

from typing import List, Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = Field(default="PDF Chat")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    cors_origins: List[str] = Field(default=["*"])

    # Google Gemini Configuration
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "NEXT_PUBLIC_GEMINI_API_KEY"),
    )
    gemini_model: str = Field(default="gemini-1.5-flash-latest")
    gemini_api_base: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    gemini_timeout_seconds: Optional[float] = Field(default=None)

    # File Processing Configuration
    max_file_size_mb: int = Field(default=50)
    allowed_file_types: List[str] = Field(default=["pdf"])

    # Parsed document cache
    document_cache_max_entries: int = Field(default=32, ge=1)
    document_cache_ttl_seconds: float = Field(default=3600, ge=0)

    # Client Configuration
    api_base_url: str = Field(default="http://localhost:8000")

    @field_validator("gemini_timeout_seconds", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # Ignore extra fields from environment


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings


def validate_required_settings() -> None:
    """Validate that all required settings are present."""
    required_settings = [
        ("GEMINI_API_KEY", settings.gemini_api_key),
    ]

    missing_settings = []
    for setting_name, setting_value in required_settings:
        if not setting_value:
            missing_settings.append(setting_name)

    if missing_settings:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing_settings)}. "
            "Please check your .env file."
        )
