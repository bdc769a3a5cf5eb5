"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    question_bank_path: str | None = Field(
        default=None, validation_alias="READINESS_QUESTION_BANK"
    )
    default_permission: str | None = Field(
        default=None, validation_alias="READINESS_PERMISSION"
    )
    log_level: str = Field(default="WARNING", validation_alias="READINESS_LOG_LEVEL")

    rag_green_threshold: int = Field(
        default=80, ge=0, le=100, validation_alias="RAG_GREEN_THRESHOLD"
    )
    rag_amber_threshold: int = Field(
        default=60, ge=0, le=100, validation_alias="RAG_AMBER_THRESHOLD"
    )

    confidence_high_threshold: float = Field(
        default=0.9, ge=0, le=1, validation_alias="CONFIDENCE_HIGH_THRESHOLD"
    )
    confidence_medium_threshold: float = Field(
        default=0.7, ge=0, le=1, validation_alias="CONFIDENCE_MEDIUM_THRESHOLD"
    )

    submission_ready_threshold: int = Field(
        default=90, ge=0, le=100, validation_alias="READINESS_SUBMISSION_READY_THRESHOLD"
    )
    minor_gaps_threshold: int = Field(
        default=75, ge=0, le=100, validation_alias="READINESS_MINOR_GAPS_THRESHOLD"
    )
    major_gaps_threshold: int = Field(
        default=50, ge=0, le=100, validation_alias="READINESS_MAJOR_GAPS_THRESHOLD"
    )

    allow_score_override_above_max: bool = Field(
        default=True, validation_alias="ALLOW_SCORE_OVERRIDE_ABOVE_MAX"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
