"""
Settings - Engine configuration using Pydantic Settings.

Loads from FEDERATED_SEARCH_* environment variables and an optional .env file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.exceptions import ConfigurationError
from .core.matcher import DEFAULT_FIELD_WEIGHTS, MatcherConfig
from .models.entity import EntityType

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_TRENDING_SEARCHES = [
    "volunteer application",
    "presentation request",
    "environmental education",
    "STEM activities",
    "school partnership",
    "volunteer hours",
    "team formation",
    "presentation materials",
    "teacher resources",
    "impact metrics",
]


class Settings(BaseSettings):
    """Engine settings."""

    # Fan-out used when a search names no types; trim to exclude expensive types
    default_types: List[EntityType] = Field(default_factory=lambda: list(EntityType))

    # Hard per-type ceiling on records handed to the matcher
    candidate_limit: int = Field(100, ge=1)

    # Pagination
    default_limit: int = Field(20, ge=1)

    # Matching
    fuzzy_threshold: float = Field(0.3, ge=0.0, le=1.0)
    match_distance: int = Field(100, ge=1)
    min_match_char_length: int = Field(2, ge=1)
    field_weights: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))

    # Suggestions
    suggestion_pool_size: int = Field(50, ge=1)
    suggestion_limit: int = Field(5, ge=1)
    trending_searches: List[str] = Field(default_factory=lambda: list(DEFAULT_TRENDING_SEARCHES))

    # Runtime
    max_workers: int = Field(4, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FEDERATED_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def matcher_config(self) -> MatcherConfig:
        """Build the matcher configuration described by these settings."""
        try:
            return MatcherConfig(
                field_weights=dict(self.field_weights),
                threshold=self.fuzzy_threshold,
                distance=self.match_distance,
                min_match_char_length=self.min_match_char_length,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid matcher settings: {str(e)}") from e


def load_settings(**overrides) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Raises:
        ConfigurationError: If a value (e.g. an unknown default type) is invalid
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid settings: {str(e)}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
