# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings. Every field
can be set through a PDFFUSION_-prefixed environment variable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PDFFUSION_",
        extra="ignore",
    )

    # === Codec ===
    codec_backend: Literal["pymupdf", "pypdf"] = "pymupdf"

    # === Intake ===
    accepted_media_types: str = "application/pdf"

    # === Merge ===
    min_documents: int = 2
    max_concurrent_reads: int = 4

    # === Output naming ===
    output_name_prefix: str = "merged_document_"
    output_extension: str = ".pdf"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("output_extension")
    @classmethod
    def validate_output_extension(cls, v: str) -> str:  # noqa: N805
        if not v.startswith("."):
            raise ValueError("output_extension must start with '.'")
        return v

    @field_validator("log_rotation")
    @classmethod
    def validate_log_rotation(cls, v: str) -> str:  # noqa: N805
        from pdffusion.logging.logger import parse_size

        parse_size(v)
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.min_documents < 2:
            errors.append("MIN_DOCUMENTS must be >= 2")

        if self.max_concurrent_reads < 1:
            errors.append("MAX_CONCURRENT_READS must be >= 1")

        if not self.accepted_media_types_list:
            errors.append("ACCEPTED_MEDIA_TYPES must name at least one media type")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def accepted_media_types_list(self) -> list[str]:
        """Parse comma-separated accepted media types (lowercased)."""
        return [
            t.strip().lower() for t in self.accepted_media_types.split(",") if t.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
