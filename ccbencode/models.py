"""Configuration models for ccbencode."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Emit console logs as JSON instead of Rich output",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class SourceConfig(BaseModel):
    """Limits applied when reading bencoded data from an external source."""

    max_source_bytes: int | None = Field(
        default=None,
        ge=1,
        description="Reject sources larger than this many bytes (None = unlimited)",
    )
    url_timeout: float = Field(
        default=30.0,
        gt=0.0,
        le=3600.0,
        description="Timeout in seconds for fetching http(s) sources",
    )


class Config(BaseModel):
    """Main configuration model."""

    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
    source: SourceConfig = Field(
        default_factory=SourceConfig,
        description="Source reading configuration",
    )
