"""Pydantic schemas for configuration validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kartlab.persistence.score_table import OUTPUT_COLUMNS


class WeightsConfig(BaseModel):
    """Frustration score weights."""

    off_ground: float = Field(ge=0.0, default=0.4)
    speed_drop: float = Field(ge=0.0, default=0.4)
    steer_change: float = Field(ge=0.0, default=0.2)


class ScoringConfig(BaseModel):
    """Signal and score parameters."""

    speed_drop_threshold: float = Field(le=0.0, default=-5.0)
    weights: WeightsConfig = Field(default_factory=WeightsConfig)


class ReaderConfig(BaseModel):
    """Telemetry log reading policy."""

    on_malformed: Literal["raise", "skip"] = "raise"


class OutputConfig(BaseModel):
    """Score table output."""

    sort_by: list[str] | None = None
    backup: bool = False

    @field_validator("sort_by")
    @classmethod
    def validate_sort_columns(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        unknown = [column for column in v if column not in OUTPUT_COLUMNS]
        if unknown:
            raise ValueError(f"sort_by has unknown columns {unknown}")
        return v


class LoggingConfig(BaseModel):
    """Log verbosity."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class PipelineConfig(BaseModel):
    """Full configuration."""

    model_config = ConfigDict(extra="forbid")

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config_dict: dict) -> PipelineConfig:
    """Validate a raw configuration mapping, raising pydantic.ValidationError on failure."""
    return PipelineConfig(**(config_dict or {}))
