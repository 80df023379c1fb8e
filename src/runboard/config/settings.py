"""
Typed configuration models using Pydantic.

All tunable thresholds live here; processing code receives them
through a DashboardConfig instead of hardcoding them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChartMode(str, Enum):
    """Which per-runner value the runner chart shows."""

    TOTAL = "total"
    AVERAGE = "average"


class ValidationConfig(BaseModel):
    """Row validation thresholds."""

    model_config = ConfigDict(frozen=True)

    max_miles_per_run: float = Field(
        default=200.0,
        gt=0.0,
        description="Distances above this are rejected as implausible for a single run",
    )
    distance_headers: list[str] = Field(
        default_factory=lambda: ["miles run", "milesrun"],
        description="Accepted header spellings for the distance column",
    )

    @field_validator("distance_headers")
    @classmethod
    def validate_distance_headers(cls, v: list[str]) -> list[str]:
        """Ensure at least one non-blank distance header is configured."""
        cleaned = [h.strip() for h in v if h.strip()]
        if not cleaned:
            msg = "distance_headers must name at least one header"
            raise ValueError(msg)
        return cleaned


class AggregationConfig(BaseModel):
    """Aggregation and chart series configuration."""

    model_config = ConfigDict(frozen=True)

    decimals: int = Field(default=2, ge=0, le=6, description="Display rounding")
    daily_window: int = Field(
        default=10, ge=1, description="Number of most recent dates in daily totals"
    )
    chart_mode: ChartMode = Field(default=ChartMode.TOTAL)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class DashboardConfig(BaseModel):
    """Complete dashboard configuration."""

    model_config = ConfigDict(frozen=True)

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def max_miles_per_run(self) -> float:
        """Convenience accessor for the plausibility threshold."""
        return self.validation.max_miles_per_run

    @property
    def decimals(self) -> int:
        """Convenience accessor for display rounding."""
        return self.aggregation.decimals
