"""Configuration for the analytics service."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tradelens.libraries.performance.breakdown import BUILTIN_DIMENSIONS, Dimension, get_dimension
from tradelens.libraries.performance.time_range import TIME_RANGE_LABELS
from tradelens.system.config import AnalyticsSettings


class AnalyticsConfig(BaseModel):
    """
    Report generation settings.

    Attributes:
        starting_capital: Account value before the first trade (equity curve base)
        default_time_range: Range token used when a caller gives none
            ("" or "all" = all time)
        dimensions: Breakdown dimensions, in display order

    Example:
        >>> config = AnalyticsConfig(starting_capital=Decimal("10000"), dimensions=["session"])
        >>> [d.name for d in config.get_dimensions()]
        ['session']
    """

    starting_capital: Decimal = Field(default=Decimal("100"), ge=0)
    default_time_range: str = "7days"
    dimensions: list[str] = Field(default_factory=lambda: ["strategy", "session", "direction"])

    model_config = ConfigDict(frozen=True)

    @field_validator("default_time_range")
    @classmethod
    def validate_time_range(cls, v: str) -> str:
        """Accept only known range tokens; "all" is an alias for all time."""
        token = v.strip().lower()
        if token == "all":
            token = ""
        if token not in TIME_RANGE_LABELS:
            raise ValueError(f"Unknown time range '{v}'. Available: {[t for t in TIME_RANGE_LABELS if t]} or 'all'")
        return token

    @field_validator("dimensions")
    @classmethod
    def validate_dimensions(cls, v: list[str]) -> list[str]:
        """Normalize names and reject unknown or duplicate dimensions."""
        names = [name.strip().lower() for name in v]
        unknown = [n for n in names if n not in BUILTIN_DIMENSIONS]
        if unknown:
            raise ValueError(f"Unknown dimensions {unknown}. Available: {sorted(BUILTIN_DIMENSIONS)}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate dimensions in {v}")
        return names

    def get_dimensions(self) -> list[Dimension]:
        """Resolve dimension names to Dimension descriptors."""
        return [get_dimension(name) for name in self.dimensions]

    @classmethod
    def from_settings(cls, settings: AnalyticsSettings, **overrides: Any) -> "AnalyticsConfig":
        """
        Build from the analytics section of system.yaml.

        Args:
            settings: Analytics section of the system config
            **overrides: Field values taking precedence over the file (validated the same way)

        Example:
            >>> AnalyticsConfig.from_settings(settings, dimensions=["session"])
        """
        values: dict[str, Any] = {
            "starting_capital": Decimal(str(settings.starting_capital)),
            "default_time_range": settings.default_time_range,
            "dimensions": list(settings.dimensions),
        }
        values.update(overrides)
        return cls(**values)
