"""ParamConfig: Expert defaults for the Starfield engine.

This module defines the complete default configuration. ALL engine
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal
from pydantic import Field, field_validator, model_validator
from starfield.schemas.base import StarfieldBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class DetectorConfig(StarfieldBaseModel):
    """Star detection configuration."""
    threshold: float = Field(120.0, ge=0, description="Brightness threshold in sample units (0-255 for 8-bit)")
    min_radius: float = Field(2.0, ge=0, description="Minimum star radius in pixels")
    max_radius: float = Field(50.0, ge=0, description="Maximum star radius in pixels")
    min_separation: float = Field(10.0, gt=0, description="Grouping distance from the seed pixel")
    timeout_sec: float = Field(30.0, gt=0, description="Time budget for scan + clustering")

    @field_validator("threshold", "min_radius", "max_radius", "min_separation", mode="before")
    @classmethod
    def coerce_to_float(cls, v):
        """Allow int or float for numeric thresholds."""
        return float(v)

    @model_validator(mode="after")
    def check_radius_range(self):
        if self.min_radius > self.max_radius:
            raise ValueError(
                f"min_radius ({self.min_radius}) must not exceed max_radius ({self.max_radius})"
            )
        return self


class PhotometryConfig(StarfieldBaseModel):
    """Aperture photometry configuration."""
    aperture_radius: float = Field(5.0, ge=0)
    annulus_inner: float = Field(8.0, ge=0)
    annulus_outer: float = Field(12.0, ge=0)

    @model_validator(mode="after")
    def check_annulus_order(self):
        if self.annulus_inner >= self.annulus_outer:
            raise ValueError(
                f"annulus_inner ({self.annulus_inner}) must be less than "
                f"annulus_outer ({self.annulus_outer})"
            )
        return self


class MatcherConfig(StarfieldBaseModel):
    """Multi-filter matching configuration.

    ``blue_filter`` and ``visual_filter`` name the two observations whose
    magnitude difference is the color index (B-V by default; B-G, R-G or
    B-R for LRGB data).
    """
    max_distance: float = Field(5.0, gt=0, description="Match radius in pixels")
    blue_filter: str = "B"
    visual_filter: str = "V"


class ChartConfig(StarfieldBaseModel):
    """H-R chart record configuration."""
    max_points: int = Field(100, ge=1)
    magnitude_offset: float = 0.0


class LoggingConfig(StarfieldBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(StarfieldBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all engine parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg)

    Runtime code only sees InternalConfig.
    """

    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    photometry: PhotometryConfig = Field(default_factory=PhotometryConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
