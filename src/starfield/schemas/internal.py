"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal
from pydantic import Field, ConfigDict, model_validator
from starfield.schemas.base import StarfieldBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalDetectorConfig(StarfieldBaseModel):
    """Runtime detection configuration."""
    threshold: float
    min_radius: float = Field(ge=0)
    max_radius: float = Field(ge=0)
    min_separation: float = Field(gt=0)
    timeout_sec: float = Field(gt=0)

    @model_validator(mode="after")
    def check_radius_range(self):
        if self.min_radius > self.max_radius:
            raise ValueError("min_radius must not exceed max_radius")
        return self


class InternalPhotometryConfig(StarfieldBaseModel):
    """Runtime photometry configuration."""
    aperture_radius: float = Field(ge=0)
    annulus_inner: float = Field(ge=0)
    annulus_outer: float = Field(ge=0)

    @model_validator(mode="after")
    def check_annulus_order(self):
        if self.annulus_inner >= self.annulus_outer:
            raise ValueError("annulus_inner must be less than annulus_outer")
        return self


class InternalMatcherConfig(StarfieldBaseModel):
    """Runtime matching configuration."""
    max_distance: float = Field(gt=0)
    blue_filter: str
    visual_filter: str


class InternalChartConfig(StarfieldBaseModel):
    """Runtime chart configuration."""
    max_points: int = Field(ge=1)
    magnitude_offset: float


class InternalLoggingConfig(StarfieldBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(StarfieldBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that engine code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.threshold = config.detector.threshold  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    detector: InternalDetectorConfig
    photometry: InternalPhotometryConfig
    matcher: InternalMatcherConfig
    chart: InternalChartConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
