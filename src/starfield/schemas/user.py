"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., THRESHOLD → threshold, MAX_DISTANCE → max_distance).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from starfield.schemas.base import StarfieldBaseModel


class UserDetectorConfig(StarfieldBaseModel):
    """User-facing detection config."""
    threshold: Optional[float] = None
    min_radius: Optional[float] = None
    max_radius: Optional[float] = None
    min_separation: Optional[float] = None
    timeout_sec: Optional[float] = None


class UserPhotometryConfig(StarfieldBaseModel):
    """User-facing photometry config."""
    aperture_radius: Optional[float] = None
    annulus_inner: Optional[float] = None
    annulus_outer: Optional[float] = None


class UserMatcherConfig(StarfieldBaseModel):
    """User-facing matcher config."""
    max_distance: Optional[float] = None
    blue_filter: Optional[str] = None
    visual_filter: Optional[str] = None

    @field_validator("blue_filter", "visual_filter", mode="before")
    @classmethod
    def normalize_filter_name(cls, v):
        """Filter labels are upper-case band names."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class UserChartConfig(StarfieldBaseModel):
    """User-facing chart config."""
    max_points: Optional[int] = None
    magnitude_offset: Optional[float] = None


class UserConfig(StarfieldBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            threshold=100,
            aperture_radius=4,
            max_distance=3,
        )

        internal = resolve_config(param_cfg, user_cfg)
    """

    # Detection settings (flat aliases)
    threshold: Optional[float] = Field(None, alias="THRESHOLD")
    min_radius: Optional[float] = Field(None, alias="MIN_RADIUS")
    max_radius: Optional[float] = Field(None, alias="MAX_RADIUS")
    min_separation: Optional[float] = Field(None, alias="MIN_SEPARATION")
    timeout_sec: Optional[float] = Field(None, alias="TIMEOUT_SEC")

    # Photometry settings (flat aliases)
    aperture_radius: Optional[float] = Field(None, alias="APERTURE_RADIUS")
    annulus_inner: Optional[float] = Field(None, alias="ANNULUS_INNER")
    annulus_outer: Optional[float] = Field(None, alias="ANNULUS_OUTER")

    # Matching settings (flat aliases)
    max_distance: Optional[float] = Field(None, alias="MAX_DISTANCE")
    color_index: Optional[str] = Field(None, alias="COLOR_INDEX")

    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    detector: Optional[UserDetectorConfig] = None
    photometry: Optional[UserPhotometryConfig] = None
    matcher: Optional[UserMatcherConfig] = None
    chart: Optional[UserChartConfig] = None

    model_config = StarfieldBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator(
        "threshold", "min_radius", "max_radius", "min_separation", "timeout_sec",
        "aperture_radius", "annulus_inner", "annulus_outer", "max_distance",
        mode="before",
    )
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("color_index", mode="before")
    @classmethod
    def normalize_color_index(cls, v):
        """Accept 'b-v', 'B-G', ' r-g ' and similar."""
        if isinstance(v, str):
            v = v.strip().upper()
            parts = v.split("-")
            if len(parts) != 2 or not all(parts):
                raise ValueError(f"color_index must look like 'B-V', got {v!r}")
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Detector section
        detector = {}
        for name in ("threshold", "min_radius", "max_radius", "min_separation", "timeout_sec"):
            value = getattr(self, name)
            if value is not None:
                detector[name] = value

        # Merge with explicit detector config
        if self.detector is not None:
            detector.update(self.detector.model_dump(exclude_none=True))

        if detector:
            overrides["detector"] = detector

        # Photometry section
        photometry = {}
        for name in ("aperture_radius", "annulus_inner", "annulus_outer"):
            value = getattr(self, name)
            if value is not None:
                photometry[name] = value

        if self.photometry is not None:
            photometry.update(self.photometry.model_dump(exclude_none=True))

        if photometry:
            overrides["photometry"] = photometry

        # Matcher section
        matcher = {}
        if self.max_distance is not None:
            matcher["max_distance"] = self.max_distance
        if self.color_index is not None:
            blue, visual = self.color_index.split("-")
            matcher["blue_filter"] = blue
            matcher["visual_filter"] = visual

        if self.matcher is not None:
            matcher.update(self.matcher.model_dump(exclude_none=True))

        if matcher:
            overrides["matcher"] = matcher

        if self.chart is not None:
            chart = self.chart.model_dump(exclude_none=True)
            if chart:
                overrides["chart"] = chart

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
