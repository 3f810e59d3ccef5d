"""Star field analysis pipeline.

Runs an image through detection, photometry and (with two or more filter
images) color matching, stellar estimation and chart record building.
Stage contracts are checked at every boundary.

Failures the caller can act on (bad input, timeout, empty fields) come back
as an ``ErrorEnvelope`` on the result instead of an exception. Contract
violations are engine bugs and propagate.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union, TYPE_CHECKING

import numpy as np
import pandas as pd
import xarray as xr

from starfield.contracts import (
    assert_chart_data,
    assert_detected,
    assert_estimated,
    assert_measured,
)
from starfield.errors import ErrorEnvelope, ErrorType, StarfieldError, make_error
from starfield.imaging.aperture_photometer import AperturePhotometer, above_flux_floor
from starfield.imaging.deadline import Deadline
from starfield.imaging.filter_matcher import MultiFilterMatcher
from starfield.imaging.pixel_buffer import PixelBuffer
from starfield.imaging.records import FilterObservation, Star, stars_to_frame
from starfield.imaging.star_detector import StarDetector
from starfield.imaging.stellar_estimator import StellarEstimator
from starfield.visualization.chart_data import ChartDataBuilder

if TYPE_CHECKING:
    from starfield.schemas import InternalConfig

__all__ = ['StarfieldAnalyzer', 'AnalysisResult', 'as_pixel_buffer']

logger = logging.getLogger(__name__)

ImageLike = Union[PixelBuffer, np.ndarray, xr.DataArray]


def as_pixel_buffer(image: ImageLike) -> PixelBuffer:
    """Wrap arrays and DataArrays; PixelBuffers pass through."""
    if isinstance(image, PixelBuffer):
        return image
    if isinstance(image, xr.DataArray):
        return PixelBuffer.from_dataarray(image)
    return PixelBuffer(image)


@dataclass
class AnalysisResult:
    """Outcome of one analysis run.

    ``error`` is None on success. A ``NO_DATA`` error accompanies an empty
    but valid result; ``stars`` is then empty.
    """
    stars: List[Star] = field(default_factory=list)
    observations: Dict[str, FilterObservation] = field(default_factory=dict)
    chart: Optional[pd.DataFrame] = None
    error: Optional[ErrorEnvelope] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_frame(self) -> pd.DataFrame:
        return stars_to_frame(self.stars)


class StarfieldAnalyzer:
    """Sequential detection → photometry → matching → estimation → chart.

    Holds only stage objects built from the frozen config; each call gets
    its own buffer and returns its own star list.

    Examples
    --------
    >>> analyzer = StarfieldAnalyzer(resolve_config())
    >>> result = analyzer.analyze(image)
    >>> if result.ok:
    ...     print(result.to_frame()[["x", "y", "magnitude", "snr"]])

    >>> result = analyzer.analyze_filters({"B": b_image, "V": v_image})
    >>> result.chart  # x = B-V, y = V magnitude, display_color
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.detector = StarDetector(config)
        self.photometer = AperturePhotometer(config)
        self.matcher = MultiFilterMatcher(config)
        self.estimator = StellarEstimator()
        self.chart_builder = ChartDataBuilder(config)

    def analyze(self, image: ImageLike,
                deadline: Optional[Union[Deadline, float]] = None) -> AnalysisResult:
        """Detect stars in one image and measure them."""
        try:
            stars = self._detect_and_measure(image, deadline)
        except StarfieldError as e:
            logger.warning("Analysis failed: %s", e)
            return AnalysisResult(error=e.to_envelope())

        if not stars:
            return AnalysisResult(error=make_error(ErrorType.NO_DATA, "No stars detected"))
        if not any(above_flux_floor(s) for s in stars):
            return AnalysisResult(error=make_error(
                ErrorType.NO_DATA, "All stars below the flux floor", detected=len(stars)))
        return AnalysisResult(stars=stars)

    def observe(self, name: str, image: ImageLike,
                deadline: Optional[Union[Deadline, float]] = None) -> FilterObservation:
        """Detection + photometry of one filter image. Errors raise."""
        return FilterObservation(name=name, stars=self._detect_and_measure(image, deadline))

    def analyze_filters(self, images: Mapping[str, ImageLike],
                        reference: Optional[str] = None,
                        deadline: Optional[Union[Deadline, float]] = None) -> AnalysisResult:
        """Full H-R run over several filter images of the same, registered field.

        Parameters
        ----------
        images : mapping of filter name to image
            e.g. ``{"B": b, "V": v}`` or ``{"L": l, "R": r, "G": g, "B": b}``.
        reference : str, optional
            Filter whose stars receive color indices (e.g. "L"). Defaults
            to the visual filter.
        deadline : Deadline or float, optional
            Detection budget. A number applies to each image separately;
            a Deadline object is shared by all images.
        """
        observations = {}
        try:
            for name, image in images.items():
                observations[name] = self.observe(name, image, deadline)
                logger.info("Filter %s: %d stars", name, len(observations[name].stars))
        except StarfieldError as e:
            logger.warning("Filter analysis failed: %s", e)
            return AnalysisResult(observations=observations, error=e.to_envelope(filter=name))

        if reference is None:
            reference = self.matcher.visual_filter
        ref_obs = observations.get(reference) or next(iter(observations.values()), None)
        if ref_obs is None or not any(above_flux_floor(s) for s in ref_obs.stars):
            return AnalysisResult(
                observations=observations,
                error=make_error(ErrorType.NO_DATA, "No measurable stars in reference filter", filter=reference),
            )

        colored = self.matcher.color_indices(ref_obs.stars, list(observations.values()))
        if len(observations) < 2:
            return AnalysisResult(stars=colored, observations=observations)

        estimated = self.estimator.estimate_stars(colored)
        assert_estimated(estimated)

        chart = self.chart_builder.build(estimated)
        assert_chart_data(chart, self.config.chart.max_points)

        if chart.empty:
            return AnalysisResult(
                observations=observations,
                chart=chart,
                error=make_error(ErrorType.NO_DATA, "No measurable stars matched across filters"),
            )
        return AnalysisResult(stars=estimated, observations=observations, chart=chart)

    def _detect_and_measure(self, image: ImageLike,
                            deadline: Optional[Union[Deadline, float]]) -> List[Star]:
        buffer = as_pixel_buffer(image)

        stars = self.detector.detect(buffer, deadline)
        assert_detected(stars, buffer.width, buffer.height)

        measured = self.photometer.measure(buffer, stars)
        assert_measured(measured)
        return measured
