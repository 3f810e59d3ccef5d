"""H-R diagram records for the rendering layer.

Maps estimated stars to ``x`` = color index, ``y`` = magnitude and a
``display_color`` picked from a seven-band temperature table. No drawing
happens here; whichever charting tool the caller uses plots the frame as a
scatter with the y axis reversed (bright stars at the top).
"""

import logging
import math
from typing import List, Sequence, TYPE_CHECKING

import pandas as pd

from starfield.imaging.aperture_photometer import MIN_NET_FLUX
from starfield.imaging.records import Star
from starfield.imaging.stellar_estimator import StellarEstimator

if TYPE_CHECKING:
    from starfield.schemas import InternalConfig

__all__ = ['ChartDataBuilder', 'temperature_to_color', 'CHART_COLUMNS']

logger = logging.getLogger(__name__)

# (lower temperature bound in K, color), hottest first
TEMPERATURE_COLORS = (
    (30000.0, "#9bb0ff"),  # O - blue
    (10000.0, "#aabfff"),  # B - blue-white
    (7500.0, "#cad7ff"),   # A - white
    (6000.0, "#f8f7ff"),   # F - yellow-white
    (5200.0, "#fff4ea"),   # G - yellow
    (3700.0, "#ffb56c"),   # K - orange
)
COOLEST_COLOR = "#ff6a00"  # M - red

CHART_COLUMNS = [
    "x", "y", "display_color", "temperature", "spectral_class",
    "luminosity", "star_x", "star_y",
]


def temperature_to_color(temperature: float) -> str:
    """Display color for a temperature band."""
    for lower, color in TEMPERATURE_COLORS:
        if temperature > lower:
            return color
    return COOLEST_COLOR


class ChartDataBuilder:
    """Build the H-R scatter record set from estimated stars.

    Stars lacking a finite color index or magnitude are dropped, as are
    stars whose net flux was clipped to the photometry floor. The rest keep
    their input order (brightest first after photometry) and are capped at
    ``chart.max_points``.
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.max_points = config.chart.max_points
        self.magnitude_offset = config.chart.magnitude_offset
        self._estimator = StellarEstimator()

    def build(self, stars: Sequence[Star]) -> pd.DataFrame:
        rows = []
        for star in self._valid_stars(stars)[:self.max_points]:
            magnitude = star.v_magnitude if star.v_magnitude is not None else star.magnitude
            if star.temperature is None:
                star_estimate = self._estimator.estimate(star.color_index, magnitude)
                temperature = star_estimate.temperature
                cls = star_estimate.spectral_class
                luminosity = star_estimate.luminosity
            else:
                temperature, cls, luminosity = star.temperature, star.spectral_class, star.luminosity

            rows.append({
                "x": star.color_index,
                "y": magnitude + self.magnitude_offset,
                "display_color": temperature_to_color(temperature),
                "temperature": temperature,
                "spectral_class": None if cls is None else str(getattr(cls, "value", cls)),
                "luminosity": luminosity,
                "star_x": star.x,
                "star_y": star.y,
            })

        logger.info("Chart data: %d points from %d stars", len(rows), len(stars))
        return pd.DataFrame(rows, columns=CHART_COLUMNS)

    def to_records(self, stars: Sequence[Star]) -> List[dict]:
        """Same as ``build`` but as plain dicts."""
        return self.build(stars).to_dict(orient="records")

    @staticmethod
    def _valid_stars(stars: Sequence[Star]) -> List[Star]:
        valid = []
        for star in stars:
            magnitude = star.v_magnitude if star.v_magnitude is not None else star.magnitude
            if star.color_index is None or magnitude is None:
                continue
            if not (math.isfinite(magnitude) and math.isfinite(star.color_index)):
                continue
            # Clipped to the flux floor: photometry failed for this star
            if star.flux is not None and star.flux <= MIN_NET_FLUX:
                continue
            valid.append(star)
        return valid
