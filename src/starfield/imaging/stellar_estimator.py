"""Color index to temperature, spectral class and relative luminosity.

Temperature uses the Ballesteros (2012) black-body relation

    T = 4600 * (1 / (0.92 BV + 1.7) + 1 / (0.92 BV + 0.62))

which is meaningful for main-sequence-like B-V only. No clamping is done;
out-of-range input can give non-physical temperatures.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from starfield.imaging.records import SpectralClass, Star

__all__ = [
    'StellarEstimate',
    'StellarEstimator',
    'estimate_temperature',
    'spectral_class',
    'relative_luminosity',
]

logger = logging.getLogger(__name__)

# Upper B-V bound for each class; first match wins, anything above is M
SPECTRAL_CLASS_BOUNDS = (
    (-0.30, SpectralClass.O),
    (-0.02, SpectralClass.B),
    (0.30, SpectralClass.A),
    (0.58, SpectralClass.F),
    (0.81, SpectralClass.G),
    (1.40, SpectralClass.K),
)


def estimate_temperature(color_bv: float) -> float:
    """Effective temperature in kelvin from B-V."""
    return 4600.0 * (1.0 / (0.92 * color_bv + 1.7) + 1.0 / (0.92 * color_bv + 0.62))


def spectral_class(color_bv: float) -> SpectralClass:
    """Spectral class bucket for a B-V color index."""
    for upper, cls in SPECTRAL_CLASS_BOUNDS:
        if color_bv < upper:
            return cls
    return SpectralClass.M


def relative_luminosity(v_magnitude: float) -> float:
    """``10**(-0.4 V)`` with zero distance modulus; a display proxy only."""
    return 10.0 ** (-0.4 * v_magnitude)


@dataclass(frozen=True)
class StellarEstimate:
    temperature: float
    spectral_class: SpectralClass
    luminosity: Optional[float] = None


class StellarEstimator:
    """Derive physical quantities for stars with a color index."""

    def estimate(self, color_index: float, magnitude: Optional[float] = None) -> StellarEstimate:
        """Temperature and class for ``color_index``; luminosity when ``magnitude`` is given."""
        return StellarEstimate(
            temperature=estimate_temperature(color_index),
            spectral_class=spectral_class(color_index),
            luminosity=None if magnitude is None else relative_luminosity(magnitude),
        )

    def estimate_stars(self, stars: Sequence[Star]) -> List[Star]:
        """Return stars carrying temperature, class and luminosity.

        Stars without a color index are skipped. Luminosity uses the visual
        magnitude when present, else the star's own magnitude.
        """
        estimated = []
        for star in stars:
            if star.color_index is None:
                continue
            magnitude = star.v_magnitude if star.v_magnitude is not None else star.magnitude
            est = self.estimate(star.color_index, magnitude)
            estimated.append(replace(
                star,
                temperature=est.temperature,
                spectral_class=est.spectral_class,
                luminosity=est.luminosity,
            ))

        skipped = len(stars) - len(estimated)
        if skipped:
            logger.debug("Skipped %d stars without color index", skipped)
        return estimated
