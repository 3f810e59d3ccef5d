"""Circular-aperture photometry with annulus background subtraction.

For each star:

- aperture flux is the summed brightness of pixels within ``aperture_radius``
  of the centroid; the pixel count is the aperture area
- background is the mean and (population) standard deviation of pixels with
  ``annulus_inner <= distance <= annulus_outer``; both are 0 when the
  annulus falls entirely off the buffer
- net flux is ``flux - background_mean * area``, floored at 1 so that the
  magnitude stays finite and negative-flux artifacts are not reported
- ``magnitude = -2.5 log10(net)`` (instrumental, no zero point)
- ``snr = net / sqrt(net + background_std**2 * area)``

Both regions are clipped to the buffer.
"""

import logging
import math
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from starfield.errors import InvalidInput
from starfield.imaging.pixel_buffer import PixelBuffer
from starfield.imaging.records import Star

if TYPE_CHECKING:
    from starfield.schemas import InternalConfig

__all__ = ['AperturePhotometer', 'MIN_NET_FLUX', 'above_flux_floor']

logger = logging.getLogger(__name__)

MIN_NET_FLUX = 1.0


def above_flux_floor(star: Star) -> bool:
    """False for unmeasured stars and for stars clipped to the flux floor."""
    return star.flux is not None and star.flux > MIN_NET_FLUX


class AperturePhotometer:
    """Measure flux, instrumental magnitude and SNR for detected stars.

    Examples
    --------
    >>> photometer = AperturePhotometer(config)
    >>> measured = photometer.measure(buffer, stars)
    >>> measured[0].magnitude  # brightest star first
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.aperture_radius = config.photometry.aperture_radius
        self.annulus_inner = config.photometry.annulus_inner
        self.annulus_outer = config.photometry.annulus_outer

    def measure(self, buffer: PixelBuffer, stars: Sequence[Star],
                aperture_radius: Optional[float] = None,
                annulus_inner: Optional[float] = None,
                annulus_outer: Optional[float] = None) -> List[Star]:
        """Run aperture photometry on every star.

        Parameters
        ----------
        buffer : PixelBuffer
            The buffer the stars were detected in.
        stars : sequence of Star
            Detected stars; not modified.
        aperture_radius, annulus_inner, annulus_outer : float, optional
            Per-call overrides of the configured radii.

        Returns
        -------
        list of Star
            New records with photometry, sorted by ascending magnitude.

        Raises
        ------
        InvalidInput
            If a radius is negative or ``annulus_inner >= annulus_outer``.
        """
        r_ap = self.aperture_radius if aperture_radius is None else float(aperture_radius)
        r_in = self.annulus_inner if annulus_inner is None else float(annulus_inner)
        r_out = self.annulus_outer if annulus_outer is None else float(annulus_outer)
        self._validate_radii(r_ap, r_in, r_out)

        logger.info("Performing aperture photometry on %d stars (aperture=%s, annulus=[%s, %s])",
                    len(stars), r_ap, r_in, r_out)

        image = buffer.brightness
        measured = []
        for star in stars:
            flux, area = self._measure_aperture(image, star.x, star.y, r_ap)
            bg_mean, bg_std = self._measure_background(image, star.x, star.y, r_in, r_out)

            net_flux = max(flux - bg_mean * area, MIN_NET_FLUX)
            magnitude = -2.5 * math.log10(net_flux)
            snr = net_flux / math.sqrt(net_flux + bg_std ** 2 * area)

            logger.debug("Star at (%.1f, %.1f): mag=%.2f, SNR=%.1f",
                         star.x, star.y, magnitude, snr)
            measured.append(replace(
                star,
                flux=net_flux,
                magnitude=magnitude,
                snr=snr,
                aperture_area=area,
                background_mean=bg_mean,
                background_std=bg_std,
            ))

        # Brightest first; sort is stable for equal magnitudes
        measured.sort(key=lambda s: s.magnitude)
        return measured

    @staticmethod
    def _validate_radii(r_ap: float, r_in: float, r_out: float) -> None:
        for name, value in (("aperture_radius", r_ap), ("annulus_inner", r_in),
                            ("annulus_outer", r_out)):
            if value < 0:
                raise InvalidInput(f"{name} must be non-negative, got {value}")
        if r_in >= r_out:
            raise InvalidInput(
                f"annulus_inner ({r_in}) must be less than annulus_outer ({r_out})"
            )

    @staticmethod
    def _window(image: np.ndarray, cx: float, cy: float,
                radius: float) -> Tuple[np.ndarray, np.ndarray]:
        """Pixel values and center distances in the clipped bounding box."""
        height, width = image.shape
        x0 = max(0, math.floor(cx - radius))
        x1 = min(width - 1, math.ceil(cx + radius))
        y0 = max(0, math.floor(cy - radius))
        y1 = min(height - 1, math.ceil(cy + radius))
        if x0 > x1 or y0 > y1:
            return np.empty(0), np.empty(0)

        y_idx, x_idx = np.mgrid[y0:y1 + 1, x0:x1 + 1]
        distance = np.hypot(x_idx - cx, y_idx - cy)
        return image[y0:y1 + 1, x0:x1 + 1], distance

    def _measure_aperture(self, image: np.ndarray, cx: float, cy: float,
                          radius: float) -> Tuple[float, int]:
        values, distance = self._window(image, cx, cy, radius)
        inside = distance <= radius
        return float(values[inside].sum()), int(inside.sum())

    def _measure_background(self, image: np.ndarray, cx: float, cy: float,
                            inner: float, outer: float) -> Tuple[float, float]:
        values, distance = self._window(image, cx, cy, outer)
        ring = values[(distance >= inner) & (distance <= outer)]
        if ring.size == 0:
            return 0.0, 0.0
        return float(ring.mean()), float(ring.std())
