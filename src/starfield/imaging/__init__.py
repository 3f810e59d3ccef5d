"""Star field imaging modules.

- pixel_buffer: Read-only brightness view over decoded pixels
- star_detector: Threshold scan and seed-relative grouping
- aperture_photometer: Aperture flux, background annulus, magnitude, SNR
- filter_matcher: Nearest-neighbour matching across filters, color indices
- stellar_estimator: Temperature, spectral class, relative luminosity
"""

from starfield.imaging.records import Star, FilterObservation, SpectralClass, stars_to_frame
from starfield.imaging.pixel_buffer import PixelBuffer
from starfield.imaging.deadline import Deadline
from starfield.imaging.star_detector import StarDetector
from starfield.imaging.aperture_photometer import AperturePhotometer
from starfield.imaging.filter_matcher import MultiFilterMatcher
from starfield.imaging.stellar_estimator import StellarEstimator

__all__ = [
    "Star",
    "FilterObservation",
    "SpectralClass",
    "stars_to_frame",
    "PixelBuffer",
    "Deadline",
    "StarDetector",
    "AperturePhotometer",
    "MultiFilterMatcher",
    "StellarEstimator",
]
