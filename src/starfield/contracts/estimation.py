"""Estimation stage contract.

Enforces the guarantee that every estimated star was matched in both
filters and carries a finite temperature and a valid spectral class.
"""

import math
from typing import Sequence

from starfield.contracts.base import require
from starfield.imaging.records import SpectralClass


def assert_estimated(stars: Sequence) -> None:
    """Enforce estimation stage contract.

    Raises
    ------
    ContractViolation
        If a star lacks a color index, or its class is outside O..M
    """
    valid_classes = tuple(SpectralClass)
    for i, star in enumerate(stars):
        require(
            star.color_index is not None and math.isfinite(star.color_index),
            f"Estimation contract violated: star {i} has no color index"
        )
        require(
            star.spectral_class in valid_classes,
            f"Estimation contract violated: star {i} spectral class {star.spectral_class!r}"
        )
        require(
            star.temperature is not None,
            f"Estimation contract violated: star {i} has no temperature"
        )
