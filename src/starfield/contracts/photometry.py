"""Photometry stage contract.

Enforces the guarantee that after aperture photometry every star carries
finite flux, magnitude and SNR, that the flux floor was applied, and that
stars are ordered brightest first.
"""

import math
from typing import Sequence

from starfield.contracts.base import require


def assert_measured(stars: Sequence) -> None:
    """Enforce photometry stage contract.

    Called after ``AperturePhotometer.measure``.

    Raises
    ------
    ContractViolation
        If any star lacks photometry, has a NaN/inf field, or the list is unsorted
    """
    for i, star in enumerate(stars):
        for field in ("flux", "magnitude", "snr"):
            value = getattr(star, field)
            require(
                value is not None and math.isfinite(value),
                f"Photometry contract violated: star {i} has {field}={value}"
            )
        require(
            star.flux >= 1.0,
            f"Photometry contract violated: star {i} flux {star.flux} below floor of 1"
        )

    magnitudes = [star.magnitude for star in stars]
    require(
        all(a <= b for a, b in zip(magnitudes, magnitudes[1:])),
        "Photometry contract violated: stars not sorted by ascending magnitude"
    )
