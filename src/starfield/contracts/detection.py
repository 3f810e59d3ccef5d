"""Detection stage contract.

Enforces the guarantee that after detection every star has a finite
position inside the buffer, a non-negative radius and at least one pixel.
"""

import math
from typing import Sequence

from starfield.contracts.base import require


def assert_detected(stars: Sequence, width: int, height: int) -> None:
    """Enforce detection stage contract.

    Called immediately after ``StarDetector.detect``. An empty list is a
    valid detection result.

    Parameters
    ----------
    stars : sequence of Star
        Output of the detector
    width, height : int
        Dimensions of the scanned buffer

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        isinstance(stars, list),
        f"Detection contract violated: output is {type(stars)}, expected list"
    )

    for i, star in enumerate(stars):
        require(
            math.isfinite(star.x) and math.isfinite(star.y),
            f"Detection contract violated: star {i} has non-finite centroid ({star.x}, {star.y})"
        )
        require(
            0 <= star.x < width and 0 <= star.y < height,
            f"Detection contract violated: star {i} centroid ({star.x:.2f}, {star.y:.2f}) "
            f"outside {width}x{height} buffer"
        )
        require(
            star.radius >= 0,
            f"Detection contract violated: star {i} has negative radius {star.radius}"
        )
        require(
            star.pixel_count >= 1,
            f"Detection contract violated: star {i} has pixel_count {star.pixel_count}"
        )
