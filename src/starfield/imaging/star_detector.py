"""Threshold-and-group star detection.

Bright pixels are grouped with a greedy, seed-relative single pass rather
than connected-component labeling: every group is seeded by the first
unassigned bright pixel in scan order and takes every later unassigned
bright pixel closer than ``min_separation`` to that seed. Membership is
not transitive, and the result depends on scan order.
"""

import logging
from typing import List, Optional, Tuple, Union, TYPE_CHECKING

import numpy as np

from starfield.imaging.deadline import Deadline
from starfield.imaging.pixel_buffer import PixelBuffer
from starfield.imaging.records import Star

if TYPE_CHECKING:
    from starfield.schemas import InternalConfig

__all__ = ['StarDetector']

logger = logging.getLogger(__name__)


class StarDetector:
    """Config-driven star detection.

    The detector keeps only its configuration; every ``detect`` call works
    on its own buffer and returns a fresh star list, so one instance can be
    reused across calls and threads.

    Notes
    -----
    - Scan is O(W*H) (vectorized); clustering is O(C^2) in the number of
      bright pixels C. Raise ``threshold`` to keep C tractable.
    - The 1-pixel border of the buffer is never scanned.
    - An all-dark buffer gives an empty list, not an error.

    Examples
    --------
    >>> detector = StarDetector(resolve_config())
    >>> stars = detector.detect(PixelBuffer(image))
    """

    def __init__(self, config: "InternalConfig"):
        """Initialize detector with validated configuration.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        """
        self.config = config
        self.threshold = config.detector.threshold
        self.min_radius = config.detector.min_radius
        self.max_radius = config.detector.max_radius
        self.min_separation = config.detector.min_separation
        self.timeout_sec = config.detector.timeout_sec

        logger.info("StarDetector initialized: threshold=%s, radius=[%s, %s], min_separation=%s",
                    self.threshold, self.min_radius, self.max_radius, self.min_separation)

    def detect(self, buffer: PixelBuffer,
               deadline: Optional[Union[Deadline, float]] = None) -> List[Star]:
        """Detect stars in a pixel buffer.

        Parameters
        ----------
        buffer : PixelBuffer
            Decoded image; never modified.
        deadline : Deadline or float, optional
            Time budget. A number is a budget in seconds; None uses
            ``detector.timeout_sec`` from the config.

        Returns
        -------
        list of Star
            Stars passing the size filter, in group (scan) order.

        Raises
        ------
        DetectionTimeout
            If the budget runs out after the scan or during clustering.
            No partial list is returned.
        """
        deadline = Deadline.coerce(deadline, self.timeout_sec)

        xs, ys, values = self._find_bright_pixels(buffer.brightness)
        deadline.check("scan")

        groups = self._group_nearby_pixels(xs, ys, self.min_separation, deadline)
        deadline.check("clustering")

        stars = [self._group_to_star(xs[g], ys[g], values[g]) for g in groups]
        kept = [
            star for star in stars
            if self.min_radius <= star.radius <= self.max_radius
            and star.brightness > self.threshold
        ]

        logger.info("Detected %d stars from %d bright pixels (%d groups) in %.1f ms",
                    len(kept), len(xs), len(groups), deadline.elapsed() * 1000.0)
        if len(stars) > len(kept):
            logger.debug("Removed %d groups outside radius [%s, %s]",
                         len(stars) - len(kept), self.min_radius, self.max_radius)
        return kept

    def _find_bright_pixels(self, brightness: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Interior pixels above threshold, in row-major scan order."""
        height, width = brightness.shape
        if height < 3 or width < 3:
            empty = np.empty(0)
            return empty.astype(np.int64), empty.astype(np.int64), empty

        interior = brightness[1:-1, 1:-1]
        rows, cols = np.nonzero(interior > self.threshold)
        values = interior[rows, cols]
        return cols + 1, rows + 1, values

    @staticmethod
    def _group_nearby_pixels(xs: np.ndarray, ys: np.ndarray, min_separation: float,
                             deadline: Deadline) -> List[np.ndarray]:
        """Seed-relative single-pass grouping.

        Returns index arrays into the candidate list; each array starts with
        its seed, followed by its members in scan order.
        """
        n = len(xs)
        assigned = np.zeros(n, dtype=bool)
        groups = []

        for seed in range(n):
            if assigned[seed]:
                continue
            deadline.check("clustering")

            free = np.flatnonzero(~assigned[seed + 1:]) + seed + 1
            distance = np.hypot(xs[free] - xs[seed], ys[free] - ys[seed])
            members = free[distance < min_separation]

            assigned[seed] = True
            assigned[members] = True
            groups.append(np.concatenate(([seed], members)))

        return groups

    @staticmethod
    def _group_to_star(xs: np.ndarray, ys: np.ndarray, values: np.ndarray) -> Star:
        """Brightness-weighted centroid, mean brightness, max member distance."""
        total = values.sum()
        cx = float((xs * values).sum() / total)
        cy = float((ys * values).sum() / total)
        radius = float(np.hypot(xs - cx, ys - cy).max())
        return Star(
            x=cx,
            y=cy,
            brightness=float(values.mean()),
            radius=radius,
            pixel_count=int(len(values)),
        )
