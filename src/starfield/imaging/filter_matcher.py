"""Pair stars detected independently in two filter images.

Matching is greedy and one-sided: each primary star takes the nearest
secondary star strictly closer than ``max_distance``. Ties go to the first
secondary star in list order, and a secondary star may be claimed by more
than one primary star. This is not an optimal bipartite assignment.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from starfield.imaging.records import FilterObservation, Star

if TYPE_CHECKING:
    from starfield.schemas import InternalConfig

__all__ = ['MultiFilterMatcher', 'find_nearest']

logger = logging.getLogger(__name__)


def find_nearest(target: Star, candidates: Sequence[Star], max_distance: float) -> Optional[Star]:
    """Nearest candidate with distance < max_distance, or None.

    ``np.argmin`` returns the first index among equal distances, which keeps
    first-encountered-wins tie breaking.
    """
    if not candidates:
        return None
    cx = np.fromiter((c.x for c in candidates), dtype=np.float64, count=len(candidates))
    cy = np.fromiter((c.y for c in candidates), dtype=np.float64, count=len(candidates))
    distance = np.hypot(cx - target.x, cy - target.y)
    j = int(np.argmin(distance))
    if distance[j] < max_distance:
        return candidates[j]
    return None


class MultiFilterMatcher:
    """Nearest-neighbour matching across filter observations.

    Parameters
    ----------
    config : InternalConfig
        Uses ``matcher.max_distance`` and the blue/visual filter names.
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.max_distance = config.matcher.max_distance
        self.blue_filter = config.matcher.blue_filter
        self.visual_filter = config.matcher.visual_filter

    def match(self, stars_a: Sequence[Star], stars_b: Sequence[Star],
              max_distance: Optional[float] = None) -> List[Tuple[Star, Star]]:
        """Pair each star in ``stars_a`` with its nearest star in ``stars_b``.

        Primary stars without a secondary star in range are left out.
        """
        max_distance = self.max_distance if max_distance is None else float(max_distance)
        pairs = []
        for star in stars_a:
            nearest = find_nearest(star, stars_b, max_distance)
            if nearest is not None:
                pairs.append((star, nearest))

        logger.info("Matched %d of %d stars within %.1f px", len(pairs), len(stars_a), max_distance)
        return pairs

    def select_filters(self, observations: Sequence[FilterObservation]
                       ) -> Tuple[FilterObservation, FilterObservation]:
        """Pick the blue and visual observations by name.

        A missing name falls back to the first observation not already
        chosen for the other role, so the two never coincide.
        """
        by_name = {obs.name: obs for obs in observations}
        blue = by_name.get(self.blue_filter)
        visual = by_name.get(self.visual_filter)

        if blue is None:
            blue = next(obs for obs in observations if obs is not visual)
            logger.warning("No %s observation, using %s as blue filter",
                           self.blue_filter, blue.name)
        if visual is None:
            visual = next(obs for obs in observations if obs is not blue)
            logger.warning("No %s observation, using %s as visual filter",
                           self.visual_filter, visual.name)
        return blue, visual

    def color_indices(self, reference: Sequence[Star],
                      observations: Sequence[FilterObservation]) -> List[Star]:
        """Attach ``color_index = m_blue - m_visual`` to reference stars.

        Each reference star is looked up independently in the blue and in the
        visual observation. Only stars found in both are returned; they also
        carry ``v_magnitude`` from the visual filter.

        With fewer than two observations no color can be formed: a warning is
        logged and the reference stars are returned without color.
        """
        if len(observations) < 2:
            logger.warning("Need at least 2 filters to calculate color indices, got %d",
                           len(observations))
            return list(reference)

        blue, visual = self.select_filters(observations)
        logger.info("Calculating %s-%s color indices for %d stars",
                    blue.name, visual.name, len(reference))

        colored = []
        for star in reference:
            b_star = find_nearest(star, blue.stars, self.max_distance)
            v_star = find_nearest(star, visual.stars, self.max_distance)
            if b_star is None or v_star is None:
                continue
            if b_star.magnitude is None or v_star.magnitude is None:
                continue
            colored.append(replace(
                star,
                color_index=b_star.magnitude - v_star.magnitude,
                v_magnitude=v_star.magnitude,
            ))

        logger.info("Color index available for %d of %d stars", len(colored), len(reference))
        return colored

    def pair_color_indices(self, blue: FilterObservation,
                           visual: FilterObservation) -> List[Star]:
        """Color indices for blue-filter stars matched directly to visual-filter stars."""
        colored = []
        for b_star, v_star in self.match(blue.stars, visual.stars):
            if b_star.magnitude is None or v_star.magnitude is None:
                continue
            colored.append(replace(
                v_star,
                color_index=b_star.magnitude - v_star.magnitude,
                v_magnitude=v_star.magnitude,
            ))
        return colored
