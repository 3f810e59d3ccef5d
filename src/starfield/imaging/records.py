"""Star and observation records shared by all engine stages.

A ``Star`` is built by detection and gains fields as it moves through the
stages. Records are frozen; each stage returns new records via
``dataclasses.replace`` so that no stage mutates its input list.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional

import pandas as pd

__all__ = ['SpectralClass', 'Star', 'FilterObservation', 'stars_to_frame']


class SpectralClass(str, Enum):
    """Coarse stellar classification, hottest first."""
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"


@dataclass(frozen=True)
class Star:
    """One detected point source.

    Identity is positional; there is no persistent ID. Photometry and
    estimation fields stay ``None`` until their stage has run.
    """
    x: float
    y: float
    brightness: float
    radius: float
    pixel_count: int

    # Aperture photometry
    flux: Optional[float] = None
    magnitude: Optional[float] = None
    snr: Optional[float] = None
    aperture_area: Optional[int] = None
    background_mean: Optional[float] = None
    background_std: Optional[float] = None

    # Multi-filter estimation
    color_index: Optional[float] = None
    v_magnitude: Optional[float] = None
    temperature: Optional[float] = None
    spectral_class: Optional[SpectralClass] = None
    luminosity: Optional[float] = None

    @property
    def has_photometry(self) -> bool:
        return self.magnitude is not None

    def distance_to(self, other: "Star") -> float:
        return float(((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5)


@dataclass(frozen=True)
class FilterObservation:
    """Detection + photometry output of one filter image, e.g. "B" or "V"."""
    name: str
    stars: List[Star] = field(default_factory=list)


def stars_to_frame(stars: List[Star]) -> pd.DataFrame:
    """Tabulate stars, one row per star, in list order.

    Spectral classes are written as their letter. An empty list gives an
    empty frame with the Star columns.
    """
    if not stars:
        return pd.DataFrame(columns=list(Star.__dataclass_fields__))

    rows = []
    for star in stars:
        row = asdict(star)
        if row["spectral_class"] is not None:
            row["spectral_class"] = SpectralClass(row["spectral_class"]).value
        rows.append(row)
    return pd.DataFrame(rows)
