import numpy as np
import pytest

from starfield.imaging import PixelBuffer
from tests.helpers.synthetic_field import make_star_field


# ---- StarDetector fixtures ----
@pytest.fixture
def dark_buffer():
    """
    Every sample below the default threshold (120), so no stars.
    """
    return PixelBuffer(make_star_field(background=20.0))


@pytest.fixture
def single_star_buffer():
    """
    One flat disk of radius 3 and brightness 200 centered at (20, 20)
    on a background of 10.
    """
    return PixelBuffer(make_star_field(stars=[(20, 20, 3, 200.0)]))


@pytest.fixture
def two_star_buffer():
    """
    A bright star at (12, 12) and a fainter one at (30, 28).
    """
    return PixelBuffer(make_star_field(stars=[
        (12, 12, 3, 250.0),
        (30, 28, 3, 150.0),
    ]))


@pytest.fixture
def sparse_pixel_image():
    """
    Factory: dark 20x20 image with single bright pixels at given (x, y).
    """
    def _make(points, value=200.0, shape=(20, 20)):
        image = np.zeros(shape, dtype=np.float64)
        for x, y in points:
            image[y, x] = value
        return image
    return _make


# ---- AperturePhotometer fixtures ----
@pytest.fixture
def photometry_config(make_config):
    """Aperture 5, annulus 8-12 (the defaults, stated explicitly)."""
    return make_config(aperture_radius=5, annulus_inner=8, annulus_outer=12)
