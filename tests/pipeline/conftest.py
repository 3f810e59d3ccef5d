import pytest

from starfield.pipeline import StarfieldAnalyzer
from tests.helpers.synthetic_field import make_star_field


@pytest.fixture
def analyzer(internal_config):
    return StarfieldAnalyzer(internal_config)


@pytest.fixture
def filter_images():
    """B and V images of the same two stars.

    Both stars are fainter in B than in V, so both get a positive B-V.
    """
    shape = (50, 60)
    blue = make_star_field(shape=shape, stars=[
        (12, 12, 3, 150.0),
        (40, 30, 3, 200.0),
    ])
    visual = make_star_field(shape=shape, stars=[
        (12, 12, 3, 200.0),
        (40, 30, 3, 250.0),
    ])
    return {"B": blue, "V": visual}
