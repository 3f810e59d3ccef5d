"""Test StarDetector scan, grouping, centroids and size filter."""

import numpy as np
import pytest

from starfield.imaging import PixelBuffer, StarDetector

pytestmark = pytest.mark.unit


def test_init_reads_config(internal_config):
    det = StarDetector(internal_config)

    assert det.threshold == 120.0
    assert det.min_radius == 2.0
    assert det.max_radius == 50.0
    assert det.min_separation == 10.0


def test_all_dark_buffer_gives_empty_list(dark_buffer, internal_config):
    """No sample above threshold is an empty result, not an error."""
    stars = StarDetector(internal_config).detect(dark_buffer)

    assert stars == []


def test_single_disk_centroid_and_radius(single_star_buffer, internal_config):
    stars = StarDetector(internal_config).detect(single_star_buffer)

    assert len(stars) == 1
    star = stars[0]
    assert abs(star.x - 20) < 1.0
    assert abs(star.y - 20) < 1.0
    assert star.radius == pytest.approx(3.0, abs=0.5)
    assert star.brightness == pytest.approx(200.0)
    assert star.pixel_count == 29  # pixels within distance 3 of the center


def test_two_separated_stars(two_star_buffer, internal_config):
    stars = StarDetector(internal_config).detect(two_star_buffer)

    assert len(stars) == 2
    # Group order follows scan order (top row first)
    assert stars[0].y < stars[1].y
    assert stars[0].brightness == pytest.approx(250.0)
    assert stars[1].brightness == pytest.approx(150.0)


def test_seed_relative_grouping_is_not_transitive(sparse_pixel_image, make_config):
    """Two pixels each within range of the seed but 6 px apart still merge."""
    config = make_config(min_separation=5, min_radius=0, threshold=100)
    # Seed (10, 5) is scanned first; (7, 8) and (13, 8) are 4.24 px from it
    image = sparse_pixel_image([(10, 5), (7, 8), (13, 8)])

    stars = StarDetector(config).detect(PixelBuffer(image))

    assert len(stars) == 1
    assert stars[0].pixel_count == 3


def test_pixel_outside_seed_range_starts_new_group(sparse_pixel_image, make_config):
    """(10, 10) touches member (10, 9) but is exactly 5 px from the seed."""
    config = make_config(min_separation=5, min_radius=0, threshold=100)
    image = sparse_pixel_image([(10, 5), (10, 9), (10, 10)])

    stars = StarDetector(config).detect(PixelBuffer(image))

    assert len(stars) == 2
    assert [s.pixel_count for s in stars] == [2, 1]
    assert stars[1].x == pytest.approx(10.0)
    assert stars[1].y == pytest.approx(10.0)


def test_centroid_is_brightness_weighted(make_config):
    config = make_config(min_radius=0, threshold=100)
    image = np.zeros((10, 10))
    image[5, 4] = 150.0
    image[5, 5] = 300.0

    stars = StarDetector(config).detect(PixelBuffer(image))

    assert len(stars) == 1
    assert stars[0].x == pytest.approx((4 * 150 + 5 * 300) / 450)
    assert stars[0].brightness == pytest.approx(225.0)
    assert stars[0].radius == pytest.approx(stars[0].x - 4)


def test_single_pixel_removed_by_min_radius(sparse_pixel_image, internal_config):
    """A lone hot pixel has radius 0 and fails the default min_radius of 2."""
    image = sparse_pixel_image([(10, 10)])

    stars = StarDetector(internal_config).detect(PixelBuffer(image))

    assert stars == []


def test_large_blob_removed_by_max_radius(make_config):
    config = make_config(max_radius=4, min_separation=30)
    image = np.zeros((40, 40))
    image[5:35, 5:35] = 200.0

    assert StarDetector(config).detect(PixelBuffer(image)) == []


def test_border_pixels_are_not_scanned(make_config):
    config = make_config(min_radius=0, threshold=100)
    image = np.zeros((10, 10))
    image[0, :] = 255.0
    image[:, 0] = 255.0
    image[9, :] = 255.0
    image[:, 9] = 255.0

    assert StarDetector(config).detect(PixelBuffer(image)) == []


def test_buffer_without_interior(make_config):
    config = make_config(min_radius=0, threshold=0)
    buf = PixelBuffer(np.full((2, 50), 255.0))

    assert StarDetector(config).detect(buf) == []


def test_threshold_is_strict(make_config):
    """Pixels equal to the threshold are not bright."""
    config = make_config(min_radius=0, threshold=100)
    image = np.zeros((10, 10))
    image[4:7, 4:7] = 100.0

    assert StarDetector(config).detect(PixelBuffer(image)) == []


def test_detect_is_idempotent(two_star_buffer, internal_config):
    det = StarDetector(internal_config)

    first = det.detect(two_star_buffer)
    second = det.detect(two_star_buffer)

    assert first == second
    assert first is not second


def test_detect_does_not_modify_buffer(single_star_buffer, internal_config):
    before = single_star_buffer.brightness.copy()

    StarDetector(internal_config).detect(single_star_buffer)

    np.testing.assert_array_equal(single_star_buffer.brightness, before)
