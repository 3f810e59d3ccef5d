"""Test nearest-neighbour matching and color index assembly."""

import logging

import pytest

from starfield.imaging import FilterObservation, MultiFilterMatcher, Star
from starfield.imaging.filter_matcher import find_nearest

pytestmark = pytest.mark.unit


def _star(x, y, magnitude=None):
    return Star(x=float(x), y=float(y), brightness=200.0, radius=3.0,
                pixel_count=20, magnitude=magnitude)


@pytest.fixture
def matcher(internal_config):
    return MultiFilterMatcher(internal_config)


def test_init_reads_config(matcher):
    assert matcher.max_distance == 5.0
    assert matcher.blue_filter == "B"
    assert matcher.visual_filter == "V"


def test_close_stars_match(matcher):
    a, b = _star(10, 10), _star(12, 11)

    assert matcher.match([a], [b]) == [(a, b)]


def test_far_star_not_matched(matcher):
    assert matcher.match([_star(10, 10)], [_star(20, 20)]) == []


def test_exact_max_distance_not_matched(matcher):
    """Matching is strict: a distance of exactly max_distance is out."""
    assert matcher.match([_star(10, 10)], [_star(15, 10)]) == []


def test_nearest_candidate_wins(matcher):
    a = _star(10, 10)
    near, far = _star(11, 10), _star(13, 10)

    assert matcher.match([a], [far, near]) == [(a, near)]


def test_tie_goes_to_first_candidate():
    a = _star(10, 10)
    left, right = _star(8, 10), _star(12, 10)

    assert find_nearest(a, [left, right], 5.0) is left
    assert find_nearest(a, [right, left], 5.0) is right


def test_secondary_may_be_shared(matcher):
    """Greedy one-sided matching lets two primaries claim one secondary."""
    a1, a2 = _star(10, 10), _star(12, 10)
    b = _star(11, 10)

    pairs = matcher.match([a1, a2], [b])

    assert pairs == [(a1, b), (a2, b)]


def test_empty_inputs(matcher):
    assert matcher.match([], [_star(1, 1)]) == []
    assert matcher.match([_star(1, 1)], []) == []


def test_max_distance_override(matcher):
    assert matcher.match([_star(10, 10)], [_star(20, 10)], max_distance=11) != []


def test_color_indices_by_filter_name(matcher):
    ref = [_star(10, 10, magnitude=-5.0), _star(30, 30, magnitude=-4.0)]
    blue = FilterObservation("B", [_star(11, 10, magnitude=-4.5)])
    visual = FilterObservation("V", [_star(10, 11, magnitude=-5.2), _star(30, 31, magnitude=-4.0)])

    # Order of observations does not matter when names are present
    colored = matcher.color_indices(ref, [visual, blue])

    assert len(colored) == 1  # star at (30, 30) has no blue match
    assert colored[0].color_index == pytest.approx(-4.5 - -5.2)
    assert colored[0].v_magnitude == pytest.approx(-5.2)
    assert colored[0].x == 10.0


def test_color_indices_fall_back_to_observation_order(matcher):
    ref = [_star(10, 10, magnitude=-5.0)]
    first = FilterObservation("R", [_star(10, 10, magnitude=-3.0)])
    second = FilterObservation("G", [_star(10, 10, magnitude=-4.0)])

    colored = matcher.color_indices(ref, [first, second])

    assert colored[0].color_index == pytest.approx(1.0)


def test_color_indices_need_two_filters(matcher, caplog):
    ref = [_star(10, 10, magnitude=-5.0)]

    with caplog.at_level(logging.WARNING):
        colored = matcher.color_indices(ref, [FilterObservation("V", ref)])

    assert colored == ref
    assert colored[0].color_index is None
    assert "at least 2 filters" in caplog.text


def test_pair_color_indices(matcher):
    blue = FilterObservation("B", [_star(10, 10, magnitude=-3.0), _star(40, 40, magnitude=-2.0)])
    visual = FilterObservation("V", [_star(11, 11, magnitude=-3.5)])

    colored = matcher.pair_color_indices(blue, visual)

    assert len(colored) == 1
    assert colored[0].color_index == pytest.approx(0.5)
    assert colored[0].x == 11.0


def test_custom_color_index_filters(make_config):
    matcher = MultiFilterMatcher(make_config(color_index="b-g"))

    assert matcher.blue_filter == "B"
    assert matcher.visual_filter == "G"


def test_missing_blue_filter_never_reuses_visual(matcher, caplog):
    """With V and R only, R stands in for B instead of V pairing with itself."""
    ref = [_star(10, 10, magnitude=-5.0)]
    visual = FilterObservation("V", [_star(10, 10, magnitude=-5.0)])
    red = FilterObservation("R", [_star(10, 10, magnitude=-4.0)])

    with caplog.at_level(logging.WARNING):
        blue, chosen_visual = matcher.select_filters([visual, red])
        colored = matcher.color_indices(ref, [visual, red])

    assert blue is red
    assert chosen_visual is visual
    assert colored[0].color_index == pytest.approx(1.0)
    assert "using R as blue filter" in caplog.text
