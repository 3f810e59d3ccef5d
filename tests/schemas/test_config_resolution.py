"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from starfield.schemas import InternalConfig, ParamConfig, UserConfig, resolve_config
from starfield.schemas.resolve import deep_merge
from starfield.schemas.user import UserDetectorConfig, UserMatcherConfig

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None)

        assert isinstance(config, InternalConfig)
        assert config.detector.threshold == 120.0
        assert config.detector.min_radius == 2.0
        assert config.detector.max_radius == 50.0
        assert config.detector.min_separation == 10.0
        assert config.detector.timeout_sec == 30.0
        assert config.photometry.aperture_radius == 5.0
        assert config.photometry.annulus_inner == 8.0
        assert config.photometry.annulus_outer == 12.0
        assert config.matcher.max_distance == 5.0
        assert config.chart.max_points == 100
        assert config.chart.magnitude_offset == 0.0
        assert config.logging.level == "INFO"

    def test_no_arguments_uses_defaults(self):
        assert resolve_config() == resolve_config(ParamConfig(), UserConfig())

    def test_user_config_overrides_param_config(self):
        """UserConfig values override ParamConfig defaults."""
        config = resolve_config(ParamConfig(), UserConfig(threshold=90))

        assert config.detector.threshold == 90.0

    def test_user_dict_is_validated(self):
        config = resolve_config(None, {"APERTURE_RADIUS": 4, "MAX_DISTANCE": 3})

        assert config.photometry.aperture_radius == 4.0
        assert config.matcher.max_distance == 3.0

    def test_param_dict_is_validated(self):
        config = resolve_config({"detector": {"threshold": 60}}, None)

        assert config.detector.threshold == 60.0
        assert config.detector.max_radius == 50.0

    def test_nested_overrides_win_over_flat(self):
        user = UserConfig(threshold=90, detector=UserDetectorConfig(threshold=80))
        config = resolve_config(ParamConfig(), user)

        assert config.detector.threshold == 80.0

    def test_color_index_sets_filter_names(self):
        config = resolve_config(ParamConfig(), UserConfig(color_index="r-g"))

        assert config.matcher.blue_filter == "R"
        assert config.matcher.visual_filter == "G"

    def test_nested_matcher_filters(self):
        user = UserConfig(matcher=UserMatcherConfig(blue_filter="b", visual_filter=" l "))
        config = resolve_config(ParamConfig(), user)

        assert config.matcher.blue_filter == "B"
        assert config.matcher.visual_filter == "L"

    def test_log_level_override(self):
        config = resolve_config(ParamConfig(), UserConfig(log_level="debug"))

        assert config.logging.level == "DEBUG"


class TestConfigValidation:
    """Invalid values fail at resolution, never at runtime."""

    def test_min_radius_above_max_radius(self):
        with pytest.raises(ValidationError, match="min_radius"):
            resolve_config(ParamConfig(), UserConfig(min_radius=60))

    def test_annulus_order(self):
        with pytest.raises(ValidationError, match="annulus_inner"):
            resolve_config(ParamConfig(), UserConfig(annulus_inner=12, annulus_outer=8))

    def test_negative_aperture(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(aperture_radius=-1))

    def test_zero_match_distance(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(max_distance=0))

    def test_bad_color_index(self):
        with pytest.raises(ValidationError, match="color_index"):
            UserConfig(color_index="BV")

    def test_param_config_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            ParamConfig.model_validate({"detector": {"sigma": 3}})


class TestInternalConfigImmutability:

    def test_internal_config_is_frozen(self, internal_config):
        with pytest.raises(ValidationError):
            internal_config.detector = None


def test_deep_merge_nested():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    override = {"b": {"d": 4, "e": 5}, "f": 6}

    assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
