"""Root-level pytest fixtures for the Starfield test suite.

Provides shared configuration fixtures following Pydantic-based architecture.
All tests must use these fixtures instead of creating raw dict configs.
"""

import pytest

from starfield.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.
    
    Use this as the base for all test configs. Override specific values
    using make_config or by creating custom UserConfig instances.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides).
    
    Use this when tests don't care about specific config values and just
    need a valid InternalConfig to pass to constructors.
    
    Examples
    --------
    >>> def test_detector_init(internal_config):
    ...     det = StarDetector(internal_config)
    ...     assert det.threshold == 120.0
    """
    return resolve_config(param_config, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.
    
    Use this when you need to override specific values for a test.
    Returns a callable that accepts UserConfig-compatible kwargs.
    
    Examples
    --------
    >>> def test_custom_threshold(make_config):
    ...     config = make_config(threshold=90)
    ...     det = StarDetector(config)
    ...     assert det.threshold == 90.0
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user)
        else:
            return resolve_config(param_config, None)
    
    return _make
