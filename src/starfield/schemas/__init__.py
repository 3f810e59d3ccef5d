"""Pydantic configuration schemas for the Starfield engine.

This module provides strictly typed configuration models for star
detection, photometry, matching and chart output. All configuration
validation, coercion, and normalization happens at schema validation
time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
load_user_config : function
    Read a CONFIG dict from a Python file and validate it
"""

from starfield.schemas.resolve import resolve_config
from starfield.schemas.internal import InternalConfig
from starfield.schemas.param import ParamConfig
from starfield.schemas.user import UserConfig
from starfield.schemas.loader import load_user_config, load_user_config_dict

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'load_user_config',
    'load_user_config_dict',
]
