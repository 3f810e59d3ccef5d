"""Load user configuration files.

A user config is a plain Python file defining a ``CONFIG`` dict, e.g.::

    CONFIG = {
        "THRESHOLD": 110,
        "APERTURE_RADIUS": 4,
        "COLOR_INDEX": "B-V",
    }
"""

import importlib.util
import logging
from pathlib import Path
from typing import Union

from starfield.schemas.user import UserConfig

__all__ = ['load_user_config_dict', 'load_user_config']

logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: Union[str, Path]) -> dict:
    """Load user config dict from Python file.
    
    Returns the raw dict before Pydantic validation.
    
    Parameters
    ----------
    config_path : str or Path
        Path to user config Python file containing CONFIG dict.
        
    Returns
    -------
    dict
        Raw user configuration dictionary.
        
    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    
    spec = importlib.util.spec_from_file_location("starfield_user_config", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    
    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                logger.debug("Loaded %s from %s", name, path)
                return obj
    
    raise ValueError(f"No CONFIG dict found in {path}")


def load_user_config(config_path: Union[str, Path]) -> UserConfig:
    """Load and validate a user config file."""
    return UserConfig.model_validate(load_user_config_dict(config_path))
