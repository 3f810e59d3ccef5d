"""Starfield user configuration.

This is the user-facing configuration file. Modify settings here to customize
detection, photometry and matching. Every key is optional; anything left out
keeps the defaults in starfield.schemas.param.

Usage:
    from starfield.schemas import load_user_config, resolve_config
    config = resolve_config(user_cfg=load_user_config("scripts/user_config.py"))
"""

CONFIG = {
    # ========================================================================
    # DETECTION
    # ========================================================================
    "THRESHOLD": 120,         # Brightness threshold (0-255 for 8-bit images)
    "MIN_RADIUS": 2,          # Smallest star radius kept (pixels)
    "MAX_RADIUS": 50,         # Largest star radius kept (pixels)
    "MIN_SEPARATION": 10,     # Grouping distance from the seed pixel
    "TIMEOUT_SEC": 30,        # Budget for scan + clustering

    # ========================================================================
    # PHOTOMETRY
    # ========================================================================
    "APERTURE_RADIUS": 5,
    "ANNULUS_INNER": 8,
    "ANNULUS_OUTER": 12,

    # ========================================================================
    # MULTI-FILTER MATCHING
    # ========================================================================
    "MAX_DISTANCE": 5,        # Match radius between filters (pixels)
    "COLOR_INDEX": "B-V",     # Use "B-G", "R-G" or "B-R" for LRGB sets

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "LOG_LEVEL": "INFO",

    # Nested overrides for settings without a flat key
    "chart": {
        "max_points": 100,
        "magnitude_offset": 0.0,  # 15 puts instrumental magnitudes on a positive scale
    },
}
