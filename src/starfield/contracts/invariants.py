"""Formal stage invariants.

This file documents what each stage MUST produce.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "detection": [
        "Output is a list of Star records (possibly empty)",
        "Centroids are finite and inside the buffer",
        "radius >= 0 and pixel_count >= 1",
        "Timeout raises; a truncated star list is never returned",
    ],

    "photometry": [
        "flux, magnitude and snr are finite for every star",
        "flux (net flux) is floored to >= 1 before the logarithm",
        "Stars are sorted by ascending magnitude (brightest first)",
    ],

    "matching": [
        "Match distance is strictly below max_distance",
        "Ties go to the first secondary star in list order",
        "Secondary stars may be claimed by more than one primary star",
    ],

    "estimation": [
        "Only stars matched in both filters carry a color index",
        "spectral_class is one of O, B, A, F, G, K, M",
    ],

    "chart": [
        "DataFrame with x (color index), y (magnitude), display_color",
        "At most chart.max_points rows",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "detection": "REQUIRED",
    "photometry": "REQUIRED",
    "matching": "OPTIONAL",    # Only with 2+ filter observations
    "estimation": "OPTIONAL",  # Only for matched stars
    "chart": "OPTIONAL",
}
