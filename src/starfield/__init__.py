"""`Starfield` - stellar detection and photometry for H-R diagrams.

Subpackages:
- imaging: Pixel buffers, star detection, photometry, filter matching, estimation
- pipeline: Stage wiring with contract checks and result envelopes
- visualization: Chart-ready records for H-R diagram plotting
- schemas: Pydantic configuration layers
- contracts: Stage invariants
"""

__version__ = "0.1.0"
