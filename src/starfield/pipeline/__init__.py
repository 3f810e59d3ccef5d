"""Pipeline modules.

- analyzer: Stage wiring, contract checks, result envelopes
- logging_setup: Root logger configuration for host applications
"""

from starfield.pipeline.analyzer import StarfieldAnalyzer, AnalysisResult
from starfield.pipeline.logging_setup import configure_logging

__all__ = [
    "StarfieldAnalyzer",
    "AnalysisResult",
    "configure_logging",
]
