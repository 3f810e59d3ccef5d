"""Stage contracts: fail-fast enforcement of stage invariants.

Contracts fail immediately and loudly when engine stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate stage output correctness
- Algorithms handle numerical edge cases (floors, clamps)
"""

from starfield.contracts.failure import ContractViolation
from starfield.contracts.base import require
from starfield.contracts.detection import assert_detected
from starfield.contracts.photometry import assert_measured
from starfield.contracts.estimation import assert_estimated
from starfield.contracts.chart import assert_chart_data

__all__ = [
    "ContractViolation",
    "require",
    "assert_detected",
    "assert_measured",
    "assert_estimated",
    "assert_chart_data",
]
