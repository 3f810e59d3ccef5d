"""Error taxonomy for the Starfield engine.

Stage classes raise the exceptions below. The pipeline translates them into
an ``ErrorEnvelope`` so that callers receive failures as explicit result
values instead of exceptions.

Key distinction:
- InvalidInput: caller error (bad buffer dimensions, bad radii)
- DetectionTimeout: the detection time budget ran out at a checkpoint
- NO_DATA: a valid run that produced no usable stars (never raised)
- ContractViolation: engine bug (see starfield.contracts)
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    TIMEOUT = "TIMEOUT"
    INVALID_INPUT = "INVALID_INPUT"
    NO_DATA = "NO_DATA"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def make_error(error_type: ErrorType, message: str, **context: Any) -> ErrorEnvelope:
    return ErrorEnvelope(type=error_type, message=message, context=dict(context))


class StarfieldError(Exception):
    """Base class for recoverable engine errors."""

    error_type: ErrorType

    def to_envelope(self, **context: Any) -> ErrorEnvelope:
        return make_error(self.error_type, str(self), **context)


class InvalidInput(StarfieldError, ValueError):
    """Buffer dimensions are zero, or aperture/annulus radii are invalid."""

    error_type = ErrorType.INVALID_INPUT


class DetectionTimeout(StarfieldError, TimeoutError):
    """Detection exceeded its time budget; no partial star list exists.

    Attributes:
        phase: Detection phase that hit the deadline ("scan" or "clustering").
        elapsed: Seconds spent before the checkpoint fired.
    """

    error_type = ErrorType.TIMEOUT

    def __init__(self, phase: str, elapsed: float, budget: float) -> None:
        self.phase = phase
        self.elapsed = elapsed
        self.budget = budget
        super().__init__(
            f"Star detection timed out during {phase} "
            f"({elapsed:.3f}s elapsed, budget {budget:.3f}s)"
        )

    def to_envelope(self, **context: Any) -> ErrorEnvelope:
        return make_error(
            self.error_type, str(self),
            phase=self.phase, elapsed=self.elapsed, budget=self.budget, **context,
        )
