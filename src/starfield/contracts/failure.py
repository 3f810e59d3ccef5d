"""Failure type for contract violations.

Contracts fail fast, loud, and once. All violations raise the same
exception type, allowing caller to handle engine bugs uniformly.
"""


class ContractViolation(RuntimeError):
    """Raised when a stage contract is violated.

    This indicates a bug in engine logic, not bad user input or an empty
    star field. It means a stage did not produce the invariants it promised.

    Key distinction:
    - InvalidInput / ValidationError: caller or config error
    - ContractViolation: engine bug (programmer error)
    - Empty star lists: normal results, never a violation
    """
    pass
