"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from starfield.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a stage contract.

    This is called at stage boundaries to verify the preceding stage
    produced the guaranteed invariants. It is fail-fast: no recovery,
    no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False. This indicates a bug in engine logic.

    Examples
    --------
    >>> require(star.radius >= 0, "Detection contract: negative radius")
    """
    if not condition:
        raise ContractViolation(message)
