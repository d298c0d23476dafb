"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for internal
invariants.
"""

from gp4synth.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce an internal invariant.

    Fail-fast: no recovery, no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(set(PART_TABLE) == set(TargetPart), "Part table incomplete")
    """
    if not condition:
        raise ContractViolation(message)
