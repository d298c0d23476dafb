"""Closed-world cell reference contract.

Every cell kind name an operation hands to the external engine must be
defined by the primitive library. Checked whenever stage operations are
built, before any of them is dispatched.
"""

from typing import Container, Iterable

from gp4synth.contracts.base import require


def assert_cells_known(operations: Iterable, known: Container[str]) -> None:
    """Enforce that all referenced cell kinds resolve in the library.

    Parameters
    ----------
    operations : iterable of Operation
        Operations of one stage (anything with ``cells`` and ``command``).
    known : container of str
        Cell kind names the library defines, e.g. ``PRIMITIVE_LIBRARY``.

    Raises
    ------
    ContractViolation
        If an operation references an undefined cell kind.
    """
    for op in operations:
        for name in op.cells:
            require(
                name in known,
                f"Cell contract violated: '{op.command}' references unknown cell kind '{name}'"
            )
