"""GreenPAK4 primitive cell library.

- library: closed catalog of cell kinds (ports, parameters, keep flags)
- logic: GP_INV, GP_nLUT, GP_VDD, GP_VSS
- sequential: GP_DFF, GP_DFFS, GP_DFFR, GP_DFFSR
- hardip: GP_LFOSC, GP_COUNT8, GP_COUNT14, GP_SYSRESET
"""

from gp4synth.cells.library import (
    PrimitiveKind,
    CellSpec,
    PRIMITIVE_LIBRARY,
    FLIP_FLOP_KINDS,
    is_primitive,
    lookup,
    create_cell,
)

__all__ = [
    "PrimitiveKind",
    "CellSpec",
    "PRIMITIVE_LIBRARY",
    "FLIP_FLOP_KINDS",
    "is_primitive",
    "lookup",
    "create_cell",
]
