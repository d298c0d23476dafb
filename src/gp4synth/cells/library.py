"""Closed catalog of GreenPAK4 primitive cell kinds.

Every cell name the pipeline hands to the mapping engine (``dffinit -ff
GP_DFF ...`` and friends) must resolve here. The catalog is a constant; it
is never extended at runtime.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Callable, Optional

from gp4synth.cells.hardip import Counter8, Counter14, LowFrequencyOscillator, SystemReset
from gp4synth.cells.logic import Constant, Inverter, Lut
from gp4synth.cells.sequential import (
    DFlipFlop,
    DFlipFlopReset,
    DFlipFlopSet,
    DFlipFlopSetReset,
)


class PrimitiveKind(str, Enum):
    GP_INV = "GP_INV"
    GP_2LUT = "GP_2LUT"
    GP_3LUT = "GP_3LUT"
    GP_4LUT = "GP_4LUT"
    GP_DFF = "GP_DFF"
    GP_DFFS = "GP_DFFS"
    GP_DFFR = "GP_DFFR"
    GP_DFFSR = "GP_DFFSR"
    GP_VDD = "GP_VDD"
    GP_VSS = "GP_VSS"
    GP_LFOSC = "GP_LFOSC"
    GP_COUNT8 = "GP_COUNT8"
    GP_COUNT14 = "GP_COUNT14"
    GP_SYSRESET = "GP_SYSRESET"


# Order matches the dffinit passes of the map_cells stage
FLIP_FLOP_KINDS = (
    PrimitiveKind.GP_DFF,
    PrimitiveKind.GP_DFFR,
    PrimitiveKind.GP_DFFS,
    PrimitiveKind.GP_DFFSR,
)


@dataclass(frozen=True)
class CellSpec:
    """Port list, parameters and behavioral model of one cell kind.

    ``params`` maps parameter names to their defaults (None means the
    Verilog default is ``x``). ``model`` builds a behavioral model from
    lowercase keyword parameters.
    """
    kind: PrimitiveKind
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    model: Callable
    params: dict = field(default_factory=dict)
    keep: bool = False
    simulatable: bool = True


def _lut_spec(kind: PrimitiveKind, width: int) -> CellSpec:
    return CellSpec(
        kind=kind,
        inputs=tuple(f"IN{i}" for i in range(width)),
        outputs=("OUT",),
        model=partial(Lut, width),
        params={"INIT": 0},
    )


def _dff_spec(kind: PrimitiveKind, model, control: Optional[str] = None, **params) -> CellSpec:
    inputs = ("D", "CLK") if control is None else ("D", "CLK", control)
    return CellSpec(
        kind=kind,
        inputs=inputs,
        outputs=("Q",),
        model=model,
        params={"INIT": None, **params},
    )


def _counter_spec(kind: PrimitiveKind, model) -> CellSpec:
    return CellSpec(
        kind=kind,
        inputs=("CLK", "RST"),
        outputs=("OUT",),
        model=model,
        params={"RESET_MODE": "RISING", "COUNT_TO": 1, "CLKIN_DIVIDE": 1},
    )


PRIMITIVE_LIBRARY: dict[str, CellSpec] = {
    spec.kind.value: spec for spec in (
        CellSpec(PrimitiveKind.GP_INV, ("IN",), ("OUT",), Inverter),
        _lut_spec(PrimitiveKind.GP_2LUT, 2),
        _lut_spec(PrimitiveKind.GP_3LUT, 3),
        _lut_spec(PrimitiveKind.GP_4LUT, 4),
        _dff_spec(PrimitiveKind.GP_DFF, DFlipFlop),
        _dff_spec(PrimitiveKind.GP_DFFS, DFlipFlopSet, "nSET"),
        _dff_spec(PrimitiveKind.GP_DFFR, DFlipFlopReset, "nRST"),
        _dff_spec(PrimitiveKind.GP_DFFSR, DFlipFlopSetReset, "nSR", SRMODE=None),
        CellSpec(PrimitiveKind.GP_VDD, (), ("OUT",), partial(Constant, 1)),
        CellSpec(PrimitiveKind.GP_VSS, (), ("OUT",), partial(Constant, 0)),
        CellSpec(
            PrimitiveKind.GP_LFOSC, ("PWRDN",), ("CLKOUT",), LowFrequencyOscillator,
            params={"PWRDN_EN": 0, "AUTO_PWRDN": 0, "OUT_DIV": 1},
        ),
        _counter_spec(PrimitiveKind.GP_COUNT8, Counter8),
        _counter_spec(PrimitiveKind.GP_COUNT14, Counter14),
        CellSpec(
            PrimitiveKind.GP_SYSRESET, ("RST",), (), SystemReset,
            params={"RESET_MODE": "EDGE", "EDGE_SPEED": 4},
            keep=True,
            simulatable=False,
        ),
    )
}


def is_primitive(name: str) -> bool:
    return name in PRIMITIVE_LIBRARY


def lookup(name: str) -> CellSpec:
    """Return the spec of a cell kind.

    Raises
    ------
    KeyError
        If ``name`` is not a GreenPAK4 primitive.
    """
    try:
        return PRIMITIVE_LIBRARY[name]
    except KeyError:
        raise KeyError(f"Unknown GreenPAK4 primitive: '{name}'") from None


def create_cell(name: str, **params):
    """Instantiate the behavioral model of a cell kind.

    Parameters use the lowercase spelling of the Verilog parameter names,
    e.g. ``create_cell("GP_DFFSR", init=0, srmode=1)``.
    """
    spec = lookup(name)
    unknown = {p.upper() for p in params} - set(spec.params)
    if unknown:
        raise ValueError(f"{name} has no parameter(s) {sorted(unknown)}")
    return spec.model(**params)
