"""Flip-flop GreenPAK4 primitives: GP_DFF, GP_DFFS, GP_DFFR, GP_DFFSR.

Models are driven at pin level with :meth:`DFlipFlop.drive`. Each call
applies new pin levels and reacts to the edges they form with the previous
levels, the way an ``always @(posedge CLK, negedge nX)`` block does:

- rising CLK edge: Q <- D, unless the async control is asserted
- falling edge of the async control: Q <- forced value

While the active-low control stays low every clock edge keeps forcing the
forced value. Releasing it does not change Q; the next rising CLK edge
resumes normal D capture.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _check_bit(value, name: str) -> None:
    if value not in (0, 1, None):
        raise ValueError(f"{name} must be 0, 1 or None, got {value!r}")


class DFlipFlop:
    """GP_DFF: positive-edge D flip-flop.

    Parameters
    ----------
    init : {0, 1, None}
        Power-on value of Q. None leaves it unconstrained, to be resolved by
        init propagation (``dffinit``) from the design's own init request.
    """

    kind = "GP_DFF"
    control_pin: Optional[str] = None

    def __init__(self, init: Optional[int] = None):
        _check_bit(init, "INIT")
        self.init = init
        self.q = init
        self.clocked = False
        self.pins = {"CLK": 0, "D": None}
        if self.control_pin is not None:
            self.pins[self.control_pin] = 1

    def forced_value(self) -> Optional[int]:
        """Level Q takes while the async control is asserted.

        Only consulted by kinds with a ``control_pin``; GP_DFF has none.
        """
        return None

    def drive(self, **levels) -> Optional[int]:
        """Apply new pin levels and return Q.

        Pins not mentioned keep their previous level.

        Examples
        --------
        >>> ff = DFlipFlop(init=0)
        >>> ff.drive(D=1)
        0
        >>> ff.drive(CLK=1)
        1
        """
        unknown = set(levels) - set(self.pins)
        if unknown:
            raise ValueError(f"{self.kind} has no pin(s) {sorted(unknown)}")
        for name, value in levels.items():
            _check_bit(value, name)

        prev = dict(self.pins)
        self.pins.update(levels)

        clk_rise = prev["CLK"] == 0 and self.pins["CLK"] == 1
        ctrl_fall = False
        asserted = False
        if self.control_pin is not None:
            ctrl_fall = prev[self.control_pin] == 1 and self.pins[self.control_pin] == 0
            asserted = self.pins[self.control_pin] == 0

        if clk_rise or ctrl_fall:
            self.clocked = True
            if asserted:
                self.q = self.forced_value()
            else:
                self.q = self.pins["D"]
        return self.q

    def pulse(self, d: Optional[int] = None) -> Optional[int]:
        """One full clock cycle (CLK low then high) capturing ``d``."""
        self.drive(CLK=0)
        if d is None:
            return self.drive(CLK=1)
        return self.drive(CLK=1, D=d)

    def propagate_init(self, requested: Optional[int]) -> None:
        """Resolve an unconstrained INIT from the design's requested value.

        Q follows the new INIT only while the flip-flop is still in its
        power-on state; after the first edge Q holds captured data.

        Raises
        ------
        ValueError
            If INIT is already constrained to a different value.
        """
        _check_bit(requested, "requested init")
        if requested is None:
            return
        if self.init is None:
            logger.debug("%s: INIT resolved to %s", self.kind, requested)
            self.init = requested
            if not self.clocked:
                self.q = requested
        elif self.init != requested:
            raise ValueError(
                f"{self.kind}: conflicting init values {self.init} and {requested}"
            )


class DFlipFlopSet(DFlipFlop):
    """GP_DFFS: active-low asynchronous set forces Q to 1."""

    kind = "GP_DFFS"
    control_pin = "nSET"

    def forced_value(self) -> int:
        return 1


class DFlipFlopReset(DFlipFlop):
    """GP_DFFR: active-low asynchronous reset forces Q to 0."""

    kind = "GP_DFFR"
    control_pin = "nRST"

    def forced_value(self) -> int:
        return 0


class DFlipFlopSetReset(DFlipFlop):
    """GP_DFFSR: one active-low control forcing Q to ``SRMODE``."""

    kind = "GP_DFFSR"
    control_pin = "nSR"

    def __init__(self, init: Optional[int] = None, srmode: Optional[int] = None):
        _check_bit(srmode, "SRMODE")
        self.srmode = srmode
        super().__init__(init=init)

    def forced_value(self) -> Optional[int]:
        return self.srmode
