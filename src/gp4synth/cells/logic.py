"""Combinational GreenPAK4 primitives: GP_INV, GP_nLUT, GP_VDD, GP_VSS.

Logic values are ``0``, ``1`` or ``None`` (unknown / don't-care). Unknown
inputs propagate: a result is known only if every completion of the
unknown inputs agrees.
"""

import itertools
from typing import Optional, Sequence

import numpy as np

LUT_WIDTHS = (2, 3, 4)


def _check_logic(value, name: str) -> None:
    if value not in (0, 1, None):
        raise ValueError(f"{name} must be 0, 1 or None, got {value!r}")


def lut_outputs(width: int, inits, inputs) -> np.ndarray:
    """Evaluate many LUT configurations against many input vectors at once.

    Parameters
    ----------
    width : int
        Number of LUT inputs.
    inits : array-like of int, shape (T,)
        Truth tables; bit ``k`` of an init is the output for selector ``k``.
    inputs : array-like of {0, 1}, shape (K, width)
        Input vectors; column 0 is IN0, the least significant selector bit.

    Returns
    -------
    np.ndarray
        uint8 array of shape (T, K) with the output of every table for
        every input vector.
    """
    inits = np.asarray(inits, dtype=np.int64).reshape(-1)
    inputs = np.asarray(inputs, dtype=np.int64).reshape(-1, width)
    selectors = inputs @ (np.int64(1) << np.arange(width, dtype=np.int64))
    return ((inits[:, None] >> selectors[None, :]) & 1).astype(np.uint8)


def all_input_vectors(width: int) -> np.ndarray:
    """Every input vector of a ``width``-input LUT, row ``k`` selecting bit ``k``."""
    selectors = np.arange(1 << width, dtype=np.int64)
    return ((selectors[:, None] >> np.arange(width, dtype=np.int64)) & 1).astype(np.uint8)


class Inverter:
    """GP_INV: OUT = ~IN."""

    kind = "GP_INV"

    def evaluate(self, value: Optional[int]) -> Optional[int]:
        _check_logic(value, "IN")
        if value is None:
            return None
        return 1 - value


class Constant:
    """GP_VDD / GP_VSS: zero-input cell driving a fixed level."""

    def __init__(self, value: int):
        if value not in (0, 1):
            raise ValueError(f"Constant level must be 0 or 1, got {value!r}")
        self.value = value
        self.kind = "GP_VDD" if value else "GP_VSS"

    def evaluate(self) -> int:
        return self.value


class Lut:
    """GP_2LUT / GP_3LUT / GP_4LUT.

    ``INIT`` holds ``2**width`` bits; the output is the bit selected by the
    binary number ``{IN(width-1), ..., IN1, IN0}``.

    Examples
    --------
    >>> xor2 = Lut(2, init=0b0110)
    >>> xor2.evaluate(1, 0)
    1
    >>> xor2.evaluate(1, 1)
    0
    """

    def __init__(self, width: int, init: int = 0):
        if width not in LUT_WIDTHS:
            raise ValueError(f"LUT width must be one of {LUT_WIDTHS}, got {width}")
        if not isinstance(init, int) or isinstance(init, bool):
            raise ValueError(f"INIT must be an integer truth table, got {init!r}")
        if not 0 <= init < (1 << (1 << width)):
            raise ValueError(f"INIT {init:#x} does not fit a {1 << width}-bit truth table")
        self.width = width
        self.init = init
        self.kind = f"GP_{width}LUT"

    def evaluate(self, *inputs: Optional[int]) -> Optional[int]:
        if len(inputs) != self.width:
            raise ValueError(f"{self.kind} takes {self.width} inputs, got {len(inputs)}")
        for i, value in enumerate(inputs):
            _check_logic(value, f"IN{i}")

        unknown = [i for i, value in enumerate(inputs) if value is None]
        outputs = set()
        for fill in itertools.product((0, 1), repeat=len(unknown)):
            vector = list(inputs)
            for i, bit in zip(unknown, fill):
                vector[i] = bit
            outputs.add(self._select(vector))
            if len(outputs) > 1:
                return None
        return outputs.pop()

    def _select(self, vector: Sequence[int]) -> int:
        selector = sum(bit << i for i, bit in enumerate(vector))
        return (self.init >> selector) & 1

    def truth_table(self) -> np.ndarray:
        """Output for every selector value, index ``k`` == selector ``k``."""
        return lut_outputs(self.width, [self.init], all_input_vectors(self.width))[0]
