"""Hard IP GreenPAK4 primitives: GP_LFOSC, GP_COUNT8, GP_COUNT14, GP_SYSRESET.

These are behavioral models for simulation only. None of them is
cycle-accurate to silicon.
"""

from typing import Optional, Sequence

import numpy as np

from gp4synth.contracts.failure import NotSimulatableError

# 1730 Hz nominal output, in ns
LFOSC_HALF_PERIOD_NS = 289017

LFOSC_OUT_DIVS = (1, 2, 4, 16)
COUNTER_RESET_MODES = ("RISING", "FALLING", "BOTH", "LEVEL")
SYSRESET_MODES = ("EDGE", "LEVEL")


class LowFrequencyOscillator:
    """GP_LFOSC: free-running ~1.7 kHz clock source.

    CLKOUT starts low and toggles every :data:`LFOSC_HALF_PERIOD_NS` while
    PWRDN is low; PWRDN high holds it low. ``PWRDN_EN``, ``AUTO_PWRDN`` and
    ``OUT_DIV`` are validated and kept, but the output divider and automatic
    power-down are not modeled.
    """

    kind = "GP_LFOSC"

    def __init__(self, pwrdn_en: int = 0, auto_pwrdn: int = 0, out_div: int = 1):
        if pwrdn_en not in (0, 1):
            raise ValueError(f"PWRDN_EN must be 0 or 1, got {pwrdn_en!r}")
        if auto_pwrdn not in (0, 1):
            raise ValueError(f"AUTO_PWRDN must be 0 or 1, got {auto_pwrdn!r}")
        if out_div not in LFOSC_OUT_DIVS:
            raise ValueError(f"OUT_DIV must be one of {LFOSC_OUT_DIVS}, got {out_div!r}")
        self.pwrdn_en = pwrdn_en
        self.auto_pwrdn = auto_pwrdn
        self.out_div = out_div
        self.clkout = 0
        self.time_ns = 0

    def step(self, pwrdn: int = 0) -> int:
        """Advance one half period and return CLKOUT."""
        self.time_ns += LFOSC_HALF_PERIOD_NS
        if pwrdn:
            self.clkout = 0
        else:
            self.clkout ^= 1
        return self.clkout

    def waveform(self, half_periods: int, pwrdn: Optional[Sequence[int]] = None):
        """Run ``half_periods`` steps.

        Parameters
        ----------
        half_periods : int
            Number of half periods to simulate.
        pwrdn : sequence of int, optional
            PWRDN level for each step. Defaults to always powered up.

        Returns
        -------
        tuple of np.ndarray
            ``(times_ns, levels)``: simulation time after each step and the
            CLKOUT level at that time.
        """
        if pwrdn is None:
            pwrdn = np.zeros(half_periods, dtype=np.uint8)
        pwrdn = np.asarray(pwrdn, dtype=np.uint8)
        if pwrdn.shape != (half_periods,):
            raise ValueError(f"pwrdn needs {half_periods} entries, got {pwrdn.shape}")

        times = np.empty(half_periods, dtype=np.int64)
        levels = np.empty(half_periods, dtype=np.uint8)
        for i in range(half_periods):
            levels[i] = self.step(int(pwrdn[i]))
            times[i] = self.time_ns
        return times, levels


class DownCounter:
    """Shared model of GP_COUNT8 and GP_COUNT14.

    The count starts at ``COUNT_TO`` (power-on reload value), decrements on
    every rising clock edge and reloads ``COUNT_TO`` on the edge after it
    reaches zero. OUT is high combinationally while the count is zero.

    ``RESET_MODE`` is validated and stored, but RST has no effect: whether
    the hardware clears synchronously or asynchronously is not established.
    """

    kind = ""
    width = 0

    def __init__(self, count_to: int = 1, reset_mode: str = "RISING", clkin_divide: int = 1):
        if not 0 <= count_to < (1 << self.width):
            raise ValueError(f"COUNT_TO {count_to} does not fit {self.kind} ({self.width} bits)")
        if reset_mode not in COUNTER_RESET_MODES:
            raise ValueError(f"RESET_MODE must be one of {COUNTER_RESET_MODES}, got {reset_mode!r}")
        if clkin_divide < 1:
            raise ValueError(f"CLKIN_DIVIDE must be >= 1, got {clkin_divide}")
        self.count_to = count_to
        self.reset_mode = reset_mode
        self.clkin_divide = clkin_divide
        self.count = count_to

    @property
    def out(self) -> int:
        return int(self.count == 0)

    def clock(self, rst: int = 0) -> int:
        """Apply one rising clock edge and return OUT.

        ``rst`` is accepted for pin compatibility and ignored.
        """
        if self.count == 0:
            self.count = self.count_to
        else:
            self.count -= 1
        return self.out


class Counter8(DownCounter):
    """GP_COUNT8: 8-bit down-counter."""
    kind = "GP_COUNT8"
    width = 8


class Counter14(DownCounter):
    """GP_COUNT14: 14-bit down-counter."""
    kind = "GP_COUNT14"
    width = 14


class SystemReset:
    """GP_SYSRESET: resets the whole device when RST fires.

    Has no outputs and no local behavior to simulate. The library marks it
    ``keep`` so no optimization removes it for lack of observable outputs.
    """

    kind = "GP_SYSRESET"

    def __init__(self, reset_mode: str = "EDGE", edge_speed: int = 4):
        if reset_mode not in SYSRESET_MODES:
            raise ValueError(f"RESET_MODE must be one of {SYSRESET_MODES}, got {reset_mode!r}")
        self.reset_mode = reset_mode
        self.edge_speed = edge_speed

    def drive(self, **levels):
        raise NotSimulatableError(self.kind)
