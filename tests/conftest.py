"""Root-level pytest fixtures for the gp4synth test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, a fully selected design, and a recording invoker that stands
in for the transform engine. Tests build configs through these fixtures
instead of hand-writing dicts.
"""

import pytest

from gp4synth.pipeline import Design, PipelineOrchestrator, RecordingInvoker
from gp4synth.schemas import CLIConfig, ParamConfig, PipelineConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert defaults."""
    return ParamConfig()


@pytest.fixture
def default_config(param_config) -> PipelineConfig:
    """Runtime configuration with no overrides.

    Part SLG46621V, auto top, flatten on, retime off, no JSON export,
    no run range.
    """
    return resolve_config(param_config, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for custom test configs.

    Returns a callable that accepts CLIConfig-compatible kwargs.

    Examples
    --------
    >>> def test_retime(make_config):
    ...     config = make_config(retime=True, run="fine:map_luts")
    ...     assert config.retime
    """
    def _make(**cli_overrides):
        if cli_overrides:
            return resolve_config(param_config, CLIConfig(**cli_overrides))
        return resolve_config(param_config, None)

    return _make


# =============================================================================
# Design and Invoker Fixtures
# =============================================================================

@pytest.fixture
def design():
    """Fully selected design with a single module."""
    return Design(name="blinky", modules=["blinky"])


@pytest.fixture
def invoker():
    return RecordingInvoker()


@pytest.fixture
def orchestrator(invoker):
    return PipelineOrchestrator(invoker)


# =============================================================================
# Expected Command Listing
# =============================================================================

@pytest.fixture
def expected_commands():
    """Commands per stage for the default config, in order."""
    return {
        "begin": [
            "read_verilog -lib +/greenpak4/cells_sim.v",
            "hierarchy -check -auto-top",
        ],
        "flatten": [
            "proc",
            "flatten",
            "tribuf -logic",
        ],
        "coarse": [
            "synth -run coarse",
        ],
        "fine": [
            "greenpak4_counters",
            "clean",
            "opt -fast -mux_undef -undriven -fine",
            "memory_map",
            "opt -undriven -fine",
            "techmap",
            "dfflibmap -prepare -liberty +/greenpak4/gp_dff.lib",
            "opt -fast",
        ],
        "map_luts": [
            "nlutmap -luts 2,8,16,2",
            "clean",
        ],
        "map_cells": [
            "dfflibmap -liberty +/greenpak4/gp_dff.lib",
            "techmap -map +/greenpak4/cells_map.v",
            "dffinit -ff GP_DFF Q INIT",
            "dffinit -ff GP_DFFR Q INIT",
            "dffinit -ff GP_DFFS Q INIT",
            "dffinit -ff GP_DFFSR Q INIT",
            "clean",
        ],
        "check": [
            "hierarchy -check",
            "stat",
            "check -noinit",
        ],
        "json": [
            "splitnets",
        ],
    }
