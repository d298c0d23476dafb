"""Tests for pipeline contracts.

These tests verify that internal invariants fail loudly and that the run
errors carry what callers need to report them.
"""

import pytest

from gp4synth.cells import PRIMITIVE_LIBRARY
from gp4synth.contracts import (
    ContractViolation,
    InvalidPartError,
    NotSimulatableError,
    PipelineError,
    SelectionError,
    TransformError,
    assert_cells_known,
    require,
)
from gp4synth.pipeline import Operation
from gp4synth.schemas import PART_TABLE, TargetPart, is_supported_part, part_config

pytestmark = pytest.mark.unit


class TestRequire:

    def test_passes_silently(self):
        require(True, "never raised")

    def test_raises_with_message(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")


class TestCellContract:
    """Closed-world check on operation cell references."""

    def test_known_cells_pass(self):
        assert_cells_known([
            Operation("dffinit", ("-ff", "GP_DFFSR", "Q", "INIT"), cells=("GP_DFFSR",)),
            Operation("clean"),
        ], PRIMITIVE_LIBRARY)

    def test_unknown_cell_violates_contract(self):
        ops = [Operation("dffinit", ("-ff", "GP_LATCH", "Q", "INIT"), cells=("GP_LATCH",))]
        with pytest.raises(ContractViolation, match="GP_LATCH"):
            assert_cells_known(ops, PRIMITIVE_LIBRARY)


class TestPartTable:

    def test_every_part_has_config(self):
        assert set(PART_TABLE) == set(TargetPart)

    @pytest.mark.parametrize("part", ["SLG46140V", "SLG46620V", "SLG46621V"])
    def test_supported(self, part):
        assert is_supported_part(part)
        assert len(part_config(part).lut_buckets) == 4

    @pytest.mark.parametrize("part", ["", "slg46620v", "SLG46620"])
    def test_unsupported(self, part):
        assert not is_supported_part(part)


class TestErrors:

    def test_run_errors_share_base(self):
        for cls in (SelectionError, InvalidPartError, TransformError):
            assert issubclass(cls, PipelineError)
        assert not issubclass(ContractViolation, PipelineError)
        assert issubclass(NotSimulatableError, ContractViolation)

    def test_selection_message(self):
        assert str(SelectionError()) == "This command only operates on fully selected designs!"

    def test_invalid_part_message(self):
        err = InvalidPartError("SLG0")
        assert err.part == "SLG0"
        assert "SLG0" in str(err)

    def test_transform_error_names_operation_and_stage(self):
        err = TransformError(Operation("memory_map"), "fine", "boom")
        assert str(err) == "Transform 'memory_map' failed in stage 'fine': boom"
        assert err.stage == "fine"
        assert err.reason == "boom"
