import pytest

from gp4synth.contracts import InvalidPartError, SelectionError, TransformError
from gp4synth.pipeline import PipelineOrchestrator, RecordingInvoker
from gp4synth.schemas import PipelineConfig

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


def _flatten(expected, labels):
    return [cmd for label in labels for cmd in expected[label]]


def test_default_run_executes_every_stage_in_order(orchestrator, invoker, design,
                                                   default_config, expected_commands):
    """All eight stages run, every operation once, in the documented order."""
    orchestrator.run(design, default_config)

    assert invoker.commands == _flatten(expected_commands, expected_commands)
    assert orchestrator.stages_run == [
        "begin", "flatten", "coarse", "fine", "map_luts", "map_cells", "check", "json",
    ]


def test_run_applies_commands_to_design(orchestrator, design, default_config, invoker):
    orchestrator.run(design, default_config)

    assert design.history == invoker.commands
    assert all(d is design for _, d in invoker.calls)


def test_operations_run_counter(orchestrator, design, default_config, expected_commands):
    orchestrator.run(design, default_config)
    assert orchestrator.operations_run == sum(len(v) for v in expected_commands.values())


def test_range_is_inclusive_from_exclusive_to(orchestrator, invoker, design,
                                              make_config, expected_commands):
    """fine:check runs fine, map_luts and map_cells, never check."""
    orchestrator.run(design, make_config(run="fine:check"))

    assert orchestrator.stages_run == ["fine", "map_luts", "map_cells"]
    assert invoker.commands == _flatten(expected_commands, ["fine", "map_luts", "map_cells"])
    assert "check -noinit" not in invoker.commands
    assert "stat" not in invoker.commands


def test_open_ended_ranges(orchestrator, invoker, design, make_config, expected_commands):
    orchestrator.run(design, make_config(run=":coarse"))
    assert orchestrator.stages_run == ["begin", "flatten"]

    invoker.calls.clear()
    orchestrator.run(design, make_config(run="map_cells:"))
    assert orchestrator.stages_run == ["map_cells", "check", "json"]
    assert invoker.commands == _flatten(expected_commands, ["map_cells", "check", "json"])


def test_unmatched_from_label_runs_nothing(orchestrator, invoker, design):
    """A from label that matches no stage is a successful empty run."""
    config = PipelineConfig(run_from="nonexistent")

    orchestrator.run(design, config)

    assert invoker.calls == []
    assert orchestrator.stages_run == []
    assert design.history == []


def test_unmatched_from_label_is_logged(orchestrator, design, caplog):
    with caplog.at_level("WARNING"):
        orchestrator.run(design, PipelineConfig(run_from="nonexistent"))
    assert "nonexistent" in caplog.text


def test_same_from_and_to_label_runs_nothing(orchestrator, invoker, design):
    orchestrator.run(design, PipelineConfig(run_from="fine", run_to="fine"))
    assert invoker.calls == []


@pytest.mark.parametrize("part, buckets", [
    ("SLG46140V", "0,6,8,2"),
    ("SLG46620V", "2,8,16,2"),
    ("SLG46621V", "2,8,16,2"),
])
def test_map_luts_uses_part_buckets(orchestrator, invoker, design, make_config, part, buckets):
    orchestrator.run(design, make_config(part=part, run="map_luts:map_cells"))

    assert invoker.commands == [f"nlutmap -luts {buckets}", "clean"]


@pytest.mark.parametrize("part", ["SLG46000V", "slg46620v", "", "GP4"])
def test_invalid_part_rejected_before_any_invocation(orchestrator, invoker, design, part):
    with pytest.raises(InvalidPartError) as exc_info:
        orchestrator.run(design, PipelineConfig(part=part))

    assert exc_info.value.part == part
    assert invoker.calls == []


def test_partial_selection_rejected(orchestrator, invoker, design, default_config):
    design.select("blinky")

    with pytest.raises(SelectionError, match="fully selected"):
        orchestrator.run(design, default_config)

    assert invoker.calls == []


def test_selection_checked_before_part(orchestrator, invoker, design):
    """With both preconditions failing, the selection error wins."""
    design.select("blinky")

    with pytest.raises(SelectionError):
        orchestrator.run(design, PipelineConfig(part="bogus"))

    assert invoker.calls == []


def test_noflatten_skips_flatten_operations(orchestrator, invoker, design, make_config,
                                            expected_commands):
    orchestrator.run(design, make_config(noflatten=True))

    labels = [l for l in expected_commands if l != "flatten"]
    assert invoker.commands == _flatten(expected_commands, labels)


def test_noflatten_still_drives_run_range(orchestrator, invoker, design, make_config,
                                          expected_commands):
    """The flatten label keeps switching the range even with no operations."""
    orchestrator.run(design, make_config(noflatten=True, run="flatten:fine"))
    assert invoker.commands == expected_commands["coarse"]

    invoker.calls.clear()
    orchestrator.run(design, make_config(noflatten=True, run="begin:flatten"))
    assert invoker.commands == expected_commands["begin"]


@pytest.mark.parametrize("retime", [False, True])
def test_retime_gates_abc_dff(orchestrator, invoker, design, make_config, retime):
    orchestrator.run(design, make_config(retime=retime))

    assert ("abc -dff" in invoker.commands) is retime
    if retime:
        # last operation of the fine stage
        assert invoker.commands[invoker.commands.index("abc -dff") + 1] == "nlutmap -luts 2,8,16,2"


def test_json_export_gated_by_output_path(orchestrator, invoker, design, make_config):
    orchestrator.run(design, make_config(json_file="out/blinky.json", run="json:"))
    assert invoker.commands == ["splitnets", "write_json out/blinky.json"]

    invoker.calls.clear()
    orchestrator.run(design, make_config(json_file="", run="json:"))
    assert invoker.commands == ["splitnets"]


def test_explicit_top_module(orchestrator, invoker, design, make_config):
    orchestrator.run(design, make_config(top="blinky", run=":flatten"))
    assert invoker.commands[1] == "hierarchy -check -top blinky"


def test_any_transform_invoker_drives_the_run(design, make_config):
    """The orchestrator only relies on ``invoke(operation, design)``."""

    class CountingInvoker:
        def __init__(self):
            self.names = []

        def invoke(self, operation, design):
            self.names.append(operation.name)

    invoker = CountingInvoker()
    PipelineOrchestrator(invoker).run(design, make_config(run="check:json"))

    assert invoker.names == ["hierarchy", "stat", "check"]
    assert design.history == []


def test_transform_failure_propagates_with_operation(design, default_config):
    invoker = RecordingInvoker(fail_on="memory_map")
    orch = PipelineOrchestrator(invoker)

    with pytest.raises(TransformError) as exc_info:
        orch.run(design, default_config)

    err = exc_info.value
    assert err.operation.command == "memory_map"
    assert err.stage == "fine"
    assert isinstance(err.__cause__, RuntimeError)
    # nothing after the failing operation is invoked
    assert invoker.commands[-1] == "memory_map"


def test_transform_failure_leaves_prior_mutations(design, default_config, expected_commands):
    """No rollback: commands applied before the failure stay applied."""
    invoker = RecordingInvoker(fail_on="nlutmap")
    orch = PipelineOrchestrator(invoker)

    with pytest.raises(TransformError):
        orch.run(design, default_config)

    assert design.history == _flatten(expected_commands, ["begin", "flatten", "coarse", "fine"])


def test_snapshot_allows_caller_side_restore(design, default_config):
    saved = design.snapshot()
    orch = PipelineOrchestrator(RecordingInvoker(fail_on="stat"))

    with pytest.raises(TransformError):
        orch.run(design, default_config)

    assert design.history
    assert saved.history == []
