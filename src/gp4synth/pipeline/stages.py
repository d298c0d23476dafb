"""The fixed stage sequence of the GreenPAK4 synthesis flow.

Stages are process-wide constants. Each one owns a builder that turns the
run configuration into its ordered operation list; conditional operations
(flatten, retime, per-part LUT budgets, JSON export) are decided there and
nowhere else.

**Stage sequence:**

1. ``begin``: load the cell simulation library, check the hierarchy
2. ``flatten``: proc, flatten, tri-state to logic (unless ``-noflatten``)
3. ``coarse``: generic coarse-grain synthesis
4. ``fine``: counter extraction, fine optimization, memory and FF prep
5. ``map_luts``: LUT mapping within the part's LUT budget
6. ``map_cells``: FF and cell mapping, INIT propagation per FF kind
7. ``check``: hierarchy check, statistics, structural checks
8. ``json``: split nets, optional ``write_json``
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from gp4synth.cells.library import FLIP_FLOP_KINDS
from gp4synth.pipeline.operations import Operation
from gp4synth.schemas.parts import TargetPart, part_config
from gp4synth.schemas.pipeline import PipelineConfig

__all__ = ['StageLabel', 'StageKind', 'Stage', 'STAGES', 'STAGE_LABELS', 'describe_pipeline']

CELLS_SIM = "+/greenpak4/cells_sim.v"
CELLS_MAP = "+/greenpak4/cells_map.v"
DFF_LIBERTY = "+/greenpak4/gp_dff.lib"


class StageLabel(str, Enum):
    """Stage labels in execution order."""
    BEGIN = "begin"
    FLATTEN = "flatten"
    COARSE = "coarse"
    FINE = "fine"
    MAP_LUTS = "map_luts"
    MAP_CELLS = "map_cells"
    CHECK = "check"
    JSON = "json"


class StageKind(str, Enum):
    UNCONDITIONAL = "unconditional"
    FLATTEN_CONDITIONAL = "flatten_conditional"
    PART_CONDITIONAL = "part_conditional"
    RETIME_CONDITIONAL = "retime_conditional"


@dataclass(frozen=True)
class Stage:
    label: StageLabel
    kind: StageKind
    build: Callable[[PipelineConfig], list]

    def operations(self, config: PipelineConfig) -> list:
        """Ordered operations this stage issues under ``config``."""
        return self.build(config)


def _begin(config: PipelineConfig) -> list:
    return [
        Operation("read_verilog", ("-lib", CELLS_SIM)),
        Operation("hierarchy", ("-check", *config.top_args)),
    ]


def _flatten(config: PipelineConfig) -> list:
    if not config.flatten:
        return []
    return [
        Operation("proc"),
        Operation("flatten"),
        Operation("tribuf", ("-logic",)),
    ]


def _coarse(config: PipelineConfig) -> list:
    return [Operation("synth", ("-run", "coarse"))]


def _fine(config: PipelineConfig) -> list:
    ops = [
        Operation("greenpak4_counters"),
        Operation("clean"),
        Operation("opt", ("-fast", "-mux_undef", "-undriven", "-fine")),
        Operation("memory_map"),
        Operation("opt", ("-undriven", "-fine")),
        Operation("techmap"),
        Operation("dfflibmap", ("-prepare", "-liberty", DFF_LIBERTY)),
        Operation("opt", ("-fast",)),
    ]
    if config.retime:
        ops.append(Operation("abc", ("-dff",)))
    return ops


def _map_luts(config: PipelineConfig) -> list:
    buckets = part_config(config.part).lut_buckets
    return [
        Operation("nlutmap", ("-luts", ",".join(str(n) for n in buckets))),
        Operation("clean"),
    ]


def _map_cells(config: PipelineConfig) -> list:
    ff_names = tuple(kind.value for kind in FLIP_FLOP_KINDS)
    ops = [
        Operation("dfflibmap", ("-liberty", DFF_LIBERTY), cells=ff_names),
        Operation("techmap", ("-map", CELLS_MAP)),
    ]
    for name in ff_names:
        ops.append(Operation("dffinit", ("-ff", name, "Q", "INIT"), cells=(name,)))
    ops.append(Operation("clean"))
    return ops


def _check(config: PipelineConfig) -> list:
    return [
        Operation("hierarchy", ("-check",)),
        Operation("stat"),
        Operation("check", ("-noinit",)),
    ]


def _json(config: PipelineConfig) -> list:
    ops = [Operation("splitnets", note="temporary workaround for gp4par parser limitation")]
    if config.json_file:
        ops.append(Operation("write_json", (config.json_file,)))
    return ops


STAGES: tuple[Stage, ...] = (
    Stage(StageLabel.BEGIN, StageKind.UNCONDITIONAL, _begin),
    Stage(StageLabel.FLATTEN, StageKind.FLATTEN_CONDITIONAL, _flatten),
    Stage(StageLabel.COARSE, StageKind.UNCONDITIONAL, _coarse),
    Stage(StageLabel.FINE, StageKind.RETIME_CONDITIONAL, _fine),
    Stage(StageLabel.MAP_LUTS, StageKind.PART_CONDITIONAL, _map_luts),
    Stage(StageLabel.MAP_CELLS, StageKind.UNCONDITIONAL, _map_cells),
    Stage(StageLabel.CHECK, StageKind.UNCONDITIONAL, _check),
    Stage(StageLabel.JSON, StageKind.UNCONDITIONAL, _json),
)

STAGE_LABELS: tuple[str, ...] = tuple(stage.label.value for stage in STAGES)

# (field, value that drops the operation, annotation)
_GATES = (
    ("retime", False, "only if -retime"),
    ("json_file", None, "only if -json"),
)


def _line(op: Operation, note: str = "") -> str:
    note = note or op.note
    if not note:
        return f"        {op.command}"
    return f"        {op.command:<28} ({note})"


def describe_pipeline() -> str:
    """Annotated listing of every command the flow can execute.

    Conditional commands carry the option that enables them, per-part
    commands the part they apply to. Used as the CLI help epilog.
    """
    full = PipelineConfig(top="<top>", json_file="<file-name>", retime=True)
    lines = ["The following commands are executed by this synthesis command:", ""]

    for stage in STAGES:
        header = f"    {stage.label.value}:"
        if stage.kind == StageKind.FLATTEN_CONDITIONAL:
            header = f"{header:<21}(unless -noflatten)"
        lines.append(header)

        if stage.kind == StageKind.PART_CONDITIONAL:
            per_part = {
                part: stage.operations(full.model_copy(update={"part": part.value}))
                for part in TargetPart
            }
            for ops in zip(*per_part.values()):
                if len(set(ops)) == 1:
                    lines.append(_line(ops[0]))
                else:
                    for part, op in zip(per_part, ops):
                        lines.append(_line(op, f"for -part {part.value}"))
        else:
            ops = stage.operations(full)
            gated = {}
            for name, off_value, note in _GATES:
                kept = set(stage.operations(full.model_copy(update={name: off_value})))
                for op in ops:
                    if op not in kept:
                        gated[op] = note
            for op in ops:
                lines.append(_line(op, gated.get(op, "")))
        lines.append("")

    return "\n".join(lines)
