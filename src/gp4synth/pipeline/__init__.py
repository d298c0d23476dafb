"""Pipeline modules.

- orchestrator: Main flow controller
- stages: Fixed stage sequence and per-stage operation builders
- active_range: Run-range state machine
- invoker: Transform invoker protocol and implementations
- design: In-memory design handle
"""

from gp4synth.pipeline.orchestrator import PipelineOrchestrator
from gp4synth.pipeline.stages import STAGES, STAGE_LABELS, Stage, StageKind, StageLabel, describe_pipeline
from gp4synth.pipeline.operations import Operation
from gp4synth.pipeline.active_range import ActiveRange, active_labels
from gp4synth.pipeline.invoker import TransformInvoker, RecordingInvoker, ScriptInvoker
from gp4synth.pipeline.design import Design

__all__ = [
    "PipelineOrchestrator",
    "STAGES",
    "STAGE_LABELS",
    "Stage",
    "StageKind",
    "StageLabel",
    "describe_pipeline",
    "Operation",
    "ActiveRange",
    "active_labels",
    "TransformInvoker",
    "RecordingInvoker",
    "ScriptInvoker",
    "Design",
]
