"""Synthesis flow orchestration.

Validates run preconditions, walks the fixed stage sequence through the
run-range state machine, and dispatches each active stage's operations to
the transform invoker one at a time.
"""

import logging
from typing import Sequence

from gp4synth.cells.library import PRIMITIVE_LIBRARY
from gp4synth.contracts import (
    InvalidPartError,
    PipelineError,
    SelectionError,
    TransformError,
    assert_cells_known,
)
from gp4synth.pipeline.active_range import ActiveRange
from gp4synth.pipeline.design import Design
from gp4synth.pipeline.invoker import TransformInvoker
from gp4synth.pipeline.operations import Operation
from gp4synth.pipeline.stages import STAGES, Stage
from gp4synth.schemas.parts import is_supported_part
from gp4synth.schemas.pipeline import PipelineConfig

__all__ = ['PipelineOrchestrator']

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs the GreenPAK4 synthesis flow on a design.

    This is the main entry point of ``gp4synth``. It never transforms the
    design itself: every change goes through the transform invoker, which
    makes the sequencing testable with a recording fake.

    **Run Sequence:**

    1. **Preconditions** (first failure wins, nothing is invoked):
       - the design must be fully selected, else ``SelectionError``
       - the part must be supported, else ``InvalidPartError``

    2. **Stage walk**: stages are visited in their fixed order. The
       run-range state machine decides per stage whether it is active
       (inclusive ``run_from``, exclusive ``run_to``).

    3. **Dispatch**: an active stage builds its operations from the config,
       checks their cell references against the primitive library, and
       invokes them strictly in order.

    **Failures:**

    An exception raised by the invoker aborts the run as ``TransformError``
    naming the operation and stage. There is no retry and no rollback; the
    commands already applied stay applied.

    Example usage::

        from gp4synth.pipeline import Design, PipelineOrchestrator, ScriptInvoker
        from gp4synth.schemas import PipelineConfig

        invoker = ScriptInvoker()
        PipelineOrchestrator(invoker).run(Design("blinky"), PipelineConfig(top="blinky"))
        invoker.write("blinky.ys")
    """

    def __init__(self, invoker: TransformInvoker, stages: Sequence[Stage] = STAGES):
        """Initialize orchestrator with its transform invoker.

        Parameters
        ----------
        invoker : TransformInvoker
            Receives every operation with the design handle.
        stages : sequence of Stage, optional
            Stage sequence to walk (default: the GreenPAK4 flow).
        """
        self.invoker = invoker
        self.stages = tuple(stages)
        self.stages_run: list = []
        self.operations_run = 0

    def run(self, design: Design, config: PipelineConfig) -> None:
        """Run the flow on ``design`` under ``config``.

        Parameters
        ----------
        design : Design
            Exclusively owned design handle, mutated in place.
        config : PipelineConfig
            Frozen run configuration.

        Raises
        ------
        SelectionError
            If the design has a partial selection.
        InvalidPartError
            If ``config.part`` is not a supported part.
        TransformError
            If an invoked operation fails.
        """
        self._check_preconditions(design, config)
        self._warn_unknown_labels(config)

        self.stages_run = []
        self.operations_run = 0
        active_range = ActiveRange(config.run_from, config.run_to)

        logger.info(
            "Executing SYNTH_GREENPAK4 pass: part=%s, top=%s, flatten=%s, retime=%s",
            config.part, config.top or "<auto>", config.flatten, config.retime,
        )

        for stage in self.stages:
            if not active_range.enter(stage.label):
                logger.debug("Stage %s: skipped (outside run range)", stage.label.value)
                continue

            operations = stage.operations(config)
            assert_cells_known(operations, PRIMITIVE_LIBRARY)
            logger.info("Stage %s: %d operation(s)", stage.label.value, len(operations))
            self.stages_run.append(stage.label.value)

            for operation in operations:
                self._dispatch(stage, operation, design)

        logger.info(
            "SYNTH_GREENPAK4 done: %d stage(s), %d operation(s)",
            len(self.stages_run), self.operations_run,
        )

    def _check_preconditions(self, design: Design, config: PipelineConfig) -> None:
        if not design.is_fully_selected():
            raise SelectionError()
        if not is_supported_part(config.part):
            raise InvalidPartError(config.part)

    def _warn_unknown_labels(self, config: PipelineConfig) -> None:
        labels = {stage.label.value for stage in self.stages}
        if config.run_from is not None and config.run_from not in labels:
            logger.warning("Run-from label '%s' matches no stage; nothing will run", config.run_from)
        if config.run_to is not None and config.run_to not in labels:
            logger.warning("Run-to label '%s' matches no stage", config.run_to)

    def _dispatch(self, stage: Stage, operation: Operation, design: Design) -> None:
        logger.debug("  %s", operation.command)
        try:
            self.invoker.invoke(operation, design)
        except PipelineError:
            raise
        except Exception as exc:
            raise TransformError(operation, stage.label.value, str(exc)) from exc
        self.operations_run += 1
