"""Transform invokers: the single seam between the orchestrator and the engine.

The orchestrator calls ``invoker.invoke(operation, design)`` once per
operation and waits for it to return. An invoker signals failure by
raising; the orchestrator turns that into a ``TransformError``.

- RecordingInvoker: records every call, optionally fails on a command
- ScriptInvoker: collects the commands into a yosys script file
"""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from gp4synth.pipeline.design import Design
from gp4synth.pipeline.operations import Operation

__all__ = ['TransformInvoker', 'RecordingInvoker', 'ScriptInvoker']

logger = logging.getLogger(__name__)


class TransformInvoker(Protocol):
    def invoke(self, operation: Operation, design: Design) -> None:
        ...


class RecordingInvoker:
    """Records ``(operation, design)`` pairs and applies them to the design.

    Parameters
    ----------
    fail_on : str, optional
        Command name or full command text that raises ``RuntimeError``
        instead of being applied, to exercise failure paths.
    """

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.calls: list = []

    def invoke(self, operation: Operation, design: Design) -> None:
        self.calls.append((operation, design))
        if self.fail_on is not None and self.fail_on in (operation.name, operation.command):
            raise RuntimeError(f"{operation.command}: command failed")
        design.apply(operation.command)

    @property
    def operations(self) -> list:
        return [op for op, _ in self.calls]

    @property
    def commands(self) -> list:
        return [op.command for op, _ in self.calls]


class ScriptInvoker(RecordingInvoker):
    """Collects the run as a yosys script instead of executing it.

    The script can be replayed with ``yosys -s <file>`` after reading the
    design sources.
    """

    header = "# synth_greenpak4 flow generated by gp4synth"

    def render(self) -> str:
        return "\n".join([self.header, *self.commands]) + "\n"

    def write(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render())
        logger.info("Wrote %d command(s) to %s", len(self.calls), path)
        return path
