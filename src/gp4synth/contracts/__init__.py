"""Pipeline contracts and failure types.

Contracts fail immediately and loudly. Run errors (bad selection, bad
part, bad range, failing transform) are PipelineError subclasses; broken
internal invariants raise ContractViolation.

Key principle:
- Pydantic validates config correctness
- The orchestrator validates run preconditions
- Contracts validate gp4synth's own invariants
"""

from gp4synth.contracts.failure import (
    ContractViolation,
    NotSimulatableError,
    PipelineError,
    SelectionError,
    InvalidPartError,
    MalformedRangeError,
    TransformError,
)
from gp4synth.contracts.base import require
from gp4synth.contracts.cells import assert_cells_known

__all__ = [
    "ContractViolation",
    "NotSimulatableError",
    "PipelineError",
    "SelectionError",
    "InvalidPartError",
    "MalformedRangeError",
    "TransformError",
    "require",
    "assert_cells_known",
]
