"""Centralized failure types for the synthesis pipeline.

Every error defined here aborts the whole run. There is no recoverable
category: the caller receives the exception and whatever the completed
stages already did to the design stays in place.

Key distinction:
- ValidationError: malformed config values (handled by Pydantic)
- PipelineError: a run precondition failed, or an invoked transform failed
- ContractViolation: an internal invariant of gp4synth itself is broken
"""


class ContractViolation(RuntimeError):
    """Raised when an internal invariant is violated.

    This indicates a bug in gp4synth (for example a stage referencing a
    cell kind the primitive library does not define), not bad user input.
    """
    pass


class NotSimulatableError(ContractViolation):
    """Raised when a cell without standalone behavior is asked to simulate.

    GP_SYSRESET resets the whole device; the library marks it
    ``simulatable=False`` and its model refuses to be driven.
    """

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind} resets the whole device and cannot be simulated standalone")


class PipelineError(RuntimeError):
    """Base class for all fatal run errors."""
    pass


class SelectionError(PipelineError):
    """The design has a partial selection active."""

    def __init__(self, message: str = "This command only operates on fully selected designs!"):
        super().__init__(message)


class InvalidPartError(PipelineError):
    """The target part is not a supported device."""

    def __init__(self, part: str):
        self.part = part
        super().__init__(f"Invalid part name: '{part}'")


class MalformedRangeError(PipelineError):
    """A ``-run`` value is missing its ``:`` delimiter."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Malformed run range '{value}': expected <from_label>:<to_label>")


class TransformError(PipelineError):
    """An invoked transform failed.

    Carries the failing operation and the label of the stage that issued
    it. The original exception is chained as ``__cause__``.
    """

    def __init__(self, operation, stage: str, reason: str = ""):
        self.operation = operation
        self.stage = stage
        self.reason = reason
        message = f"Transform '{operation}' failed in stage '{stage}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
