"""PipelineConfig: Authoritative runtime configuration for one synthesis run.

This is the ONLY config schema the orchestrator sees. It is validated,
normalized and frozen. Empty strings for the optional text fields mean
"absent", exactly like leaving them out.

The part is deliberately kept as a plain string: an unsupported part is a
precondition failure reported by the orchestrator (``InvalidPartError``),
after the design selection check, not a schema error at construction time.
"""

from typing import Optional

from pydantic import ConfigDict, field_validator

from gp4synth.schemas.base import Gp4BaseModel
from gp4synth.schemas.parts import DEFAULT_PART


class PipelineConfig(Gp4BaseModel):
    """Frozen configuration of a ``synth_greenpak4`` run.

    Usage
    -----
        config = PipelineConfig(top="blinky", part="SLG46620V",
                                json_file="blinky.json", retime=True)
        PipelineOrchestrator().run(design, config)

    Rules
    -----
    - ``top=None`` selects the top module automatically.
    - ``json_file=None`` skips the export step.
    - ``run_from=None`` starts at the first stage, ``run_to=None`` runs
      through the last one.
    """

    top: Optional[str] = None
    part: str = DEFAULT_PART.value
    json_file: Optional[str] = None
    run_from: Optional[str] = None
    run_to: Optional[str] = None
    flatten: bool = True
    retime: bool = False

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    @field_validator("top", "json_file", "run_from", "run_to", mode="after")
    @classmethod
    def empty_means_absent(cls, v):
        """Normalize ``""`` to None so absent and empty behave the same."""
        if v == "":
            return None
        return v

    @property
    def top_args(self) -> tuple[str, ...]:
        """``hierarchy`` arguments selecting the top module."""
        if self.top is None:
            return ("-auto-top",)
        return ("-top", self.top)
