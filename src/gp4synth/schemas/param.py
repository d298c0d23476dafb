"""ParamConfig: Expert defaults for gp4synth runs.

This module defines the complete default configuration. Every runtime
option must have its default here; the orchestrator never falls back to
values of its own.

Runtime code NEVER reads from ParamConfig directly - it only receives
PipelineConfig.
"""

from typing import Literal, Optional

from pydantic import Field

from gp4synth.schemas.base import Gp4BaseModel
from gp4synth.schemas.parts import DEFAULT_PART


class ParamConfig(Gp4BaseModel):
    """Expert defaults, lowest priority in config resolution."""

    top: Optional[str] = Field(None, description="Top module, None for -auto-top")
    part: str = Field(DEFAULT_PART.value, description="Target GreenPAK4 device")
    json_file: Optional[str] = Field(None, description="Export path, None skips write_json")
    flatten: bool = True
    retime: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    def to_pipeline_defaults(self) -> dict:
        """Defaults in PipelineConfig field layout."""
        return {
            "top": self.top,
            "part": self.part,
            "json_file": self.json_file,
            "run_from": None,
            "run_to": None,
            "flatten": self.flatten,
            "retime": self.retime,
        }
