"""Pydantic configuration schemas for gp4synth.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
PipelineConfig : class
    Fully validated, frozen runtime configuration
ParamConfig : class
    Expert defaults (complete)
CLIConfig : class
    Command-line overrides
TargetPart : enum
    Supported device identifiers
"""

from gp4synth.schemas.resolve import resolve_config
from gp4synth.schemas.pipeline import PipelineConfig
from gp4synth.schemas.param import ParamConfig
from gp4synth.schemas.cli import CLIConfig, split_run_range
from gp4synth.schemas.parts import TargetPart, PartConfig, PART_TABLE, part_config, is_supported_part

__all__ = [
    'resolve_config',
    'PipelineConfig',
    'ParamConfig',
    'CLIConfig',
    'split_run_range',
    'TargetPart',
    'PartConfig',
    'PART_TABLE',
    'part_config',
    'is_supported_part',
]
