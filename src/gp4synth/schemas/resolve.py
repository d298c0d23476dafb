"""Configuration resolution and merging logic.

This module provides the single entrypoint for configuration resolution:
resolve_config(). It merges ParamConfig and CLIConfig in precedence order
and returns a validated, frozen PipelineConfig.

Precedence (highest to lowest):
1. CLIConfig (command-line overrides)
2. ParamConfig (expert defaults)
"""

from typing import Optional, Union

from gp4synth.schemas.cli import CLIConfig
from gp4synth.schemas.param import ParamConfig
from gp4synth.schemas.pipeline import PipelineConfig


def resolve_config(
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> PipelineConfig:
    """Resolve the runtime configuration from defaults and CLI overrides.

    Parameters
    ----------
    param_cfg : dict or ParamConfig, optional
        Expert defaults. If None or empty, ``ParamConfig()`` is used.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides. If None or empty, no overrides applied.

    Returns
    -------
    PipelineConfig
        Fully validated, immutable runtime configuration

    Raises
    ------
    ValidationError
        If any config fails Pydantic validation
    MalformedRangeError
        If the CLI run range has no ``:`` delimiter

    Examples
    --------
    >>> config = resolve_config(None, CLIConfig(run="fine:", retime=True))
    >>> config.run_from, config.run_to, config.retime
    ('fine', None, True)
    """
    if param_cfg is None or (isinstance(param_cfg, dict) and not param_cfg):
        param = ParamConfig()
    elif not isinstance(param_cfg, ParamConfig):
        param = ParamConfig.model_validate(param_cfg)
    else:
        param = param_cfg

    if cli_cfg is None or (isinstance(cli_cfg, dict) and not cli_cfg):
        cli = CLIConfig()
    elif not isinstance(cli_cfg, CLIConfig):
        cli = CLIConfig.model_validate(cli_cfg)
    else:
        cli = cli_cfg

    merged = param.to_pipeline_defaults()
    merged.update(cli.to_pipeline_overrides())

    return PipelineConfig.model_validate(merged)
