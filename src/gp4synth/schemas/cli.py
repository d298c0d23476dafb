"""CLIConfig: Command-line overrides for a synthesis run.

Mirrors the options of the ``synth_greenpak4`` command one to one:
``-top``, ``-part``, ``-json``, ``-run``, ``-noflatten`` and ``-retime``,
plus the operational ``-script`` and verbosity settings.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional

from gp4synth.contracts.failure import MalformedRangeError
from gp4synth.schemas.base import Gp4BaseModel


def split_run_range(value: str) -> tuple[Optional[str], Optional[str]]:
    """Split a ``<from_label>:<to_label>`` run range.

    Either side may be empty: an empty from label means "from the first
    stage", an empty to label means "through the last stage".

    Raises
    ------
    MalformedRangeError
        If the value has no ``:`` delimiter.

    Examples
    --------
    >>> split_run_range("fine:check")
    ('fine', 'check')
    >>> split_run_range(":map_luts")
    (None, 'map_luts')
    """
    pos = value.find(":")
    if pos < 0:
        raise MalformedRangeError(value)
    run_from, run_to = value[:pos], value[pos + 1:]
    return (run_from or None, run_to or None)


class CLIConfig(Gp4BaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution. Fields left at None (or flags
    left False) do not override the expert defaults.

    Usage
    -----
        cli_cfg = CLIConfig(top="blinky", part="SLG46620V", run="fine:check")
        config = resolve_config(ParamConfig(), cli_cfg)
    """

    top: Optional[str] = None
    part: Optional[str] = None
    json_file: Optional[str] = None
    run: Optional[str] = None
    noflatten: bool = False
    retime: bool = False
    script: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_pipeline_overrides(self) -> dict:
        """Convert CLI options to PipelineConfig field overrides.

        Returns
        -------
        dict
            Flat dictionary of PipelineConfig fields

        Raises
        ------
        MalformedRangeError
            If ``run`` lacks its ``:`` delimiter.
        """
        overrides = {}

        if self.top is not None:
            overrides["top"] = self.top
        if self.part is not None:
            overrides["part"] = self.part
        if self.json_file is not None:
            overrides["json_file"] = self.json_file

        if self.run is not None:
            overrides["run_from"], overrides["run_to"] = split_run_range(self.run)

        if self.noflatten:
            overrides["flatten"] = False
        if self.retime:
            overrides["retime"] = True

        # script and log_level are operational, handled by the CLI runner

        return overrides
