"""Core ``synth_greenpak4`` command-line runner.

Parses the yosys-style options, resolves the configuration, runs the flow
through a :class:`ScriptInvoker`, and emits the resulting yosys script to
stdout or to the ``-script`` file.

Options map one to one onto PipelineConfig::

    -top <module>      top module (default: auto-detect)
    -part <part>       SLG46140V, SLG46620V or SLG46621V (default)
    -json <file>       write the design to this JSON file
    -run <from>:<to>   only run the stages between the labels
    -noflatten         do not flatten the design before synthesis
    -retime            run 'abc -dff'
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from gp4synth.contracts import PipelineError
from gp4synth.pipeline import Design, PipelineOrchestrator, ScriptInvoker, describe_pipeline
from gp4synth.schemas import CLIConfig, ParamConfig, resolve_config

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Install a single console handler on the root logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gp4synth",
        description="Synthesis for GreenPAK4 FPGAs. This work is experimental.",
        epilog=describe_pipeline(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-top", metavar="<module>",
                        help="use the specified module as top module (default: auto-detect)")
    parser.add_argument("-part", metavar="<part>",
                        help="synthesize for the specified part. Valid values are SLG46140V, "
                             "SLG46620V, and SLG46621V (default)")
    parser.add_argument("-json", dest="json_file", metavar="<file>",
                        help="write the design to the specified JSON file")
    parser.add_argument("-run", metavar="<from_label>:<to_label>",
                        help="only run the commands between the labels. an empty from label "
                             "means 'begin', an empty to label the end of the command list")
    parser.add_argument("-noflatten", action="store_true",
                        help="do not flatten design before synthesis")
    parser.add_argument("-retime", action="store_true",
                        help="run 'abc' with -dff option")
    parser.add_argument("-script", metavar="<file>",
                        help="write the generated yosys script here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_synthesis(cli_cfg: CLIConfig, design: Optional[Design] = None) -> ScriptInvoker:
    """Resolve the config and run the flow, collecting it as a script.

    Parameters
    ----------
    cli_cfg : CLIConfig
        Parsed command-line options.
    design : Design, optional
        Design handle to run on. A fresh, fully selected one by default.

    Returns
    -------
    ScriptInvoker
        Invoker holding the commands of the run.

    Raises
    ------
    PipelineError
        On a malformed run range, a partial selection, an invalid part, or
        a failing transform.
    """
    config = resolve_config(ParamConfig(), cli_cfg)
    if design is None:
        design = Design(name=config.top or "design")

    invoker = ScriptInvoker()
    PipelineOrchestrator(invoker).run(design, config)
    return invoker


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cli_cfg = CLIConfig.model_validate({
        k: v
        for k, v in {
            "top": args.top,
            "part": args.part,
            "json_file": args.json_file,
            "run": args.run,
            "noflatten": args.noflatten,
            "retime": args.retime,
            "script": args.script,
            "log_level": "DEBUG" if args.verbose else None,
        }.items()
        if v is not None
    })
    setup_logging(cli_cfg.log_level or ParamConfig().log_level)

    try:
        invoker = run_synthesis(cli_cfg)
    except PipelineError as exc:
        logger.error("%s", exc)
        return 1

    if cli_cfg.script:
        invoker.write(cli_cfg.script)
    else:
        sys.stdout.write(invoker.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
