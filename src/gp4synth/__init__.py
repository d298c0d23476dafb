"""`gp4synth` - Synthesis flow controller and cell library for GreenPAK4 devices.

Subpackages:
- pipeline: Orchestrator, stage sequence, run range, transform invokers
- cells: GreenPAK4 primitive catalog and behavioral models
- schemas: Pydantic configuration (defaults, CLI, parts, runtime)
- contracts: Failure types and invariant enforcement
- cli: Command-line runner
"""

__version__ = "0.1.0"
