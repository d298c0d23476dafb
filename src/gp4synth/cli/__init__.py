"""Command-line interface modules for gp4synth.

This package contains the runner logic, making scripts/ optional and deletable.
"""

from gp4synth.cli.synth import main, run_synthesis

__all__ = ['main', 'run_synthesis']
