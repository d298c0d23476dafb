#!/usr/bin/env python3
"""``gp4synth`` GreenPAK4 synthesis flow runner.

Usage:
    python scripts/synth_greenpak4.py -top blinky -json blinky.json
    python scripts/synth_greenpak4.py -part SLG46140V -run :map_luts
    python scripts/synth_greenpak4.py -top blinky -retime -script blinky.ys

Prints the generated yosys script unless -script is given.
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from gp4synth.cli import main


if __name__ == "__main__":
    sys.exit(main())
