#!/usr/bin/env python3
"""
Prisoner's Dilemma Rating Tournament

Usage:
    # Endless tournament, standings redrawn every 2 seconds
    python scripts/tournament.py

    # Reproducible run of 10,000 matches
    python scripts/tournament.py --seed 42 --steps 10000

    # Custom payoffs and a config file
    python scripts/tournament.py -c configs/tournament.yaml -w 3,5-0,1

Or if installed:
    ipd-elo --seed 42 --steps 10000
"""

import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ipd_elo.tournament.cli import main


if __name__ == "__main__":
    main()
