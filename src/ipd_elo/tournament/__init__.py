"""
Tournament System for Strategy Ratings

Run the rating pool from the command line or a YAML configuration.
"""

from .config import TournamentConfig
from .runner import format_standings, make_rng, run_for, run_steps

__all__ = [
    "TournamentConfig",
    "format_standings",
    "make_rng",
    "run_for",
    "run_steps",
]
