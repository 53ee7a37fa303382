"""
Strategy Evaluation

Strategies, the match engine and the ELO rating pool.
"""

from .agents import (
    Agent,
    Archetype,
    StrategyKind,
    RngStream,
    STANDARD_CATALOG,
    get_strategy,
)
from .arena import MatchResult, play_match, run_match
from .elo import (
    EloPool,
    EloPoolConfig,
    RatingEntry,
    expected_score,
    saturating_add,
    RATING_MIN,
    RATING_MAX,
    DEFAULT_K_FACTOR,
    CLI_K_FACTOR,
)

__all__ = [
    # Agents
    "Agent",
    "Archetype",
    "StrategyKind",
    "RngStream",
    "STANDARD_CATALOG",
    "get_strategy",
    # Arena
    "MatchResult",
    "play_match",
    "run_match",
    # ELO
    "EloPool",
    "EloPoolConfig",
    "RatingEntry",
    "expected_score",
    "saturating_add",
    "RATING_MIN",
    "RATING_MAX",
    "DEFAULT_K_FACTOR",
    "CLI_K_FACTOR",
]
