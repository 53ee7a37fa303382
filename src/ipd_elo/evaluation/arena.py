"""
Match Engine

Plays one iterated Prisoner's Dilemma match between two strategies and
normalizes the point differential into a score in [-1, 1].
"""

from dataclasses import dataclass

from ..game import Choice, Weights
from .agents import RngStream, StrategyKind


@dataclass
class MatchResult:
    """Result of a match between two strategies."""

    strategy1: str
    strategy2: str
    turns: int
    points1: int
    points2: int
    max_diff: int
    collaborations1: int = 0
    collaborations2: int = 0

    @property
    def differential(self) -> int:
        """Points of strategy1 minus points of strategy2."""
        return self.points1 - self.points2

    @property
    def score(self) -> float:
        """Score for strategy1 (1 for full exploitation, 0 even, -1 exploited)."""
        return self.differential / (self.max_diff * self.turns)

    @property
    def collaboration_rate1(self) -> float:
        return self.collaborations1 / self.turns

    @property
    def collaboration_rate2(self) -> float:
        return self.collaborations2 / self.turns


def run_match(
    kind1: StrategyKind,
    kind2: StrategyKind,
    weights: Weights,
    turn_count: int,
    rng: RngStream,
) -> MatchResult:
    """
    Run a match between two strategies.

    Both agents are created fresh. Each turn, agent 1 decides and then
    agent 2 decides, both from the histories as they stood before the turn.

    Args:
        kind1: Strategy of the first side
        kind2: Strategy of the second side
        weights: Payoff weights
        turn_count: Number of turns to play (at least 1)
        rng: Random stream

    Returns:
        MatchResult with both point totals

    Raises:
        ValueError: If turn_count < 1 or the weights are degenerate
    """
    if turn_count < 1:
        raise ValueError(f"A match needs at least one turn, got {turn_count}")
    diff = weights.max_diff()
    if diff == 0:
        raise ValueError("Degenerate weights: max_diff is zero")

    agent1 = kind1.instantiate(weights, rng)
    agent2 = kind2.instantiate(weights, rng)

    history1: list[Choice] = []
    history2: list[Choice] = []
    points1 = 0
    points2 = 0

    for _ in range(turn_count):
        move1 = agent1.decide(history1, history2, rng)
        move2 = agent2.decide(history2, history1, rng)
        history1.append(move1)
        history2.append(move2)

        payoff1, payoff2 = weights.outcome(move1, move2)
        points1 += payoff1
        points2 += payoff2

    return MatchResult(
        strategy1=kind1.name,
        strategy2=kind2.name,
        turns=turn_count,
        points1=points1,
        points2=points2,
        max_diff=diff,
        collaborations1=history1.count(Choice.COLLABORATE),
        collaborations2=history2.count(Choice.COLLABORATE),
    )


def play_match(
    kind1: StrategyKind,
    kind2: StrategyKind,
    weights: Weights,
    turn_count: int,
    rng: RngStream,
) -> float:
    """
    Play a match and return the normalized score of the first side.

    Returns:
        Score in [-1, 1]; +1 means kind1 gained the maximum edge every turn
    """
    return run_match(kind1, kind2, weights, turn_count, rng).score
