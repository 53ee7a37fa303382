"""
Strategy Catalog and Agent Implementations

Provides the closed set of strategy archetypes and the match-scoped agents
they create:
- StrategyKind: immutable catalog entry (archetype + optional probability)
- Agent: per-match decision function over the move history
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, TypeAlias

import numpy as np

from ..game import Choice, Weights

# Random stream threaded through instantiation and every decision
RngStream: TypeAlias = np.random.Generator
History: TypeAlias = Sequence[Choice]


def draw(rng: RngStream, probability: float) -> Choice:
    """Collaborate with the given probability."""
    return Choice.from_bool(bool(rng.random() < probability))


class Agent(ABC):
    """
    Abstract base class for Prisoner's Dilemma agents.

    An agent lives for exactly one match. It sees both histories as they
    were before the current turn.
    """

    @abstractmethod
    def decide(
        self,
        own_history: History,
        opponent_history: History,
        rng: RngStream,
    ) -> Choice:
        """
        Choose the move for the next turn.

        Args:
            own_history: This agent's moves so far
            opponent_history: The opponent's moves so far
            rng: Random stream for stochastic strategies

        Returns:
            The chosen move
        """
        pass


class DefectorAgent(Agent):
    """Always defects."""

    def decide(self, own_history, opponent_history, rng) -> Choice:
        return Choice.DEFECT


class CollaboratorAgent(Agent):
    """Always collaborates."""

    def decide(self, own_history, opponent_history, rng) -> Choice:
        return Choice.COLLABORATE


class RandomAgent(Agent):
    """Collaborates with a fixed probability, drawn independently each turn."""

    def __init__(self, probability: float):
        self.probability = probability

    def decide(self, own_history, opponent_history, rng) -> Choice:
        return draw(rng, self.probability)


class TitForTatAgent(Agent):
    """Opens with a fixed move, then repeats the opponent's last move."""

    def __init__(self, opening: Choice = Choice.COLLABORATE):
        self.opening = opening

    def decide(self, own_history, opponent_history, rng) -> Choice:
        if not opponent_history:
            return self.opening
        return opponent_history[-1]


class MeanAgent(Agent):
    """Collaborates as often as the opponent has collaborated so far."""

    def decide(self, own_history, opponent_history, rng) -> Choice:
        if not opponent_history:
            return draw(rng, 0.5)
        collaborations = sum(1 for c in opponent_history if c is Choice.COLLABORATE)
        return draw(rng, collaborations / len(opponent_history))


class PavlovAgent(Agent):
    """
    Win-stay, lose-shift.

    Collaborates when both sides made the same move last turn. On the first
    turn both histories are empty, which counts as alike.
    """

    def decide(self, own_history, opponent_history, rng) -> Choice:
        own_last = own_history[-1] if own_history else None
        opponent_last = opponent_history[-1] if opponent_history else None
        return Choice.from_bool(own_last == opponent_last)


class GrimAgent(Agent):
    """Collaborates until the opponent defects once, then defects forever."""

    def __init__(self):
        self.triggered = False

    def decide(self, own_history, opponent_history, rng) -> Choice:
        if opponent_history and opponent_history[-1] is Choice.DEFECT:
            self.triggered = True
        return Choice.DEFECT if self.triggered else Choice.COLLABORATE


# ============================================================================
# STRATEGY CATALOG
# ============================================================================


class Archetype(Enum):
    """Closed set of strategy archetypes."""

    ALWAYS_DEFECT = "always_defect"
    ALWAYS_COLLABORATE = "always_collaborate"
    RANDOM_EACH_TURN = "random_each_turn"
    RANDOM_FIXED_AT_START = "random_fixed_at_start"
    TIT_FOR_TAT = "tit_for_tat"
    TIT_FOR_TAT_DEFECT_FIRST = "tit_for_tat_defect_first"
    MEAN = "mean"
    PAVLOV = "pavlov"
    GRIM = "grim"


RANDOM_ARCHETYPES = frozenset(
    {Archetype.RANDOM_EACH_TURN, Archetype.RANDOM_FIXED_AT_START}
)


@dataclass(frozen=True)
class StrategyKind:
    """
    Immutable catalog entry describing a decision policy.

    Attributes:
        archetype: Which policy this is
        probability: Collaboration probability, only for random archetypes
    """

    archetype: Archetype
    probability: float | None = None

    def __post_init__(self):
        if self.archetype in RANDOM_ARCHETYPES:
            if self.probability is None or not 0.0 <= self.probability <= 1.0:
                raise ValueError(
                    f"{self.archetype.value} needs a probability in [0, 1], "
                    f"got {self.probability!r}"
                )
        elif self.probability is not None:
            raise ValueError(f"{self.archetype.value} takes no probability")

    @property
    def percent(self) -> str:
        return f"{100 * (self.probability or 0.0):.0f}%"

    @property
    def name(self) -> str:
        """Short display name."""
        match self.archetype:
            case Archetype.ALWAYS_DEFECT:
                return "Defector"
            case Archetype.ALWAYS_COLLABORATE:
                return "Collaborator"
            case Archetype.RANDOM_EACH_TURN:
                return f"Random {self.percent}"
            case Archetype.RANDOM_FIXED_AT_START:
                return f"RandomFixed {self.percent}"
            case Archetype.TIT_FOR_TAT:
                return "TitForTat"
            case Archetype.TIT_FOR_TAT_DEFECT_FIRST:
                return "TitForTatDefectFirst"
            case Archetype.MEAN:
                return "Mean"
            case Archetype.PAVLOV:
                return "Pavlov"
            case Archetype.GRIM:
                return "Grim"
        raise ValueError(f"Unknown archetype: {self.archetype!r}")

    @property
    def description(self) -> str:
        """One-line description of the policy."""
        match self.archetype:
            case Archetype.ALWAYS_DEFECT:
                return "Always defect"
            case Archetype.ALWAYS_COLLABORATE:
                return "Always collaborate"
            case Archetype.RANDOM_EACH_TURN:
                return f"Collaborate {self.percent} of times"
            case Archetype.RANDOM_FIXED_AT_START:
                return (
                    f"Choose the move at the start (collaborate {self.percent}), "
                    "then stick with it"
                )
            case Archetype.TIT_FOR_TAT:
                return "Collaborate, then answer with the last move"
            case Archetype.TIT_FOR_TAT_DEFECT_FIRST:
                return "Defect, then answer with the last move"
            case Archetype.MEAN:
                return "Mean the other moves, then answer with the same distribution"
            case Archetype.PAVLOV:
                return "Cooperate if the opponent moved alike"
            case Archetype.GRIM:
                return "Cooperate until defected"
        raise ValueError(f"Unknown archetype: {self.archetype!r}")

    def instantiate(self, weights: Weights, rng: RngStream) -> Agent:
        """
        Create a fresh agent for one match.

        Args:
            weights: Payoff weights of the match (unused by current archetypes)
            rng: Random stream; RandomFixedAtStart draws its move here

        Returns:
            New Agent instance
        """
        match self.archetype:
            case Archetype.ALWAYS_DEFECT:
                return DefectorAgent()
            case Archetype.ALWAYS_COLLABORATE:
                return CollaboratorAgent()
            case Archetype.RANDOM_EACH_TURN:
                return RandomAgent(self.probability)
            case Archetype.RANDOM_FIXED_AT_START:
                if draw(rng, self.probability) is Choice.COLLABORATE:
                    return CollaboratorAgent()
                return DefectorAgent()
            case Archetype.TIT_FOR_TAT:
                return TitForTatAgent(opening=Choice.COLLABORATE)
            case Archetype.TIT_FOR_TAT_DEFECT_FIRST:
                return TitForTatAgent(opening=Choice.DEFECT)
            case Archetype.MEAN:
                return MeanAgent()
            case Archetype.PAVLOV:
                return PavlovAgent()
            case Archetype.GRIM:
                return GrimAgent()
        raise ValueError(f"Unknown archetype: {self.archetype!r}")

    def __str__(self) -> str:
        return self.name


# Catalog used by a standard pool, in display order
STANDARD_CATALOG: tuple[StrategyKind, ...] = (
    StrategyKind(Archetype.ALWAYS_DEFECT),
    StrategyKind(Archetype.ALWAYS_COLLABORATE),
    StrategyKind(Archetype.RANDOM_EACH_TURN, 0.5),
    StrategyKind(Archetype.RANDOM_EACH_TURN, 0.9),
    StrategyKind(Archetype.RANDOM_EACH_TURN, 0.1),
    StrategyKind(Archetype.RANDOM_FIXED_AT_START, 0.5),
    StrategyKind(Archetype.RANDOM_FIXED_AT_START, 0.9),
    StrategyKind(Archetype.RANDOM_FIXED_AT_START, 0.1),
    StrategyKind(Archetype.TIT_FOR_TAT),
    StrategyKind(Archetype.TIT_FOR_TAT_DEFECT_FIRST),
    StrategyKind(Archetype.MEAN),
    StrategyKind(Archetype.PAVLOV),
    StrategyKind(Archetype.GRIM),
)


def get_strategy(
    name: str,
    catalog: Sequence[StrategyKind] = STANDARD_CATALOG,
) -> StrategyKind:
    """
    Look up a catalog entry by display name (case-insensitive).

    Raises:
        KeyError: If no entry has that name
    """
    wanted = name.strip().lower()
    for kind in catalog:
        if kind.name.lower() == wanted:
            return kind
    raise KeyError(f"Unknown strategy: {name!r}")
