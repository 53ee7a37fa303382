"""
ELO Rating Pool

Keeps one rating per strategy and updates it after every randomly paired
match, using a tanh expectation of the rating gap.
"""

from dataclasses import dataclass, field, fields
import logging
import math
import numbers
from typing import Sequence

from ..game import Weights
from .agents import RngStream, StrategyKind, STANDARD_CATALOG
from .arena import play_match

logger = logging.getLogger(__name__)

# Ratings are unsigned 64-bit values; updates saturate at these bounds
RATING_MIN = 0
RATING_MAX = 2**64 - 1

DEFAULT_STARTING_POINTS = 700
DEFAULT_SCALE = 100.0
# Library default. The command line uses CLI_K_FACTOR instead.
DEFAULT_K_FACTOR = 16.0
CLI_K_FACTOR = 32.0
DEFAULT_MIN_TURNS = 100
DEFAULT_MAX_TURNS = 200


def expected_score(rating_a: float, rating_b: float, scale: float) -> float:
    """
    Expected score for A against B, in (-1, 1).

    Args:
        rating_a: Rating of A
        rating_b: Rating of B
        scale: Rating gap at which A is expected to clearly dominate

    Returns:
        tanh of the scaled rating difference
    """
    return math.tanh((rating_a - rating_b) / scale)


def saturating_add(rating: int, delta: int) -> int:
    """Add delta to a rating, clamping to [RATING_MIN, RATING_MAX]."""
    return max(RATING_MIN, min(RATING_MAX, rating + delta))


@dataclass
class RatingEntry:
    """A strategy and its current rating."""

    kind: StrategyKind
    rating: int


@dataclass
class EloPoolConfig:
    """Configuration for an EloPool."""

    weights: Weights = field(default_factory=Weights)
    starting_points: int = DEFAULT_STARTING_POINTS
    scale: float = DEFAULT_SCALE
    k_factor: float = DEFAULT_K_FACTOR
    min_turns: int = DEFAULT_MIN_TURNS
    max_turns: int = DEFAULT_MAX_TURNS

    def validate(self) -> None:
        """
        Reject configurations that would make a pool step undefined.

        Raises:
            ValueError: On mistyped values, degenerate weights, bad turn
                range or bad scale
        """
        if not isinstance(self.weights, Weights):
            raise ValueError(f"weights must be Weights, got {self.weights!r}")
        for name in ("starting_points", "min_turns", "max_turns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ("scale", "k_factor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
        self.weights.validate()
        if self.min_turns < 1:
            raise ValueError(f"min_turns must be at least 1, got {self.min_turns}")
        if self.max_turns < self.min_turns:
            raise ValueError(
                f"max_turns ({self.max_turns}) must not be below "
                f"min_turns ({self.min_turns})"
            )
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if not RATING_MIN <= self.starting_points <= RATING_MAX:
            raise ValueError(
                f"starting_points out of range: {self.starting_points}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "EloPoolConfig":
        """Build a config from a mapping; missing keys keep their defaults."""
        data = dict(data)
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown pool settings: {', '.join(sorted(unknown))}")
        if "weights" in data:
            weights = data["weights"]
            data["weights"] = weights if isinstance(weights, Weights) else Weights.from_dict(weights)
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "weights": self.weights.to_dict(),
            "starting_points": self.starting_points,
            "scale": self.scale,
            "k_factor": self.k_factor,
            "min_turns": self.min_turns,
            "max_turns": self.max_turns,
        }


class EloPool:
    """
    Pool of strategies rated against each other.

    Each step pairs two distinct strategies uniformly at random, plays a
    match of random length and moves both ratings by the same amount in
    opposite directions.
    """

    def __init__(
        self,
        weights: Weights | None = None,
        min_turns: int = DEFAULT_MIN_TURNS,
        max_turns: int = DEFAULT_MAX_TURNS,
        starting_points: int = DEFAULT_STARTING_POINTS,
        scale: float = DEFAULT_SCALE,
        k_factor: float = DEFAULT_K_FACTOR,
        catalog: Sequence[StrategyKind] = STANDARD_CATALOG,
    ):
        """
        Initialize the pool.

        Args:
            weights: Payoff weights (default 2,3-0,1)
            min_turns: Shortest match length (inclusive)
            max_turns: Longest match length (inclusive)
            starting_points: Initial rating of every strategy
            scale: Rating gap implying near-certain dominance
            k_factor: Rating adjustment factor (higher = more volatile)
            catalog: Strategies to rate, one entry each

        Raises:
            ValueError: If the configuration is invalid
        """
        config = EloPoolConfig(
            weights=weights if weights is not None else Weights(),
            starting_points=starting_points,
            scale=scale,
            k_factor=k_factor,
            min_turns=min_turns,
            max_turns=max_turns,
        )
        config.validate()

        self.weights = config.weights
        self.min_turns = min_turns
        self.max_turns = max_turns
        self.scale = float(scale)
        self.k_factor = float(k_factor)
        self.entries = [RatingEntry(kind, starting_points) for kind in catalog]
        self.matches_played = 0

        logger.info(
            f"Rating pool with {len(self.entries)} strategies "
            f"(weights {self.weights.to_string()}, scale {self.scale}, "
            f"k {self.k_factor}, turns {min_turns}-{max_turns})"
        )

    @classmethod
    def from_config(
        cls,
        config: EloPoolConfig,
        catalog: Sequence[StrategyKind] | None = None,
    ) -> "EloPool":
        """Create a pool from an EloPoolConfig."""
        return cls(
            weights=config.weights,
            min_turns=config.min_turns,
            max_turns=config.max_turns,
            starting_points=config.starting_points,
            scale=config.scale,
            k_factor=config.k_factor,
            catalog=STANDARD_CATALOG if catalog is None else catalog,
        )

    def _pick_pair(self, rng: RngStream) -> tuple[int, int]:
        n = len(self.entries)
        i1 = int(rng.integers(n))
        i2 = int(rng.integers(n))
        while i1 == i2:
            i2 = int(rng.integers(n))
        return i1, i2

    def sample_turns(self, rng: RngStream) -> int:
        """Draw a match length uniformly from [min_turns, max_turns]."""
        return int(rng.integers(self.min_turns, self.max_turns, endpoint=True))

    def step(self, rng: RngStream) -> None:
        """
        Play one randomly paired match and update both ratings.

        Does nothing when the pool holds fewer than two strategies.

        Args:
            rng: Random stream, consumed for pairing, match length and play
        """
        if len(self.entries) < 2:
            logger.debug("Fewer than two strategies, nothing to play")
            return

        i1, i2 = self._pick_pair(rng)
        entry1, entry2 = self.entries[i1], self.entries[i2]
        turns = self.sample_turns(rng)

        score = play_match(entry1.kind, entry2.kind, self.weights, turns, rng)

        expected = expected_score(entry1.rating, entry2.rating, self.scale)
        correction = round(self.k_factor * (score - expected))

        entry1.rating = saturating_add(entry1.rating, correction)
        entry2.rating = saturating_add(entry2.rating, -correction)
        self.matches_played += 1

        logger.debug(
            f"{entry1.kind.name} vs {entry2.kind.name} ({turns} turns): "
            f"score {score:+.3f}, expected {expected:+.3f}, correction {correction:+d}"
        )

    def ratings(self) -> list[tuple[StrategyKind, int]]:
        """Snapshot of (strategy, rating) pairs in catalog order."""
        return [(entry.kind, entry.rating) for entry in self.entries]

    def standings(self) -> list[tuple[StrategyKind, int]]:
        """Snapshot sorted by rating, highest first."""
        return sorted(self.ratings(), key=lambda x: x[1], reverse=True)

    def get_rating(self, kind: StrategyKind) -> int:
        """Current rating of a strategy in the pool."""
        for entry in self.entries:
            if entry.kind == kind:
                return entry.rating
        raise KeyError(f"{kind.name} is not in the pool")

    def __len__(self) -> int:
        return len(self.entries)
