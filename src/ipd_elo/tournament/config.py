"""
Tournament Configuration

Configuration dataclasses for the continuously running rating tournament.
"""

from dataclasses import dataclass, field
import numbers
from pathlib import Path

import yaml

from ..evaluation.agents import STANDARD_CATALOG, StrategyKind, get_strategy
from ..evaluation.elo import CLI_K_FACTOR, EloPoolConfig


def _default_pool() -> EloPoolConfig:
    # The tournament front end rates with the command-line k-factor
    return EloPoolConfig(k_factor=CLI_K_FACTOR)


@dataclass
class TournamentConfig:
    """Configuration for tournament execution."""

    # Rating pool settings
    pool: EloPoolConfig = field(default_factory=_default_pool)

    # Seconds between standings refreshes
    refresh: float = 2.0

    # Random seed for reproducibility (None = OS entropy)
    seed: int | None = None

    # Run this many steps and stop (None = run until interrupted)
    steps: int | None = None

    # Strategy names to rate (None = whole standard catalog)
    strategies: list[str] | None = None

    def validate(self) -> None:
        """
        Raises:
            ValueError: If any setting is mistyped or out of range
        """
        self.pool.validate()
        if isinstance(self.refresh, bool) or not isinstance(self.refresh, numbers.Real):
            raise ValueError(f"refresh must be a number, got {self.refresh!r}")
        for name in ("seed", "steps"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.refresh < 0:
            raise ValueError(f"refresh must not be negative, got {self.refresh}")
        if self.steps is None and self.refresh == 0:
            raise ValueError("refresh must be positive when running until interrupted")
        if self.steps is not None and self.steps < 0:
            raise ValueError(f"steps must not be negative, got {self.steps}")
        if self.strategies is not None:
            if not isinstance(self.strategies, list) or not all(
                isinstance(name, str) for name in self.strategies
            ):
                raise ValueError(
                    f"strategies must be a list of names, got {self.strategies!r}"
                )
            if len(self.strategies) < 2:
                raise ValueError("Need at least 2 strategies for a tournament")

    def catalog(self) -> list[StrategyKind]:
        """
        Resolve the strategy names against the standard catalog.

        Raises:
            ValueError: If a name is not in the catalog
        """
        if self.strategies is None:
            return list(STANDARD_CATALOG)
        kinds = []
        for name in self.strategies:
            try:
                kinds.append(get_strategy(name))
            except KeyError:
                raise ValueError(f"Unknown strategy: {name!r}")
        return kinds

    @classmethod
    def from_dict(cls, data: dict | None) -> "TournamentConfig":
        data = dict(data or {})
        pool_data = dict(data.pop("pool", None) or {})
        pool_data.setdefault("k_factor", CLI_K_FACTOR)
        unknown = set(data) - {"refresh", "seed", "steps", "strategies"}
        if unknown:
            raise ValueError(
                f"Unknown tournament settings: {', '.join(sorted(unknown))}"
            )
        return cls(pool=EloPoolConfig.from_dict(pool_data), **data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TournamentConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = {
            "pool": self.pool.to_dict(),
            "refresh": self.refresh,
            "seed": self.seed,
            "steps": self.steps,
            "strategies": self.strategies,
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
