"""
Payoff Model for the Iterated Prisoner's Dilemma

Maps a pair of simultaneous choices to the points each side scores.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

Payoff: TypeAlias = tuple[int, int]

# "<dd>,<dcWin>-<dcLose>,<cc>", e.g. "2,3-0,1"
WEIGHTS_PATTERN = re.compile(r"^(\d+),(\d+)-(\d+),(\d+)")
WEIGHTS_FORMAT = "dd,dcw-dcl,cc"


class Choice(Enum):
    """A single move in one turn."""

    DEFECT = "defect"
    COLLABORATE = "collaborate"

    @classmethod
    def from_bool(cls, collaborate: bool) -> "Choice":
        """True maps to COLLABORATE, False to DEFECT."""
        return cls.COLLABORATE if collaborate else cls.DEFECT


@dataclass(frozen=True)
class Weights:
    """
    Points awarded for each combination of choices.

    Attributes:
        defect_defect: Payoff to each side when both defect
        defect_collab: (payoff to the defector, payoff to the collaborator)
        collab_collab: Payoff to each side when both collaborate
    """

    defect_defect: int = 2
    defect_collab: Payoff = (3, 0)
    collab_collab: int = 1

    def outcome(self, choice_a: Choice, choice_b: Choice) -> Payoff:
        """
        Score one turn.

        Args:
            choice_a: Move of the first side
            choice_b: Move of the second side

        Returns:
            Tuple of (payoff_a, payoff_b)
        """
        if choice_a is Choice.DEFECT and choice_b is Choice.DEFECT:
            return (self.defect_defect, self.defect_defect)
        if choice_a is Choice.DEFECT:
            return (self.defect_collab[0], self.defect_collab[1])
        if choice_b is Choice.DEFECT:
            return (self.defect_collab[1], self.defect_collab[0])
        return (self.collab_collab, self.collab_collab)

    def max_diff(self) -> int:
        """
        Largest payoff gap a single turn can produce.

        Used as the normalization denominator for match scores, so a zero
        value makes scores undefined. See validate().
        """
        return abs(self.defect_collab[0] - self.defect_collab[1])

    def validate(self) -> None:
        """
        Check that the weights can be used to normalize match scores.

        Raises:
            ValueError: If any value is not a non-negative integer or
                defecting gives no edge
        """
        if not isinstance(self.defect_collab, (tuple, list)) or len(self.defect_collab) != 2:
            raise ValueError(
                f"defect_collab must be a pair, got {self.defect_collab!r}"
            )
        named = {
            "defect_defect": self.defect_defect,
            "defect_collab[0]": self.defect_collab[0],
            "defect_collab[1]": self.defect_collab[1],
            "collab_collab": self.collab_collab,
        }
        for name, value in named.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Weight {name} must be an integer, got {value!r}")
        values = tuple(named.values())
        if any(v < 0 for v in values):
            raise ValueError(f"Weights must be non-negative: {self}")
        if self.max_diff() == 0:
            raise ValueError(
                "Degenerate weights: defect/collaborate payoffs are equal "
                f"({self.defect_collab[0]}), scores cannot be normalized"
            )

    def to_string(self) -> str:
        """Format the weights in the command-line notation."""
        return (
            f"{self.defect_defect},{self.defect_collab[0]}-"
            f"{self.defect_collab[1]},{self.collab_collab}"
        )

    def to_dict(self) -> dict:
        return {
            "defect_defect": self.defect_defect,
            "defect_collab": list(self.defect_collab),
            "collab_collab": self.collab_collab,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Weights":
        """Build weights from a mapping, e.g. a YAML section."""
        data = dict(data)
        if "defect_collab" in data:
            data["defect_collab"] = tuple(data["defect_collab"])
        unknown = set(data) - {"defect_defect", "defect_collab", "collab_collab"}
        if unknown:
            raise ValueError(f"Unknown weight fields: {', '.join(sorted(unknown))}")
        return cls(**data)


def outcome(weights: Weights, choice_a: Choice, choice_b: Choice) -> Payoff:
    """Score one turn under the given weights."""
    return weights.outcome(choice_a, choice_b)


def max_diff(weights: Weights) -> int:
    """Largest single-turn payoff gap under the given weights."""
    return weights.max_diff()


def parse_weights(text: str) -> Weights:
    """
    Parse weights written as ``dd,dcw-dcl,cc``.

    Example: "2,3-0,1" gives dd=2, dc=(3, 0), cc=1.

    Raises:
        ValueError: If the string does not match the format
    """
    match = WEIGHTS_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(
            f"The weights must be in the format `{WEIGHTS_FORMAT}`, got {text!r}"
        )
    dd, dc_win, dc_lose, cc = (int(g) for g in match.groups())
    return Weights(
        defect_defect=dd,
        defect_collab=(dc_win, dc_lose),
        collab_collab=cc,
    )
