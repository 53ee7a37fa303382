"""Prisoner's Dilemma choices and payoff weights."""

from .payoff import (
    Choice,
    Payoff,
    Weights,
    WEIGHTS_FORMAT,
    outcome,
    max_diff,
    parse_weights,
)

__all__ = [
    "Choice",
    "Payoff",
    "Weights",
    "WEIGHTS_FORMAT",
    "outcome",
    "max_diff",
    "parse_weights",
]
