"""Elo ratings for iterated Prisoner's Dilemma strategies."""

__version__ = "0.1.0"
