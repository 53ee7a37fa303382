"""
Tournament Runner

Drives an EloPool: seeds the random stream, calls step() in a loop and
formats the standings for the console.
"""

import logging
import sys
import time

import numpy as np
from tqdm import tqdm

from ..evaluation.agents import RngStream
from ..evaluation.elo import EloPool

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> RngStream:
    """
    Create the random stream for a run.

    Args:
        seed: Integer seed for a reproducible run, None for OS entropy

    Returns:
        numpy Generator
    """
    if seed is None:
        logger.debug("Seeding random stream from OS entropy")
    else:
        logger.debug(f"Random seed: {seed}")
    return np.random.default_rng(seed)


def run_for(pool: EloPool, rng: RngStream, seconds: float) -> int:
    """
    Step the pool until the wall-clock budget is spent.

    Returns:
        Number of steps played
    """
    deadline = time.monotonic() + seconds
    steps = 0
    while time.monotonic() < deadline:
        pool.step(rng)
        steps += 1
    return steps


def run_steps(
    pool: EloPool,
    rng: RngStream,
    steps: int,
    progress: bool = False,
) -> None:
    """Step the pool a fixed number of times."""
    iterator = range(steps)
    if progress:
        iterator = tqdm(
            iterator,
            total=steps,
            desc="Matches",
            unit="match",
            file=sys.stderr,  # Keep stdout for standings
        )
    for _ in iterator:
        pool.step(rng)


def format_standings(pool: EloPool) -> str:
    """One line per strategy, highest rating first: name, rating, description."""
    return "\n".join(
        f"{kind.name}\t{rating}\t({kind.description})"
        for kind, rating in pool.standings()
    )
