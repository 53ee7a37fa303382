"""
Tournament CLI

Runs the rating pool forever, redrawing the standings every few seconds:

    ipd-elo --weights 2,3-0,1 --k-factor 32 --refresh 2

Or for a fixed number of matches:

    ipd-elo --seed 42 --steps 10000
"""

import logging

import click

from ..evaluation.agents import STANDARD_CATALOG
from ..evaluation.elo import EloPool
from ..game import WEIGHTS_FORMAT, parse_weights
from .config import TournamentConfig
from .runner import format_standings, make_rng, run_for, run_steps

logger = logging.getLogger(__name__)


def _parse_weights_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_weights(value)
    except ValueError:
        raise click.BadParameter(
            f"the weights must be in the format `{WEIGHTS_FORMAT}`, got {value!r}"
        )


def _apply_overrides(config: TournamentConfig, **overrides) -> TournamentConfig:
    """Overwrite config values with every option given on the command line."""
    pool_fields = ("weights", "starting_points", "scale", "k_factor", "min_turns", "max_turns")
    for name, value in overrides.items():
        if value is None:
            continue
        if name in pool_fields:
            setattr(config.pool, name, value)
        else:
            setattr(config, name, value)
    return config


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file. Command-line options override it.",
)
@click.option(
    "--weights",
    "-w",
    callback=_parse_weights_option,
    default=None,
    help=f"Payoff weights as `{WEIGHTS_FORMAT}` (default: 2,3-0,1).",
)
@click.option("--starting-pts", "-p", type=click.IntRange(min=0), default=None, help="Starting rating (default: 700).")
@click.option("--scale", "-s", type=float, default=None, help="Rating gap implying dominance (default: 100).")
@click.option("--k-factor", "-k", type=float, default=None, help="Rating adjustment factor (default: 32).")
@click.option("--min-turns", "-t", type=click.IntRange(min=1), default=None, help="Shortest match (default: 100).")
@click.option("--max-turns", "-T", type=click.IntRange(min=1), default=None, help="Longest match (default: 200).")
@click.option("--refresh", "-r", type=click.FloatRange(min=0), default=None, help="Refresh time in seconds (default: 2).")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility.")
@click.option(
    "--steps",
    type=click.IntRange(min=0),
    default=None,
    help="Play this many matches, print the standings once and exit.",
)
@click.option(
    "--strategies",
    "-S",
    default=None,
    help="Comma-separated strategy names to rate (default: all).",
)
@click.option("--list-strategies", is_flag=True, help="List all strategies and exit.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def main(
    config_path: str | None,
    weights,
    starting_pts: int | None,
    scale: float | None,
    k_factor: float | None,
    min_turns: int | None,
    max_turns: int | None,
    refresh: float | None,
    seed: int | None,
    steps: int | None,
    strategies: str | None,
    list_strategies: bool,
    verbose: bool,
) -> None:
    """Rate Prisoner's Dilemma strategies in an endless random tournament."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if list_strategies:
        for kind in STANDARD_CATALOG:
            click.echo(f"{kind.name}\t({kind.description})")
        return

    if config_path is not None:
        logger.info(f"Loading configuration from {config_path}")
        try:
            config = TournamentConfig.from_yaml(config_path)
        except (ValueError, TypeError) as e:
            raise click.BadParameter(str(e), param_hint="--config")
    else:
        config = TournamentConfig()

    config = _apply_overrides(
        config,
        weights=weights,
        starting_points=starting_pts,
        scale=scale,
        k_factor=k_factor,
        min_turns=min_turns,
        max_turns=max_turns,
        refresh=refresh,
        seed=seed,
        steps=steps,
        strategies=[s.strip() for s in strategies.split(",")] if strategies else None,
    )
    try:
        config.validate()
        catalog = config.catalog()
    except (ValueError, TypeError) as e:
        raise click.UsageError(str(e))

    pool = EloPool.from_config(config.pool, catalog=catalog)
    rng = make_rng(config.seed)

    if config.steps is not None:
        run_steps(pool, rng, config.steps, progress=verbose)
        click.echo(format_standings(pool))
        return

    try:
        while True:
            click.clear()
            click.echo(format_standings(pool))
            played = run_for(pool, rng, config.refresh)
            logger.debug(f"Played {played} matches ({pool.matches_played} total)")
    except KeyboardInterrupt:
        logger.info("Tournament interrupted by user")


if __name__ == "__main__":
    main()
