# src/yankee_swap/cli/main.py
"""
Command line interface for the :mod:`yankee_swap` package.

``yankee-swap run 10 10000 3 false`` takes its positionals in the
classic order (players, iterations, max steals, go-again flag); every
positional is optional and falls back to the configuration.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

import yaml  # type: ignore[import-untyped]

from yankee_swap.config import (
    AppConfig,
    apply_dot_overrides,
    load_app_config,
    parse_bool,
    validate_sim_config,
)
from yankee_swap.errors import InvalidConfiguration
from yankee_swap.simulation import runner
from yankee_swap.simulation.strategies import parse_strategy
from yankee_swap.simulation.time_swap import measure_sim_times
from yankee_swap.simulation.watch_game import watch_game
from yankee_swap.utils.logging import configure_logging
from yankee_swap.utils.writer import write_text_atomic

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _bool_arg(value: str) -> bool:
    try:
        return parse_bool(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser."""
    defaults = AppConfig().sim
    parser = argparse.ArgumentParser(prog="yankee-swap")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override configuration values, e.g. sim.max_steals=2",
    )
    parser.add_argument("--log-level", default="INFO", help="Root logging level")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    parser.add_argument(
        "--narrate",
        action="store_true",
        help="Log every open and steal of every game (very verbose for large runs)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # run
    run_parser = sub.add_parser("run", help="Simulate many games and report averages")
    run_parser.add_argument(
        "players",
        type=int,
        nargs="?",
        help=f"Players per game (default: {defaults.n_players})",
    )
    run_parser.add_argument(
        "iterations",
        type=int,
        nargs="?",
        help=f"Games to simulate (default: {defaults.n_games})",
    )
    run_parser.add_argument(
        "max_steals",
        type=int,
        nargs="?",
        help=f"Steals before a gift is locked (default: {defaults.max_steals})",
    )
    run_parser.add_argument(
        "go_again",
        type=_bool_arg,
        nargs="?",
        help="Let the first player take a closing turn "
        f"(default: {str(defaults.let_player_one_go_again).lower()})",
    )
    run_parser.add_argument("--seed", type=int, default=None, help="Master seed")
    run_parser.add_argument("--jobs", type=int, default=None, help="Parallel worker processes")
    run_parser.add_argument(
        "--no-shuffle",
        action="store_true",
        help="Seat players in creation order instead of shuffling",
    )

    # watch
    watch_parser = sub.add_parser("watch", help="Log every open and steal of one game")
    watch_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic play")
    watch_parser.add_argument(
        "--players", type=int, default=None, help=f"Players (default: {defaults.n_players})"
    )
    watch_parser.add_argument(
        "--max-steals",
        type=int,
        default=None,
        help=f"Steals before a gift is locked (default: {defaults.max_steals})",
    )
    watch_parser.add_argument("--go-again", action="store_true")

    # time (benchmark simulation throughput)
    time_parser = sub.add_parser("time", help="Benchmark simulation throughput")
    time_parser.add_argument("--players", type=int, default=defaults.n_players)
    time_parser.add_argument(
        "--n-games",
        dest="n_games",
        type=int,
        default=1000,
        help="Number of games to run (default: 1000)",
    )
    time_parser.add_argument("--jobs", type=int, default=1, help="Parallel jobs (default: 1)")
    time_parser.add_argument("--seed", type=int, default=42, help="Seed (default: 42)")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _stringify_paths(obj: object) -> object:
    """Recursively convert :class:`pathlib.Path` instances to strings."""
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _stringify_paths(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_stringify_paths(v) for v in obj]
    return obj


def _write_active_config(cfg: AppConfig) -> None:
    """Persist the resolved configuration alongside simulation results."""
    resolved_yaml = yaml.safe_dump(_stringify_paths(dataclasses.asdict(cfg)), sort_keys=True)
    write_text_atomic(resolved_yaml, cfg.active_config_path)


def _load_config(args: argparse.Namespace) -> AppConfig:
    """Config file (if any), then ``--set`` overrides."""
    cfg = load_app_config(args.config) if args.config is not None else AppConfig()
    return apply_dot_overrides(cfg, list(args.overrides or []))


def _apply_run_args(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Let the positional arguments and run flags win over the config."""
    if args.players is not None:
        cfg.sim.n_players = args.players
    if args.iterations is not None:
        cfg.sim.n_games = args.iterations
    if args.max_steals is not None:
        cfg.sim.max_steals = args.max_steals
    if args.go_again is not None:
        cfg.sim.let_player_one_go_again = args.go_again
    if args.seed is not None:
        cfg.sim.seed = args.seed
    if args.jobs is not None:
        cfg.sim.n_jobs = args.jobs
    if args.no_shuffle:
        cfg.sim.shuffle_order = False
    return cfg


def _apply_watch_args(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.players is not None:
        cfg.sim.n_players = args.players
    if args.max_steals is not None:
        cfg.sim.max_steals = args.max_steals
    if args.go_again:
        cfg.sim.let_player_one_go_again = True
    return cfg


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``yankee-swap`` CLI dispatcher."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file, narrate=args.narrate)

    LOGGER.info(
        "CLI arguments parsed",
        extra={
            "stage": "cli",
            "command": args.command,
            "config_path": str(args.config) if args.config is not None else None,
            "overrides": list(args.overrides or []),
            "log_level": args.log_level,
            "narrate": args.narrate,
        },
    )

    if args.command == "run":
        cfg = _apply_run_args(_load_config(args), args)
        try:
            validate_sim_config(cfg.sim)
        except InvalidConfiguration as exc:
            parser.error(str(exc))

        _write_active_config(cfg)
        LOGGER.info(
            "Dispatching run command",
            extra={
                "stage": "cli",
                "command": "run",
                "seed": cfg.sim.seed,
                "n_players": cfg.sim.n_players,
                "n_games": cfg.sim.n_games,
                "results_dir": str(cfg.results_dir),
            },
        )
        summary = runner.run_simulation(cfg)
        LOGGER.info("Final report\n%s", summary.report, extra={"stage": "cli", "command": "run"})
    elif args.command == "watch":
        cfg = _apply_watch_args(_load_config(args), args)
        try:
            validate_sim_config(cfg.sim)
        except InvalidConfiguration as exc:
            parser.error(str(exc))
        kinds = (
            [parse_strategy(s) for s in cfg.sim.strategies]
            if cfg.sim.strategies is not None
            else None
        )
        LOGGER.info(
            "Dispatching watch_game",
            extra={"stage": "cli", "command": "watch", "seed": args.seed},
        )
        watch_game(
            seed=args.seed,
            n_players=cfg.sim.n_players,
            max_steals=cfg.sim.max_steals,
            let_player_one_go_again=cfg.sim.let_player_one_go_again,
            kinds=kinds,
        )
    elif args.command == "time":
        LOGGER.info(
            "Dispatching measure_sim_times",
            extra={
                "stage": "cli",
                "command": "time",
                "players": args.players,
                "n_games": args.n_games,
                "jobs": args.jobs,
                "seed": args.seed,
            },
        )
        measure_sim_times(
            n_games=args.n_games, players=args.players, seed=args.seed, jobs=args.jobs
        )
    else:  # pragma: no cover - argparse enforces valid choices
        parser.error(f"Unknown command {args.command}")


if __name__ == "__main__":  # pragma: no cover
    main()
