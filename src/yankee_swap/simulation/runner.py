"""High level simulation runner using configuration objects.

The :func:`run_simulation` function is the whole outer loop: it validates
an :class:`AppConfig`, plays ``sim.n_games`` independent games, writes the
per-player outcome rows and the two summary tables under the results
directory and returns them together with the rendered report.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
import pyarrow as pa

from yankee_swap.analysis.summary import format_report, positional_averages, strategy_averages
from yankee_swap.config import AppConfig, validate_sim_config
from yankee_swap.simulation.simulation import SwapConfig, simulate_many_games
from yankee_swap.utils.writer import write_csv_atomic, write_parquet_atomic, write_text_atomic

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunSummary:
    """What a finished run produced."""

    n_games: int
    n_players: int
    outcomes: pd.DataFrame
    positional: pd.DataFrame
    strategies: pd.DataFrame
    report: str
    outcomes_path: Path
    report_path: Path


def run_simulation(cfg: AppConfig) -> RunSummary:
    """Play every configured game and persist the results.

    Raises
    ------
    InvalidConfiguration
        Before any game is played, for unusable ``sim`` settings.
    """
    sim = validate_sim_config(cfg.sim)
    table = SwapConfig.from_sim(sim)

    LOGGER.info(
        "Planned: %d games of %d players, max_steals=%d, go_again=%s",
        sim.n_games,
        sim.n_players,
        sim.max_steals,
        sim.let_player_one_go_again,
        extra={
            "stage": "simulation",
            "seed": sim.seed,
            "n_jobs": sim.n_jobs,
            "shuffle_order": sim.shuffle_order,
            "results_dir": str(cfg.results_dir),
        },
    )

    t0 = time.perf_counter()
    outcomes = simulate_many_games(
        n_games=sim.n_games, table=table, seed=sim.seed, n_jobs=sim.n_jobs
    )
    elapsed = time.perf_counter() - t0
    LOGGER.info(
        "Simulation finished in %.2fs (%.0f games/s)",
        elapsed,
        sim.n_games / elapsed if elapsed > 0 else 0.0,
        extra={"stage": "simulation", "rows": len(outcomes)},
    )

    positional = positional_averages(outcomes)
    strategies = strategy_averages(outcomes)
    report = format_report(positional, strategies)

    write_parquet_atomic(pa.Table.from_pandas(outcomes, preserve_index=False), cfg.outcomes_path)
    write_csv_atomic(positional, cfg.positional_stats_path)
    write_csv_atomic(strategies, cfg.strategy_stats_path)
    write_text_atomic(report, cfg.report_path)
    LOGGER.info(
        "Results written",
        extra={
            "stage": "simulation",
            "outcomes_path": str(cfg.outcomes_path),
            "report_path": str(cfg.report_path),
        },
    )

    return RunSummary(
        n_games=sim.n_games,
        n_players=sim.n_players,
        outcomes=outcomes,
        positional=positional,
        strategies=strategies,
        report=report,
        outcomes_path=cfg.outcomes_path,
        report_path=cfg.report_path,
    )


__all__ = ["RunSummary", "run_simulation"]
