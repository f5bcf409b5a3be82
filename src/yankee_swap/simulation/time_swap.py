# src/yankee_swap/simulation/time_swap.py
"""
Timing for a single game and for a batch of N games.  Useful for picking
``n_jobs`` before a large run.
"""

import logging
import time

from yankee_swap.simulation.simulation import SwapConfig, simulate_many_games, simulate_one_game

LOGGER = logging.getLogger(__name__)


def measure_sim_times(
    *, n_games: int = 1000, players: int = 10, seed: int = 42, jobs: int = 1
) -> dict[str, float]:
    """Benchmark single-game and multi-game simulation performance.

    Inputs:
        n_games: Number of games to run in the batch benchmark.
        players: Number of players at each table.
        seed: Seed used for both benchmarks.
        jobs: Parallel job count for the batch.

    Returns:
        Elapsed seconds for the single game and the batch, and batch games/sec.
    """

    t0 = time.perf_counter()
    result = simulate_one_game(n_players=players, seed=seed)
    t1 = time.perf_counter()
    single = t1 - t0
    LOGGER.info(
        "Single game benchmark",
        extra={
            "stage": "simulation",
            "benchmark": "single_game",
            "players": players,
            "seed": seed,
            "elapsed_s": single,
            "steals": result.game.n_steals,
        },
    )

    t0 = time.perf_counter()
    simulate_many_games(n_games=n_games, table=SwapConfig(n_players=players), seed=seed, n_jobs=jobs)
    elapsed = time.perf_counter() - t0
    gps = (n_games / elapsed) if elapsed > 0 else 0.0
    LOGGER.info(
        "Batch benchmark: %d games in %.3fs (%.0f games/s)",
        n_games,
        elapsed,
        gps,
        extra={
            "stage": "simulation",
            "benchmark": "batch",
            "players": players,
            "seed": seed,
            "jobs": jobs,
        },
    )
    return {"single_s": single, "batch_s": elapsed, "games_per_sec": gps}


__all__ = ["measure_sim_times"]
