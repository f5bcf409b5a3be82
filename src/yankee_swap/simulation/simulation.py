# src/yankee_swap/simulation/simulation.py
"""Utilities for dealing tables and running Yankee Swap simulations.

Key entry points include:

* ``SwapConfig`` for the table rules shared by every game in a batch.
* ``simulate_one_game`` for a single, fully inspectable game.
* ``simulate_many_games`` for executing batches of games, with optional
  parallelism, returning one tidy row per player per game.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Iterable, List, Mapping, Sequence

import numpy as np
import pandas as pd

from yankee_swap.config import SimConfig
from yankee_swap.errors import InvalidConfiguration
from yankee_swap.game.engine import EventListener, GameResult, SwapGame
from yankee_swap.game.models import Gift, Player
from yankee_swap.simulation.strategies import StrategyKind, parse_strategy, random_strategy
from yankee_swap.utils.parallel import process_map
from yankee_swap.utils.random import make_rng, spawn_seeds

__all__: list[str] = [
    "OUTCOME_COLUMNS",
    "SwapConfig",
    "make_gifts",
    "make_players",
    "simulate_one_game",
    "simulate_many_games",
    "simulate_many_games_from_seeds",
]

OUTCOME_COLUMNS: list[str] = [
    "game",
    "seed",
    "player",
    "position",
    "strategy",
    "gift",
    "value",
    "steals",
]


@dataclass(frozen=True)
class SwapConfig:
    """Table rules for one game; picklable so it can travel to workers.

    Attributes
    ----------
    n_players
        Players (and gifts) at the table.
    max_steals
        Steals after which a gift is locked.
    let_player_one_go_again
        Give the first player a closing turn.
    shuffle_order
        Shuffle the seating before play.  When ``False`` players act in
        creation order, so identity and position coincide.
    kinds
        Strategies players are dealt from; ``None`` means all five.
    """

    n_players: int = 10
    max_steals: int = 3
    let_player_one_go_again: bool = False
    shuffle_order: bool = True
    kinds: tuple[StrategyKind, ...] | None = None

    def __post_init__(self) -> None:
        if self.n_players <= 0:
            raise InvalidConfiguration(f"n_players must be positive, got {self.n_players}")
        if self.max_steals <= 0:
            raise InvalidConfiguration(f"max_steals must be positive, got {self.max_steals}")
        if self.kinds is not None and not self.kinds:
            raise InvalidConfiguration("kinds may not be empty")

    @classmethod
    def from_sim(cls, sim: SimConfig) -> "SwapConfig":
        """Build the table rules from the ``sim`` section of the app config."""
        kinds = (
            tuple(parse_strategy(s) for s in sim.strategies)
            if sim.strategies is not None
            else None
        )
        return cls(
            n_players=sim.n_players,
            max_steals=sim.max_steals,
            let_player_one_go_again=sim.let_player_one_go_again,
            shuffle_order=sim.shuffle_order,
            kinds=kinds,
        )


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------


def make_gifts(n: int, rng: np.random.Generator) -> List[Gift]:
    """Wrap ``n`` gifts with values drawn uniformly from ``[0, 1)``."""
    return [Gift(value=float(rng.random()), index=i + 1) for i in range(n)]


def make_players(
    n: int,
    rng: np.random.Generator,
    *,
    strategies: Sequence[StrategyKind] | None = None,
    kinds: Sequence[StrategyKind] | None = None,
) -> List[Player]:
    """Instantiate ``Player`` objects numbered ``1..n``.

    Parameters
    ----------
    n
        Number of players.
    rng
        Generator used to deal strategies.
    strategies
        Explicit strategy per player, in creation order.  When omitted each
        player is dealt one uniformly at random from ``kinds``.
    kinds
        Strategies to deal from when ``strategies`` is omitted.
    """
    if strategies is not None:
        if len(strategies) != n:
            raise InvalidConfiguration(f"got {len(strategies)} strategies for {n} players")
        return [Player(index=i + 1, strategy=s) for i, s in enumerate(strategies)]
    return [Player(index=i + 1, strategy=random_strategy(rng, kinds)) for i in range(n)]


def _play_game(
    seed: int,
    table: SwapConfig,
    *,
    strategies: Sequence[StrategyKind] | None = None,
    record_events: bool = False,
    listener: EventListener | None = None,
) -> GameResult:
    """Deal and play one game entirely from ``seed``."""
    rng = make_rng(seed)
    gifts = make_gifts(table.n_players, rng)
    players = make_players(table.n_players, rng, strategies=strategies, kinds=table.kinds)
    if table.shuffle_order:
        players = [players[int(i)] for i in rng.permutation(table.n_players)]
    game = SwapGame(
        players,
        gifts,
        max_steals=table.max_steals,
        let_player_one_go_again=table.let_player_one_go_again,
        rng=rng,
        seed=seed,
        record_events=record_events,
        listener=listener,
    )
    return game.play()


def _game_rows(job: tuple[int, int], table: SwapConfig) -> List[Mapping[str, Any]]:
    """Play game ``job = (game_number, seed)`` and return its outcome rows."""
    game_no, seed = job
    result = _play_game(seed, table)
    return [{"game": game_no, **row} for row in result.to_rows()]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def simulate_one_game(
    *,
    n_players: int = 10,
    max_steals: int = 3,
    let_player_one_go_again: bool = False,
    seed: int | None = None,
    strategies: Sequence[StrategyKind] | None = None,
    kinds: Sequence[StrategyKind] | None = None,
    shuffle_order: bool = True,
    record_events: bool = False,
    listener: EventListener | None = None,
) -> GameResult:
    """Play a single game.

    Parameters
    ----------
    n_players, max_steals, let_player_one_go_again, shuffle_order
        Table rules, see :class:`SwapConfig`.
    seed
        Seed controlling every random draw.  ``None`` picks a fresh one,
        which is still reported on the result for replay.
    strategies
        Optional explicit strategy per player in creation order.
    kinds
        Strategies to deal from when ``strategies`` is omitted; all five by
        default.
    record_events, listener
        Forwarded to :class:`~yankee_swap.game.engine.SwapGame`.

    Returns
    -------
    GameResult
        Dataclass returned by :meth:`SwapGame.play`.
    """
    table = SwapConfig(
        n_players=n_players,
        max_steals=max_steals,
        let_player_one_go_again=let_player_one_go_again,
        shuffle_order=shuffle_order,
        kinds=tuple(kinds) if kinds is not None else None,
    )
    if seed is None:
        seed = int(spawn_seeds(1)[0])
    return _play_game(
        seed, table, strategies=strategies, record_events=record_events, listener=listener
    )


def simulate_many_games_from_seeds(
    *,
    seeds: Iterable[int],
    table: SwapConfig,
    n_jobs: int | None = 1,
) -> pd.DataFrame:
    """Run one game per seed and return a tidy ``DataFrame``.

    Parameters
    ----------
    seeds
        Deterministic per-game seeds; game numbers follow their order.
    table
        Rules shared by every game.
    n_jobs
        Worker processes; ``1`` (or ``None``) runs serially.

    Returns
    -------
    pandas.DataFrame
        One row per player per game with :data:`OUTCOME_COLUMNS`.
    """
    jobs = [(game_no, int(s)) for game_no, s in enumerate(seeds, start=1)]
    rows: list[Mapping[str, Any]] = []
    for game_rows in process_map(partial(_game_rows, table=table), jobs, n_jobs=n_jobs):
        rows.extend(game_rows)
    return pd.DataFrame(rows, columns=OUTCOME_COLUMNS)


def simulate_many_games(
    *,
    n_games: int,
    table: SwapConfig,
    seed: int | None = None,
    n_jobs: int | None = 1,
) -> pd.DataFrame:
    """Run many games and return a tidy ``DataFrame`` of outcomes.

    Parameters
    ----------
    n_games
        Number of games to simulate.
    table
        Rules shared by every game.
    seed
        Master seed; per-game seeds are spawned from it.
    n_jobs
        Number of worker processes; ``1`` runs serially.
    """
    if n_games <= 0:
        raise InvalidConfiguration(f"n_games must be positive, got {n_games}")
    seeds = spawn_seeds(n_games, seed=seed)
    return simulate_many_games_from_seeds(seeds=seeds, table=table, n_jobs=n_jobs)
