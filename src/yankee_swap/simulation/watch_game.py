# src/yankee_swap/simulation/watch_game.py
"""
watch_game.py - run a *single* Yankee Swap game with chatty logging.

It
 • logs the dealt strategy of every seat,
 • logs every open and every steal as it happens, and
 • finishes with the final holdings.

No game logic is duplicated - the real engine runs with an event listener.
"""

from __future__ import annotations

import logging
from typing import Sequence

from yankee_swap.game.engine import GameEvent, GameResult
from yankee_swap.simulation.simulation import simulate_one_game
from yankee_swap.simulation.strategies import StrategyKind

LOGGER = logging.getLogger(__name__)


def _log_event(event: GameEvent) -> None:
    LOGGER.info("%s", event, extra={"stage": "watch", "turn": event.turn})


def holdings_table(result: GameResult) -> str:
    """Return the final holdings as aligned text, one seat per line."""
    lines = [f"{'pos':>3}  {'player':>6}  {'strategy':<20} {'gift':>4}  {'value':>7}  steals"]
    for o in result.outcomes:
        lines.append(
            f"{o.position:>3}  {o.player:>6}  {o.strategy:<20} {o.gift:>4}  {o.value:>7.4f}  {o.steals}"
        )
    return "\n".join(lines)


def watch_game(
    seed: int | None = None,
    *,
    n_players: int = 10,
    max_steals: int = 3,
    let_player_one_go_again: bool = False,
    kinds: Sequence[StrategyKind] | None = None,
) -> GameResult:
    """Run a single game, logging each open and steal at INFO.

    Parameters
    ----------
    seed:
        Optional seed forwarded to :func:`simulate_one_game` to make the game
        deterministic.
    n_players, max_steals, let_player_one_go_again:
        Table rules.
    kinds:
        Strategies the seats are dealt from; all five by default.
    """
    result = simulate_one_game(
        n_players=n_players,
        max_steals=max_steals,
        let_player_one_go_again=let_player_one_go_again,
        seed=seed,
        kinds=kinds,
        listener=_log_event,
    )

    LOGGER.info("\n===== final holdings =====\n%s", holdings_table(result), extra={"stage": "watch"})
    LOGGER.info(
        "seed=%d opens=%d steals=%d longest_chain=%d",
        result.game.seed,
        result.game.n_opens,
        result.game.n_steals,
        result.game.longest_chain,
        extra={"stage": "watch"},
    )
    return result


if __name__ == "__main__":
    # run:  python -m yankee_swap.simulation.watch_game
    watch_game()
