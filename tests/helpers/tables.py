"""Hand-built tables for engine and strategy tests."""

from __future__ import annotations

from typing import Sequence

from helpers.rng import SeqGen

from yankee_swap.game.engine import SwapGame
from yankee_swap.game.models import Gift, Player
from yankee_swap.simulation.strategies import StrategyKind


def make_table(
    values: Sequence[float],
    strategies: Sequence[StrategyKind],
    *,
    max_steals: int = 3,
    go_again: bool = False,
    seq: Sequence[int] = (0,),
    record_events: bool = True,
) -> SwapGame:
    """Players ``1..n`` seated in creation order over gifts ``1..n``.

    With the default ``seq`` gifts come out of the pool in index order.
    """
    gifts = [Gift(value=v, index=i + 1) for i, v in enumerate(values)]
    players = [Player(index=i + 1, strategy=s) for i, s in enumerate(strategies)]
    return SwapGame(
        players,
        gifts,
        max_steals=max_steals,
        let_player_one_go_again=go_again,
        rng=SeqGen(seq),
        record_events=record_events,
    )


def deal(game: SwapGame, holdings: dict[int, tuple[int, int]]) -> SwapGame:
    """Place gifts by hand: ``{player_index: (gift_index, steals)}``.

    Dealt gifts leave the unopened pool.
    """
    by_index = {g.index: g for g in game.gifts}
    for player in game.players:
        if player.index in holdings:
            gift_index, steals = holdings[player.index]
            gift = by_index[gift_index]
            gift.steals = steals
            player.gift = gift
            game.unopened.remove(gift)
    return game
