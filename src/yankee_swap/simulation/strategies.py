# src/yankee_swap/simulation/strategies.py
"""Decision rules for Yankee Swap players.

Provides the closed :class:`StrategyKind` enum, one decision function per
kind, and helpers that assign or parse strategies for the simulation
pipeline.

Every decision takes the acting player and the running game and returns the
player who has to act next (the victim of a steal) or ``None`` when the
chain is over.  The engine loops on that return value.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Sequence

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing only
    from yankee_swap.game.engine import SwapGame
    from yankee_swap.game.models import Player

__all__: list[str] = [
    "StrategyKind",
    "apply_strategy",
    "best_eligible",
    "always_open",
    "always_steal",
    "steal_on_coin_flip",
    "steal_above_mean",
    "steal_nearly_dead_gift",
    "random_strategy",
    "parse_strategy",
]


class StrategyKind(Enum):
    """The five fixed strategies a player can be dealt."""

    ALWAYS_OPEN = "AlwaysOpen"
    ALWAYS_STEAL = "AlwaysSteal"
    STEAL_ON_COIN_FLIP = "StealOnCoinFlip"
    STEAL_ABOVE_MEAN = "StealAboveMean"
    STEAL_NEARLY_DEAD_GIFT = "StealNearlyDeadGift"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


Decision = Callable[["Player", "SwapGame"], "Player | None"]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def best_eligible(
    current: Player,
    game: SwapGame,
    *,
    predicate: Callable[[Player], bool] | None = None,
) -> Player | None:
    """Return the eligible player holding the most valuable gift.

    Players are scanned in turn order and a later candidate only replaces
    the running best when its value is strictly higher, so ties go to the
    earliest seat.

    Parameters
    ----------
    current
        Player looking for something to steal.
    game
        Running game supplying the eligibility rule.
    predicate
        Optional extra filter applied on top of eligibility.
    """
    best: Player | None = None
    for candidate in game.players:
        if not game.is_eligible(candidate, current):
            continue
        if predicate is not None and not predicate(candidate):
            continue
        if best is None or candidate.gift.value > best.gift.value:  # type: ignore[union-attr]
            best = candidate
    return best


def _steal(current: Player, victim: Player, game: SwapGame) -> Player:
    """Steal from ``victim`` and hand them the next turn."""
    game.steal_gift(current, victim)
    return victim


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


def always_open(current: Player, game: SwapGame) -> Player | None:
    """Open while wrapped gifts remain, then steal from a random eligible player."""
    if current.gift is not None:
        return None
    if game.unopened:
        game.open_gift(current)
        return None

    candidates = game.eligible_candidates(current)
    if not candidates:
        return None
    victim = candidates[int(game.rng.integers(len(candidates)))]
    return _steal(current, victim, game)


def always_steal(current: Player, game: SwapGame) -> Player | None:
    """Steal the best available gift; open one if nothing can be taken."""
    victim = best_eligible(current, game)
    if victim is not None:
        return _steal(current, victim, game)
    game.open_gift(current)
    return None


def steal_on_coin_flip(current: Player, game: SwapGame) -> Player | None:
    """Heads: play :func:`always_steal`.  Tails: open a gift."""
    if int(game.rng.integers(0, 2)) == 0:
        return always_steal(current, game)
    game.open_gift(current)
    return None


def steal_above_mean(current: Player, game: SwapGame) -> Player | None:
    """Steal only when the best takeable gift beats the table average."""
    mean = game.holders_mean()
    best = best_eligible(current, game)
    if best is not None and best.gift.value > mean:  # type: ignore[union-attr]
        return always_steal(current, game)
    game.open_gift(current)
    return None


def steal_nearly_dead_gift(current: Player, game: SwapGame) -> Player | None:
    """Grab an above-average gift that one more steal would lock.

    Falls back to :func:`always_steal` (not to a plain open) when no such
    gift is on the table.
    """
    mean = game.holders_mean()
    last_chance = game.max_steals - 1
    victim = best_eligible(
        current,
        game,
        predicate=lambda p: p.gift.steals == last_chance,  # type: ignore[union-attr]
    )
    if victim is not None and victim.gift.value > mean:  # type: ignore[union-attr]
        return _steal(current, victim, game)
    return always_steal(current, game)


_DECISIONS: dict[StrategyKind, Decision] = {
    StrategyKind.ALWAYS_OPEN: always_open,
    StrategyKind.ALWAYS_STEAL: always_steal,
    StrategyKind.STEAL_ON_COIN_FLIP: steal_on_coin_flip,
    StrategyKind.STEAL_ABOVE_MEAN: steal_above_mean,
    StrategyKind.STEAL_NEARLY_DEAD_GIFT: steal_nearly_dead_gift,
}


def apply_strategy(kind: StrategyKind, current: Player, game: SwapGame) -> Player | None:
    """Run the decision for ``kind`` and return the player who acts next."""
    return _DECISIONS[kind](current, game)


# ---------------------------------------------------------------------------
# Convenience factories
# ---------------------------------------------------------------------------


def random_strategy(
    rng: np.random.Generator,
    kinds: Sequence[StrategyKind] | None = None,
) -> StrategyKind:
    """Draw a strategy uniformly from ``kinds`` (all five by default)."""
    pool = list(StrategyKind) if kinds is None else list(kinds)
    if not pool:
        raise ValueError("cannot draw a strategy from an empty set")
    return pool[int(rng.integers(len(pool)))]


def parse_strategy(s: str | StrategyKind) -> StrategyKind:
    """Parse a strategy label into a :class:`StrategyKind`.

    Accepts the display value (``"AlwaysSteal"``), the enum name
    (``"ALWAYS_STEAL"``) or a snake/kebab spelling (``"always-steal"``),
    case-insensitively.
    """
    if isinstance(s, StrategyKind):
        return s
    key = s.strip().replace("-", "").replace("_", "").lower()
    for kind in StrategyKind:
        if key in (kind.value.lower(), kind.name.replace("_", "").lower()):
            return kind
    raise ValueError(f"Cannot parse strategy string: {s!r}")
