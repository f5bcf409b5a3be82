# src/yankee_swap/game/models.py
"""Leaf data for a Yankee Swap table: gifts and the players holding them.

Both classes compare by identity. A gift that changes hands is the *same*
object, which is what lets the engine keep it in the per-turn steal guard.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from yankee_swap.simulation.strategies import StrategyKind

__all__ = ["Gift", "Player"]


@dataclass(slots=True, eq=False)
class Gift:
    """A wrapped present.

    Attributes
    ----------
    value
        Worth of the gift; fixed at creation. Higher is better.
    index
        Stable 1-based identity in pool order, used for reporting.
    steals
        Number of times the gift changed hands through a steal. Opening a
        gift does not count.
    """

    value: float
    index: int
    steals: int = 0

    def __str__(self) -> str:
        return f"gift {self.index} ({self.value:.4f}, {self.steals} steals)"


@dataclass(slots=True, eq=False)
class Player:
    """A participant with a fixed strategy and at most one gift in hand."""

    index: int
    strategy: StrategyKind
    gift: Gift | None = None
    position: int = field(default=0, repr=False)  # 1-based turn order, set by the engine

    @property
    def has_gift(self) -> bool:
        return self.gift is not None

    def __str__(self) -> str:
        return f"Player {self.index}"
