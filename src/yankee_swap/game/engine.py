from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Sequence

import numpy as np

from yankee_swap.errors import InvalidConfiguration, InvariantViolation
from yankee_swap.game.models import Gift, Player
from yankee_swap.simulation.strategies import apply_strategy

"""engine.py
============
Round engine for a single Yankee Swap game.

High-level flow
---------------
* SwapGame.play walks the players in turn order.  Every top-level turn
  starts with an empty steal guard; the first player simply opens a gift,
  everyone else consults their strategy.
* A steal leaves the victim empty-handed, so the victim acts next, inside
  the same top-level turn.  Decisions return the player who must act next
  and SwapGame runs that chain as a loop, which keeps very long chains
  off the Python call stack.
* When the pass is over the pool must be empty.  With
  let_player_one_go_again the first player gets one more decision.

The module keeps no global state; randomness comes from the
numpy.random.Generator handed to each SwapGame.
"""


__all__ = [
    "EventKind",
    "GameEvent",
    "PlayerOutcome",
    "GameStats",
    "GameResult",
    "SwapGame",
]

LOGGER = logging.getLogger(__name__)

EventListener = Callable[["GameEvent"], None]


# ---------------------------------------------------------------------------
# Event stream
# ---------------------------------------------------------------------------


class EventKind(Enum):
    """What happened to a gift."""

    OPENED = "opened"
    STOLEN = "stolen"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One open or steal, in the order it happened.

    Attributes
    ----------
    kind
        :class:`EventKind` of the action.
    actor
        Index of the player who opened or stole.
    gift, value
        Identity and value of the gift that moved.
    other
        Index of the player stolen from; ``None`` for opens.
    turn
        Turn-order position of the top-level turn the event belongs to.
        ``0`` marks the first player's extra turn.
    """

    kind: EventKind
    actor: int
    gift: int
    value: float
    other: int | None = None
    turn: int = 0

    def __str__(self) -> str:
        if self.kind is EventKind.OPENED:
            return f"Player {self.actor} OPENED gift {self.gift} with value {self.value}"
        return (
            f"Player {self.actor} STOLE gift {self.gift} from {self.other} "
            f"with value {self.value}"
        )


# ---------------------------------------------------------------------------
# Game-level structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PlayerOutcome:
    """Final holding of one player."""

    player: int
    position: int
    strategy: str
    gift: int
    value: float
    steals: int


@dataclass(slots=True)
class GameStats:
    """Aggregate counters for one game.

    Attributes
    ----------
    n_players
        Number of participants (and gifts).
    seed
        Seed the game's RNG was built from, for replay.
    max_steals
        Steal limit in force.
    n_opens, n_steals
        Number of each action taken.
    longest_chain
        Most steals that happened inside a single top-level turn.
    went_again
        Whether the first player had the extra closing turn.
    """

    n_players: int
    seed: int
    max_steals: int
    n_opens: int
    n_steals: int
    longest_chain: int
    went_again: bool


@dataclass(slots=True)
class GameResult:
    """Everything the reporting layer needs from one finished game."""

    outcomes: List[PlayerOutcome]
    game: GameStats
    events: List[GameEvent] = field(default_factory=list)

    def to_rows(self) -> List[Dict[str, object]]:
        """Return one flat mapping per player, in turn order."""
        rows: List[Dict[str, object]] = []
        for outcome in self.outcomes:
            row: Dict[str, object] = {"seed": self.game.seed}
            row.update(asdict(outcome))
            rows.append(row)
        return rows

    @property
    def values_by_position(self) -> Dict[int, float]:
        return {o.position: o.value for o in self.outcomes}

    @property
    def total_value(self) -> float:
        return float(sum(o.value for o in self.outcomes))


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class SwapGame:
    """Driver for a *single* Yankee Swap game."""

    def __init__(
        self,
        players: Sequence[Player],
        gifts: Sequence[Gift],
        *,
        max_steals: int,
        let_player_one_go_again: bool = False,
        rng: np.random.Generator | None = None,
        seed: int = 0,
        record_events: bool = False,
        listener: EventListener | None = None,
    ) -> None:
        """Create a new game instance.

        Inputs
        ------
        players
            Participants in turn order.  ``position`` is assigned from this
            order.
        gifts
            The wrapped pool; one gift per player.
        max_steals
            Steals after which a gift is locked with its holder.
        let_player_one_go_again
            Grant the first player one more decision once the pool is empty.
        rng
            Generator used for every random draw of this game.  A fresh
            generator seeded with ``seed`` is built when omitted.
        seed
            Recorded in :class:`GameStats` for replay.
        record_events
            Keep every :class:`GameEvent` on the result.
        listener
            Optional callback receiving each event as it happens.

        Raises
        ------
        InvalidConfiguration
            For an empty table, a non-positive steal limit or a pool whose
            size differs from the player count.
        """
        if len(players) <= 0:
            raise InvalidConfiguration("a game needs at least one player")
        if max_steals <= 0:
            raise InvalidConfiguration(f"max_steals must be positive, got {max_steals}")
        if len(gifts) != len(players):
            raise InvalidConfiguration(
                f"expected {len(players)} gifts for {len(players)} players, got {len(gifts)}"
            )

        self.players: List[Player] = list(players)
        self.gifts: List[Gift] = list(gifts)
        self.unopened: List[Gift] = list(gifts)
        self.max_steals: int = max_steals
        self.let_player_one_go_again: bool = let_player_one_go_again
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng(seed)
        self.seed = seed
        self.stolen_this_turn: set[Gift] = set()

        self.record_events = record_events
        self.listener = listener
        self.events: List[GameEvent] = []

        self._turn = 0
        self._chain_steals = 0
        self.n_opens = 0
        self.n_steals = 0
        self.longest_chain = 0

        for pos, player in enumerate(self.players, start=1):
            player.position = pos

    # ----------------------------- queries -----------------------------
    def is_eligible(self, candidate: Player, current: Player) -> bool:
        """Return ``True`` when ``current`` may legally steal from ``candidate``."""
        gift = candidate.gift
        return (
            gift is not None
            and gift.steals < self.max_steals
            and candidate.index != current.index
            and gift not in self.stolen_this_turn
        )

    def eligible_candidates(self, current: Player) -> List[Player]:
        """Players ``current`` may steal from, in turn order."""
        return [p for p in self.players if self.is_eligible(p, current)]

    def holders_mean(self) -> float:
        """Mean value of every gift currently in someone's hands.

        Raises
        ------
        InvariantViolation
            If nobody holds a gift yet.
        """
        values = [p.gift.value for p in self.players if p.gift is not None]
        if not values:
            raise InvariantViolation("mean requested before any gift was opened")
        return sum(values) / len(values)

    # ---------------------------- primitives ---------------------------
    def open_gift(self, player: Player) -> None:
        """Hand ``player`` a random gift from the unopened pool.

        Does nothing when the pool is empty.
        """
        if not self.unopened:
            return
        if player.gift is not None:
            raise InvariantViolation(
                f"{player} opened a gift while already holding gift {player.gift.index}"
            )
        gift = self.unopened.pop(int(self.rng.integers(len(self.unopened))))
        player.gift = gift
        self.n_opens += 1
        self._emit(GameEvent(EventKind.OPENED, player.index, gift.index, gift.value, turn=self._turn))

    def steal_gift(self, thief: Player, victim: Player) -> None:
        """Swap gifts between ``thief`` and ``victim`` unconditionally.

        Eligibility is checked by the strategies before calling.  The taken
        gift's steal counter goes up and it joins the per-turn guard.
        """
        taken = victim.gift
        if taken is None:
            raise InvariantViolation(f"{thief} tried to steal from empty-handed {victim}")
        victim.gift = thief.gift
        thief.gift = taken
        taken.steals += 1
        self.stolen_this_turn.add(taken)
        self.n_steals += 1
        self._chain_steals += 1
        self._emit(
            GameEvent(
                EventKind.STOLEN,
                thief.index,
                taken.index,
                taken.value,
                other=victim.index,
                turn=self._turn,
            )
        )

    def _emit(self, event: GameEvent) -> None:
        LOGGER.debug("%s", event)
        if self.record_events:
            self.events.append(event)
        if self.listener is not None:
            self.listener(event)

    # ------------------------------ turns ------------------------------
    def take_turn(self, player: Player, *, force_open: bool = False) -> None:
        """Run one top-level turn for ``player`` including every re-turn it triggers."""
        self.stolen_this_turn.clear()
        self._chain_steals = 0
        if force_open:
            self.open_gift(player)
        else:
            pending: Player | None = player
            while pending is not None:
                pending = apply_strategy(pending.strategy, pending, self)
        self.longest_chain = max(self.longest_chain, self._chain_steals)

    # ---------------------------- gameplay -----------------------------
    def play(self) -> GameResult:
        """Execute the full game and return its outcome.

        Returns
        -------
        GameResult
            Final holdings in turn order plus game counters and, when
            recorded, the event stream.

        Raises
        ------
        InvariantViolation
            If the pool is not exhausted after every player's turn or the
            final holdings break the one-gift-per-player rule.
        """
        for i, player in enumerate(self.players):
            self._turn = player.position
            self.take_turn(player, force_open=(i == 0))

        if self.unopened:
            raise InvariantViolation(
                f"{len(self.unopened)} gifts still wrapped after every player had a turn"
            )

        if self.let_player_one_go_again:
            self._turn = 0
            self.take_turn(self.players[0])

        self._check_final_state()

        outcomes = [
            PlayerOutcome(
                player=p.index,
                position=p.position,
                strategy=str(p.strategy),
                gift=p.gift.index,  # type: ignore[union-attr]  # checked above
                value=p.gift.value,  # type: ignore[union-attr]
                steals=p.gift.steals,  # type: ignore[union-attr]
            )
            for p in self.players
        ]
        stats = GameStats(
            n_players=len(self.players),
            seed=self.seed,
            max_steals=self.max_steals,
            n_opens=self.n_opens,
            n_steals=self.n_steals,
            longest_chain=self.longest_chain,
            went_again=self.let_player_one_go_again,
        )
        return GameResult(outcomes, stats, list(self.events))

    def _check_final_state(self) -> None:
        """Every gift held exactly once and no gift past the steal limit."""
        held = [p.gift for p in self.players]
        if any(g is None for g in held):
            empty = [p.index for p in self.players if p.gift is None]
            raise InvariantViolation(f"players {empty} finished without a gift")
        if len({id(g) for g in held}) != len(held) or {id(g) for g in held} != {
            id(g) for g in self.gifts
        }:
            raise InvariantViolation("final holdings are not a one-to-one match with the pool")
        over = [g.index for g in self.gifts if g.steals > self.max_steals]
        if over:
            raise InvariantViolation(f"gifts {over} exceeded max_steals={self.max_steals}")
