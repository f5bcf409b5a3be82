# src/yankee_swap/analysis/summary.py
"""Aggregate outcome rows into the positional and per-strategy tables.

Both helpers consume the tidy frame produced by
:func:`yankee_swap.simulation.simulation.simulate_many_games` (one row per
player per game) and never look at individual games.
"""

from __future__ import annotations

import pandas as pd

from yankee_swap.simulation.strategies import StrategyKind

__all__ = ["positional_averages", "strategy_averages", "format_report"]

_REQUIRED = {"position", "strategy", "value"}


def _check_columns(df: pd.DataFrame) -> None:
    missing = _REQUIRED - set(df.columns)
    if missing:
        raise KeyError(f"outcome frame is missing columns: {sorted(missing)}")


def positional_averages(df: pd.DataFrame) -> pd.DataFrame:
    """Mean final gift value for each turn-order position.

    Returns
    -------
    pandas.DataFrame
        Columns ``position``, ``mean_value`` and ``n`` (players observed in
        that seat), sorted by position.
    """
    _check_columns(df)
    grouped = df.groupby("position", sort=True)["value"]
    out = pd.DataFrame({"mean_value": grouped.mean(), "n": grouped.size()})
    return out.reset_index()


def strategy_averages(df: pd.DataFrame) -> pd.DataFrame:
    """Mean final gift value for each strategy.

    Every :class:`StrategyKind` gets a row in declaration order, even when no
    player was dealt it; its ``mean_value`` is then ``NaN`` and ``n`` is 0.
    """
    _check_columns(df)
    labels = [str(kind) for kind in StrategyKind]
    grouped = df.groupby("strategy")["value"]
    out = pd.DataFrame({"mean_value": grouped.mean(), "n": grouped.size()})
    out = out.reindex(labels)
    out["n"] = out["n"].fillna(0).astype(int)
    out.index.name = "strategy"
    return out.reset_index()


def format_report(positional: pd.DataFrame, strategies: pd.DataFrame) -> str:
    """Render both tables as ``key, value`` lines under their headings."""
    lines = ["POSITIONAL STATS"]
    lines += [f"{int(r.position)}, {r.mean_value}" for r in positional.itertuples(index=False)]
    lines += ["", "STRATEGY STATS"]
    lines += [f"{r.strategy}, {r.mean_value}" for r in strategies.itertuples(index=False)]
    return "\n".join(lines) + "\n"
