# src/yankee_swap/__init__.py
"""Yankee Swap - Monte-Carlo gift-exchange engine & strategy comparison.

Heavy modules (pandas, pyarrow) are imported only when their attributes are
accessed, so ``import yankee_swap`` stays cheap for light utilities.
"""

from __future__ import annotations

import tomllib
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _v
from pathlib import Path

# Path to the project's pyproject.toml for local version fallback
PYPROJECT_TOML = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

__all__ = [  # loads lazily, that's why reportUnsupportedDunderAll is triggered
    "Gift",  # pyright: ignore[reportUnsupportedDunderAll]
    "Player",  # pyright: ignore[reportUnsupportedDunderAll]
    "SwapGame",  # pyright: ignore[reportUnsupportedDunderAll]
    "GameResult",  # pyright: ignore[reportUnsupportedDunderAll]
    "StrategyKind",  # pyright: ignore[reportUnsupportedDunderAll]
    "SwapConfig",  # pyright: ignore[reportUnsupportedDunderAll]
    "simulate_one_game",  # pyright: ignore[reportUnsupportedDunderAll]
    "simulate_many_games",  # pyright: ignore[reportUnsupportedDunderAll]
    "InvalidConfiguration",  # pyright: ignore[reportUnsupportedDunderAll]
    "InvariantViolation",  # pyright: ignore[reportUnsupportedDunderAll]
]

_LAZY_IMPORTS = {
    "Gift": "yankee_swap.game.models",
    "Player": "yankee_swap.game.models",
    "SwapGame": "yankee_swap.game.engine",
    "GameResult": "yankee_swap.game.engine",
    "StrategyKind": "yankee_swap.simulation.strategies",
    "SwapConfig": "yankee_swap.simulation.simulation",
    "simulate_one_game": "yankee_swap.simulation.simulation",
    "simulate_many_games": "yankee_swap.simulation.simulation",
    "InvalidConfiguration": "yankee_swap.errors",
    "InvariantViolation": "yankee_swap.errors",
}


def __getattr__(name: str):  # pragma: no cover - simple dynamic loader
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(module_name)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


def _read_version_from_toml() -> str:
    """Return the package version declared in ``pyproject.toml``.

    The file is expected to reside at the repository root three directories
    above this module.
    """
    with PYPROJECT_TOML.open("rb") as fh:
        data = tomllib.load(fh)
    return data["project"]["version"]


try:
    __version__ = _v("yankee-swap")  # importlib.metadata
except PackageNotFoundError:
    __version__ = _read_version_from_toml()
