# src/yankee_swap/config.py
"""Configuration schemas and helpers for the Yankee Swap simulator.

Defines dataclasses describing I/O and simulation settings and includes
utilities for loading YAML overlays, applying ``section.option=value``
overrides and validating the table settings before any game starts.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, get_args, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

from yankee_swap.errors import InvalidConfiguration
from yankee_swap.simulation.strategies import parse_strategy
from yankee_swap.utils.yaml_helpers import expand_dotted_keys

# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses (schema)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class IOConfig:
    """File-system locations for the application."""

    results_dir: Path = Path("results")
    append_seed: bool = True
    outcomes_name: str = "outcomes.parquet"
    report_name: str = "report.txt"


@dataclass
class SimConfig:
    """Simulation parameters.

    The first four defaults are the classic table: ten players, ten thousand
    games, three steals per gift and no closing turn for player one.
    """

    n_players: int = 10
    n_games: int = 10_000
    max_steals: int = 3
    let_player_one_go_again: bool = False
    seed: int = 0
    n_jobs: int | None = 1
    shuffle_order: bool = True
    record_events: bool = False
    strategies: list[str] | None = None
    """Restrict the strategies players are dealt; ``None`` deals all five."""


# ─────────────────────────────────────────────────────────────────────────────
# AppConfig + convenience properties
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class AppConfig:
    """Top-level configuration container."""

    io: IOConfig = field(default_factory=IOConfig)
    sim: SimConfig = field(default_factory=SimConfig)

    @property
    def results_dir(self) -> Path:
        """Root directory where simulation outputs are written.

        With ``io.append_seed`` the directory is ``<results_dir>_seed_<seed>``,
        derived from the seed in force when the path is read, so overrides
        applied after loading are reflected.
        """
        if self.io.append_seed:
            return Path(f"{self.io.results_dir}_seed_{self.sim.seed}")
        return self.io.results_dir

    @property
    def outcomes_path(self) -> Path:
        """Per-player, per-game outcome rows."""
        return self.results_dir / self.io.outcomes_name

    @property
    def positional_stats_path(self) -> Path:
        return self.results_dir / "positional_stats.csv"

    @property
    def strategy_stats_path(self) -> Path:
        return self.results_dir / "strategy_stats.csv"

    @property
    def report_path(self) -> Path:
        """Plain-text two-table report."""
        return self.results_dir / self.io.report_name

    @property
    def active_config_path(self) -> Path:
        return self.results_dir / "active_config.yaml"


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────


def validate_sim_config(sim: SimConfig) -> SimConfig:
    """Fail fast on settings no game can be played with.

    Raises
    ------
    InvalidConfiguration
        For non-positive player, game or steal counts, a negative job count,
        or an unknown or empty strategy restriction.
    """
    if sim.n_players <= 0:
        raise InvalidConfiguration(f"n_players must be positive, got {sim.n_players}")
    if sim.max_steals <= 0:
        raise InvalidConfiguration(f"max_steals must be positive, got {sim.max_steals}")
    if sim.n_games <= 0:
        raise InvalidConfiguration(f"n_games must be positive, got {sim.n_games}")
    if sim.n_jobs is not None and sim.n_jobs < 0:
        raise InvalidConfiguration(f"n_jobs cannot be negative, got {sim.n_jobs}")
    if sim.strategies is not None:
        if not sim.strategies:
            raise InvalidConfiguration("strategies may not be an empty list")
        try:
            for label in sim.strategies:
                parse_strategy(label)
        except ValueError as exc:
            raise InvalidConfiguration(str(exc)) from exc
    return sim


# ─────────────────────────────────────────────────────────────────────────────
# Loader (one or more YAML overlays; dotted keys allowed)
# ─────────────────────────────────────────────────────────────────────────────

# Short names of the `run` positionals, accepted in YAML as aliases.
_LEGACY_SIM_KEYS = {
    "players": "n_players",
    "total_players": "n_players",
    "iterations": "n_games",
    "steals": "max_steals",
    "go_again": "let_player_one_go_again",
}


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overlay`` onto ``base`` and return a new mapping."""
    result: dict[str, Any] = dict(base)
    for key, val in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(val, Mapping):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _annotation_contains(annotation: Any, target: type) -> bool:
    """Recursively inspect type annotations for the presence of ``target``."""
    if annotation is None:
        return False
    if annotation is target:
        return True
    origin = get_origin(annotation)
    if origin is None:
        return False
    if origin is target:
        return True
    return any(_annotation_contains(arg, target) for arg in get_args(annotation))


def _build(cls: type, section: Mapping[str, Any]) -> Any:
    """Instantiate a dataclass ``cls`` from a mapping of attributes."""
    obj = cls()
    type_hints = get_type_hints(cls)
    for f in dataclasses.fields(cls):
        if f.name not in section:
            continue
        val = section[f.name]
        annotation = type_hints.get(f.name)
        if _annotation_contains(annotation, Path) and isinstance(val, (str, Path)):
            val = Path(val)
        setattr(obj, f.name, val)
    return obj


def load_app_config(*overlays: Path) -> AppConfig:
    """Deterministically merge one or more YAML overlays into an :class:`AppConfig`.

    Files are read in the order provided, dotted keys are expanded, and later
    overlays always win.
    """
    data: dict[str, Any] = {}
    for path in overlays:
        with Path(path).open("r", encoding="utf-8") as fh:
            overlay = yaml.safe_load(fh) or {}
        if not isinstance(overlay, Mapping):
            raise TypeError(f"Config file {path} must contain a mapping")
        data = _deep_merge(data, expand_dotted_keys(overlay))

    sim_section = dict(data.get("sim", {}))
    for old, new in _LEGACY_SIM_KEYS.items():
        if old in sim_section and new not in sim_section:
            sim_section[new] = sim_section.pop(old)

    cfg = AppConfig(
        io=_build(IOConfig, data.get("io", {})),
        sim=_build(SimConfig, sim_section),
    )
    return cfg


def parse_bool(value: str) -> bool:
    """Parse ``true/false``-style text; raises ``ValueError`` otherwise."""
    val_lower = value.strip().lower()
    if val_lower in {"1", "true", "yes", "on"}:
        return True
    if val_lower in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Cannot parse boolean value from {value!r}")


def _coerce(value: str, current: Any, annotation: Any | None = None) -> Any:
    """Coerce ``value`` to the type of ``current``."""
    if isinstance(current, bool) or _annotation_contains(annotation, bool):
        return parse_bool(value)
    if value.lower() == "none" and (current is None or _annotation_contains(annotation, type(None))):
        return None
    if _annotation_contains(annotation, list):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(current, int) or _annotation_contains(annotation, int):
        return int(value)
    if isinstance(current, float) or _annotation_contains(annotation, float):
        return float(value)
    if isinstance(current, Path) or _annotation_contains(annotation, Path):
        return Path(value)
    return value


def apply_dot_overrides(cfg: AppConfig, pairs: list[str]) -> AppConfig:
    """Apply ``section.option=value`` overrides to *cfg*."""
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid override {pair!r}")
        key, raw = pair.split("=", 1)
        if "." not in key:
            raise ValueError(f"Invalid override {pair!r}")
        section_name, option = key.split(".", 1)
        section = getattr(cfg, section_name)
        if not hasattr(section, option):
            raise AttributeError(f"Unknown option {option!r} in section {section_name!r}")
        current = getattr(section, option)
        annotation = get_type_hints(type(section)).get(option)
        setattr(section, option, _coerce(raw, current, annotation))
    return cfg


__all__ = [
    "IOConfig",
    "SimConfig",
    "AppConfig",
    "validate_sim_config",
    "load_app_config",
    "apply_dot_overrides",
    "parse_bool",
]
