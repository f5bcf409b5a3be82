# src/yankee_swap/utils/logging.py
"""Logging setup for the ``yankee-swap`` command.

Modules log through ``logging.getLogger(__name__)`` and tag records with
``extra={"stage": ...}``.  The engine reports every open and steal at DEBUG
on :data:`NARRATION_LOGGER`, which keeps batch runs quiet; ``narrate=True``
lets those lines through without lowering the level of anything else.
"""

from __future__ import annotations

import logging
from pathlib import Path

NARRATION_LOGGER = "yankee_swap.game.engine"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(stage)s] %(message)s"


class StageFilter(logging.Filter):
    """Default ``stage`` to ``"-"`` for records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "stage"):
            record.stage = "-"
        return True


def parse_level(level: str | int) -> int:
    """Map ``"debug"``/``"INFO"``/``10`` to a ``logging`` level; unknown names give INFO."""
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        return value if isinstance(value, int) else logging.INFO
    return int(level)


def configure_logging(
    *,
    level: str | int = "INFO",
    log_file: str | Path | None = None,
    narrate: bool = False,
) -> None:
    """Install the root handlers, replacing any earlier configuration.

    Parameters
    ----------
    level:
        Root level as a name or number.
    log_file:
        Optional file receiving the same lines as stderr.  Parent
        directories are created.
    narrate:
        Emit the engine's per-move DEBUG lines even when ``level`` is higher.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for handler in handlers:
        handler.addFilter(StageFilter())

    logging.basicConfig(
        level=parse_level(level),
        handlers=handlers,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger(NARRATION_LOGGER).setLevel(logging.DEBUG if narrate else logging.NOTSET)


__all__ = ["LOG_FORMAT", "NARRATION_LOGGER", "StageFilter", "configure_logging", "parse_level"]
