# src/yankee_swap/errors.py
"""Exception types shared by the engine, simulation and config layers."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised before any game starts when the table settings are unusable."""


class InvariantViolation(RuntimeError):
    """A structural rule of the game was broken; always a programming bug."""


__all__ = ["InvalidConfiguration", "InvariantViolation"]
