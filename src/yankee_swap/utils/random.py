# src/yankee_swap/utils/random.py
"""Random number generator helpers.

Every game owns its own :class:`numpy.random.Generator`; nothing in the
package touches the global ``random`` or ``numpy.random`` state.
"""

from __future__ import annotations

import numpy as np

# Max unsigned 32-bit integer for per-game seeds.  Seeds in this range are
# small enough to store in Parquet as uint32 and to pass to other tools.
MAX_UINT32 = 2**32 - 1


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a :class:`numpy.random.Generator` seeded with *seed*."""

    return np.random.default_rng(seed)


def spawn_seeds(n: int, *, seed: int | None = None) -> np.ndarray:
    """Return ``n`` 32-bit seeds derived from ``seed``.

    The same master seed always yields the same per-game seeds, so a batch
    can be split across worker processes and still replay exactly.
    """

    if n < 0:
        raise ValueError(f"cannot spawn a negative number of seeds ({n})")
    rng = make_rng(seed)
    return rng.integers(0, MAX_UINT32, size=n, dtype=np.uint32)


__all__ = ["MAX_UINT32", "make_rng", "spawn_seeds"]
