# src/yankee_swap/utils/parallel.py
"""Process-pool mapping used to spread independent games over CPUs.

Games share no state, so results are simply collected and concatenated by
the caller.  Keep simulation-specific logic outside utils.
"""

from __future__ import annotations

import contextlib
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from typing import Callable, Iterable, Iterator, TypeVar

_T = TypeVar("_T")
_R = TypeVar("_R")


def process_map(
    fn: Callable[[_T], _R],
    items: Iterable[_T],
    *,
    n_jobs: int | None = None,
    window: int = 0,
    ordered: bool = True,
) -> Iterator[_R]:
    """Map ``fn`` across ``items``, optionally in worker processes.

    ``n_jobs`` of ``None``, ``0`` or ``1`` runs in-process.  Otherwise at most
    ``window`` tasks are in flight at once (default ``4 * n_jobs``).  With
    ``ordered=True`` results come back in input order; with ``False`` they are
    yielded as they complete.
    """
    if n_jobs in (None, 0, 1):
        for it in items:
            yield fn(it)
        return
    if window <= 0:
        window = n_jobs * 4

    with ProcessPoolExecutor(max_workers=n_jobs) as pool:
        it = iter(items)
        futs: list[Future[_R]] = []
        for _ in range(window):
            try:
                futs.append(pool.submit(fn, next(it)))
            except StopIteration:
                break
        while futs:
            done = futs[0] if ordered else next(as_completed(futs))
            futs.remove(done)
            yield done.result()
            with contextlib.suppress(StopIteration):
                futs.append(pool.submit(fn, next(it)))


__all__ = ["process_map"]
