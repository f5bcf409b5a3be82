# src/yankee_swap/utils/writer.py
"""
Atomic output helpers for run results.  Each file is written to a hidden
``.<name>.*.part`` sibling and renamed over the target, so an interrupted run
leaves the previous ``report.txt`` or ``outcomes.parquet`` intact.
"""
from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq


@contextmanager
def atomic_path(final_path: Union[Path, str]) -> Iterator[Path]:
    """Yield a scratch path beside *final_path* and move it into place on success.

    The target's directory is created first.  If the block raises, the
    scratch file is removed and the target is left untouched.
    """
    target = Path(final_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
    os.close(fd)
    scratch = Path(name)
    try:
        yield scratch
        scratch.replace(target)
    finally:
        scratch.unlink(missing_ok=True)


def write_parquet_atomic(table: pa.Table, path: Union[Path, str], *, codec: str = "snappy") -> None:
    """Write the outcome *table* to *path* as Parquet."""
    with atomic_path(path) as scratch:
        pq.write_table(table, str(scratch), compression=codec)


def write_csv_atomic(df: pd.DataFrame, path: Union[Path, str]) -> None:
    """Write a summary frame to *path* as UTF-8 CSV without index."""
    with atomic_path(path) as scratch, scratch.open("w", encoding="utf-8", newline="") as handle:
        df.to_csv(handle, index=False)


def write_text_atomic(text: str, path: Union[Path, str]) -> None:
    """Write a report or resolved config to *path* as UTF-8."""
    with atomic_path(path) as scratch:
        scratch.write_text(text, encoding="utf-8")


__all__ = ["atomic_path", "write_parquet_atomic", "write_csv_atomic", "write_text_atomic"]
