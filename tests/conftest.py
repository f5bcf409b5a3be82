# pragma: no cover
import logging
import os
import sys
from pathlib import Path
from typing import Generator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))
TEST_PATH = PROJECT_ROOT / "tests"
if TEST_PATH.exists():
    sys.path.insert(0, str(TEST_PATH))

from yankee_swap.config import AppConfig, IOConfig, SimConfig  # noqa: E402


@pytest.fixture
def tmp_results_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Isolated working directory for tests that touch the filesystem.

    Pins the process CWD to ``tmp_path`` so relative ``results`` directories
    created by the CLI never leak into the repository.
    """

    prev = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(prev)


@pytest.fixture
def capinfo(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def small_cfg(tmp_path: Path) -> AppConfig:
    """A quick serial run writing under ``tmp_path``."""
    return AppConfig(
        io=IOConfig(results_dir=tmp_path / "results", append_seed=False),
        sim=SimConfig(n_players=4, n_games=20, max_steals=2, seed=7, n_jobs=1),
    )
