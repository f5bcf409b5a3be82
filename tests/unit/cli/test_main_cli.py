from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest
import yaml

import yankee_swap.cli.main as cli_main
from yankee_swap.config import AppConfig
from yankee_swap.simulation.strategies import StrategyKind


@pytest.fixture(autouse=True)
def _no_setup_logging(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)


@pytest.fixture
def preserve_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture
def captured_run(monkeypatch) -> list[AppConfig]:
    seen: list[AppConfig] = []

    def fake_run(cfg):
        seen.append(cfg)
        return SimpleNamespace(report="POSITIONAL STATS\n")

    monkeypatch.setattr(cli_main.runner, "run_simulation", fake_run)
    return seen


def test_run_positionals_follow_classic_order(tmp_results_dir, captured_run, preserve_root_logger):
    cli_main.main(["run", "6", "250", "2", "true", "--seed", "9", "--no-shuffle"])

    (cfg,) = captured_run
    assert cfg.sim.n_players == 6
    assert cfg.sim.n_games == 250
    assert cfg.sim.max_steals == 2
    assert cfg.sim.let_player_one_go_again is True
    assert cfg.sim.seed == 9
    assert cfg.sim.shuffle_order is False


def test_run_positionals_are_optional(tmp_results_dir, captured_run, preserve_root_logger):
    cli_main.main(["run", "4"])

    (cfg,) = captured_run
    assert cfg.sim.n_players == 4
    assert cfg.sim.n_games == AppConfig().sim.n_games
    assert cfg.sim.let_player_one_go_again is False


def test_run_writes_active_config(tmp_results_dir, captured_run, preserve_root_logger):
    cli_main.main(["--set", "sim.max_steals=1", "run", "3", "10"])

    (cfg,) = captured_run
    written = yaml.safe_load((tmp_results_dir / cfg.active_config_path).read_text(encoding="utf-8"))
    assert written["sim"]["max_steals"] == 1
    assert written["sim"]["n_players"] == 3
    assert written["io"]["results_dir"] == "results"
    assert cfg.results_dir == Path("results_seed_0")


def test_run_reads_config_file(tmp_results_dir, captured_run, preserve_root_logger):
    path = tmp_results_dir / "cfg.yaml"
    path.write_text(
        yaml.safe_dump({"io": {"results_dir": "custom"}, "sim": {"iterations": 12, "seed": 4}}),
        encoding="utf-8",
    )
    cli_main.main(["--config", str(path), "run"])

    (cfg,) = captured_run
    assert cfg.sim.n_games == 12
    assert str(cfg.results_dir) == "custom_seed_4"


def test_results_dir_follows_seed_given_on_command_line(tmp_results_dir, captured_run, preserve_root_logger):
    path = tmp_results_dir / "cfg.yaml"
    path.write_text(
        yaml.safe_dump({"io": {"results_dir": "res"}, "sim": {"seed": 0}}),
        encoding="utf-8",
    )
    cli_main.main(["--config", str(path), "run", "3", "2", "--seed", "5"])

    (cfg,) = captured_run
    assert cfg.sim.seed == 5
    assert cfg.results_dir == Path("res_seed_5")
    assert (tmp_results_dir / "res_seed_5" / "active_config.yaml").exists()
    assert not (tmp_results_dir / "res_seed_0").exists()


def test_results_dir_follows_seed_override(tmp_results_dir, captured_run, preserve_root_logger):
    cli_main.main(["--set", "sim.seed=8", "run", "3", "2"])

    (cfg,) = captured_run
    assert cfg.results_dir == Path("results_seed_8")
    assert (tmp_results_dir / "results_seed_8" / "active_config.yaml").exists()


def test_different_seeds_write_to_different_dirs(tmp_results_dir, captured_run, preserve_root_logger):
    cli_main.main(["run", "3", "2", "--seed", "1"])
    cli_main.main(["run", "3", "2", "--seed", "2"])

    first, second = captured_run
    assert first.results_dir != second.results_dir


@pytest.mark.parametrize("argv", [["run", "0"], ["run", "5", "10", "0"], ["run", "5", "10", "3", "perhaps"]])
def test_run_rejects_bad_arguments(tmp_results_dir, captured_run, preserve_root_logger, argv):
    with pytest.raises(SystemExit):
        cli_main.main(argv)
    assert captured_run == []


@pytest.fixture
def captured_watch(monkeypatch) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_watch_game(*, seed, n_players, max_steals, let_player_one_go_again, kinds):
        captured.update(
            seed=seed,
            n_players=n_players,
            max_steals=max_steals,
            go_again=let_player_one_go_again,
            kinds=kinds,
        )

    monkeypatch.setattr(cli_main, "watch_game", fake_watch_game)
    return captured


def test_main_dispatches_watch(captured_watch, preserve_root_logger):
    cli_main.main(["watch", "--seed", "123", "--players", "5", "--go-again"])

    assert captured_watch == {
        "seed": 123,
        "n_players": 5,
        "max_steals": 3,
        "go_again": True,
        "kinds": None,
    }


def test_watch_honours_configured_strategies(tmp_results_dir, captured_watch, preserve_root_logger):
    path = tmp_results_dir / "cfg.yaml"
    path.write_text(
        yaml.safe_dump({"sim": {"n_players": 4, "strategies": ["AlwaysSteal"]}}),
        encoding="utf-8",
    )
    cli_main.main(["--config", str(path), "--set", "sim.max_steals=1", "watch", "--seed", "2"])

    assert captured_watch["n_players"] == 4
    assert captured_watch["max_steals"] == 1
    assert captured_watch["kinds"] == [StrategyKind.ALWAYS_STEAL]


def test_watch_rejects_unknown_strategy(captured_watch, preserve_root_logger):
    with pytest.raises(SystemExit):
        cli_main.main(["--set", "sim.strategies=StealEverything", "watch"])
    assert captured_watch == {}


def test_main_dispatches_time(monkeypatch, preserve_root_logger):
    calls: list[dict[str, int]] = []
    monkeypatch.setattr(cli_main, "measure_sim_times", lambda **kw: calls.append(kw))

    cli_main.main(["time", "--players", "4", "--n-games", "10"])

    assert calls == [{"n_games": 10, "players": 4, "seed": 42, "jobs": 1}]


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        cli_main.main([])


def test_logging_flags_reach_configure_logging(monkeypatch, tmp_path, preserve_root_logger):
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(cli_main, "measure_sim_times", lambda **kw: None)

    cli_main.main(["--log-level", "WARNING", "--log-file", str(tmp_path / "run.log"), "--narrate", "time"])

    assert calls == [{"level": "WARNING", "log_file": tmp_path / "run.log", "narrate": True}]


def test_logging_defaults(monkeypatch, preserve_root_logger):
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(cli_main, "measure_sim_times", lambda **kw: None)

    cli_main.main(["time"])

    assert calls == [{"level": "INFO", "log_file": None, "narrate": False}]
