from __future__ import annotations

import os

import pytest

from lonely_game.infra.config import GameSettings, load_env_files, load_settings, read_env_file


def test_read_env_file_keeps_only_game_keys(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "LONELY_GAME_SEED=7\n"
        "LONELY_GAME_LOG_LEVEL='debug'\n"
        "#LONELY_GAME_LOG_FORMAT=json\n"
        "OTHER=1\n"
        "LONELY_GAME_BROKEN\n",
        encoding="utf-8",
    )
    assert read_env_file(env_file) == {
        "LONELY_GAME_SEED": "7",
        "LONELY_GAME_LOG_LEVEL": "debug",
    }


def test_read_env_file_missing_is_empty(tmp_path) -> None:
    assert read_env_file(tmp_path / ".env.missing") == {}


def test_load_env_files_later_file_wins_and_environment_is_kept(tmp_path, monkeypatch) -> None:
    (tmp_path / ".env").write_text(
        "LONELY_GAME_SEED=1\nLONELY_GAME_LOG_FORMAT=json\nLONELY_GAME_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )
    (tmp_path / ".env.local").write_text("LONELY_GAME_SEED=2\n", encoding="utf-8")
    monkeypatch.delenv("LONELY_GAME_SEED", raising=False)
    monkeypatch.delenv("LONELY_GAME_LOG_FORMAT", raising=False)
    monkeypatch.setenv("LONELY_GAME_LOG_LEVEL", "warning")

    exported = load_env_files(base_dir=tmp_path)

    assert exported == {"LONELY_GAME_SEED": "2", "LONELY_GAME_LOG_FORMAT": "json"}
    assert os.environ["LONELY_GAME_SEED"] == "2"
    assert os.environ["LONELY_GAME_LOG_LEVEL"] == "warning"


def test_load_settings_reads_environment() -> None:
    environ = {
        "LONELY_GAME_SEED": "77",
        "LONELY_GAME_LOG_LEVEL": "debug",
        "LONELY_GAME_LOG_FORMAT": "JSON",
    }
    assert load_settings(environ=environ) == GameSettings(seed=77, log_level="DEBUG", log_format="json")


def test_load_settings_arguments_win() -> None:
    environ = {"LONELY_GAME_SEED": "77", "LONELY_GAME_LOG_LEVEL": "warning"}
    assert load_settings(seed=3, environ=environ) == GameSettings(seed=3, log_level="WARNING")
    assert load_settings(log_level="error", environ=environ).log_level == "ERROR"


def test_load_settings_defaults() -> None:
    assert load_settings(environ={}) == GameSettings()


@pytest.mark.parametrize(
    ("environ", "log_level"),
    [
        ({"LONELY_GAME_SEED": "abc"}, None),
        ({"LONELY_GAME_LOG_FORMAT": "xml"}, None),
        ({}, "loud"),
    ],
)
def test_load_settings_rejects_bad_values(environ: dict[str, str], log_level: str | None) -> None:
    with pytest.raises(ValueError):
        load_settings(log_level=log_level, environ=environ)
