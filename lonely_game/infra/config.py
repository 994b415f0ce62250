"""Runtime settings from env files, LONELY_GAME_* variables and CLI flags."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "LONELY_GAME_"
ENV_FILES: tuple[str, ...] = (".env", ".env.local")
LOG_FORMATS: tuple[str, ...] = ("text", "json")


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Resolved settings for one run."""

    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "text"


def read_env_file(path: Path) -> dict[str, str]:
    """Parse `LONELY_GAME_*=value` lines; other keys and comments are skipped."""
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key.startswith(ENV_PREFIX):
            values[key] = value.strip().strip("'\"")
    return values


def load_env_files(
    paths: Sequence[str | Path] = ENV_FILES, *, base_dir: Path | None = None
) -> dict[str, str]:
    """Export env-file values the process environment does not define yet.

    Files are read in order and later files win. Returns what was exported.
    """
    root = Path.cwd() if base_dir is None else base_dir
    merged: dict[str, str] = {}
    for path in paths:
        merged.update(read_env_file(root / path))
    exported = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(exported)
    return exported


def load_settings(
    *,
    seed: int | None = None,
    log_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> GameSettings:
    """Resolve settings; explicit arguments win over the environment."""
    env = os.environ if environ is None else environ
    if seed is None:
        seed = _parse_seed(env.get(f"{ENV_PREFIX}SEED", ""))

    level = (log_level or env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level {level!r}.")

    log_format = env.get(f"{ENV_PREFIX}LOG_FORMAT", "text").strip().lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"{ENV_PREFIX}LOG_FORMAT must be one of {LOG_FORMATS}, got {log_format!r}.")
    return GameSettings(seed=seed, log_level=level, log_format=log_format)


def _parse_seed(raw: str) -> int | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}SEED must be an integer, got {raw!r}.") from exc
