"""Where a run keeps its artifacts. Only log files are written."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def resolve_app_data_root() -> Path:
    """App-data root from LONELY_GAME_APP_DATA_DIR, relative to the project root."""
    return _path_from_env("LONELY_GAME_APP_DATA_DIR", PROJECT_ROOT, "appdata")


def resolve_logs_dir() -> Path:
    """Logs directory from LONELY_GAME_LOG_DIR, relative to the app-data root."""
    return _path_from_env("LONELY_GAME_LOG_DIR", resolve_app_data_root(), "logs")


def _path_from_env(name: str, base: Path, default: str) -> Path:
    configured = Path(os.getenv(name, "").strip() or default)
    return configured if configured.is_absolute() else base / configured
