"""Root logging for a console run: a text or JSON console and a JSONL run file."""

from __future__ import annotations

import json
import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from lonely_game.infra.app_data import resolve_logs_dir
from lonely_game.infra.config import GameSettings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord has; anything else came in through `extra=`.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_listener: QueueListener | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level_name: str = "INFO"
    console_format: str = "text"
    file_path: Path | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra=` values are nested under `fields`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRIBUTES}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers. With a run file, records go through a queue listener."""
    global _listener

    shutdown_logging()
    console = logging.StreamHandler()
    console.setFormatter(
        JsonFormatter() if config.console_format == "json" else logging.Formatter(TEXT_FORMAT)
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(config.level_name)
    if config.file_path is None:
        root.addHandler(console)
        return

    config.file_path.parent.mkdir(parents=True, exist_ok=True)
    run_file = logging.FileHandler(config.file_path, encoding="utf-8", delay=True)
    run_file.setFormatter(JsonFormatter())
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _listener = QueueListener(log_queue, console, run_file)
    _listener.start()


def shutdown_logging() -> None:
    """Drain the queue and close the run file, if one is open."""
    global _listener

    if _listener is None:
        return
    _listener.stop()
    for handler in _listener.handlers:
        handler.close()
    _listener = None


def setup_logging(settings: GameSettings) -> Path:
    """Configure logging for one run and return the run file path."""
    log_file = resolve_logs_dir() / f"lonely_game_run_{datetime.now(UTC):%Y%m%dT%H%M%S}.jsonl"
    configure_logging(LoggingConfig(settings.log_level, settings.log_format, log_file))
    return log_file
