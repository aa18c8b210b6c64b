"""Logging setup for the game and its console front end.

Engine modules only call ``logging.getLogger(__name__)``; this module decides
where records go. Shots and phase changes carry structured ``extra`` fields
(``side``, ``coord``, ``outcome``, ``phase``) that the JSON output keeps.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging", "setup_logging"]

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord has; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level_name: str = "WARNING"
    console_format: str = "text"  # text|json
    file_path: str | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with ``extra`` fields nested under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root handlers with a console handler and an optional JSON file."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.getLevelNamesMapping().get(config.level_name.upper(), logging.WARNING))

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter() if config.console_format == "json" else logging.Formatter(TEXT_FORMAT))
    root.addHandler(console)

    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        run_log = logging.FileHandler(path, encoding="utf-8", delay=True)
        run_log.setFormatter(JsonFormatter())
        root.addHandler(run_log)


def build_logging_config() -> LoggingConfig:
    """Read ``SEABATTLE_LOG_LEVEL``/``LOG_LEVEL``, ``LOG_FORMAT`` and ``SEABATTLE_LOG_DIR``."""
    level_name = os.getenv("SEABATTLE_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "WARNING"
    log_dir = os.getenv("SEABATTLE_LOG_DIR", "").strip()
    file_path = None
    if log_dir:
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        file_path = str(Path(log_dir) / f"seabattle_run_{stamp}.jsonl")
    return LoggingConfig(
        level_name=level_name.strip().upper(),
        console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        file_path=file_path,
    )


def setup_logging() -> None:
    config = build_logging_config()
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("run log at %s", config.file_path)
