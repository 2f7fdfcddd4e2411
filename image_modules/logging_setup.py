"""
JSONL logging bootstrap for the image-modules CLI.
Attaches a single JSON-lines file sink to the root logger.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("IMAGE_MODULES_LOG_PATH", "./image-modules.log.jsonl")
DEFAULT_LEVEL = os.environ.get("IMAGE_MODULES_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger(__name__)

# LogRecord attributes that are already represented or not worth serializing
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    }
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        payload = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "image_modules.log", "ver": "1.0.0"},
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = logging.Formatter().formatException(record.exc_info)
        # Fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key in _RESERVED or key.startswith("_"):
                continue
            payload.setdefault(key, value)
        return payload

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def resolve_level(level: str | int | None) -> int:
    """Turn a level name ("debug") or number (10) into a logging level; INFO if unrecognized."""
    if level is None or level == "":
        level = DEFAULT_LEVEL
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        value = logging.getLevelName(name)
        if isinstance(value, int):
            return value
    logger.warning(f"Unknown log level {level!r}, using INFO")
    return logging.INFO


def init_json_logging(path: str | Path | None = None, level: str | int | None = None) -> JsonlHandler:
    """Route root logger records to a JSONL file, replacing any earlier JSONL sink."""
    path = path or DEFAULT_PATH
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
