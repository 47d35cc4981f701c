"""
JSONL logging bootstrap.
Installs a single canonical JSONL sink; used by the CLI and available to
applications that want wisp's debug trail on disk.
"""

import json
import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .config import load_settings

_RESERVED = frozenset(
    (
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
    )
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "wisp.log", "ver": "1.0.0"},
                "logger": record.name,
                "event": getattr(record, "event", None),
                "message": record.getMessage(),
            }
            if isinstance(record.msg, dict):
                base.update(record.msg)
            # Attach any extra fields on the record
            for k, v in record.__dict__.items():
                if k in _RESERVED:
                    continue
                base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler | None:
    """Install the JSONL sink on the root logger.

    Falls back to WISP_LOG_PATH / WISP_LOG_LEVEL. Returns None (and installs
    nothing) when no path is configured.
    """
    settings = load_settings()
    path = path or settings.log_path
    if not path:
        return None
    level = (level or settings.log_level).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
