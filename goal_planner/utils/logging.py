from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Context variables for structured logging
session_id_var: ContextVar[str] = ContextVar("session_id", default="-")
goal_id_var: ContextVar[str] = ContextVar("goal_id", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_var.get()
        record.goal_id = goal_id_var.get()
        return True


class SimpleStructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        msg = record.getMessage()
        line = (
            f"{ts} level={record.levelname} logger={record.name} "
            f"session_id={getattr(record, 'session_id', '-')} goal_id={getattr(record, 'goal_id', '-')} "
            f"msg={msg}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers (avoid duplicate logs in Streamlit reloads)
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(SimpleStructuredFormatter())

    root.addHandler(handler)


def set_log_context(*, session_id: Optional[str] = None, goal_id: Optional[int] = None) -> None:
    if session_id is not None:
        session_id_var.set(session_id)
    if goal_id is not None:
        goal_id_var.set(str(goal_id))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
