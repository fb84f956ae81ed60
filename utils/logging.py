"""
Logging Setup

One root handler on stdout: a colored single-line format for local runs, or
one JSON object per line when LOG_JSON is set.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Transcript saved", extra={"transcript_id": transcript_id})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from config.settings import settings

CONSOLE_FORMAT = "%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}
RESET = "\033[0m"

# Chatty libraries kept at WARNING regardless of the app level
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "aiosqlite", "multipart")

# Context keys promoted to top-level JSON fields
CONTEXT_FIELDS = ("user_id", "transcript_id", "correction_id")

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ConsoleFormatter(logging.Formatter):
    """Pads and colors the level name without touching the shared record."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, "")
        record = logging.makeLogRecord(vars(record))
        record.levelname = f"{color}{record.levelname:8}{RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    user_id / transcript_id / correction_id passed through ``extra=`` become
    top-level fields; any other extras are nested under "extra".
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        for key in CONTEXT_FIELDS:
            if key in extra:
                payload[key] = extra.pop(key)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """
    Install the root handler. Safe to call more than once.

    Args:
        level: Level name; DEBUG when settings.DEBUG, otherwise INFO.
        json_format: Defaults to settings.LOG_JSON.
    """
    if level is None:
        level = "DEBUG" if settings.DEBUG else "INFO"
    if json_format is None:
        json_format = settings.LOG_JSON

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_learning_outcome(
    user_id: str,
    transcript_id: str,
    emitted: int,
    stored: int,
    failures: int
) -> None:
    """
    One summary line per learned-from edit.

    WARNING when any correction could not be stored, INFO otherwise.
    """
    logger = get_logger("personalization")
    context = {"user_id": user_id, "transcript_id": transcript_id}

    if failures:
        logger.warning(
            f"⚠️ LEARN | transcript={transcript_id} | emitted={emitted} stored={stored} failed={failures}",
            extra=context,
        )
    else:
        logger.info(
            f"✅ LEARN | transcript={transcript_id} | emitted={emitted} stored={stored}",
            extra=context,
        )
