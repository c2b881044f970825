"""Logging setup for the settings store.

- Console handler always.
- Optional file handler in `log_dir`, rotated daily (midnight, UTC).
- Retention: `retention_days` rotated files are kept, older ones removed.
- Level: `level` (INFO by default, unknown names fall back to INFO).
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "settings_store.log"

# Handlers installed by us, removed again on reconfiguration.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _parse_level(level: str) -> tuple[str, int]:
    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    return level_str, getattr(logging, level_str, logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_dir: str | None = None,
    retention_days: int = 30,
) -> None:
    global _file_handler, _console_handler

    level_str, log_level = _parse_level(level)
    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, _LOG_FILE),
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8",
            utc=True,
        )
        fh.suffix = "%Y-%m-%d"
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)
        _cleanup_old_logs(log_dir, retention_days)

    root.setLevel(log_level)

    # SQL echo is noise at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("settings_store").info(
        "Logging configured: level=%s, dir=%s, retention=%d days",
        level_str, log_dir or "-", retention_days,
    )


def _cleanup_old_logs(log_dir: str, retention_days: int) -> None:
    """Remove rotated log files older than retention_days."""
    cutoff = time.time() - (retention_days * 86400)
    for f in glob.glob(os.path.join(log_dir, _LOG_FILE + ".*")):
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
        except OSError:
            logging.getLogger(__name__).warning("Could not remove old log file %s", f, exc_info=True)
