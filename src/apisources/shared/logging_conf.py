# src/apisources/shared/logging_conf.py
"""
Logging Configuration - Handlers for the apisources Loggers

Library modules only create named loggers (``apisources.*``); nothing is
emitted until an application installs handlers. ``setup_logging`` is that
entry point for the example runner and for scripts embedding the client.

Files that USE this module:
- apisources.app (setup_logging, driven by Settings.log_* fields)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "apisources.log"


def _resolve_log_path(
    log_file: Optional[Union[str, Path]], log_dir: Optional[Union[str, Path]]
) -> Optional[Path]:
    """Return the log file path (log_dir wins over log_file), creating its directory."""
    if log_dir:
        path = Path(log_dir) / LOG_FILENAME
    elif log_file:
        path = Path(log_file)
    else:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_stdout: Optional[bool] = None,
) -> None:
    """
    Install root handlers for provider and facade log records.

    Records go to stdout, to a size-rotated file, or both. Calling this
    again replaces the previous handlers.

    Args:
        level: Level as an int or a name such as "DEBUG"
        log_file: Explicit log file path
        log_dir: Directory holding apisources.log (takes precedence over log_file)
        max_bytes: Rotation threshold per file
        backup_count: Rotated files kept
        log_stdout: Write to stdout; None reads APISOURCES_LOG_STDOUT
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if log_stdout is None:
        log_stdout = os.environ.get("APISOURCES_LOG_STDOUT", "true").lower() == "true"

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers = []

    log_path = _resolve_log_path(log_file, log_dir)
    if log_path is not None:
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        )

    # stdout when requested, or when no file is configured
    if log_stdout or not handlers:
        handlers.insert(0, logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).info(
        "Logging configured: %s, level=%s",
        f"file={log_path}" if log_path else "stdout",
        logging.getLevelName(level),
    )
