from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from src.core.runtime_paths import logs_dir

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_HANDLER_NAME = "paste_transform.console"


def default_log_file() -> Path:
    return logs_dir() / "paste_transform.log"


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _has_file_handler(logger: logging.Logger, target: Path) -> bool:
    wanted = Path(os.path.abspath(target))
    return any(
        isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == wanted
        for handler in logger.handlers
    )


def configure_logging(log_file: Path | None = None, debug_mode: bool = False) -> Path:
    target = log_file or default_log_file()
    target.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    if not _has_file_handler(root_logger, target):
        file_handler = RotatingFileHandler(
            filename=target,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(_formatter())
        root_logger.addHandler(file_handler)

    set_debug_logging(debug_mode)
    return target


def set_debug_logging(enabled: bool) -> None:
    """Follow the rule set's debug flag.

    With debug mode on, the root logger drops to DEBUG and every record is
    echoed to stderr as well as the log file.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if enabled else logging.INFO)
    console = next(
        (handler for handler in root_logger.handlers if handler.get_name() == CONSOLE_HANDLER_NAME),
        None,
    )
    if enabled and console is None:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(_formatter())
        root_logger.addHandler(console)
    elif not enabled and console is not None:
        root_logger.removeHandler(console)
        console.close()
