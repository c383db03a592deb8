"""Утилиты для настройки логирования приложения."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LEVEL_ENV = "BLOCKSEARCH_LOG_LEVEL"
FILE_ENV = "BLOCKSEARCH_LOG_FILE"
DEFAULT_LOG_FILE = "blocksearch.log"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Настроить логирование в файл и stderr.

    Explicit arguments win over ``BLOCKSEARCH_LOG_LEVEL`` / ``BLOCKSEARCH_LOG_FILE``.
    An empty log file name disables the file handler.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.getenv(LEVEL_ENV, "INFO")).upper()
    resolved_level = getattr(logging, level_name, logging.INFO)
    if log_file is None:
        log_file = os.getenv(FILE_ENV, DEFAULT_LOG_FILE)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handlers: list[logging.Handler] = []
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    # stdout carries the JSON result
    handlers.append(logging.StreamHandler(sys.stderr))

    root_logger.setLevel(resolved_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


__all__ = ["setup_logging", "LEVEL_ENV", "FILE_ENV"]
