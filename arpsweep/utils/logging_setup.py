#!/usr/bin/env python3
"""
ArpSweep - Logging Setup
Copyright (C) 2025  Dorin Badea
GPLv3 License

Rotating file log under ~/.arpsweep/logs plus a quiet console handler.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from arpsweep.utils.paths import get_invoking_home_dir

LOGGER_NAME = "arpsweep"


class _NoTracebackFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        exc_info = record.exc_info
        stack_info = record.stack_info
        record.exc_info = None
        record.stack_info = None
        try:
            return super().format(record)
        finally:
            record.exc_info = exc_info
            record.stack_info = stack_info


def get_log_dir() -> str:
    return os.path.join(get_invoking_home_dir(), ".arpsweep", "logs")


def setup_logging(verbose: bool = False, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the `arpsweep` logger with rotation.

    Args:
        verbose: Console shows DEBUG and up (otherwise WARNING and up)
        log_dir: Override for the log directory

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    file_handler = None
    try:
        target_dir = log_dir or get_log_dir()
        os.makedirs(target_dir, exist_ok=True)
        log_file = os.path.join(target_dir, f"arpsweep_{datetime.now().strftime('%Y%m%d')}.log")
        fmt = logging.Formatter(
            "%(asctime)s - [%(levelname)s] - %(funcName)s:%(lineno)d - %(message)s"
        )
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(fmt)
        file_handler.setLevel(logging.DEBUG)
    except OSError:
        file_handler = None

    ch = logging.StreamHandler(stream=getattr(sys, "__stderr__", sys.stderr))
    ch.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ch.setFormatter(_NoTracebackFormatter("%(levelname)s: %(message)s"))

    if not logger.handlers:
        if file_handler:
            logger.addHandler(file_handler)
        logger.addHandler(ch)
    else:
        has_file = any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        if file_handler and not has_file:
            logger.addHandler(file_handler)
        elif file_handler:
            file_handler.close()
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(ch.level)

    if file_handler is None:
        logger.warning("File logging disabled (permission or path issue)")
    logger.debug("ArpSweep session start (PID %s, user %s)", os.getpid(),
                 os.getenv("SUDO_USER", os.getenv("USER", "unknown")))
    return logger
