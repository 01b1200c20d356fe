# portal/utils/logger.py
"""
Logging setup shared by every module.
Console only by default. Serverless hosts collect stdout and usually have a
read-only filesystem. Set LOG_DIR to also keep a rotating portal.log on disk.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from portal.config import settings

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE = "portal.log"

_configured = False


def build_handlers(level: str, log_dir: Optional[str] = None) -> list:
    """Console handler, plus a 10 × 5MB rotating file handler when log_dir is given."""
    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=os.path.join(log_dir, LOG_FILE),
            maxBytes=5 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
        ))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
    return handlers


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    root = logging.getLogger()
    root.setLevel(level)
    for handler in build_handlers(level, settings.LOG_DIR):
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
