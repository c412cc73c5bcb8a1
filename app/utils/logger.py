# app/utils/logger.py
"""
Logging setup shared by the API, the services and the scripts.

Console output always; a size-rotated file under LOG_DIR when LOG_FILE is set.
Third-party clients that log each request (httpx, passlib) are held at WARNING
so the admin log shows the fleet operations, not the transport chatter.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "passlib")

_configured = False


def _file_handler(level: str, fmt: logging.Formatter) -> RotatingFileHandler:
    log_dir = settings.LOG_DIR
    if not os.path.isabs(log_dir):
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
        log_dir = os.path.join(project_root, log_dir)
    os.makedirs(log_dir, exist_ok=True)

    # 10 files × 5MB
    handler = RotatingFileHandler(
        filename=os.path.join(log_dir, settings.LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    if settings.LOG_FILE:
        root.addHandler(_file_handler(level, fmt))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; the first call configures the handlers."""
    _configure_root_logger()
    return logging.getLogger(name)
