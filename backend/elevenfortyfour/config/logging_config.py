# logging_config.py

import os
import logging
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s] [%(process)d] %(message)s'


def _rotating_handler(path: str, formatter: logging.Formatter, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5
    )
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(logs_dir: str = None):
    # Default to elevenfortyfour/logs - one level up from this file
    if logs_dir is None:
        root_dir = os.path.dirname(os.path.dirname(__file__))
        logs_dir = os.path.join(root_dir, "logs")

    try:
        os.makedirs(logs_dir, exist_ok=True)
    except OSError as e:
        print(f"Failed to create log directory {logs_dir}: {e}", file=sys.stderr)
        logs_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "logs_fallback")
        os.makedirs(logs_dir, exist_ok=True)

    # Reset root logger handlers to avoid duplicates
    root_logger = logging.getLogger()
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.setLevel(logging.INFO)
    root_logger.addHandler(console)

    root_logger.addHandler(
        _rotating_handler(os.path.join(logs_dir, "app.log"), formatter, logging.INFO)
    )

    # WARNING and ERROR only
    root_logger.addHandler(
        _rotating_handler(os.path.join(logs_dir, "errors.log"), formatter, logging.WARNING)
    )

    # Enrollment and notification events
    waitlist_logger = logging.getLogger("elevenfortyfour.waitlist")
    waitlist_logger.setLevel(logging.INFO)
    for handler in waitlist_logger.handlers[:]:
        waitlist_logger.removeHandler(handler)
    waitlist_logger.addHandler(
        _rotating_handler(os.path.join(logs_dir, "waitlist.log"), formatter, logging.INFO)
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root_logger.setLevel(logging.INFO)
