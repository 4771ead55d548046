import logging
import os
import sys


def setup_logging(level: int | str | None = None) -> None:
    """Configure structured logging for the application.

    Without an explicit level, LOG_LEVEL from the environment is used (default INFO).
    """
    resolved = level if level is not None else os.getenv("LOG_LEVEL", "INFO").upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.setLevel(resolved)
    if not root.handlers:
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger. Use as: logger = get_logger(__name__)."""
    return logging.getLogger(name)
