"""Logger configuration. All loggers of the application hang below the `arcane_chess` logger."""

import logging
import sys

from arcane_chess.core.config import get_settings

ROOT_LOGGER_NAME = "arcane_chess"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_root_logger() -> logging.Logger:
    """Attach the stdout handler once. Level comes from the settings."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root
    root.setLevel(get_settings().log_level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return a configured logger.

    Module names like `arcane_chess.chess.engine` are already children of the root logger,
    anything else gets prefixed so it still ends up at the same handler.
    """
    root = _configure_root_logger()
    if not name or name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: int | str) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
