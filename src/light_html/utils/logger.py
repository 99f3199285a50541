"""Central logging configuration for the library."""

import logging
from typing import Optional, Union

from rich.logging import RichHandler

_DEFAULT_LEVEL = logging.WARNING


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=_DEFAULT_LEVEL,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(show_path=False)],
        )
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of the root logger (e.g. ``"DEBUG"``)."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger().setLevel(level)
