from __future__ import annotations

import logging
import os
from typing import Union

LOG_LEVEL_ENV = "BOOKMAN_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Union[int, str], fallback: int = logging.INFO) -> int:
    """Turn a level name or number into a logging level, else ``fallback``."""
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).strip().upper(), None)
    return value if isinstance(value, int) else fallback


def configure_logging(default_level: Union[int, str] = logging.INFO) -> int:
    """Configure the root logger for bookman and return the level used.

    ``default_level`` usually comes from the ``logging.level`` setting; the
    BOOKMAN_LOG_LEVEL env var takes precedence when it names a valid level.
    """
    level = resolve_level(default_level)
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = resolve_level(level_name, fallback=level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level
