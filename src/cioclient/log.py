# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Library logger for cioclient. Silent unless an application opts in."""

from __future__ import annotations

import logging
import os
from typing import TextIO

LOGGER_NAME = "cioclient"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def _level_from(value: int | str | None) -> int:
    if isinstance(value, int):
        return value
    name = (value or os.getenv("CIO_LOG_LEVEL") or "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: int | str | None = None, stream: TextIO | None = None) -> logging.Logger:
    """
    Send cioclient records to ``stream`` (stderr by default) at ``level``.

    The level falls back to CIO_LOG_LEVEL, then WARNING. Calling again swaps
    the handler installed by the previous call; the root logger is untouched.
    """
    for handler in list(logger.handlers):
        if getattr(handler, "_cioclient", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._cioclient = True
    logger.addHandler(handler)
    logger.setLevel(_level_from(level))
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
