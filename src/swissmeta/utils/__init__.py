"""Shared helpers for Swiss Meta."""

# Swiss Meta
# Copyright (C) 2025  Swiss Meta developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import math
import random
from typing import Optional

PACKAGE_LOGGER = "swissmeta"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger under the package logger.

    The package logger gets a single stream handler the first time this is
    called; module loggers propagate to it.

    Args:
        name: Usually ``__name__`` of the calling module
        level: Level for the package logger on first configuration

    Returns:
        The configured logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(level)

    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of the package logger."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def create_rng(seed: Optional[int] = None) -> random.Random:
    """Create a random source, seeded when a seed is given."""
    return random.Random(seed) if seed is not None else random.Random()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    ``round()`` uses banker's rounding, which would give 2 for 2.5.
    """
    return int(math.floor(value + 0.5))
