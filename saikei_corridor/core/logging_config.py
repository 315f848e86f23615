# ==============================================================================
# Saikei Corridor - Road Corridor Geometry Kernel
# Copyright (c) 2025 Michael Yoder / Desert Springs Civil Engineering PLLC
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
#
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Primary Author: Michael Yoder
# Company: Desert Springs Civil Engineering PLLC
# ==============================================================================

"""
Logging Configuration
=====================

One logger tree for the whole kernel, rooted at "saikei". Modules ask for
their logger with get_logger(__name__); the package path is folded into the
prefix, so records from saikei_corridor.core.daylight appear under
saikei.core.daylight.

What goes where:
    DEBUG    - per-corner and per-station detail (skipped fillets, clamps,
               sweep and rebuild timings)
    INFO     - settings changes
    WARNING  - degraded but usable results (truncated daylight searches,
               clamped or ignored template input)

Levels may be given as logging constants or as names ("debug", "WARNING"),
so they can come straight from a configuration mapping.

Usage:
    from saikei_corridor.core.logging_config import get_logger, setup_logging

    setup_logging("debug")
    logger = get_logger(__name__)
    logger.debug("Fillet skipped at IP %d", index)
"""

import logging
import sys
from typing import Optional, Union

LOGGER_PREFIX = "saikei"

# Import path folded into LOGGER_PREFIX
PACKAGE_NAME = "saikei_corridor"

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
DETAILED_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s:%(lineno)d - %(message)s"

Level = Union[int, str]

_initialized = False


def _coerce_level(level: Level) -> int:
    """Logging level from a constant or a level name.

    Raises:
        ValueError: Unknown level name
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    level: Level = logging.INFO,
    detailed: bool = False,
    stream: Optional[object] = None
) -> logging.Logger:
    """Install a single stream handler on the "saikei" logger.

    Calling it again replaces the handler instead of stacking another one.

    Args:
        level: Level constant or name
        detailed: Add timestamps and line numbers to each record
        stream: Output stream (sys.stderr when None)

    Returns:
        The "saikei" logger
    """
    global _initialized

    level = _coerce_level(level)
    root_logger = logging.getLogger(LOGGER_PREFIX)

    if _initialized:
        root_logger.handlers.clear()

    root_logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT if detailed else DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # No duplicate records through the root logger
    root_logger.propagate = False

    _initialized = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a kernel module (typically called with __name__).

    Names outside the package are nested under the prefix, so every
    kernel logger shares the "saikei" handler.
    """
    if not _initialized:
        setup_logging()

    if name.startswith(PACKAGE_NAME):
        name = name.replace(PACKAGE_NAME, LOGGER_PREFIX, 1)
    elif not name.startswith(LOGGER_PREFIX):
        name = f"{LOGGER_PREFIX}.{name}"

    return logging.getLogger(name)


def set_log_level(level: Level) -> None:
    """Change the level of the "saikei" logger and its handlers at runtime."""
    level = _coerce_level(level)
    root_logger = logging.getLogger(LOGGER_PREFIX)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug() -> None:
    set_log_level(logging.DEBUG)


def disable_debug() -> None:
    """Back to INFO."""
    set_log_level(logging.INFO)


__all__ = [
    "setup_logging",
    "get_logger",
    "set_log_level",
    "enable_debug",
    "disable_debug",
    "LOGGER_PREFIX",
]
