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
Chainage Formatting Utilities

Converts between chainage notation (XX+XXX.XX) and numeric chainage values
measured along the built centerline.

Notation uses 1000 length-unit stations:
    0+000 = 0, 0+472.58 = 472.58, 10+000 = 10000
"""

from typing import Tuple, Union

from .logging_config import get_logger

logger = get_logger(__name__)

STATION_LENGTH = 1000.0


def parse_station(station_str: Union[str, float]) -> float:
    """
    Parse chainage input and convert to a numeric value.

    Accepts formats:
    - "10+472.58" -> 10472.58
    - "10+472" -> 10472.0
    - "472.58" -> 472.58 (no + symbol)
    - 472.58 -> 472.58 (already numeric)

    Args:
        station_str: Chainage string or numeric value

    Returns:
        Numeric chainage

    Raises:
        ValueError: If input format is invalid
    """
    if isinstance(station_str, bool):
        raise ValueError(f"Invalid chainage value: {station_str!r}")
    if isinstance(station_str, (int, float)):
        return float(station_str)

    text = str(station_str).strip()

    if '+' not in text:
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"Invalid chainage value: {text!r}")

    parts = text.split('+')
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid chainage format: {text!r}. Expected format: XX+XXX.XX")

    try:
        major = int(parts[0])
        minor = float(parts[1])
    except ValueError:
        raise ValueError(f"Invalid chainage format: {text!r}. Non-numeric values found.")

    if major < 0 or minor < 0 or minor >= STATION_LENGTH:
        raise ValueError(f"Invalid chainage format: {text!r}. Minor part must be 0-999.99")

    return major * STATION_LENGTH + minor


def format_station(station_value: float, decimals: int = 2, include_plus: bool = True) -> str:
    """
    Format a numeric chainage to standard notation.

    Args:
        station_value: Numeric chainage
        decimals: Number of decimal places (default: 2)
        include_plus: Include the + symbol (default: True)

    Returns:
        Formatted chainage string

    Examples:
        >>> format_station(10472.58)
        '10+472.58'
        >>> format_station(472.58)
        '0+472.58'
        >>> format_station(10000.0, decimals=0)
        '10+000'
    """
    if not include_plus:
        return f"{station_value:.{decimals}f}"

    # Round first so 999.999 carries into the next station
    rounded = round(station_value, decimals)
    major = int(rounded // STATION_LENGTH)
    minor = rounded - major * STATION_LENGTH

    if decimals > 0:
        return f"{major}+{minor:0{4 + decimals}.{decimals}f}"
    return f"{major}+{int(round(minor)):03d}"


def format_station_short(station_value: float) -> str:
    """
    Format a chainage without trailing zero decimals.

    Examples:
        >>> format_station_short(10000.0)
        '10+000'
        >>> format_station_short(472.5)
        '0+472.5'
    """
    text = format_station(station_value, decimals=2)
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def validate_station_input(station_str: str) -> Tuple[bool, str]:
    """
    Validate chainage input format.

    Returns:
        Tuple of (is_valid, error_message); error_message is empty when valid
    """
    try:
        parse_station(station_str)
        return True, ""
    except ValueError as e:
        logger.debug("Rejected chainage input %r: %s", station_str, e)
        return False, str(e)


__all__ = [
    "STATION_LENGTH",
    "parse_station",
    "format_station",
    "format_station_short",
    "validate_station_input",
]
