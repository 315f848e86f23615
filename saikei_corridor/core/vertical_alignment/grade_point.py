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
Grade Control Point Module
==========================

A grade control point pins the design elevation at one chainage. Between
control points the grade is a straight line; there are no vertical curves.
"""

from dataclasses import dataclass


@dataclass
class GradeControlPoint:
    """Vertical control point.

    Attributes:
        chainage: Distance along the centerline (non-negative)
        elevation: Design elevation at this chainage

    Example:
        >>> point = GradeControlPoint(chainage=50.0, elevation=12.0)
        >>> point.as_tuple()
        (50.0, 12.0)
    """

    chainage: float
    elevation: float

    def __post_init__(self):
        if self.chainage < 0:
            raise ValueError(f"Chainage must be non-negative, got {self.chainage}")
        self.chainage = float(self.chainage)
        self.elevation = float(self.elevation)

    def as_tuple(self):
        return (self.chainage, self.elevation)

    def __str__(self) -> str:
        return f"Ch {self.chainage:.3f}, Elev {self.elevation:.3f}"


__all__ = ["GradeControlPoint"]
