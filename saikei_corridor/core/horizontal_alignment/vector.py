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
2D Vector Utilities for Horizontal Alignment
==============================================

Plan-view vector used for IPs, tangents, normals and sampled centerline
points. Pure Python; array output is produced later by the sweeper.
"""

import math


class SimpleVector:
    """Lightweight 2D plan-view vector.

    Attributes:
        x: Easting
        y: Northing

    Example:
        >>> a = SimpleVector(0.0, 0.0)
        >>> b = SimpleVector(100.0, 0.0)
        >>> (b - a).normalized().left_normal()
        SimpleVector(-0.000, 1.000)
    """

    __slots__ = ("x", "y")

    def __init__(self, x, y=0):
        """Build from coordinates or from an (x, y) tuple/list."""
        if isinstance(x, (list, tuple)):
            self.x = float(x[0])
            self.y = float(x[1])
        else:
            self.x = float(x)
            self.y = float(y)

    def __sub__(self, other):
        return SimpleVector(self.x - other.x, self.y - other.y)

    def __add__(self, other):
        return SimpleVector(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar):
        return SimpleVector(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        return SimpleVector(self.x / scalar, self.y / scalar)

    def __neg__(self):
        return SimpleVector(-self.x, -self.y)

    def __eq__(self, other):
        """Equality with a 1e-9 tolerance."""
        if not isinstance(other, SimpleVector):
            return False
        return self.is_close(other, 1e-9)

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"SimpleVector({self.x:.3f}, {self.y:.3f})"

    @property
    def length(self) -> float:
        """Vector magnitude."""
        return math.hypot(self.x, self.y)

    @property
    def length_squared(self) -> float:
        """Squared length (avoids sqrt for comparisons)."""
        return self.x * self.x + self.y * self.y

    @property
    def angle(self) -> float:
        """Angle in radians from positive X axis."""
        return math.atan2(self.y, self.x)

    def normalized(self) -> "SimpleVector":
        """Return unit vector in same direction, or the zero vector."""
        length = self.length
        if length > 0:
            return SimpleVector(self.x / length, self.y / length)
        return SimpleVector(0, 0)

    def dot(self, other: "SimpleVector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "SimpleVector") -> float:
        """2D cross product (z-component). Positive when other turns left."""
        return self.x * other.y - self.y * other.x

    def rotate(self, angle: float) -> "SimpleVector":
        """Rotate counter-clockwise by angle (radians)."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return SimpleVector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    def left_normal(self) -> "SimpleVector":
        """Vector rotated 90° counter-clockwise, i.e. (-y, x)."""
        return SimpleVector(-self.y, self.x)

    def lerp(self, other: "SimpleVector", t: float) -> "SimpleVector":
        """Linear interpolation toward other at parameter t."""
        return SimpleVector(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t
        )

    def is_close(self, other: "SimpleVector", epsilon: float) -> bool:
        """Component-wise comparison within epsilon."""
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon

    def copy(self) -> "SimpleVector":
        return SimpleVector(self.x, self.y)

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    def distance_to(self, other: "SimpleVector") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)


__all__ = ["SimpleVector"]
