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
Grade Segments Module
=====================

Constant-grade segment between two adjacent grade control points.

Elevation equation:
    E(s) = E0 + g * (s - s0)
"""


class GradeSegment:
    """Constant grade (tangent) segment of the grade profile.

    Attributes:
        start_chainage: Starting chainage
        end_chainage: Ending chainage
        start_elevation: Elevation at start
        grade: Constant grade (decimal, e.g., 0.02 = 2%)

    Example:
        >>> segment = GradeSegment(0.0, 50.0, 10.0, 0.04)
        >>> segment.get_elevation(25.0)
        11.0
    """

    def __init__(
        self,
        start_chainage: float,
        end_chainage: float,
        start_elevation: float,
        grade: float
    ):
        if end_chainage <= start_chainage:
            raise ValueError(
                f"End chainage ({end_chainage}) must be > start chainage ({start_chainage})"
            )

        self.start_chainage = start_chainage
        self.end_chainage = end_chainage
        self.start_elevation = start_elevation
        self.grade = grade

    @classmethod
    def between(cls, start, end) -> "GradeSegment":
        """Build from two GradeControlPoints."""
        run = end.chainage - start.chainage
        grade = (end.elevation - start.elevation) / run if run > 0 else 0.0
        return cls(start.chainage, end.chainage, start.elevation, grade)

    @property
    def length(self) -> float:
        return self.end_chainage - self.start_chainage

    @property
    def end_elevation(self) -> float:
        return self.start_elevation + self.grade * self.length

    @property
    def grade_percent(self) -> float:
        return self.grade * 100

    def contains_chainage(self, chainage: float, tolerance: float = 1e-6) -> bool:
        """True if chainage lies in [start_chainage, end_chainage] (with tolerance)."""
        return (self.start_chainage - tolerance) <= chainage <= (self.end_chainage + tolerance)

    def get_elevation(self, chainage: float) -> float:
        """Elevation at chainage.

        Raises:
            ValueError: If chainage is outside segment bounds
        """
        if not self.contains_chainage(chainage):
            raise ValueError(
                f"Chainage {chainage:.3f} outside segment "
                f"[{self.start_chainage:.3f}, {self.end_chainage:.3f}]"
            )
        return self.start_elevation + self.grade * (chainage - self.start_chainage)

    def get_grade(self, chainage: float) -> float:
        """Grade is constant along the segment.

        Raises:
            ValueError: If chainage is outside segment bounds
        """
        if not self.contains_chainage(chainage):
            raise ValueError(
                f"Chainage {chainage:.3f} outside segment "
                f"[{self.start_chainage:.3f}, {self.end_chainage:.3f}]"
            )
        return self.grade

    def __repr__(self) -> str:
        return (
            f"GradeSegment({self.start_chainage:.1f}-{self.end_chainage:.1f}, "
            f"{self.grade_percent:+.2f}%)"
        )


__all__ = ["GradeSegment"]
