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
Grade Profile Module
====================

Piecewise-linear vertical alignment over chainage.

The profile always carries a control point at chainage 0 and one at the
alignment's total length. Endpoint elevations come from the terrain under
the centerline's first and last stations unless explicitly overridden.
Interior points can be inserted, moved and removed; their chainages stay
strictly between their neighbours.
"""

import bisect
from typing import List, Optional, Tuple

from ..logging_config import get_logger
from .grade_point import GradeControlPoint
from .segments import GradeSegment

logger = get_logger(__name__)

# Minimum gap kept between an interior point and its neighbours
INTERIOR_MARGIN = 0.001


class GradeProfile:
    """Editable piecewise-linear grade.

    Attributes:
        points: Control points sorted by chainage (first at 0, last at
            total_length)
        total_length: Alignment length the profile spans
        start_override: Explicit start elevation, or None for terrain
        end_override: Explicit end elevation, or None for terrain
        version: Incremented on every edit

    Example:
        >>> grade = GradeProfile(100.0, 10.0, 8.0)
        >>> grade.insert_point(50.0)
        1
        >>> grade.move_point(1, elevation=12.0)
        >>> grade.evaluate(25.0)
        11.0
    """

    def __init__(
        self,
        total_length: float = 0.0,
        start_elevation: float = 0.0,
        end_elevation: float = 0.0,
        epsilon: float = 1e-6
    ):
        self.epsilon = epsilon
        self.total_length = max(0.0, float(total_length))
        self.terrain_start = float(start_elevation)
        self.terrain_end = float(end_elevation)
        self.start_override: Optional[float] = None
        self.end_override: Optional[float] = None
        self.points: List[GradeControlPoint] = []
        self.version = 0

        self._reset_points()

    @classmethod
    def from_alignment(cls, builder, terrain, epsilon: float = 1e-6) -> "GradeProfile":
        """Profile spanning a built centerline, endpoints on the terrain."""
        start, end = terrain_endpoints(builder, terrain)
        return cls(builder.length, start, end, epsilon=epsilon)

    @classmethod
    def from_points(cls, pairs: List[Tuple[float, float]], epsilon: float = 1e-6) -> "GradeProfile":
        """Profile from explicit (chainage, elevation) pairs.

        The first pair is taken as chainage 0 and the last fixes the total
        length; both endpoint elevations become overrides.
        """
        ordered = sorted(pairs, key=lambda p: p[0])
        if not ordered:
            return cls(epsilon=epsilon)

        origin = ordered[0][0]
        length = ordered[-1][0] - origin
        profile = cls(length, ordered[0][1], ordered[-1][1], epsilon=epsilon)
        profile.start_override = float(ordered[0][1])
        profile.end_override = float(ordered[-1][1]) if length > epsilon else None

        for chainage, elevation in ordered[1:-1]:
            index = profile.insert_point(chainage - origin)
            if index is not None:
                profile.points[index].elevation = float(elevation)
        profile.version += 1
        return profile

    # ========================================================================
    # STATE
    # ========================================================================

    @property
    def start_elevation(self) -> float:
        return self.start_override if self.start_override is not None else self.terrain_start

    @property
    def end_elevation(self) -> float:
        return self.end_override if self.end_override is not None else self.terrain_end

    @property
    def chainages(self) -> List[float]:
        return [p.chainage for p in self.points]

    @property
    def num_points(self) -> int:
        return len(self.points)

    def _reset_points(self) -> None:
        if self.total_length > self.epsilon:
            self.points = [
                GradeControlPoint(0.0, self.start_elevation),
                GradeControlPoint(self.total_length, self.end_elevation),
            ]
        else:
            self.points = [GradeControlPoint(0.0, self.start_elevation)]

    def _touch(self) -> None:
        self.version += 1

    def _apply_endpoint_elevations(self) -> None:
        if self.points:
            self.points[0].elevation = self.start_elevation
        if len(self.points) > 1:
            self.points[-1].elevation = self.end_elevation

    def set_terrain_endpoints(self, start_elevation: float, end_elevation: float) -> None:
        """Update the terrain-derived endpoint elevations.

        Endpoints without an override follow the new values.
        """
        self.terrain_start = float(start_elevation)
        self.terrain_end = float(end_elevation)
        self._apply_endpoint_elevations()
        self._touch()

    def set_endpoint_overrides(
        self,
        start: Optional[float] = None,
        end: Optional[float] = None
    ) -> None:
        """Pin endpoint elevations. None leaves that endpoint unchanged."""
        if start is not None:
            self.start_override = float(start)
        if end is not None:
            self.end_override = float(end)
        self._apply_endpoint_elevations()
        self._touch()

    def clear_endpoint_overrides(self) -> None:
        """Return both endpoints to the terrain-derived elevations."""
        self.start_override = None
        self.end_override = None
        self._apply_endpoint_elevations()
        self._touch()

    def rescale(self, total_length: float) -> None:
        """Follow a change of alignment length.

        Interior chainages scale proportionally; the end point moves to the
        new length. A zero-length alignment keeps only the start point.
        """
        new_length = max(0.0, float(total_length))
        old_length = self.total_length
        self.total_length = new_length

        if new_length <= self.epsilon or old_length <= self.epsilon or len(self.points) < 2:
            self._reset_points()
        elif abs(new_length - old_length) > self.epsilon:
            factor = new_length / old_length
            for point in self.points[1:-1]:
                point.chainage *= factor
            self.points[-1].chainage = new_length
            logger.debug("Grade rescaled %.3f -> %.3f", old_length, new_length)

        self._touch()

    # ========================================================================
    # EVALUATION
    # ========================================================================

    def _fallback(self, chainage: float) -> float:
        if self.total_length <= self.epsilon:
            return self.start_elevation
        t = max(0.0, min(1.0, chainage / self.total_length))
        return self.start_elevation + (self.end_elevation - self.start_elevation) * t

    def evaluate(self, chainage: float) -> float:
        """Design elevation at chainage.

        Chainages outside the profile clamp to the nearest endpoint.
        """
        if len(self.points) < 2:
            return self._fallback(chainage)

        first = self.points[0]
        last = self.points[-1]
        if chainage <= first.chainage:
            return first.elevation
        if chainage >= last.chainage:
            return last.elevation

        i = bisect.bisect_right(self.chainages, chainage) - 1
        a = self.points[i]
        b = self.points[i + 1]
        t = (chainage - a.chainage) / (b.chainage - a.chainage)
        return a.elevation + (b.elevation - a.elevation) * t

    def grade_at(self, chainage: float) -> float:
        """Grade (decimal) of the segment containing chainage.

        Outside the profile the grade of the end segment is returned. At a
        control point the outgoing segment's grade is used.
        """
        segments = self.segments
        if not segments:
            if self.total_length <= self.epsilon:
                return 0.0
            return (self.end_elevation - self.start_elevation) / self.total_length

        i = bisect.bisect_right(self.chainages, chainage) - 1
        i = max(0, min(i, len(segments) - 1))
        return segments[i].grade

    @property
    def segments(self) -> List[GradeSegment]:
        """Constant-grade segments between consecutive control points."""
        return [
            GradeSegment.between(a, b)
            for a, b in zip(self.points, self.points[1:])
            if b.chainage > a.chainage
        ]

    def sample(self, interval: float = 5.0, include_points: bool = True) -> List[Tuple[float, float, float]]:
        """(chainage, elevation, grade) samples along the profile.

        Args:
            interval: Chainage interval for sampling
            include_points: Whether to include exact control point chainages

        Returns:
            List of (chainage, elevation, grade) tuples sorted by chainage
        """
        if interval <= 0:
            raise ValueError(f"Sample interval must be positive, got {interval}")

        chainages = []
        s = 0.0
        while s < self.total_length:
            chainages.append(s)
            s += interval
        chainages.append(self.total_length)

        if include_points:
            chainages.extend(self.chainages)

        samples = []
        last = -float('inf')
        for s in sorted(chainages):
            if s - last > self.epsilon:
                samples.append((s, self.evaluate(s), self.grade_at(s)))
                last = s
        return samples

    # ========================================================================
    # EDITS
    # ========================================================================

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self.points)):
            raise IndexError(
                f"Grade point index {index} out of range [0, {len(self.points) - 1}]"
            )

    def _is_endpoint(self, index: int) -> bool:
        return index == 0 or index == len(self.points) - 1

    def insert_point(self, chainage: float) -> Optional[int]:
        """Insert an interior control point on the current grade.

        The elevation is sampled from the profile, so the grade line is
        unchanged by the insertion.

        Returns:
            Index of the point at chainage (existing or new), or None when
            chainage is not strictly inside the profile
        """
        if len(self.points) < 2:
            logger.debug("Cannot insert grade point on a zero-length profile")
            return None

        for i, point in enumerate(self.points):
            if abs(point.chainage - chainage) <= self.epsilon:
                return i

        if not (self.points[0].chainage < chainage < self.points[-1].chainage):
            logger.debug("Grade point at %.3f is outside the profile", chainage)
            return None

        elevation = self.evaluate(chainage)
        index = bisect.bisect_right(self.chainages, chainage)
        self.points.insert(index, GradeControlPoint(chainage, elevation))
        self._touch()
        return index

    def move_point(
        self,
        index: int,
        chainage: Optional[float] = None,
        elevation: Optional[float] = None
    ) -> None:
        """Move a control point.

        Interior points take any elevation; their chainage is clamped
        between the neighbours (keeping INTERIOR_MARGIN). Endpoints only
        change elevation, which becomes an endpoint override.

        Raises:
            IndexError: If index out of range
        """
        self._check_index(index)
        point = self.points[index]

        if self._is_endpoint(index):
            if elevation is not None:
                if index == 0:
                    self.start_override = float(elevation)
                else:
                    self.end_override = float(elevation)
                point.elevation = float(elevation)
            self._touch()
            return

        if chainage is not None:
            low = self.points[index - 1].chainage + INTERIOR_MARGIN
            high = self.points[index + 1].chainage - INTERIOR_MARGIN
            if low > high:
                point.chainage = 0.5 * (low + high)
            else:
                point.chainage = max(low, min(high, float(chainage)))

        if elevation is not None:
            point.elevation = float(elevation)

        self._touch()

    def remove_point(self, index: int) -> None:
        """Remove an interior control point.

        Raises:
            IndexError: If index out of range
            ValueError: If index refers to an endpoint
        """
        self._check_index(index)
        if self._is_endpoint(index):
            raise ValueError("Grade endpoints cannot be removed")
        self.points.pop(index)
        self._touch()

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate(self) -> Tuple[bool, List[str]]:
        """Check ordering and endpoint placement.

        Returns:
            Tuple of (is_valid, list_of_warnings)
        """
        warnings = []

        if self.total_length > self.epsilon and len(self.points) < 2:
            warnings.append("Need at least 2 grade points to span the alignment")
            return False, warnings

        if self.points and abs(self.points[0].chainage) > self.epsilon:
            warnings.append("First grade point is not at chainage 0")

        if len(self.points) > 1 and abs(self.points[-1].chainage - self.total_length) > self.epsilon:
            warnings.append(
                f"Last grade point at {self.points[-1].chainage:.3f} "
                f"does not match length {self.total_length:.3f}"
            )

        for i, (a, b) in enumerate(zip(self.points, self.points[1:])):
            if b.chainage <= a.chainage:
                warnings.append(f"Grade points {i} and {i + 1} are not strictly increasing")

        is_valid = len(warnings) == 0
        return is_valid, warnings

    def summary(self) -> str:
        """Multi-line text summary of the profile."""
        lines = [
            f"Grade Profile: length {self.total_length:.1f}",
            f"  Start: {self.start_elevation:.3f}"
            f"{' (override)' if self.start_override is not None else ''}",
            f"  End: {self.end_elevation:.3f}"
            f"{' (override)' if self.end_override is not None else ''}",
            "",
            "Points:",
        ]
        for i, point in enumerate(self.points):
            lines.append(f"  {i}: {point}")
        lines.append("")
        lines.append("Segments:")
        for i, segment in enumerate(self.segments):
            lines.append(f"  {i}: {segment}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"GradeProfile({self.num_points} points, {self.total_length:.1f})"


def terrain_endpoints(builder, terrain) -> Tuple[float, float]:
    """Terrain elevation under the first and last stations."""
    if not builder.stations:
        return 0.0, 0.0
    first = builder.stations[0]
    last = builder.stations[-1]
    return float(terrain(first.x, first.y)), float(terrain(last.x, last.y))


__all__ = ["GradeProfile", "INTERIOR_MARGIN", "terrain_endpoints"]
