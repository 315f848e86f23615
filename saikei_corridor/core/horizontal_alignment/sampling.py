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
Centerline sampling helpers: straight legs, fillet arcs, duplicate removal
and cumulative chainage.
"""

import math
from typing import List

from .curve_geometry import FilletGeometry
from .vector import SimpleVector


def sample_line(
    out: List[SimpleVector],
    start: SimpleVector,
    end: SimpleVector,
    step: float,
    include_end: bool = False
) -> None:
    """Append evenly spaced points from start toward end.

    The leg is split into max(1, ceil(length / step)) intervals. The end
    point is left out unless include_end is set, so the next piece of the
    centerline can start there.
    """
    length = start.distance_to(end)
    count = max(1, int(math.ceil(length / step))) if step > 0 else 1

    for i in range(count):
        out.append(start.lerp(end, i / count))
    if include_end:
        out.append(end.copy())


def sample_arc(out: List[SimpleVector], fillet: FilletGeometry, step: float) -> None:
    """Append fillet arc samples, both tangency points included."""
    length = fillet.arc_length
    count = max(2, int(math.ceil(length / step))) if step > 0 else 2

    for i in range(count):
        out.append(fillet.point_at(i / (count - 1)))


def dedupe(points: List[SimpleVector], epsilon: float) -> List[SimpleVector]:
    """Drop points coincident (within epsilon) with their predecessor."""
    result: List[SimpleVector] = []
    for point in points:
        if result and result[-1].is_close(point, epsilon):
            continue
        result.append(point)
    return result


def cumulative_distances(points: List[SimpleVector]) -> List[float]:
    """Prefix sums of segment lengths; first entry is 0."""
    if not points:
        return []

    chainages = [0.0]
    for prev, curr in zip(points, points[1:]):
        chainages.append(chainages[-1] + prev.distance_to(curr))
    return chainages


__all__ = ["sample_line", "sample_arc", "dedupe", "cumulative_distances"]
