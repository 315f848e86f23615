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
Daylight Solver
===============

Finds where a constant cut or fill slope, run outward from the template's
outer edge, meets the terrain.

For an edge at design elevation z0 and outward plan direction d:

    f(s) = z0 + dz/ds * s - terrain(edge + d * s)

The slope climbs (cut) when the terrain at the edge is above the design
edge and falls (fill) otherwise. When the two are exactly equal the slope
climbs; that choice is arbitrary and may misclassify exactly flat ground.
f is marched outward in fixed steps until it changes sign, then the root is
refined by bisection. If no sign change occurs within the maximum search
distance, the point at that distance is returned with found=False.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .components.base_component import Side
from .horizontal_alignment.vector import SimpleVector
from .logging_config import get_logger
from .terrain import HeightFunction

logger = get_logger(__name__)


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


@dataclass
class DaylightSettings:
    """Root search parameters.

    The defaults suit terrain features a few length units across; they are
    empirical, not derived.

    Attributes:
        step: Marching step along the slope
        max_distance: Search gives up beyond this horizontal distance
        iterations: Bisection iterations after a sign change
        epsilon: Floor for the H:V ratio
    """
    step: float = 2.0
    max_distance: float = 200.0
    iterations: int = 24
    epsilon: float = 1e-6

    def validate(self) -> Tuple[bool, List[str]]:
        warnings = []
        if self.step <= 0:
            warnings.append(f"step must be positive, got {self.step}")
        if self.max_distance < 0:
            warnings.append(f"max_distance must be non-negative, got {self.max_distance}")
        if self.iterations < 0:
            warnings.append(f"iterations must be non-negative, got {self.iterations}")
        if self.epsilon <= 0:
            warnings.append(f"epsilon must be positive, got {self.epsilon}")
        return len(warnings) == 0, warnings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DaylightPoint:
    """Daylight result for one side of one station.

    Attributes:
        side: Side of the centerline
        station_index: Index of the station in the centerline
        chainage: Station chainage
        distance: Horizontal distance from the edge to the result
        x: Result easting
        y: Result northing
        z: Terrain elevation at the result
        slope_z: Design slope elevation at the result
        found: False when the search was truncated at max_distance
        edge_x: Edge easting
        edge_y: Edge northing
        edge_offset: Signed transverse offset of the edge
        edge_elevation: Design elevation of the edge
        is_cut: True when the slope climbs from the edge
    """
    side: Side
    station_index: int
    chainage: float
    distance: float
    x: float
    y: float
    z: float
    slope_z: float
    found: bool
    edge_x: float
    edge_y: float
    edge_offset: float
    edge_elevation: float
    is_cut: bool

    @property
    def residual(self) -> float:
        """Slope elevation minus terrain at the result (f(s*))."""
        return self.slope_z - self.z

    @property
    def offset(self) -> float:
        """Signed transverse offset of the result from the centerline."""
        return self.edge_offset + self.side.sign * self.distance

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class SlopeSearch:
    """Raw outcome of one root search."""
    distance: float
    found: bool
    slope_z: float
    direction_sign: int


class DaylightSolver:
    """
    Slope/terrain intersection per side per station.

    Each search is independent and depends only on the terrain, the edge
    and the slope; no state is shared between searches.

    Example:
        >>> solver = DaylightSolver(lambda x, y: 8.0)
        >>> result = solver.search(0.0, 0.0, 10.0, SimpleVector(1.0, 0.0), 2.0)
        >>> round(result.distance, 6), result.found
        (4.0, True)
    """

    def __init__(self, terrain: HeightFunction, settings: Optional[DaylightSettings] = None):
        self.terrain = terrain
        self.settings = settings or DaylightSettings()

    def search(
        self,
        edge_x: float,
        edge_y: float,
        edge_z: float,
        direction: SimpleVector,
        slope_ratio: float
    ) -> SlopeSearch:
        """March and bisect along one outward direction.

        Args:
            edge_x: Edge easting
            edge_y: Edge northing
            edge_z: Design elevation at the edge
            direction: Unit outward plan direction
            slope_ratio: H:V of the daylight slope (2 means 2 across, 1 up)

        Returns:
            SlopeSearch with the root distance, or max_distance and
            found=False when no sign change was met
        """
        settings = self.settings
        terrain = self.terrain

        direction_sign = _sign(terrain(edge_x, edge_y) - edge_z) or 1
        dz_ds = direction_sign / max(settings.epsilon, slope_ratio)

        def f(s: float) -> float:
            return (edge_z + dz_ds * s) - terrain(edge_x + direction.x * s, edge_y + direction.y * s)

        max_distance = max(0.0, settings.max_distance)
        step = settings.step if settings.step > 0 else max_distance

        s0, f0 = 0.0, f(0.0)
        if max_distance <= 0 or step <= 0:
            return SlopeSearch(0.0, f0 == 0, edge_z, direction_sign)

        s1 = min(max_distance, step)
        f1 = f(s1)
        while _sign(f0) == _sign(f1) and s1 < max_distance:
            s0, f0 = s1, f1
            s1 = min(max_distance, s1 + step)
            f1 = f(s1)

        if _sign(f0) == _sign(f1):
            return SlopeSearch(s1, False, edge_z + dz_ds * s1, direction_sign)

        a, fa = s0, f0
        b = s1
        for _ in range(settings.iterations):
            m = 0.5 * (a + b)
            fm = f(m)
            if _sign(fa) == _sign(fm):
                a, fa = m, fm
            else:
                b = m
        root = 0.5 * (a + b)
        return SlopeSearch(root, True, edge_z + dz_ds * root, direction_sign)

    def solve(self, station, side: Side, edge, slope_ratio: float) -> DaylightPoint:
        """Daylight point for one side of one station.

        Args:
            station: Centerline Station
            side: Side being solved
            edge: Outer-edge Breakpoint of that side
            slope_ratio: H:V of the daylight slope

        Returns:
            DaylightPoint
        """
        edge_x = station.x + station.normal.x * edge.offset
        edge_y = station.y + station.normal.y * edge.offset
        direction = station.normal * side.sign

        result = self.search(edge_x, edge_y, edge.elevation, direction, slope_ratio)

        x = edge_x + direction.x * result.distance
        y = edge_y + direction.y * result.distance

        return DaylightPoint(
            side=side,
            station_index=station.index,
            chainage=station.chainage,
            distance=result.distance,
            x=x,
            y=y,
            z=float(self.terrain(x, y)),
            slope_z=result.slope_z,
            found=result.found,
            edge_x=edge_x,
            edge_y=edge_y,
            edge_offset=edge.offset,
            edge_elevation=edge.elevation,
            is_cut=result.direction_sign > 0,
        )

    def solve_sections(self, sections, template) -> Dict[Side, List[DaylightPoint]]:
        """Daylight points for every swept section.

        Sides whose daylight component is disabled get an empty list.
        """
        results: Dict[Side, List[DaylightPoint]] = {Side.LEFT: [], Side.RIGHT: []}

        for side in Side:
            daylight = template.daylight(side)
            if daylight is None:
                continue
            for section in sections:
                side_section = section.side(side)
                results[side].append(
                    self.solve(section.station, side, side_section.outer_edge, daylight.slope_ratio)
                )

        truncated = sum(1 for side in Side for p in results[side] if not p.found)
        if truncated:
            logger.warning(
                "Daylight search truncated at %.1f on %d side(s)",
                self.settings.max_distance, truncated
            )
        return results


def daylight_surface(points: List[DaylightPoint]) -> Tuple[np.ndarray, np.ndarray]:
    """Triangle strip from the template edge to the daylight line.

    Faces wind counter-clockwise seen from above.

    Args:
        points: Daylight points of one side, in station order

    Returns:
        (positions (2N x 3), indices (2(N-1) x 3)); empty arrays for fewer
        than 2 points
    """
    if len(points) < 2:
        return np.zeros((0, 3)), np.zeros((0, 3), dtype=np.int64)

    positions = np.empty((2 * len(points), 3))
    for r, p in enumerate(points):
        positions[2 * r] = (p.edge_x, p.edge_y, p.edge_elevation)
        positions[2 * r + 1] = (p.x, p.y, p.z)

    faces = []
    for r in range(len(points) - 1):
        i0 = 2 * r
        i1 = i0 + 1
        i2 = i0 + 2
        i3 = i2 + 1
        if points[0].side is Side.LEFT:
            faces.append((i0, i2, i1))
            faces.append((i1, i2, i3))
        else:
            faces.append((i0, i1, i2))
            faces.append((i1, i3, i2))

    return positions, np.array(faces, dtype=np.int64)


__all__ = [
    "DaylightSettings",
    "DaylightPoint",
    "DaylightSolver",
    "SlopeSearch",
    "daylight_surface",
]
