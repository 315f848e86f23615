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
Corridor Sweeper
================

Sweeps the cross-section template along the centerline.

At every station the grade profile gives the centerline elevation, the
template gives the breakpoint chain on both sides, and each breakpoint is
placed in plan along the station's left normal:

    (x + nx * offset, y + ny * offset, elevation)

Every enabled component on each side becomes a closed triangulated solid:
top strip, bottom strip, inner and outer walls, and start/end caps. Faces
wind counter-clockwise seen from outside the solid. Every breakpoint tag
becomes a 3D boundary string along the corridor.

Vertex layout of a solid with k columns per station (row r = station):

    top(r, c)    = r * 2k + c
    bottom(r, c) = r * 2k + k + c
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .components.base_component import ComponentType, PointTags, Side
from .components.template import Breakpoint, ComponentProfile, CrossSectionTemplate, SideSection
from .horizontal_alignment.builder import Station
from .logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class SweptSection:
    """Template evaluated at one station."""
    station: Station
    center_elevation: float
    left: SideSection
    right: SideSection

    @property
    def chainage(self) -> float:
        return self.station.chainage

    def side(self, side: Side) -> SideSection:
        return self.left if side is Side.LEFT else self.right

    def world(self, offset: float, elevation: float) -> Tuple[float, float, float]:
        """Plan position of a transverse offset, with the given elevation."""
        x, y = self.station.offset_point(offset)
        return (x, y, elevation)

    def profile(self) -> List[Breakpoint]:
        """Full chain from the right outer edge to the left outer edge."""
        right = [bp for bp in reversed(self.right.breakpoints) if bp.tag != PointTags.CENTERLINE]
        return right + list(self.left.breakpoints)


@dataclass
class ComponentSolid:
    """Closed triangle mesh of one component on one side.

    Attributes:
        name: e.g. "PAVEMENT_L"
        component_type: Producing component
        side: Side of the centerline
        column_count: Top columns per station (k)
        positions: (N * 2k) x 3 vertex array
        indices: M x 3 triangle index array
    """
    name: str
    component_type: ComponentType
    side: Side
    column_count: int
    positions: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def face_count(self) -> int:
        return len(self.indices)


@dataclass
class MeshStats:
    """Statistics from a sweep."""
    vertex_count: int = 0
    face_count: int = 0
    generation_time: float = 0.0
    station_count: int = 0
    solid_count: int = 0


@dataclass
class SweepResult:
    """Everything one sweep produces.

    Attributes:
        sections: SweptSection per station
        solids: ComponentSolid per enabled component per side
        strings: Breakpoint tag -> N x 3 boundary string
        stats: MeshStats
    """
    sections: List[SweptSection] = field(default_factory=list)
    solids: List[ComponentSolid] = field(default_factory=list)
    strings: Dict[str, np.ndarray] = field(default_factory=dict)
    stats: MeshStats = field(default_factory=MeshStats)

    @property
    def is_empty(self) -> bool:
        return not self.solids

    def solid(self, name: str) -> Optional[ComponentSolid]:
        for solid in self.solids:
            if solid.name == name:
                return solid
        return None


# =============================================================================
# Mesh Topology
# =============================================================================

def solid_indices(station_count: int, column_count: int) -> np.ndarray:
    """Triangle indices of a closed solid with k top and k bottom columns.

    Winding is outward for columns running along the left normal; flip the
    last two indices of every face for columns running the other way.

    Args:
        station_count: Number of rows (N >= 2)
        column_count: Columns per row (k >= 2)

    Returns:
        (4k(N-1) + 4(k-1)) x 3 int array
    """
    k = column_count
    stride = 2 * k

    def top(r, c):
        return r * stride + c

    def bottom(r, c):
        return r * stride + k + c

    faces = []

    for r in range(station_count - 1):
        # Top and bottom strips
        for c in range(k - 1):
            faces.append((top(r, c), top(r + 1, c), top(r, c + 1)))
            faces.append((top(r, c + 1), top(r + 1, c), top(r + 1, c + 1)))
            faces.append((bottom(r, c), bottom(r, c + 1), bottom(r + 1, c)))
            faces.append((bottom(r, c + 1), bottom(r + 1, c + 1), bottom(r + 1, c)))

        # Inner wall
        faces.append((bottom(r, 0), bottom(r + 1, 0), top(r, 0)))
        faces.append((bottom(r + 1, 0), top(r + 1, 0), top(r, 0)))

        # Outer wall
        last = k - 1
        faces.append((bottom(r, last), top(r, last), bottom(r + 1, last)))
        faces.append((bottom(r + 1, last), top(r, last), top(r + 1, last)))

    end = station_count - 1
    for c in range(k - 1):
        faces.append((bottom(0, c), top(0, c), bottom(0, c + 1)))
        faces.append((bottom(0, c + 1), top(0, c), top(0, c + 1)))
        faces.append((bottom(end, c), bottom(end, c + 1), top(end, c)))
        faces.append((bottom(end, c + 1), top(end, c + 1), top(end, c)))

    return np.array(faces, dtype=np.int64).reshape(-1, 3)


# =============================================================================
# Sweeper
# =============================================================================

class CorridorSweeper:
    """
    Sweeps a CrossSectionTemplate along a centerline under a GradeProfile.

    The sweeper holds no geometry between calls; sweep() always builds a
    fresh SweepResult.

    Example:
        >>> sweeper = CorridorSweeper(CrossSectionTemplate(), grade)
        >>> result = sweeper.sweep(builder.stations)
        >>> [s.name for s in result.solids]
        ['PAVEMENT_L', 'KERB_L', 'FOOTPATH_L', 'PAVEMENT_R', 'KERB_R', 'FOOTPATH_R']
    """

    def __init__(self, template: CrossSectionTemplate, grade):
        self.template = template
        self.grade = grade

    def section_at(self, station: Station) -> SweptSection:
        """Evaluate the template at one station."""
        center = self.grade.evaluate(station.chainage)
        return SweptSection(
            station=station,
            center_elevation=center,
            left=self.template.side_section(Side.LEFT, center),
            right=self.template.side_section(Side.RIGHT, center),
        )

    def sweep(self, stations: List[Station]) -> SweepResult:
        """
        Build sections, component solids and boundary strings.

        Args:
            stations: Centerline stations in chainage order

        Returns:
            SweepResult (empty for fewer than 2 stations)
        """
        start_time = time.time()

        if len(stations) < 2:
            logger.debug("Sweep skipped: %d station(s)", len(stations))
            return SweepResult(stats=MeshStats(station_count=len(stations)))

        sections = [self.section_at(station) for station in stations]

        solids = []
        for side in Side:
            for index, profile in enumerate(sections[0].side(side).components):
                solids.append(self._build_solid(sections, side, index, profile))

        strings = self._build_strings(sections)

        stats = MeshStats(
            vertex_count=sum(s.vertex_count for s in solids),
            face_count=sum(s.face_count for s in solids),
            generation_time=time.time() - start_time,
            station_count=len(sections),
            solid_count=len(solids),
        )

        logger.debug(
            "Corridor swept: %d stations, %d solids, %d vertices, %d faces in %.3fs",
            stats.station_count, stats.solid_count, stats.vertex_count,
            stats.face_count, stats.generation_time
        )

        return SweepResult(sections=sections, solids=solids, strings=strings, stats=stats)

    @staticmethod
    def _build_solid(
        sections: List[SweptSection],
        side: Side,
        index: int,
        first: ComponentProfile
    ) -> ComponentSolid:
        k = first.column_count
        positions = np.empty((len(sections) * 2 * k, 3))

        for r, section in enumerate(sections):
            profile = section.side(side).components[index]
            base = r * 2 * k
            for c in range(k):
                x, y = section.station.offset_point(profile.offsets[c])
                positions[base + c] = (x, y, profile.top[c])
                positions[base + k + c] = (x, y, profile.bottom[c])

        indices = solid_indices(len(sections), k)
        if side is Side.RIGHT:
            indices = indices[:, [0, 2, 1]]

        return ComponentSolid(
            name=first.name,
            component_type=first.component_type,
            side=side,
            column_count=k,
            positions=positions,
            indices=indices,
        )

    @staticmethod
    def _build_strings(sections: List[SweptSection]) -> Dict[str, np.ndarray]:
        points: Dict[str, List[Tuple[float, float, float]]] = {}

        for section in sections:
            for bp in section.profile():
                points.setdefault(bp.tag, []).append(section.world(bp.offset, bp.elevation))

        return {tag: np.array(coords) for tag, coords in points.items()}


__all__ = [
    "SweptSection",
    "ComponentSolid",
    "MeshStats",
    "SweepResult",
    "CorridorSweeper",
    "solid_indices",
]
