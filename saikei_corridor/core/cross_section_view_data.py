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
Cross-Section View Data
=======================

Data for a 2D cross-section overlay at one station: the design chain, the
component solids, the daylight slopes and the existing ground sampled
across the corridor. Drawing is left to the host application.

Offsets are signed (left positive) and elevations are absolute.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .components.base_component import ComponentType, PointTags, Side
from .logging_config import get_logger
from .station_formatting import format_station

logger = get_logger(__name__)

DEFAULT_GROUND_SAMPLES = 50


@dataclass
class CrossSectionPoint:
    """A single point in the cross-section"""
    offset: float
    elevation: float
    tag: str = ""


@dataclass
class CrossSectionComponent:
    """One component solid as seen in section."""
    name: str
    component_type: ComponentType
    side: Side
    top: List[CrossSectionPoint] = field(default_factory=list)
    bottom: List[CrossSectionPoint] = field(default_factory=list)
    thickness: float = 0.0

    @property
    def width(self) -> float:
        offsets = [p.offset for p in self.top]
        return max(offsets) - min(offsets) if offsets else 0.0

    def outline(self) -> List[CrossSectionPoint]:
        """Closed outline: top outward, then bottom back inward."""
        return self.top + list(reversed(self.bottom))


@dataclass
class DaylightLine:
    """Daylight slope from the outer edge to the ground."""
    side: Side
    edge: CrossSectionPoint
    catch: CrossSectionPoint
    found: bool
    is_cut: bool


class CrossSectionViewData:
    """
    Data container for a cross-section view at one station.

    Attributes:
        chainage: Station chainage
        centerline_elevation: Design elevation at the centerline
        design: Surface chain, right outer edge to left outer edge
        components: Component solids in section
        daylight: Daylight line per side (sides without daylight omitted)
        ground: Existing ground sampled across the view
        offset_min, offset_max, elevation_min, elevation_max: View extents
    """

    def __init__(self):
        self.chainage: float = 0.0
        self.centerline_elevation: float = 0.0
        self.design: List[CrossSectionPoint] = []
        self.components: List[CrossSectionComponent] = []
        self.daylight: Dict[Side, DaylightLine] = {}
        self.ground: List[CrossSectionPoint] = []

        self.offset_min: float = -15.0
        self.offset_max: float = 15.0
        self.elevation_min: float = -2.0
        self.elevation_max: float = 2.0

    @classmethod
    def from_section(
        cls,
        section,
        terrain,
        daylight_points=None,
        samples: int = DEFAULT_GROUND_SAMPLES,
        padding: float = 2.0
    ) -> "CrossSectionViewData":
        """
        Build view data from a swept section.

        Args:
            section: SweptSection at the station
            terrain: Height function (x, y) -> z
            daylight_points: DaylightPoints of this station (any sides)
            samples: Ground samples across the view
            padding: Extra space around the design and daylight extents

        Returns:
            CrossSectionViewData
        """
        view = cls()
        view.chainage = section.chainage
        view.centerline_elevation = section.center_elevation

        view.design = [
            CrossSectionPoint(bp.offset, bp.elevation, bp.tag)
            for bp in section.profile()
        ]

        for side in Side:
            for profile in section.side(side).components:
                view.components.append(CrossSectionComponent(
                    name=profile.name,
                    component_type=profile.component_type,
                    side=side,
                    top=[CrossSectionPoint(o, z, t) for o, z, t in zip(profile.offsets, profile.top, profile.tags)],
                    bottom=[CrossSectionPoint(o, z) for o, z in zip(profile.offsets, profile.bottom)],
                    thickness=profile.thickness,
                ))

        for point in daylight_points or []:
            view.daylight[point.side] = DaylightLine(
                side=point.side,
                edge=CrossSectionPoint(point.edge_offset, point.edge_elevation),
                catch=CrossSectionPoint(point.offset, point.z, point.side.tag(PointTags.DAYLIGHT)),
                found=point.found,
                is_cut=point.is_cut,
            )

        offsets = [p.offset for p in view.design]
        offsets += [line.catch.offset for line in view.daylight.values()]
        low = min(offsets) - padding
        high = max(offsets) + padding

        station = section.station
        view.ground = [
            CrossSectionPoint(float(o), float(terrain(*station.offset_point(float(o)))))
            for o in np.linspace(low, high, max(2, samples))
        ]

        view.update_view_extents(padding)
        logger.debug(
            "Cross-section view at %s: %d design points, %d components",
            format_station(view.chainage), len(view.design), len(view.components)
        )
        return view

    def update_view_extents(self, padding: float = 2.0):
        """
        Update view extents to fit the design, daylight and ground.

        Args:
            padding: Extra space around extents
        """
        points = list(self.design) + list(self.ground)
        for line in self.daylight.values():
            points.extend((line.edge, line.catch))

        if not points:
            self.offset_min = -15.0
            self.offset_max = 15.0
            self.elevation_min = -2.0
            self.elevation_max = 2.0
            return

        offsets = [p.offset for p in points]
        elevations = [p.elevation for p in points]

        self.offset_min = min(offsets) - padding
        self.offset_max = max(offsets) + padding
        self.elevation_min = min(elevations) - padding
        self.elevation_max = max(elevations) + padding

        # Ensure reasonable minimums
        if self.offset_max - self.offset_min < 10.0:
            center = (self.offset_max + self.offset_min) / 2
            self.offset_min = center - 5.0
            self.offset_max = center + 5.0

        if self.elevation_max - self.elevation_min < 2.0:
            center = (self.elevation_max + self.elevation_min) / 2
            self.elevation_min = center - 1.0
            self.elevation_max = center + 1.0

    def ground_at(self, offset: float) -> Optional[float]:
        """Sampled ground elevation at an offset (linear between samples)."""
        if not self.ground:
            return None
        return float(np.interp(offset, [p.offset for p in self.ground], [p.elevation for p in self.ground]))

    def get_component_at_point(self, offset: float, elevation: float,
                               tolerance: float = 0.5) -> int:
        """
        Find the component whose bounding box contains a point.

        Returns:
            Component index, or -1 if none found
        """
        for i, comp in enumerate(self.components):
            outline = comp.outline()
            if not outline:
                continue

            offsets = [pt.offset for pt in outline]
            elevations = [pt.elevation for pt in outline]

            if (min(offsets) - tolerance <= offset <= max(offsets) + tolerance
                    and min(elevations) - tolerance <= elevation <= max(elevations) + tolerance):
                return i

        return -1

    def get_status_text(self) -> str:
        """Get status text for display"""
        width = 0.0
        if self.design:
            width = self.design[-1].offset - self.design[0].offset
        return f"{format_station(self.chainage)} | {len(self.components)} components | Width: {width:.2f}"


__all__ = [
    "CrossSectionPoint",
    "CrossSectionComponent",
    "DaylightLine",
    "CrossSectionViewData",
]
