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
Earthwork Volumes
=================

Approximate cut and fill by the average end-area method.

At each station the template width, from the right outer edge to the left
outer edge, is split into equal strips. Each strip is sampled at its
midpoint:

    area = (design - terrain) * strip_width

Positive areas are fill, negative areas are cut; both are accumulated as
magnitudes. Between consecutive stations:

    volume = length * (A0 + A1) / 2

for cut and fill independently. The daylight slopes are not included.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .components.base_component import Side
from .components.template import CrossSectionTemplate, chain_elevation
from .horizontal_alignment.builder import Station
from .logging_config import get_logger
from .terrain import HeightFunction

logger = get_logger(__name__)

DEFAULT_SAMPLES = 40


@dataclass(frozen=True)
class SectionArea:
    """Cut and fill area at one station (both non-negative)."""
    chainage: float
    cut: float
    fill: float

    @property
    def net(self) -> float:
        return self.fill - self.cut


@dataclass(frozen=True)
class VolumeSegment:
    """Cut and fill between two consecutive stations."""
    start_chainage: float
    end_chainage: float
    cut: float
    fill: float

    @property
    def length(self) -> float:
        return self.end_chainage - self.start_chainage

    @property
    def net(self) -> float:
        return self.fill - self.cut


@dataclass
class VolumeTotals:
    """
    Corridor earthwork totals.

    Attributes:
        cut: Total cut volume (>= 0)
        fill: Total fill volume (>= 0)
        areas: SectionArea per station
        segments: VolumeSegment per station interval
    """
    cut: float = 0.0
    fill: float = 0.0
    areas: List[SectionArea] = field(default_factory=list)
    segments: List[VolumeSegment] = field(default_factory=list)

    @property
    def net(self) -> float:
        """Fill minus cut; negative means surplus cut."""
        return self.fill - self.cut

    def summary(self) -> str:
        lines = [
            "Earthwork Summary:",
            f"  Cut:  {self.cut:.2f}",
            f"  Fill: {self.fill:.2f}",
            f"  Net:  {self.net:.2f}",
            f"  Stations: {len(self.areas)}",
        ]
        return "\n".join(lines)


class VolumeEstimator:
    """
    Average end-area cut/fill estimator.

    Attributes:
        terrain: Height function (x, y) -> z
        template: Cross-section template giving the sampled width
        grade: Grade profile giving the centerline elevation
        samples: Strips per station
    """

    def __init__(
        self,
        terrain: HeightFunction,
        template: CrossSectionTemplate,
        grade,
        samples: int = DEFAULT_SAMPLES
    ):
        self.terrain = terrain
        self.template = template
        self.grade = grade
        self.samples = samples

    def strips(self) -> Tuple[np.ndarray, float]:
        """Midpoint offsets of the strips (right edge to left edge) and strip width."""
        low = -self.template.width(Side.RIGHT)
        high = self.template.width(Side.LEFT)
        count = max(1, int(self.samples))
        width = (high - low) / count
        return low + width * (np.arange(count) + 0.5), width

    def section_area(self, station: Station, center_elevation: Optional[float] = None) -> SectionArea:
        """Cut and fill area at one station."""
        if center_elevation is None:
            center_elevation = self.grade.evaluate(station.chainage)

        offsets, strip_width = self.strips()

        chains = {
            side: self.template.side_section(side, center_elevation).breakpoints
            for side in Side
        }

        design = np.array([
            chain_elevation(chains[Side.LEFT if o >= 0 else Side.RIGHT], abs(o))
            for o in offsets
        ])
        ground = np.array([self.terrain(*station.offset_point(o)) for o in offsets])

        difference = (design - ground) * strip_width
        fill = float(difference[difference > 0].sum())
        cut = float(np.abs(difference[difference < 0]).sum())

        return SectionArea(chainage=station.chainage, cut=cut, fill=fill)

    def estimate(self, stations: List[Station]) -> VolumeTotals:
        """
        Integrate cut and fill along the centerline.

        Args:
            stations: Centerline stations in chainage order

        Returns:
            VolumeTotals (zero with no segments for fewer than 2 stations)
        """
        areas = [self.section_area(station) for station in stations]
        totals = VolumeTotals(areas=areas)

        for a0, a1 in zip(areas, areas[1:]):
            length = a1.chainage - a0.chainage
            segment = VolumeSegment(
                start_chainage=a0.chainage,
                end_chainage=a1.chainage,
                cut=length * 0.5 * (a0.cut + a1.cut),
                fill=length * 0.5 * (a0.fill + a1.fill),
            )
            totals.segments.append(segment)
            totals.cut += segment.cut
            totals.fill += segment.fill

        logger.debug(
            "Volumes over %d stations: cut %.3f, fill %.3f",
            len(areas), totals.cut, totals.fill
        )
        return totals


__all__ = [
    "DEFAULT_SAMPLES",
    "SectionArea",
    "VolumeSegment",
    "VolumeTotals",
    "VolumeEstimator",
]
