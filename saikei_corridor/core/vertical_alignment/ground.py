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
Ground Profile Data
===================

Terrain elevations sampled under the centerline stations, with the design
grade alongside, for a long-section overlay. Plotting is left to the host
application.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from ..logging_config import get_logger

logger = get_logger(__name__)

# Elevation ranges flatter than this get padded for display
FLAT_RANGE = 1e-3
FLAT_PADDING = 0.5


@dataclass
class ProfilePoint:
    """
    A point in the long section (chainage, elevation).

    Attributes:
        chainage: Distance along the centerline
        elevation: Elevation
        point_type: "TERRAIN", "GRADE" or "CONTROL"
        metadata: Additional data (grade, index)
    """
    chainage: float
    elevation: float
    point_type: str = "TERRAIN"
    metadata: Dict = field(default_factory=dict)

    def __repr__(self):
        return f"ProfilePoint({self.chainage:.2f}, {self.elevation:.2f}, {self.point_type})"


@dataclass
class GroundProfile:
    """Terrain and design elevations along the centerline.

    Attributes:
        chainages: Station chainages, shape (N,)
        ground: Terrain elevation under each station, shape (N,)
        design: Design grade at each station, shape (N,) (empty when no
            grade was supplied)
        min_elevation: Lower display bound
        max_elevation: Upper display bound
        controls: Grade control points as ProfilePoints
    """
    chainages: np.ndarray
    ground: np.ndarray
    design: np.ndarray
    min_elevation: float
    max_elevation: float
    controls: List[ProfilePoint] = field(default_factory=list)

    @property
    def length(self) -> float:
        return float(self.chainages[-1]) if len(self.chainages) else 0.0

    @property
    def start_elevation(self) -> float:
        """Terrain under the first station (default grade start)."""
        return float(self.ground[0]) if len(self.ground) else 0.0

    @property
    def end_elevation(self) -> float:
        """Terrain under the last station (default grade end)."""
        return float(self.ground[-1]) if len(self.ground) else 0.0

    @property
    def depth(self) -> np.ndarray:
        """Design minus ground at each station (positive = fill)."""
        if len(self.design) != len(self.ground):
            return np.zeros(0)
        return self.design - self.ground

    def terrain_points(self) -> List[ProfilePoint]:
        return [
            ProfilePoint(float(s), float(z), "TERRAIN")
            for s, z in zip(self.chainages, self.ground)
        ]

    def grade_points(self) -> List[ProfilePoint]:
        return [
            ProfilePoint(float(s), float(z), "GRADE")
            for s, z in zip(self.chainages, self.design)
        ]


def compute_ground_profile(stations, terrain, grade=None) -> GroundProfile:
    """Sample terrain (and optionally the grade) under every station.

    Args:
        stations: Centerline stations
        terrain: Height function (x, y) -> z
        grade: Optional GradeProfile evaluated at the same chainages

    Returns:
        GroundProfile; empty arrays when there are no stations
    """
    chainages = np.array([s.chainage for s in stations], dtype=float)
    ground = np.array([terrain(s.x, s.y) for s in stations], dtype=float)

    if grade is not None:
        design = np.array([grade.evaluate(s) for s in chainages], dtype=float)
        controls = [
            ProfilePoint(p.chainage, p.elevation, "CONTROL", {"index": i})
            for i, p in enumerate(grade.points)
        ]
    else:
        design = np.zeros(0)
        controls = []

    if len(ground) == 0:
        return GroundProfile(chainages, ground, design, -FLAT_PADDING, FLAT_PADDING, controls)

    values = np.concatenate([ground, design, [c.elevation for c in controls]])
    z_min = float(values.min())
    z_max = float(values.max())
    if z_max - z_min < FLAT_RANGE:
        z_min -= FLAT_PADDING
        z_max += FLAT_PADDING

    logger.debug("Ground profile: %d samples, elevation %.3f..%.3f", len(ground), z_min, z_max)
    return GroundProfile(chainages, ground, design, z_min, z_max, controls)


__all__ = ["ProfilePoint", "GroundProfile", "compute_ground_profile"]
