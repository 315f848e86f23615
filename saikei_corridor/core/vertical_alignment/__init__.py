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
Vertical Alignment Package
==========================

Piecewise-linear design grade over chainage, and the ground long section
sampled under the centerline.

Example:
    >>> from saikei_corridor.core.vertical_alignment import GradeProfile
    >>> grade = GradeProfile.from_points([(0, 10), (50, 12), (100, 8)])
    >>> grade.evaluate(75.0)
    10.0
"""

from .grade_point import GradeControlPoint
from .segments import GradeSegment
from .profile import GradeProfile, INTERIOR_MARGIN, terrain_endpoints
from .ground import GroundProfile, ProfilePoint, compute_ground_profile

__all__ = [
    "GradeControlPoint",
    "GradeSegment",
    "GradeProfile",
    "INTERIOR_MARGIN",
    "terrain_endpoints",
    "GroundProfile",
    "ProfilePoint",
    "compute_ground_profile",
]
