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
Horizontal Alignment Package
=============================

IP-driven centerline construction.

This package provides:
- Circular fillets at interior IPs with per-corner radius overrides
- Sampled centerline stations with tangents, left normals and chainage
- Closest-point and chainage queries

Example:
    >>> from saikei_corridor.core.horizontal_alignment import AlignmentBuilder
    >>> builder = AlignmentBuilder([(0, 0), (100, 0), (100, 100)], default_radius=10.0)
    >>> builder.set_radius_override(1, 25.0)
    >>> hit = builder.closest_point(50.0, 5.0)
"""

# Vector utilities
from .vector import SimpleVector

# Fillet geometry
from .curve_geometry import (
    FilletGeometry,
    calculate_fillet,
    intersect_lines,
)

# Sampling helpers
from .sampling import (
    sample_line,
    sample_arc,
    dedupe,
    cumulative_distances,
)

# Main builder
from .builder import AlignmentBuilder, ClosestPoint, Station

__all__ = [
    # Classes
    "SimpleVector",
    "FilletGeometry",
    "AlignmentBuilder",
    "ClosestPoint",
    "Station",
    # Geometry functions
    "calculate_fillet",
    "intersect_lines",
    # Sampling functions
    "sample_line",
    "sample_arc",
    "dedupe",
    "cumulative_distances",
]
