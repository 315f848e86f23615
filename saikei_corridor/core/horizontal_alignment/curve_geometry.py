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
Horizontal Fillet Geometry Module
=================================

Computes the circular fillet that rounds the corner at an interior IP.

The fillet is found by offsetting both legs toward the inside of the turn by
the radius and intersecting the offset lines; the intersection is the arc
center and the feet of the perpendiculars back onto the legs are the
tangency points.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..logging_config import get_logger
from .vector import SimpleVector

logger = get_logger(__name__)

# Corners closer than this (radians) to straight or to a full reversal keep
# a hard vertex
ANGLE_TOLERANCE = 1e-3

# Determinant below which two lines are treated as parallel
PARALLEL_TOLERANCE = 1e-10


@dataclass(frozen=True)
class FilletGeometry:
    """Realized circular fillet at one interior IP.

    Attributes:
        ip_index: Index of the IP the fillet rounds
        requested_radius: Radius asked for (override or default)
        radius: Radius actually used after the leg-length clamp
        theta: Interior deflection angle in radians (0 < theta < pi)
        turn: +1 for a left (CCW) turn, -1 for a right (CW) turn
        center: Arc center
        start: Tangency point on the incoming leg
        end: Tangency point on the outgoing leg
        start_angle: Polar angle of start about center
        sweep: Signed sweep angle (turn * theta)
        tangent_length: Distance from IP to each tangency point
    """
    ip_index: int
    requested_radius: float
    radius: float
    theta: float
    turn: int
    center: SimpleVector
    start: SimpleVector
    end: SimpleVector
    start_angle: float
    sweep: float
    tangent_length: float

    @property
    def arc_length(self) -> float:
        """Arc length R * |sweep|."""
        return self.radius * abs(self.sweep)

    @property
    def is_clamped(self) -> bool:
        """True when the leg lengths forced a smaller radius."""
        return self.radius < self.requested_radius

    @property
    def turn_direction(self) -> str:
        return 'LEFT' if self.turn > 0 else 'RIGHT'

    def point_at(self, fraction: float) -> SimpleVector:
        """Point on the arc at fraction (0 = start, 1 = end) of the sweep."""
        angle = self.start_angle + self.sweep * fraction
        return SimpleVector(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle)
        )


def intersect_lines(
    p1: SimpleVector,
    d1: SimpleVector,
    p2: SimpleVector,
    d2: SimpleVector
) -> Optional[SimpleVector]:
    """Intersect the lines p1 + t*d1 and p2 + u*d2.

    Args:
        p1: Point on first line
        d1: Direction of first line
        p2: Point on second line
        d2: Direction of second line

    Returns:
        Intersection point, or None if lines are parallel
    """
    det = d1.cross(d2)
    if abs(det) < PARALLEL_TOLERANCE:
        return None

    t = (p2 - p1).cross(d2) / det
    return p1 + d1 * t


def calculate_fillet(
    prev_ip: SimpleVector,
    curr_ip: SimpleVector,
    next_ip: SimpleVector,
    radius: float,
    epsilon: float = 1e-6,
    ip_index: int = 0
) -> Optional[FilletGeometry]:
    """Calculate the fillet rounding the corner at curr_ip.

    The requested radius is reduced so that the tangent length
    R * tan(theta / 2) never exceeds the shorter adjacent leg minus epsilon.

    Args:
        prev_ip: Previous IP (defines incoming leg)
        curr_ip: Corner IP
        next_ip: Next IP (defines outgoing leg)
        radius: Requested radius
        epsilon: Length tolerance
        ip_index: Index of curr_ip, carried into the result

    Returns:
        FilletGeometry, or None when the corner keeps a hard vertex
        (zero-length leg, near-straight, near-reversal, or radius clamped
        to nothing)
    """
    leg_in = curr_ip - prev_ip
    leg_out = next_ip - curr_ip
    len_in = leg_in.length
    len_out = leg_out.length

    if len_in <= epsilon or len_out <= epsilon:
        logger.debug("IP %d: zero-length leg, no fillet", ip_index)
        return None

    d_in = leg_in / len_in
    d_out = leg_out / len_out

    turn = 1 if d_in.cross(d_out) >= 0 else -1
    theta = math.acos(max(-1.0, min(1.0, d_in.dot(d_out))))

    if theta < ANGLE_TOLERANCE or abs(theta - math.pi) < ANGLE_TOLERANCE:
        logger.debug("IP %d: deflection %.6f rad is degenerate, no fillet", ip_index, theta)
        return None

    half_tan = math.tan(theta / 2.0)
    max_radius = (min(len_in, len_out) - epsilon) / half_tan
    realized = min(radius, max_radius)

    if realized <= epsilon:
        logger.debug("IP %d: legs too short for any fillet", ip_index)
        return None
    if realized < radius:
        logger.debug("IP %d: radius clamped %.3f -> %.3f", ip_index, radius, realized)

    # Inward normals point toward the center of the turn
    n_in = d_in.left_normal() * turn
    n_out = d_out.left_normal() * turn

    center = intersect_lines(curr_ip + n_in * realized, d_in,
                             curr_ip + n_out * realized, d_out)
    if center is None:
        return None

    start = center - n_in * realized
    end = center - n_out * realized

    return FilletGeometry(
        ip_index=ip_index,
        requested_radius=radius,
        radius=realized,
        theta=theta,
        turn=turn,
        center=center,
        start=start,
        end=end,
        start_angle=(start - center).angle,
        sweep=turn * theta,
        tangent_length=realized * half_tan,
    )


__all__ = [
    "ANGLE_TOLERANCE",
    "FilletGeometry",
    "intersect_lines",
    "calculate_fillet",
]
