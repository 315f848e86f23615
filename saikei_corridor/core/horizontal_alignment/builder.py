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
Horizontal Alignment Builder
============================

Turns an ordered list of IPs (intersection points) into a sampled,
tangent-continuous centerline with circular fillets at interior corners.

Every edit rebuilds the whole centerline; there is no incremental update.
Degenerate input never raises: corners that cannot take a fillet stay as
hard vertices, a single IP gives a single zero-length station and no IPs
give no stations.
"""

import bisect
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..logging_config import get_logger
from .curve_geometry import FilletGeometry, calculate_fillet
from .sampling import cumulative_distances, dedupe, sample_arc, sample_line
from .vector import SimpleVector

logger = get_logger(__name__)

PointLike = Union[SimpleVector, Tuple[float, float]]

DEFAULT_RADIUS = 10.0
DEFAULT_LINE_STEP = 1.0
DEFAULT_ARC_STEP = 0.5
DEFAULT_EPSILON = 1e-6

# Guard for projecting onto zero-length segments
MIN_SEGMENT_LENGTH_SQ = 1e-12


@dataclass(frozen=True)
class Station:
    """Sample point on the built centerline.

    Attributes:
        x: Easting
        y: Northing
        tangent: Unit direction of travel
        normal: Unit left normal (-tangent.y, tangent.x)
        chainage: Distance along the centerline from its start
        index: Position in the station list (segment start for
            interpolated stations)
    """
    x: float
    y: float
    tangent: SimpleVector
    normal: SimpleVector
    chainage: float
    index: int

    @property
    def position(self) -> SimpleVector:
        return SimpleVector(self.x, self.y)

    def offset_point(self, offset: float) -> Tuple[float, float]:
        """Plan position at a transverse offset (positive to the left)."""
        return (self.x + self.normal.x * offset, self.y + self.normal.y * offset)


@dataclass(frozen=True)
class ClosestPoint:
    """Result of projecting a plan point onto the centerline."""
    point: SimpleVector
    tangent: SimpleVector
    segment_index: int
    chainage: float
    distance: float


def _as_vector(point: PointLike) -> SimpleVector:
    if isinstance(point, SimpleVector):
        return point.copy()
    return SimpleVector(point)


class AlignmentBuilder:
    """IP-driven horizontal alignment with circular fillets.

    Attributes:
        ips: Ordered IP positions
        default_radius: Fillet radius used where no override exists
        radius_overrides: Interior IP index -> requested radius
        line_step: Target spacing of samples on straight legs
        arc_step: Target spacing of samples on fillet arcs
        epsilon: Length tolerance for duplicate removal and radius clamps
        stations: Built centerline (read-only, replaced on every rebuild)
        version: Incremented on every rebuild

    Example:
        >>> builder = AlignmentBuilder([(0, 0), (100, 0), (100, 100)])
        >>> round(builder.fillets[0].arc_length, 3)
        15.708
    """

    def __init__(
        self,
        ips: Optional[Iterable[PointLike]] = None,
        default_radius: float = DEFAULT_RADIUS,
        radius_overrides: Optional[Dict[int, float]] = None,
        line_step: float = DEFAULT_LINE_STEP,
        arc_step: float = DEFAULT_ARC_STEP,
        epsilon: float = DEFAULT_EPSILON,
        name: str = "Alignment"
    ):
        self.name = name
        self.ips: List[SimpleVector] = [_as_vector(p) for p in (ips or [])]
        self.default_radius = float(default_radius)
        self.radius_overrides: Dict[int, float] = dict(radius_overrides or {})
        self.line_step = line_step
        self.arc_step = arc_step
        self.epsilon = epsilon

        self.stations: List[Station] = []
        self.chainages: List[float] = []
        self._fillets: Dict[int, FilletGeometry] = {}
        self.version = 0

        self.rebuild()

    # ========================================================================
    # CONFIGURATION
    # ========================================================================

    def apply_settings(self, settings) -> None:
        """Take sampling steps and epsilon from KernelSettings.

        The default radius and overrides are left as they are.
        """
        self.line_step = settings.line_step
        self.arc_step = settings.arc_step
        self.epsilon = settings.epsilon
        self.rebuild()

    def radius_at(self, index: int) -> float:
        """Requested radius at an interior IP (override or default)."""
        return self.radius_overrides.get(index, self.default_radius)

    # ========================================================================
    # MUTATIONS
    # ========================================================================

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self.ips)):
            raise IndexError(f"IP index {index} out of range [0, {len(self.ips) - 1}]")

    def set_ips(self, ips: Iterable[PointLike]) -> None:
        """Replace the IP list. Overrides outside the new interior are dropped."""
        self.ips = [_as_vector(p) for p in ips]
        interior = range(1, max(1, len(self.ips) - 1))
        self.radius_overrides = {
            i: r for i, r in self.radius_overrides.items() if i in interior
        }
        self.rebuild()

    def move_ip(self, index: int, x: float, y: float) -> None:
        """Move an IP to a new plan position.

        Raises:
            IndexError: If index out of range
        """
        self._check_index(index)
        self.ips[index] = SimpleVector(x, y)
        self.rebuild()

    def insert_ip(self, index: int, x: float, y: float) -> None:
        """Insert an IP before position index (len(ips) appends).

        Overrides at or after index shift along with their IPs.
        """
        index = max(0, min(index, len(self.ips)))
        self.ips.insert(index, SimpleVector(x, y))
        self.radius_overrides = {
            (i + 1 if i >= index else i): r for i, r in self.radius_overrides.items()
        }
        self.rebuild()

    def remove_ip(self, index: int) -> None:
        """Remove an IP and its override.

        Raises:
            IndexError: If index out of range
        """
        self._check_index(index)
        self.ips.pop(index)
        self.radius_overrides = {
            (i - 1 if i > index else i): r
            for i, r in self.radius_overrides.items()
            if i != index
        }
        self.rebuild()

    def set_radius_override(self, index: int, radius: float) -> None:
        """Request a specific radius at one interior IP."""
        self.radius_overrides[index] = float(radius)
        self.rebuild()

    def clear_radius_override(self, index: int) -> None:
        """Fall back to the default radius at one interior IP."""
        self.radius_overrides.pop(index, None)
        self.rebuild()

    def set_default_radius(self, radius: float) -> None:
        self.default_radius = float(radius)
        self.rebuild()

    # ========================================================================
    # BUILD
    # ========================================================================

    def rebuild(self) -> None:
        """Rebuild fillets, sampled points, chainages and stations."""
        self._fillets = {}
        count = len(self.ips)

        if count == 0:
            points: List[SimpleVector] = []
        elif count == 1:
            points = [self.ips[0].copy()]
        else:
            points = self._sample_centerline()

        self.chainages = cumulative_distances(points)
        self.stations = self._make_stations(points, self.chainages)
        self.version += 1

        logger.debug(
            "%s rebuilt: %d IPs, %d fillets, %d stations, length %.3f",
            self.name, count, len(self._fillets), len(self.stations), self.length
        )

    def _sample_centerline(self) -> List[SimpleVector]:
        for i in range(1, len(self.ips) - 1):
            fillet = calculate_fillet(
                self.ips[i - 1], self.ips[i], self.ips[i + 1],
                self.radius_at(i), self.epsilon, ip_index=i
            )
            if fillet is not None:
                self._fillets[i] = fillet

        points: List[SimpleVector] = []
        cursor = self.ips[0]

        for i in range(1, len(self.ips) - 1):
            fillet = self._fillets.get(i)
            if fillet is None:
                sample_line(points, cursor, self.ips[i], self.line_step)
                cursor = self.ips[i]
            else:
                sample_line(points, cursor, fillet.start, self.line_step)
                sample_arc(points, fillet, self.arc_step)
                cursor = fillet.end

        sample_line(points, cursor, self.ips[-1], self.line_step, include_end=True)

        return dedupe(points, self.epsilon)

    @staticmethod
    def _make_stations(points: List[SimpleVector], chainages: List[float]) -> List[Station]:
        stations = []
        last = len(points) - 1

        for k, point in enumerate(points):
            # Central difference; one-sided at the ends
            before = points[max(k - 1, 0)]
            after = points[min(k + 1, last)]
            tangent = (after - before).normalized()
            if tangent.length_squared == 0:
                tangent = SimpleVector(1.0, 0.0)

            stations.append(Station(
                x=point.x,
                y=point.y,
                tangent=tangent,
                normal=tangent.left_normal(),
                chainage=chainages[k],
                index=k,
            ))

        return stations

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def length(self) -> float:
        """Total centerline length."""
        return self.chainages[-1] if self.chainages else 0.0

    @property
    def points(self) -> List[SimpleVector]:
        return [s.position for s in self.stations]

    @property
    def fillets(self) -> List[FilletGeometry]:
        """Realized fillets in IP order (corners without a fillet omitted)."""
        return [self._fillets[i] for i in sorted(self._fillets)]

    def fillet_at(self, index: int) -> Optional[FilletGeometry]:
        return self._fillets.get(index)

    def closest_point(self, x: float, y: float) -> Optional[ClosestPoint]:
        """Project a plan point onto the centerline.

        Scans every segment with a clamped projection parameter.

        Returns:
            ClosestPoint, or None when there are no stations
        """
        if not self.stations:
            return None

        query = SimpleVector(x, y)
        points = self.points

        if len(points) == 1:
            return ClosestPoint(
                point=points[0],
                tangent=SimpleVector(1.0, 0.0),
                segment_index=0,
                chainage=0.0,
                distance=points[0].distance_to(query),
            )

        best: Optional[ClosestPoint] = None
        for i in range(len(points) - 1):
            a = points[i]
            ab = points[i + 1] - a
            ab_len_sq = max(MIN_SEGMENT_LENGTH_SQ, ab.length_squared)
            t = max(0.0, min(1.0, (query - a).dot(ab) / ab_len_sq))
            foot = a + ab * t
            distance = foot.distance_to(query)

            if best is None or distance < best.distance:
                tangent = ab.normalized()
                if tangent.length_squared == 0:
                    tangent = SimpleVector(1.0, 0.0)
                best = ClosestPoint(
                    point=foot,
                    tangent=tangent,
                    segment_index=i,
                    chainage=self.chainages[i] + (ab_len_sq ** 0.5) * t,
                    distance=distance,
                )

        return best

    def point_at_chainage(self, chainage: float) -> Optional[Station]:
        """Interpolated station at a chainage, clamped to [0, length].

        Returns:
            Station, or None when there are no stations
        """
        if not self.stations:
            return None
        if len(self.stations) == 1:
            return self.stations[0]

        s = max(0.0, min(chainage, self.length))
        i = bisect.bisect_right(self.chainages, s) - 1
        i = max(0, min(i, len(self.stations) - 2))

        a = self.stations[i]
        b = self.stations[i + 1]
        span = b.chainage - a.chainage
        t = (s - a.chainage) / span if span > self.epsilon else 0.0

        tangent = (b.position - a.position).normalized()
        if tangent.length_squared == 0:
            tangent = a.tangent

        return Station(
            x=a.x + (b.x - a.x) * t,
            y=a.y + (b.y - a.y) * t,
            tangent=tangent,
            normal=tangent.left_normal(),
            chainage=s,
            index=i,
        )

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate(self) -> Tuple[bool, List[str]]:
        """Report conditions that leave the centerline degraded.

        Returns:
            Tuple of (is_valid, list_of_warnings)
        """
        warnings = []

        if len(self.ips) < 2:
            warnings.append("Need at least 2 IPs to create a centerline")
            return False, warnings

        for i in range(1, len(self.ips) - 1):
            fillet = self._fillets.get(i)
            if fillet is None:
                warnings.append(f"IP {i}: no fillet (hard vertex)")
            elif fillet.is_clamped:
                warnings.append(
                    f"IP {i}: radius clamped from {fillet.requested_radius:.3f} "
                    f"to {fillet.radius:.3f}"
                )

        # Each corner is clamped alone, so neighbours can share a short leg
        for i in range(1, len(self.ips) - 2):
            this_fillet = self._fillets.get(i)
            next_fillet = self._fillets.get(i + 1)
            if this_fillet is None or next_fillet is None:
                continue
            leg = self.ips[i].distance_to(self.ips[i + 1])
            used = this_fillet.tangent_length + next_fillet.tangent_length
            if used > leg + self.epsilon:
                warnings.append(
                    f"IPs {i}-{i + 1}: tangent lengths {used:.3f} overlap "
                    f"on a {leg:.3f} leg"
                )

        for i, radius in sorted(self.radius_overrides.items()):
            if not (1 <= i <= len(self.ips) - 2):
                warnings.append(f"Radius override at IP {i} is not an interior IP")
            elif radius <= 0:
                warnings.append(f"Radius override at IP {i} is not positive")

        is_valid = len(warnings) == 0
        return is_valid, warnings

    def __repr__(self) -> str:
        return (
            f"AlignmentBuilder('{self.name}', {len(self.ips)} IPs, "
            f"{len(self._fillets)} fillets, {self.length:.1f})"
        )


__all__ = [
    "AlignmentBuilder",
    "Station",
    "ClosestPoint",
    "DEFAULT_RADIUS",
    "DEFAULT_LINE_STEP",
    "DEFAULT_ARC_STEP",
]
