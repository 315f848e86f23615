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
Corridor Model
==============

Owns the alignment, grade, template, settings and terrain, and rebuilds
every derived output from scratch after each edit:

    centerline -> grade sync -> sections and solids -> daylight -> volumes

The outputs are published together as one immutable CorridorResult, so a
reader holding the previous result never sees a half-built corridor. A
rebuild is skipped when none of the inputs changed since the last one.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .components.base_component import PointTags, Side
from .components.template import CrossSectionTemplate, TemplateConfig
from .corridor import CorridorSweeper, SweepResult
from .cross_section_view_data import CrossSectionViewData
from .daylight import DaylightPoint, DaylightSolver, daylight_surface
from .earthwork import VolumeEstimator, VolumeTotals
from .horizontal_alignment.builder import DEFAULT_RADIUS, AlignmentBuilder, Station
from .logging_config import get_logger
from .settings import KernelSettings
from .station_formatting import format_station, parse_station
from .terrain import HeightFunction, flat_terrain
from .vertical_alignment.ground import GroundProfile, compute_ground_profile
from .vertical_alignment.profile import GradeProfile, terrain_endpoints

logger = get_logger(__name__)

# (alignment, grade, template, settings, terrain) versions
RebuildKey = Tuple[int, int, int, int, int]


@dataclass(frozen=True)
class CorridorResult:
    """
    All outputs of one rebuild.

    Attributes:
        key: Input versions the result was built from
        centerline: Stations of the centerline
        corridor: Sections, component solids and boundary strings
        daylight: Daylight points per side
        daylight_surfaces: (positions, indices) per side with daylight
        daylight_strings: Daylight line per side as N x 3 arrays
        grade_points: (chainage, elevation) of every grade control point
        volumes: Earthwork totals
        build_time: Seconds spent in the rebuild
    """
    key: RebuildKey
    centerline: Tuple[Station, ...]
    corridor: SweepResult
    daylight: Dict[Side, List[DaylightPoint]]
    daylight_surfaces: Dict[Side, Tuple[np.ndarray, np.ndarray]]
    daylight_strings: Dict[str, np.ndarray]
    grade_points: Tuple[Tuple[float, float], ...]
    volumes: VolumeTotals
    build_time: float = 0.0


class CorridorModel:
    """
    Road corridor built from IPs, a grade, a template and a terrain.

    Example:
        >>> model = CorridorModel([(0, 0), (100, 0), (100, 100)], terrain=flat_terrain(0.0))
        >>> round(model.builder.length, 1) > 0
        True
        >>> model.move_ip(1, 110.0, 0.0)
        >>> model.volumes.fill >= 0
        True
    """

    def __init__(
        self,
        ips: Optional[Iterable] = None,
        terrain: Optional[HeightFunction] = None,
        settings: Optional[KernelSettings] = None,
        template: Optional[TemplateConfig] = None,
        default_radius: float = DEFAULT_RADIUS,
        name: str = "Corridor"
    ):
        self.name = name
        self.terrain: HeightFunction = terrain or flat_terrain(0.0)
        self.settings = settings or KernelSettings.medium()
        self.settings_version = 0
        self.terrain_version = 0

        self.builder = AlignmentBuilder(
            ips,
            default_radius=default_radius,
            line_step=self.settings.line_step,
            arc_step=self.settings.arc_step,
            epsilon=self.settings.epsilon,
            name=name,
        )
        self.grade = GradeProfile.from_alignment(self.builder, self.terrain, epsilon=self.settings.epsilon)
        self.template = CrossSectionTemplate(template)

        self._synced_alignment: Tuple[int, int] = (self.builder.version, self.terrain_version)
        self._result: Optional[CorridorResult] = None
        self.rebuild()

    # ========================================================================
    # REBUILD
    # ========================================================================

    @property
    def key(self) -> RebuildKey:
        return (
            self.builder.version,
            self.grade.version,
            self.template.version,
            self.settings_version,
            self.terrain_version,
        )

    def _sync_grade(self) -> None:
        """Keep the grade spanning the centerline with terrain endpoints."""
        state = (self.builder.version, self.terrain_version)
        if state == self._synced_alignment:
            return
        self._synced_alignment = state

        if abs(self.builder.length - self.grade.total_length) > self.settings.epsilon:
            self.grade.rescale(self.builder.length)
        self.grade.set_terrain_endpoints(*terrain_endpoints(self.builder, self.terrain))

    def rebuild(self, force: bool = False) -> CorridorResult:
        """
        Recompute every output from the current inputs.

        Args:
            force: Rebuild even when no input changed

        Returns:
            The published CorridorResult
        """
        self._sync_grade()
        key = self.key
        if not force and self._result is not None and self._result.key == key:
            return self._result

        start_time = time.time()
        stations = list(self.builder.stations)

        sweeper = CorridorSweeper(self.template, self.grade)
        sweep = sweeper.sweep(stations)

        sections = sweep.sections or [sweeper.section_at(s) for s in stations]
        solver = DaylightSolver(self.terrain, self.settings.daylight)
        daylight = solver.solve_sections(sections, self.template)

        surfaces = {}
        strings = {}
        for side, points in daylight.items():
            if len(points) >= 2:
                surfaces[side] = daylight_surface(points)
            if points:
                strings[side.tag(PointTags.DAYLIGHT)] = np.array([p.position for p in points])

        estimator = VolumeEstimator(self.terrain, self.template, self.grade, self.settings.volume_samples)
        volumes = estimator.estimate(stations)

        result = CorridorResult(
            key=key,
            centerline=tuple(stations),
            corridor=sweep,
            daylight=daylight,
            daylight_surfaces=surfaces,
            daylight_strings=strings,
            grade_points=tuple(p.as_tuple() for p in self.grade.points),
            volumes=volumes,
            build_time=time.time() - start_time,
        )
        self._result = result

        logger.debug(
            "%s rebuilt in %.3fs: %d stations, cut %.2f, fill %.2f",
            self.name, result.build_time, len(stations), volumes.cut, volumes.fill
        )
        return result

    @property
    def result(self) -> CorridorResult:
        return self.rebuild()

    # ========================================================================
    # ALIGNMENT EDITS
    # ========================================================================

    def set_ips(self, ips: Iterable) -> None:
        self.builder.set_ips(ips)
        self.rebuild()

    def move_ip(self, index: int, x: float, y: float) -> None:
        self.builder.move_ip(index, x, y)
        self.rebuild()

    def insert_ip(self, index: int, x: float, y: float) -> None:
        self.builder.insert_ip(index, x, y)
        self.rebuild()

    def remove_ip(self, index: int) -> None:
        self.builder.remove_ip(index)
        self.rebuild()

    def set_radius_override(self, index: int, radius: float) -> None:
        self.builder.set_radius_override(index, radius)
        self.rebuild()

    def clear_radius_override(self, index: int) -> None:
        self.builder.clear_radius_override(index)
        self.rebuild()

    def set_default_radius(self, radius: float) -> None:
        self.builder.set_default_radius(radius)
        self.rebuild()

    # ========================================================================
    # GRADE EDITS
    # ========================================================================

    def insert_grade_point(self, chainage: float) -> Optional[int]:
        index = self.grade.insert_point(chainage)
        self.rebuild()
        return index

    def move_grade_point(self, index: int, chainage: Optional[float] = None,
                         elevation: Optional[float] = None) -> None:
        self.grade.move_point(index, chainage=chainage, elevation=elevation)
        self.rebuild()

    def remove_grade_point(self, index: int) -> None:
        self.grade.remove_point(index)
        self.rebuild()

    def set_grade_endpoints(self, start: Optional[float] = None, end: Optional[float] = None) -> None:
        self.grade.set_endpoint_overrides(start, end)
        self.rebuild()

    def clear_grade_endpoints(self) -> None:
        self.grade.clear_endpoint_overrides()
        self.rebuild()

    # ========================================================================
    # TEMPLATE, SETTINGS AND TERRAIN
    # ========================================================================

    def apply_template(self, config: Union[TemplateConfig, Dict[str, Any]]) -> None:
        """Replace the template. Mappings are validated by TemplateConfig.from_dict()."""
        if not isinstance(config, TemplateConfig):
            config = TemplateConfig.from_dict(config)
        self.template.apply_config(config)
        self.rebuild()

    def apply_settings(self, settings: Union[KernelSettings, Dict[str, Any], str]) -> None:
        """Replace the settings: a KernelSettings, a preset name or a mapping."""
        if isinstance(settings, str):
            settings = KernelSettings.from_string(settings)
        elif not isinstance(settings, KernelSettings):
            settings = KernelSettings.from_dict(settings)

        self.settings = settings
        self.settings_version += 1
        self.grade.epsilon = settings.epsilon
        self.builder.apply_settings(settings)
        logger.info("Settings: %s", settings.name)
        self.rebuild()

    def set_terrain(self, terrain: HeightFunction) -> None:
        self.terrain = terrain
        self.terrain_version += 1
        self.rebuild()

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def centerline(self) -> List[Station]:
        return list(self.result.centerline)

    @property
    def corridor(self) -> SweepResult:
        return self.result.corridor

    @property
    def daylight(self) -> Dict[Side, List[DaylightPoint]]:
        return self.result.daylight

    @property
    def grade_points(self) -> List[Tuple[float, float]]:
        return list(self.result.grade_points)

    @property
    def volumes(self) -> VolumeTotals:
        return self.result.volumes

    def cross_section_view(self, chainage: Union[float, str]) -> Optional[CrossSectionViewData]:
        """
        Cross-section overlay data at a chainage.

        Args:
            chainage: Numeric chainage or station notation ("0+050")

        Returns:
            CrossSectionViewData, or None when there is no centerline

        Raises:
            ValueError: Malformed station notation
        """
        station = self.builder.point_at_chainage(parse_station(chainage))
        if station is None:
            return None

        section = CorridorSweeper(self.template, self.grade).section_at(station)
        solver = DaylightSolver(self.terrain, self.settings.daylight)
        points = []
        for side in Side:
            daylight = self.template.daylight(side)
            if daylight is not None:
                points.append(solver.solve(station, side, section.side(side).outer_edge, daylight.slope_ratio))

        return CrossSectionViewData.from_section(section, self.terrain, points)

    def ground_profile(self) -> GroundProfile:
        """Terrain and design grade along the centerline."""
        return compute_ground_profile(self.result.centerline, self.terrain, self.grade)

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Collect warnings from every input.

        Returns:
            Tuple of (is_valid, list_of_warnings)
        """
        warnings = []
        for label, item in (
            ("alignment", self.builder),
            ("grade", self.grade),
            ("template", self.template.config),
            ("settings", self.settings),
        ):
            _, item_warnings = item.validate()
            warnings.extend(f"{label}: {w}" for w in item_warnings)
        return len(warnings) == 0, warnings

    def summary(self) -> str:
        result = self.result
        truncated = sum(1 for points in result.daylight.values() for p in points if not p.found)
        lines = [
            f"Corridor: {self.name}",
            f"  Length: {format_station(self.builder.length)}",
            f"  IPs: {len(self.builder.ips)}, fillets: {len(self.builder.fillets)}",
            f"  Stations: {len(result.centerline)}",
            f"  Grade points: {len(result.grade_points)}",
            f"  Template: {self.template.enabled_summary()}",
            f"  Solids: {len(result.corridor.solids)}, faces: {result.corridor.stats.face_count}",
            f"  Daylight truncated: {truncated}",
            f"  Cut: {result.volumes.cut:.2f}, Fill: {result.volumes.fill:.2f}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"CorridorModel('{self.name}', {len(self.builder.ips)} IPs, {self.builder.length:.1f})"


__all__ = ["CorridorModel", "CorridorResult", "RebuildKey"]
