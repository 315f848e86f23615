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
Saikei Corridor Core Module

Pure Python road corridor geometry kernel:
- Horizontal alignment from IPs with circular fillets
- Editable piecewise-linear grade
- Cross-section template and component solids
- Daylight slopes and earthwork volumes

Every output is rebuilt from scratch by CorridorModel after each edit.
"""

# Import logging configuration first (no dependencies)
from .logging_config import get_logger, setup_logging

from .station_formatting import format_station, parse_station
from .terrain import GridTerrain, HeightFunction, flat_terrain, planar_terrain, undulating_terrain
from .daylight import DaylightPoint, DaylightSettings, DaylightSolver, daylight_surface
from .settings import KernelSettings

from .horizontal_alignment import AlignmentBuilder, ClosestPoint, FilletGeometry, SimpleVector, Station
from .vertical_alignment import GradeControlPoint, GradeProfile, GradeSegment, GroundProfile, compute_ground_profile
from .components import (
    Breakpoint,
    ComponentType,
    CrossSectionTemplate,
    PointTags,
    Side,
    SideConfig,
    TemplateConfig,
)

from .corridor import ComponentSolid, CorridorSweeper, MeshStats, SweepResult, SweptSection
from .earthwork import SectionArea, VolumeEstimator, VolumeSegment, VolumeTotals
from .cross_section_view_data import CrossSectionViewData
from .model import CorridorModel, CorridorResult

logger = get_logger(__name__)

__all__ = [
    # Logging
    'get_logger',
    'setup_logging',
    # Stationing
    'format_station',
    'parse_station',
    # Terrain
    'HeightFunction',
    'GridTerrain',
    'flat_terrain',
    'planar_terrain',
    'undulating_terrain',
    # Settings
    'KernelSettings',
    'DaylightSettings',
    # Alignment
    'AlignmentBuilder',
    'ClosestPoint',
    'FilletGeometry',
    'SimpleVector',
    'Station',
    # Grade
    'GradeControlPoint',
    'GradeProfile',
    'GradeSegment',
    'GroundProfile',
    'compute_ground_profile',
    # Template
    'Breakpoint',
    'ComponentType',
    'CrossSectionTemplate',
    'PointTags',
    'Side',
    'SideConfig',
    'TemplateConfig',
    # Corridor
    'ComponentSolid',
    'CorridorSweeper',
    'MeshStats',
    'SweepResult',
    'SweptSection',
    # Daylight and earthwork
    'DaylightPoint',
    'DaylightSolver',
    'daylight_surface',
    'SectionArea',
    'VolumeEstimator',
    'VolumeSegment',
    'VolumeTotals',
    # Views and model
    'CrossSectionViewData',
    'CorridorModel',
    'CorridorResult',
]
