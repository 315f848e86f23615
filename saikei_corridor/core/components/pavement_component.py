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
Pavement Component
Travelled way from the centerline to the edge of travelled way (ETW)
"""

from typing import Any, Dict

from .base_component import ComponentSection, ComponentType, PointTags, TemplateComponent


class PavementComponent(TemplateComponent):
    """
    Pavement from the crown to the edge of travelled way.

    Typical values:
    - Lane width: 3.0-3.6m
    - Crossfall: -2% (crowned, draining away from the centerline)
    - Thickness: full pavement depth

    Crossfall is a signed grade per unit outward distance, so the same value
    gives a symmetric crown on both sides.
    """

    component_type = ComponentType.PAVEMENT

    def __init__(
        self,
        lane_width: float = 3.6,
        crossfall: float = -0.02,
        thickness: float = 0.3,
        enabled: bool = True,
        name: str = "Pavement"
    ):
        super().__init__(name, enabled=enabled, width=lane_width, thickness=thickness)
        self.crossfall = crossfall

    @property
    def lane_width(self) -> float:
        return self.width

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        """
        Crown point and edge of travelled way.

        The pavement always starts at the centerline, so start_distance is
        expected to be 0 and start_elevation the grade elevation.
        """
        edge_distance = start_distance + self.width
        edge_elevation = start_elevation + self.crossfall * self.width

        crown = (start_distance, start_elevation, PointTags.CENTERLINE)
        edge = (edge_distance, edge_elevation, PointTags.EDGE_TRAVELED_WAY)

        return ComponentSection(
            component_type=self.component_type,
            top=[crown, edge],
            bottom=[start_elevation - self.thickness, edge_elevation - self.thickness],
            chain=[crown, edge],
        )

    def _parameters(self) -> Dict[str, Any]:
        return {
            "lane_width": self.width,
            "crossfall": self.crossfall,
            "thickness": self.thickness,
        }


__all__ = ["PavementComponent"]
