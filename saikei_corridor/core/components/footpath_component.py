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
Footpath Component
Pedestrian footpath behind the kerb
"""

from typing import Any, Dict

from .base_component import ComponentSection, ComponentType, PointTags, TemplateComponent


class FootpathComponent(TemplateComponent):
    """
    Footpath for pedestrians.

    Standard dimensions:
    - Minimum width: 1.2m
    - Typical width: 1.5-1.8m
    - Crossfall: 2% maximum
    - Thickness: 100mm concrete
    """

    component_type = ComponentType.FOOTPATH

    def __init__(
        self,
        width: float = 1.5,
        thickness: float = 0.1,
        crossfall: float = -0.02,
        enabled: bool = True,
        name: str = "Footpath"
    ):
        super().__init__(name, enabled=enabled, width=width, thickness=thickness)
        self.crossfall = crossfall

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        """Attachment edge out to the footpath edge (FP)."""
        end_elevation = start_elevation + self.crossfall * self.width
        inner = (start_distance, start_elevation, start_tag)
        outer = (start_distance + self.width, end_elevation, PointTags.FOOTPATH)

        return ComponentSection(
            component_type=self.component_type,
            top=[inner, outer],
            bottom=[start_elevation - self.thickness, end_elevation - self.thickness],
            chain=[outer],
        )

    def _parameters(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "thickness": self.thickness,
            "crossfall": self.crossfall,
        }


__all__ = ["FootpathComponent"]
