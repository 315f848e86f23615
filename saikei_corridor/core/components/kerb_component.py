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
Kerb Component
Vertical kerb at the edge of the carriageway
"""

from typing import Any, Dict

from .base_component import ComponentSection, ComponentType, PointTags, TemplateComponent


class KerbComponent(TemplateComponent):
    """
    Vertical kerb.

    Standard dimensions:
    - Height: 150mm upstand
    - Top width: 150mm
    - Thickness: depth below the flow line

    Profile:
    - FL: flow line, the attachment edge (pavement or shoulder edge)
    - TC: top of kerb, straight above FL by the kerb height
    - BC: back of kerb, flat across the kerb width

    The bottom of the kerb is flat at the flow line elevation minus the
    kerb thickness.
    """

    component_type = ComponentType.KERB

    def __init__(
        self,
        width: float = 0.15,
        height: float = 0.15,
        thickness: float = 0.3,
        enabled: bool = True,
        name: str = "Kerb"
    ):
        super().__init__(name, enabled=enabled, width=width, thickness=thickness)
        self.height = height

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        """Flow line, vertical step to top of kerb, then flat to back of kerb."""
        top_elevation = start_elevation + self.height
        bottom_elevation = start_elevation - self.thickness

        flow_line = (start_distance, start_elevation, PointTags.FLOWLINE)
        top_face = (start_distance, top_elevation, PointTags.TOP_KERB)
        back = (start_distance + self.width, top_elevation, PointTags.BACK_KERB)

        return ComponentSection(
            component_type=self.component_type,
            top=[top_face, back],
            bottom=[bottom_elevation, bottom_elevation],
            chain=[flow_line, top_face, back],
        )

    def _parameters(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "thickness": self.thickness,
        }


__all__ = ["KerbComponent"]
