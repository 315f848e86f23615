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
Daylight Component
Target cut/fill slope from the outermost edge to existing ground
"""

from typing import Any, Dict

from .base_component import ComponentSection, ComponentType, PointTags, TemplateComponent


class DaylightComponent(TemplateComponent):
    """
    Daylight slope.

    Carries the H:V slope ratio only; where the slope meets the terrain is
    solved per station by the daylight solver, so this component adds no
    fixed points to the section.

    Typical ratios:
    - 2:1 fill and cut slopes
    - 3:1 or flatter for recoverable roadside slopes
    """

    component_type = ComponentType.DAYLIGHT

    def __init__(self, slope_ratio: float = 2.0, enabled: bool = True, name: str = "Daylight"):
        super().__init__(name, enabled=enabled)
        self.slope_ratio = slope_ratio

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        return ComponentSection(component_type=self.component_type)

    def _parameters(self) -> Dict[str, Any]:
        return {"slope_ratio": self.slope_ratio}


__all__ = ["DaylightComponent"]
