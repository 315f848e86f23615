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
Shoulder Component
Paved or gravel shoulder between the travelled way and the kerb
"""

from typing import Any, Dict

from .base_component import ComponentSection, ComponentType, PointTags, TemplateComponent


class ShoulderComponent(TemplateComponent):
    """
    Shoulder outside the edge of travelled way.

    Typical cross slopes:
    - Paved shoulder: -4% to -6%
    - Gravel shoulder: -6% to -8%

    Disabled by default, so a plain template runs pavement, kerb, footpath.
    """

    component_type = ComponentType.SHOULDER

    def __init__(
        self,
        width: float = 1.0,
        crossfall: float = -0.04,
        thickness: float = 0.3,
        enabled: bool = False,
        name: str = "Shoulder"
    ):
        super().__init__(name, enabled=enabled, width=width, thickness=thickness)
        self.crossfall = crossfall

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        """Edge of travelled way out to the shoulder edge (SH)."""
        inner = (start_distance, start_elevation, start_tag)
        outer = (
            start_distance + self.width,
            start_elevation + self.crossfall * self.width,
            PointTags.SHOULDER,
        )

        return ComponentSection(
            component_type=self.component_type,
            top=[inner, outer],
            bottom=[inner[1] - self.thickness, outer[1] - self.thickness],
            chain=[outer],
        )

    def _parameters(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "crossfall": self.crossfall,
            "thickness": self.thickness,
        }


__all__ = ["ShoulderComponent"]
