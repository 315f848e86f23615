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
Base Component for Cross-Section Templates
Foundation for the transverse components (pavement, shoulder, kerb,
footpath, daylight) stacked outward from the centerline.

Components work in outward distance (always >= 0 from the centerline). The
template converts distances to signed offsets per side.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class ComponentType(str, Enum):
    """Component variant tag, in outward stacking order."""
    PAVEMENT = "PAVEMENT"
    SHOULDER = "SHOULDER"
    KERB = "KERB"
    FOOTPATH = "FOOTPATH"
    DAYLIGHT = "DAYLIGHT"


class Side(str, Enum):
    """Side of the centerline. Left is along the station's left normal."""
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def sign(self) -> float:
        """+1 for left, -1 for right."""
        return 1.0 if self is Side.LEFT else -1.0

    @property
    def suffix(self) -> str:
        return "L" if self is Side.LEFT else "R"

    def tag(self, base: str) -> str:
        """Side-qualified point tag, e.g. ETW -> ETW_L. CL is shared."""
        if base == PointTags.CENTERLINE:
            return base
        return f"{base}_{self.suffix}"


class PointTags:
    """Base names of the breakpoints a template produces."""
    CENTERLINE = "CL"
    EDGE_TRAVELED_WAY = "ETW"
    SHOULDER = "SH"
    FLOWLINE = "FL"
    TOP_KERB = "TC"
    BACK_KERB = "BC"
    FOOTPATH = "FP"
    DAYLIGHT = "DL"


# (distance from centerline, elevation, base tag)
SectionPoint = Tuple[float, float, str]


@dataclass
class ComponentSection:
    """Geometry one component contributes to a side of the section.

    Attributes:
        component_type: Variant tag of the producing component
        top: Top-surface columns of the component solid
        bottom: Bottom elevation under each top column
        chain: Points appended to the side's surface chain
    """
    component_type: ComponentType
    top: List[SectionPoint] = field(default_factory=list)
    bottom: List[float] = field(default_factory=list)
    chain: List[SectionPoint] = field(default_factory=list)

    @property
    def outer_distance(self) -> float:
        return self.chain[-1][0] if self.chain else 0.0

    @property
    def outer_elevation(self) -> float:
        return self.chain[-1][1] if self.chain else 0.0


class TemplateComponent:
    """
    Base class for template components.

    Each variant carries only its own parameters and knows how to extend the
    side chain outward from the previous component's outer edge.

    Attributes:
        name: Human-readable name
        component_type: Variant tag
        enabled: Disabled components contribute nothing
        width: Horizontal width
        thickness: Depth of the solid below the top surface
    """

    component_type = ComponentType.PAVEMENT

    def __init__(self, name: str, enabled: bool = True, width: float = 0.0, thickness: float = 0.0):
        self.name = name
        self.enabled = enabled
        self.width = width
        self.thickness = thickness

    def calculate_points(
        self,
        start_distance: float,
        start_elevation: float,
        start_tag: str = PointTags.CENTERLINE
    ) -> ComponentSection:
        """
        Geometry of this component starting at the previous outer edge.

        Args:
            start_distance: Outward distance of the attachment edge
            start_elevation: Elevation of the attachment edge
            start_tag: Base tag of the attachment edge point

        Returns:
            ComponentSection
        """
        raise NotImplementedError("Subclasses must implement calculate_points()")

    def _parameters(self) -> Dict[str, Any]:
        return {"width": self.width, "thickness": self.thickness}

    def to_dict(self) -> Dict[str, Any]:
        data = {"enabled": self.enabled}
        data.update(self._parameters())
        return data

    def __repr__(self) -> str:
        state = "on" if self.enabled else "off"
        params = ", ".join(f"{k}={v:g}" for k, v in self._parameters().items())
        return f"{self.__class__.__name__}({state}, {params})"


__all__ = [
    "ComponentType",
    "Side",
    "PointTags",
    "SectionPoint",
    "ComponentSection",
    "TemplateComponent",
]
