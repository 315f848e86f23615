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
Cross-Section Template
======================

Declarative transverse template and the pure function mapping a transverse
offset to design elevation.

Components stack outward from the centerline in a fixed order on each
side: pavement, shoulder, kerb, footpath. The daylight slope starts at the
outermost enabled component's outer edge.

Offsets are signed: positive to the left (along the station's left
normal), negative to the right. Crossfalls are signed grades per unit
outward distance and apply the same way on both sides.

Template configuration arrives through TemplateConfig.from_dict(), which is
the only place input is validated. The kernel trusts a TemplateConfig.
"""

import dataclasses
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .base_component import ComponentType, PointTags, Side, TemplateComponent
from .daylight_component import DaylightComponent
from .footpath_component import FootpathComponent
from .kerb_component import KerbComponent
from .pavement_component import PavementComponent
from .shoulder_component import ShoulderComponent

logger = get_logger(__name__)

# Horizontal extent below which a chain segment is a vertical step
STEP_TOLERANCE = 1e-9


# =============================================================================
# Section Data
# =============================================================================

@dataclass(frozen=True)
class Breakpoint:
    """One point of a side's surface chain.

    Attributes:
        offset: Signed transverse offset (left positive)
        elevation: Top-surface design elevation
        bottom_elevation: Underside of the owning component
        component: Component that produced the point
        tag: Side-qualified point tag (e.g. "ETW_L")
    """
    offset: float
    elevation: float
    bottom_elevation: float
    component: ComponentType
    tag: str

    @property
    def distance(self) -> float:
        """Outward distance from the centerline."""
        return abs(self.offset)


@dataclass(frozen=True)
class ComponentProfile:
    """Top and bottom columns of one component solid on one side."""
    component_type: ComponentType
    side: Side
    offsets: Tuple[float, ...]
    top: Tuple[float, ...]
    bottom: Tuple[float, ...]
    tags: Tuple[str, ...]
    thickness: float

    @property
    def column_count(self) -> int:
        return len(self.offsets)

    @property
    def name(self) -> str:
        return f"{self.component_type.value}_{self.side.suffix}"


@dataclass(frozen=True)
class SideSection:
    """Ordered breakpoint chain and component solids for one side."""
    side: Side
    breakpoints: Tuple[Breakpoint, ...]
    components: Tuple[ComponentProfile, ...]

    @property
    def outer_edge(self) -> Breakpoint:
        """Outermost breakpoint; the daylight anchor."""
        return self.breakpoints[-1]

    @property
    def width(self) -> float:
        return self.outer_edge.distance


# =============================================================================
# Configuration
# =============================================================================

LENGTH_FIELDS = (
    "lane_width", "pavement_thickness",
    "shoulder_width", "shoulder_thickness",
    "kerb_width", "kerb_height", "kerb_thickness",
    "footpath_width", "footpath_thickness",
)

FLAG_FIELDS = (
    "pavement_enabled", "shoulder_enabled", "kerb_enabled",
    "footpath_enabled", "daylight_enabled",
)


@dataclass
class SideConfig:
    """Numeric template parameters for one side of the centerline."""
    pavement_enabled: bool = True
    lane_width: float = 3.6
    pavement_crossfall: float = -0.02
    pavement_thickness: float = 0.3

    shoulder_enabled: bool = False
    shoulder_width: float = 1.0
    shoulder_crossfall: float = -0.04
    shoulder_thickness: float = 0.3

    kerb_enabled: bool = True
    kerb_width: float = 0.15
    kerb_height: float = 0.15
    kerb_thickness: float = 0.3

    footpath_enabled: bool = True
    footpath_width: float = 1.5
    footpath_thickness: float = 0.1
    footpath_crossfall: float = -0.02

    daylight_enabled: bool = True
    daylight_slope: float = 2.0

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def validate(self) -> Tuple[bool, List[str]]:
        """Check the non-negativity and slope ratio constraints.

        Returns:
            Tuple of (is_valid, list_of_warnings)
        """
        warnings = []
        for name in LENGTH_FIELDS:
            if getattr(self, name) < 0:
                warnings.append(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.daylight_slope <= 0:
            warnings.append(f"daylight_slope must be positive, got {self.daylight_slope}")
        return len(warnings) == 0, warnings


SIDE_FIELDS = tuple(f.name for f in dataclasses.fields(SideConfig))


@dataclass
class TemplateConfig:
    """Template parameters for both sides.

    Example:
        >>> config = TemplateConfig.from_dict({"lane_width": 3.5, "right": {"footpath_enabled": False}})
        >>> config.left.footpath_enabled, config.right.footpath_enabled
        (True, False)
    """
    left: SideConfig = field(default_factory=SideConfig)
    right: SideConfig = field(default_factory=SideConfig)

    @classmethod
    def symmetric(cls, **params) -> "TemplateConfig":
        """Same parameters on both sides (unvalidated)."""
        return cls(left=SideConfig(**params), right=SideConfig(**params))

    def side(self, side: Side) -> SideConfig:
        return self.left if side is Side.LEFT else self.right

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateConfig":
        """Build a validated config from loader output.

        Flat keys apply to both sides; "left" / "right" sub-dictionaries
        override them per side. Negative widths, thicknesses and heights are
        clamped to 0 with a warning.

        Raises:
            ValueError: Non-numeric field, non-boolean flag, or a
                non-positive daylight slope ratio
        """
        if not isinstance(data, dict):
            raise ValueError(f"Template configuration must be a mapping, got {type(data).__name__}")

        shared = {k: v for k, v in data.items() if k not in ("left", "right")}
        sides = {}
        for side in Side:
            overrides = data.get(side.value.lower(), {}) or {}
            if not isinstance(overrides, dict):
                raise ValueError(f"'{side.value.lower()}' must be a mapping")
            merged = dict(shared)
            merged.update(overrides)
            sides[side] = _side_from_dict(merged, side)

        return cls(left=sides[Side.LEFT], right=sides[Side.RIGHT])

    def to_dict(self) -> Dict[str, Any]:
        return {"left": self.left.to_dict(), "right": self.right.to_dict()}

    def validate(self) -> Tuple[bool, List[str]]:
        warnings = []
        for side in Side:
            _, side_warnings = self.side(side).validate()
            warnings.extend(f"{side.value}: {w}" for w in side_warnings)
        return len(warnings) == 0, warnings


def _side_from_dict(data: Dict[str, Any], side: Side) -> SideConfig:
    values = {}
    for key, raw in data.items():
        if key not in SIDE_FIELDS:
            logger.warning("Ignoring unknown template field '%s'", key)
            continue

        if key in FLAG_FIELDS:
            if not isinstance(raw, bool):
                raise ValueError(f"{key} must be true or false, got {raw!r}")
            values[key] = raw
            continue

        if isinstance(raw, bool) or not isinstance(raw, Real):
            raise ValueError(f"{key} must be numeric, got {raw!r}")
        value = float(raw)

        if key in LENGTH_FIELDS and value < 0:
            logger.warning("%s %s = %s is negative, clamped to 0", side.value, key, value)
            value = 0.0

        values[key] = value

    config = SideConfig(**values)
    if config.daylight_slope <= 0:
        raise ValueError(f"daylight_slope must be positive, got {config.daylight_slope}")
    return config


def components_from_config(config: SideConfig) -> List[TemplateComponent]:
    """Ordered component list (outward) for one side."""
    return [
        PavementComponent(
            lane_width=config.lane_width,
            crossfall=config.pavement_crossfall,
            thickness=config.pavement_thickness,
            enabled=config.pavement_enabled,
        ),
        ShoulderComponent(
            width=config.shoulder_width,
            crossfall=config.shoulder_crossfall,
            thickness=config.shoulder_thickness,
            enabled=config.shoulder_enabled,
        ),
        KerbComponent(
            width=config.kerb_width,
            height=config.kerb_height,
            thickness=config.kerb_thickness,
            enabled=config.kerb_enabled,
        ),
        FootpathComponent(
            width=config.footpath_width,
            thickness=config.footpath_thickness,
            crossfall=config.footpath_crossfall,
            enabled=config.footpath_enabled,
        ),
        DaylightComponent(
            slope_ratio=config.daylight_slope,
            enabled=config.daylight_enabled,
        ),
    ]


# =============================================================================
# Template
# =============================================================================

class CrossSectionTemplate:
    """
    Transverse template evaluated per station.

    Attributes:
        config: Current TemplateConfig
        components: Side -> ordered component list
        version: Incremented on every apply_config()

    Example:
        >>> template = CrossSectionTemplate()
        >>> template.offset_to_elevation(-3.6, 100.0)
        99.928
    """

    def __init__(self, config: Optional[TemplateConfig] = None):
        self.config = TemplateConfig()
        self.components: Dict[Side, List[TemplateComponent]] = {}
        self.version = 0
        self.apply_config(config or TemplateConfig())

    def apply_config(self, config: TemplateConfig) -> None:
        """Replace the whole template."""
        self.config = config
        self.components = {side: components_from_config(config.side(side)) for side in Side}
        self.version += 1
        logger.debug("Template applied: %s", self.enabled_summary())

    def enabled_summary(self) -> str:
        parts = []
        for side in Side:
            names = [c.component_type.value for c in self.components[side] if c.enabled]
            parts.append(f"{side.value}={'/'.join(names) or 'none'}")
        return ", ".join(parts)

    def daylight(self, side: Side) -> Optional[DaylightComponent]:
        """Enabled daylight component of a side, or None."""
        for component in self.components[side]:
            if component.component_type is ComponentType.DAYLIGHT and component.enabled:
                return component
        return None

    # ------------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------------

    def side_section(self, side: Side, center_elevation: float) -> SideSection:
        """Breakpoint chain and component solids for one side."""
        breakpoints: List[Breakpoint] = []
        profiles: List[ComponentProfile] = []

        distance, elevation, tag = 0.0, center_elevation, PointTags.CENTERLINE

        for component in self.components[side]:
            if not component.enabled or component.component_type is ComponentType.DAYLIGHT:
                continue

            section = component.calculate_points(distance, elevation, tag)
            columns = [p[0] for p in section.top]

            for d, z, base_tag in section.chain:
                breakpoints.append(Breakpoint(
                    offset=side.sign * d,
                    elevation=z,
                    bottom_elevation=_interpolate(columns, section.bottom, d),
                    component=component.component_type,
                    tag=side.tag(base_tag),
                ))

            profiles.append(ComponentProfile(
                component_type=component.component_type,
                side=side,
                offsets=tuple(side.sign * p[0] for p in section.top),
                top=tuple(p[1] for p in section.top),
                bottom=tuple(section.bottom),
                tags=tuple(side.tag(p[2]) for p in section.top),
                thickness=component.thickness,
            ))

            distance, elevation, tag = section.chain[-1]

        if not breakpoints or breakpoints[0].tag != PointTags.CENTERLINE:
            breakpoints.insert(0, Breakpoint(
                0.0, center_elevation, center_elevation,
                ComponentType.PAVEMENT, PointTags.CENTERLINE,
            ))

        return SideSection(side=side, breakpoints=tuple(breakpoints), components=tuple(profiles))

    def breakpoints(self, side: Side, center_elevation: float) -> List[Breakpoint]:
        return list(self.side_section(side, center_elevation).breakpoints)

    def outer_edge(self, side: Side, center_elevation: float) -> Breakpoint:
        """Outer edge of the outermost enabled component (daylight anchor)."""
        return self.side_section(side, center_elevation).outer_edge

    def width(self, side: Side) -> float:
        """Outward distance of the outer edge (independent of elevation)."""
        return self.side_section(side, 0.0).width

    @property
    def half_width(self) -> float:
        """Larger of the two side widths."""
        return max(self.width(Side.LEFT), self.width(Side.RIGHT))

    def offset_to_elevation(self, offset: float, center_elevation: float) -> float:
        """Design elevation at a signed transverse offset.

        Walks the side chain outward and interpolates linearly. A vertical
        step (kerb face) takes effect for offsets beyond it. Offsets past the
        outer edge take the outer edge elevation.
        """
        side = Side.LEFT if offset >= 0 else Side.RIGHT
        chain = self.side_section(side, center_elevation).breakpoints
        return chain_elevation(chain, abs(offset))

    def __repr__(self) -> str:
        return f"CrossSectionTemplate({self.enabled_summary()})"


def chain_elevation(chain, distance: float) -> float:
    """Top elevation at an outward distance along one side's breakpoint chain.

    A vertical step takes effect for distances beyond it. Distances past
    the outer edge take the outer edge elevation.
    """
    if distance <= chain[0].distance:
        return chain[0].elevation

    for a, b in zip(chain, chain[1:]):
        run = b.distance - a.distance
        if run <= STEP_TOLERANCE:
            continue
        if distance <= b.distance:
            t = (distance - a.distance) / run
            return a.elevation + (b.elevation - a.elevation) * t

    return chain[-1].elevation


def _interpolate(xs: List[float], ys: List[float], x: float) -> float:
    """Piecewise-linear lookup clamped to the ends."""
    if not xs:
        return 0.0
    if x <= xs[0]:
        return ys[0]
    for x0, x1, y0, y1 in zip(xs, xs[1:], ys, ys[1:]):
        if x <= x1:
            run = x1 - x0
            if run <= STEP_TOLERANCE:
                return y1
            return y0 + (y1 - y0) * (x - x0) / run
    return ys[-1]


__all__ = [
    "Breakpoint",
    "ComponentProfile",
    "SideSection",
    "SideConfig",
    "TemplateConfig",
    "CrossSectionTemplate",
    "components_from_config",
    "chain_elevation",
]
