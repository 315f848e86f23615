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
Kernel Settings
===============

Sampling density, tolerances and daylight search parameters, with level of
detail presets. Settings never change geometry semantics, only how finely
the corridor is sampled.
"""

import dataclasses
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Tuple

from .daylight import DaylightSettings
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class KernelSettings:
    """Level of detail and tolerance settings for a corridor rebuild."""
    name: str = "Medium"
    line_step: float = 1.0
    arc_step: float = 0.5
    epsilon: float = 1e-6
    volume_samples: int = 40
    daylight: DaylightSettings = field(default_factory=DaylightSettings)

    @classmethod
    def high(cls) -> 'KernelSettings':
        """High detail - Dense sampling, slower rebuilds."""
        return cls(name="High", line_step=0.5, arc_step=0.25, volume_samples=80)

    @classmethod
    def medium(cls) -> 'KernelSettings':
        """Medium detail - Balanced quality and performance."""
        return cls()

    @classmethod
    def low(cls) -> 'KernelSettings':
        """Low detail - Fast preview."""
        return cls(name="Low", line_step=2.0, arc_step=1.0, volume_samples=20)

    @classmethod
    def from_string(cls, lod: str) -> 'KernelSettings':
        """Get settings from a preset name (unknown names give medium)."""
        lod_map = {
            'high': cls.high,
            'medium': cls.medium,
            'low': cls.low
        }
        return lod_map.get(str(lod).lower(), cls.medium)()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KernelSettings':
        """Build settings from loader output.

        An optional "lod" key selects the preset the remaining keys
        override. "daylight" is a nested mapping of DaylightSettings fields.

        Raises:
            ValueError: Unknown or non-numeric field, or a value that fails
                validate()
        """
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be a mapping, got {type(data).__name__}")

        data = dict(data)
        settings = cls.from_string(data.pop("lod", "medium"))

        daylight_data = data.pop("daylight", None) or {}
        if not isinstance(daylight_data, dict):
            raise ValueError("'daylight' must be a mapping")
        daylight_fields = {f.name for f in dataclasses.fields(DaylightSettings)}
        for key, raw in daylight_data.items():
            if key not in daylight_fields:
                raise ValueError(f"Unknown daylight setting '{key}'")
            setattr(settings.daylight, key, _number(key, raw, integer=(key == "iterations")))

        kernel_fields = {f.name for f in dataclasses.fields(cls)} - {"daylight"}
        for key, raw in data.items():
            if key not in kernel_fields:
                raise ValueError(f"Unknown setting '{key}'")
            if key == "name":
                settings.name = str(raw)
                continue
            setattr(settings, key, _number(key, raw, integer=(key == "volume_samples")))

        is_valid, warnings = settings.validate()
        if not is_valid:
            raise ValueError("; ".join(warnings))

        logger.debug("Settings loaded: %s", settings.name)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Check that steps and tolerances are usable.

        Returns:
            Tuple of (is_valid, list_of_warnings)
        """
        warnings = []
        for name in ("line_step", "arc_step", "epsilon"):
            if getattr(self, name) <= 0:
                warnings.append(f"{name} must be positive, got {getattr(self, name)}")
        if self.volume_samples < 1:
            warnings.append(f"volume_samples must be at least 1, got {self.volume_samples}")
        _, daylight_warnings = self.daylight.validate()
        warnings.extend(f"daylight: {w}" for w in daylight_warnings)
        return len(warnings) == 0, warnings


def _number(key: str, raw: Any, integer: bool = False):
    if isinstance(raw, bool) or not isinstance(raw, Real):
        raise ValueError(f"{key} must be numeric, got {raw!r}")
    if integer:
        if int(raw) != raw:
            raise ValueError(f"{key} must be a whole number, got {raw!r}")
        return int(raw)
    return float(raw)


__all__ = ["KernelSettings"]
