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
Cross-Section Components Package
Template components stacked outward from the centerline
"""

from .base_component import (
    ComponentSection,
    ComponentType,
    PointTags,
    Side,
    TemplateComponent,
)
from .pavement_component import PavementComponent
from .shoulder_component import ShoulderComponent
from .kerb_component import KerbComponent
from .footpath_component import FootpathComponent
from .daylight_component import DaylightComponent

from .template import (
    Breakpoint,
    ComponentProfile,
    CrossSectionTemplate,
    SideConfig,
    SideSection,
    TemplateConfig,
    chain_elevation,
    components_from_config,
)

__all__ = [
    # Variant tags
    'ComponentType',
    'Side',
    'PointTags',
    # Components
    'TemplateComponent',
    'ComponentSection',
    'PavementComponent',
    'ShoulderComponent',
    'KerbComponent',
    'FootpathComponent',
    'DaylightComponent',
    # Template
    'Breakpoint',
    'ComponentProfile',
    'SideSection',
    'SideConfig',
    'TemplateConfig',
    'CrossSectionTemplate',
    'components_from_config',
    'chain_elevation',
]
