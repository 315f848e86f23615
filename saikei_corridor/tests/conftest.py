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
Pytest Configuration and Fixtures
==================================

Shared fixtures for the corridor kernel test suite.
"""

import logging

import pytest

from saikei_corridor.core.components.template import CrossSectionTemplate, TemplateConfig
from saikei_corridor.core.horizontal_alignment.builder import AlignmentBuilder
from saikei_corridor.core.logging_config import LOGGER_PREFIX
from saikei_corridor.core.terrain import flat_terrain
from saikei_corridor.core.vertical_alignment.profile import GradeProfile


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external deps)")
    config.addinivalue_line("markers", "integration: Integration tests across several kernel stages")
    config.addinivalue_line("markers", "slow: Slow running tests")


# ============================================================================
# Logging
# ============================================================================

@pytest.fixture
def saikei_caplog(caplog, monkeypatch):
    """caplog that also sees the saikei logger tree (which does not propagate)."""
    monkeypatch.setattr(logging.getLogger(LOGGER_PREFIX), "propagate", True)
    caplog.set_level(logging.DEBUG, logger=LOGGER_PREFIX)
    return caplog


# ============================================================================
# Geometry
# ============================================================================

@pytest.fixture
def straight_builder() -> AlignmentBuilder:
    """Single 100-unit straight along +x."""
    return AlignmentBuilder([(0.0, 0.0), (100.0, 0.0)])


@pytest.fixture
def right_angle_builder() -> AlignmentBuilder:
    """Two legs of 100 meeting at a 90 degree left turn, R = 10."""
    return AlignmentBuilder([(0.0, 0.0), (100.0, 0.0), (100.0, 100.0)], default_radius=10.0)


@pytest.fixture
def flat_grade() -> GradeProfile:
    """Level grade at elevation 10 over 100 units."""
    return GradeProfile.from_points([(0.0, 10.0), (100.0, 10.0)])


@pytest.fixture
def pavement_only_template() -> CrossSectionTemplate:
    """3.6 lane each side, no kerb or footpath, 2:1 daylight."""
    config = TemplateConfig.from_dict({
        "kerb_enabled": False,
        "footpath_enabled": False,
    })
    return CrossSectionTemplate(config)


@pytest.fixture
def flat_ground():
    return flat_terrain(0.0)
