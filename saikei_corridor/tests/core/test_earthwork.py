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
Tests for Earthwork Volumes
===========================

Average end-area cut and fill between the template and the terrain.
"""

import math

import pytest

from saikei_corridor.core.components import CrossSectionTemplate, TemplateConfig
from saikei_corridor.core.earthwork import SectionArea, VolumeEstimator, VolumeTotals
from saikei_corridor.core.terrain import flat_terrain
from saikei_corridor.core.vertical_alignment import GradeProfile

# Area between a 10.0 crown with -2% crossfall over 3.6 each side and datum 0
CROWN_AREA = 72.0 - 0.02 * 3.6 * 3.6


def crowned_ground(x, y):
    """Ground matching the pavement-only template at crown elevation 10."""
    return 10.0 - 0.02 * abs(y)


class TestSectionArea:
    """Tests for VolumeEstimator.section_area."""

    @pytest.mark.unit
    def test_strips_span_template(self, flat_grade, pavement_only_template):
        """Test strip centres and width across the template."""
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade, samples=4)
        offsets, width = estimator.strips()
        assert width == pytest.approx(1.8)
        assert list(offsets) == pytest.approx([-2.7, -0.9, 0.9, 2.7])

    @pytest.mark.unit
    def test_strips_follow_asymmetric_template(self, flat_grade):
        """Test strips from right edge to left edge of an asymmetric template."""
        template = CrossSectionTemplate(TemplateConfig.from_dict({"right": {"footpath_enabled": False}}))
        offsets, width = VolumeEstimator(flat_terrain(0.0), template, flat_grade, samples=9).strips()
        assert offsets[0] - width / 2 == pytest.approx(-3.75)
        assert offsets[-1] + width / 2 == pytest.approx(5.25)

    @pytest.mark.unit
    def test_matching_ground_has_no_earthwork(self, straight_builder, flat_grade, pavement_only_template):
        """Test zero areas where ground matches the design."""
        estimator = VolumeEstimator(crowned_ground, pavement_only_template, flat_grade)
        area = estimator.section_area(straight_builder.stations[30])
        assert area.cut == pytest.approx(0.0, abs=1e-9)
        assert area.fill == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.unit
    def test_fill(self, straight_builder, flat_grade, pavement_only_template):
        """Test a fill-only section area."""
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade)
        area = estimator.section_area(straight_builder.stations[0])
        assert area.cut == 0.0
        assert area.fill == pytest.approx(CROWN_AREA)
        assert area.net == pytest.approx(CROWN_AREA)

    @pytest.mark.unit
    def test_cut(self, straight_builder, flat_grade, pavement_only_template):
        """Test a cut-only section area."""
        estimator = VolumeEstimator(flat_terrain(20.0), pavement_only_template, flat_grade)
        area = estimator.section_area(straight_builder.stations[0])
        assert area.fill == 0.0
        assert area.cut == pytest.approx(20.0 * 7.2 - CROWN_AREA)

    @pytest.mark.unit
    def test_mixed_section(self, straight_builder, flat_grade, pavement_only_template):
        """Test cut and fill in one tilted section."""
        def tilted(x, y):
            return 10.0 + y

        estimator = VolumeEstimator(tilted, pavement_only_template, flat_grade)
        area = estimator.section_area(straight_builder.stations[0], center_elevation=10.0)
        assert area.cut > 0
        assert area.fill > 0

    @pytest.mark.unit
    def test_center_elevation_override(self, straight_builder, flat_grade, pavement_only_template):
        """Test a section area at a given centre elevation."""
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade)
        area = estimator.section_area(straight_builder.stations[0], center_elevation=5.0)
        assert area.fill == pytest.approx(CROWN_AREA - 5.0 * 7.2)


class TestEstimate:
    """Tests for VolumeEstimator.estimate."""

    @pytest.mark.unit
    def test_fill_volume(self, straight_builder, flat_grade, pavement_only_template):
        """Test fill volume along a straight corridor."""
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade)
        totals = estimator.estimate(straight_builder.stations)
        assert totals.fill == pytest.approx(100.0 * CROWN_AREA)
        assert totals.cut == 0.0
        assert len(totals.areas) == 101
        assert len(totals.segments) == 100
        assert sum(s.length for s in totals.segments) == pytest.approx(100.0)

    @pytest.mark.unit
    def test_no_cut_is_positive_zero(self, straight_builder, flat_grade, pavement_only_template):
        """Test that a fill-only corridor reports +0.0 cut, never -0.0."""
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade)
        totals = estimator.estimate(straight_builder.stations[:3])
        assert math.copysign(1.0, totals.areas[0].cut) == 1.0
        assert math.copysign(1.0, totals.segments[0].cut) == 1.0
        assert math.copysign(1.0, totals.cut) == 1.0

    @pytest.mark.unit
    def test_zero_on_matching_ground(self, straight_builder, flat_grade, pavement_only_template):
        """Test zero volumes where ground matches the design."""
        totals = VolumeEstimator(crowned_ground, pavement_only_template, flat_grade).estimate(
            straight_builder.stations
        )
        assert totals.cut == pytest.approx(0.0, abs=1e-6)
        assert totals.fill == pytest.approx(0.0, abs=1e-6)

    @pytest.mark.unit
    def test_average_end_area(self, straight_builder, pavement_only_template):
        """Test the average end-area volume between two stations."""
        sloped = GradeProfile.from_points([(0.0, 10.0), (100.0, 0.0)])
        estimator = VolumeEstimator(flat_terrain(0.0), pavement_only_template, sloped)
        totals = estimator.estimate(straight_builder.stations[:2])
        a0, a1 = totals.areas
        assert totals.segments[0].fill == pytest.approx(0.5 * (a0.fill + a1.fill))

    @pytest.mark.unit
    def test_single_station(self, straight_builder, flat_grade, pavement_only_template):
        """Test that one station gives areas but no volume."""
        totals = VolumeEstimator(flat_terrain(0.0), pavement_only_template, flat_grade).estimate(
            straight_builder.stations[:1]
        )
        assert (totals.cut, totals.fill) == (0.0, 0.0)
        assert totals.segments == []

    @pytest.mark.unit
    def test_summary(self):
        """Test net volume and the summary text."""
        totals = VolumeTotals(cut=10.0, fill=4.0, areas=[SectionArea(0.0, 1.0, 0.0)])
        assert totals.net == -6.0
        assert "Net:  -6.00" in totals.summary()
