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
Tests for Cross-Section Components
==================================

Individual components, template configuration loading and the
offset-to-elevation mapping of the assembled template.
"""

import pytest

from saikei_corridor.core.components import (
    ComponentType,
    CrossSectionTemplate,
    DaylightComponent,
    FootpathComponent,
    KerbComponent,
    PavementComponent,
    PointTags,
    ShoulderComponent,
    Side,
    SideConfig,
    TemplateConfig,
)


# =============================================================================
# Components
# =============================================================================

class TestSide:
    """Tests for Side."""

    @pytest.mark.unit
    def test_sign_and_suffix(self):
        """Test side sign and tag suffix."""
        assert Side.LEFT.sign == 1.0
        assert Side.RIGHT.sign == -1.0
        assert Side.RIGHT.suffix == "R"

    @pytest.mark.unit
    def test_tags(self):
        """Test side-qualified point tags, with CL shared by both sides."""
        assert Side.LEFT.tag(PointTags.EDGE_TRAVELED_WAY) == "ETW_L"
        assert Side.RIGHT.tag(PointTags.CENTERLINE) == "CL"


class TestComponents:
    """Tests for the individual component variants."""

    @pytest.mark.unit
    def test_pavement_crossfall(self):
        """Test pavement from crown to ETW at the crossfall."""
        section = PavementComponent(lane_width=3.6, crossfall=-0.02).calculate_points(0.0, 100.0)
        assert [p[2] for p in section.chain] == ["CL", "ETW"]
        assert section.outer_distance == pytest.approx(3.6)
        assert section.outer_elevation == pytest.approx(99.928)
        assert section.bottom == pytest.approx([99.7, 99.628])

    @pytest.mark.unit
    def test_shoulder_attaches_to_previous_edge(self):
        """Test that the shoulder starts at the previous outer edge."""
        section = ShoulderComponent(width=1.0, crossfall=-0.04, enabled=True).calculate_points(
            3.6, 99.928, PointTags.EDGE_TRAVELED_WAY
        )
        assert section.top[0][2] == "ETW"
        distance, elevation, tag = section.chain[-1]
        assert (distance, elevation) == pytest.approx((4.6, 99.888))
        assert tag == "SH"

    @pytest.mark.unit
    def test_shoulder_disabled_by_default(self):
        """Test that the shoulder is off unless enabled."""
        assert not ShoulderComponent().enabled

    @pytest.mark.unit
    def test_kerb_vertical_face(self):
        """Test kerb flow line, vertical face and flat top."""
        section = KerbComponent(width=0.15, height=0.15, thickness=0.3).calculate_points(3.6, 99.928)
        tags = [p[2] for p in section.chain]
        assert tags == ["FL", "TC", "BC"]
        assert section.chain[0][0] == section.chain[1][0]
        assert section.chain[1][1] == pytest.approx(100.078)
        assert section.bottom == pytest.approx([99.628, 99.628])

    @pytest.mark.unit
    def test_footpath(self):
        """Test footpath from back of kerb to its outer edge."""
        section = FootpathComponent(width=1.5, crossfall=-0.02).calculate_points(3.75, 100.078, "BC")
        assert section.outer_distance == pytest.approx(5.25)
        assert section.outer_elevation == pytest.approx(100.048)

    @pytest.mark.unit
    def test_daylight_adds_no_points(self):
        """Test that the daylight component adds no fixed points."""
        component = DaylightComponent(slope_ratio=4.0)
        assert component.calculate_points(5.0, 1.0).chain == []

    @pytest.mark.unit
    def test_repr_and_dict(self):
        """Test component parameters and repr."""
        kerb = KerbComponent()
        assert kerb.to_dict() == {"enabled": True, "width": 0.15, "height": 0.15, "thickness": 0.3}
        assert repr(kerb).startswith("KerbComponent(on")


# =============================================================================
# Configuration
# =============================================================================

class TestTemplateConfig:
    """Tests for TemplateConfig.from_dict."""

    @pytest.mark.unit
    def test_flat_keys_apply_to_both_sides(self):
        """Test that flat keys set both sides."""
        config = TemplateConfig.from_dict({"lane_width": 3.5})
        assert config.left.lane_width == 3.5
        assert config.right.lane_width == 3.5

    @pytest.mark.unit
    def test_side_overrides(self):
        """Test per-side mappings over the flat keys."""
        config = TemplateConfig.from_dict({"footpath_width": 2.0, "right": {"footpath_enabled": False}})
        assert config.left.footpath_enabled
        assert not config.right.footpath_enabled
        assert config.right.footpath_width == 2.0

    @pytest.mark.unit
    def test_negative_width_clamped(self, saikei_caplog):
        """Test that a negative width is clamped to 0 and logged."""
        config = TemplateConfig.from_dict({"lane_width": -1.0})
        assert config.left.lane_width == 0.0
        assert "clamped to 0" in saikei_caplog.text

    @pytest.mark.unit
    def test_unknown_key_ignored(self, saikei_caplog):
        """Test that unknown keys are logged and ignored."""
        config = TemplateConfig.from_dict({"median_width": 3.0})
        assert config.left == SideConfig()
        assert "median_width" in saikei_caplog.text

    @pytest.mark.unit
    def test_negative_crossfall_allowed(self):
        """Test that any crossfall sign is accepted."""
        config = TemplateConfig.from_dict({"pavement_crossfall": 0.03})
        assert config.left.pavement_crossfall == 0.03

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [
        {"lane_width": "wide"},
        {"kerb_enabled": 1},
        {"lane_width": True},
        {"daylight_slope": 0.0},
        {"left": {"daylight_slope": -2.0}},
        {"right": [1, 2]},
    ])
    def test_invalid_input_rejected(self, data):
        """Test rejection of non-numeric and malformed input."""
        with pytest.raises(ValueError):
            TemplateConfig.from_dict(data)

    @pytest.mark.unit
    def test_not_a_mapping(self):
        """Test rejection of input that is not a mapping."""
        with pytest.raises(ValueError):
            TemplateConfig.from_dict([("lane_width", 3.0)])

    @pytest.mark.unit
    def test_validate(self):
        """Test template config validation warnings."""
        assert TemplateConfig().validate() == (True, [])
        config = TemplateConfig.symmetric(kerb_height=-0.1)
        is_valid, warnings = config.validate()
        assert not is_valid
        assert len(warnings) == 2


# =============================================================================
# Template
# =============================================================================

class TestCrossSectionTemplate:
    """Tests for the assembled template."""

    @pytest.mark.unit
    def test_default_chain(self):
        """Test the default left breakpoint chain."""
        template = CrossSectionTemplate()
        chain = template.breakpoints(Side.LEFT, 100.0)
        assert [bp.tag for bp in chain] == ["CL", "ETW_L", "FL_L", "TC_L", "BC_L", "FP_L"]
        assert [bp.offset for bp in chain] == pytest.approx([0.0, 3.6, 3.6, 3.6, 3.75, 5.25])
        assert [bp.elevation for bp in chain] == pytest.approx(
            [100.0, 99.928, 99.928, 100.078, 100.078, 100.048]
        )

    @pytest.mark.unit
    def test_right_offsets_negative(self):
        """Test that right side offsets are negative."""
        chain = CrossSectionTemplate().breakpoints(Side.RIGHT, 0.0)
        assert chain[-1].tag == "FP_R"
        assert chain[-1].offset == pytest.approx(-5.25)

    @pytest.mark.unit
    def test_default_solids(self):
        """Test the default component solids of one side."""
        section = CrossSectionTemplate().side_section(Side.LEFT, 0.0)
        assert [c.name for c in section.components] == ["PAVEMENT_L", "KERB_L", "FOOTPATH_L"]
        kerb = section.components[1]
        assert kerb.column_count == 2
        assert kerb.bottom == pytest.approx((-0.372, -0.372))

    @pytest.mark.unit
    def test_offset_to_elevation(self):
        """Test elevation lookup across the section."""
        template = CrossSectionTemplate()
        assert template.offset_to_elevation(0.0, 100.0) == 100.0
        assert template.offset_to_elevation(-3.6, 100.0) == pytest.approx(99.928)
        assert template.offset_to_elevation(1.8, 100.0) == pytest.approx(99.964)

    @pytest.mark.unit
    def test_vertical_step_applies_beyond_face(self):
        """Test the kerb step just past the face."""
        template = CrossSectionTemplate()
        assert template.offset_to_elevation(3.6, 0.0) == pytest.approx(-0.072)
        assert template.offset_to_elevation(3.7, 0.0) == pytest.approx(0.078)

    @pytest.mark.unit
    def test_beyond_outer_edge_clamped(self):
        """Test that offsets past the outer edge hold the edge elevation."""
        template = CrossSectionTemplate()
        assert template.offset_to_elevation(50.0, 0.0) == pytest.approx(0.048)
        assert template.offset_to_elevation(-50.0, 0.0) == pytest.approx(0.048)

    @pytest.mark.unit
    def test_shoulder_inserted_before_kerb(self):
        """Test shoulder placement between ETW and kerb."""
        template = CrossSectionTemplate(TemplateConfig.from_dict({"shoulder_enabled": True}))
        tags = [bp.tag for bp in template.breakpoints(Side.LEFT, 0.0)]
        assert tags == ["CL", "ETW_L", "SH_L", "FL_L", "TC_L", "BC_L", "FP_L"]
        assert template.width(Side.LEFT) == pytest.approx(6.25)

    @pytest.mark.unit
    def test_asymmetric_widths(self):
        """Test side widths with the right footpath disabled."""
        template = CrossSectionTemplate(TemplateConfig.from_dict({"right": {"footpath_enabled": False}}))
        assert template.width(Side.LEFT) == pytest.approx(5.25)
        assert template.width(Side.RIGHT) == pytest.approx(3.75)
        assert template.half_width == pytest.approx(5.25)

    @pytest.mark.unit
    def test_everything_disabled_leaves_centerline(self):
        """Test that a fully disabled side keeps only CL."""
        template = CrossSectionTemplate(TemplateConfig.symmetric(
            pavement_enabled=False, kerb_enabled=False, footpath_enabled=False,
        ))
        section = template.side_section(Side.LEFT, 7.0)
        assert [bp.tag for bp in section.breakpoints] == ["CL"]
        assert section.components == ()
        assert template.offset_to_elevation(4.0, 7.0) == 7.0

    @pytest.mark.unit
    def test_daylight_lookup(self):
        """Test daylight component lookup per side."""
        template = CrossSectionTemplate(TemplateConfig.from_dict({"left": {"daylight_enabled": False}}))
        assert template.daylight(Side.LEFT) is None
        assert template.daylight(Side.RIGHT).component_type is ComponentType.DAYLIGHT

    @pytest.mark.unit
    def test_apply_config_bumps_version(self):
        """Test that applying a config bumps the version."""
        template = CrossSectionTemplate()
        version = template.version
        template.apply_config(TemplateConfig())
        assert template.version == version + 1
