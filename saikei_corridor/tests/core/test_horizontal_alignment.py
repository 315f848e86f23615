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
Tests for Horizontal Alignment
==============================

Vector math, fillet geometry, centerline sampling and the IP-driven
AlignmentBuilder.
"""

import math

import pytest

from saikei_corridor.core.horizontal_alignment import (
    AlignmentBuilder,
    SimpleVector,
    calculate_fillet,
    cumulative_distances,
    dedupe,
    intersect_lines,
    sample_arc,
    sample_line,
)


# =============================================================================
# SimpleVector
# =============================================================================

class TestSimpleVector:
    """Tests for SimpleVector."""

    @pytest.mark.unit
    def test_arithmetic(self):
        """Test vector addition, subtraction and scaling."""
        a = SimpleVector(1.0, 2.0)
        b = SimpleVector(3.0, -1.0)
        assert (a + b).to_tuple() == (4.0, 1.0)
        assert (a - b).to_tuple() == (-2.0, 3.0)
        assert (2 * a).to_tuple() == (2.0, 4.0)
        assert (a / 2).to_tuple() == (0.5, 1.0)

    @pytest.mark.unit
    def test_length_and_normalized(self):
        """Test vector length and normalization."""
        v = SimpleVector(3.0, 4.0)
        assert v.length == 5.0
        assert v.normalized().length == pytest.approx(1.0)

    @pytest.mark.unit
    def test_zero_vector_normalizes_to_zero(self):
        """Test that a zero vector normalizes to zero."""
        assert SimpleVector(0.0, 0.0).normalized().length == 0.0

    @pytest.mark.unit
    def test_left_normal_is_ccw_rotation(self):
        """Test left normal as a 90 degree CCW rotation."""
        n = SimpleVector(1.0, 0.0).left_normal()
        assert n.to_tuple() == (-0.0, 1.0)

    @pytest.mark.unit
    def test_cross_sign_gives_turn(self):
        """Test cross product sign for left and right turns."""
        east = SimpleVector(1.0, 0.0)
        assert east.cross(SimpleVector(0.0, 1.0)) > 0
        assert east.cross(SimpleVector(0.0, -1.0)) < 0

    @pytest.mark.unit
    def test_equality_uses_tolerance(self):
        """Test vector equality within tolerance."""
        assert SimpleVector(1.0, 1.0) == SimpleVector(1.0 + 1e-12, 1.0)
        assert SimpleVector(1.0, 1.0) != SimpleVector(1.1, 1.0)


class TestIntersectLines:
    """Tests for intersect_lines."""

    @pytest.mark.unit
    def test_perpendicular_lines(self):
        """Test intersection of perpendicular lines."""
        p = intersect_lines(SimpleVector(0, 10), SimpleVector(1, 0),
                            SimpleVector(90, 0), SimpleVector(0, 1))
        assert p.x == pytest.approx(90.0)
        assert p.y == pytest.approx(10.0)

    @pytest.mark.unit
    def test_parallel_lines_return_none(self):
        """Test that parallel lines do not intersect."""
        assert intersect_lines(SimpleVector(0, 0), SimpleVector(1, 0),
                               SimpleVector(0, 1), SimpleVector(2, 0)) is None


# =============================================================================
# Fillet Geometry
# =============================================================================

class TestCalculateFillet:
    """Tests for calculate_fillet."""

    @pytest.mark.unit
    def test_right_angle_left_turn(self):
        """Test a 90 degree left turn fillet."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(100, 0), SimpleVector(100, 100), 10.0)

        assert fillet.theta == pytest.approx(math.pi / 2)
        assert fillet.turn == 1
        assert fillet.turn_direction == 'LEFT'
        assert fillet.radius == pytest.approx(10.0)
        assert fillet.arc_length == pytest.approx(15.708, abs=1e-3)
        assert fillet.center.to_tuple() == pytest.approx((90.0, 10.0))
        assert fillet.start.to_tuple() == pytest.approx((90.0, 0.0))
        assert fillet.end.to_tuple() == pytest.approx((100.0, 10.0))
        assert fillet.tangent_length == pytest.approx(10.0)
        assert not fillet.is_clamped

    @pytest.mark.unit
    def test_right_turn(self):
        """Test a right turn fillet centre and sign."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(100, 0), SimpleVector(100, -100), 10.0)
        assert fillet.turn == -1
        assert fillet.center.to_tuple() == pytest.approx((90.0, -10.0))
        assert fillet.sweep == pytest.approx(-math.pi / 2)

    @pytest.mark.unit
    def test_tangency_points_are_radius_from_center(self):
        """Test that tangency points lie on the fillet circle."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(50, 10), SimpleVector(80, 60), 20.0)
        assert fillet.start.distance_to(fillet.center) == pytest.approx(fillet.radius)
        assert fillet.end.distance_to(fillet.center) == pytest.approx(fillet.radius)
        assert fillet.point_at(1.0).to_tuple() == pytest.approx(fillet.end.to_tuple())

    @pytest.mark.unit
    def test_radius_clamped_by_short_leg(self):
        """Test radius clamp on a short leg."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(5, 0), SimpleVector(5, 100), 50.0)
        # tan(45 deg) = 1, so R <= 5 - eps
        assert fillet.is_clamped
        assert fillet.radius == pytest.approx(5.0, abs=1e-5)
        assert fillet.radius <= 5.0
        assert fillet.tangent_length <= 5.0

    @pytest.mark.unit
    def test_collinear_gives_no_fillet(self):
        """Test that collinear IPs give no fillet."""
        assert calculate_fillet(SimpleVector(0, 0), SimpleVector(50, 0), SimpleVector(100, 0), 10.0) is None

    @pytest.mark.unit
    def test_reversal_gives_no_fillet(self):
        """Test that a reversal gives no fillet."""
        assert calculate_fillet(SimpleVector(0, 0), SimpleVector(50, 0), SimpleVector(0, 0), 10.0) is None

    @pytest.mark.unit
    def test_zero_length_leg_gives_no_fillet(self):
        """Test that a zero-length leg gives no fillet."""
        assert calculate_fillet(SimpleVector(0, 0), SimpleVector(0, 0), SimpleVector(10, 10), 10.0) is None

    @pytest.mark.unit
    def test_zero_radius_gives_no_fillet(self):
        """Test that a zero radius gives no fillet."""
        assert calculate_fillet(SimpleVector(0, 0), SimpleVector(50, 0), SimpleVector(50, 50), 0.0) is None

    @pytest.mark.unit
    def test_skipped_fillet_logged_at_debug(self, saikei_caplog):
        """Test that a skipped fillet is logged."""
        calculate_fillet(SimpleVector(0, 0), SimpleVector(50, 0), SimpleVector(100, 0), 10.0, ip_index=3)
        assert "IP 3" in saikei_caplog.text


# =============================================================================
# Sampling
# =============================================================================

class TestSampling:
    """Tests for line/arc sampling and chainage helpers."""

    @pytest.mark.unit
    def test_line_excludes_end_by_default(self):
        """Test line sampling without the end point."""
        out = []
        sample_line(out, SimpleVector(0, 0), SimpleVector(10, 0), 1.0)
        assert len(out) == 10
        assert out[-1].x == pytest.approx(9.0)

    @pytest.mark.unit
    def test_line_with_end(self):
        """Test line sampling with the end point."""
        out = []
        sample_line(out, SimpleVector(0, 0), SimpleVector(10, 0), 3.0, include_end=True)
        # ceil(10 / 3) = 4 intervals
        assert len(out) == 5
        assert out[-1].x == 10.0

    @pytest.mark.unit
    def test_arc_has_at_least_two_samples(self):
        """Test that a short arc keeps both tangency points."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(100, 0), SimpleVector(100, 100), 10.0)
        out = []
        sample_arc(out, fillet, 100.0)
        assert len(out) == 2
        assert out[0] == fillet.start
        assert out[-1] == fillet.end

    @pytest.mark.unit
    def test_arc_sample_count(self):
        """Test arc sample count for the arc step."""
        fillet = calculate_fillet(SimpleVector(0, 0), SimpleVector(100, 0), SimpleVector(100, 100), 10.0)
        out = []
        sample_arc(out, fillet, 0.5)
        assert len(out) == math.ceil(fillet.arc_length / 0.5)

    @pytest.mark.unit
    def test_dedupe_drops_coincident_neighbours(self):
        """Test removal of coincident neighbouring points."""
        points = [SimpleVector(0, 0), SimpleVector(0, 1e-9), SimpleVector(1, 0), SimpleVector(1, 0)]
        assert len(dedupe(points, 1e-6)) == 2

    @pytest.mark.unit
    def test_cumulative_distances(self):
        """Test chainages as running distances."""
        points = [SimpleVector(0, 0), SimpleVector(3, 4), SimpleVector(3, 10)]
        assert cumulative_distances(points) == [0.0, 5.0, 11.0]
        assert cumulative_distances([]) == []


# =============================================================================
# AlignmentBuilder
# =============================================================================

class TestAlignmentBuilder:
    """Tests for AlignmentBuilder construction and queries."""

    @pytest.mark.unit
    def test_straight_alignment(self, straight_builder):
        """Test a two-IP straight centerline."""
        assert straight_builder.length == pytest.approx(100.0)
        assert straight_builder.fillets == []
        assert len(straight_builder.stations) == 101
        first = straight_builder.stations[0]
        assert first.tangent.to_tuple() == pytest.approx((1.0, 0.0))
        assert first.normal.to_tuple() == pytest.approx((0.0, 1.0))

    @pytest.mark.unit
    def test_right_angle_fillet(self, right_angle_builder):
        """Test the fillet of a right-angle alignment."""
        fillets = right_angle_builder.fillets
        assert len(fillets) == 1
        assert fillets[0].radius == pytest.approx(10.0)
        assert fillets[0].arc_length == pytest.approx(15.708, abs=1e-3)
        # Chords under-run the arc slightly
        assert right_angle_builder.length == pytest.approx(90.0 + 15.708 + 90.0, abs=0.02)

    @pytest.mark.unit
    def test_chainages_non_decreasing(self, right_angle_builder):
        """Test that chainages increase along the centerline."""
        chainages = right_angle_builder.chainages
        assert all(b > a for a, b in zip(chainages, chainages[1:]))

    @pytest.mark.unit
    def test_no_duplicate_stations(self, right_angle_builder):
        """Test that no two neighbouring stations coincide."""
        points = right_angle_builder.points
        assert all(a.distance_to(b) > 1e-6 for a, b in zip(points, points[1:]))

    @pytest.mark.unit
    def test_fillet_never_exceeds_leg_bound(self):
        """Test that realized radii fit their legs."""
        builder = AlignmentBuilder([(0, 0), (8, 0), (8, 6), (20, 6)], default_radius=100.0)
        for fillet in builder.fillets:
            assert fillet.radius <= 100.0
            assert fillet.tangent_length <= 6.0

    @pytest.mark.unit
    def test_single_ip_gives_one_station(self):
        """Test a single IP centerline."""
        builder = AlignmentBuilder([(5, 5)])
        assert len(builder.stations) == 1
        assert builder.length == 0.0

    @pytest.mark.unit
    def test_no_ips_gives_no_stations(self):
        """Test an empty alignment."""
        builder = AlignmentBuilder()
        assert builder.stations == []
        assert builder.closest_point(0, 0) is None
        assert builder.point_at_chainage(10.0) is None

    @pytest.mark.unit
    def test_coincident_ips_do_not_raise(self):
        """Test coincident IPs."""
        builder = AlignmentBuilder([(0, 0), (0, 0), (10, 0)])
        assert builder.length == pytest.approx(10.0)

    @pytest.mark.unit
    def test_closest_point_on_straight(self, straight_builder):
        """Test closest point beside a straight."""
        hit = straight_builder.closest_point(40.0, 3.0)
        assert hit.point.to_tuple() == pytest.approx((40.0, 0.0))
        assert hit.chainage == pytest.approx(40.0)
        assert hit.distance == pytest.approx(3.0)
        assert hit.tangent.to_tuple() == pytest.approx((1.0, 0.0))

    @pytest.mark.unit
    def test_closest_point_clamped_past_end(self, straight_builder):
        """Test closest point beyond the last station."""
        hit = straight_builder.closest_point(120.0, 0.0)
        assert hit.chainage == pytest.approx(100.0)
        assert hit.distance == pytest.approx(20.0)

    @pytest.mark.unit
    def test_point_at_chainage(self, right_angle_builder):
        """Test station interpolation at a chainage."""
        station = right_angle_builder.point_at_chainage(50.0)
        assert station.x == pytest.approx(50.0)
        assert station.y == pytest.approx(0.0)
        end = right_angle_builder.point_at_chainage(1e9)
        assert end.chainage == pytest.approx(right_angle_builder.length)
        assert (end.x, end.y) == pytest.approx((100.0, 100.0))


class TestAlignmentBuilderEdits:
    """Tests for AlignmentBuilder mutations."""

    @pytest.mark.unit
    def test_every_edit_bumps_version(self, right_angle_builder):
        """Test that every edit rebuilds the alignment."""
        version = right_angle_builder.version
        right_angle_builder.move_ip(2, 100.0, 50.0)
        right_angle_builder.set_radius_override(1, 5.0)
        right_angle_builder.clear_radius_override(1)
        right_angle_builder.set_default_radius(20.0)
        assert right_angle_builder.version == version + 4

    @pytest.mark.unit
    def test_radius_override(self, right_angle_builder):
        """Test setting and clearing a radius override."""
        right_angle_builder.set_radius_override(1, 25.0)
        assert right_angle_builder.fillets[0].radius == pytest.approx(25.0)
        right_angle_builder.clear_radius_override(1)
        assert right_angle_builder.fillets[0].radius == pytest.approx(10.0)

    @pytest.mark.unit
    def test_insert_shifts_overrides(self, right_angle_builder):
        """Test that inserting an IP shifts later overrides."""
        right_angle_builder.set_radius_override(1, 25.0)
        right_angle_builder.insert_ip(1, 50.0, -20.0)
        assert right_angle_builder.radius_overrides == {2: 25.0}
        assert len(right_angle_builder.ips) == 4

    @pytest.mark.unit
    def test_remove_drops_and_shifts_overrides(self):
        """Test that removing an IP drops its override and shifts later ones."""
        builder = AlignmentBuilder([(0, 0), (50, 0), (50, 50), (100, 50)])
        builder.set_radius_override(1, 5.0)
        builder.set_radius_override(2, 7.0)
        builder.remove_ip(1)
        assert builder.radius_overrides == {1: 7.0}

    @pytest.mark.unit
    def test_move_out_of_range_raises(self, straight_builder):
        """Test IndexError when moving a missing IP."""
        with pytest.raises(IndexError):
            straight_builder.move_ip(5, 0.0, 0.0)

    @pytest.mark.unit
    def test_remove_out_of_range_raises(self, straight_builder):
        """Test IndexError when removing a missing IP."""
        with pytest.raises(IndexError):
            straight_builder.remove_ip(-1)

    @pytest.mark.unit
    def test_set_ips_drops_stale_overrides(self):
        """Test that replacing the IPs drops overrides past the new interior."""
        builder = AlignmentBuilder([(0, 0), (50, 0), (50, 50), (100, 50)])
        builder.set_radius_override(2, 5.0)
        builder.set_ips([(0, 0), (50, 0), (50, 50)])
        assert builder.radius_overrides == {}

    @pytest.mark.unit
    def test_validate_reports_clamp(self):
        """Test that validate reports a clamped radius."""
        builder = AlignmentBuilder([(0, 0), (5, 0), (5, 100)], default_radius=50.0)
        is_valid, warnings = builder.validate()
        assert not is_valid
        assert any("clamped" in w for w in warnings)

    @pytest.mark.unit
    def test_validate_reports_overlapping_fillets(self):
        """Test that two fillets sharing a short leg are reported."""
        builder = AlignmentBuilder([(0, 0), (100, 0), (100, 5), (0, 5)], default_radius=50.0)
        is_valid, warnings = builder.validate()
        assert not is_valid
        assert any("IPs 1-2" in w and "overlap" in w for w in warnings)

    @pytest.mark.unit
    def test_validate_fillets_fit_shared_leg(self):
        """Test that fillets fitting on the shared leg give no overlap warning."""
        builder = AlignmentBuilder([(0, 0), (100, 0), (100, 50), (0, 50)], default_radius=10.0)
        is_valid, warnings = builder.validate()
        assert is_valid
        assert warnings == []

    @pytest.mark.unit
    def test_validate_needs_two_ips(self):
        """Test that validate needs at least two IPs."""
        is_valid, warnings = AlignmentBuilder([(0, 0)]).validate()
        assert not is_valid
        assert warnings
