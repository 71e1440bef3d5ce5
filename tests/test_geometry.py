"""Tests for shared/geometry.py and shared/svg.py pure functions."""
import math
import pytest
from shared.geometry import (
    round_half_up, wrap_angle, polar,
    arc_center_params, flatten_arc, segments_intersect, dedupe_consecutive,
    polyline_self_intersects, rotate_points, regular_polygon,
)
from shared.svg import fmt_num, view_box, view_box_attr, contours_to_path_d


# --- round_half_up ---

@pytest.mark.parametrize("x,expected", [
    (0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (6.283, 6), (12.566, 13),
])
def test_round_half_up(x, expected):
    assert round_half_up(x) == expected


# --- wrap_angle ---

def test_wrap_angle_identity_in_range():
    assert wrap_angle(1.0) == pytest.approx(1.0)
    assert wrap_angle(-1.0) == pytest.approx(-1.0)


def test_wrap_angle_pi_stays_positive():
    assert wrap_angle(math.pi) == pytest.approx(math.pi)
    assert wrap_angle(-math.pi) == pytest.approx(math.pi)


def test_wrap_angle_large():
    assert wrap_angle(2 * math.pi + 0.25) == pytest.approx(0.25)
    assert wrap_angle(-2 * math.pi - 0.25) == pytest.approx(-0.25)
    assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)


# --- polar ---

def test_polar():
    x, y = polar(2.0, math.pi / 2)
    assert abs(x) < 1e-12
    assert abs(y - 2.0) < 1e-12


# --- arc_center_params ---

def test_arc_center_semicircle():
    cx, cy, rx, ry, phi, theta1, dtheta = arc_center_params(
        (10, 0), 10, 10, 0, 0, 1, (-10, 0))
    assert (cx, cy) == pytest.approx((0, 0), abs=1e-9)
    assert rx == pytest.approx(10)
    assert abs(dtheta) == pytest.approx(math.pi)
    assert dtheta > 0


def test_arc_center_sweep_flag_sets_direction():
    *_, dtheta = arc_center_params((10, 0), 10, 10, 0, 0, 0, (0, 10))
    assert dtheta < 0


def test_arc_center_scales_small_radii():
    _, _, rx, ry, _, _, dtheta = arc_center_params((0, 0), 1, 1, 0, 0, 1, (10, 0))
    assert rx == pytest.approx(5)
    assert ry == pytest.approx(5)
    assert abs(dtheta) == pytest.approx(math.pi)


def test_arc_center_degenerate():
    assert arc_center_params((1, 1), 5, 5, 0, 0, 1, (1, 1)) is None
    assert arc_center_params((0, 0), 0, 5, 0, 0, 1, (1, 1)) is None


# --- flatten_arc ---

def test_flatten_semicircle_segment_count():
    pts = flatten_arc((10, 0), 10, 10, 0, 0, 1, (-10, 0), segments_per_arc=32)
    assert len(pts) == 32
    assert pts[-1] == (-10, 0)
    for x, y in pts:
        assert math.hypot(x, y) == pytest.approx(10)


def test_flatten_quarter_arc_segment_count():
    pts = flatten_arc((10, 0), 10, 10, 0, 0, 1, (0, 10), segments_per_arc=32)
    assert len(pts) == 16


def test_flatten_small_arc_has_one_segment():
    p2 = (10 * math.cos(0.01), 10 * math.sin(0.01))
    assert flatten_arc((10, 0), 10, 10, 0, 0, 1, p2) == [p2]


def test_flatten_coincident_endpoints_is_empty():
    assert flatten_arc((3, 4), 5, 5, 0, 0, 1, (3, 4)) == []


def test_flatten_zero_radius_is_line():
    assert flatten_arc((0, 0), 0, 0, 0, 0, 1, (5, 5)) == [(5, 5)]


# --- intersections ---

def test_segments_intersect():
    assert segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))
    assert not segments_intersect((0, 0), (1, 0), (0, 1), (1, 1))
    # Touching at an endpoint counts
    assert segments_intersect((0, 0), (1, 0), (1, 0), (1, 1))


def test_dedupe_consecutive():
    assert dedupe_consecutive([(0, 0), (0, 0), (1, 0), (0, 0)]) == [(0, 0), (1, 0), (0, 0)]


class TestPolylineSelfIntersects:
    def test_square_is_simple(self):
        assert not polyline_self_intersects([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)

    def test_bow_tie_closed(self):
        assert polyline_self_intersects([(0, 0), (10, 0), (0, 10), (10, 10)], closed=True)

    def test_closing_duplicate_ignored(self):
        pts = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        assert not polyline_self_intersects(pts, closed=True)

    def test_open_crossing(self):
        assert polyline_self_intersects([(0, 0), (10, 10), (10, 0), (0, 10)], closed=False)

    def test_open_zigzag_is_simple(self):
        assert not polyline_self_intersects([(0, 0), (1, 1), (2, 0), (3, 1)], closed=False)


# --- transforms ---

def test_rotate_points_quarter_turn():
    out = rotate_points([(1, 0), (0, 2)], math.pi / 2)
    assert out.shape == (2, 2)
    assert out[0] == pytest.approx([0, 1], abs=1e-12)
    assert out[1] == pytest.approx([-2, 0], abs=1e-12)


def test_rotate_points_preserves_radius():
    pts = [(3, 4), (-5, 12), (8, -15)]
    out = rotate_points(pts, 1.234)
    for (x0, y0), (x1, y1) in zip(pts, out):
        assert math.hypot(x1, y1) == pytest.approx(math.hypot(x0, y0))


def test_regular_polygon():
    pts = regular_polygon(1, 2, 3, 8)
    assert pts.shape == (8, 2)
    assert pts[0] == pytest.approx([4, 2])
    for x, y in pts:
        assert math.hypot(x - 1, y - 2) == pytest.approx(3)


# --- svg formatting ---

@pytest.mark.parametrize("v,expected", [
    (0.0, "0.00"), (-0.0, "0.00"), (-0.004, "0.00"), (-0.005001, "-0.01"),
    (125.0, "125.00"), (-122.444, "-122.44"), (10.0, "10.00"),
])
def test_fmt_num(v, expected):
    assert fmt_num(v) == expected


def test_fmt_num_precision():
    assert fmt_num(1.23456, 3) == "1.235"
    assert fmt_num(-0.0001, 3) == "0.000"


def test_view_box():
    assert view_box(290) == (-165.0, 330.0)
    assert view_box_attr(290) == "-165 -165 330 330"


def test_contours_to_path_d():
    d = contours_to_path_d([[(0, 0), (1500, 0), (1500, -2000)]], 1000)
    assert d == "M 0.000 0.000 L 1.500 0.000 L 1.500 -2.000 Z"
    assert contours_to_path_d([[]], 1000) == ""
