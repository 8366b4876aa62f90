"""Tests for shared/geometry.py pure functions."""
import math
import pytest
from shared.geometry import (
    GeometryError,
    dist, off_pt, unit, cross, bounding_box, poly_area, room_area,
    cast_ray, quantize, arc_sweep_deg, segment_length, path_length,
)
from shared.types import LineSeg, ArcSeg


# --- point utilities ---

def test_dist():
    assert abs(dist((0, 0), (3, 4)) - 5.0) < 1e-12


def test_off_pt():
    p = off_pt((3, 4), (0, 1), 2.0)
    assert abs(p[0] - 3.0) < 1e-12
    assert abs(p[1] - 6.0) < 1e-12


def test_unit():
    u = unit((1, 1), (1, -3))
    assert abs(u[0]) < 1e-12
    assert abs(u[1] + 1.0) < 1e-12


def test_unit_coincident_raises():
    with pytest.raises(GeometryError, match="Coincident"):
        unit((2, 2), (2, 2))


def test_cross_sign():
    # y grows downward: (1,0) then (0,1) is a clockwise turn on screen
    assert cross((0, 0), (1, 0), (0, 1)) > 0
    assert cross((0, 0), (0, 1), (1, 0)) < 0


# --- bounding_box ---

def test_bounding_box():
    bb = bounding_box([(10, 5), (-2, 8), (4, -1)])
    assert (bb.min_x, bb.min_y, bb.max_x, bb.max_y) == (-2, -1, 10, 8)
    assert bb.width == 12
    assert bb.height == 9


def test_bounding_box_degenerate_raises():
    with pytest.raises(GeometryError, match="Degenerate"):
        bounding_box([(1, 1), (1, 1), (1, 1)])
    with pytest.raises(GeometryError, match="Degenerate"):
        bounding_box([])


# --- poly_area ---

def test_poly_area_either_winding():
    sq = [(0, 0), (4, 0), (4, 3), (0, 3)]
    assert abs(poly_area(sq) - 12.0) < 1e-12
    assert abs(poly_area(sq[::-1]) - 12.0) < 1e-12


def test_poly_area_too_few_points():
    assert poly_area([(0, 0), (1, 1)]) == 0.0


def test_room_area_square_metres():
    rect = [(0, 0), (2600, 0), (2600, 3000), (0, 3000)]
    assert room_area(rect, 1000.0) == pytest.approx(7.8)
    assert room_area(rect, 500.0) == pytest.approx(31.2)


# --- cast_ray ---

class TestCastRay:
    RECT = [(0, 0), (2600, 0), (2600, 3000), (0, 3000)]

    def test_vertical_ray_through_rectangle(self):
        assert cast_ray(self.RECT, "x", 70) == pytest.approx([0, 3000])

    def test_horizontal_ray_through_rectangle(self):
        assert cast_ray(self.RECT, "y", 1000) == pytest.approx([0, 2600])

    def test_ray_outside_polygon(self):
        assert cast_ray(self.RECT, "x", 3000) == []
        assert cast_ray(self.RECT, "x", -1) == []

    def test_ray_through_vertices_counts_once(self):
        diamond = [(0, -10), (10, 0), (0, 10), (-10, 0)]
        assert cast_ray(diamond, "x", 0) == pytest.approx([-10, 10])
        assert cast_ray(diamond, "y", 0) == pytest.approx([-10, 10])

    def test_concave_room_gives_two_spans(self):
        # U shape opening upward: x=1 and x=5 are prongs, x=3 is the notch
        u_room = [(0, 0), (2, 0), (2, 4), (4, 4), (4, 0), (6, 0), (6, 6), (0, 6)]
        assert cast_ray(u_room, "y", 2) == pytest.approx([0, 2, 4, 6])
        assert cast_ray(u_room, "x", 3) == pytest.approx([4, 6])

    def test_crossing_count_always_even(self):
        ell = [(0, 0), (2600, 0), (2600, 1500), (1300, 1500), (1300, 3000), (0, 3000)]
        for c in [0, 0.5, 650, 1300, 1300.0001, 1500, 2599.9, 2600]:
            assert len(cast_ray(ell, "x", c)) % 2 == 0
            assert len(cast_ray(ell, "y", c)) % 2 == 0

    def test_results_sorted(self):
        tri = [(0, 10), (10, 0), (5, -20)]
        ys = cast_ray(tri, "x", 5)
        assert ys == sorted(ys)

    def test_unknown_axis_raises(self):
        with pytest.raises(GeometryError, match="axis"):
            cast_ray(self.RECT, "z", 1)


# --- quantize ---

def test_quantize_floors_to_step():
    assert quantize(2475, 100) == 2400
    assert quantize(2500, 100) == 2500
    assert quantize(99.9, 100) == 0


@pytest.mark.parametrize("step", [100, 50, 0.1, 1/3])
def test_quantize_idempotent_and_bounded(step):
    for x in [0.3, 1.0, 99.99, 136/3, 335.99, 1000, 2475.5, 12345.678]:
        q = quantize(x, step)
        assert q <= x
        assert x - q < step + 1e-9
        assert quantize(q, step) == q


# --- segment lengths ---

def test_segment_length_line():
    assert abs(segment_length(LineSeg((0, 0), (3, 4))) - 5.0) < 1e-12


def test_segment_length_quarter_arc():
    arc = ArcSeg((10, 0), (0, 10), (0, 0), 10.0, "CCW")
    assert abs(arc_sweep_deg(arc) - 90.0) < 1e-9
    assert abs(segment_length(arc) - 5*math.pi) < 1e-9


def test_arc_direction_picks_the_other_way_round():
    arc = ArcSeg((10, 0), (0, 10), (0, 0), 10.0, "CW")
    assert abs(arc_sweep_deg(arc) - 270.0) < 1e-9


def test_path_length():
    segs = [LineSeg((0, 0), (10, 0)), ArcSeg((10, 0), (10, 20), (10, 10), 10.0, "CCW")]
    # atan2 from -90 deg to 90 deg counterclockwise in raw coordinates: half circle
    assert abs(path_length(segs) - (10 + 10*math.pi)) < 1e-9
