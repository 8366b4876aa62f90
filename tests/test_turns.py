"""Tests for ceiling/turns.py: rounded U turns, straight fallback, stubs."""
import math
import pytest
from shared.geometry import dist, path_length, arc_sweep_deg
from shared.types import LineSeg, ArcSeg
from ceiling.config import Calibration, ConfigError
from ceiling.turns import build_turn, build_stub, side_vector, opposite_side, straight

UP = (0.0, -1.0)
DOWN = (0.0, 1.0)


def assert_continuous(segs, a, b):
    assert segs[0].start == pytest.approx(a)
    assert segs[-1].end == pytest.approx(b)
    for s, t in zip(segs, segs[1:]):
        assert s.end == pytest.approx(t.start)


def arcs(turn):
    return [s for s in turn.segments if isinstance(s, ArcSeg)]


# --- side vectors ---

def test_side_vectors():
    assert side_vector("top") == (0.0, -1.0)
    assert side_vector("bottom") == (0.0, 1.0)
    assert side_vector("left") == (-1.0, 0.0)
    assert side_vector("right") == (1.0, 0.0)


def test_opposite_side():
    assert opposite_side("top") == "bottom"
    assert opposite_side("left") == "right"


def test_unknown_side():
    with pytest.raises(ConfigError, match="connection side"):
        side_vector("north")
    with pytest.raises(ConfigError):
        opposite_side("north")


# --- build_turn ---

class TestRoundedTurn:
    def test_shape_and_length(self, cal, cfg):
        t = build_turn((0, 0), (400, 0), 150, UP, cal, cfg)
        kinds = [type(s) for s in t.segments]
        assert kinds == [LineSeg, ArcSeg, LineSeg, ArcSeg, LineSeg]
        # legs 100 + 100, bridge 300, two quarter arcs of r=50
        assert t.length == pytest.approx(500 + 50*math.pi)
        assert_continuous(t.segments, (0, 0), (400, 0))

    def test_apex_at_depth(self, cal, cfg):
        t = build_turn((0, 0), (400, 0), 150, UP, cal, cfg)
        bridge = t.segments[2]
        assert bridge.start[1] == pytest.approx(-150)
        assert bridge.end[1] == pytest.approx(-150)

    def test_quarter_arcs_turn_the_same_way(self, cal, cfg):
        t = build_turn((0, 0), (400, 0), 150, UP, cal, cfg)
        first, second = arcs(t)
        assert first.direction == second.direction
        assert first.radius == second.radius == pytest.approx(50)
        assert arc_sweep_deg(first) == pytest.approx(90)
        assert arc_sweep_deg(second) == pytest.approx(90)

    def test_length_matches_drawn_path(self, cal, cfg):
        for b, depth, side in [((400, 0), 150, UP), ((300, 40), 150, DOWN),
                               ((120, -60), 62.5, UP), ((95.33, 0), 150, DOWN)]:
            t = build_turn((0, 0), b, depth, side, cal, cfg)
            assert cal.to_mm(path_length(t.segments)) == pytest.approx(t.length)

    def test_never_shorter_than_distance(self, cal, cfg):
        for b in [(400, 0), (300, 40), (100, 0), (80, 300), (686, -5)]:
            for depth in (0.001, 62.5, 250):
                t = build_turn((0, 0), b, depth, UP, cal, cfg)
                assert t.length >= dist((0, 0), b) - 1e-9

    def test_staggered_ends(self, cal, cfg):
        # B sits 40 further along the bulge direction than A
        t = build_turn((0, 0), (300, 40), 150, DOWN, cal, cfg)
        assert_continuous(t.segments, (0, 0), (300, 40))
        legs = [s for s in t.segments if isinstance(s, LineSeg) and s.start[0] == s.end[0]]
        assert [dist(s.start, s.end) for s in legs] == pytest.approx([120, 80])
        assert t.length == pytest.approx(120 + 80 + 200 + 50*math.pi)

    def test_shallow_depth_clamped_to_radius(self, cal, cfg):
        t = build_turn((0, 0), (400, 0), 10, UP, cal, cfg)
        assert [type(s) for s in t.segments] == [ArcSeg, LineSeg, ArcSeg]
        assert t.length == pytest.approx(300 + 50*math.pi)
        assert_continuous(t.segments, (0, 0), (400, 0))

    def test_radius_shrinks_for_tight_pairs(self, cal, cfg):
        # 95.33 across: r = 47.67, no bridge
        t = build_turn((0, 0), (95.33, 0), 150, DOWN, cal, cfg)
        assert [type(s) for s in t.segments] == [LineSeg, ArcSeg, ArcSeg, LineSeg]
        assert arcs(t)[0].radius == pytest.approx(95.33/2)
        assert_continuous(t.segments, (0, 0), (95.33, 0))

    def test_six_system_neighbours_stay_rounded(self, cal, cfg):
        # adjacent Six plates sit 50 + 7.2 apart: r = 28.6 is still bendable
        t = build_turn((0, 0), (57.2, 0), 150, UP, cal, cfg)
        assert [type(s) for s in t.segments] == [LineSeg, ArcSeg, ArcSeg, LineSeg]
        assert [a.radius for a in arcs(t)] == pytest.approx([28.6, 28.6])
        assert t.length == pytest.approx(2*(150 - 28.6) + 28.6*math.pi)
        assert_continuous(t.segments, (0, 0), (57.2, 0))

    def test_direction_follows_bulge(self, cal, cfg):
        up = build_turn((0, 0), (400, 0), 150, UP, cal, cfg)
        down = build_turn((0, 0), (400, 0), 150, DOWN, cal, cfg)
        assert arcs(up)[0].direction != arcs(down)[0].direction

    def test_scaled_drawing(self, cfg):
        cal = Calibration(2000.0)
        t = build_turn((0, 0), (800, 0), 150, UP, cal, cfg)
        assert t.length == pytest.approx(500 + 50*math.pi)
        assert arcs(t)[0].radius == pytest.approx(100)


class TestStraightFallback:
    def test_gap_below_minimum_bend(self, cal, cfg):
        # 40 mm apart: r would be 20, below the 25 mm minimum bend
        t = build_turn((0, 0), (40, 0), 150, DOWN, cal, cfg)
        assert t.segments == (LineSeg((0, 0), (40, 0)),)
        assert t.length == pytest.approx(40)

    def test_smaller_minimum_keeps_arcs(self, cal, cfg):
        t = build_turn((0, 0), (40, 0), 150, DOWN, cal, cfg.with_overrides(min_bend_radius=20))
        assert arcs(t)[0].radius == pytest.approx(20)

    def test_ends_in_line_with_bulge(self, cal, cfg):
        # nothing across: straight connector
        t = build_turn((0, 0), (0, 300), 150, DOWN, cal, cfg)
        assert len(t.segments) == 1
        assert t.length == pytest.approx(300)

    def test_straight(self, cal):
        t = straight((0, 0), (30, 40), cal)
        assert t.length == pytest.approx(50)


# --- build_stub ---

def test_stub(cal, cfg):
    t = build_stub((127, 2750), DOWN, cal, cfg)
    assert t.segments == (LineSeg((127, 2750), (127, 2900)),)
    assert t.length == 150


def test_stub_scaled(cfg):
    t = build_stub((0, 0), (1.0, 0.0), Calibration(500.0), cfg)
    assert t.segments[0].end == pytest.approx((75, 0))
    assert t.length == 150
