"""Turn geometry: rounded flattened-U pipe connections and straight stubs.

A turn leaves A along the side direction, bends a quarter circle toward B,
bridges across at the apex line, bends a second quarter circle and returns
to B:

    A --leg--> arc --bridge--> arc --leg--> B

Both arcs turn the same way, the second being the mirror image of the first
about the perpendicular bisector of A-B, so the path is a U and never an S.
"""
import math
from typing import NamedTuple

from shared.geometry import dist, off_pt, cross
from shared.types import Point, LineSeg, ArcSeg, Segment, CONNECTION_SIDES
from ceiling.config import Calibration, ConfigError, LayoutConfig

# Lines shorter than this (drawing units) are dropped from a turn path
_MIN_SEG = 1e-9

_SIDE_VECTORS = {
    "top": (0.0, -1.0), "bottom": (0.0, 1.0),
    "left": (-1.0, 0.0), "right": (1.0, 0.0),
}
_OPPOSITE = {"top": "bottom", "bottom": "top", "left": "right", "right": "left"}


class Turn(NamedTuple):
    """Connection path and its physical length (mm)."""
    segments: tuple[Segment, ...]
    length: float


def side_vector(side: str) -> Point:
    """Unit vector pointing out of the room toward *side* (y grows downward)."""
    if side not in CONNECTION_SIDES:
        raise ConfigError(f"Unknown connection side: {side!r}")
    return _SIDE_VECTORS[side]


def opposite_side(side: str) -> str:
    if side not in CONNECTION_SIDES:
        raise ConfigError(f"Unknown connection side: {side!r}")
    return _OPPOSITE[side]


def straight(a: Point, b: Point, cal: Calibration) -> Turn:
    """Straight connector A -> B."""
    return Turn((LineSeg(a, b),), cal.to_mm(dist(a, b)))


def build_stub(p: Point, side_dir: Point, cal: Calibration, cfg: LayoutConfig) -> Turn:
    """Straight supply/return lead projecting from p along side_dir."""
    return Turn((LineSeg(p, off_pt(p, side_dir, cal.to_px(cfg.stub_length))),), cfg.stub_length)


def build_turn(
    a: Point, b: Point, depth_mm: float, side_dir: Point,
    cal: Calibration, cfg: LayoutConfig,
) -> Turn:
    """Rounded flattened-U from a to b bulging depth_mm along unit side_dir.

    The corner radius shrinks to half the gap for tight pairs; once it drops
    below the minimum bend radius the turn degrades to a straight connector.
    """
    # Split A->B into the part along side_dir and the part across it
    dx = b[0]-a[0]; dy = b[1]-a[1]
    along = dx*side_dir[0] + dy*side_dir[1]
    wx = dx - along*side_dir[0]; wy = dy - along*side_dir[1]
    across = math.hypot(wx, wy)

    r = min(cal.to_px(cfg.corner_radius), across/2)
    if r < cal.to_px(cfg.min_bend_radius):
        return straight(a, b, cal)
    u = (wx/across, wy/across)

    # Apex line level measured along side_dir from A; never closer than r to either end
    level = along/2 + cal.to_px(depth_mm)
    level = max(level, max(0.0, along) + r)
    leg_a = level - r
    leg_b = level - r - along

    mid = ((a[0]+b[0])/2, (a[1]+b[1])/2)
    apex = off_pt(mid, side_dir, level - along/2)
    direction = "CW" if cross(a, b, apex) > 0 else "CCW"

    a1 = off_pt(a, side_dir, leg_a)        # end of first leg
    c1 = off_pt(a1, u, r)                  # first arc center
    a2 = off_pt(c1, side_dir, r)           # bridge start
    b1 = off_pt(b, side_dir, leg_b)        # start of last leg
    c2 = off_pt(b1, u, -r)                 # second arc center
    b2 = off_pt(c2, side_dir, r)           # bridge end

    segs = []
    if leg_a > _MIN_SEG: segs.append(LineSeg(a, a1))
    segs.append(ArcSeg(a1, a2, c1, r, direction))
    if across - 2*r > _MIN_SEG: segs.append(LineSeg(a2, b2))
    segs.append(ArcSeg(b2, b1, c2, r, direction))
    if leg_b > _MIN_SEG: segs.append(LineSeg(b1, b))

    length = leg_a + leg_b + (across - 2*r) + math.pi*r
    return Turn(tuple(segs), cal.to_mm(length))
