"""Pure geometry functions: polygon queries, ray casting, quantization, path primitives."""
import math

import numpy as np

from .types import Point, BBox, LineSeg, ArcSeg, Segment

# Edges whose extent across the ray is below this are treated as parallel to it.
_PARALLEL_EPS = 1e-9

# ============================================================
# Error Type
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

# ============================================================
# Point Utilities
# ============================================================
def dist(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2[0]-p1[0], p2[1]-p1[1])

def off_pt(p: Point, n: Point, d: float) -> Point:
    """Offset point p by distance d along unit direction n."""
    return (p[0]+d*n[0], p[1]+d*n[1])

def unit(p1: Point, p2: Point) -> Point:
    """Unit vector pointing from p1 to p2. Raises GeometryError if they coincide."""
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]; Ln = math.hypot(dx, dy)
    if Ln < 1e-12:
        raise GeometryError(f"Coincident points: {p1} == {p2}")
    return (dx/Ln, dy/Ln)

def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o)."""
    return (a[0]-o[0])*(b[1]-o[1]) - (a[1]-o[1])*(b[0]-o[0])

# ============================================================
# Polygon Queries
# ============================================================
def bounding_box(verts: list[Point]) -> BBox:
    """Axis-aligned bounding box. Raises GeometryError for fewer than two distinct points."""
    if len(set(map(tuple, verts))) < 2:
        raise GeometryError(f"Degenerate polygon: {len(verts)} point(s), need 2 distinct")
    v = np.asarray(verts, dtype=float)
    lo = v.min(axis=0); hi = v.max(axis=0)
    return BBox(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))

def poly_area(verts: list[Point]) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    if len(verts) < 3:
        return 0.0
    v = np.asarray(verts, dtype=float); w = np.roll(v, -1, axis=0)
    return float(abs(np.sum(v[:, 0]*w[:, 1] - w[:, 0]*v[:, 1])) / 2)

def room_area(verts: list[Point], px_per_meter: float) -> float:
    """Physical room area in square metres."""
    return poly_area(verts) / (px_per_meter * px_per_meter)

def cast_ray(verts: list[Point], axis: str, coord: float) -> list[float]:
    """Cast a ray perpendicular to *axis* at *coord* and intersect every polygon edge.

    axis "x" casts the vertical ray x = coord and returns the y values of the
    crossings; axis "y" casts the horizontal ray y = coord and returns x values.
    Results are sorted ascending. Each edge is tested with the parametric
    intersection p3 + u*(p4 - p3), counting the half-open range u in [0, 1)
    along the ray's normal so a ray through a shared vertex is counted once and
    a simple polygon always yields an even number of crossings.
    """
    if axis not in ("x", "y"):
        raise GeometryError(f"Unknown ray axis: {axis!r}")
    if len(verts) < 2:
        return []
    k = 0 if axis == "x" else 1
    v = np.asarray(verts, dtype=float); w = np.roll(v, -1, axis=0)
    a = v[:, k]; b = w[:, k]; denom = b - a
    hit = ((a <= coord) & (coord < b)) | ((b <= coord) & (coord < a))
    hit &= np.abs(denom) > _PARALLEL_EPS
    u = (coord - a[hit]) / denom[hit]
    along = v[hit, 1-k] + u*(w[hit, 1-k] - v[hit, 1-k])
    return sorted(float(t) for t in along)

def quantize(x: float, step: float) -> float:
    """Round x down to a whole number of steps. Never exceeds x; idempotent."""
    n = math.floor(x / step)
    if (n+1)*step <= x: n += 1
    if n*step > x: n -= 1
    return n * step

# ============================================================
# Path Operations
# ============================================================
def arc_sweep(seg: ArcSeg) -> float:
    """Sweep angle of an arc segment in radians (always positive)."""
    c = seg.center
    ang_s = math.atan2(seg.start[1]-c[1], seg.start[0]-c[0])
    ang_e = math.atan2(seg.end[1]-c[1], seg.end[0]-c[0])
    if seg.direction == "CW":
        return (ang_s - ang_e) % (2*math.pi)
    return (ang_e - ang_s) % (2*math.pi)

def arc_sweep_deg(seg: ArcSeg) -> float:
    """Sweep angle of an arc segment in degrees (always positive)."""
    return math.degrees(arc_sweep(seg))

def segment_length(seg: Segment) -> float:
    """Length of a line or arc segment in drawing units."""
    if isinstance(seg, LineSeg):
        return dist(seg.start, seg.end)
    return seg.radius * arc_sweep(seg)

def path_length(segments) -> float:
    """Total drawing-space length of a segment path."""
    return sum(segment_length(s) for s in segments)
