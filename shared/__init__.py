"""Shared types, geometry, tracing, and SVG utilities."""

from .types import (
    Point, BBox, LineSeg, ArcSeg, Segment,
    SupportProfile, HeatPlate, Circuit, Room,
)
from .geometry import (
    GeometryError,
    dist, off_pt, unit, cross,
    bounding_box, poly_area, room_area, cast_ray, quantize,
    arc_sweep, arc_sweep_deg, segment_length, path_length,
)
from .trace import TraceHook, log_trace, null_trace
from .svg import path_data, make_svg_transform, W, H
