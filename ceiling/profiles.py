"""Support profile layout: centered grid, double-ray edge check, quantized lengths.

Vertical profiles are anchored to the bottom of their free interval and
horizontal profiles to the left, so one end gap is exactly the wall buffer
and the other absorbs the quantization remainder.
"""
import math

from shared.geometry import bounding_box, cast_ray, quantize
from shared.trace import TraceHook, log_trace
from shared.types import Point, SupportProfile, ORIENTATIONS
from ceiling.config import Calibration, ConfigError, LayoutConfig


def grid_positions(lo: float, extent: float, cal: Calibration, cfg: LayoutConfig) -> list[float]:
    """Center-line coordinates of a profile grid centered across [lo, lo + extent].

    Count is floor(usable / spacing) + 1 where usable = extent - 2 x grid margin;
    an empty list when the room cannot hold a single profile.
    """
    usable_mm = cal.to_mm(extent) - 2*cfg.grid_margin
    count = math.floor(usable_mm / cfg.profile_spacing) + 1
    if count < 1:
        return []
    spacing = cal.to_px(cfg.profile_spacing)
    first = lo + (extent - (count-1)*spacing) / 2
    return [first + i*spacing for i in range(count)]


def free_interval(verts: list[Point], axis: str, center: float, half_width: float):
    """Tightest interval both edge rays of a profile leave free, or None.

    Casts rays at center +/- half_width and intersects their first spans.
    """
    near = cast_ray(verts, axis, center - half_width)
    far = cast_ray(verts, axis, center + half_width)
    if len(near) < 2 or len(far) < 2:
        return None
    return max(near[0], far[0]), min(near[1], far[1])


def center_line(p: SupportProfile) -> float:
    """Grid-axis coordinate of a profile's center line."""
    k = 0 if p.orientation == "Vertical" else 1
    return p.start[k] + p.width/2


def compute_profiles(
    verts: list[Point], orientation: str, cal: Calibration, cfg: LayoutConfig,
    trace: TraceHook | None = None,
) -> list[SupportProfile]:
    """Place the support profile grid inside a room polygon.

    Returns profiles ordered along the grid axis. Profiles that would cross a
    wall or come out shorter than the minimum length are skipped.
    """
    trace = trace or log_trace
    if orientation not in ORIENTATIONS:
        raise ConfigError(f"Unknown orientation: {orientation!r}")
    if len(set(map(tuple, verts))) < 3:
        trace("profile.degenerate_room", {"points": len(verts)})
        return []

    bbox = bounding_box(verts)
    vertical = orientation == "Vertical"
    # Vertical profiles advance along x and are checked with vertical rays
    axis = "x" if vertical else "y"
    lo, extent = (bbox.min_x, bbox.width) if vertical else (bbox.min_y, bbox.height)
    centers = grid_positions(lo, extent, cal, cfg)
    if not centers:
        trace("profile.room_too_narrow", {"extent_mm": cal.to_mm(extent)})
        return []
    trace("profile.grid", {"count": len(centers), "extent_mm": cal.to_mm(extent),
                           "margin_mm": cal.to_mm(centers[0] - lo)})

    half = cal.to_px(cfg.profile_width) / 2
    buffer = cal.to_px(cfg.wall_buffer)
    profiles = []
    for i, c in enumerate(centers):
        span = free_interval(verts, axis, c, half)
        if span is None:
            trace("profile.skip", {"index": i, "reason": "insufficient intersections"})
            continue
        lo_lim, hi_lim = span
        if hi_lim <= lo_lim:
            trace("profile.skip", {"index": i, "reason": "edges cross"})
            continue
        max_mm = cal.to_mm(hi_lim - lo_lim) - 2*cfg.wall_buffer
        if max_mm < cfg.length_step:
            trace("profile.skip", {"index": i, "reason": "no room after buffer",
                                   "max_mm": max_mm})
            continue
        length_mm = quantize(max_mm, cfg.length_step)
        if length_mm < cfg.min_profile_length:
            trace("profile.skip", {"index": i, "reason": "too short", "length_mm": length_mm})
            continue
        length = cal.to_px(length_mm)
        # segment runs along the near edge, c - half
        if vertical:
            end = hi_lim - buffer; start = end - length
            p1, p2 = (c - half, start), (c - half, end)
        else:
            start = lo_lim + buffer; end = start + length
            p1, p2 = (start, c - half), (end, c - half)
        profiles.append(SupportProfile(p1, p2, 2*half, orientation))
        trace("profile.placed", {"index": i, "length_mm": length_mm,
                                 "slack_mm": max_mm - length_mm})
    return profiles
