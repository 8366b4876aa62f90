"""Heat plate layout: recipe blocks packed into the gaps between adjacent profiles."""
from typing import NamedTuple

from shared.trace import TraceHook, log_trace
from shared.types import HeatPlate, SupportProfile, SYSTEM_TYPES
from ceiling.config import Calibration, ConfigError, LayoutConfig
from ceiling.constants import SYSTEM_PLATE_COUNT

# Gap sizes this far below the recipe span still take the block (mm)
_SPAN_EPS = 1e-6


class Recipe(NamedTuple):
    """Plate-packing recipe: count plates separated by gap, spanning span (mm)."""
    system: str
    count: int
    gap: float
    span: float


class GapSlot(NamedTuple):
    """Free slot between two adjacent profiles, in drawing units."""
    safe_start: float    # longitudinal overlap of both profiles
    safe_end: float
    gap_start: float     # outer edge of the first profile
    gap_end: float       # near edge of the second profile


def recipe_for(system: str, cfg: LayoutConfig) -> Recipe:
    """Plate recipe of a system type."""
    if system not in SYSTEM_TYPES:
        raise ConfigError(f"Unknown system type: {system!r}")
    return Recipe(system, SYSTEM_PLATE_COUNT[system], cfg.plate_gap(system), cfg.recipe_span)


def gap_slot(a: SupportProfile, b: SupportProfile) -> GapSlot:
    """Safe zone and physical gap between profile a and the next profile b."""
    k = 1 if a.orientation == "Vertical" else 0   # longitudinal coordinate
    g = 1 - k                                     # grid coordinate
    return GapSlot(
        safe_start=max(a.start[k], b.start[k]), safe_end=min(a.end[k], b.end[k]),
        gap_start=a.start[g] + a.width, gap_end=b.start[g],
    )


def compute_plates(
    profiles: list[SupportProfile], system: str, cal: Calibration, cfg: LayoutConfig,
    trace: TraceHook | None = None,
) -> list[HeatPlate]:
    """Place one recipe block of plates in every usable profile gap.

    Plates run over the safe zone of their two profiles only. Output is in
    profile-pair order, recipe order within a pair.
    """
    trace = trace or log_trace
    recipe = recipe_for(system, cfg)
    if len(profiles) < 2:
        trace("plates.skip", {"reason": "fewer than two profiles", "profiles": len(profiles)})
        return []

    orientation = profiles[0].orientation
    plate_w = cal.to_px(cfg.plate_width)
    stride = cal.to_px(cfg.plate_width + recipe.gap)
    span = cal.to_px(recipe.span)
    offset = cal.to_px(cfg.visual_offset)

    plates = []
    for i, (a, b) in enumerate(zip(profiles, profiles[1:])):
        slot = gap_slot(a, b)
        if slot.safe_end <= slot.safe_start:
            trace("plates.skip", {"gap": i, "reason": "no longitudinal overlap"})
            continue
        gap_mm = cal.to_mm(slot.gap_end - slot.gap_start)
        if gap_mm < recipe.span - _SPAN_EPS:
            trace("plates.skip", {"gap": i, "reason": "gap below recipe span", "gap_mm": gap_mm})
            continue
        block_start = (slot.gap_start + slot.gap_end)/2 - span/2 - offset
        for j in range(recipe.count):
            c = block_start + j*stride + plate_w/2
            if orientation == "Vertical":
                p1, p2 = (c, slot.safe_start), (c, slot.safe_end)
            else:
                p1, p2 = (slot.safe_start, c), (slot.safe_end, c)
            plates.append(HeatPlate(p1, p2, plate_w, orientation))
        trace("plates.placed", {"gap": i, "count": recipe.count, "gap_mm": gap_mm,
                                "margin_mm": (gap_mm - recipe.span)/2,
                                "safe_mm": cal.to_mm(slot.safe_end - slot.safe_start)})
    return plates
