"""SVG transform factory, path-data export, and page constants."""
from typing import Callable

from .types import BBox, LineSeg, Segment

# US Letter landscape at 72 dpi (11" x 8.5")
W, H = 792, 612


def make_svg_transform(bbox: BBox, margin: float = 36) -> Callable[[float, float], tuple[float, float]]:
    """Create a to_svg closure fitting *bbox* on the page with uniform scale.

    Drawing coordinates already grow downward, so no axis is flipped.
    """
    s = min((W - 2*margin) / max(bbox.width, 1e-9), (H - 2*margin) / max(bbox.height, 1e-9))
    px = (W - s*bbox.width) / 2 - s*bbox.min_x
    py = (H - s*bbox.height) / 2 - s*bbox.min_y
    def to_svg(x: float, y: float) -> tuple[float, float]:
        return (px + x*s, py + y*s)
    to_svg.scale = s
    return to_svg


def path_data(segments: list[Segment], to_svg=None, prec: int = 2) -> str:
    """SVG path data for a segment path; a new subpath starts at every break."""
    to_svg = to_svg or (lambda x, y: (x, y))
    scale = getattr(to_svg, "scale", 1.0)
    out = []; cursor = None
    for seg in segments:
        sx, sy = to_svg(*seg.start); ex, ey = to_svg(*seg.end)
        if cursor is None or abs(cursor[0]-sx) > 1e-6 or abs(cursor[1]-sy) > 1e-6:
            out.append(f"M {sx:.{prec}f} {sy:.{prec}f}")
        if isinstance(seg, LineSeg):
            out.append(f"L {ex:.{prec}f} {ey:.{prec}f}")
        else:
            r = seg.radius * scale
            sweep = 1 if seg.direction == "CCW" else 0
            out.append(f"A {r:.{prec}f} {r:.{prec}f} 0 0 {sweep} {ex:.{prec}f} {ey:.{prec}f}")
        cursor = (ex, ey)
    return " ".join(out)
