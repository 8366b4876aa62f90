"""Generate a ceiling-heating layout SVG and material list for one room.

Reads a room description (JSON), runs the layout engine, prints the
profile/plate material summary and writes the drawing as SVG.

Room file:
    {"id": "r1", "points": [[x, y], ...], "orientation": "Vertical",
     "system": "Four", "connection_side": "bottom", "px_per_meter": 1000,
     "settings": {...}}
A "calibration" object {"start": [x, y], "end": [x, y], "length_m": 2.0}
may replace "px_per_meter".
"""
import argparse, json, logging, os, sys

from shared.geometry import bounding_box
from shared.svg import make_svg_transform, path_data, W, H
from shared.types import Room
from ceiling.config import (
    LayoutConfig, ConfigError, UncalibratedError,
    calibration_from_line, load_config, require_calibration,
)
from ceiling.constants import PIPE_WIDTH
from ceiling.engine import compute_room_layout

logger = logging.getLogger(__name__)

# ============================================================
# Input
# ============================================================

def load_room(path):
    """Parse a room file into (Room, calibration scale or None, LayoutConfig)."""
    with open(path) as f:
        data = json.load(f)
    room = Room(
        id=str(data.get("id", os.path.splitext(os.path.basename(path))[0])),
        points=tuple((float(x), float(y)) for x, y in data["points"]),
        orientation=data.get("orientation", "Vertical"),
        system=data.get("system", "Four"),
        connection_side=data.get("connection_side", "bottom"),
        name=data.get("name", ""),
    )
    if "calibration" in data:
        c = data["calibration"]
        scale = calibration_from_line(tuple(c["start"]), tuple(c["end"]), c["length_m"])
    else:
        scale = data.get("px_per_meter")
    cfg = LayoutConfig.from_settings(data.get("settings", {}))
    return room, scale, cfg

# ============================================================
# SVG Helpers
# ============================================================

def band(out, seg_start, seg_end, width, color, to_svg, opacity=1.0):
    """Straight element drawn as a stroke of its physical width."""
    x1, y1 = to_svg(*seg_start); x2, y2 = to_svg(*seg_end)
    out.append(f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}"'
               f' stroke="{color}" stroke-width="{width*to_svg.scale:.2f}" opacity="{opacity}"/>')


def render_layout_svg(room, layout, cal):
    """SVG document for a room outline, its profiles, plates and circuits."""
    to_svg = make_svg_transform(bounding_box(list(room.points)))
    out = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{W}" height="{H}"'
           f' viewBox="0 0 {W} {H}">']
    pts = " ".join(f"{to_svg(*p)[0]:.2f},{to_svg(*p)[1]:.2f}" for p in room.points)
    out.append(f'<polygon points="{pts}" fill="rgba(160,160,160,0.15)" stroke="#333" stroke-width="1"/>')
    for p in layout.profiles:
        band(out, p.start, p.end, p.width, "#4682B4", to_svg)
    for p in layout.plates:
        band(out, p.start, p.end, p.width, "#8B4513", to_svg, 0.8)
    pipe_w = cal.to_px(PIPE_WIDTH) * to_svg.scale
    for c in layout.circuits:
        out.append(f'<path id="{c.id}" d="{path_data(c.segments, to_svg)}" fill="none"'
                   f' stroke="{c.color}" stroke-width="{pipe_w:.2f}" stroke-linecap="round"/>')
    title = room.name or room.id
    out.append(f'<text x="{W/2:.1f}" y="20" text-anchor="middle" font-family="Arial"'
               f' font-size="12">{title} - {layout.area:.2f} m²</text>')
    out.append('</svg>')
    return "\n".join(out)


def format_materials(layout):
    """Plain-text material summary lines."""
    lines = [f"Area: {layout.area:.2f} m2", "Profiles:"]
    lines += [f"  {cm} cm x {n}" for cm, n in layout.profile_stats]
    lines.append("Plates:")
    lines += [f"  {mm:.0f} mm x {n}" for mm, n in layout.plate_materials]
    lines.append("Circuits:")
    lines += [f"  {c.id} {c.color} {c.length/1000:.2f} m, {len(c.plates)} plates"
              for c in layout.circuits]
    return lines

# ============================================================
# Entry point
# ============================================================

def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("room", help="room description JSON")
    parser.add_argument("-o", "--output", help="SVG output path (default: <room>.svg)")
    parser.add_argument("--settings", help="JSON settings file overriding the room's settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="log layout decisions")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        room, scale, cfg = load_room(args.room)
        if args.settings:
            cfg = load_config(args.settings)
        cal = require_calibration(scale)
        layout = compute_room_layout(room, cal, cfg)
    except UncalibratedError as e:
        logger.error("uncalibrated: %s", e)
        return 2
    except (ConfigError, KeyError, ValueError) as e:
        logger.error("invalid input: %s", e)
        return 1

    if not layout.profiles:
        logger.warning("no layout possible for room %s with this configuration", room.id)
    print("\n".join(format_materials(layout)))
    out_path = args.output or os.path.splitext(args.room)[0] + ".svg"
    with open(out_path, "w") as f:
        f.write(render_layout_svg(room, layout, cal))
    print(f"wrote {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
