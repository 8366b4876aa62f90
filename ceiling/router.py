"""Circuit routing: 8-plate register blocks assembled into length-bounded circuits.

Turn side (every block), nested from the outside in:
    1-8, 2-7, 3-6, 4-5 with depth falling linearly from max_turn_depth.

Connection side, first block (start block):
    1 and 2 are straight supply/return stubs, 3-4 loop, 5-8 / 6-7 double nest.

Connection side, later blocks (double nest):
    1-4 / 2-3 and 5-8 / 6-7, all at small_turn_depth.
"""
from typing import NamedTuple

from shared.trace import TraceHook, log_trace
from shared.types import Point, Segment, HeatPlate, Circuit, ORIENTATIONS
from ceiling.config import Calibration, ConfigError, LayoutConfig
from ceiling.constants import BLOCK_SIZE
from ceiling.turns import build_turn, build_stub, side_vector, opposite_side

# Nested turn-side pairs, outermost first (0-based plate positions)
TURN_PAIRS = ((0, 7), (1, 6), (2, 5), (3, 4))
# Connection-side pairs of a start block after the two stubs
START_PAIRS = ((2, 3), (4, 7), (5, 6))
# Connection-side double nest of every later block
NEST_PAIRS = ((0, 3), (1, 2), (4, 7), (5, 6))

# Connection sides that run across the plates, mapped onto the plate axis
_SIDE_FOR_AXIS = {
    "Vertical": {"left": "top", "right": "bottom"},
    "Horizontal": {"top": "left", "bottom": "right"},
}


class PlateEnds(NamedTuple):
    connection: Point
    turn: Point


class BlockPath(NamedTuple):
    """Connections of one register block and their summed length (mm)."""
    segments: tuple[Segment, ...]
    length: float
    plates: tuple[int, ...]


def sort_plates(plates: list[HeatPlate]) -> list[int]:
    """Plate indices ordered along the grid axis (left to right or top to bottom)."""
    def key(i):
        p = plates[i]
        return p.start[0] if p.orientation == "Vertical" else p.start[1]
    return sorted(range(len(plates)), key=key)


def chunk_plates(order: list[int], size: int = BLOCK_SIZE) -> list[list[int]]:
    """Consecutive complete blocks of *size*; an incomplete tail is dropped."""
    return [order[i:i+size] for i in range(0, len(order) - size + 1, size)]


def normalize_side(side: str, orientation: str) -> str:
    """Connection side along the plate axis; cross-axis sides map to the nearest end."""
    side_vector(side)
    if orientation not in ORIENTATIONS:
        raise ConfigError(f"Unknown orientation: {orientation!r}")
    return _SIDE_FOR_AXIS[orientation].get(side, side)


def plate_ends(plate: HeatPlate, side: str) -> PlateEnds:
    """Split a plate into its connection-side and turn-side endpoints."""
    p1, p2 = plate.start, plate.end
    k = 1 if plate.orientation == "Vertical" else 0
    if side in ("bottom", "right"):
        conn_first = p1[k] > p2[k]
    else:
        conn_first = p1[k] < p2[k]
    return PlateEnds(p1, p2) if conn_first else PlateEnds(p2, p1)


def turn_depth(k: int, cfg: LayoutConfig, pairs: int = len(TURN_PAIRS)) -> float:
    """Depth of the k-th nested turn-side pair (0 = outermost), in mm."""
    return cfg.max_turn_depth * (pairs - k) / pairs


def route_block(
    ends: list[PlateEnds], side: str, start_block: bool,
    cal: Calibration, cfg: LayoutConfig,
) -> tuple[tuple[Segment, ...], float]:
    """Turn-side and connection-side connections of one 8-plate block."""
    turn_dir = side_vector(opposite_side(side))
    conn_dir = side_vector(side)
    segs: list[Segment] = []; length = 0.0

    for k, (i, j) in enumerate(TURN_PAIRS):
        t = build_turn(ends[i].turn, ends[j].turn, turn_depth(k, cfg), turn_dir, cal, cfg)
        segs.extend(t.segments); length += t.length

    if start_block:
        for i in (0, 1):
            t = build_stub(ends[i].connection, conn_dir, cal, cfg)
            segs.extend(t.segments); length += t.length
        pairs = START_PAIRS
    else:
        pairs = NEST_PAIRS
    for i, j in pairs:
        t = build_turn(ends[i].connection, ends[j].connection,
                       cfg.small_turn_depth, conn_dir, cal, cfg)
        segs.extend(t.segments); length += t.length
    return tuple(segs), length


def assemble_circuits(
    blocks: list[BlockPath], max_length: float, colors: tuple[str, ...],
) -> list[Circuit]:
    """Greedily pack blocks into circuits no longer than max_length.

    A block that alone exceeds the limit still forms its own circuit.
    """
    circuits: list[Circuit] = []
    segs: list[Segment] = []; plates: list[int] = []; length = 0.0

    def close():
        n = len(circuits)
        circuits.append(Circuit(n, colors[n % len(colors)], tuple(segs), length, tuple(plates)))

    for block in blocks:
        if plates and length + block.length > max_length:
            close()
            segs = []; plates = []; length = 0.0
        segs.extend(block.segments); plates.extend(block.plates); length += block.length
    if plates:
        close()
    return circuits


def compute_circuits(
    plates: list[HeatPlate], connection_side: str, cal: Calibration, cfg: LayoutConfig,
    trace: TraceHook | None = None,
) -> list[Circuit]:
    """Route all plates into circuits. Circuit plate indices refer to *plates*."""
    trace = trace or log_trace
    side_vector(connection_side)
    if not plates:
        return []
    orientation = plates[0].orientation
    side = normalize_side(connection_side, orientation)
    if side != connection_side:
        trace("router.side_normalized", {"requested": connection_side, "used": side,
                                         "orientation": orientation})

    blocks = chunk_plates(sort_plates(plates))
    dropped = len(plates) - BLOCK_SIZE*len(blocks)
    if dropped:
        trace("router.dropped_plates", {"count": dropped})
    if not blocks:
        trace("router.no_blocks", {"plates": len(plates)})
        return []

    paths = []
    for n, block in enumerate(blocks):
        ends = [plate_ends(plates[i], side) for i in block]
        segs, length = route_block(ends, side, n == 0, cal, cfg)
        paths.append(BlockPath(segs, length, tuple(block)))
        trace("router.block", {"block": n, "length_mm": length})

    circuits = assemble_circuits(paths, cfg.max_circuit_length, cfg.colors)
    for c in circuits:
        trace("router.circuit", {"circuit": c.index, "length_mm": c.length,
                                 "plates": len(c.plates), "color": c.color})
    return circuits
