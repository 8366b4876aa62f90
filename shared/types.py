"""Shared type definitions for the ceiling-heating layout engine."""
from typing import Literal, NamedTuple

Point = tuple[float, float]

Orientation = Literal["Vertical", "Horizontal"]
SystemType = Literal["Four", "Six"]
ConnectionSide = Literal["top", "bottom", "left", "right"]

ORIENTATIONS = ("Vertical", "Horizontal")
SYSTEM_TYPES = ("Four", "Six")
CONNECTION_SIDES = ("top", "bottom", "left", "right")


class BBox(NamedTuple):
    min_x: float; min_y: float; max_x: float; max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class LineSeg(NamedTuple):
    start: Point; end: Point

class ArcSeg(NamedTuple):
    start: Point; end: Point; center: Point
    radius: float; direction: Literal["CW", "CCW"]

Segment = LineSeg | ArcSeg


class SupportProfile(NamedTuple):
    """Support profile; start/end lie on its near edge (smaller grid coordinate),
    start < end along the run. The body spans near edge .. near edge + width."""
    start: Point
    end: Point
    width: float             # drawing units
    orientation: Orientation


class HeatPlate(NamedTuple):
    """Heat-transfer plate; start/end lie on its center line."""
    start: Point
    end: Point
    width: float             # drawing units
    orientation: Orientation


class Circuit(NamedTuple):
    """One continuous pipe loop fed from a single supply/return connection."""
    index: int
    color: str
    segments: tuple[Segment, ...]
    length: float            # mm
    plates: tuple[int, ...]  # indices into the routed plate list

    @property
    def id(self) -> str:
        return f"circuit-{self.index}"


class Room(NamedTuple):
    """User-drawn room boundary plus the per-room layout choices."""
    id: str
    points: tuple[Point, ...]
    orientation: Orientation = "Vertical"
    system: SystemType = "Four"
    connection_side: ConnectionSide = "bottom"
    name: str = ""
