"""Room layout pipeline and memoized per-room cache.

compute_room_layout always recomputes profiles, plates and circuits from
scratch. LayoutCache keeps the latest result per room and recomputes only
when the layout fingerprint changes.
"""
import threading
from typing import NamedTuple

from shared.geometry import room_area
from shared.trace import TraceHook, log_trace
from shared.types import Room, SupportProfile, HeatPlate, Circuit
from ceiling.config import LayoutConfig, DEFAULT_CONFIG, require_calibration
from ceiling.profiles import compute_profiles
from ceiling.plates import compute_plates
from ceiling.router import compute_circuits
from ceiling.materials import profile_stats, plate_materials


class RoomLayout(NamedTuple):
    """Everything derived from one room."""
    profiles: tuple[SupportProfile, ...]
    plates: tuple[HeatPlate, ...]
    circuits: tuple[Circuit, ...]
    area: float                                 # m^2
    profile_stats: tuple[tuple[int, int], ...]  # (length_cm, count)
    plate_materials: tuple[tuple[float, int], ...]  # (length_mm, count)


def compute_room_layout(
    room: Room, calibration, config: LayoutConfig = DEFAULT_CONFIG,
    trace: TraceHook | None = None,
) -> RoomLayout:
    """Full layout of one room.

    Raises UncalibratedError without a positive scale and ConfigError for
    unknown orientation, system or connection side. Geometric dead ends only
    shrink the result.
    """
    trace = trace or log_trace
    cal = require_calibration(calibration)
    verts = list(room.points)
    profiles = compute_profiles(verts, room.orientation, cal, config, trace)
    plates = compute_plates(profiles, room.system, cal, config, trace)
    circuits = compute_circuits(plates, room.connection_side, cal, config, trace)
    trace("room.layout", {"room": room.id, "profiles": len(profiles),
                          "plates": len(plates), "circuits": len(circuits)})
    return RoomLayout(
        profiles=tuple(profiles), plates=tuple(plates), circuits=tuple(circuits),
        area=room_area(verts, cal.px_per_meter),
        profile_stats=tuple(profile_stats(profiles, cal)),
        plate_materials=tuple(plate_materials(plates, cal, config.plate_stock_step)),
    )


def layout_fingerprint(room: Room, calibration, config: LayoutConfig) -> tuple:
    """Every input the layout depends on, as a hashable tuple."""
    cal = require_calibration(calibration)
    return (tuple((float(x), float(y)) for x, y in room.points),
            room.orientation, room.system, room.connection_side,
            cal.px_per_meter, config)


class LayoutCache:
    """Thread-safe memo of the latest layout per room id.

    Each call takes a ticket for its room; a result is stored only if no
    newer call for the same room started in the meantime, so the most
    recently initiated computation wins.
    """

    def __init__(self, trace: TraceHook | None = None):
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[tuple, RoomLayout]] = {}
        self._tickets: dict[str, int] = {}
        self._trace = trace or log_trace

    def get(self, room: Room, calibration, config: LayoutConfig = DEFAULT_CONFIG) -> RoomLayout:
        """Cached layout for *room*, recomputed when any input changed."""
        key = layout_fingerprint(room, calibration, config)
        with self._lock:
            ticket = self._tickets.get(room.id, 0) + 1
            self._tickets[room.id] = ticket
            entry = self._entries.get(room.id)
        if entry is not None and entry[0] == key:
            self._trace("cache.hit", {"room": room.id})
            return entry[1]

        layout = compute_room_layout(room, calibration, config, self._trace)
        with self._lock:
            if self._tickets.get(room.id) == ticket:
                self._entries[room.id] = (key, layout)
            else:
                self._trace("cache.stale", {"room": room.id, "ticket": ticket})
        return layout

    def peek(self, room_id: str) -> RoomLayout | None:
        """Stored layout for a room id without computing anything."""
        with self._lock:
            entry = self._entries.get(room_id)
        return entry[1] if entry else None

    def invalidate(self, room_id: str) -> None:
        with self._lock:
            self._entries.pop(room_id, None)
            self._tickets[room_id] = self._tickets.get(room_id, 0) + 1

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            for room_id in self._tickets:
                self._tickets[room_id] += 1

    def __len__(self):
        with self._lock:
            return len(self._entries)
