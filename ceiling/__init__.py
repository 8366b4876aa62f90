"""Ceiling-heating layout: support profiles, heat plates, and pipe circuits."""

from .config import (
    LayoutConfig, DEFAULT_CONFIG, Calibration, ConfigError, UncalibratedError,
    require_calibration, calibration_from_line, load_config,
)
from .profiles import compute_profiles
from .plates import compute_plates, recipe_for
from .turns import build_turn, build_stub, side_vector
from .router import compute_circuits, assemble_circuits
from .materials import profile_stats, plate_materials
from .engine import RoomLayout, compute_room_layout, layout_fingerprint, LayoutCache
