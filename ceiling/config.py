"""Layout configuration and drawing calibration.

LayoutConfig is immutable and validated on construction; it is built once
from the settings store and passed by value into every layout call.
"""
import json
import math
from dataclasses import dataclass, fields, replace
from typing import NamedTuple

from shared.geometry import dist
from shared.types import Point
from ceiling import constants as C


class ConfigError(ValueError):
    """Raised for invalid layout configuration or unknown layout choices."""


class UncalibratedError(ValueError):
    """Raised when a layout is requested without a usable drawing scale."""


# ============================================================
# Calibration
# ============================================================
class Calibration(NamedTuple):
    """Drawing scale: drawing units per physical metre."""
    px_per_meter: float

    @property
    def px_per_mm(self) -> float:
        return self.px_per_meter / 1000.0

    def to_px(self, mm: float) -> float:
        return mm * self.px_per_mm

    def to_mm(self, px: float) -> float:
        return px / self.px_per_mm


def require_calibration(scale) -> Calibration:
    """Coerce *scale* (Calibration, number or None) to a Calibration.

    Raises UncalibratedError when the scale is absent, non-finite or not positive.
    """
    if scale is None:
        raise UncalibratedError("No calibration scale set; calibrate the drawing first")
    value = scale.px_per_meter if isinstance(scale, Calibration) else scale
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise UncalibratedError(f"Calibration scale is not a number: {scale!r}") from e
    if not math.isfinite(value) or value <= 0:
        raise UncalibratedError(f"Calibration scale must be positive, got {value}")
    return Calibration(value)


def calibration_from_line(p1: Point, p2: Point, length_m: float) -> Calibration:
    """Scale from a reference line drawn over a known physical length (metres)."""
    if length_m is None or length_m <= 0:
        raise UncalibratedError(f"Reference length must be positive, got {length_m}")
    return require_calibration(dist(p1, p2) / length_m)


# ============================================================
# Layout Configuration
# ============================================================
# Settings-store key names accepted by LayoutConfig.from_settings
_SETTINGS_KEYS = {
    "cdProfileWidth": "profile_width",
    "cdProfileSpacing": "profile_spacing",
    "wallBuffer": "wall_buffer",
    "gridMargin": "grid_margin",
    "plateWidth": "plate_width",
    "system4Gap": "system4_gap",
    "system6Gap": "system6_gap",
    "visualOffset": "visual_offset",
}

# Settings-store keys that only drive the drawing UI
_UI_ONLY_KEYS = {"startPipeLength", "calibration"}


@dataclass(frozen=True)
class LayoutConfig:
    """Millimetre constants for profile, plate and circuit layout."""
    profile_width: float = C.PROFILE_WIDTH
    profile_spacing: float = C.PROFILE_SPACING
    wall_buffer: float = C.WALL_BUFFER
    grid_margin: float = C.GRID_MARGIN
    length_step: float = C.LENGTH_STEP
    min_profile_length: float = C.MIN_PROFILE_LENGTH
    plate_width: float = C.PLATE_WIDTH
    system4_gap: float = C.SYSTEM4_GAP
    system6_gap: float = C.SYSTEM6_GAP
    recipe_span: float = C.RECIPE_SPAN
    visual_offset: float = C.VISUAL_OFFSET
    plate_stock_step: float = C.PLATE_STOCK_STEP
    max_circuit_length: float = C.MAX_CIRCUIT_LENGTH
    stub_length: float = C.STUB_LENGTH
    max_turn_depth: float = C.MAX_TURN_DEPTH
    small_turn_depth: float = C.SMALL_TURN_DEPTH
    corner_radius: float = C.CORNER_RADIUS
    min_bend_radius: float = C.MIN_BEND_RADIUS
    colors: tuple[str, ...] = C.CIRCUIT_COLORS

    def __post_init__(self):
        for f in fields(self):
            if f.name == "colors":
                continue
            v = getattr(self, f.name)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise ConfigError(f"{f.name} must be a finite number, got {v!r}")
            if f.name == "visual_offset":
                continue
            if v <= 0:
                raise ConfigError(f"{f.name} must be positive, got {v}")
        if self.profile_spacing <= self.profile_width:
            raise ConfigError(
                f"profile_spacing ({self.profile_spacing}) must exceed "
                f"profile_width ({self.profile_width})")
        if self.min_bend_radius > self.corner_radius:
            raise ConfigError(
                f"min_bend_radius ({self.min_bend_radius}) exceeds "
                f"corner_radius ({self.corner_radius})")
        if not self.colors:
            raise ConfigError("colors palette is empty")
        for system in C.SYSTEM_PLATE_COUNT:
            span = self.block_span(system)
            if abs(span - self.recipe_span) > C.RECIPE_TOLERANCE:
                raise ConfigError(
                    f"System {system} recipe spans {span:.3f}mm, "
                    f"expected recipe_span {self.recipe_span:.3f}mm")

    def plate_gap(self, system: str) -> float:
        """Gap between adjacent plates of a system recipe."""
        if system == "Four":
            return self.system4_gap
        if system == "Six":
            return self.system6_gap
        raise ConfigError(f"Unknown system type: {system!r}")

    def block_span(self, system: str) -> float:
        """Physical span of one recipe block: n plates plus n-1 gaps."""
        n = C.SYSTEM_PLATE_COUNT[system]
        return n*self.plate_width + (n-1)*self.plate_gap(system)

    def with_overrides(self, **kw) -> "LayoutConfig":
        """Copy with some fields replaced (validated again)."""
        return replace(self, **kw)

    @classmethod
    def from_settings(cls, settings: dict) -> "LayoutConfig":
        """Build from a settings mapping using store keys or field names."""
        names = {f.name for f in fields(cls)}
        kw = {}
        for key, value in settings.items():
            if key in _UI_ONLY_KEYS:
                continue
            name = _SETTINGS_KEYS.get(key, key)
            if name not in names:
                raise ConfigError(f"Unknown setting: {key!r}")
            kw[name] = tuple(value) if name == "colors" else value
        return cls(**kw)


def load_config(path: str) -> LayoutConfig:
    """Read a JSON settings file into a LayoutConfig."""
    with open(path) as f:
        settings = json.load(f)
    if not isinstance(settings, dict):
        raise ConfigError(f"{path}: settings must be a JSON object")
    return LayoutConfig.from_settings(settings)


DEFAULT_CONFIG = LayoutConfig()
