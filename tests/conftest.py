"""Shared test fixtures for the ceiling layout tests.

Calibration is 1000 drawing units per metre, so one drawing unit is 1 mm.
"""
import pytest
from shared.types import Room
from ceiling.config import Calibration, DEFAULT_CONFIG
from ceiling.profiles import compute_profiles
from ceiling.plates import compute_plates

# 2600 x 3000 rectangle: usable width 2400 -> 7 vertical profiles
RECT = ((0.0, 0.0), (2600.0, 0.0), (2600.0, 3000.0), (0.0, 3000.0))

# L-shape: full height west of x=1300, half height east of it
L_SHAPE = ((0.0, 0.0), (2600.0, 0.0), (2600.0, 1500.0),
           (1300.0, 1500.0), (1300.0, 3000.0), (0.0, 3000.0))


class TraceRecorder:
    """TraceHook collecting (event, fields) pairs."""
    def __init__(self):
        self.events = []

    def __call__(self, event, fields):
        self.events.append((event, fields))

    def named(self, event):
        return [f for e, f in self.events if e == event]


@pytest.fixture
def cfg():
    return DEFAULT_CONFIG


@pytest.fixture
def cal():
    return Calibration(1000.0)


@pytest.fixture
def trace():
    return TraceRecorder()


@pytest.fixture
def rect_room():
    return Room(id="rect", points=RECT)


@pytest.fixture
def l_room():
    return Room(id="ell", points=L_SHAPE)


@pytest.fixture
def rect_profiles(cal, cfg):
    return compute_profiles(list(RECT), "Vertical", cal, cfg)


@pytest.fixture
def rect_plates(rect_profiles, cal, cfg):
    return compute_plates(rect_profiles, "Four", cal, cfg)
