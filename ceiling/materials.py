"""Bill of materials: profile and plate length histograms."""
from collections import Counter

from shared.geometry import dist, quantize
from shared.types import SupportProfile, HeatPlate
from ceiling.config import Calibration


def profile_stats(profiles: list[SupportProfile], cal: Calibration) -> list[tuple[int, int]]:
    """(length_cm, count) pairs, longest first. Lengths rounded to whole centimetres."""
    counts = Counter(round(cal.to_mm(dist(p.start, p.end)) / 10) for p in profiles)
    return sorted(counts.items(), reverse=True)


def plate_materials(plates: list[HeatPlate], cal: Calibration,
                    step: float = 50.0) -> list[tuple[float, int]]:
    """(length_mm, count) pairs, longest first.

    Plates are stocked in *step* increments, so each length is rounded down to
    a whole step; plates that round to nothing are left out.
    """
    counts = Counter()
    for p in plates:
        stock = quantize(cal.to_mm(dist(p.start, p.end)), step)
        if stock > 0:
            counts[stock] += 1
    return sorted(counts.items(), reverse=True)
