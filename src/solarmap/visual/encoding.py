"""Irradiance value -> marker color bucket and marker size.

Bucket thresholds are ratios of the 1000 W/m² reference. They are narrower
than the 200 W/m² legend bands (0.2/0.3/0.4/0.5 vs 0.2/0.4/0.6/0.8); both are
kept exactly as the dashboard has always drawn them.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

MAX_IRRADIANCE = 1000.0
MIN_SIZE = 24.0
MAX_SIZE = 48.0
SIZE_SATURATION = 0.7


class ColorBucket(Enum):
    B0 = ("#2C5282", "0-200", 24)
    B1 = ("#4299E1", "200-400", 30)
    B2 = ("#F6E05E", "400-600", 36)
    B3 = ("#ED8936", "600-800", 42)
    B4 = ("#C53030", "800-1000", 48)

    def __init__(self, color: str, legend_label: str, swatch_px: int):
        self.color = color
        self.legend_label = legend_label
        self.swatch_px = swatch_px


# (upper ratio bound, bucket); anything at or above the last bound is B4.
COLOR_THRESHOLDS: Tuple[Tuple[float, ColorBucket], ...] = (
    (0.2, ColorBucket.B0),
    (0.3, ColorBucket.B1),
    (0.4, ColorBucket.B2),
    (0.5, ColorBucket.B3),
)


def sanitize(value) -> float:
    """Coerce to a float in [0, inf]; None, NaN and negatives become 0."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(v) or v < 0:
        return 0.0
    return v


def color_bucket(value) -> ColorBucket:
    ratio = sanitize(value) / MAX_IRRADIANCE
    for bound, bucket in COLOR_THRESHOLDS:
        if ratio < bound:
            return bucket
    return ColorBucket.B4


def visual_magnitude(value) -> float:
    return min(sanitize(value) / MAX_IRRADIANCE, SIZE_SATURATION) * (MAX_SIZE - MIN_SIZE)


@dataclass(frozen=True)
class LegendEntry:
    bucket: ColorBucket
    label: str
    color: str
    swatch_px: int


def legend() -> List[LegendEntry]:
    return [LegendEntry(b, b.legend_label, b.color, b.swatch_px) for b in ColorBucket]


__all__ = [
    "MAX_IRRADIANCE",
    "MIN_SIZE",
    "MAX_SIZE",
    "COLOR_THRESHOLDS",
    "ColorBucket",
    "LegendEntry",
    "color_bucket",
    "legend",
    "sanitize",
    "visual_magnitude",
]
