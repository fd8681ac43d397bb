"""Visual encodings consumed by the map and chart surfaces."""

from .chart import build_series
from .encoding import ColorBucket, color_bucket, legend, visual_magnitude
from .markers import MarkerStyle, build_markers

__all__ = [
    "ColorBucket",
    "MarkerStyle",
    "build_markers",
    "build_series",
    "color_bucket",
    "legend",
    "visual_magnitude",
]
