"""Per-site marker styling for the map surface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from solarmap.core.models import SelectionState, Site
from solarmap.core.snapshot import IrradianceSnapshot
from .encoding import ColorBucket, color_bucket, visual_magnitude

SELECTED_BORDER = "#F6E05E"
DEFAULT_BORDER = "white"
EMPHASIS_SCALE = 1.1


@dataclass(frozen=True)
class MarkerStyle:
    name: str
    lon: float
    lat: float
    value: float
    bucket: ColorBucket
    size: float
    hovered: bool
    selected: bool
    tooltip: Optional[str]

    @property
    def color(self) -> str:
        return self.bucket.color

    @property
    def border_color(self) -> str:
        return SELECTED_BORDER if self.selected else DEFAULT_BORDER

    @property
    def scale(self) -> float:
        return EMPHASIS_SCALE if self.hovered or self.selected else 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lon": self.lon,
            "lat": self.lat,
            "value": self.value,
            "bucket": self.bucket.name,
            "color": self.color,
            "size": self.size,
            "border_color": self.border_color,
            "scale": self.scale,
            "hovered": self.hovered,
            "selected": self.selected,
            "tooltip": self.tooltip,
        }


def tooltip_text(value: float) -> str:
    return f"Irradiance: {value:.1f} W/m²"


def build_markers(sites: Sequence[Site], snapshot: IrradianceSnapshot, selection: SelectionState) -> List[MarkerStyle]:
    markers = []
    for site in sites:
        value = snapshot.value_at(site.name, selection.current_hour)
        hovered = selection.hovered_site == site.name
        markers.append(
            MarkerStyle(
                name=site.name,
                lon=site.lon,
                lat=site.lat,
                value=value,
                bucket=color_bucket(value),
                size=visual_magnitude(value),
                hovered=hovered,
                selected=selection.selected_site == site.name,
                tooltip=tooltip_text(value) if hovered else None,
            )
        )
    return markers


__all__ = ["MarkerStyle", "build_markers", "tooltip_text"]
