"""Domain models for the irradiance network map.

Provides validated, immutable data structures for sites, edges, selection
state and chart records.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

HOURS_PER_DAY = 24


class ValidationError(ValueError):
    """Raised when model inputs violate constraints."""


@dataclass(frozen=True)
class Site:
    name: str
    lat: float
    lon: float
    neighbors: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Site name is required")
        if not (-90.0 <= self.lat <= 90.0):
            raise ValidationError("Latitude must be between -90 and 90 degrees")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValidationError("Longitude must be between -180 and 180 degrees")
        # Accept lists from config files; store as tuple to keep the site hashable.
        object.__setattr__(self, "neighbors", tuple(str(n) for n in self.neighbors))

    @property
    def coords(self) -> Tuple[float, float]:
        """(lon, lat) pair, the order map geometries use."""
        return (self.lon, self.lat)


@dataclass(frozen=True)
class Edge:
    a: str
    b: str
    geometry: Tuple[Tuple[float, float], Tuple[float, float]]

    @staticmethod
    def key_for(a: str, b: str) -> str:
        return "-".join(sorted((a, b)))

    @property
    def key(self) -> str:
        return self.key_for(self.a, self.b)


@dataclass(frozen=True)
class MapView:
    lon: float = 78.9629
    lat: float = 20.5937
    zoom: float = 4.0

    def __post_init__(self):
        if not (-90.0 <= self.lat <= 90.0):
            raise ValidationError("View latitude must be between -90 and 90 degrees")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValidationError("View longitude must be between -180 and 180 degrees")
        if self.zoom < 0:
            raise ValidationError("Zoom must be non-negative")


@dataclass(frozen=True)
class SelectionState:
    current_hour: int = 0
    selected_site: Optional[str] = None
    hovered_site: Optional[str] = None

    def __post_init__(self):
        if not (0 <= self.current_hour < HOURS_PER_DAY):
            raise ValidationError("current_hour must be between 0 and 23")

    @classmethod
    def initial(cls, now: dt.datetime | None = None) -> "SelectionState":
        now = now or dt.datetime.now()
        return cls(current_hour=now.hour)

    def with_hour(self, hour: int) -> "SelectionState":
        return replace(self, current_hour=int(hour))

    def hover(self, name: str) -> "SelectionState":
        return replace(self, hovered_site=name)

    def unhover(self) -> "SelectionState":
        return replace(self, hovered_site=None)

    def select(self, name: str) -> "SelectionState":
        return replace(self, selected_site=name)


@dataclass(frozen=True)
class ChartRecord:
    hour: int
    irradiance: float
    is_current_hour: bool

    def to_dict(self) -> Dict[str, object]:
        """Shape consumed by the chart surface."""
        return {
            "hour": self.hour,
            "irradiance": self.irradiance,
            "isCurrentHour": self.is_current_hour,
        }


__all__ = [
    "HOURS_PER_DAY",
    "ValidationError",
    "Site",
    "Edge",
    "MapView",
    "SelectionState",
    "ChartRecord",
]
