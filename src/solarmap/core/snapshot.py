"""Immutable per-site irradiance store produced once per session."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

import pandas as pd

from .models import HOURS_PER_DAY


def zero_series() -> Tuple[float, ...]:
    return (0.0,) * HOURS_PER_DAY


@dataclass(frozen=True)
class IrradianceSnapshot:
    """Site name -> 24 hourly W/m² values, oldest first.

    ``failed`` lists the sites whose series is the zero fallback. A site that
    was never fetched has no entry at all, which callers can distinguish from
    a zeroed one via ``in``.
    """

    series: Mapping[str, Tuple[float, ...]]
    window_start: Optional[dt.datetime] = None
    window_end: Optional[dt.datetime] = None
    failed: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        frozen = {str(k): tuple(float(v) for v in vals) for k, vals in dict(self.series).items()}
        object.__setattr__(self, "series", MappingProxyType(frozen))
        object.__setattr__(self, "failed", frozenset(self.failed))

    def __contains__(self, name: object) -> bool:
        return name in self.series

    def __iter__(self) -> Iterator[str]:
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)

    def get(self, name: Optional[str]) -> Optional[Tuple[float, ...]]:
        if name is None:
            return None
        return self.series.get(name)

    def value_at(self, name: str, hour: int) -> float:
        """Value for ``name`` at ``hour``; 0 when the site or index is missing."""
        values = self.series.get(name)
        if values is None or not (0 <= hour < len(values)):
            return 0.0
        return values[hour]

    def to_frame(self) -> pd.DataFrame:
        """Hour-indexed frame with one column per site."""
        df = pd.DataFrame({name: list(vals) for name, vals in self.series.items()})
        df.index.name = "hour"
        return df

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "window_end": self.window_end.isoformat() if self.window_end else None,
            "failed": sorted(self.failed),
            "series": {name: list(vals) for name, vals in sorted(self.series.items())},
        }


__all__ = ["IrradianceSnapshot", "zero_series"]
