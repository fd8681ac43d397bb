"""Abstract irradiance provider protocol."""

from __future__ import annotations

from typing import Protocol

import pandas as pd


class IrradianceProvider(Protocol):
    """Interface for fetching an hourly irradiance series for one coordinate."""

    def get_irradiance(self, lat: float, lon: float, start: str, end: str) -> pd.Series:
        """Return hourly global horizontal irradiance (W/m²) between two ISO dates.

        The Series is indexed by timestamp in ascending order. Implementations
        may be plain functions or coroutines; the aggregator handles both.
        """
        ...


__all__ = ["IrradianceProvider"]
