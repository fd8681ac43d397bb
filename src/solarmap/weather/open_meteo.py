"""Open-Meteo irradiance provider."""

from __future__ import annotations

import time
from typing import Any, Dict

import pandas as pd
import requests

from solarmap.core.debug import DebugCollector, NullDebugCollector
from .base import IrradianceProvider

_IRRADIANCE_VAR = "shortwave_radiation"


class OpenMeteoIrradianceProvider(IrradianceProvider):
    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com/v1/forecast",
        debug: DebugCollector | None = None,
        session: requests.Session | None = None,
        timeout_s: float = 30.0,
        retries: int = 3,
        backoff_s: float = 0.5,
    ):
        self.base_url = base_url
        self.debug = debug or NullDebugCollector()
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.retries = retries
        self.backoff_s = backoff_s

    def _build_params(self, lat: float, lon: float, start: str, end: str) -> Dict[str, str]:
        if lat is None or lon is None:
            raise ValueError("lat and lon are required")
        return {
            "latitude": str(lat),
            "longitude": str(lon),
            "hourly": _IRRADIANCE_VAR,
            "start_date": start,
            "end_date": end,
        }

    def _parse(self, payload: Dict[str, Any]) -> pd.Series:
        if not isinstance(payload, dict):
            raise ValueError("Open-Meteo response is not a JSON object")
        hourly = payload.get("hourly")
        if not isinstance(hourly, dict):
            raise ValueError("Open-Meteo response missing hourly block")
        values = hourly.get(_IRRADIANCE_VAR)
        if not isinstance(values, list):
            raise ValueError(f"Open-Meteo response missing hourly.{_IRRADIANCE_VAR}")
        times = hourly.get("time")
        index = pd.RangeIndex(len(values))
        if isinstance(times, list) and len(times) == len(values):
            # Open-Meteo returns GMT wall times unless a timezone is requested.
            # Downstream only uses value order; unparseable stamps keep a positional index.
            try:
                index = pd.to_datetime(times)
            except (TypeError, ValueError):
                self.debug.emit("weather.bad_time_index", {"sample": times[:3]}, ts=None)
        series = pd.Series(pd.to_numeric(pd.Series(values, dtype="object"), errors="coerce").to_numpy(), index=index)
        series.index.name = "ts"
        series.name = "ghi_wm2"
        return series

    def _emit_summary(self, lat: float, lon: float, series: pd.Series) -> None:
        payload = {
            "lat": lat,
            "lon": lon,
            "points": int(len(series)),
            "missing": int(series.isna().sum()),
            "ghi_max": float(series.max()) if series.notna().any() else None,
        }
        ts = series.index[0] if len(series) else None
        self.debug.emit("weather.summary", payload, ts=ts)

    def get_irradiance(self, lat: float, lon: float, start: str, end: str) -> pd.Series:
        params = self._build_params(lat, lon, start, end)
        self.debug.emit("weather.request", {"url": self.base_url, "params": params}, ts=start)
        for attempt in range(1, self.retries + 1):
            try:
                resp = self.session.get(self.base_url, params=params, timeout=self.timeout_s)
                resp.raise_for_status()
                data = resp.json()
                break
            except Exception as exc:
                if attempt == self.retries:
                    raise
                self.debug.emit("weather.retry", {"attempt": attempt, "error": str(exc)}, ts=start)
                time.sleep(self.backoff_s * attempt)
        series = self._parse(data)
        self._emit_summary(lat, lon, series)
        return series


__all__ = ["OpenMeteoIrradianceProvider"]
