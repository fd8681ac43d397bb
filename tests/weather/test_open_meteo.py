import pandas as pd
import pytest

from solarmap.core.debug import ListDebugCollector
from solarmap.weather.open_meteo import OpenMeteoIrradianceProvider


def _payload(values):
    times = list(pd.date_range("2025-06-01", periods=len(values), freq="h").strftime("%Y-%m-%dT%H:%M"))
    return {
        "latitude": 19.0,
        "longitude": 72.875,
        "hourly_units": {"shortwave_radiation": "W/m²"},
        "hourly": {"time": times, "shortwave_radiation": values},
    }


class Resp:
    def __init__(self, data, ok=True):
        self.data = data
        self.ok = ok

    def raise_for_status(self):
        if not self.ok:
            raise RuntimeError("HTTP 500")

    def json(self):
        return self.data


def test_build_params():
    provider = OpenMeteoIrradianceProvider()
    params = provider._build_params(19.076, 72.8777, "2025-05-31", "2025-06-01")
    assert params == {
        "latitude": "19.076",
        "longitude": "72.8777",
        "hourly": "shortwave_radiation",
        "start_date": "2025-05-31",
        "end_date": "2025-06-01",
    }


def test_parse_series_with_nulls():
    provider = OpenMeteoIrradianceProvider()
    series = provider._parse(_payload([0, 10.5, None, 300]))
    assert isinstance(series.index, pd.DatetimeIndex)
    assert series.iloc[1] == 10.5
    assert pd.isna(series.iloc[2])
    assert series.index[3].hour == 3


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"error": True, "reason": "bad"},
        {"hourly": {"time": []}},
        {"hourly": "nope"},
    ],
)
def test_parse_rejects_malformed(payload):
    with pytest.raises(ValueError):
        OpenMeteoIrradianceProvider()._parse(payload)


def test_get_irradiance_passes_params_and_timeout():
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return Resp(_payload([1.0] * 48))

    debug = ListDebugCollector()
    provider = OpenMeteoIrradianceProvider(base_url="http://example.test/v1", debug=debug, timeout_s=7)
    provider.session.get = fake_get
    series = provider.get_irradiance(1.0, 2.0, "2025-05-31", "2025-06-01")
    assert len(series) == 48
    assert seen["url"] == "http://example.test/v1"
    assert seen["params"]["start_date"] == "2025-05-31"
    assert seen["timeout"] == 7
    assert debug.stages() == ["weather.request", "weather.summary"]


def test_get_irradiance_retries_then_succeeds():
    calls = {"count": 0}

    def fake_get(*args, **kwargs):
        calls["count"] += 1
        if calls["count"] < 2:
            return Resp(None, ok=False)
        return Resp(_payload([5.0] * 24))

    debug = ListDebugCollector()
    provider = OpenMeteoIrradianceProvider(debug=debug, backoff_s=0)
    provider.session.get = fake_get
    series = provider.get_irradiance(0, 0, "2025-01-01", "2025-01-02")
    assert calls["count"] == 2
    assert len(series) == 24
    assert "weather.retry" in debug.stages()


def test_get_irradiance_raises_after_last_retry():
    def fake_get(*args, **kwargs):
        raise ConnectionError("down")

    provider = OpenMeteoIrradianceProvider(retries=2, backoff_s=0)
    provider.session.get = fake_get
    with pytest.raises(ConnectionError):
        provider.get_irradiance(0, 0, "2025-01-01", "2025-01-02")


def test_parse_keeps_values_when_time_array_unparseable():
    debug = ListDebugCollector()
    provider = OpenMeteoIrradianceProvider(debug=debug)
    payload = _payload([1.0, 2.0, 3.0])
    payload["hourly"]["time"] = ["2025-06-01T24:00", "garbage", "2025-06-01T26:00"]
    series = provider._parse(payload)
    assert list(series) == [1.0, 2.0, 3.0]
    assert isinstance(series.index, pd.RangeIndex)
    assert debug.stages() == ["weather.bad_time_index"]


def test_get_irradiance_handles_multi_day_payload():
    provider = OpenMeteoIrradianceProvider()
    provider.session.get = lambda *a, **k: Resp(_payload([float(i) for i in range(48)]))
    series = provider.get_irradiance(0, 0, "2025-05-31", "2025-06-01")
    assert isinstance(series.index, pd.DatetimeIndex)
    assert series.index[-1] == pd.Timestamp("2025-06-02T23:00")
    assert series.iloc[-1] == 47.0
