"""Rolling 24 h irradiance fetch across all sites.

Every site is fetched concurrently (bounded by ``max_concurrency``) with its
own timeout. A site that errors, times out or returns unusable data gets a
zero series instead; siblings are never affected. The snapshot is built only
after every site has settled.
"""
from __future__ import annotations

import asyncio
import datetime as dt
import inspect
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

from solarmap.core.debug import DebugCollector, NullDebugCollector, ScopedDebugCollector
from solarmap.core.models import HOURS_PER_DAY, Site
from solarmap.core.snapshot import IrradianceSnapshot, zero_series
from solarmap.weather.base import IrradianceProvider

WINDOW = dt.timedelta(hours=HOURS_PER_DAY)


def rolling_window(now: dt.datetime) -> Tuple[dt.datetime, dt.datetime]:
    """Return ``(now - 24h, now)``; naive timestamps are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    return now - WINDOW, now


def _iso_date(ts: dt.datetime) -> str:
    return ts.astimezone(dt.timezone.utc).date().isoformat()


def last_24(values: Iterable[float] | pd.Series) -> Tuple[float, ...]:
    """Keep the most recent 24 samples as non-negative floats.

    Missing samples become 0 and a short series is padded with zeros at the
    end, so the result always has exactly 24 entries.
    """
    if isinstance(values, pd.Series):
        series = values
    elif isinstance(values, (list, tuple, np.ndarray)):
        series = pd.Series(list(values), dtype="object")
    else:
        raise ValueError(f"provider returned {type(values).__name__}, expected a series")
    if len(series) == 0:
        raise ValueError("provider returned an empty series")
    numeric = pd.to_numeric(series, errors="coerce").astype(float)
    tail = numeric.iloc[-HOURS_PER_DAY:].fillna(0.0).clip(lower=0.0)
    out = [float(v) for v in tail]
    out.extend([0.0] * (HOURS_PER_DAY - len(out)))
    return tuple(out)


async def _call_provider(provider: IrradianceProvider, site: Site, start: str, end: str, executor: ThreadPoolExecutor):
    fetch = provider.get_irradiance
    if inspect.iscoroutinefunction(fetch):
        return await fetch(site.lat, site.lon, start, end)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, fetch, site.lat, site.lon, start, end)


async def _fetch_site(
    provider: IrradianceProvider,
    site: Site,
    start: str,
    end: str,
    semaphore: asyncio.Semaphore,
    executor: ThreadPoolExecutor,
    timeout_s: float,
    debug: DebugCollector,
) -> Tuple[str, Tuple[float, ...], bool]:
    scoped = ScopedDebugCollector(debug, site=site.name)
    try:
        async with semaphore:
            raw = await asyncio.wait_for(_call_provider(provider, site, start, end, executor), timeout=timeout_s)
        return site.name, last_24(raw), True
    except asyncio.TimeoutError:
        scoped.emit("weather.fetch_failed", {"error": f"timed out after {timeout_s}s", "kind": "timeout"}, ts=start)
    except Exception as exc:
        scoped.emit("weather.fetch_failed", {"error": str(exc), "kind": type(exc).__name__}, ts=start)
    return site.name, zero_series(), False


async def fetch_all(
    sites: Sequence[Site],
    now: dt.datetime,
    provider: IrradianceProvider,
    *,
    timeout_s: float = 30.0,
    max_concurrency: int = 8,
    debug: DebugCollector | None = None,
) -> IrradianceSnapshot:
    debug = debug or NullDebugCollector()
    window_start, window_end = rolling_window(now)
    start, end = _iso_date(window_start), _iso_date(window_end)
    workers = max(1, max_concurrency)
    semaphore = asyncio.Semaphore(workers)
    # Timed-out provider calls are abandoned on return, never joined.
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="solarmap-fetch")
    try:
        outcomes = await asyncio.gather(
            *(_fetch_site(provider, site, start, end, semaphore, executor, timeout_s, debug) for site in sites)
        )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    series = {name: values for name, values, _ in outcomes}
    failed = frozenset(name for name, _, ok in outcomes if not ok)
    debug.emit(
        "aggregate.done",
        {"sites": len(series), "failed": sorted(failed), "start_date": start, "end_date": end},
        ts=window_end,
    )
    return IrradianceSnapshot(series=series, window_start=window_start, window_end=window_end, failed=failed)


def fetch_all_sync(sites: Sequence[Site], now: dt.datetime, provider: IrradianceProvider, **kwargs) -> IrradianceSnapshot:
    """Blocking wrapper for callers without a running event loop.

    Returns once every site has settled or timed out; timed-out provider
    threads are left to finish in the background.
    """
    return asyncio.run(fetch_all(sites, now, provider, **kwargs))


__all__ = ["fetch_all", "fetch_all_sync", "last_24", "rolling_window"]
