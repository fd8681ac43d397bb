"""Command line entrypoint for solarmap.

A thin hosting shell around the core: it loads the site registry, fetches
the rolling 24 h snapshot once per invocation and prints the data contracts
the map and chart surfaces consume.
"""
from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Optional

import typer

from solarmap.cli_utils import resolve_config, snapshot_table, write_json, write_snapshot
from solarmap.core.config import ConfigError, FetchSettings, MapConfig
from solarmap.core.debug import DebugCollector, JsonlDebugWriter, NullDebugCollector
from solarmap.core.models import SelectionState, ValidationError
from solarmap.core.snapshot import IrradianceSnapshot
from solarmap.engine.aggregate import fetch_all_sync
from solarmap.network.graph import build_graph, edges_to_geojson
from solarmap.visual.chart import build_series, records_to_frame
from solarmap.visual.encoding import legend as legend_entries
from solarmap.visual.markers import build_markers
from solarmap.weather.open_meteo import OpenMeteoIrradianceProvider

__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="Solar irradiance network map CLI")

ConfigOption = typer.Option(None, exists=True, readable=True, help="Site network YAML/JSON file (defaults to built-in sites)")
NowOption = typer.Option(None, help="Reference time (ISO); defaults to the current time")
DebugOption = typer.Option(None, help="Write debug JSONL to this path")


def default_weather_provider(settings: FetchSettings, debug: DebugCollector) -> OpenMeteoIrradianceProvider:
    """Factory separated for easy monkeypatching in tests."""

    return OpenMeteoIrradianceProvider(
        base_url=settings.base_url,
        debug=debug,
        timeout_s=settings.timeout_s,
        retries=settings.retries,
        backoff_s=settings.backoff_s,
    )


def _exit_with_error(msg: str) -> None:
    typer.echo(f"Error: {msg}", err=True)
    raise typer.Exit(code=1)


def _load(config: Optional[Path]) -> MapConfig:
    try:
        return resolve_config(config)
    except ConfigError as exc:
        _exit_with_error(str(exc))


def _parse_now(now: Optional[str]) -> dt.datetime:
    if not now:
        return dt.datetime.now(dt.timezone.utc)
    try:
        parsed = dt.datetime.fromisoformat(now)
    except ValueError:
        _exit_with_error("now must be an ISO timestamp, e.g. 2025-06-01T12:00:00+00:00")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _selection(hour: Optional[int], now: dt.datetime, selected: Optional[str] = None, hovered: Optional[str] = None) -> SelectionState:
    try:
        state = SelectionState.initial(now)
        if hour is not None:
            state = state.with_hour(hour)
    except ValidationError as exc:
        _exit_with_error(str(exc))
    if selected:
        state = state.select(selected)
    if hovered:
        state = state.hover(hovered)
    return state


def _fetch(cfg: MapConfig, now: dt.datetime, debug: Optional[Path]) -> IrradianceSnapshot:
    collector = JsonlDebugWriter(debug) if debug else NullDebugCollector()
    provider = default_weather_provider(cfg.fetch, collector)
    snapshot = fetch_all_sync(
        cfg.sites,
        now,
        provider,
        timeout_s=cfg.fetch.timeout_s,
        max_concurrency=cfg.fetch.max_concurrency,
        debug=collector,
    )
    for name in sorted(snapshot.failed):
        typer.echo(f"Warning: fetch failed for {name}; showing zeros", err=True)
    if debug:
        collector.close()
    return snapshot


def _emit(payload, output: Optional[Path]) -> None:
    if output:
        write_json(output, payload)
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def sites(config: Optional[Path] = ConfigOption):
    """List configured sites and their neighbors."""

    cfg = _load(config)
    for site in cfg.sites:
        neighbors = ", ".join(site.neighbors) or "-"
        typer.echo(f"- {site.name}: {site.lat},{site.lon} neighbors={neighbors}")


@app.command()
def graph(
    config: Optional[Path] = ConfigOption,
    output: Optional[Path] = typer.Option(None, help="Write GeoJSON here instead of stdout"),
):
    """Print the site network as a GeoJSON FeatureCollection."""

    cfg = _load(config)
    _emit(edges_to_geojson(build_graph(cfg.sites), view=cfg.view), output)


@app.command()
def fetch(
    config: Optional[Path] = ConfigOption,
    now: Optional[str] = NowOption,
    output: Optional[Path] = typer.Option(None, help="Write snapshot to .json or .csv"),
    debug: Optional[Path] = DebugOption,
):
    """Fetch the rolling 24 h irradiance for every site and print it."""

    cfg = _load(config)
    snapshot = _fetch(cfg, _parse_now(now), debug)
    typer.echo(snapshot_table(snapshot))
    if output:
        try:
            write_snapshot(output, snapshot)
        except ConfigError as exc:
            _exit_with_error(str(exc))
        typer.echo(f"Wrote snapshot to {output}")


@app.command()
def chart(
    site: str = typer.Option(..., help="Site to chart"),
    hour: Optional[int] = typer.Option(None, help="Highlighted hour 0-23; defaults to the current hour"),
    config: Optional[Path] = ConfigOption,
    now: Optional[str] = NowOption,
    format: str = typer.Option("json", "--format", "-f", help="Output format: json or table"),
    debug: Optional[Path] = DebugOption,
):
    """Print the 24 chart records for one site."""

    cfg = _load(config)
    ref = _parse_now(now)
    state = _selection(hour, ref, selected=site)
    snapshot = _fetch(cfg, ref, debug)
    records = build_series(snapshot, state.selected_site, state.current_hour)
    if not records:
        typer.echo(f"No data for site {site}", err=True)
    fmt = format.lower()
    if fmt == "json":
        _emit([r.to_dict() for r in records], None)
    elif fmt == "table":
        typer.echo(records_to_frame(records).to_string(index=False))
    else:
        _exit_with_error("format must be json or table")


@app.command()
def markers(
    hour: Optional[int] = typer.Option(None, help="Hour 0-23; defaults to the current hour"),
    selected: Optional[str] = typer.Option(None, help="Selected site"),
    hovered: Optional[str] = typer.Option(None, help="Hovered site"),
    config: Optional[Path] = ConfigOption,
    now: Optional[str] = NowOption,
    output: Optional[Path] = typer.Option(None, help="Write marker JSON here instead of stdout"),
    debug: Optional[Path] = DebugOption,
):
    """Print marker styling (color, size, emphasis) for every site."""

    cfg = _load(config)
    ref = _parse_now(now)
    state = _selection(hour, ref, selected=selected, hovered=hovered)
    snapshot = _fetch(cfg, ref, debug)
    _emit([m.to_dict() for m in build_markers(cfg.sites, snapshot, state)], output)


@app.command()
def legend():
    """Print the irradiance legend."""

    for entry in legend_entries():
        typer.echo(f"{entry.bucket.name} {entry.color} {entry.label} W/m² ({entry.swatch_px}px)")


@app.callback()
def version_callback(
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    if version:
        typer.echo(__version__)
        raise typer.Exit()


def main() -> None:  # pragma: no cover - thin wrapper for console_script
    app()


__all__ = ["app", "main", "default_weather_provider"]


if __name__ == "__main__":  # pragma: no cover
    main()
