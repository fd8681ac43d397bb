"""Configuration loader for the site network.

Supports YAML and JSON files with a ``sites`` list plus optional ``fetch``
and ``view`` sections.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .models import MapView, Site, ValidationError
from .registry import DEFAULT_SITES, validate_unique


class ConfigError(ValueError):
    """Raised when configuration cannot be parsed into domain models."""


@dataclass(frozen=True)
class FetchSettings:
    base_url: str = "https://api.open-meteo.com/v1/forecast"
    timeout_s: float = 30.0
    max_concurrency: int = 8
    retries: int = 3
    backoff_s: float = 0.5

    def __post_init__(self):
        if not self.base_url:
            raise ValidationError("base_url is required")
        if self.timeout_s <= 0:
            raise ValidationError("timeout_s must be positive")
        if self.max_concurrency < 1:
            raise ValidationError("max_concurrency must be at least 1")
        if self.retries < 1:
            raise ValidationError("retries must be at least 1")
        if self.backoff_s < 0:
            raise ValidationError("backoff_s must be non-negative")


@dataclass(frozen=True)
class MapConfig:
    sites: Tuple[Site, ...] = DEFAULT_SITES
    fetch: FetchSettings = field(default_factory=FetchSettings)
    view: MapView = field(default_factory=MapView)

    def __post_init__(self):
        if not self.sites:
            raise ValidationError("Config must include at least one site")
        object.__setattr__(self, "sites", validate_unique(tuple(self.sites)))


_DEF_REQUIRED_SITE_KEYS = {"name", "lat", "lon"}


def _load_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    if path.suffix.lower() == ".json":
        return json.loads(text)
    raise ConfigError(f"Unsupported config extension: {path.suffix}")


def _parse_site(raw: Dict[str, Any]) -> Site:
    if not isinstance(raw, dict):
        raise ConfigError("Each site must be a mapping")
    missing = _DEF_REQUIRED_SITE_KEYS - raw.keys()
    if missing:
        raise ConfigError(f"Missing site fields: {sorted(missing)}")
    neighbors = raw.get("neighbors") or []
    if isinstance(neighbors, str):
        neighbors = [n.strip() for n in neighbors.split(",") if n.strip()]
    try:
        return Site(
            name=str(raw["name"]),
            lat=float(raw["lat"]),
            lon=float(raw["lon"]),
            neighbors=tuple(neighbors),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid site {raw.get('name')!r}: {exc}") from exc


def _parse_section(cls, raw: Any, label: str):
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"'{label}' section must be a mapping")
    unknown = set(raw) - {f.name for f in fields(cls)}
    if unknown:
        raise ConfigError(f"Unknown {label} field(s): {sorted(unknown)}")
    try:
        return cls(**raw)
    except (TypeError, ValueError) as exc:
        # Non-numeric values fail the range checks with a TypeError.
        raise ConfigError(f"Invalid {label} settings: {exc}") from exc


def load_config(path: str | Path) -> MapConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    raw = _load_raw(path)
    if not isinstance(raw, dict) or "sites" not in raw:
        raise ConfigError("Config must contain 'sites' list")
    sites = tuple(_parse_site(site) for site in raw["sites"] or [])
    fetch = _parse_section(FetchSettings, raw.get("fetch"), "fetch")
    view = _parse_section(MapView, raw.get("view"), "view")
    try:
        return MapConfig(sites=sites, fetch=fetch, view=view)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc


__all__ = [
    "ConfigError",
    "FetchSettings",
    "MapConfig",
    "load_config",
]
