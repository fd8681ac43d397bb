"""Shared CLI helpers to avoid circular imports."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from solarmap.core.config import ConfigError, MapConfig, load_config
from solarmap.core.snapshot import IrradianceSnapshot


def resolve_config(path: Optional[Path]) -> MapConfig:
    """Load ``path`` when given, else fall back to the built-in registry."""
    if path is None:
        return MapConfig()
    return load_config(path)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False))


def write_snapshot(path: Path, snapshot: IrradianceSnapshot) -> None:
    fmt = path.suffix.lower().lstrip(".")
    if fmt == "json":
        write_json(path, snapshot.to_dict())
    elif fmt == "csv":
        path.parent.mkdir(parents=True, exist_ok=True)
        snapshot.to_frame().to_csv(path)
    else:
        raise ConfigError("output path must end with .json or .csv")


def snapshot_table(snapshot: IrradianceSnapshot) -> str:
    df: pd.DataFrame = snapshot.to_frame()
    if df.empty:
        return "No sites fetched"
    return df.T.round(1).to_string()


__all__ = ["resolve_config", "snapshot_table", "write_json", "write_snapshot"]
