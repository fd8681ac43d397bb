"""Hour-indexed records for the per-site bar chart."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from solarmap.core.models import HOURS_PER_DAY, ChartRecord
from solarmap.core.snapshot import IrradianceSnapshot
from .encoding import sanitize

CURRENT_BAR_FILL = "#F6E05E"
BAR_FILL = "#4299E1"


def build_series(
    series: IrradianceSnapshot | Mapping[str, Sequence[float]],
    site: Optional[str],
    current_hour: int,
) -> List[ChartRecord]:
    """24 records for ``site``, or an empty list when there is nothing to show."""
    if site is None:
        return []
    values = series.get(site)
    if values is None:
        return []
    records = []
    for hour in range(HOURS_PER_DAY):
        value = values[hour] if hour < len(values) else 0.0
        records.append(
            ChartRecord(
                hour=hour,
                irradiance=sanitize(value),
                is_current_hour=hour == current_hour,
            )
        )
    return records


def hour_label(hour: int) -> str:
    return f"{hour}:00"


def bar_fill(record: ChartRecord) -> str:
    return CURRENT_BAR_FILL if record.is_current_hour else BAR_FILL


def records_to_frame(records: List[ChartRecord]) -> pd.DataFrame:
    rows: List[Dict[str, object]] = [
        {**r.to_dict(), "label": hour_label(r.hour), "fill": bar_fill(r)} for r in records
    ]
    return pd.DataFrame(rows, columns=["hour", "irradiance", "isCurrentHour", "label", "fill"])


__all__ = ["build_series", "bar_fill", "hour_label", "records_to_frame"]
