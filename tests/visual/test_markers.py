import pytest

from solarmap.core.models import SelectionState, Site
from solarmap.core.snapshot import IrradianceSnapshot
from solarmap.visual.encoding import ColorBucket
from solarmap.visual.markers import build_markers, tooltip_text

SITES = [Site("A", 10, 20), Site("B", 11, 21), Site("C", 12, 22)]


def _snapshot():
    return IrradianceSnapshot(series={"A": [850.0] * 24, "B": [150.0] * 24})


def test_marker_values_follow_current_hour():
    markers = build_markers(SITES, _snapshot(), SelectionState(current_hour=4))
    by_name = {m.name: m for m in markers}
    assert by_name["A"].bucket is ColorBucket.B4
    assert by_name["A"].size == pytest.approx(16.8)
    assert by_name["B"].color == "#2C5282"
    # C was never loaded: drawn as zero, not an error
    assert by_name["C"].value == 0.0
    assert by_name["C"].size == 0.0


def test_hover_and_selection_styling():
    state = SelectionState(current_hour=0).hover("B").select("A")
    by_name = {m.name: m for m in build_markers(SITES, _snapshot(), state)}
    assert by_name["A"].selected and by_name["A"].border_color == "#F6E05E"
    assert by_name["A"].scale == 1.1
    assert by_name["A"].tooltip is None
    assert by_name["B"].hovered and by_name["B"].scale == 1.1
    assert by_name["B"].border_color == "white"
    assert by_name["B"].tooltip == "Irradiance: 150.0 W/m²"
    assert by_name["C"].scale == 1.0


def test_to_dict_and_tooltip():
    (marker,) = build_markers(SITES[:1], _snapshot(), SelectionState())
    data = marker.to_dict()
    assert data["bucket"] == "B4"
    assert data["color"] == "#C53030"
    assert data["lon"] == 20
    assert tooltip_text(12.345) == "Irradiance: 12.3 W/m²"
