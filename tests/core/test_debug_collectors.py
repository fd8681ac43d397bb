import datetime as dt
import json

from solarmap.core.debug import JsonlDebugWriter, ListDebugCollector, NullDebugCollector, ScopedDebugCollector


def test_list_collector_records_events():
    collector = ListDebugCollector()
    collector.emit("stage1", {"b": 2, "a": 1}, ts="2025-01-01T00:00:00Z", site="site1")
    assert len(collector.events) == 1
    event = collector.events[0]
    assert event["stage"] == "stage1"
    assert event["site"] == "site1"
    # payload should be key-sorted for determinism
    assert list(event["payload"].keys()) == ["a", "b"]


def test_jsonl_writer(tmp_path):
    path = tmp_path / "debug.jsonl"
    writer = JsonlDebugWriter(path)
    writer.emit("stage1", {"z": 1, "y": {"b": 1, "a": 2}}, ts=dt.datetime(2025, 1, 1), site=None)
    writer.emit("stage2", {"b": (2, 1)}, ts=2, site="s")
    writer.close()

    events = [json.loads(line) for line in path.read_text().splitlines()]
    assert len(events) == 2
    assert events[0]["ts"] == "2025-01-01T00:00:00"
    assert list(events[0]["payload"]["y"].keys()) == ["a", "b"]
    assert events[1]["payload"]["b"] == [2, 1]


def test_scoped_collector_injects_site():
    inner = ListDebugCollector()
    scoped = ScopedDebugCollector(inner, site="Delhi")
    scoped.emit("x", {}, ts=0)
    scoped.emit("y", {}, ts=0, site="Override")
    assert [e["site"] for e in inner.events] == ["Delhi", "Override"]


def test_null_collector_noop():
    NullDebugCollector().emit("stage", {"x": 1}, ts=0)
