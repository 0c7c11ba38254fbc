"""
Tests for persistence — global store, device memory and telemetry ledger.
"""

import json
from pathlib import Path

from lwcpreview.adapters.telemetry import LedgerTelemetry
from lwcpreview.core.models.state import GlobalState
from lwcpreview.core.persistence.state_file import (
    GlobalStore,
    init_store,
    load_state,
    save_state,
)
from lwcpreview.core.persistence.telemetry_ledger import TelemetryEvent, TelemetryWriter
from lwcpreview.core.services.device_memory import DeviceMemory, device_key


class TestStateFile:
    """Tests for state file persistence."""

    def test_save_and_load(self, tmp_path: Path):
        path = tmp_path / "state" / "global_state.json"
        state = GlobalState()
        state.values["lastAndroidDevice"] = "Pixel_5"

        save_state(state, path)
        assert path.is_file()

        loaded = load_state(path)
        assert loaded.values == {"lastAndroidDevice": "Pixel_5"}

    def test_load_missing_returns_fresh(self, tmp_path: Path):
        state = load_state(tmp_path / "nonexistent.json")
        assert state.values == {}

    def test_load_corrupt_returns_fresh(self, tmp_path: Path):
        path = tmp_path / "corrupt.json"
        path.write_text("not json at all {{{")
        assert load_state(path).values == {}

    def test_save_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "state.json"
        save_state(GlobalState(), path)
        assert path.is_file()

    def test_atomic_write_no_temp_files(self, tmp_path: Path):
        path = tmp_path / "global_state.json"
        save_state(GlobalState(), path)
        save_state(GlobalState(), path)
        leftovers = [p for p in tmp_path.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_save_touches_updated_at(self, tmp_path: Path):
        path = tmp_path / "global_state.json"
        state = GlobalState()
        save_state(state, path)
        data = json.loads(path.read_text())
        assert data["updated_at"]


class TestGlobalStore:
    def test_get_default(self, store: GlobalStore):
        assert store.get("missing") == ""
        assert store.get("missing", "x") == "x"

    def test_update_persists(self, tmp_state_dir: Path):
        store = init_store(tmp_state_dir)
        store.update("key", "value")
        assert init_store(tmp_state_dir).get("key") == "value"

    def test_update_keeps_other_writers_values(self, tmp_state_dir: Path):
        first = init_store(tmp_state_dir)
        second = init_store(tmp_state_dir)
        first.update("a", "1")
        second.update("b", "2")
        reopened = init_store(tmp_state_dir)
        assert reopened.items() == {"a": "1", "b": "2"}

    def test_delete(self, store: GlobalStore):
        store.update("key", "value")
        assert store.delete("key") is True
        assert store.get("key") == ""
        assert store.delete("key") is False


class TestDeviceMemory:
    def test_key_naming(self):
        assert device_key("Android") == "lastAndroidDevice"
        assert device_key("iOS") == "lastiOSDevice"

    def test_set_and_get(self, store: GlobalStore):
        memory = DeviceMemory(store)
        memory.set("iOS", "iPhone 15")
        assert memory.get("iOS") == "iPhone 15"
        assert store.get("lastiOSDevice") == "iPhone 15"

    def test_platforms_are_independent(self, store: GlobalStore):
        memory = DeviceMemory(store)
        memory.set("Android", "Pixel_5")
        assert memory.get("iOS") == ""

    def test_value_stored_verbatim(self, store: GlobalStore):
        memory = DeviceMemory(store)
        memory.set("Android", "  odd name  ")
        assert memory.get("Android") == "  odd name  "

    def test_forget(self, store: GlobalStore):
        memory = DeviceMemory(store)
        memory.set("Android", "Pixel_5")
        assert memory.forget("Android") is True
        assert memory.get("Android") == ""
        assert memory.forget("Android") is False


class TestTelemetryLedger:
    def test_write_and_read(self, tmp_path: Path):
        writer = TelemetryWriter(path=tmp_path / "telemetry.ndjson")
        writer.write(TelemetryEvent(event_type="command", name="lwc_preview", duration_ms=12))
        writer.write(TelemetryEvent(event_type="exception", name="lwc_preview_error"))

        events = writer.read_all()
        assert [e.event_type for e in events] == ["command", "exception"]
        assert events[0].duration_ms == 12

    def test_state_dir_default_name(self, tmp_path: Path):
        writer = TelemetryWriter(state_dir=tmp_path)
        assert writer.path == tmp_path / "telemetry.ndjson"

    def test_read_empty(self, tmp_path: Path):
        assert TelemetryWriter(path=tmp_path / "none.ndjson").read_all() == []

    def test_skips_corrupt_lines(self, tmp_path: Path):
        path = tmp_path / "telemetry.ndjson"
        writer = TelemetryWriter(path=path)
        writer.write(TelemetryEvent(event_type="command", name="a"))
        with path.open("a") as f:
            f.write("{broken\n")
        writer.write(TelemetryEvent(event_type="command", name="b"))
        assert [e.name for e in writer.read_all()] == ["a", "b"]

    def test_read_recent(self, tmp_path: Path):
        writer = TelemetryWriter(path=tmp_path / "telemetry.ndjson")
        for i in range(5):
            writer.write(TelemetryEvent(event_type="command", name=f"e{i}"))
        assert [e.name for e in writer.read_recent(2)] == ["e3", "e4"]


class TestLedgerTelemetry:
    def test_records_events(self, tmp_path: Path):
        writer = TelemetryWriter(state_dir=tmp_path)
        sink = LedgerTelemetry(writer)
        sink.send_command_event("lwc_preview", 40, {"platform": "android"})
        sink.send_exception("lwc_preview_error", "boom", "LaunchFailure")

        command, exception = writer.read_all()
        assert command.properties == {"platform": "android"}
        assert exception.error_class == "LaunchFailure"
        assert exception.message == "boom"

    def test_disabled_writes_nothing(self, tmp_path: Path):
        writer = TelemetryWriter(state_dir=tmp_path)
        sink = LedgerTelemetry(writer, enabled=False)
        sink.send_command_event("lwc_preview")
        assert not writer.path.exists()
