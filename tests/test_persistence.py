"""Tests for the snapshot stores and the geolocation watch."""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.snapshot import Snapshot
from geocoin.core.world_state import World
from geocoin.engine.geolocation import PositionWatch, PushGeolocation
from geocoin.engine.persistence import FileSnapshotStore, MemorySnapshotStore


def _snapshot() -> Snapshot:
    world = World(GameConfig())
    world.spawn_cache(world.cells.cell(1, 2))
    world.collect(world.cells.cell(1, 2))
    world.move_by(1, 0)
    return Snapshot.from_world(world)


class TestFileSnapshotStore:
    def test_missing_file_loads_none(self, tmp_path):
        assert FileSnapshotStore(tmp_path / "save.json").load() is None

    def test_save_load_round_trip(self, tmp_path):
        store = FileSnapshotStore(tmp_path / "nested" / "save.json")
        snap = _snapshot()
        store.save(snap)
        assert store.path.exists()
        assert store.load() == snap

    def test_clear(self, tmp_path):
        store = FileSnapshotStore(tmp_path / "save.json")
        store.save(_snapshot())
        store.clear()
        assert not store.path.exists()
        store.clear()

    def test_corrupt_file_loads_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text(json.dumps({"playerLat": "x"}), encoding="utf-8")
        assert FileSnapshotStore(path).load() is None

    def test_undecodable_file_loads_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_bytes(b'{"playerLat": \xff\xfe}')
        assert FileSnapshotStore(path).load() is None

    def test_non_finite_values_load_none(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text('{"playerLat": NaN, "playerLng": Infinity}', encoding="utf-8")
        assert FileSnapshotStore(path).load() is None

    def test_stores_are_slotted(self, tmp_path):
        assert not hasattr(FileSnapshotStore(tmp_path / "save.json"), "__dict__")
        assert not hasattr(MemorySnapshotStore(), "__dict__")

    def test_write_failure_is_swallowed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = FileSnapshotStore(blocker / "save.json")
        store.save(_snapshot())
        assert store.load() is None


class TestMemorySnapshotStore:
    def test_shared_backing_dict(self):
        data: dict[str, str] = {}
        MemorySnapshotStore(data).save(_snapshot())
        assert MemorySnapshotStore(data).load() == _snapshot()

    def test_keys_are_isolated(self):
        data: dict[str, str] = {}
        MemorySnapshotStore(data, key="a").save(_snapshot())
        assert MemorySnapshotStore(data, key="b").load() is None


class TestGeolocationWatch:
    def test_cancelled_watch_never_fires(self):
        seen = []
        watch = PositionWatch(1, lambda lat, lng: seen.append((lat, lng)), seen.append)
        assert watch.deliver(1.0, 2.0)
        watch.cancel()
        assert not watch.deliver(3.0, 4.0)
        assert not watch.fail("late")
        assert seen == [(1.0, 2.0)]

    def test_new_watch_replaces_old(self):
        geo = PushGeolocation()
        first_seen, second_seen = [], []
        first = geo.watch(lambda lat, lng: first_seen.append(lat), lambda r: None)
        second = geo.watch(lambda lat, lng: second_seen.append(lat), lambda r: None)
        assert not first.active
        assert second.watch_id == first.watch_id + 1
        geo.push(5.0, 0.0)
        assert first_seen == [] and second_seen == [5.0]
