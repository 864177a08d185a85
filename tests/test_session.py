"""Tests for the GameSession: intents, persistence writes and tracking."""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.enums import Direction
from geocoin.engine.geolocation import PushGeolocation
from geocoin.engine.persistence import MemorySnapshotStore
from geocoin.engine.session import GameSession
from geocoin.systems.rng import SpawnOracle
from tests.helpers.fake_luck import grid_luck

CACHE_CELLS = [(0, 0), (2, 3), (-4, 1), (30, 0)]


def _config(**overrides) -> GameConfig:
    return GameConfig(origin_lat=0.00005, origin_lng=0.00005, **overrides)


def _session(store=None, geolocation=None, **overrides) -> GameSession:
    cfg = _config(**overrides)
    oracle = SpawnOracle(cfg, luck=grid_luck(CACHE_CELLS))
    return GameSession(cfg, store=store, geolocation=geolocation, oracle=oracle)


class FailingStore(MemorySnapshotStore):
    """Store whose writes always fail with an I/O error."""

    def _write(self, blob: str) -> None:
        raise OSError("disk full")


class TestStartup:
    def test_fresh_start_loads_once_without_saving(self):
        store = MemorySnapshotStore()
        session = _session(store)
        view = session.start()
        session.start()
        assert store.loads == 1
        assert store.saves == 0
        assert view.cell == session.cell(0, 0)
        assert {(c.cell.i, c.cell.j) for c in view.caches} == {(0, 0), (2, 3), (-4, 1)}
        assert view.status == "No points accumulated."

    def test_resume_from_store(self):
        data: dict[str, str] = {}
        first = _session(MemorySnapshotStore(data))
        first.start()
        first.collect(first.cell(0, 0))
        first.move(2, 0)
        held = [c.key for c in first.world.inventory]

        second = _session(MemorySnapshotStore(data))
        view = second.start()
        assert [c.key for c in view.inventory] == held
        assert view.position == first.world.position
        assert second.world.registry.get(second.cell(0, 0)).coins == []
        assert second.last_restore is not None and second.last_restore.clean

    def test_unreadable_blob_starts_fresh(self):
        store = MemorySnapshotStore({"geocoin": "{not json"})
        session = _session(store)
        view = session.start()
        assert session.last_restore is None
        assert view.inventory == ()

    def test_non_finite_blob_starts_fresh(self):
        blob = '{"playerLat": NaN, "playerLng": 0.0, "playerCoins": [], "locationHistory": [], "caches": []}'
        store = MemorySnapshotStore({"geocoin": blob})
        session = _session(store)
        view = session.start()
        assert session.last_restore is None
        assert view.position == session.world.origin


class TestPersistenceWrites:
    def test_every_intent_saves(self):
        store = MemorySnapshotStore()
        session = _session(store)
        session.start()
        session.move(1, 0)
        session.step(Direction.SOUTH)
        session.collect(session.cell(0, 0))
        session.deposit(session.cell(2, 3))
        session.collect(session.cell(9, 9))
        assert store.saves == 5
        saved = json.loads(store.blob)
        assert saved["playerCoins"] == []

    def test_reset_clears_then_saves_origin(self):
        store = MemorySnapshotStore()
        session = _session(store)
        session.start()
        session.collect(session.cell(0, 0))
        session.move(30, 0)
        view = session.reset()
        assert view.inventory == ()
        assert view.position == session.world.origin
        assert len(view.history) == 1
        assert session.world.registry.get(session.cell(0, 0)).coins != []
        saved = json.loads(store.blob)
        assert saved["playerCoins"] == []
        assert len(saved["caches"]) == 3

    def test_failing_store_keeps_game_playable(self):
        session = _session(FailingStore())
        session.start()
        total = session.world.total_coins()
        session.collect(session.cell(0, 0))
        session.deposit(session.cell(2, 3))
        session.move(1, 1)
        assert session.world.total_coins() == total
        assert session.view().points == 0


class TestTransfersThroughSession:
    def test_collect_and_deposit_events(self):
        session = _session()
        session.start()
        coins = session.collect(session.cell(0, 0))
        assert len(coins) == 5
        assert session.view().status == "5 points accumulated."
        assert session.deposit(session.cell(0, 0)) == coins
        categories = [e.category for e in session.events.since(0)]
        assert "collect" in categories and "deposit" in categories

    def test_single_coin_intents(self):
        session = _session()
        session.start()
        cell = session.cell(2, 3)
        coin = session.world.registry.get(cell).coins[0]
        assert session.collect_coin(cell, coin)
        assert session.deposit_coin(session.cell(0, 0)) is coin

    def test_view_is_a_copy(self):
        session = _session()
        view = session.start()
        session.collect(session.cell(0, 0))
        home = next(c for c in view.caches if c.cell == session.cell(0, 0))
        assert len(home.coins) == 5
        assert view.inventory == ()


class TestTracking:
    def test_positions_move_player(self):
        geo = PushGeolocation()
        session = _session(geolocation=geo)
        session.start()
        assert session.toggle_tracking() is True
        assert session.tracking
        assert geo.push(0.00305, 0.00005)
        assert session.world.player_cell == session.cell(30, 0)
        assert session.cell(30, 0) in session.world.visible

    def test_toggle_off_cancels_watch(self):
        geo = PushGeolocation()
        session = _session(geolocation=geo)
        session.start()
        session.toggle_tracking()
        assert session.toggle_tracking() is False
        before = session.world.position
        assert not geo.push(0.00305, 0.00005)
        assert session.world.position == before

    def test_error_stops_tracking_and_manual_moves_still_work(self):
        geo = PushGeolocation()
        session = _session(geolocation=geo)
        session.start()
        session.toggle_tracking()
        assert geo.push_error("permission denied")
        assert not session.tracking
        assert not geo.push(0.00305, 0.00005)
        session.move(1, 0)
        assert session.world.player_cell == session.cell(1, 0)

    def test_no_provider(self):
        session = _session()
        session.start()
        assert session.toggle_tracking() is False
        assert not session.view().tracking
