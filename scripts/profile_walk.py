#!/usr/bin/env python3
"""Random-walk profiler for the cache engine.

Usage:
    python scripts/profile_walk.py --moves 2000 --seed 42
    python scripts/profile_walk.py --moves 500 --jump 20 --radius 12

Reports:
    - Per-move timing statistics (min, max, mean, p50, p95, p99)
    - Per-phase breakdown (move + visibility, transfer, snapshot)
    - Registry growth and snapshot size at the end of the walk
"""

from __future__ import annotations

import argparse
import json
import os
import random
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.snapshot import Snapshot
from geocoin.engine.session import GameSession


def _run_walk(cfg: GameConfig, num_moves: int, jump: int, seed: int) -> dict:
    """Walk randomly, collecting and depositing, and time each phase."""
    session = GameSession(cfg)
    session.start()
    walker = random.Random(seed)

    move_times: list[float] = []
    phase_times: list[tuple[float, float, float]] = []
    registry_sizes: list[int] = []

    for _ in range(num_moves):
        t_start = time.perf_counter()

        # --- Phase 1: Move + visibility ---
        step = jump if walker.random() < 0.05 else 1
        session.move(walker.randint(-step, step), walker.randint(-step, step))
        t1 = time.perf_counter()

        # --- Phase 2: Transfer ---
        caches = session.view().caches
        if caches:
            cell = walker.choice(caches).cell
            if walker.random() < 0.5:
                session.collect(cell)
            else:
                session.deposit(cell)
        t2 = time.perf_counter()

        # --- Phase 3: Snapshot ---
        Snapshot.from_world(session.world).to_dict()
        t3 = time.perf_counter()

        move_times.append(t3 - t_start)
        phase_times.append((t1 - t_start, t2 - t1, t3 - t2))
        registry_sizes.append(len(session.world.registry))

    blob = json.dumps(Snapshot.from_world(session.world).to_dict())
    return {
        "move_times": move_times,
        "phase_times": phase_times,
        "registry_sizes": registry_sizes,
        "snapshot_bytes": len(blob),
        "total_coins": session.world.total_coins(),
        "duplicates": len(session.world.duplicate_coins()),
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    move_times = data["move_times"]
    if not move_times:
        print("No moves executed.")
        return

    ms = [t * 1000 for t in move_times]
    print("\n" + "=" * 70)
    print("  CACHE ENGINE WALK REPORT")
    print("=" * 70)
    print(f"  Moves:            {len(ms)}")
    print(f"  Wall time:        {wall_time:.2f}s ({len(ms) / wall_time:.1f} moves/s)")
    print(f"  Per move (ms):    min={min(ms):.3f} mean={statistics.mean(ms):.3f} max={max(ms):.3f}")
    print(f"                    p50={_percentile(ms, 50):.3f} p95={_percentile(ms, 95):.3f} p99={_percentile(ms, 99):.3f}")

    names = ("move+visibility", "transfer", "snapshot")
    for idx, name in enumerate(names):
        phase_ms = [p[idx] * 1000 for p in data["phase_times"]]
        print(f"  {name:<18}mean={statistics.mean(phase_ms):.3f}ms  p95={_percentile(phase_ms, 95):.3f}ms")

    print(f"  Caches known:     {data['registry_sizes'][-1]}")
    print(f"  Snapshot size:    {data['snapshot_bytes']:,} bytes")
    print(f"  Coins in world:   {data['total_coins']} (duplicates: {data['duplicates']})")
    print("=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile a random walk through the cache engine")
    parser.add_argument("--moves", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--jump", type=int, default=20, help="Occasional long-jump distance in tiles")
    parser.add_argument("--radius", type=int, default=8)
    parser.add_argument("--compact", action="store_true", help="Omit untouched caches from snapshots")
    args = parser.parse_args()

    cfg = GameConfig(
        neighborhood_size=args.radius,
        persist_pristine_caches=not args.compact,
        log_level="WARNING",
    )
    t0 = time.perf_counter()
    data = _run_walk(cfg, args.moves, args.jump, args.seed)
    _print_report(data, time.perf_counter() - t0)


if __name__ == "__main__":
    main()
