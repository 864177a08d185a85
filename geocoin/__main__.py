"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``          → Launch the FastAPI gameplay server
  - ``python -m geocoin play``     → Headless scripted walk (no server)
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

_STEP_KEYS = {"N": "NORTH", "E": "EAST", "S": "SOUTH", "W": "WEST"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic Geospatial Coin Caches")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI gameplay server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--store", type=str, default="geocoin_save.json")
    srv.add_argument("--radius", type=int, default=8)
    srv.add_argument("--metric", type=str, default="chebyshev", choices=["chebyshev", "euclidean"])
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless mode ---
    play = sub.add_parser("play", help="Walk a scripted path headlessly")
    play.add_argument("--moves", type=str, default="NNNNEEEESSSSWWWW", help="Steps as N/E/S/W letters")
    play.add_argument("--collect", action="store_true", help="Collect every visible cache after each step")
    play.add_argument("--store", type=str, default=None, help="Snapshot file to resume from and save to")
    play.add_argument("--radius", type=int, default=8)
    play.add_argument("--metric", type=str, default="chebyshev", choices=["chebyshev", "euclidean"])
    play.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig
    from geocoin.core.enums import RadiusMetric

    config = GameConfig(
        store_path=args.store,
        neighborhood_size=args.radius,
        radius_metric=RadiusMetric(args.metric),
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_play(args: argparse.Namespace) -> None:
    from geocoin.config import GameConfig
    from geocoin.core.enums import Direction, RadiusMetric
    from geocoin.engine.persistence import FileSnapshotStore
    from geocoin.engine.session import GameSession
    from geocoin.utils.logging import setup_logging

    config = GameConfig(
        neighborhood_size=args.radius,
        radius_metric=RadiusMetric(args.metric),
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    store = FileSnapshotStore(args.store) if args.store else None
    session = GameSession(config, store=store)
    view = session.start()
    logger.info("Starting at cell %s with %d caches in view", view.cell, len(view.caches))

    for key in args.moves.upper():
        name = _STEP_KEYS.get(key)
        if name is None:
            logger.warning("Skipping unknown step %r", key)
            continue
        delta = session.step(Direction[name])
        if args.collect:
            for cache_view in session.view().caches:
                session.collect(cache_view.cell)
        logger.info(
            "%-5s -> %s  spawned=%d restored=%d hidden=%d  points=%d",
            name, session.world.player_cell, len(delta.spawned), len(delta.restored),
            len(delta.hidden), session.world.points,
        )

    view = session.view()
    logger.info(
        "%s %d caches known, %d coins in the world.",
        view.status, len(session.world.registry), session.world.total_coins(),
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "play":
        _run_play(args)


if __name__ == "__main__":
    main()
