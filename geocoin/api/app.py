"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from geocoin.api.dependencies import set_session_manager
from geocoin.api.routes import api_router
from geocoin.api.session_manager import SessionManager
from geocoin.config import GameConfig
from geocoin.engine.persistence import SnapshotStore
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"
STATIC_DIR = FRONTEND_DIR / "dist"


def create_app(config: GameConfig | None = None, store: SnapshotStore | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = SessionManager(_config, store=store)
        set_session_manager(manager)
        manager.start()
        logger.info("API server started: session loaded.")
        yield
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="GeoCoin Cache Engine",
        description=(
            "Deterministic geospatial coin caches: gameplay API for a map client.\n\n"
            "## API Groups\n\n"
            "- **State**: Current player view and event feed\n"
            "- **Movement**: Manual player movement\n"
            "- **Caches**: Collect from and deposit into visible caches\n"
            "- **Geolocation**: Position samples from a device watch\n"
            "- **Control**: Reset and location tracking toggle\n"
            "- **Config**: Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Serve a map frontend when one has been built
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="frontend")

    return app
