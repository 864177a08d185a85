"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameConfigResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: SessionManager = Depends(get_session_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        origin_lat=cfg.origin_lat,
        origin_lng=cfg.origin_lng,
        tile_degrees=cfg.tile_degrees,
        neighborhood_size=cfg.neighborhood_size,
        radius_metric=cfg.radius_metric.value,
        spawn_probability=cfg.spawn_probability,
        max_coins=cfg.max_coins,
        history_limit=cfg.history_limit,
        persist_pristine_caches=cfg.persist_pristine_caches,
    )
