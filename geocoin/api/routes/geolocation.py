"""POST /api/v1/geolocation: samples from the device's position watch."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameViewResponse, PositionErrorRequest, PositionRequest, PositionResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.post("/geolocation", response_model=PositionResponse)
def push_position(
    body: PositionRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> PositionResponse:
    accepted, view = manager.push_position(body.lat, body.lng)
    return PositionResponse(accepted=accepted, view=GameViewResponse.from_view(view))


@router.post("/geolocation/error", response_model=PositionResponse)
def push_position_error(
    body: PositionErrorRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> PositionResponse:
    accepted, view = manager.push_position_error(body.reason)
    return PositionResponse(accepted=accepted, view=GameViewResponse.from_view(view))
