"""POST /api/v1/move: manual movement intents."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameViewResponse, MoveRequest
from geocoin.api.session_manager import SessionManager
from geocoin.core.enums import Direction

router = APIRouter()

_DIRECTIONS = {d.name.lower(): d for d in Direction}


@router.post("/move", response_model=GameViewResponse)
def move(
    body: MoveRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> GameViewResponse:
    try:
        view = manager.move(body.d_lat, body.d_lng)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return GameViewResponse.from_view(view)


@router.post("/move/{direction}", response_model=GameViewResponse)
def step(
    direction: str,
    manager: SessionManager = Depends(get_session_manager),
) -> GameViewResponse:
    resolved = _DIRECTIONS.get(direction.lower())
    if resolved is None:
        raise HTTPException(status_code=404, detail=f"Unknown direction {direction!r}.")
    return GameViewResponse.from_view(manager.step(resolved))
