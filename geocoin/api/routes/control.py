"""POST /api/v1/control/{action}: session controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameViewResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"
    tracking = "tracking"


@router.post("/control/{action}", response_model=GameViewResponse)
def control(
    action: ControlAction,
    manager: SessionManager = Depends(get_session_manager),
) -> GameViewResponse:
    match action:
        case ControlAction.reset:
            view = manager.reset()
        case ControlAction.tracking:
            view = manager.toggle_tracking()
    return GameViewResponse.from_view(view)
