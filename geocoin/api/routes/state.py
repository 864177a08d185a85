"""GET /api/v1/state and /events: the current view and the event feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import EventSchema, GameViewResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.get("/state", response_model=GameViewResponse)
def get_state(manager: SessionManager = Depends(get_session_manager)) -> GameViewResponse:
    return GameViewResponse.from_view(manager.view())


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since: int = Query(0, ge=0, description="Only return events with seq >= since"),
    manager: SessionManager = Depends(get_session_manager),
) -> list[EventSchema]:
    return [EventSchema.from_event(e) for e in manager.events_since(since)]
