"""POST /api/v1/caches/{i}/{j}/{collect,deposit}: coin transfers."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameViewResponse, TransferResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.post("/caches/{i}/{j}/collect", response_model=TransferResponse)
def collect(
    i: int,
    j: int,
    manager: SessionManager = Depends(get_session_manager),
) -> TransferResponse:
    moved, view = manager.collect(i, j)
    return TransferResponse(transferred=moved, view=GameViewResponse.from_view(view))


@router.post("/caches/{i}/{j}/deposit", response_model=TransferResponse)
def deposit(
    i: int,
    j: int,
    manager: SessionManager = Depends(get_session_manager),
) -> TransferResponse:
    moved, view = manager.deposit(i, j)
    return TransferResponse(transferred=moved, view=GameViewResponse.from_view(view))
