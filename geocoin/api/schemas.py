"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from geocoin.core.models import Coin
from geocoin.core.view import GameView
from geocoin.utils.event_log import GameEvent


# --- Game view ---

class CellSchema(BaseModel):
    i: int
    j: int


class CoinSchema(BaseModel):
    cell: CellSchema
    serial: int
    label: str

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinSchema:
        return cls(cell=CellSchema(i=coin.origin.i, j=coin.origin.j), serial=coin.serial, label=coin.label)


class CacheSchema(BaseModel):
    cell: CellSchema
    lat: float
    lng: float
    coins: list[CoinSchema] = Field(default_factory=list)


class GameViewResponse(BaseModel):
    lat: float
    lng: float
    cell: CellSchema
    points: int
    status: str
    tracking: bool = False
    inventory: list[CoinSchema] = Field(default_factory=list)
    history: list[tuple[float, float]] = Field(default_factory=list)
    caches: list[CacheSchema] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: GameView) -> GameViewResponse:
        return cls(
            lat=view.position.lat,
            lng=view.position.lng,
            cell=CellSchema(i=view.cell.i, j=view.cell.j),
            points=view.points,
            status=view.status,
            tracking=view.tracking,
            inventory=[CoinSchema.from_coin(c) for c in view.inventory],
            history=[(p.lat, p.lng) for p in view.history],
            caches=[
                CacheSchema(
                    cell=CellSchema(i=cv.cell.i, j=cv.cell.j),
                    lat=cv.anchor.lat,
                    lng=cv.anchor.lng,
                    coins=[CoinSchema.from_coin(c) for c in cv.coins],
                )
                for cv in view.caches
            ],
        )


class TransferResponse(BaseModel):
    transferred: int
    view: GameViewResponse


# --- Events ---

class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cells: list[CellSchema] = Field(default_factory=list)

    @classmethod
    def from_event(cls, event: GameEvent) -> EventSchema:
        return cls(
            seq=event.seq,
            category=event.category,
            message=event.message,
            cells=[CellSchema(i=c.i, j=c.j) for c in event.cells],
        )


# --- Requests ---

class MoveRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    d_lat: float = Field(0.0, description="Latitude step in tiles")
    d_lng: float = Field(0.0, description="Longitude step in tiles")


class PositionRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class PositionErrorRequest(BaseModel):
    reason: str = "position unavailable"


class PositionResponse(BaseModel):
    accepted: bool
    view: GameViewResponse


# --- Config ---

class GameConfigResponse(BaseModel):
    origin_lat: float
    origin_lng: float
    tile_degrees: float
    neighborhood_size: int
    radius_metric: str
    spawn_probability: float
    max_coins: int
    history_limit: int
    persist_pristine_caches: bool
