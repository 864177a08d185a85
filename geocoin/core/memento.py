"""Schema-checked serialization of coin ledgers.

A memento is a JSON array of ``{"cell": {"i": int, "j": int}, "serial": int}``
records, in ledger order. Decoding validates every record and raises
``CorruptMemento`` instead of accepting malformed data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from geocoin.core.errors import CorruptMemento
from geocoin.core.models import Coin

if TYPE_CHECKING:
    from geocoin.core.grid import CellIndex


class CellRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    i: StrictInt
    j: StrictInt


class CoinRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cell: CellRecord
    serial: StrictInt = Field(ge=0)

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinRecord:
        return cls(cell=CellRecord(i=coin.origin.i, j=coin.origin.j), serial=coin.serial)

    def to_coin(self, cells: CellIndex) -> Coin:
        return Coin(cells.cell(self.cell.i, self.cell.j), self.serial)


_LEDGER = TypeAdapter(list[CoinRecord])


def encode_ledger(coins: Iterable[Coin]) -> str:
    records = [CoinRecord.from_coin(c) for c in coins]
    return _LEDGER.dump_json(records).decode("utf-8")


def decode_ledger(payload: str | bytes, cells: CellIndex) -> list[Coin]:
    """Parse *payload* back into coins with canonical cells.

    Raises ``CorruptMemento`` for non-JSON input, records of the wrong shape,
    negative or non-integer serials, and a coin repeated within the ledger.
    """
    if not isinstance(payload, (str, bytes)):
        raise CorruptMemento(f"memento must be text, got {type(payload).__name__}")
    try:
        records = _LEDGER.validate_json(payload)
    except ValidationError as exc:
        raise CorruptMemento(f"invalid memento: {exc.error_count()} error(s)") from exc

    coins = [r.to_coin(cells) for r in records]
    seen: set[tuple[int, int, int]] = set()
    for coin in coins:
        if coin.key in seen:
            raise CorruptMemento(f"duplicate coin {coin.label} in memento")
        seen.add(coin.key)
    return coins
