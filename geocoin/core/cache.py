"""Cache: a cell-anchored, ordered coin ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from geocoin.core.memento import decode_ledger, encode_ledger
from geocoin.core.models import Cell, Coin

if TYPE_CHECKING:
    from geocoin.core.grid import CellIndex


@dataclass(slots=True)
class Cache:
    """Mutable coin container anchored to one cell.

    The ledger is only changed by transfers and memento restore; a cache is
    never re-randomized after creation.
    """

    cell: Cell
    coins: list[Coin] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.coins)

    @property
    def is_empty(self) -> bool:
        return not self.coins

    def take_all(self) -> list[Coin]:
        taken = self.coins
        self.coins = []
        return taken

    def take(self, coin: Coin) -> bool:
        if coin in self.coins:
            self.coins.remove(coin)
            return True
        return False

    def put_all(self, coins: list[Coin]) -> None:
        self.coins.extend(coins)

    # -- mementos --

    def to_memento(self) -> str:
        return encode_ledger(self.coins)

    def from_memento(self, memento: str, cells: CellIndex) -> None:
        """Replace the ledger with the decoded memento.

        Raises ``CorruptMemento`` and leaves the ledger untouched when the
        payload does not decode.
        """
        self.coins = decode_ledger(memento, cells)
