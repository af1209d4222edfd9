from __future__ import annotations

from collections import Counter
from enum import Enum, IntEnum
from typing import Iterable

from pydantic import BaseModel, ConfigDict


class Suit(str, Enum):
    man = "m"
    pin = "p"
    sou = "s"


class TileKind(IntEnum):
    """The 34 distinct tiles. Codes leave a gap between suits so that
    ``code + 1`` never crosses from one suit into the next."""

    M1 = 1
    M2 = 2
    M3 = 3
    M4 = 4
    M5 = 5
    M6 = 6
    M7 = 7
    M8 = 8
    M9 = 9
    P1 = 11
    P2 = 12
    P3 = 13
    P4 = 14
    P5 = 15
    P6 = 16
    P7 = 17
    P8 = 18
    P9 = 19
    S1 = 21
    S2 = 22
    S3 = 23
    S4 = 24
    S5 = 25
    S6 = 26
    S7 = 27
    S8 = 28
    S9 = 29
    EAST = 31
    SOUTH = 32
    WEST = 33
    NORTH = 34
    WHITE = 35
    GREEN = 36
    RED = 37

    def nth(self, offset: int) -> TileKind:
        try:
            return TileKind(self.value + offset)
        except ValueError:
            raise ValueError(f"{self.name} has no tile at offset {offset}") from None

    @property
    def is_suhai(self) -> bool:
        return self.value < 30

    @property
    def is_jihai(self) -> bool:
        return self.value > 30

    @property
    def is_kaze(self) -> bool:
        return TileKind.EAST <= self <= TileKind.NORTH

    @property
    def is_sangen(self) -> bool:
        return self >= TileKind.WHITE

    @property
    def is_chunchan(self) -> bool:
        return self.is_suhai and 2 <= self.value % 10 <= 8

    @property
    def is_routou(self) -> bool:
        return self.is_suhai and not self.is_chunchan

    @property
    def is_yaochu(self) -> bool:
        return not self.is_chunchan

    @property
    def number(self) -> int:
        if not self.is_suhai:
            raise ValueError(f"{self.name} is an honor tile and has no number")
        return self.value % 10

    @property
    def suit(self) -> Suit:
        if not self.is_suhai:
            raise ValueError(f"{self.name} is an honor tile and has no suit")
        return (Suit.man, Suit.pin, Suit.sou)[self.value // 10]

    @classmethod
    def of(cls, suit: Suit, number: int) -> TileKind:
        base = {Suit.man: 0, Suit.pin: 10, Suit.sou: 20}[suit]
        return cls(base + number)


class Wind(str, Enum):
    E = "E"
    S = "S"
    W = "W"
    N = "N"

    @property
    def kind(self) -> TileKind:
        return WIND_KINDS[self]


class Tile(BaseModel):
    kind: TileKind
    red: bool = False

    model_config = ConfigDict(frozen=True)


JIHAI_KINDS: tuple[TileKind, ...] = tuple(k for k in TileKind if k.is_jihai)
YAOCHU_KINDS: tuple[TileKind, ...] = tuple(k for k in TileKind if k.is_yaochu)
DRAGON_KINDS: tuple[TileKind, ...] = (TileKind.WHITE, TileKind.GREEN, TileKind.RED)
WIND_ORDER: tuple[TileKind, ...] = (TileKind.EAST, TileKind.SOUTH, TileKind.WEST, TileKind.NORTH)
GREEN_KINDS = frozenset({TileKind.S2, TileKind.S3, TileKind.S4, TileKind.S6, TileKind.S8, TileKind.GREEN})
WIND_KINDS = {
    Wind.E: TileKind.EAST,
    Wind.S: TileKind.SOUTH,
    Wind.W: TileKind.WEST,
    Wind.N: TileKind.NORTH,
}


def _kind_of(tile: Tile | TileKind) -> TileKind:
    return tile.kind if isinstance(tile, Tile) else tile


def count_tiles(tiles: Iterable[Tile | TileKind]) -> Counter[TileKind]:
    return Counter(_kind_of(t) for t in tiles)


def next_dora_kind(indicator: TileKind) -> TileKind:
    """Kind pointed at by a dora indicator."""
    if indicator.is_suhai:
        return indicator.nth(-8) if indicator.number == 9 else indicator.nth(1)
    if indicator.is_kaze:
        order = WIND_ORDER
    else:
        order = DRAGON_KINDS
    return order[(order.index(indicator) + 1) % len(order)]
