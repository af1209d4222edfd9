"""Text notation for tiles.

Suited tiles are written as rank digits followed by a suit letter, either
grouped (``123m``) or one by one (``1m2m3m``). An uppercase suit letter marks
red tiles (``5M``). Honors use the ideographs 東南西北白発中, and the Unicode
mahjong tile characters (U+1F000 - U+1F021) are accepted as well.
"""

from __future__ import annotations

from typing import Iterable

from mjtools.errors import NotationError
from mjtools.schemas import AgariContext, ContextInput, Hand, HandInput, Meld, MeldType
from mjtools.tiles import Suit, Tile, TileKind

HONOR_CHARS = {
    "東": TileKind.EAST,
    "南": TileKind.SOUTH,
    "西": TileKind.WEST,
    "北": TileKind.NORTH,
    "白": TileKind.WHITE,
    "発": TileKind.GREEN,
    "發": TileKind.GREEN,
    "中": TileKind.RED,
}
HONOR_NAMES = {
    TileKind.EAST: "東",
    TileKind.SOUTH: "南",
    TileKind.WEST: "西",
    TileKind.NORTH: "北",
    TileKind.WHITE: "白",
    TileKind.GREEN: "発",
    TileKind.RED: "中",
}


def _unicode_table() -> dict[str, TileKind]:
    table = {
        "\U0001F000": TileKind.EAST,
        "\U0001F001": TileKind.SOUTH,
        "\U0001F002": TileKind.WEST,
        "\U0001F003": TileKind.NORTH,
        "\U0001F004": TileKind.RED,
        "\U0001F005": TileKind.GREEN,
        "\U0001F006": TileKind.WHITE,
    }
    for offset, suit in ((0x1F007, Suit.man), (0x1F010, Suit.sou), (0x1F019, Suit.pin)):
        for n in range(1, 10):
            table[chr(offset + n - 1)] = TileKind.of(suit, n)
    return table


UNICODE_TILES = _unicode_table()


def parse_tiles(text: str) -> list[Tile]:
    tiles: list[Tile] = []
    pending: list[int] = []
    for ch in text:
        if ch.isspace() or ch == ",":
            continue
        if ch in "123456789":
            pending.append(int(ch))
            continue
        if ch.lower() in {"m", "p", "s"}:
            if not pending:
                raise NotationError(f"Suit letter '{ch}' without rank digits in '{text}'")
            suit = Suit(ch.lower())
            tiles.extend(Tile(kind=TileKind.of(suit, n), red=ch.isupper()) for n in pending)
            pending.clear()
            continue
        if pending:
            raise NotationError(f"Rank digits must be followed by m, p or s in '{text}'")
        kind = HONOR_CHARS.get(ch) or UNICODE_TILES.get(ch)
        if kind is None:
            raise NotationError(f"Invalid tile character: {ch!r}")
        tiles.append(Tile(kind=kind))
    if pending:
        raise NotationError(f"Missing suit letter at the end of '{text}'")
    return tiles


def parse_kinds(text: str) -> list[TileKind]:
    return [t.kind for t in parse_tiles(text)]


def parse_tile(text: str) -> Tile:
    tiles = parse_tiles(text)
    if len(tiles) != 1:
        raise NotationError(f"Exactly one tile expected, got {len(tiles)} in '{text}'")
    return tiles[0]


def format_tiles(tiles: Iterable[Tile | TileKind]) -> str:
    parts: list[str] = []
    digits: list[str] = []
    group: tuple[Suit, bool] | None = None

    def flush() -> None:
        if group is not None and digits:
            letter = group[0].value
            parts.append("".join(digits) + (letter.upper() if group[1] else letter))
        digits.clear()

    for tile in tiles:
        if isinstance(tile, Tile):
            kind, red = tile.kind, tile.red
        else:
            kind, red = tile, False
        if kind.is_jihai:
            flush()
            group = None
            parts.append(HONOR_NAMES[kind])
            continue
        key = (kind.suit, red)
        if key != group:
            flush()
            group = key
        digits.append(str(kind.number))
    flush()
    return "".join(parts)


def parse_melds(meld_type: MeldType, text: str) -> list[Meld]:
    """Split ``text`` into consecutive melds of ``meld_type`` (``123m456p`` -> two chi)."""
    tiles = parse_tiles(text)
    size = 3 if meld_type in {MeldType.chi, MeldType.pon} else 4
    if not tiles or len(tiles) % size:
        raise NotationError(f"{meld_type.value} melds need a multiple of {size} tiles, got {len(tiles)} in '{text}'")
    return [Meld(type=meld_type, tiles=tiles[i : i + size]) for i in range(0, len(tiles), size)]


def build_agari_context(hand: HandInput, context: ContextInput) -> AgariContext:
    melds: list[Meld] = []
    for meld in hand.melds:
        melds.extend(parse_melds(meld.type, meld.tiles))
    return AgariContext(
        win_tile=parse_tile(hand.win_tile),
        hand=Hand(tiles=parse_tiles(hand.closed_tiles), melds=melds),
        dora_indicators=parse_tiles(context.dora_indicators),
        ura_dora_indicators=parse_tiles(context.ura_dora_indicators),
        **context.model_dump(exclude={"dora_indicators", "ura_dora_indicators"}),
    )
