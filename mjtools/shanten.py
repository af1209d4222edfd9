"""Shanten numbers and effective tiles.

-1 means the hand is complete, 0 means tenpai (one tile away).
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Mapping

from mjtools.errors import InvalidTileCountError
from mjtools.partition_table import get_table
from mjtools.schemas import ShantenVariant
from mjtools.tiles import JIHAI_KINDS, YAOCHU_KINDS, Suit, Tile, TileKind, count_tiles

AGARI_STATE = -1

TileCounts = Mapping[TileKind, int]


def _as_counts(tiles: TileCounts | Iterable[Tile | TileKind]) -> Counter[TileKind]:
    if isinstance(tiles, Mapping):
        counts = Counter({k: c for k, c in tiles.items() if c > 0})
    else:
        counts = count_tiles(tiles)
    over = sorted(k for k, c in counts.items() if c > 4)
    if over:
        names = ", ".join(k.name for k in over)
        raise InvalidTileCountError(f"More than 4 copies of {names}")
    return counts


def _suit_signature(counts: TileCounts, suit: Suit) -> str:
    return "".join(str(counts.get(TileKind.of(suit, n), 0)) for n in range(1, 10))


def _shanten_by_table(counts: TileCounts, called_melds: int) -> int:
    table = get_table()
    melds = called_melds
    partials = 0
    for suit in Suit:
        m, t = table[_suit_signature(counts, suit)]
        melds += m
        partials += t

    # honors can only form triplets and pairs
    for kind in JIHAI_KINDS:
        c = counts.get(kind, 0)
        if c >= 3:
            melds += 1
        elif c == 2:
            partials += 1

    if melds + partials > 4:
        partials = 4 - melds
    return 8 - 2 * melds - partials


def normal_shanten(tiles: TileCounts | Iterable[Tile | TileKind], called_melds: int = 0) -> int:
    counts = _as_counts(tiles)
    best = _shanten_by_table(counts, called_melds)
    for kind, c in list(counts.items()):
        if c < 2:
            continue
        counts[kind] -= 2
        best = min(best, _shanten_by_table(counts, called_melds) - 1)
        counts[kind] += 2
    return best


def chiitoitsu_shanten(tiles: TileCounts | Iterable[Tile | TileKind]) -> int:
    counts = _as_counts(tiles)
    pairs = sum(1 for c in counts.values() if c >= 2)
    kinds = len(counts)
    shanten = 6 - pairs
    # a fourth copy cannot become a second pair
    if kinds < 7:
        shanten += 7 - kinds
    return shanten


def kokushi_shanten(tiles: TileCounts | Iterable[Tile | TileKind]) -> int:
    counts = _as_counts(tiles)
    held = [k for k in YAOCHU_KINDS if counts.get(k, 0) >= 1]
    head = any(counts[k] >= 2 for k in held)
    return 13 - len(held) - (1 if head else 0)


def shanten(tiles: TileCounts | Iterable[Tile | TileKind]) -> int:
    counts = _as_counts(tiles)
    return min(normal_shanten(counts), chiitoitsu_shanten(counts), kokushi_shanten(counts))


def _check_size(counts: TileCounts) -> None:
    total = sum(counts.values())
    if total % 3 != 1 or not 1 <= total < 14:
        raise InvalidTileCountError(
            f"Cannot calculate effective tiles: invalid number of tiles ({total}); expected 1, 4, 7, 10 or 13"
        )


def _normal_candidates(counts: TileCounts) -> set[TileKind]:
    candidates: set[TileKind] = set()
    for kind in counts:
        candidates.add(kind)
        if not kind.is_suhai:
            continue
        n = kind.number
        for offset in (-2, -1, 1, 2):
            if 1 <= n + offset <= 9:
                candidates.add(kind.nth(offset))
    return candidates


def _chiitoitsu_candidates(counts: TileCounts) -> set[TileKind]:
    return set(counts)


def _kokushi_candidates(counts: TileCounts) -> set[TileKind]:
    return set(YAOCHU_KINDS)


_VARIANTS: dict[ShantenVariant, tuple[Callable[[TileCounts], set[TileKind]], Callable[..., int]]] = {
    ShantenVariant.normal: (_normal_candidates, normal_shanten),
    ShantenVariant.chiitoitsu: (_chiitoitsu_candidates, chiitoitsu_shanten),
    ShantenVariant.kokushi: (_kokushi_candidates, kokushi_shanten),
}


def effective_tiles(
    tiles: TileCounts | Iterable[Tile | TileKind],
    variant: ShantenVariant | None = None,
) -> list[TileKind]:
    """Kinds that lower the shanten number of ``variant`` (all shapes when None)."""
    counts = _as_counts(tiles)
    _check_size(counts)

    if variant is None:
        candidates: set[TileKind] = set()
        for candidate_fn, _ in _VARIANTS.values():
            candidates |= candidate_fn(counts)
        calculator: Callable[..., int] = shanten
    else:
        candidate_fn, calculator = _VARIANTS[variant]
        candidates = candidate_fn(counts)

    current = calculator(counts)
    result = []
    for kind in sorted(candidates):
        # a fifth copy does not exist
        if counts[kind] >= 4:
            continue
        counts[kind] += 1
        if calculator(counts) < current:
            result.append(kind)
        counts[kind] -= 1
    return result
