from __future__ import annotations

from collections import Counter

from mjtools.errors import InvalidAgariError, InvalidMeldError, InvalidTileCountError
from mjtools.schemas import AgariContext, Hand, Meld, MeldType
from mjtools.shanten import AGARI_STATE, chiitoitsu_shanten, kokushi_shanten, normal_shanten
from mjtools.tiles import TileKind, count_tiles

MELD_SIZES = {
    MeldType.chi: 3,
    MeldType.pon: 3,
    MeldType.kan: 4,
    MeldType.ankan: 4,
    MeldType.kakan: 4,
}


def validate_meld(meld: Meld) -> None:
    expected = MELD_SIZES[meld.type]
    if len(meld.tiles) != expected:
        raise InvalidMeldError(f"{meld.type.value} must contain exactly {expected} tiles")

    kinds = [t.kind for t in meld.tiles]
    if meld.type != MeldType.chi:
        if len(set(kinds)) != 1:
            raise InvalidMeldError(f"{meld.type.value} tiles must all be the same kind")
        return

    if any(not k.is_suhai for k in kinds):
        raise InvalidMeldError("chi cannot contain honor tiles")
    first = kinds[0]
    if first.number > 7 or kinds != [first, first.nth(1), first.nth(2)]:
        raise InvalidMeldError("chi must be three consecutive tiles of one suit in ascending order")


def validate_hand(hand: Hand, win_tile_kind: TileKind) -> None:
    for meld in hand.melds:
        validate_meld(meld)

    if len(hand.melds) > 4:
        raise InvalidTileCountError("A hand cannot hold more than four melds")
    # quads count as three tiles towards the fourteen
    total = len(hand.tiles) + 3 * len(hand.melds) + 1
    if total != 14:
        raise InvalidTileCountError(
            f"Total tiles must be 14 at win state (got {total}); count each quad as three tiles"
        )

    counts = count_tiles(hand.all_tiles())
    counts[win_tile_kind] += 1
    for kind, c in counts.items():
        if c >= 5:
            raise InvalidTileCountError(f"Tile appears 5+ times in hand: {kind.name}")


def validate_context(ctx: AgariContext) -> None:
    validate_hand(ctx.hand, ctx.win_tile.kind)

    if (ctx.riichi or ctx.double_riichi) and not ctx.hand.is_menzen:
        raise InvalidAgariError("Invalid agari: melded but also riichi")
    if ctx.riichi and ctx.double_riichi:
        raise InvalidAgariError("riichi and double_riichi cannot both be true")
    if ctx.rinshan and not ctx.tsumo:
        raise InvalidAgariError("rinshan requires tsumo")
    if ctx.tenhou and ctx.chiihou:
        raise InvalidAgariError("chiihou and tenhou cannot both be true")
    if (ctx.tenhou or ctx.chiihou) and not ctx.tsumo:
        raise InvalidAgariError("chiihou/tenhou require tsumo")
    if ctx.tenhou and not ctx.is_dealer:
        raise InvalidAgariError("tenhou requires dealer")
    if ctx.chiihou and ctx.is_dealer:
        raise InvalidAgariError("chiihou requires non-dealer")


def concealed_with_win(ctx: AgariContext) -> Counter[TileKind]:
    counts = count_tiles(ctx.hand.tiles)
    counts[ctx.win_tile.kind] += 1
    return counts


def is_agari(ctx: AgariContext) -> bool:
    concealed = concealed_with_win(ctx)
    if normal_shanten(concealed, called_melds=len(ctx.hand.melds)) == AGARI_STATE:
        return True
    if ctx.hand.melds:
        return False
    return chiitoitsu_shanten(concealed) == AGARI_STATE or kokushi_shanten(concealed) == AGARI_STATE
