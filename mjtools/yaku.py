"""Yaku detection.

Functions taking ``counts`` work on the merged multiset (concealed tiles, meld
tiles and the winning tile); functions taking an ``Interpretation`` depend on
how the hand was split into groups.
"""

from __future__ import annotations

from collections import Counter
from typing import Mapping

from mjtools.decomposition import Exposure, Interpretation, WaitShape
from mjtools.schemas import AgariContext, RuleConfig, Yaku, YakuItem
from mjtools.tiles import (
    DRAGON_KINDS,
    GREEN_KINDS,
    WIND_ORDER,
    YAOCHU_KINDS,
    Suit,
    TileKind,
    next_dora_kind,
)

YAKUMAN_HAN = 13

TileCounts = Mapping[TileKind, int]

_DRAGON_YAKU = {
    TileKind.WHITE: Yaku.HAKU,
    TileKind.GREEN: Yaku.HATSU,
    TileKind.RED: Yaku.CHUN,
}
_CHUUREN_BASE = (3, 1, 1, 1, 1, 1, 1, 1, 3)


def _kinds(counts: TileCounts) -> list[TileKind]:
    return [k for k, c in counts.items() if c > 0]


def _suits(counts: TileCounts) -> set[Suit]:
    return {k.suit for k in _kinds(counts) if k.is_suhai}


def _has_jihai(counts: TileCounts) -> bool:
    return any(k.is_jihai for k in _kinds(counts))


# --- whole-hand predicates -------------------------------------------------


def is_tanyao(counts: TileCounts) -> bool:
    return all(k.is_chunchan for k in _kinds(counts))


def is_honroutou(counts: TileCounts) -> bool:
    return all(k.is_yaochu for k in _kinds(counts))


def is_chinitsu(counts: TileCounts) -> bool:
    return len(_suits(counts)) == 1 and not _has_jihai(counts)


def is_honitsu(counts: TileCounts) -> bool:
    return len(_suits(counts)) == 1 and _has_jihai(counts)


def is_shousangen(counts: TileCounts) -> bool:
    triplets = sum(1 for k in DRAGON_KINDS if counts.get(k, 0) >= 3)
    pairs = sum(1 for k in DRAGON_KINDS if counts.get(k, 0) == 2)
    return triplets == 2 and pairs == 1


def is_daisangen(counts: TileCounts) -> bool:
    return all(counts.get(k, 0) >= 3 for k in DRAGON_KINDS)


def is_shousuushii(counts: TileCounts) -> bool:
    triplets = sum(1 for k in WIND_ORDER if counts.get(k, 0) >= 3)
    pairs = sum(1 for k in WIND_ORDER if counts.get(k, 0) == 2)
    return triplets == 3 and pairs == 1


def is_daisuushii(counts: TileCounts) -> bool:
    return all(counts.get(k, 0) >= 3 for k in WIND_ORDER)


def is_tsuuiisou(counts: TileCounts) -> bool:
    return all(k.is_jihai for k in _kinds(counts))


def is_chinroutou(counts: TileCounts) -> bool:
    return all(k.is_routou for k in _kinds(counts))


def is_ryuuiisou(counts: TileCounts) -> bool:
    return all(k in GREEN_KINDS for k in _kinds(counts))


def is_kokushi_13(before_win: TileCounts) -> bool:
    """All thirteen terminal/honor kinds were already held before the winning tile."""
    return all(before_win.get(k, 0) == 1 for k in YAOCHU_KINDS)


def chuuren_kind(concealed: TileCounts, win: TileKind) -> Yaku | None:
    """Nine gates for a closed 14-tile hand; the 9-sided form when the
    13 tiles before the win were exactly 1112345678999."""
    suits = _suits(concealed)
    if len(suits) != 1 or _has_jihai(concealed) or sum(concealed.values()) != 14:
        return None
    suit = next(iter(suits))
    ranks = [concealed.get(TileKind.of(suit, n), 0) for n in range(1, 10)]
    if any(have < need for have, need in zip(ranks, _CHUUREN_BASE)):
        return None
    surplus = [n for n, (have, need) in enumerate(zip(ranks, _CHUUREN_BASE), start=1) if have > need]
    if win.is_suhai and win.suit == suit and surplus == [win.number]:
        return Yaku.CHUUREN_9
    return Yaku.CHUUREN


def suuankou_kind(concealed: TileCounts, num_ankan: int, win: TileKind, tsumo: bool) -> Yaku | None:
    """Four concealed triplets counted on the concealed tiles plus closed quads."""
    values = [c for c in concealed.values() if c > 0]
    if any(c not in (2, 3) for c in values):
        return None
    triplets = sum(1 for c in values if c == 3)
    pairs = sum(1 for c in values if c == 2)
    if triplets + num_ankan != 4 or pairs != 1:
        return None
    if concealed.get(win, 0) == 2:
        return Yaku.SUUANKOU_TANKI
    # on a claimed shanpon wait the completed triplet is an open one
    return Yaku.SUUANKOU if tsumo else None


def count_dora(counts: TileCounts, indicators: list[TileKind]) -> int:
    return sum(counts.get(next_dora_kind(ind), 0) for ind in indicators)


# --- decomposition predicates ----------------------------------------------


def _runs(interp: Interpretation) -> list[TileKind]:
    return [g.kind for g in interp.groups if g.is_run]


def _triplets(interp: Interpretation) -> list[TileKind]:
    return [g.kind for g in interp.groups if g.is_triplet]


def is_value_kind(kind: TileKind, ctx: AgariContext) -> bool:
    return kind.is_sangen or kind in {ctx.seat_wind.kind, ctx.round_wind.kind}


def is_pinfu(interp: Interpretation, ctx: AgariContext) -> bool:
    if ctx.hand.melds:
        return False
    if any(g.exposure != Exposure.run for g in interp.groups):
        return False
    return interp.wait == WaitShape.ryanmen and not is_value_kind(interp.head, ctx)


def peikou_count(interp: Interpretation) -> int:
    """Number of pairs of identical concealed runs."""
    runs = Counter(g.kind for g in interp.groups if g.exposure == Exposure.run)
    return sum(c // 2 for c in runs.values())


def has_ittsu(interp: Interpretation) -> bool:
    starts = set(_runs(interp))
    for suit in Suit:
        if all(TileKind.of(suit, n) in starts for n in (1, 4, 7)):
            return True
    return False


def has_sanshoku_doujun(interp: Interpretation) -> bool:
    numbers: dict[int, set[Suit]] = {}
    for kind in _runs(interp):
        numbers.setdefault(kind.number, set()).add(kind.suit)
    return any(len(suits) == 3 for suits in numbers.values())


def has_sanshoku_doukou(interp: Interpretation) -> bool:
    numbers: dict[int, set[Suit]] = {}
    for kind in _triplets(interp):
        if kind.is_suhai:
            numbers.setdefault(kind.number, set()).add(kind.suit)
    return any(len(suits) == 3 for suits in numbers.values())


def is_toitoi(interp: Interpretation) -> bool:
    return all(g.is_triplet for g in interp.groups)


def concealed_triplet_count(interp: Interpretation) -> int:
    return sum(1 for g in interp.groups if g.is_triplet and g.is_concealed)


def outside_hand(interp: Interpretation) -> Yaku | None:
    """Junchan or chanta: every group and the head touch a terminal or honor."""
    if not interp.head.is_yaochu:
        return None
    if not _runs(interp):
        return None
    for group in interp.groups:
        if group.is_run:
            if group.kind.number not in (1, 7):
                return None
        elif not group.kind.is_yaochu:
            return None
    kinds = [interp.head] + [g.kind for g in interp.groups]
    if any(k.is_jihai for k in kinds):
        return Yaku.CHANTA
    return Yaku.JUNCHAN


# --- yaku lists --------------------------------------------------------------


def situational_yaku(ctx: AgariContext) -> list[YakuItem]:
    """Yaku that depend only on how and when the hand was won."""
    items: list[YakuItem] = []
    if ctx.tsumo and ctx.hand.is_menzen:
        items.append(YakuItem(name=Yaku.MENZEN_TSUMO, han=1))
    if ctx.double_riichi:
        items.append(YakuItem(name=Yaku.DOUBLE_RIICHI, han=2))
    elif ctx.riichi:
        items.append(YakuItem(name=Yaku.RIICHI, han=1))
    if ctx.ippatsu and (ctx.riichi or ctx.double_riichi):
        items.append(YakuItem(name=Yaku.IPPATSU, han=1))
    if ctx.haitei:
        items.append(YakuItem(name=Yaku.HAITEI if ctx.tsumo else Yaku.HOUTEI, han=1))
    return items


def flush_and_terminal_yaku(counts: TileCounts, ctx: AgariContext, rules: RuleConfig) -> list[YakuItem]:
    """Tile-composition yaku shared by seven pairs and the standard shape."""
    menzen = ctx.hand.is_menzen
    items: list[YakuItem] = []
    if is_honroutou(counts):
        items.append(YakuItem(name=Yaku.HONROUTOU, han=2))
    if is_chinitsu(counts):
        items.append(YakuItem(name=Yaku.CHINITSU, han=6 if menzen else 5))
    elif is_honitsu(counts):
        items.append(YakuItem(name=Yaku.HONITSU, han=3 if menzen else 2))
    if is_tanyao(counts) and (menzen or rules.kuitan):
        items.append(YakuItem(name=Yaku.TANYAO, han=1))
    return items


def standard_hand_yaku(counts: TileCounts, ctx: AgariContext, rules: RuleConfig) -> list[YakuItem]:
    items = situational_yaku(ctx) + flush_and_terminal_yaku(counts, ctx, rules)
    if ctx.hand.num_kan == 3:
        items.append(YakuItem(name=Yaku.SANKANTSU, han=2))
    if is_shousangen(counts):
        items.append(YakuItem(name=Yaku.SHOUSANGEN, han=2))
    if ctx.chankan:
        items.append(YakuItem(name=Yaku.CHANKAN, han=1))
    if ctx.rinshan:
        items.append(YakuItem(name=Yaku.RINSHAN, han=1))
    for kind, name in _DRAGON_YAKU.items():
        if counts.get(kind, 0) >= 3:
            items.append(YakuItem(name=name, han=1))
    if counts.get(ctx.round_wind.kind, 0) >= 3:
        items.append(YakuItem(name=Yaku.BAKAZE, han=1))
    if counts.get(ctx.seat_wind.kind, 0) >= 3:
        items.append(YakuItem(name=Yaku.JIKAZE, han=1))
    return items


def decomposition_yaku(interp: Interpretation, ctx: AgariContext) -> list[YakuItem]:
    menzen = ctx.hand.is_menzen
    items: list[YakuItem] = []
    if is_pinfu(interp, ctx):
        items.append(YakuItem(name=Yaku.PINFU, han=1))
    if menzen:
        peikou = peikou_count(interp)
        if peikou == 2:
            items.append(YakuItem(name=Yaku.RYANPEIKOU, han=3))
        elif peikou == 1:
            items.append(YakuItem(name=Yaku.IIPEIKOU, han=1))
    if has_ittsu(interp):
        items.append(YakuItem(name=Yaku.ITTSU, han=2 if menzen else 1))
    if has_sanshoku_doujun(interp):
        items.append(YakuItem(name=Yaku.SANSHOKU_DOUJUN, han=2 if menzen else 1))
    if has_sanshoku_doukou(interp):
        items.append(YakuItem(name=Yaku.SANSHOKU_DOUKOU, han=2))
    outside = outside_hand(interp)
    if outside == Yaku.JUNCHAN:
        items.append(YakuItem(name=Yaku.JUNCHAN, han=3 if menzen else 2))
    elif outside == Yaku.CHANTA:
        items.append(YakuItem(name=Yaku.CHANTA, han=2 if menzen else 1))
    if is_toitoi(interp):
        items.append(YakuItem(name=Yaku.TOITOI, han=2))
    if concealed_triplet_count(interp) == 3:
        items.append(YakuItem(name=Yaku.SANANKOU, han=2))
    return items


def opening_yakuman(ctx: AgariContext) -> list[YakuItem]:
    if ctx.tenhou:
        return [YakuItem(name=Yaku.TENHOU, han=YAKUMAN_HAN)]
    if ctx.chiihou:
        return [YakuItem(name=Yaku.CHIIHOU, han=YAKUMAN_HAN)]
    return []


def yakuman_yaku(
    counts: TileCounts,
    concealed: TileCounts,
    ctx: AgariContext,
    rules: RuleConfig,
) -> list[YakuItem]:
    """Count-based yakuman of the standard shape, stacked additively."""
    win = ctx.win_tile.kind
    items = opening_yakuman(ctx)

    if not ctx.hand.melds:
        chuuren = chuuren_kind(concealed, win)
        if chuuren == Yaku.CHUUREN_9:
            items.append(YakuItem(name=Yaku.CHUUREN_9, han=2 * YAKUMAN_HAN))
        elif chuuren == Yaku.CHUUREN:
            items.append(YakuItem(name=Yaku.CHUUREN, han=YAKUMAN_HAN))

    if ctx.hand.is_menzen:
        num_ankan = ctx.hand.num_kan
        suuankou = suuankou_kind(concealed, num_ankan, win, ctx.tsumo)
        if suuankou == Yaku.SUUANKOU_TANKI:
            han = 2 * YAKUMAN_HAN if rules.suuankou_tanki_as_double else YAKUMAN_HAN
            items.append(YakuItem(name=Yaku.SUUANKOU_TANKI, han=han))
        elif suuankou == Yaku.SUUANKOU:
            items.append(YakuItem(name=Yaku.SUUANKOU, han=YAKUMAN_HAN))

    if is_ryuuiisou(counts):
        items.append(YakuItem(name=Yaku.RYUUIISOU, han=YAKUMAN_HAN))
    if is_chinroutou(counts):
        items.append(YakuItem(name=Yaku.CHINROUTOU, han=YAKUMAN_HAN))
    if is_daisuushii(counts):
        items.append(YakuItem(name=Yaku.DAISUUSHII, han=YAKUMAN_HAN))
    elif is_shousuushii(counts):
        items.append(YakuItem(name=Yaku.SHOUSUUSHII, han=YAKUMAN_HAN))
    if is_tsuuiisou(counts):
        items.append(YakuItem(name=Yaku.TSUUIISOU, han=YAKUMAN_HAN))
    if ctx.hand.num_kan == 4:
        items.append(YakuItem(name=Yaku.SUUKANTSU, han=YAKUMAN_HAN))
    if is_daisangen(counts):
        items.append(YakuItem(name=Yaku.DAISANGEN, han=YAKUMAN_HAN))
    return items
