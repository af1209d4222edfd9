from __future__ import annotations

import logging
from collections import Counter

from mjtools.config import settings
from mjtools.decomposition import decompose, interpretations
from mjtools.errors import NoYakuError, NotAgariError
from mjtools.fu import calculate_fu, chiitoitsu_fu
from mjtools.points import basic_points, calculate_points, point_label
from mjtools.schemas import (
    AgariContext,
    DoraBreakdown,
    FuBreakdownItem,
    RuleConfig,
    ScoreResult,
    Yaku,
    YakuItem,
)
from mjtools.shanten import AGARI_STATE, chiitoitsu_shanten, kokushi_shanten, normal_shanten
from mjtools.tiles import TileKind, count_tiles
from mjtools.validators import concealed_with_win, is_agari, validate_context
from mjtools.yaku import (
    YAKUMAN_HAN,
    count_dora,
    decomposition_yaku,
    flush_and_terminal_yaku,
    is_kokushi_13,
    is_tsuuiisou,
    opening_yakuman,
    situational_yaku,
    standard_hand_yaku,
    yakuman_yaku,
)

logger = logging.getLogger(__name__)

NAGASHI_HAN = 5


def _merged_counts(ctx: AgariContext) -> Counter[TileKind]:
    counts = count_tiles(ctx.hand.all_tiles())
    counts[ctx.win_tile.kind] += 1
    return counts


def _dora_breakdown(ctx: AgariContext, counts: Counter[TileKind]) -> DoraBreakdown:
    tiles = ctx.hand.all_tiles() + [ctx.win_tile]
    return DoraBreakdown(
        dora=count_dora(counts, [t.kind for t in ctx.dora_indicators]),
        aka_dora=sum(1 for t in tiles if t.red),
        ura_dora=count_dora(counts, [t.kind for t in ctx.ura_dora_indicators]),
    )


def _dora_items(dora: DoraBreakdown) -> list[YakuItem]:
    items: list[YakuItem] = []
    if dora.dora > 0:
        items.append(YakuItem(name=Yaku.DORA, han=dora.dora))
    if dora.aka_dora > 0:
        items.append(YakuItem(name=Yaku.AKA_DORA, han=dora.aka_dora))
    if dora.ura_dora > 0:
        items.append(YakuItem(name=Yaku.URA_DORA, han=dora.ura_dora))
    return items


def _build_result(
    ctx: AgariContext,
    rules: RuleConfig,
    yaku: list[YakuItem],
    fu: int,
    fu_breakdown: list[FuBreakdownItem],
    dora: DoraBreakdown | None = None,
    yakuman: int = 0,
) -> ScoreResult:
    han = sum(item.han for item in yaku)
    basic = basic_points(han, fu, rules, yakuman)
    points, payments = calculate_points(ctx, basic, rules)
    return ScoreResult(
        han=han,
        fu=fu,
        fu_breakdown=fu_breakdown,
        yaku=yaku,
        yakuman=yakuman,
        dora=dora or DoraBreakdown(),
        point_label=point_label(basic, yakuman),
        points=points,
        payments=payments,
    )


def _yakuman_result(ctx: AgariContext, rules: RuleConfig, yaku: list[YakuItem]) -> ScoreResult:
    multiplier = sum(item.han for item in yaku) // YAKUMAN_HAN
    logger.debug("Yakuman path: %s (x%d)", [item.name.value for item in yaku], multiplier)
    return _build_result(ctx, rules, yaku, fu=0, fu_breakdown=[], yakuman=multiplier)


def _nagashi_result(ctx: AgariContext, rules: RuleConfig) -> ScoreResult:
    yaku = [YakuItem(name=Yaku.NAGASHI_MANGAN, han=NAGASHI_HAN)]
    return _build_result(ctx, rules, yaku, fu=0, fu_breakdown=[])


def _kokushi_result(ctx: AgariContext, rules: RuleConfig) -> ScoreResult:
    yaku = opening_yakuman(ctx)
    if is_kokushi_13(count_tiles(ctx.hand.tiles)):
        han = 2 * YAKUMAN_HAN if rules.kokushi13_as_double else YAKUMAN_HAN
        yaku.append(YakuItem(name=Yaku.KOKUSHI_13, han=han))
    else:
        yaku.append(YakuItem(name=Yaku.KOKUSHI, han=YAKUMAN_HAN))
    return _yakuman_result(ctx, rules, yaku)


def _chiitoitsu_result(ctx: AgariContext, rules: RuleConfig, counts: Counter[TileKind]) -> ScoreResult:
    yakuman = opening_yakuman(ctx)
    if is_tsuuiisou(counts):
        yakuman.append(YakuItem(name=Yaku.TSUUIISOU, han=YAKUMAN_HAN))
    if yakuman:
        return _yakuman_result(ctx, rules, yakuman)

    yaku = [YakuItem(name=Yaku.CHIITOITSU, han=2)]
    yaku += situational_yaku(ctx)
    yaku += flush_and_terminal_yaku(counts, ctx, rules)
    dora = _dora_breakdown(ctx, counts)
    fu, breakdown = chiitoitsu_fu()
    return _build_result(ctx, rules, yaku + _dora_items(dora), fu, breakdown, dora=dora)


def _standard_result(
    ctx: AgariContext,
    rules: RuleConfig,
    counts: Counter[TileKind],
    concealed: Counter[TileKind],
) -> ScoreResult:
    yakuman = yakuman_yaku(counts, concealed, ctx, rules)
    if sum(item.han for item in yakuman) >= YAKUMAN_HAN:
        return _yakuman_result(ctx, rules, yakuman)

    shared = standard_hand_yaku(counts, ctx, rules)
    win = ctx.win_tile.kind
    best: tuple[tuple[int, int], list[YakuItem], int, list[FuBreakdownItem]] | None = None
    for decomposition in decompose(concealed, ctx.hand.melds):
        for interp in interpretations(decomposition, win, ctx.tsumo):
            yaku = decomposition_yaku(interp, ctx) + shared
            pinfu = any(item.name == Yaku.PINFU for item in yaku)
            fu, breakdown = calculate_fu(interp, ctx, pinfu)
            key = (sum(item.han for item in yaku), fu)
            if best is None or key > best[0]:
                best = (key, yaku, fu, breakdown)

    if best is None:
        raise NotAgariError("Invalid agari: specified hand has no standard decomposition")
    (han, _), yaku, fu, breakdown = best
    if han == 0:
        raise NoYakuError("No yaku: dora-only hands cannot win")

    dora = _dora_breakdown(ctx, counts)
    logger.debug("Best interpretation: %d han %d fu %s", han, fu, [item.name.value for item in yaku])
    return _build_result(ctx, rules, yaku + _dora_items(dora), fu, breakdown, dora=dora)


def _rank(result: ScoreResult) -> tuple[int, int, int]:
    return result.yakuman, result.han, result.fu


def score(ctx: AgariContext, rules: RuleConfig | None = None) -> ScoreResult:
    """Score a completed hand. Raises a ``MahjongError`` subclass when the
    input is inconsistent, the hand is not complete, or it has no yaku."""
    rules = rules or settings.rule_config()
    validate_context(ctx)

    if rules.nagashi_mangan and ctx.nagashi_mangan:
        return _nagashi_result(ctx, rules)

    if not is_agari(ctx):
        raise NotAgariError("Invalid agari: specified hand is not agari")

    counts = _merged_counts(ctx)
    concealed = concealed_with_win(ctx)

    if not ctx.hand.melds and kokushi_shanten(concealed) == AGARI_STATE:
        return _kokushi_result(ctx, rules)

    if not ctx.hand.melds and chiitoitsu_shanten(concealed) == AGARI_STATE:
        result = _chiitoitsu_result(ctx, rules, counts)
        # pairs like 112233 also split into runs; keep whichever scores higher
        if normal_shanten(concealed) == AGARI_STATE:
            try:
                standard = _standard_result(ctx, rules, counts, concealed)
            except NoYakuError:
                return result
            if _rank(standard) > _rank(result):
                return standard
        return result

    return _standard_result(ctx, rules, counts, concealed)
