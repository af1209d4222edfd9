from __future__ import annotations

from mjtools.decomposition import Exposure, Interpretation, WaitShape
from mjtools.schemas import AgariContext, FuBreakdownItem

BASE_FU = 20
CHIITOITSU_FU = 25

_GROUP_FU = {
    Exposure.open_triplet: 2,
    Exposure.concealed_triplet: 4,
    Exposure.open_quad: 8,
    Exposure.concealed_quad: 16,
}
_CLOSED_WAITS = {WaitShape.tanki, WaitShape.kanchan, WaitShape.penchan}


def chiitoitsu_fu() -> tuple[int, list[FuBreakdownItem]]:
    return CHIITOITSU_FU, [FuBreakdownItem(name="七対子", fu=CHIITOITSU_FU)]


def head_fu(interp: Interpretation, ctx: AgariContext) -> int:
    head = interp.head
    fu = 0
    if head.is_sangen:
        fu += 2
    if head == ctx.round_wind.kind:
        fu += 2
    if head == ctx.seat_wind.kind:
        fu += 2
    return fu


def calculate_fu(interp: Interpretation, ctx: AgariContext, pinfu: bool) -> tuple[int, list[FuBreakdownItem]]:
    details = [FuBreakdownItem(name="副底", fu=BASE_FU)]
    if pinfu:
        if not ctx.tsumo:
            details.append(FuBreakdownItem(name="門前ロン", fu=10))
        return sum(item.fu for item in details), details

    if not ctx.tsumo and ctx.hand.is_menzen:
        details.append(FuBreakdownItem(name="門前ロン", fu=10))
    if ctx.tsumo:
        details.append(FuBreakdownItem(name="ツモ", fu=2))
    if interp.wait in _CLOSED_WAITS:
        details.append(FuBreakdownItem(name="待ち", fu=2))

    hfu = head_fu(interp, ctx)
    if hfu:
        details.append(FuBreakdownItem(name="雀頭", fu=hfu))

    for group in interp.groups:
        gfu = _GROUP_FU.get(group.exposure, 0)
        if gfu and group.kind.is_yaochu:
            gfu *= 2
        if gfu:
            details.append(FuBreakdownItem(name="面子", fu=gfu))

    total = sum(item.fu for item in details)
    if total == BASE_FU:
        # open hand with nothing but runs and a plain head
        details.append(FuBreakdownItem(name="喰い平和", fu=10))
        total += 10

    rounded = ((total + 9) // 10) * 10
    if rounded > total:
        details.append(FuBreakdownItem(name="切り上げ", fu=rounded - total))
    return rounded, details
