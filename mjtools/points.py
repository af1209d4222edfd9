from __future__ import annotations

from mjtools.schemas import AgariContext, Payments, Points, RuleConfig

MANGAN = 2000
YAKUMAN = 8000

_LIMIT_LABELS = {
    2000: "満貫",
    3000: "跳満",
    4000: "倍満",
    6000: "三倍満",
    8000: "数え役満",
}


def _round_up(value: int) -> int:
    return ((value + 99) // 100) * 100


def basic_points(han: int, fu: int, rules: RuleConfig, yakuman: int = 0) -> int:
    """Basic points before the dealer/non-dealer multipliers."""
    if yakuman:
        return YAKUMAN * yakuman
    if rules.mangan_roundup and (han, fu) in {(4, 30), (3, 60)}:
        return MANGAN
    if han >= 13:
        return YAKUMAN
    if han >= 11:
        return 6000
    if han >= 8:
        return 4000
    if han >= 6:
        return 3000
    if han == 5:
        return MANGAN
    return min(fu * 2 ** (han + 2), MANGAN)


def point_label(basic: int, yakuman: int = 0) -> str:
    if yakuman == 1:
        return "役満"
    if yakuman == 2:
        return "ダブル役満"
    if yakuman > 2:
        return f"{yakuman}倍役満"
    return _LIMIT_LABELS.get(basic, "通常")


def calculate_points(ctx: AgariContext, basic: int, rules: RuleConfig) -> tuple[Points, Payments]:
    honba_bonus = ctx.honba * (1500 if rules.ba1500 else 300)
    kyotaku_bonus = ctx.riichi_sticks * 1000

    if not ctx.tsumo:
        ron = _round_up(basic * (6 if ctx.is_dealer else 4))
        points = Points(ron=ron)
        received = ron
    elif ctx.is_dealer:
        each = _round_up(basic * 2)
        points = Points(tsumo_dealer_pay=0, tsumo_non_dealer_pay=each)
        received = each * 3
    else:
        pay_dealer = _round_up(basic * 2)
        pay_non_dealer = _round_up(basic)
        points = Points(tsumo_dealer_pay=pay_dealer, tsumo_non_dealer_pay=pay_non_dealer)
        received = pay_dealer + pay_non_dealer * 2

    payments = Payments(
        hand_points_received=received,
        honba_bonus=honba_bonus,
        kyotaku_bonus=kyotaku_bonus,
        total_received=received + honba_bonus + kyotaku_bonus,
    )
    return points, payments
