import pytest

from mjtools.points import basic_points, calculate_points, point_label
from mjtools.schemas import AgariContext, Hand, RuleConfig
from mjtools.notation import parse_tile


def base_context(**kwargs) -> AgariContext:
    payload = {
        "win_tile": parse_tile("1m"),
        "hand": Hand(tiles=[]),
        "seat_wind": "S",
        "round_wind": "E",
    }
    payload.update(kwargs)
    return AgariContext.model_validate(payload)


@pytest.mark.parametrize(
    ("han", "fu", "expected"),
    [
        (1, 30, 240),
        (3, 30, 960),
        (4, 40, 2000),
        (3, 70, 2000),
        (5, 30, 2000),
        (6, 30, 3000),
        (8, 30, 4000),
        (11, 30, 6000),
        (13, 30, 8000),
        (20, 40, 8000),
    ],
)
def test_basic_points(han, fu, expected):
    assert basic_points(han, fu, RuleConfig()) == expected


def test_yakuman_multiplier():
    assert basic_points(26, 0, RuleConfig(), yakuman=2) == 16000


def test_mangan_roundup():
    rules = RuleConfig(mangan_roundup=True)
    assert basic_points(4, 30, rules) == 2000
    assert basic_points(3, 60, rules) == 2000
    assert basic_points(3, 50, rules) == 1600


@pytest.mark.parametrize(
    ("basic", "yakuman", "label"),
    [
        (960, 0, "通常"),
        (2000, 0, "満貫"),
        (3000, 0, "跳満"),
        (4000, 0, "倍満"),
        (6000, 0, "三倍満"),
        (8000, 0, "数え役満"),
        (8000, 1, "役満"),
        (16000, 2, "ダブル役満"),
        (24000, 3, "3倍役満"),
    ],
)
def test_point_label(basic, yakuman, label):
    assert point_label(basic, yakuman) == label


def test_non_dealer_ron_rounds_up():
    points, payments = calculate_points(base_context(), 240, RuleConfig())
    assert points.ron == 1000
    assert payments.total_received == 1000


def test_dealer_ron():
    points, _ = calculate_points(base_context(seat_wind="E"), 480, RuleConfig())
    assert points.ron == 2900


def test_dealer_tsumo_everyone_pays_the_same():
    points, payments = calculate_points(base_context(seat_wind="E", tsumo=True), 960, RuleConfig())
    assert points.tsumo_dealer_pay == 0
    assert points.tsumo_non_dealer_pay == 2000
    assert payments.hand_points_received == 6000


def test_non_dealer_tsumo():
    points, payments = calculate_points(base_context(tsumo=True), 320, RuleConfig())
    assert (points.tsumo_dealer_pay, points.tsumo_non_dealer_pay) == (700, 400)
    assert payments.hand_points_received == 1500


def test_bonuses():
    ctx = base_context(honba=3, riichi_sticks=2)
    _, payments = calculate_points(ctx, 2000, RuleConfig())
    assert payments.hand_points_received == 8000
    assert payments.honba_bonus == 900
    assert payments.kyotaku_bonus == 2000
    assert payments.total_received == 10900

    _, payments = calculate_points(ctx, 2000, RuleConfig(ba1500=True))
    assert payments.honba_bonus == 4500
