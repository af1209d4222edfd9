import pytest

from mjtools.errors import InvalidTileCountError
from mjtools.notation import parse_kinds
from mjtools.schemas import ShantenVariant
from mjtools.shanten import (
    chiitoitsu_shanten,
    effective_tiles,
    kokushi_shanten,
    normal_shanten,
    shanten,
)


def test_complete_hand():
    tiles = parse_kinds("123m456p789s東東東白白")
    assert normal_shanten(tiles) == -1
    assert shanten(tiles) == -1


def test_tenpai_and_iishanten():
    assert shanten(parse_kinds("123m456p789s東東東白")) == 0
    assert normal_shanten(parse_kinds("123m456p789s東東南白")) == 1


def test_called_melds_count_as_completed():
    concealed = parse_kinds("123m456p789s東東")
    assert normal_shanten(concealed) > -1
    assert normal_shanten(concealed, called_melds=1) == -1


def test_chiitoitsu_shanten():
    assert chiitoitsu_shanten(parse_kinds("1133557799m1133p")) == -1
    assert shanten(parse_kinds("1133557799m1133p")) == -1
    assert chiitoitsu_shanten(parse_kinds("1133557799m113p")) == 0
    # four of a kind is a single pair and leaves too few distinct kinds
    assert chiitoitsu_shanten(parse_kinds("1111335577m99p1s")) == 2


def test_kokushi_shanten():
    assert kokushi_shanten(parse_kinds("19m19p19s東南西北白発中")) == 0
    assert kokushi_shanten(parse_kinds("19m19p19s東南西北白発中中")) == -1
    assert kokushi_shanten(parse_kinds("123m456p789s東東東白")) == 8


@pytest.mark.parametrize(
    ("hand", "expected"),
    [
        ("345m9m23s555s67s発発", "1s4s5s8s発"),
        ("188m3346789p113s", "8m35p12s"),
        ("2468m229p23457s白", "37m6s"),
        ("2468m225p23457s白", "37m6s"),
        ("2468m2259p23457s", "37m6s"),
    ],
)
def test_normal_effective_tiles(hand, expected):
    assert effective_tiles(parse_kinds(hand), ShantenVariant.normal) == parse_kinds(expected)


@pytest.mark.parametrize(
    ("hand", "expected"),
    [
        ("44m14p1335578s東西", "14p178s東西"),
        ("33799m344p1225s西", "7m3p15s西"),
        ("255669p14899s西白", "29p148s西白"),
        ("555669p14899s西白", "9p148s西白"),
    ],
)
def test_chiitoitsu_effective_tiles(hand, expected):
    assert effective_tiles(parse_kinds(hand), ShantenVariant.chiitoitsu) == parse_kinds(expected)


@pytest.mark.parametrize(
    ("hand", "expected"),
    [
        ("19m19p19s東南西北白発中", "19m19p19s東南西北白発中"),
        ("19m1488p178s東西白白", "9p9s南北発中"),
    ],
)
def test_kokushi_effective_tiles(hand, expected):
    assert effective_tiles(parse_kinds(hand), ShantenVariant.kokushi) == parse_kinds(expected)


def test_combined_effective_tiles_are_sorted_and_lower_shanten():
    tiles = parse_kinds("19m1488p178s東西白白")
    current = shanten(tiles)
    result = effective_tiles(tiles)
    assert result == sorted(set(result))
    for kind in result:
        assert shanten(tiles + [kind]) < current


@pytest.mark.parametrize("hand", ["123m456p789s東東東白白", "12m", ""])
def test_effective_tiles_rejects_bad_sizes(hand):
    with pytest.raises(InvalidTileCountError):
        effective_tiles(parse_kinds(hand))


def test_effective_tiles_skip_kinds_held_four_times():
    tiles = parse_kinds("1111m234p567s東東南")
    assert effective_tiles(tiles) == parse_kinds("23m東南")
    assert effective_tiles(tiles, ShantenVariant.normal) == parse_kinds("23m東南")


@pytest.mark.parametrize("calculate", [normal_shanten, chiitoitsu_shanten, kokushi_shanten, shanten])
def test_shanten_rejects_a_fifth_copy(calculate):
    with pytest.raises(InvalidTileCountError):
        calculate(parse_kinds("11111m"))
