from mjtools.decomposition import decompose, interpretations
from mjtools.notation import parse_kinds
from mjtools.schemas import Yaku
from mjtools.tiles import TileKind, count_tiles
from mjtools import yaku


def counts_of(text: str):
    return count_tiles(parse_kinds(text))


def first_interpretation(text: str, win: str, tsumo: bool = False):
    win_kind = parse_kinds(win)[0]
    decomposition = decompose(counts_of(text))[0]
    return interpretations(decomposition, win_kind, tsumo)[0]


def test_flush_predicates():
    assert yaku.is_chinitsu(counts_of("11123455678999m"))
    assert yaku.is_honitsu(counts_of("123456789m東東東白白"))
    assert not yaku.is_honitsu(counts_of("123456789m123p白白"))


def test_wind_and_dragon_yakuman_predicates():
    assert yaku.is_daisuushii(counts_of("東東東南南南西西西北北北11m"))
    assert yaku.is_shousuushii(counts_of("東東東南南南西西西北北123m"))
    assert yaku.is_daisangen(counts_of("白白白発発発中中中123m44p"))
    assert yaku.is_shousangen(counts_of("白白白発発発中中123m456p"))
    assert not yaku.is_shousangen(counts_of("白白白発発発中中中123m44p"))


def test_tile_set_yakuman_predicates():
    assert yaku.is_ryuuiisou(counts_of("22334466888s発発発"))
    assert not yaku.is_ryuuiisou(counts_of("22334455888s発発発"))
    assert yaku.is_chinroutou(counts_of("111999m111p999s11s"))
    assert yaku.is_tsuuiisou(counts_of("東東東南南南西西西白白白中中"))


def test_chuuren_kind():
    assert yaku.chuuren_kind(counts_of("11123456789999p"), TileKind.P9) == Yaku.CHUUREN_9
    assert yaku.chuuren_kind(counts_of("11123456789999p"), TileKind.P1) == Yaku.CHUUREN
    assert yaku.chuuren_kind(counts_of("11223456789999p"), TileKind.P2) is None


def test_suuankou_kind():
    concealed = counts_of("111m222p333s東東東中中")
    assert yaku.suuankou_kind(concealed, 0, TileKind.RED, tsumo=False) == Yaku.SUUANKOU_TANKI
    assert yaku.suuankou_kind(concealed, 0, TileKind.EAST, tsumo=True) == Yaku.SUUANKOU
    assert yaku.suuankou_kind(concealed, 0, TileKind.EAST, tsumo=False) is None
    assert yaku.suuankou_kind(counts_of("111m222p東東東中中"), 1, TileKind.RED, tsumo=False) == Yaku.SUUANKOU_TANKI


def test_ittsu_and_sanshoku():
    interp = first_interpretation("123456789m234p55s", "5s")
    assert yaku.has_ittsu(interp)
    interp = first_interpretation("123m123p123s456s99m", "9m")
    assert yaku.has_sanshoku_doujun(interp)
    interp = first_interpretation("333m333p333s456s99m", "9m")
    assert yaku.has_sanshoku_doukou(interp)
    assert yaku.concealed_triplet_count(interp) == 3


def test_outside_hands():
    assert yaku.outside_hand(first_interpretation("123m789m123p999s11s", "1s")) == Yaku.JUNCHAN
    assert yaku.outside_hand(first_interpretation("123m789m123p東東東11s", "1s")) == Yaku.CHANTA
    assert yaku.outside_hand(first_interpretation("123m456m123p999s11s", "1s")) is None


def test_peikou_count():
    assert yaku.peikou_count(first_interpretation("112233m456p789s55s", "5s")) == 1
    assert yaku.peikou_count(first_interpretation("112233m445566p77s", "7s")) == 2
