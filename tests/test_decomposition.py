from mjtools.decomposition import (
    Decomposition,
    Exposure,
    Group,
    WaitShape,
    _run_wait,
    decompose,
    interpretations,
)
from mjtools.notation import parse_kinds, parse_melds
from mjtools.schemas import MeldType
from mjtools.tiles import TileKind, count_tiles


def counts_of(text: str):
    return count_tiles(parse_kinds(text))


def test_triplets_and_runs_are_both_found():
    found = decompose(counts_of("111222333m456p東東"))
    assert len(found) == 2
    assert {d.head for d in found} == {TileKind.EAST}
    shapes = {tuple(g.exposure for g in d.groups) for d in found}
    assert (Exposure.concealed_triplet,) * 3 + (Exposure.run,) in shapes
    assert (Exposure.run,) * 4 in shapes


def test_incomplete_hand_has_no_decomposition():
    assert decompose(counts_of("123m456p789s東南白中")) == []


def test_called_melds_are_fixed_groups():
    melds = parse_melds(MeldType.pon, "777s") + parse_melds(MeldType.chi, "789m")
    found = decompose(counts_of("123m456p東東"), melds)
    assert len(found) == 1
    groups = found[0].groups
    assert groups[0] == Group(Exposure.open_triplet, TileKind.S7)
    assert groups[1] == Group(Exposure.called_run, TileKind.M7)
    assert len(groups) == 4


def test_run_wait_shapes():
    assert _run_wait(TileKind.M1, TileKind.M3) == WaitShape.penchan
    assert _run_wait(TileKind.M7, TileKind.M7) == WaitShape.penchan
    assert _run_wait(TileKind.M2, TileKind.M2) == WaitShape.ryanmen
    assert _run_wait(TileKind.M2, TileKind.M4) == WaitShape.ryanmen
    assert _run_wait(TileKind.M2, TileKind.M3) == WaitShape.kanchan
    assert _run_wait(TileKind.M2, TileKind.P3) is None


def test_claimed_tile_opens_the_triplet():
    decomposition = Decomposition(
        head=TileKind.EAST,
        groups=(
            Group(Exposure.concealed_triplet, TileKind.M3),
            Group(Exposure.run, TileKind.P4),
            Group(Exposure.run, TileKind.S1),
            Group(Exposure.run, TileKind.S5),
        ),
    )
    ron = interpretations(decomposition, TileKind.M3, tsumo=False)
    assert len(ron) == 1
    assert ron[0].wait == WaitShape.shanpon
    assert ron[0].groups[0].exposure == Exposure.open_triplet

    tsumo = interpretations(decomposition, TileKind.M3, tsumo=True)
    assert tsumo[0].groups[0].exposure == Exposure.concealed_triplet


def test_every_placement_is_listed():
    decomposition = Decomposition(
        head=TileKind.S5,
        groups=(
            Group(Exposure.run, TileKind.S3),
            Group(Exposure.run, TileKind.M1),
            Group(Exposure.run, TileKind.P1),
            Group(Exposure.concealed_triplet, TileKind.WHITE),
        ),
    )
    waits = {i.wait for i in interpretations(decomposition, TileKind.S5, tsumo=True)}
    assert waits == {WaitShape.tanki, WaitShape.ryanmen}


def test_group_exposure():
    assert Group(Exposure.open_quad, TileKind.RED).is_triplet
    assert not Group(Exposure.open_quad, TileKind.RED).is_concealed
    assert Group(Exposure.concealed_quad, TileKind.M1).is_concealed
    assert not Group(Exposure.called_run, TileKind.M1).is_concealed
