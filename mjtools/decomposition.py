"""Enumeration of the ways a completed hand splits into a head and four groups."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Mapping

from mjtools.schemas import Meld, MeldType
from mjtools.tiles import TileKind

_SLOTS = max(TileKind) + 1


class Exposure(str, Enum):
    run = "run"
    called_run = "called_run"
    concealed_triplet = "concealed_triplet"
    open_triplet = "open_triplet"
    concealed_quad = "concealed_quad"
    open_quad = "open_quad"


class WaitShape(str, Enum):
    ryanmen = "ryanmen"
    kanchan = "kanchan"
    penchan = "penchan"
    tanki = "tanki"
    shanpon = "shanpon"


@dataclass(frozen=True)
class Group:
    exposure: Exposure
    kind: TileKind

    @property
    def is_run(self) -> bool:
        return self.exposure in {Exposure.run, Exposure.called_run}

    @property
    def is_triplet(self) -> bool:
        """Triplets and quads alike."""
        return not self.is_run

    @property
    def is_concealed(self) -> bool:
        return self.exposure in {Exposure.run, Exposure.concealed_triplet, Exposure.concealed_quad}


@dataclass(frozen=True)
class Decomposition:
    head: TileKind
    groups: tuple[Group, ...]


@dataclass(frozen=True)
class Interpretation:
    """A decomposition read with the wait the winning tile completed."""

    head: TileKind
    groups: tuple[Group, ...]
    wait: WaitShape


_MELD_EXPOSURE = {
    MeldType.chi: Exposure.called_run,
    MeldType.pon: Exposure.open_triplet,
    MeldType.kan: Exposure.open_quad,
    MeldType.kakan: Exposure.open_quad,
    MeldType.ankan: Exposure.concealed_quad,
}


def groups_from_melds(melds: Iterable[Meld]) -> tuple[Group, ...]:
    return tuple(Group(_MELD_EXPOSURE[m.type], m.base_kind) for m in melds)


def _partition(counts: tuple[int, ...], needed: int) -> list[tuple[Group, ...]]:
    first = next((i for i, c in enumerate(counts) if c > 0), -1)
    if first == -1:
        return [()] if needed == 0 else []
    if needed == 0:
        return []

    kind = TileKind(first)
    found: list[tuple[Group, ...]] = []
    if counts[first] >= 3:
        rest = list(counts)
        rest[first] -= 3
        group = Group(Exposure.concealed_triplet, kind)
        found.extend((group,) + tail for tail in _partition(tuple(rest), needed - 1))
    if kind.is_suhai and kind.number <= 7 and counts[first + 1] and counts[first + 2]:
        rest = list(counts)
        rest[first] -= 1
        rest[first + 1] -= 1
        rest[first + 2] -= 1
        group = Group(Exposure.run, kind)
        found.extend((group,) + tail for tail in _partition(tuple(rest), needed - 1))
    return found


def decompose(concealed: Mapping[TileKind, int], melds: Iterable[Meld] = ()) -> list[Decomposition]:
    """All head + group splits of ``concealed`` (which includes the winning tile).

    Called melds are kept as fixed groups; the concealed part must supply the
    remaining ``4 - len(melds)`` groups.
    """
    fixed = groups_from_melds(melds)
    needed = 4 - len(fixed)
    if needed < 0:
        return []

    slots = [0] * _SLOTS
    for kind, c in concealed.items():
        slots[kind] += c

    result: list[Decomposition] = []
    for kind in sorted(k for k, c in concealed.items() if c >= 2):
        work = list(slots)
        work[kind] -= 2
        for groups in _partition(tuple(work), needed):
            result.append(Decomposition(head=kind, groups=fixed + groups))
    return result


def _run_wait(start: TileKind, win: TileKind) -> WaitShape | None:
    if not win.is_suhai or win.suit != start.suit:
        return None
    pos = win.number - start.number
    if pos == 1:
        return WaitShape.kanchan
    if (pos == 0 and start.number == 7) or (pos == 2 and start.number == 1):
        return WaitShape.penchan
    if pos in (0, 2):
        return WaitShape.ryanmen
    return None


def interpretations(decomposition: Decomposition, win: TileKind, tsumo: bool) -> list[Interpretation]:
    """Every placement of the winning tile into a concealed group of the decomposition.

    On a win by claim, a concealed triplet completed by the winning tile
    counts as an open triplet.
    """
    found: dict[Interpretation, None] = {}
    if decomposition.head == win:
        found[Interpretation(decomposition.head, decomposition.groups, WaitShape.tanki)] = None

    for idx, group in enumerate(decomposition.groups):
        if group.exposure == Exposure.run:
            wait = _run_wait(group.kind, win)
            if wait is not None:
                found[Interpretation(decomposition.head, decomposition.groups, wait)] = None
        elif group.exposure == Exposure.concealed_triplet and group.kind == win:
            groups = decomposition.groups
            if not tsumo:
                groups = groups[:idx] + (replace(group, exposure=Exposure.open_triplet),) + groups[idx + 1 :]
            found[Interpretation(decomposition.head, groups, WaitShape.shanpon)] = None
    return list(found)
