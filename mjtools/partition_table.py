"""Per-suit partition table used by the standard shanten calculation.

A signature is the nine rank counts of one suit written as digits, e.g.
``"311111113"`` for 1112345678999. Each signature maps to the
(melds, partials) pair of its best decomposition, where "best" maximises
``2 * melds + partials`` and prefers more melds on ties.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from itertools import product
from pathlib import Path
from typing import Iterator, Mapping

from mjtools.config import settings

logger = logging.getLogger(__name__)

Partition = tuple[int, int]

MAX_SUIT_TILES = 14


def _score(entry: Partition) -> tuple[int, int]:
    melds, partials = entry
    return 2 * melds + partials, melds


@lru_cache(maxsize=None)
def _best(counts: tuple[int, ...]) -> Partition:
    first = next((i for i, c in enumerate(counts) if c > 0), -1)
    if first == -1:
        return 0, 0

    work = list(counts)

    def take(indices: tuple[int, ...], gain: Partition) -> Partition:
        for i in indices:
            work[i] -= 1
        melds, partials = _best(tuple(work))
        for i in indices:
            work[i] += 1
        return melds + gain[0], partials + gain[1]

    # the lowest tile is either left isolated or starts one of the groups below
    candidates = [take((first,), (0, 0))]
    if counts[first] >= 3:
        candidates.append(take((first, first, first), (1, 0)))
    if first <= 6 and counts[first + 1] and counts[first + 2]:
        candidates.append(take((first, first + 1, first + 2), (1, 0)))
    if counts[first] >= 2:
        candidates.append(take((first, first), (0, 1)))
    if first <= 7 and counts[first + 1]:
        candidates.append(take((first, first + 1), (0, 1)))
    if first <= 6 and counts[first + 2]:
        candidates.append(take((first, first + 2), (0, 1)))
    return max(candidates, key=_score)


def best_partition(signature: str) -> Partition:
    if len(signature) != 9 or any(c not in "01234" for c in signature):
        raise ValueError(f"Invalid suit signature: {signature!r}")
    return _best(tuple(int(c) for c in signature))


class PartitionTable:
    def __init__(self, entries: Mapping[str, Partition] | None = None) -> None:
        self._entries = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, signature: str) -> Partition:
        entry = self._entries.get(signature)
        if entry is None:
            entry = best_partition(signature)
        return entry


def _parse_line(line: str) -> tuple[str, Partition]:
    fields = line.split()
    if len(fields) == 3:
        return fields[0], (int(fields[1]), int(fields[2]))
    if len(fields) == 5:
        a = (int(fields[1]), int(fields[2]))
        b = (int(fields[3]), int(fields[4]))
        # two alternative decompositions are listed; keep the stronger one
        return fields[0], a if 2 * a[0] + a[1] >= 2 * b[0] + b[1] else b
    raise ValueError(f"Malformed partition table line: {line!r}")


def load_table(path: Path) -> PartitionTable:
    entries: dict[str, Partition] = {}
    with path.open(encoding="utf-8") as fh:
        for line in fh:
            if not line.strip() or line.startswith("#"):
                continue
            signature, entry = _parse_line(line)
            entries[signature] = entry
    logger.info("Loaded %d partition entries from %s", len(entries), path)
    return PartitionTable(entries)


def iter_signatures(max_tiles: int = MAX_SUIT_TILES) -> Iterator[str]:
    for counts in product(range(5), repeat=9):
        if sum(counts) <= max_tiles:
            yield "".join(str(c) for c in counts)


def write_table(path: Path, max_tiles: int = MAX_SUIT_TILES) -> int:
    written = 0
    with path.open("w", encoding="utf-8") as fh:
        for signature in iter_signatures(max_tiles):
            melds, partials = best_partition(signature)
            fh.write(f"{signature} {melds} {partials}\n")
            written += 1
    logger.info("Wrote %d partition entries to %s", written, path)
    return written


@lru_cache(maxsize=1)
def get_table() -> PartitionTable:
    if settings.partition_table_path is not None:
        return load_table(settings.partition_table_path)
    logger.debug("No partition table file configured; entries are derived on demand")
    return PartitionTable()
