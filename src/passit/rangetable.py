from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property
from itertools import accumulate
from typing import Iterable, Iterator, NamedTuple


MAX_R16 = 0xFFFF
MAX_RUNE = 0x10FFFF
MAX_ASCII = 0x7F


class Range(NamedTuple):
    lo: int
    hi: int
    stride: int = 1

    def size(self) -> int:
        return (self.hi - self.lo) // self.stride + 1


def _check_ranges(ranges: tuple[Range, ...], lo_bound: int, hi_bound: int) -> None:
    prev_hi = -1
    for rng in ranges:
        if not (lo_bound <= rng.lo <= rng.hi <= hi_bound):
            raise ValueError(f"range {rng} out of bounds")
        if rng.stride < 1 or (rng.hi - rng.lo) % rng.stride:
            raise ValueError(f"range {rng} has invalid stride")
        if rng.lo <= prev_hi:
            raise ValueError(f"range {rng} overlaps or is out of order")
        prev_hi = rng.hi


def _latin_offset(r16: Iterable[Range]) -> int:
    return sum(1 for rng in r16 if rng.hi <= MAX_ASCII)


@dataclass(frozen=True)
class RangeTable:
    """A set of Unicode code points stored as sorted ranges.

    Ranges up to U+FFFF live in ``r16``, the rest in ``r32``.
    ``latin_offset`` counts the leading ``r16`` ranges that lie entirely in
    ASCII.
    """

    r16: tuple[Range, ...] = ()
    r32: tuple[Range, ...] = ()
    latin_offset: int = 0

    def __post_init__(self):
        _check_ranges(self.r16, 0, MAX_R16)
        _check_ranges(self.r32, MAX_R16 + 1, MAX_RUNE)

    @classmethod
    def from_ranges(cls, r16: Iterable[Range], r32: Iterable[Range]) -> RangeTable:
        r16 = tuple(r16)
        return cls(r16, tuple(r32), _latin_offset(r16))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> RangeTable:
        """Build a table from sorted, disjoint ``(lo, hi)`` pairs."""
        r16: list[Range] = []
        r32: list[Range] = []
        for lo, hi in pairs:
            append_range(r16, r32, lo, hi)
        return cls.from_ranges(r16, r32)

    @classmethod
    def from_runes(cls, runes: Iterable[str | int]) -> RangeTable:
        points = sorted({ord(r) if isinstance(r, str) else r for r in runes})
        return cls.from_pairs(runs(points))

    def count(self) -> int:
        return sum(rng.size() for rng in self.r16) + sum(
            rng.size() for rng in self.r32
        )

    def __iter__(self) -> Iterator[int]:
        for rng in (*self.r16, *self.r32):
            yield from range(rng.lo, rng.hi + 1, rng.stride)

    def __contains__(self, cp: object) -> bool:
        if isinstance(cp, str):
            if len(cp) != 1:
                return False
            cp = ord(cp)
        if not isinstance(cp, int):
            return False

        for rng in self.r16 if cp <= MAX_R16 else self.r32:
            if rng.lo > cp:
                return False
            if cp <= rng.hi:
                return (cp - rng.lo) % rng.stride == 0
        return False

    @cached_property
    def _offsets(self) -> tuple[tuple[Range, ...], tuple[int, ...]]:
        ranges = (*self.r16, *self.r32)
        starts = tuple(accumulate((rng.size() for rng in ranges), initial=0))
        return ranges, starts

    def rune_at(self, index: int) -> int:
        """Return the code point at position ``index`` in ascending order."""
        ranges, starts = self._offsets
        assert 0 <= index < starts[-1], "index outside range table"

        k = bisect_right(starts, index) - 1
        rng = ranges[k]
        return rng.lo + (index - starts[k]) * rng.stride

    def is_stride1(self) -> bool:
        return all(rng.stride == 1 for rng in (*self.r16, *self.r32))

    def pairs(self) -> Iterator[tuple[int, int]]:
        """Yield ``(lo, hi)`` for each range; the table must be stride 1."""
        for rng in (*self.r16, *self.r32):
            yield rng.lo, rng.hi


def append_range(r16: list[Range], r32: list[Range], lo: int, hi: int) -> None:
    """Append [lo, hi] to the range lists, splitting at the 16-bit boundary."""
    if lo > MAX_R16:
        r32.append(Range(lo, hi))
        return

    if hi > MAX_R16:
        r32.append(Range(MAX_R16 + 1, hi))
        hi = MAX_R16

    r16.append(Range(lo, hi))


def runs(points: Iterable[int]) -> Iterator[tuple[int, int]]:
    """Collapse sorted, distinct code points into ``(lo, hi)`` runs."""
    lo = hi = None
    for cp in points:
        if hi is not None and cp == hi + 1:
            hi = cp
            continue
        if lo is not None:
            yield lo, hi
        lo = hi = cp
    if lo is not None:
        yield lo, hi


def merge_pairs(pairs: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Sort and merge possibly overlapping or adjacent ``(lo, hi)`` pairs."""
    merged: list[tuple[int, int]] = []
    for lo, hi in sorted(pairs):
        if merged and lo <= merged[-1][1] + 1:
            if hi > merged[-1][1]:
                merged[-1] = (merged[-1][0], hi)
            continue
        merged.append((lo, hi))
    return merged


def complement_pairs(pairs: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Complement sorted, disjoint pairs over [0, MAX_RUNE]."""
    out: list[tuple[int, int]] = []
    nxt = 0
    for lo, hi in pairs:
        if lo > nxt:
            out.append((nxt, lo - 1))
        nxt = hi + 1
    if nxt <= MAX_RUNE:
        out.append((nxt, MAX_RUNE))
    return out


def count(tab: RangeTable) -> int:
    return tab.count()


def unstride(tab: RangeTable) -> RangeTable:
    """Return an equivalent table in which every range has stride 1.

    Ranges with a larger stride are expanded into one range per code point.
    """
    if tab.is_stride1():
        return RangeTable.from_ranges(tab.r16, tab.r32)

    def expand(ranges: tuple[Range, ...]) -> Iterator[Range]:
        for rng in ranges:
            if rng.stride == 1:
                yield rng
                continue
            for cp in range(rng.lo, rng.hi + 1, rng.stride):
                yield Range(cp, cp)

    return RangeTable.from_ranges(expand(tab.r16), expand(tab.r32))


def _intersect_ranges(a: tuple[Range, ...], b: tuple[Range, ...]) -> list[Range]:
    out: list[Range] = []
    i = j = 0
    while i < len(a) and j < len(b):
        lo = max(a[i].lo, b[j].lo)
        hi = min(a[i].hi, b[j].hi)
        if lo <= hi:
            out.append(Range(lo, hi))
        if a[i].hi < b[j].hi:
            i += 1
        else:
            j += 1
    return out


def intersect(a: RangeTable, b: RangeTable) -> RangeTable:
    """Return the table of code points in both ``a`` and ``b``.

    ``b`` must have stride 1 throughout; ``a`` is unstrided first if needed.
    """
    assert b.is_stride1(), "intersect requires a stride 1 table"

    if not a.is_stride1():
        a = unstride(a)

    return RangeTable.from_ranges(
        _intersect_ranges(a.r16, b.r16), _intersect_ranges(a.r32, b.r32)
    )


ASCII_ANY = RangeTable.from_pairs([(0x20, 0x7E)])
