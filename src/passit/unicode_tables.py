"""Curated Unicode tables used when sampling "any" character."""

from functools import cache
from typing import Callable
import unicodedata

from loguru import logger

from passit.rangetable import MAX_RUNE, RangeTable, runs


# Deprecated, from PropList.txt.
DEPRECATED: tuple[tuple[int, int], ...] = (
    (0x0149, 0x0149),
    (0x0673, 0x0673),
    (0x0F77, 0x0F77),
    (0x0F79, 0x0F79),
    (0x17A3, 0x17A4),
    (0x206A, 0x206F),
    (0x2329, 0x232A),
    (0xE0001, 0xE0001),
)

# Other_Default_Ignorable_Code_Point, from PropList.txt.
OTHER_DEFAULT_IGNORABLE: tuple[tuple[int, int], ...] = (
    (0x034F, 0x034F),
    (0x115F, 0x1160),
    (0x17B4, 0x17B5),
    (0x2065, 0x2065),
    (0x3164, 0x3164),
    (0xFFA0, 0xFFA0),
    (0xFFF0, 0xFFF8),
    (0xE0000, 0xE0000),
    (0xE0002, 0xE001F),
    (0xE0080, 0xE00FF),
    (0xE01F0, 0xE0FFF),
)

VARIATION_SELECTORS: tuple[tuple[int, int], ...] = (
    (0x180B, 0x180D),
    (0x180F, 0x180F),
    (0xFE00, 0xFE0F),
    (0xE0100, 0xE01EF),
)

# Swastikas and their confusables.
SKIPPED: frozenset[int] = frozenset({0x0FD5, 0x0FD6, 0x534D, 0x5350})

ALLOWED_CATEGORIES: frozenset[str] = frozenset({"Lu", "Ll", "Lt", "Lo", "Mn"})
ALLOWED_MAJOR_CATEGORIES: frozenset[str] = frozenset({"N", "P", "S"})


def _excluded() -> set[int]:
    excluded = set(SKIPPED)
    for table in (DEPRECATED, OTHER_DEFAULT_IGNORABLE, VARIATION_SELECTORS):
        for lo, hi in table:
            excluded.update(range(lo, hi + 1))
    return excluded


def _table_where(predicate: Callable[[int], bool], start: int = 0) -> RangeTable:
    return RangeTable.from_pairs(
        runs(cp for cp in range(start, MAX_RUNE + 1) if predicate(cp))
    )


@cache
def unicode_any() -> RangeTable:
    """Return the table sampled for "any" character in Unicode mode.

    Built on first use: letters (except modifier letters), nonspacing marks,
    numbers, punctuation and symbols, minus deprecated and default-ignorable
    code points, variation selectors and a few skipped code points. ASCII is
    limited to the printable range.
    """
    excluded = _excluded()

    def allowed(cp: int) -> bool:
        if cp <= 0x7E:
            return cp >= 0x20
        if cp in excluded:
            return False
        category = unicodedata.category(chr(cp))
        return (
            category in ALLOWED_CATEGORIES
            or category[0] in ALLOWED_MAJOR_CATEGORIES
        )

    tab = _table_where(allowed, start=0x20)
    logger.debug(
        "Built Unicode any table: {} code points in {} ranges (Unicode {})",
        tab.count(),
        len(tab.r16) + len(tab.r32),
        unicodedata.unidata_version,
    )
    return tab


@cache
def unicode_category_table(name: str) -> RangeTable:
    """Return the table for a regex shorthand class in Unicode mode.

    ``name`` is one of "digit", "word" or "space", matching what ``\\d``,
    ``\\w`` and ``\\s`` match in a ``str`` pattern.
    """
    match name:
        case "digit":
            predicate = lambda cp: chr(cp).isdecimal()  # noqa: E731
        case "word":
            predicate = lambda cp: cp == 0x5F or chr(cp).isalnum()  # noqa: E731
        case "space":
            predicate = lambda cp: chr(cp).isspace()  # noqa: E731
        case _:
            raise ValueError(f"Unknown category table: {name}")

    return _table_where(predicate)


ASCII_CATEGORY_PAIRS: dict[str, tuple[tuple[int, int], ...]] = {
    "digit": ((0x30, 0x39),),
    "word": ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)),
    "space": ((0x09, 0x0D), (0x20, 0x20)),
}
