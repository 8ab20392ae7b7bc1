from __future__ import annotations

from dataclasses import dataclass
import string

from passit.errors import InvalidTemplateError
from passit.generator import Generator
from passit.rangetable import RangeTable, intersect
from passit.reader import N_MAX, Reader, read_int_n, read_rune, read_slice_n
from passit.unicode_tables import unicode_any


def is_surrogate(ch: str) -> bool:
    return 0xD800 <= ord(ch) <= 0xDFFF


@dataclass(frozen=True)
class Charset(Generator):
    runes: tuple[str, ...]
    count: int

    def password(self, r: Reader) -> str:
        n = len(self.runes)
        return "".join([self.runes[read_int_n(r, n)] for _ in range(self.count)])


def charset(template: str, count: int = 1) -> Generator:
    """Return a Generator of ``count`` runes drawn uniformly from ``template``.

    The template must contain at least two distinct runes, no duplicates and
    no lone surrogates; otherwise InvalidTemplateError is raised.
    """
    assert count > 0, "count must be positive"

    runes = tuple(template)
    if len(runes) < 2:
        raise InvalidTemplateError("template too short")
    if len(runes) > N_MAX:
        raise InvalidTemplateError("template too long")

    for ch in runes:
        if is_surrogate(ch):
            raise InvalidTemplateError(
                f"template contains invalid unicode rune U+{ord(ch):04X}"
            )

    if len(set(runes)) != len(runes):
        raise InvalidTemplateError("template contains duplicate rune")

    return Charset(runes, count)


DIGIT = charset(string.digits)
LATIN_LOWER = charset(string.ascii_lowercase)
LATIN_UPPER = charset(string.ascii_uppercase)
LATIN_MIXED = charset(string.ascii_lowercase + string.ascii_uppercase)
LATIN_LOWER_DIGIT = charset(string.ascii_lowercase + string.digits)
LATIN_UPPER_DIGIT = charset(string.ascii_uppercase + string.digits)
LATIN_MIXED_DIGIT = charset(
    string.ascii_lowercase + string.ascii_uppercase + string.digits
)


@dataclass(frozen=True)
class RangeTableCharset(Generator):
    tab: RangeTable
    runes: int
    count: int

    def password(self, r: Reader) -> str:
        return "".join([read_rune(r, self.tab, self.runes) for _ in range(self.count)])


def from_range_table(tab: RangeTable, count: int = 1) -> Generator:
    """Return a Generator of ``count`` runes drawn uniformly from ``tab``.

    The table is first restricted to the Unicode any table; if nothing is
    left InvalidTemplateError is raised.
    """
    assert count > 0, "count must be positive"

    tab = intersect(tab, unicode_any())
    runes = tab.count()
    if runes == 0:
        raise InvalidTemplateError("range table contains zero allowed runes")
    if runes > N_MAX:
        raise InvalidTemplateError("range table too large")

    return RangeTableCharset(tab, runes, count)


@dataclass(frozen=True)
class Slice(Generator):
    items: tuple[str, ...]

    def password(self, r: Reader) -> str:
        return read_slice_n(r, self.items)


def from_slice(items: list[str] | tuple[str, ...]) -> Generator:
    """Return a Generator that picks one of ``items`` uniformly."""
    assert 0 < len(items) <= N_MAX, "items must be non-empty"
    return Slice(tuple(items))
