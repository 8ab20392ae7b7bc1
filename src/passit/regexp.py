"""Generate passwords that match a regular expression.

A pattern is parsed with the standard library's regular expression parser
and its syntax tree is turned into a tree of generators. Every repetition is
a single uniform draw of its count; unbounded repetitions (``*``, ``+``,
``{n,}``) allow at most MAX_UNBOUNDED_REPEAT extra copies, so ``x+`` and
``x{1,}`` both produce 1 to 16 copies.

The parse tree is used as-is. Rewriting it (for example
expanding ``x{3,6}`` into nested optional groups) would change how many
bytes are drawn and therefore the output for a given stream.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
import re._constants as sre
import re._parser as sre_parse
from typing import Callable

from loguru import logger

from passit.charset import RangeTableCharset
from passit.errors import InvalidTemplateError, RegexpCompileError
from passit.generator import EMPTY, Fixed, Generator, alternate, join, random_repeat, repeat
from passit.rangetable import (
    ASCII_ANY,
    MAX_RUNE,
    RangeTable,
    complement_pairs,
    intersect,
    merge_pairs,
    unstride,
)
from passit.reader import N_MAX, Reader
from passit.unicode_tables import (
    ASCII_CATEGORY_PAIRS,
    unicode_any,
    unicode_category_table,
)


MAX_UNBOUNDED_REPEAT = 15

# Library flag selecting the curated Unicode table for "." and character
# classes, and Unicode meanings for \d, \w and \s. It lies outside the
# bits used by the re module and is stripped before parsing.
UNICODE_ANY = 1 << 24

SubPattern = sre_parse.SubPattern
SpecialCaptureFactory = Callable[[SubPattern], Generator]

_REPEAT_OPS = frozenset(
    op
    for op in (
        sre.MAX_REPEAT,
        sre.MIN_REPEAT,
        getattr(sre, "POSSESSIVE_REPEAT", None),
    )
    if op is not None
)

_NOOP_OPS = frozenset({sre.AT})

_CATEGORIES: dict[object, tuple[str, bool]] = {
    sre.CATEGORY_DIGIT: ("digit", False),
    sre.CATEGORY_NOT_DIGIT: ("digit", True),
    sre.CATEGORY_SPACE: ("space", False),
    sre.CATEGORY_NOT_SPACE: ("space", True),
    sre.CATEGORY_WORD: ("word", False),
    sre.CATEGORY_NOT_WORD: ("word", True),
}

_SURROGATES = (0xD800, 0xDFFF)


# POSIX bracket expressions with their ASCII meaning, as in Perl and RE2.
POSIX_CLASSES: dict[str, tuple[tuple[int, int], ...]] = {
    "alnum": ((0x30, 0x39), (0x41, 0x5A), (0x61, 0x7A)),
    "alpha": ((0x41, 0x5A), (0x61, 0x7A)),
    "ascii": ((0x00, 0x7F),),
    "blank": ((0x09, 0x09), (0x20, 0x20)),
    "cntrl": ((0x00, 0x1F), (0x7F, 0x7F)),
    "digit": ((0x30, 0x39),),
    "graph": ((0x21, 0x7E),),
    "lower": ((0x61, 0x7A),),
    "print": ((0x20, 0x7E),),
    "punct": ((0x21, 0x2F), (0x3A, 0x40), (0x5B, 0x60), (0x7B, 0x7E)),
    "space": ((0x09, 0x0D), (0x20, 0x20)),
    "upper": ((0x41, 0x5A),),
    "word": ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)),
    "xdigit": ((0x30, 0x39), (0x41, 0x46), (0x61, 0x66)),
}

_POSIX_RE = re.compile(r"\[:(\^?)([a-z]+):\]")
_HEX_BRACE_RE = re.compile(r"\{([0-9A-Fa-f]{1,8})\}")


def _escape(cp: int) -> str:
    return f"\\U{cp:08x}"


def _render_pairs(pairs: list[tuple[int, int]] | tuple[tuple[int, int], ...]) -> str:
    return "".join(
        _escape(lo) if lo == hi else f"{_escape(lo)}-{_escape(hi)}"
        for lo, hi in pairs
    )


def translate_pattern(pattern: str) -> str:
    """Rewrite RE2/Perl syntax the re parser lacks into equivalent escapes.

    ``\\x{HHHH}`` becomes ``\\UHHHHHHHH`` and POSIX classes such as
    ``[:upper:]`` or ``[:^digit:]`` inside a set become explicit ranges.
    Anything else is passed through untouched.
    """
    out: list[str] = []
    i = 0
    in_set = False
    set_start = 0

    while i < len(pattern):
        ch = pattern[i]

        if ch == "\\":
            if pattern.startswith("x{", i + 1):
                m = _HEX_BRACE_RE.match(pattern, i + 2)
                if m:
                    cp = int(m[1], 16)
                    if cp > MAX_RUNE:
                        raise RegexpCompileError(
                            f"invalid escape \\x{{{m[1]}}}: beyond U+10FFFF"
                        )
                    out.append(_escape(cp))
                    i = m.end()
                    continue
            out.append(pattern[i : i + 2])
            i += 2
            continue

        if in_set:
            if ch == "[":
                m = _POSIX_RE.match(pattern, i)
                if m and m[2] in POSIX_CLASSES:
                    pairs = POSIX_CLASSES[m[2]]
                    if m[1]:
                        pairs = complement_pairs(pairs)
                    out.append(_render_pairs(pairs))
                    i = m.end()
                    continue
            elif ch == "]" and i > set_start:
                in_set = False
        elif ch == "[":
            in_set = True
            set_start = i + 1
            if pattern.startswith("^", set_start):
                set_start += 1
            out.append(pattern[i:set_start])
            i = set_start
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def _describe(pairs: list[tuple[int, int]], negate: bool) -> str:
    def fmt(cp: int) -> str:
        ch = chr(cp)
        if ch.isprintable() and ch not in "\\]-^" and cp < 0x80:
            return ch
        return f"\\x{{{cp:x}}}"

    body = "".join(fmt(lo) if lo == hi else f"{fmt(lo)}-{fmt(hi)}" for lo, hi in pairs)
    return f"[{'^' if negate else ''}{body}]"


@dataclass(frozen=True)
class SpecialCapture(Generator):
    name: str
    gen: Generator

    def password(self, r: Reader) -> str:
        pass_ = self.gen.password(r)
        try:
            pass_.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidTemplateError(
                f"special capture {self.name} output contains invalid unicode rune"
            ) from e
        return pass_


@dataclass(frozen=True)
class RegexpTemplate(Generator):
    pattern: str
    root: Generator

    def password(self, r: Reader) -> str:
        return self.root.password(r)


class _Compiler:
    def __init__(
        self,
        any_tab: RangeTable,
        unicode_classes: bool,
        special_captures: dict[str, SpecialCaptureFactory],
        group_names: dict[int, str],
    ):
        self.any_tab = any_tab
        self.unicode_classes = unicode_classes
        self.special_captures = special_captures
        self.group_names = group_names

    def sequence(self, sub: SubPattern, flags: int) -> Generator:
        gens: list[Generator] = []
        for op, av in sub.data:
            gen = self.node(op, av, flags)
            if gen == EMPTY:
                continue
            if gens and isinstance(gen, Fixed) and isinstance(gens[-1], Fixed):
                gens[-1] = Fixed(gens[-1].value + gen.value)
                continue
            gens.append(gen)
        return join("", *gens)

    def node(self, op, av, flags: int) -> Generator:
        if op is sre.LITERAL:
            if _SURROGATES[0] <= av <= _SURROGATES[1]:
                raise RegexpCompileError(
                    f"invalid literal U+{av:04X}: surrogate code point"
                )
            return Fixed(chr(av))
        if op is sre.NOT_LITERAL:
            return self.char_class([(sre.NEGATE, None), (sre.LITERAL, av)], flags)
        if op is sre.IN:
            return self.char_class(av, flags)
        if op is sre.ANY:
            return self.runes(self.any_tab, "any character")
        if op in _NOOP_OPS:
            return EMPTY
        if op is sre.SUBPATTERN:
            return self.capture(av, flags)
        if op is getattr(sre, "ATOMIC_GROUP", None):
            return self.sequence(av, flags)
        if op in _REPEAT_OPS:
            return self.repeat(av, flags)
        if op is sre.BRANCH:
            _, branches = av
            return alternate(*[self.sequence(b, flags) for b in branches])

        raise RegexpCompileError(f"unsupported regexp op {op}")

    def capture(self, av, flags: int) -> Generator:
        group, add_flags, del_flags, sub = av
        flags = (flags | add_flags) & ~del_flags

        name = self.group_names.get(group) if group is not None else None
        factory = self.special_captures.get(name) if name else None
        if factory is None:
            return self.sequence(sub, flags)

        gen = factory(sub)
        logger.debug("Using special capture {} for group {}", name, group)
        return SpecialCapture(name, gen)

    def repeat(self, av, flags: int) -> Generator:
        lo, hi, sub = av
        if hi == sre.MAXREPEAT:
            hi = lo + MAX_UNBOUNDED_REPEAT

        gen = self.sequence(sub, flags)
        try:
            return random_repeat(gen, "", lo, hi)
        except ValueError as e:
            raise RegexpCompileError(f"repeat {{{lo},{hi}}}: {e}") from e

    def category_pairs(self, name: str, flags: int) -> list[tuple[int, int]]:
        if self.unicode_classes and not flags & sre.SRE_FLAG_ASCII:
            return list(unicode_category_table(name).pairs())
        return list(ASCII_CATEGORY_PAIRS[name])

    def char_class(self, items, flags: int) -> Generator:
        negate = False
        pairs: list[tuple[int, int]] = []

        for op, av in items:
            if op is sre.NEGATE:
                negate = True
            elif op is sre.LITERAL:
                pairs.append((av, av))
            elif op is sre.RANGE:
                pairs.append(av)
            elif op is sre.CATEGORY and av in _CATEGORIES:
                name, negated = _CATEGORIES[av]
                category = self.category_pairs(name, flags)
                if negated:
                    category = complement_pairs(category)
                pairs.extend(category)
            else:
                raise RegexpCompileError(f"unsupported character class item {op} {av}")

        pairs = merge_pairs(pairs)
        description = _describe(pairs, negate)

        if negate:
            pairs = complement_pairs(pairs)

        tab = RangeTable.from_pairs(_without(pairs, _SURROGATES))
        tab = intersect(tab, self.any_tab)

        return self.runes(tab, f"character class {description}")

    def runes(self, tab: RangeTable, description: str) -> Generator:
        count = tab.count()
        if count == 0:
            raise RegexpCompileError(f"{description} contains zero allowed runes")
        if count > N_MAX:
            raise RegexpCompileError(f"{description} is too large")
        return RangeTableCharset(tab, count, 1)


def _without(pairs: list[tuple[int, int]], hole: tuple[int, int]) -> list[tuple[int, int]]:
    out: list[tuple[int, int]] = []
    for lo, hi in pairs:
        if hi < hole[0] or lo > hole[1]:
            out.append((lo, hi))
            continue
        if lo < hole[0]:
            out.append((lo, hole[0] - 1))
        if hi > hole[1]:
            out.append((hole[1] + 1, hi))
    return out


class RegexpParser:
    """Parses regular expressions into generators of matching passwords.

    A new parser samples "." and every character class from printable
    ASCII, and \\d, \\w and \\s have their ASCII meaning.
    """

    def __init__(self):
        self._any_tab: RangeTable | None = None
        self._unicode_any = False
        self._special_captures: dict[str, SpecialCaptureFactory] = {}

    def set_any_range_table(self, tab: RangeTable) -> None:
        """Use ``tab`` for "." and to restrict every character class."""
        if not tab.is_stride1():
            tab = unstride(tab)
        self._any_tab = tab

    def set_unicode_any(self) -> None:
        """Use the curated Unicode table for "." and character classes.

        \\d, \\w and \\s also take their Unicode meaning, except under
        re.ASCII.
        """
        self._unicode_any = True

    def set_special_capture(self, name: str, factory: SpecialCaptureFactory) -> None:
        """Replace named captures ``(?P<name>...)`` with the generator that
        ``factory`` builds from the capture's contents.
        """
        self._special_captures[name] = factory

    def _any_range_table(self, flags: int) -> RangeTable:
        if self._any_tab is not None:
            return self._any_tab
        if self._unicode_any or flags & UNICODE_ANY:
            return unicode_any()
        return ASCII_ANY

    def parse(self, pattern: str, flags: int = 0) -> Generator:
        """Compile ``pattern`` into a Generator of strings that match it.

        ``flags`` are re module flags, optionally with UNICODE_ANY.
        re.DOTALL is always set and re.IGNORECASE is ignored.
        """
        any_tab = self._any_range_table(flags)
        unicode_classes = self._unicode_any or bool(flags & UNICODE_ANY)

        flags = int(flags) & ~(UNICODE_ANY | int(re.IGNORECASE))
        flags |= int(re.DOTALL)

        try:
            parsed = sre_parse.parse(translate_pattern(pattern), flags)
        except re.error as e:
            raise RegexpCompileError(f"invalid regexp {pattern!r}: {e}") from e

        group_names = {gid: name for name, gid in parsed.state.groupdict.items()}
        compiler = _Compiler(
            any_tab, unicode_classes, dict(self._special_captures), group_names
        )
        root = compiler.sequence(parsed, parsed.state.flags)

        logger.debug("Compiled regexp template {!r}", pattern)
        return RegexpTemplate(pattern, root)


def parse_regexp(pattern: str, flags: int = 0) -> Generator:
    """Shortcut for ``RegexpParser().parse(pattern, flags)``."""
    return RegexpParser().parse(pattern, flags)


def literal_text(sub: SubPattern) -> str | None:
    """Return the text of a capture made only of literal characters, or None."""
    if not all(op is sre.LITERAL for op, _ in sub.data):
        return None
    return "".join(chr(av) for _, av in sub.data)


def special_capture_basic(gen: Generator) -> SpecialCaptureFactory:
    """Return a factory that accepts only an empty capture, ``(?P<name>)``,
    and always uses ``gen``.
    """

    def factory(sub: SubPattern) -> Generator:
        if sub.data:
            raise RegexpCompileError("unsupported capture")
        return gen

    return factory


def with_repeat(gen: Generator, sep: str) -> SpecialCaptureFactory:
    """Return a factory that repeats ``gen`` as the capture's contents ask.

    ``(?P<name>.{2,4})`` (any repetition) gives 2 to 4 outputs of ``gen``
    joined with ``sep``; ``(?P<name>3)`` gives exactly three; anything else,
    including an empty capture, gives ``gen`` once.
    """

    def factory(sub: SubPattern) -> Generator:
        items = sub.data

        for op, av in items:
            if op in _REPEAT_OPS:
                lo, hi, _ = av
                if hi == sre.MAXREPEAT:
                    hi = lo + MAX_UNBOUNDED_REPEAT
                try:
                    return random_repeat(gen, sep, lo, hi)
                except ValueError as e:
                    raise RegexpCompileError(f"failed to parse capture: {e}") from e

        text = literal_text(sub)
        if text and text.isascii() and text.isdigit():
            count = int(text)
            if count > N_MAX:
                raise RegexpCompileError("failed to parse capture: count too large")
            return repeat(gen, sep, count)

        return gen

    return factory
