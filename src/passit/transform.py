from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

from passit.generator import Generator
from passit.reader import Reader


@dataclass(frozen=True)
class Transformed(Generator):
    gen: Generator
    fn: Callable[[str], str]

    def password(self, r: Reader) -> str:
        return self.fn(self.gen.password(r))


def transform(gen: Generator, fn: Callable[[str], str]) -> Generator:
    """Return a Generator that passes the output of ``gen`` through ``fn``."""
    return Transformed(gen, fn)


def lower_case(gen: Generator) -> Generator:
    return transform(gen, str.lower)


def upper_case(gen: Generator) -> Generator:
    return transform(gen, str.upper)


# Letters, digits and "_" form words; an apostrophe between letters doesn't
# break one.
_WORD_RE = re.compile(r"\w+(?:['’]\w+)*")


def _primary_language(tag: str) -> str:
    return re.split(r"[-_]", tag.strip(), maxsplit=1)[0].lower()


def title_caser(language: str = "en") -> Callable[[str], str]:
    """Return a function that title cases text for the given language tag.

    The first letter of each word is title cased and the rest lower cased.
    Turkish and Azerbaijani use the dotted and dotless i; Dutch capitalises a
    leading "ij" as a unit.
    """
    lang = _primary_language(language)

    def lower(s: str) -> str:
        if lang in ("tr", "az"):
            s = s.replace("I", "ı").replace("İ", "i")
        return s.lower()

    def title_word(m: re.Match[str]) -> str:
        word = m.group(0)
        if lang == "nl" and word[:2].lower() == "ij":
            return "IJ" + lower(word[2:])
        if lang in ("tr", "az") and word[0] == "i":
            return "İ" + lower(word[1:])
        return word[0].title() + lower(word[1:])

    def caser(s: str) -> str:
        return _WORD_RE.sub(title_word, s)

    return caser


def title_case(gen: Generator, language: str = "en") -> Generator:
    """Return a Generator that title cases the output of ``gen`` for ``language``."""
    return transform(gen, title_caser(language))
