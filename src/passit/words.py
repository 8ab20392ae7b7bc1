"""Word lists: caller-provided lists and the lists bundled as data files."""

from __future__ import annotations

from pathlib import Path
import threading

from loguru import logger

from passit.charset import Slice, is_surrogate
from passit.config import settings
from passit.errors import InvalidTemplateError, WordListUnavailableError
from passit.generator import Generator
from passit.reader import N_MAX, Reader, read_slice_n


def from_words(*words: str) -> Generator:
    """Return a Generator that picks one word from ``words``.

    Raises InvalidTemplateError if the list has fewer than two words, or a
    word is empty, contains whitespace or a lone surrogate, or is repeated.
    """
    if len(words) < 2:
        raise InvalidTemplateError("list too short")
    if len(words) > N_MAX:
        raise InvalidTemplateError("list too long")

    seen: set[str] = set()
    for word in words:
        if not word:
            raise InvalidTemplateError("empty word in list")
        if any(is_surrogate(ch) for ch in word):
            raise InvalidTemplateError("word contains invalid unicode rune")
        if any(ch.isspace() for ch in word):
            raise InvalidTemplateError("word contains space")
        if word in seen:
            raise InvalidTemplateError("list contains duplicate word")
        seen.add(word)

    return Slice(tuple(words))


class EmbeddedList(Generator):
    """A Generator that returns one entry of a newline-delimited data file.

    The file is read from ``settings.data_dir`` and split on first use;
    later calls reuse the parsed list.
    """

    def __init__(self, filename: str, description: str = ""):
        self.filename = filename
        self.description = description
        self._lock = threading.Lock()
        self._list: tuple[str, ...] | None = None

    def __repr__(self) -> str:
        return f"EmbeddedList({self.filename!r})"

    @property
    def path(self) -> Path:
        return settings.data_dir / self.filename

    def available(self) -> bool:
        return self._list is not None or self.path.is_file()

    @property
    def entries(self) -> tuple[str, ...]:
        entries = self._list
        if entries is not None:
            return entries

        with self._lock:
            if self._list is None:
                self._list = self._load()
            return self._list

    def _load(self) -> tuple[str, ...]:
        path = self.path
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise WordListUnavailableError(
                f"word list {self.filename} is not installed in {path.parent}; "
                "set PASSIT_DATA_DIR to a directory containing it"
            ) from e

        entries = tuple(raw.removesuffix("\n").split("\n"))
        logger.debug("Loaded {} entries from {}", len(entries), path)
        return entries

    def password(self, r: Reader) -> str:
        return read_slice_n(r, self.entries)


ORCHARD_STREET_MEDIUM = EmbeddedList(
    "orchard-street-medium.txt",
    "Sam Schlinkert's Orchard Street Medium List: 8,192 words, 13.000 bits "
    "per word, uniquely decodable. CC BY-SA 4.0.",
)
ORCHARD_STREET_LONG = EmbeddedList(
    "orchard-street-long.txt",
    "Sam Schlinkert's Orchard Street Long List: 17,576 words, 14.101 bits "
    "per word, uniquely decodable. CC BY-SA 4.0.",
)
ORCHARD_STREET_ALPHA = EmbeddedList(
    "orchard-street-alpha.txt",
    "Sam Schlinkert's Orchard Street Alpha List: 1,296 words, 10.340 bits "
    "per word, uniquely decodable. CC BY-SA 4.0.",
)
ORCHARD_STREET_QWERTY = EmbeddedList(
    "orchard-street-qwerty.txt",
    "Sam Schlinkert's Orchard Street QWERTY List: 1,296 words, 10.340 bits "
    "per word, uniquely decodable. CC BY-SA 4.0.",
)
STS10 = EmbeddedList(
    "sts10_wordlist.txt",
    "Sam Schlinkert's 1Password Replacement List: 18,208 words, 14.152 bits "
    "per word, not uniquely decodable; use with separators. CC BY 3.0.",
)
EFF_LARGE = EmbeddedList(
    "eff_large_wordlist.txt",
    "EFF Large Wordlist for Passphrases: 7,776 words, 12.925 bits per word. "
    "CC BY 3.0 US.",
)
EFF_SHORT1 = EmbeddedList(
    "eff_short_wordlist_1.txt",
    "EFF Short Wordlist for Passphrases #1: 1,296 words, 10.340 bits per "
    "word. CC BY 3.0 US.",
)
EFF_SHORT2 = EmbeddedList(
    "eff_short_wordlist_2_0.txt",
    "EFF Short Wordlist for Passphrases #2: 1,296 words, 10.340 bits per "
    "word. CC BY 3.0 US.",
)
EMOJI_13 = EmbeddedList(
    "emoji_13.0.txt", "Fully-qualified emoji from the Unicode 13.0 emoji list."
)
EMOJI_15 = EmbeddedList(
    "emoji_15.0.txt", "Fully-qualified emoji from the Unicode 15.0 emoji list."
)
EMOJI_LATEST = EMOJI_15


WORD_LISTS: dict[str, EmbeddedList] = {
    "orchard:medium": ORCHARD_STREET_MEDIUM,
    "orchard:long": ORCHARD_STREET_LONG,
    "orchard:alpha": ORCHARD_STREET_ALPHA,
    "orchard:qwerty": ORCHARD_STREET_QWERTY,
    "sts10": STS10,
    "eff": EFF_LARGE,
    "eff:large": EFF_LARGE,
    "eff:short1": EFF_SHORT1,
    "eff:short2": EFF_SHORT2,
}


def word_list_by_name(name: str) -> EmbeddedList | None:
    return WORD_LISTS.get(name.lower())
