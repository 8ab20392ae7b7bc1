"""The Generator contract and the combinators that compose generators.

A generator turns bytes from a reader into a string. Generators hold no
state between calls; all randomness comes from the reader, so the same tree
given the same stream produces the same output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from passit.reader import N_MAX, Reader, read_int_n, read_slice_n


class Generator(ABC):
    @abstractmethod
    def password(self, r: Reader) -> str:
        """Return a randomly generated password using ``r`` as the source of
        randomness.

        Only errors raised by ``r`` (or ShortReadError when it runs dry)
        escape from this method.
        """


@dataclass(frozen=True)
class FuncGenerator(Generator):
    """Adapter that lets a plain ``fn(reader) -> str`` act as a Generator."""

    fn: Callable[[Reader], str]

    def password(self, r: Reader) -> str:
        return self.fn(r)


@dataclass(frozen=True)
class Fixed(Generator):
    value: str

    def password(self, r: Reader) -> str:
        return self.value


def fixed(s: str) -> Generator:
    """Return a Generator that always returns ``s`` and never reads."""
    return Fixed(s)


EMPTY = Fixed("")
SPACE = Fixed(" ")
HYPHEN = Fixed("-")


@dataclass(frozen=True)
class Joined(Generator):
    gens: tuple[Generator, ...]
    sep: str

    def password(self, r: Reader) -> str:
        return self.sep.join([gen.password(r) for gen in self.gens])


def join(sep: str, *gens: Generator) -> Generator:
    """Concatenate the outputs of each generator, in order, separated by ``sep``."""
    match len(gens):
        case 0:
            return EMPTY
        case 1:
            return gens[0]
        case _:
            return Joined(tuple(gens), sep)


@dataclass(frozen=True)
class Repeated(Generator):
    gen: Generator
    sep: str
    count: int

    def password(self, r: Reader) -> str:
        return self.sep.join([self.gen.password(r) for _ in range(self.count)])


def repeat(gen: Generator, sep: str, count: int) -> Generator:
    """Invoke ``gen`` exactly ``count`` times and join the outputs with ``sep``."""
    assert count >= 0, "count must be positive"

    match count:
        case 0:
            return EMPTY
        case 1:
            return gen
        case _:
            return Repeated(gen, sep, count)


@dataclass(frozen=True)
class RandomRepeated(Generator):
    gen: Generator
    sep: str
    min: int
    n: int

    def password(self, r: Reader) -> str:
        count = self.min + read_int_n(r, self.n)
        return self.sep.join([self.gen.password(r) for _ in range(count)])


def random_repeat(gen: Generator, sep: str, min: int, max: int) -> Generator:
    """Like repeat, with a count drawn uniformly from [min, max] on each call.

    Raises ValueError if the range is invalid or wider than ``N_MAX``.
    """
    if min > max:
        raise ValueError("min argument cannot be greater than max argument")
    if min < 0:
        raise ValueError("min argument must be positive")

    n = max - min + 1
    if n > N_MAX:
        raise ValueError("[min,max] range too large")

    if n == 1:
        return repeat(gen, sep, min)

    return RandomRepeated(gen, sep, min, n)


@dataclass(frozen=True)
class Alternated(Generator):
    gens: tuple[Generator, ...]

    def password(self, r: Reader) -> str:
        return read_slice_n(r, self.gens).password(r)


def alternate(*gens: Generator) -> Generator:
    """Pick one of ``gens`` uniformly at random and return its output."""
    assert len(gens) <= N_MAX, "too many generators"

    match len(gens):
        case 0:
            return EMPTY
        case 1:
            return gens[0]
        case _:
            return Alternated(tuple(gens))


@dataclass(frozen=True)
class RejectionSampled(Generator):
    gen: Generator
    condition: Callable[[str], bool]

    def password(self, r: Reader) -> str:
        while True:
            pass_ = self.gen.password(r)
            if self.condition(pass_):
                return pass_


def rejection_sample(gen: Generator, condition: Callable[[str], bool]) -> Generator:
    """Generate with ``gen`` until ``condition`` accepts the output.

    If ``condition`` never accepts, this loops until the reader fails.
    """
    return RejectionSampled(gen, condition)
