"""Unbiased sampling from a caller-supplied stream of random bytes.

Every generator in passit draws its randomness through the helpers in this
module. The reader is any object with a ``read(size) -> bytes`` method; it is
expected to be a uniformly random stream (a CSPRNG in production, a fixed
keystream in tests).
"""

from __future__ import annotations

import secrets
import threading
from typing import TYPE_CHECKING, Protocol, Sequence, TypeVar

from passit.config import settings
from passit.errors import ShortReadError


if TYPE_CHECKING:
    from passit.rangetable import RangeTable


T = TypeVar("T")

# Largest n accepted by read_int_n.
N_MAX = (1 << 31) - 1


class Reader(Protocol):
    def read(self, size: int, /) -> bytes: ...


class SystemReader:
    """Reader backed by the operating system CSPRNG."""

    def read(self, size: int, /) -> bytes:
        return secrets.token_bytes(size)


def read_full(r: Reader, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``r``.

    Short reads are retried; if the stream ends first ShortReadError is
    raised. Exceptions raised by the reader itself propagate unchanged.
    """
    buf = r.read(size)
    if len(buf) == size:
        return buf

    parts = [buf]
    got = len(buf)
    while got < size:
        chunk = r.read(size - got)
        if not chunk:
            raise ShortReadError(size, got)
        parts.append(chunk)
        got += len(chunk)

    return b"".join(parts)


_maybe_read_lock = threading.Lock()
_maybe_read_done = False


def maybe_read_byte(r: Reader) -> None:
    """Consume one byte from ``r`` with ~50% probability, once per process.

    This stops callers from depending on byte-for-byte determinism with
    respect to an arbitrary stream. It is off unless
    ``settings.maybe_read_byte`` is set.
    """
    global _maybe_read_done

    if not settings.maybe_read_byte or _maybe_read_done:
        return

    with _maybe_read_lock:
        if _maybe_read_done:
            return
        _maybe_read_done = True

    if secrets.randbelow(2):
        read_full(r, 1)


def read_int_n(r: Reader, n: int) -> int:
    """Return a uniformly random integer in [0, n).

    The fewest whole bytes covering n-1 (at most four) are read as a
    little-endian word; words in the tail that would bias ``v % n`` are
    rejected and re-read.
    """
    assert 0 < n <= N_MAX, "invalid argument to read_int_n"

    if n == 1:
        return 0

    maybe_read_byte(r)

    size = ((n - 1).bit_length() + 7) // 8
    span = 1 << (8 * size)
    limit = span - 1 - span % n

    while True:
        v = int.from_bytes(read_full(r, size), "little")
        if v <= limit:
            return v % n


def read_slice_n(r: Reader, xs: Sequence[T]) -> T:
    return xs[read_int_n(r, len(xs))]


def read_rune(r: Reader, tab: RangeTable, count: int) -> str:
    """Return the code point at a uniformly random index of ``tab``.

    ``count`` must equal ``tab.count()``; it is passed in so callers can
    compute it once.
    """
    return chr(tab.rune_at(read_int_n(r, count)))
