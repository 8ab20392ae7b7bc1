import base64
from dataclasses import dataclass
from typing import Callable

from passit.generator import EMPTY, Generator
from passit.reader import Reader, read_full


@dataclass(frozen=True)
class Encoded(Generator):
    encode: Callable[[bytes], str]
    count: int

    def password(self, r: Reader) -> str:
        return self.encode(read_full(r, self.count))


def _encoding(encode: Callable[[bytes], str], count: int) -> Generator:
    assert count >= 0, "count must be positive"

    if count == 0:
        return EMPTY

    return Encoded(encode, count)


def _hex_upper(b: bytes) -> str:
    return b.hex().upper()


def _base32_std(b: bytes) -> str:
    return base64.b32encode(b).decode("ascii").rstrip("=")


def _base32_hex(b: bytes) -> str:
    return base64.b32hexencode(b).decode("ascii").rstrip("=")


def _base64_std(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii").rstrip("=")


def _base64_url(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def _ascii85(b: bytes) -> str:
    return base64.a85encode(b).decode("ascii")


def hex_lower(count: int) -> Generator:
    """Encode ``count`` random bytes as lower case hex."""
    return _encoding(bytes.hex, count)


def hex_upper(count: int) -> Generator:
    """Encode ``count`` random bytes as upper case hex."""
    return _encoding(_hex_upper, count)


def base32_std(count: int) -> Generator:
    """Encode ``count`` random bytes with the RFC 4648 base32 alphabet, unpadded."""
    return _encoding(_base32_std, count)


def base32_hex(count: int) -> Generator:
    """Encode ``count`` random bytes with the base32 extended hex alphabet, unpadded."""
    return _encoding(_base32_hex, count)


def base64_std(count: int) -> Generator:
    """Encode ``count`` random bytes with the standard base64 alphabet, unpadded."""
    return _encoding(_base64_std, count)


def base64_url(count: int) -> Generator:
    """Encode ``count`` random bytes with the URL-safe base64 alphabet, unpadded."""
    return _encoding(_base64_url, count)


def ascii85(count: int) -> Generator:
    """Encode ``count`` random bytes with ascii85, without ``<~ ~>`` framing."""
    return _encoding(_ascii85, count)
