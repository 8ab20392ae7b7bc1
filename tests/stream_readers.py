import random

from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers.algorithms import AES
from cryptography.hazmat.primitives.ciphers.modes import CTR


class KeystreamReader:
    """AES-128-CTR keystream over an all-zero key and IV."""

    def __init__(self):
        self._encryptor = Cipher(AES(bytes(16)), CTR(bytes(16))).encryptor()

    def read(self, size: int) -> bytes:
        return self._encryptor.update(bytes(size))


class SeededReader:
    def __init__(self, seed: int):
        self._rand = random.Random(seed)

    def read(self, size: int) -> bytes:
        return self._rand.randbytes(size)


class BytesReader:
    """Returns the given bytes, at most ``chunk`` at a time, then runs dry."""

    def __init__(self, data: bytes, chunk: int | None = None):
        self._data = data
        self._chunk = chunk

    def read(self, size: int) -> bytes:
        if self._chunk is not None:
            size = min(size, self._chunk)
        out, self._data = self._data[:size], self._data[size:]
        return out


class CyclingReader:
    """Cycles through ``data`` forever."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def read(self, size: int) -> bytes:
        out = bytearray()
        while len(out) < size:
            take = min(size - len(out), len(self._data) - self._pos)
            out += self._data[self._pos : self._pos + take]
            self._pos = (self._pos + take) % len(self._data)
        return bytes(out)


class FailingReader:
    def read(self, size: int) -> bytes:
        raise OSError("reader failed")
