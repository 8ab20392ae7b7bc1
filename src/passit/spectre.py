"""Spectre / Master Password style templates.

Only the encoding of random bytes into a password string is implemented,
not the full key derivation. Unlike the published algorithm, both the
template and every character are chosen with an unbiased draw.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from passit.errors import InvalidTemplateError
from passit.generator import Generator
from passit.reader import Reader, read_int_n, read_slice_n


_V = "AEIOU"
_C = "BCDFGHJKLMNPQRSTVWXYZ"
_v = "aeiou"
_c = "bcdfghjklmnpqrstvwxyz"

SPECTRE_CLASSES: dict[str, str] = {
    "V": _V,
    "C": _C,
    "v": _v,
    "c": _c,
    "A": _V + _C,
    "a": _V + _v + _C + _c,
    "n": "0123456789",
    "o": "@&%?,=[]_:-+*$#!'^~;()/.",
    "x": _V + _v + _C + _c + "0123456789!@#$%^&*()",
    " ": " ",
}


@dataclass(frozen=True)
class SpectreTemplate(Generator):
    """A ``:``-separated list of alternative templates, one class letter per
    output character.
    """

    template: str
    alternatives: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "alternatives", tuple(self.template.split(":")))

    def password(self, r: Reader) -> str:
        template = read_slice_n(r, self.alternatives)

        out = []
        for c in template:
            chars = SPECTRE_CLASSES.get(c)
            if chars is None:
                raise InvalidTemplateError(
                    f"template contains invalid character {c!r}"
                )
            out.append(chars[read_int_n(r, len(chars))])

        return "".join(out)


SPECTRE_MAXIMUM = SpectreTemplate("anoxxxxxxxxxxxxxxxxx:axxxxxxxxxxxxxxxxxno")
SPECTRE_LONG = SpectreTemplate(
    "CvcvnoCvcvCvcv:CvcvCvcvnoCvcv:CvcvCvcvCvcvno:CvccnoCvcvCvcv:"
    "CvccCvcvnoCvcv:CvccCvcvCvcvno:CvcvnoCvccCvcv:CvcvCvccnoCvcv:"
    "CvcvCvccCvcvno:CvcvnoCvcvCvcc:CvcvCvcvnoCvcc:CvcvCvcvCvccno:"
    "CvccnoCvccCvcv:CvccCvccnoCvcv:CvccCvccCvcvno:CvcvnoCvccCvcc:"
    "CvcvCvccnoCvcc:CvcvCvccCvccno:CvccnoCvcvCvcc:CvccCvcvnoCvcc:"
    "CvccCvcvCvccno"
)
SPECTRE_MEDIUM = SpectreTemplate("CvcnoCvc:CvcCvcno")
SPECTRE_BASIC = SpectreTemplate("aaanaaan:aannaaan:aaannaaa")
SPECTRE_SHORT = SpectreTemplate("Cvcn")
SPECTRE_PIN = SpectreTemplate("nnnn")
SPECTRE_NAME = SpectreTemplate("cvccvcvcv")
SPECTRE_PHRASE = SpectreTemplate(
    "cvcc cvc cvccvcv cvc:cvc cvccvcvcv cvcv:cv cvccv cvc cvcvccv"
)
