import unicodedata

import pytest

from passit.unicode_tables import unicode_any, unicode_category_table


@pytest.mark.parametrize(
    "cp",
    [
        0x00,
        0x09,
        0x0A,
        0x1F,
        0x7F,
        0x85,
        0xAD,  # soft hyphen
        0x200B,  # zero width space
        0x200C,  # zero width non-joiner
        0x200D,  # zero width joiner
        0x2060,  # word joiner
        0xFEFF,  # zero width no-break space
        0xFE0F,  # variation selector-16
        0xE0100,
        0x534D,
        0x5350,
        0x0FD5,
        0x0FD6,
        0x0149,  # deprecated
        0x3164,  # hangul filler
        0x02B0,  # modifier letter
        0xD800,
        0xE000,  # private use
    ],
)
def test_unicode_any_excludes(cp):
    assert cp not in unicode_any()


@pytest.mark.parametrize("ch", ["a", "Z", "~", " ", "é", "ß", "Ж", "中", "٣", "€", "😀", "\u0301"])
def test_unicode_any_includes(ch):
    assert ch in unicode_any()


def test_unicode_any_is_unstrided_and_printable_in_ascii():
    tab = unicode_any()

    assert tab.is_stride1()
    assert [cp for cp in range(0x80) if cp in tab] == list(range(0x20, 0x7F))
    assert tab is unicode_any()


def test_unicode_any_categories():
    for cp in unicode_any():
        if cp < 0x80:
            continue
        category = unicodedata.category(chr(cp))
        assert category in {"Lu", "Ll", "Lt", "Lo", "Mn"} or category[0] in "NPS"


@pytest.mark.parametrize(
    ("name", "member", "non_member"),
    [("digit", "٣", "a"), ("word", "é", "-"), ("space", "\u3000", "x")],
)
def test_unicode_category_table(name, member, non_member):
    tab = unicode_category_table(name)
    assert member in tab
    assert non_member not in tab


def test_unicode_category_table_unknown():
    with pytest.raises(ValueError):
        unicode_category_table("punct")
