import string

import pytest

from passit.charset import (
    DIGIT,
    LATIN_LOWER,
    LATIN_LOWER_DIGIT,
    LATIN_MIXED,
    LATIN_MIXED_DIGIT,
    LATIN_UPPER,
    LATIN_UPPER_DIGIT,
    charset,
    from_range_table,
    from_slice,
)
from passit.errors import InvalidTemplateError
from passit.generator import join
from passit.rangetable import RangeTable


def test_charset_keystream(test_rand):
    assert charset(string.ascii_lowercase, 5).password(test_rand) == "yzxei"


def test_predefined_charsets(test_rand):
    gen = join("@$", LATIN_UPPER, LATIN_LOWER, LATIN_MIXED)
    assert gen.password(test_rand) == "Y@$z@$x"


@pytest.mark.parametrize(
    ("gen", "alphabet"),
    [
        (DIGIT, string.digits),
        (LATIN_LOWER, string.ascii_lowercase),
        (LATIN_UPPER, string.ascii_uppercase),
        (LATIN_MIXED, string.ascii_letters),
        (LATIN_LOWER_DIGIT, string.ascii_lowercase + string.digits),
        (LATIN_UPPER_DIGIT, string.ascii_uppercase + string.digits),
        (LATIN_MIXED_DIGIT, string.ascii_letters + string.digits),
    ],
)
def test_predefined_alphabets(seeded_rand, gen, alphabet):
    seen = {gen.password(seeded_rand) for _ in range(2000)}
    assert seen == set(alphabet)


def test_charset_output_membership(seeded_rand):
    template = "é😀中ab"
    for count in (1, 7, 64):
        pass_ = charset(template, count).password(seeded_rand)
        assert len(pass_) == count
        assert set(pass_) <= set(template)


@pytest.mark.parametrize(
    ("template", "message"),
    [
        ("", "template too short"),
        ("a", "template too short"),
        ("aa", "template contains duplicate rune"),
        ("abca", "template contains duplicate rune"),
        ("a\ud800", "template contains invalid unicode rune"),
    ],
)
def test_charset_invalid_template(template, message):
    with pytest.raises(InvalidTemplateError, match=message):
        charset(template)


def test_charset_count_must_be_positive():
    with pytest.raises(AssertionError):
        charset("ab", 0)


def test_from_range_table_drops_disallowed_runes(seeded_rand):
    tab = RangeTable.from_pairs([(0x00, 0x1F), (0x61, 0x63), (0x200B, 0x200D)])
    gen = from_range_table(tab, 50)

    pass_ = gen.password(seeded_rand)
    assert len(pass_) == 50
    assert set(pass_) <= set("abc")


def test_from_range_table_empty():
    with pytest.raises(InvalidTemplateError, match="zero allowed runes"):
        from_range_table(RangeTable.from_pairs([(0x00, 0x1F)]))


def test_from_slice(test_rand):
    assert from_slice(["x", "y", "z"]).password(test_rand) == "x"
