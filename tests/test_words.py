import pytest

from passit.errors import InvalidTemplateError, WordListUnavailableError
from passit.generator import repeat
from passit.words import (
    EFF_LARGE,
    EFF_SHORT1,
    ORCHARD_STREET_LONG,
    EmbeddedList,
    from_words,
    word_list_by_name,
)


def test_from_words(test_rand):
    gen = from_words("alpha", "bravo", "charlie")
    assert repeat(gen, " ", 2).password(test_rand) == "alpha charlie"


@pytest.mark.parametrize(
    ("words", "message"),
    [
        ((), "list too short"),
        (("one",), "list too short"),
        (("one", ""), "empty word in list"),
        (("one", "two words"), "word contains space"),
        (("one", "tab\tbed"), "word contains space"),
        (("one", "bad\udc00"), "word contains invalid unicode rune"),
        (("one", "two", "one"), "list contains duplicate word"),
    ],
)
def test_from_words_invalid(words, message):
    with pytest.raises(InvalidTemplateError, match=message):
        from_words(*words)


def test_embedded_list_loads_once(data_dir, test_rand):
    path = data_dir / "colours.txt"
    path.write_text("red\ngreen\nblue\n", encoding="utf-8")

    colours = EmbeddedList("colours.txt")
    assert colours.available()
    assert colours.entries == ("red", "green", "blue")

    path.unlink()
    assert colours.available()
    assert colours.password(test_rand) == "red"


def test_embedded_list_without_trailing_newline(data_dir):
    (data_dir / "emoji.txt").write_text("😀\n👍🏽\n🏳️‍🌈", encoding="utf-8")
    assert EmbeddedList("emoji.txt").entries == ("😀", "👍🏽", "🏳️‍🌈")


def test_embedded_list_missing(data_dir, test_rand):
    missing = EmbeddedList("missing.txt")
    assert not missing.available()

    with pytest.raises(WordListUnavailableError, match="PASSIT_DATA_DIR"):
        missing.password(test_rand)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("eff", EFF_LARGE),
        ("EFF:Large", EFF_LARGE),
        ("eff:short1", EFF_SHORT1),
        ("orchard:long", ORCHARD_STREET_LONG),
        ("nonsense", None),
    ],
)
def test_word_list_by_name(name, expected):
    assert word_list_by_name(name) is expected


def test_eff_large_passphrase(eff_large, test_rand):
    assert len(eff_large.entries) == 7776
    assert (
        repeat(eff_large, " ", 8).password(test_rand)
        == "reprint wool pantry unworried mummify veneering securely munchkin"
    )


def test_eff_short1_passphrase(eff_short1, test_rand):
    assert len(eff_short1.entries) == 1296
    assert (
        repeat(eff_short1, " ", 8).password(test_rand)
        == "bush vapor issue ruby carol sleep hula case"
    )
