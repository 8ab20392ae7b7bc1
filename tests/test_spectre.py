import pytest

from passit.errors import InvalidTemplateError
from passit.spectre import (
    SPECTRE_BASIC,
    SPECTRE_CLASSES,
    SPECTRE_LONG,
    SPECTRE_MAXIMUM,
    SPECTRE_MEDIUM,
    SPECTRE_NAME,
    SPECTRE_PHRASE,
    SPECTRE_PIN,
    SPECTRE_SHORT,
    SpectreTemplate,
)


def test_spectre_long_keystream(test_rand):
    assert SPECTRE_LONG.password(test_rand) == "Dadl8(WeraHinc"
    assert SPECTRE_LONG.password(test_rand) == "GewyBoru7=Fubu"


@pytest.mark.parametrize(
    "template",
    [
        SPECTRE_MAXIMUM,
        SPECTRE_LONG,
        SPECTRE_MEDIUM,
        SPECTRE_BASIC,
        SPECTRE_SHORT,
        SPECTRE_PIN,
        SPECTRE_NAME,
        SPECTRE_PHRASE,
    ],
)
def test_spectre_output_matches_classes(seeded_rand, template):
    for _ in range(50):
        pass_ = template.password(seeded_rand)

        candidates = [t for t in template.alternatives if len(t) == len(pass_)]
        assert any(
            all(ch in SPECTRE_CLASSES[c] for c, ch in zip(t, pass_))
            for t in candidates
        )


def test_spectre_unknown_class(test_rand):
    with pytest.raises(InvalidTemplateError, match="invalid character"):
        SpectreTemplate("CvQ").password(test_rand)
