from loguru import logger

from .charset import (
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
from .encoding import (
    ascii85,
    base32_hex,
    base32_std,
    base64_std,
    base64_url,
    hex_lower,
    hex_upper,
)
from .errors import (
    InvalidTemplateError,
    PassitError,
    RegexpCompileError,
    ShortReadError,
    WordListUnavailableError,
)
from .generator import (
    EMPTY,
    HYPHEN,
    SPACE,
    FuncGenerator,
    Generator,
    alternate,
    fixed,
    join,
    random_repeat,
    rejection_sample,
    repeat,
)
from .reader import Reader, SystemReader
from .regexp import (
    UNICODE_ANY,
    RegexpParser,
    parse_regexp,
    special_capture_basic,
    with_repeat,
)
from .spectre import (
    SPECTRE_BASIC,
    SPECTRE_LONG,
    SPECTRE_MAXIMUM,
    SPECTRE_MEDIUM,
    SPECTRE_NAME,
    SPECTRE_PHRASE,
    SPECTRE_PIN,
    SPECTRE_SHORT,
    SpectreTemplate,
)
from .transform import lower_case, title_case, transform, upper_case
from .words import (
    EFF_LARGE,
    EFF_SHORT1,
    EFF_SHORT2,
    EMOJI_13,
    EMOJI_15,
    EMOJI_LATEST,
    ORCHARD_STREET_ALPHA,
    ORCHARD_STREET_LONG,
    ORCHARD_STREET_MEDIUM,
    ORCHARD_STREET_QWERTY,
    STS10,
    from_words,
    word_list_by_name,
)


logger.disable("passit")
