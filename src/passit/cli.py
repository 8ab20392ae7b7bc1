"""Command line tools: ``passphrase`` and ``twoproblems``."""

from __future__ import annotations

import argparse
import sys
from urllib.parse import unquote

from loguru import logger

from passit.config import configure_logging, settings
from passit.errors import PassitError, RegexpCompileError
from passit.generator import Generator, repeat
from passit.reader import N_MAX, SystemReader
from passit.regexp import (
    RegexpParser,
    SubPattern,
    literal_text,
    special_capture_basic,
    with_repeat,
)
from passit.transform import title_case, upper_case
from passit.words import (
    EFF_LARGE,
    EFF_SHORT1,
    EFF_SHORT2,
    EMOJI_LATEST,
    ORCHARD_STREET_LONG,
    word_list_by_name,
)


WORD_LIST_NAMES = (
    "orchard:medium, orchard:long, orchard:alpha, orchard:qwerty, sts10, "
    "eff:large / eff, eff:short1 and eff:short2"
)


def _add_log_level(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="log level for diagnostics written to stderr (default: %(default)s)",
    )


def passphrase(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passphrase",
        description="Generate a random passphrase from one of the embedded word lists.",
    )
    parser.add_argument(
        "-l",
        dest="list",
        default="orchard:long",
        help=f"the word list to use; valid options are {WORD_LIST_NAMES}",
    )
    parser.add_argument(
        "-n",
        dest="count",
        type=int,
        default=6,
        help="the number of words in the generated passphrase",
    )
    parser.add_argument(
        "-s", dest="sep", default=" ", help="the separator to use between words"
    )
    parser.add_argument(
        "-t",
        dest="title_case",
        action="store_true",
        help="generate a title case passphrase",
    )
    parser.add_argument(
        "-u",
        dest="upper_case",
        action="store_true",
        help="generate an upper case passphrase",
    )
    _add_log_level(parser)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    gen = word_list_by_name(args.list)
    if gen is None:
        print("passphrase: invalid wordlist specified", file=sys.stderr)
        return 1

    if args.count < 0:
        print("passphrase: word count must not be negative", file=sys.stderr)
        return 1

    if args.title_case:
        gen = title_case(gen)
    if args.upper_case:
        gen = upper_case(gen)

    try:
        pass_ = repeat(gen, args.sep, args.count).password(SystemReader())
    except PassitError as e:
        logger.debug("Failed to generate passphrase: {!r}", e)
        print(f"passphrase: {e}", file=sys.stderr)
        return 1

    print(pass_)
    return 0


def parse_word_params(query: str) -> dict[str, str]:
    """Parse ``key=value&key=value`` word capture parameters.

    Keys are lower cased and both keys and values are percent-decoded;
    ``+`` is kept as-is.
    """
    params: dict[str, str] = {}
    while query:
        pair, _, query = query.partition("&")
        key, _, value = pair.partition("=")
        params[unquote(key.lower())] = unquote(value)
    return params


def word_capture(sub: SubPattern) -> Generator:
    """Special capture for ``(?P<word>...)``.

    An empty capture picks one word from the Orchard Street Long list. A
    literal capture holds parameters: ``list``, ``case`` (lower, upper or
    title), ``sep`` and ``count``, e.g. ``(?P<word>list=eff&count=4&sep=-)``.
    """
    if not sub.data:
        return ORCHARD_STREET_LONG

    query = literal_text(sub)
    if query is None:
        raise RegexpCompileError("twoproblems: unsupported capture")

    params = parse_word_params(query)

    gen: Generator = ORCHARD_STREET_LONG
    if "list" in params:
        name = params["list"].lower()
        gen = word_list_by_name(name)
        if gen is None:
            raise RegexpCompileError(f"twoproblems: unsupported wordlist {name!r}")

    if "case" in params:
        match params["case"].lower():
            case "lower":
                pass
            case "upper":
                gen = upper_case(gen)
            case "title":
                gen = title_case(gen)
            case other:
                raise RegexpCompileError(f"twoproblems: unsupported case {other!r}")

    sep = params.get("sep", " ")

    if "count" in params:
        raw = params["count"]
        if not (raw.isascii() and raw.isdigit()) or int(raw) > N_MAX:
            raise RegexpCompileError(
                f"twoproblems: failed to parse wordlist count {raw!r}"
            )
        gen = repeat(gen, sep, int(raw))

    return gen


def regexp_parser() -> RegexpParser:
    """Return the parser used by twoproblems, with its special captures."""
    rp = RegexpParser()
    rp.set_special_capture("word", word_capture)
    rp.set_special_capture("largeword", special_capture_basic(EFF_LARGE))
    rp.set_special_capture("short1word", special_capture_basic(EFF_SHORT1))
    rp.set_special_capture("short2word", special_capture_basic(EFF_SHORT2))
    rp.set_special_capture("emoji", with_repeat(EMOJI_LATEST, ""))
    return rp


def twoproblems(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="twoproblems",
        description="Generate random passwords based on a regular expression template.",
    )
    parser.add_argument("pattern", help="the regular expression template")
    parser.add_argument(
        "-c",
        dest="count",
        type=int,
        default=1,
        help="the number of passwords to generate, one per line",
    )
    _add_log_level(parser)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        gen = regexp_parser().parse(args.pattern)
    except PassitError as e:
        print(
            f"twoproblems: failed to parse {args.pattern!r} pattern: {e}",
            file=sys.stderr,
        )
        return 1

    r = SystemReader()
    for _ in range(args.count):
        try:
            pass_ = gen.password(r)
        except PassitError as e:
            print(f"twoproblems: failed to generate password: {e}", file=sys.stderr)
            return 1
        print(pass_)

    return 0
