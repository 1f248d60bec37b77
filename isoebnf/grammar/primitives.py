# isoebnf/grammar/primitives.py
"""Non-recursive syntactic primaries and the repetition count.

Every parser here has the shape `(src, pos, context=()) -> (value, end)`.
The public `parse_*` names are wrapped in `lexeme`, so they skip gaps and
comments on both sides; the quoted forms never skip inside their quotes.
"""

from __future__ import annotations
from typing     import Iterable, Tuple

import regex as re

from ..errors import (
    EmptyTerminalString, InvalidRepetitionCount, UnexpectedSymbol,
    UnterminatedSpecialSequence, UnterminatedTerminalString,
    describe_found, line_col,
)
from ..lex     import lexeme, skip_insignificant
from .ast      import MetaIdentifier, SpecialSequence, Span, TerminalString
from .symbols  import Symbol, canonical_spelling, match_symbol

_META_ID_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")
_DIGITS_RE  = re.compile(r"[0-9]+")

QUOTES = (canonical_spelling(Symbol.FIRST_QUOTE), canonical_spelling(Symbol.SECOND_QUOTE))
SPECIAL = canonical_spelling(Symbol.SPECIAL_SEQUENCE)


def _span(src: str, start: int, end: int) -> Span:
    line, col = line_col(src, start)
    return Span(start, end, line, col)


def is_meta_identifier_start(ch) -> bool:
    return ch is not None and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def _meta_identifier(src: str, pos: int, context: Iterable[str] = ()) -> Tuple[MetaIdentifier, int]:
    m = _META_ID_RE.match(src, pos)
    if not m:
        raise UnexpectedSymbol(
            f"expected a meta identifier, found {describe_found(src, pos)}",
            src=src, pos=pos, expected=("letter",), context=context,
        )
    return MetaIdentifier(m.group(0), span=_span(src, pos, m.end())), m.end()


def _quoted(src: str, pos: int, close: str) -> int:
    """Index of the closing delimiter or -1. Nothing inside is skipped or unescaped."""
    return src.find(close, pos + 1)


def _terminal_string(src: str, pos: int, context: Iterable[str] = ()) -> Tuple[TerminalString, int]:
    quote = src[pos:pos + 1]
    if quote not in QUOTES:
        raise UnexpectedSymbol(
            f"expected a terminal string, found {describe_found(src, pos)}",
            src=src, pos=pos, expected=QUOTES, context=context,
        )
    close = _quoted(src, pos, quote)
    if close == -1:
        raise UnterminatedTerminalString(
            "unterminated terminal string",
            src=src, pos=pos, expected=(quote,), context=context,
        )
    if close == pos + 1:
        raise EmptyTerminalString(
            "empty terminal string", src=src, pos=pos, context=context,
        )
    text = src[pos + 1:close]
    return TerminalString(text, quote, span=_span(src, pos, close + 1)), close + 1


def _special_sequence(src: str, pos: int, context: Iterable[str] = ()) -> Tuple[SpecialSequence, int]:
    if not src.startswith(SPECIAL, pos):
        raise UnexpectedSymbol(
            f"expected a special sequence, found {describe_found(src, pos)}",
            src=src, pos=pos, expected=(SPECIAL,), context=context,
        )
    close = _quoted(src, pos, SPECIAL)
    if close == -1:
        raise UnterminatedSpecialSequence(
            "unterminated special sequence",
            src=src, pos=pos, expected=(SPECIAL,), context=context,
        )
    return SpecialSequence(src[pos + 1:close], span=_span(src, pos, close + 1)), close + 1


def _repetition_count(src: str, pos: int, context: Iterable[str] = ()) -> Tuple[int, int]:
    """`digits *` -> (count, end). No digits -> (1, pos)."""
    m = _DIGITS_RE.match(src, pos)
    if not m:
        return 1, pos
    after = skip_insignificant(src, m.end())
    hit = match_symbol(src, after, (Symbol.REPETITION,))
    if hit is None:
        raise InvalidRepetitionCount(
            f"repetition count {m.group(0)} must be followed by "
            f"`{canonical_spelling(Symbol.REPETITION)}`, found {describe_found(src, after)}",
            src=src, pos=after, expected=(canonical_spelling(Symbol.REPETITION),), context=context,
        )
    return int(m.group(0)), hit[1]


parse_meta_identifier  = lexeme(_meta_identifier)
parse_terminal_string  = lexeme(_terminal_string)
parse_special_sequence = lexeme(_special_sequence)
parse_repetition_count = lexeme(_repetition_count)
