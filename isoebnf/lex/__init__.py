# isoebnf/lex/__init__.py
"""Lexical layer for ISO 14977 text.

ISO 14977 has no separate token stream: gap-separators and comments may sit
between any two symbols, but never inside a terminal-string or a
special-sequence. So instead of a tokenizer this module offers position
based helpers that the structural parser composes.

API
---
- `is_gap_separator(ch)`        space, tab, CR, LF, vertical tab
- `skip_gaps(src, pos)`         -> pos after zero or more gap-separators
- `skip_comment(src, pos)`      -> pos after one (nested) comment, or pos
- `skip_insignificant(src, pos)`-> pos after any mix of gaps and comments
- `lexeme(fn)`                  wrap a `(src, pos) -> (value, pos)` parser
                                 so insignificant text is skipped around it
- `Scanner`                     cursor used by the recursive-descent parser
"""

from __future__ import annotations
import functools
from typing     import Callable, Iterable, Optional, Tuple, TypeVar

import regex as re

from ..errors          import UnexpectedSymbol, UnterminatedComment, describe_found, line_col
from ..grammar.symbols import Symbol, canonical_spelling, match_symbol, spellings_of

GAP_SEPARATORS = frozenset(" \t\r\n\x0b")

_GAPS_RE = re.compile(r"[ \t\r\n\x0b]*")
_COMMENT_DELIM_RE = re.compile(r"\(\*|\*\)")

_START_COMMENT = canonical_spelling(Symbol.START_COMMENT)

T = TypeVar("T")


def is_gap_separator(ch: str) -> bool:
    return ch in GAP_SEPARATORS


def skip_gaps(src: str, pos: int) -> int:
    """Zero-width match is fine, so this never fails."""
    return _GAPS_RE.match(src, pos).end()


def skip_comment(src: str, pos: int) -> int:
    """
    Consume one comment starting at pos. Comments nest:
    every inner "(*" must be closed by its own "*)".
    """
    if not src.startswith(_START_COMMENT, pos):
        return pos
    depth = 1
    i = pos + len(_START_COMMENT)
    while True:
        m = _COMMENT_DELIM_RE.search(src, i)
        if m is None:
            raise UnterminatedComment(
                "unterminated comment",
                src=src, pos=pos, expected=spellings_of(Symbol.END_COMMENT),
            )
        if m.group(0) == _START_COMMENT:
            depth += 1
        else:
            depth -= 1
        i = m.end()
        if depth == 0:
            return i


def skip_insignificant(src: str, pos: int) -> int:
    while True:
        nxt = skip_comment(src, skip_gaps(src, pos))
        if nxt == pos:
            return pos
        pos = nxt


def lexeme(fn: Callable[..., Tuple[T, int]]) -> Callable[..., Tuple[T, int]]:
    """Skip insignificant text before and after `fn`."""
    @functools.wraps(fn)
    def wrapper(src: str, pos: int = 0, *args, **kw) -> Tuple[T, int]:
        value, end = fn(src, skip_insignificant(src, pos), *args, **kw)
        return value, skip_insignificant(src, end)
    return wrapper


class Scanner:
    """Cursor over the source. Every structural lookahead goes through skip() first."""

    def __init__(self, src: str, pos: int = 0):
        self.src = src
        self.pos = pos
        self.n = len(src)

    def peek(self, k: int = 0) -> Optional[str]:
        j = self.pos + k
        if j >= self.n:
            return None
        return self.src[j]

    def at_end(self) -> bool:
        return self.pos >= self.n

    def skip(self) -> int:
        self.pos = skip_insignificant(self.src, self.pos)
        return self.pos

    def peek_symbol(self, *tags: str) -> Optional[str]:
        self.skip()
        hit = match_symbol(self.src, self.pos, tags or None)
        return hit[0] if hit else None

    def match_symbol(self, *tags: str) -> Optional[str]:
        self.skip()
        hit = match_symbol(self.src, self.pos, tags or None)
        if hit is None:
            return None
        self.pos = hit[1]
        return hit[0]

    def expect_symbol(self, tag: str, context: Iterable[str] = ()) -> str:
        if self.match_symbol(tag) is None:
            expected = spellings_of(tag)
            raise UnexpectedSymbol(
                f"expected one of {', '.join(f'`{e}`' for e in expected)}, "
                f"found {describe_found(self.src, self.pos)}",
                src=self.src, pos=self.pos, expected=expected, context=context,
            )
        return tag

    def line_col(self, pos: Optional[int] = None) -> Tuple[int, int]:
        return line_col(self.src, self.pos if pos is None else pos)
