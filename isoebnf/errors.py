"""Diagnostics raised while reading ISO 14977 text.

Every failure is a `SyntaxError` subclass carrying the character position,
the UTF-8 byte offset, line/column, the expected spellings and the stack of
enclosing constructs. Parsing never recovers: the first error aborts.
"""

from __future__ import annotations
from typing     import Iterable, Optional, Tuple


# ---------- location helpers ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) of the line holding pos"""
    start = src.rfind("\n", 0, pos)
    if start == -1:
        start = 0
    else:
        start += 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end


def line_col(src: str, pos: int) -> Tuple[int, int]:
    """1-based (line, col) of an absolute position."""
    line = src.count("\n", 0, pos) + 1
    start, _ = _line_bounds(src, pos)
    return line, (pos - start) + 1


def byte_offset(src: str, pos: int) -> int:
    return len(src[:pos].encode("utf-8"))


def snippet_caret_at_pos(src: str, pos: int) -> str:
    """Source line with a caret under pos."""
    start, end = _line_bounds(src, pos)
    line_text = src[start:end].rstrip("\r")
    caret = " " * (pos - start) + "^"
    return f"{line_text}\n{caret}"


def describe_found(src: str, pos: int) -> str:
    if pos >= len(src):
        return "end of input"
    return repr(src[pos])


# ---------- error types ----------
class EbnfSyntaxError(SyntaxError):
    """Base of all parse failures."""

    kind = "EbnfSyntaxError"

    def __init__(
        self,
        description: str,
        *,
        src: str = "",
        pos: int = 0,
        expected: Iterable[str] = (),
        context: Iterable[str] = (),
    ) -> None:
        pos = max(0, min(pos, len(src)))
        line, col = line_col(src, pos)
        expected = tuple(expected)
        context = tuple(context)
        snippet = snippet_caret_at_pos(src, pos) if src else ""
        super().__init__(self._compose(description, line, col, byte_offset(src, pos), expected, context, snippet))
        self.description = description
        self.pos = pos
        self.offset = byte_offset(src, pos)
        self.line = line
        self.col = col
        self.expected = expected
        self.context = context
        self.snippet = snippet

    @classmethod
    def _compose(cls, description, line, col, offset, expected, context, snippet) -> str:
        parts = [f"{cls.kind}: {description} at {line}:{col} (offset {offset})"]
        if expected:
            parts.append("- Expected: " + ", ".join(f"`{e}`" for e in expected))
        if context:
            parts.append("- In: " + " > ".join(context))
        msg = "\n".join(parts)
        if snippet:
            msg += f"\n\n{snippet}"
        return msg

    def format(self) -> str:
        return self._compose(self.description, self.line, self.col, self.offset,
                             self.expected, self.context, self.snippet)


class UnterminatedComment(EbnfSyntaxError):
    kind = "UnterminatedComment"


class UnterminatedTerminalString(EbnfSyntaxError):
    kind = "UnterminatedTerminalString"


class UnterminatedSpecialSequence(EbnfSyntaxError):
    kind = "UnterminatedSpecialSequence"


class EmptyTerminalString(EbnfSyntaxError):
    kind = "EmptyTerminalString"


class InvalidRepetitionCount(EbnfSyntaxError):
    kind = "InvalidRepetitionCount"


class EmptySingleDefinition(EbnfSyntaxError):
    kind = "EmptySingleDefinition"


class EmptyDefinitionList(EbnfSyntaxError):
    kind = "EmptyDefinitionList"


class UnexpectedSymbol(EbnfSyntaxError):
    kind = "UnexpectedSymbol"


class UnmatchedBracket(EbnfSyntaxError):
    """A bracket was opened at `opened_at` but its close never came."""

    kind = "UnmatchedBracket"

    def __init__(self, description: str, *, opened_at: Optional[int] = None, **kw) -> None:
        super().__init__(description, **kw)
        self.opened_at = opened_at


class TrailingInput(EbnfSyntaxError):
    kind = "TrailingInput"


class NestingTooDeep(EbnfSyntaxError):
    kind = "NestingTooDeep"

    def __init__(self, description: str, *, limit: int = 0, **kw) -> None:
        super().__init__(description, **kw)
        self.limit = limit


class UnknownSymbolError(ValueError):
    """Surface text that is not a spelling of any ISO 14977 symbol."""

    def __init__(self, text: str) -> None:
        super().__init__(
            f"The text `{text}` is not a valid symbol for Extended BNF. See Section 4 of ISO 14977."
        )
        self.text = text
