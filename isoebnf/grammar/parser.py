"""ISO/IEC 14977 Extended BNF parser

Grammar (ISO 14977 section 4, precedence falls out of the nesting):
    syntax              := syntax-rule+
    syntax-rule         := meta-identifier "=" definition-list terminator
    definition-list     := single-definition (separator single-definition)*
    single-definition   := syntactic-term ("," syntactic-term)*
    syntactic-term      := syntactic-factor ["-" syntactic-factor]
    syntactic-factor    := [integer "*"] syntactic-primary
    syntactic-primary   := optional | repeated | grouped | meta-identifier
                         | terminal-string | special-sequence | empty

- separator  : "|" "/" "!"      - terminator : ";" "."
- optional   : "[" ... "]"  or "(/" ... "/)"
- repeated   : "{" ... "}"  or "(:" ... ":)"
- comments "(* ... *)" nest and may appear wherever a gap may.

Parsing is committed: once an opening symbol is consumed a mismatch is fatal.
"""

from __future__ import annotations
import sys
from contextlib import contextmanager
from typing     import Any, Callable, Iterator, List, Optional, Tuple

from ..errors import (
    EbnfSyntaxError, EmptyDefinitionList, EmptySingleDefinition,
    NestingTooDeep, TrailingInput, UnexpectedSymbol, UnmatchedBracket,
    describe_found,
)
from ..lex      import Scanner
from ..options  import ParseOptions
from .ast import (
    DefinitionList, EmptySequence, GroupedSequence, OptionalSequence,
    RepeatedSequence, SingleDefinition, Span, Syntax, SyntacticFactor,
    SyntacticPrimary, SyntacticTerm, SyntaxRule,
)
from .primitives import (
    QUOTES, SPECIAL, is_meta_identifier_start, parse_meta_identifier,
    parse_repetition_count, parse_special_sequence, parse_terminal_string,
)
from .symbols import Symbol, spellings_of


def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


# opening tag -> (node type, closing tag, label)
_BRACKETS = {
    Symbol.START_GROUP:  (GroupedSequence,  Symbol.END_GROUP,  "grouped-sequence"),
    Symbol.START_OPTION: (OptionalSequence, Symbol.END_OPTION, "optional-sequence"),
    Symbol.START_REPEAT: (RepeatedSequence, Symbol.END_REPEAT, "repeated-sequence"),
}

# an empty primary is only recognized right before one of these
_EMPTY_FOLLOW = (
    Symbol.DEFINITION_SEPARATOR, Symbol.TERMINATOR, Symbol.CONCATENATE,
    Symbol.END_GROUP, Symbol.END_OPTION, Symbol.END_REPEAT,
)

_PRIMARY_EXPECTED = (
    "letter", *QUOTES, SPECIAL,
    *spellings_of(Symbol.START_GROUP), *spellings_of(Symbol.START_OPTION),
    *spellings_of(Symbol.START_REPEAT),
)


class _Parser:
    def __init__(self, src: str, pos: int = 0, options: Optional[ParseOptions] = None):
        self.src = src
        self.sc = Scanner(src, pos)
        self.options = options or ParseOptions()
        self.depth = 0
        self.deepest = 0
        self.context: List[str] = []

    # ---- helpers ----
    def _debug(self, msg: str) -> None:
        if self.options.debug:
            _eprint(f"[DEBUG] {msg}")

    @contextmanager
    def _within(self, label: str) -> Iterator[None]:
        self.context.append(label)
        try:
            yield
        finally:
            self.context.pop()

    def _expect(self, tag: str) -> None:
        self.sc.expect_symbol(tag, context=self.context)

    def _starts_term(self) -> bool:
        """Next significant text opens a non-empty factor."""
        self.sc.skip()
        ch = self.sc.peek()
        if ch is None:
            return False
        if ch in QUOTES or ch == SPECIAL or "0" <= ch <= "9" or is_meta_identifier_start(ch):
            return True
        return self.sc.peek_symbol(*_BRACKETS) is not None

    # ---- syntax ----
    def syntax(self) -> Syntax:
        rules = [self.syntax_rule()]
        while True:
            self.sc.skip()
            if self.sc.at_end():
                break
            rules.append(self.syntax_rule(after_last=True))
        self._debug(f"syntax ready | rules={len(rules)}")
        return Syntax(tuple(rules))

    def _trailing(self, pos: int) -> TrailingInput:
        return TrailingInput(
            f"unexpected {describe_found(self.src, pos)} after the last syntax rule",
            src=self.src, pos=pos, expected=("letter",),
        )

    def syntax_rule(self, after_last: bool = False) -> SyntaxRule:
        """
        after_last: text that follows a complete rule; until its "=" is seen
        it is leftover input rather than a broken rule.
        """
        start = self.sc.skip()
        try:
            ident, self.sc.pos = parse_meta_identifier(self.src, self.sc.pos, context=self.context)
            with self._within(f"syntax-rule {ident.name!r}"):
                self._expect(Symbol.DEFINING)
        except UnexpectedSymbol:
            if after_last:
                raise self._trailing(start) from None
            raise
        with self._within(f"syntax-rule {ident.name!r}"):
            definitions = self.definition_list()
            self._expect(Symbol.TERMINATOR)
        line, col = self.sc.line_col(start)
        self._debug(f"rule {ident.name!r} at {line}:{col} | alternatives={len(definitions)}")
        return SyntaxRule(ident, definitions, span=Span(start, self.sc.pos, line, col))

    # ---- composer ----
    def definition_list(self) -> DefinitionList:
        start = self.sc.skip()
        definitions = [self.single_definition()]
        while self.sc.match_symbol(Symbol.DEFINITION_SEPARATOR):
            definitions.append(self.single_definition())
        if len(definitions) == 1 and self.sc.pos == start:
            raise EmptyDefinitionList(
                "empty definition list", src=self.src, pos=start, context=self.context,
            )
        return DefinitionList(tuple(definitions))

    def single_definition(self) -> SingleDefinition:
        terms: List[SyntacticTerm] = []
        blank: List[bool] = []
        first = self.sc.skip()
        while True:
            before = self.sc.skip()
            terms.append(self.syntactic_term())
            blank.append(self.sc.pos == before)
            if self.sc.match_symbol(Symbol.CONCATENATE):
                continue
            if not (self.options.implicit_concatenation and self._starts_term()):
                break
        # "a" | , ;  -- a list of missing terms, not an explicit empty sequence
        if len(terms) > 1 and all(blank):
            raise EmptySingleDefinition(
                "empty single definition (concatenation of missing terms)",
                src=self.src, pos=first, context=self.context,
            )
        return SingleDefinition(tuple(terms))

    def syntactic_term(self) -> SyntacticTerm:
        factor = self.syntactic_factor()
        if self.sc.match_symbol(Symbol.EXCEPT):
            return SyntacticTerm(factor, self.syntactic_factor())
        return SyntacticTerm(factor)

    def syntactic_factor(self) -> SyntacticFactor:
        count, self.sc.pos = parse_repetition_count(self.src, self.sc.pos, context=self.context)
        return SyntacticFactor(self.syntactic_primary(), count)

    # ---- primary ----
    def syntactic_primary(self) -> SyntacticPrimary:
        start = self.sc.skip()
        opener = self.sc.match_symbol(*_BRACKETS)
        if opener is not None:
            return self._bracketed(opener, start)

        ch = self.sc.peek()
        if ch == SPECIAL:
            node, self.sc.pos = parse_special_sequence(self.src, self.sc.pos, context=self.context)
            return node
        if ch in QUOTES:
            node, self.sc.pos = parse_terminal_string(self.src, self.sc.pos, context=self.context)
            return node
        if is_meta_identifier_start(ch):
            node, self.sc.pos = parse_meta_identifier(self.src, self.sc.pos, context=self.context)
            return node
        if self.sc.peek_symbol(*_EMPTY_FOLLOW) is not None:
            return EmptySequence()

        raise UnexpectedSymbol(
            f"expected a syntactic primary, found {describe_found(self.src, start)}",
            src=self.src, pos=start, expected=_PRIMARY_EXPECTED, context=self.context,
        )

    def _bracketed(self, opener: str, start: int) -> SyntacticPrimary:
        node_type, closer, label = _BRACKETS[opener]
        if self.depth >= self.options.max_depth:
            raise NestingTooDeep(
                f"brackets nested deeper than {self.options.max_depth}",
                src=self.src, pos=start, context=self.context, limit=self.options.max_depth,
            )
        line, col = self.sc.line_col(start)
        self.depth += 1
        self.deepest = max(self.deepest, self.depth)
        try:
            with self._within(f"{label} at {line}:{col}"):
                definitions = self.definition_list()
                if self.sc.match_symbol(closer) is None:
                    expected = spellings_of(closer)
                    raise UnmatchedBracket(
                        f"{label} opened at {line}:{col} is not closed: expected one of "
                        f"{', '.join(f'`{e}`' for e in expected)}, "
                        f"found {describe_found(self.src, self.sc.pos)}",
                        src=self.src, pos=self.sc.pos, expected=expected,
                        context=self.context, opened_at=start,
                    )
        finally:
            self.depth -= 1
        return node_type(definitions)

    def finish(self) -> int:
        return self.sc.skip()

    def run(self, production: Callable[[], Any]) -> Any:
        """Run one production; running out of stack is reported as NestingTooDeep."""
        try:
            return production()
        except RecursionError:
            # the recursion limit was lowered after the options were built
            err = NestingTooDeep(
                f"brackets nested deeper than the interpreter stack allows "
                f"(reached depth {self.deepest} of {self.options.max_depth})",
                src=self.src, pos=self.sc.pos, limit=self.options.max_depth,
            )
        except EbnfSyntaxError as e:
            self._debug(f"parse failed | {e.kind} at {e.line}:{e.col}")
            raise
        self._debug(f"parse failed | {err.kind} at {err.line}:{err.col}")
        raise err


# --- public entry points ---
def parse_syntax(src: str, options: Optional[ParseOptions] = None) -> Syntax:
    """Parse a whole ISO 14977 syntax; all input must be consumed."""
    p = _Parser(src, 0, options)
    return p.run(p.syntax)


parse_ebnf = parse_syntax


def parse_syntax_rule(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[SyntaxRule, int]:
    p = _Parser(src, pos, options)
    return p.run(p.syntax_rule), p.finish()


def parse_definition_list(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[DefinitionList, int]:
    p = _Parser(src, pos, options)
    return p.run(p.definition_list), p.finish()


def parse_single_definition(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[SingleDefinition, int]:
    p = _Parser(src, pos, options)
    return p.run(p.single_definition), p.finish()


def parse_syntactic_term(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[SyntacticTerm, int]:
    p = _Parser(src, pos, options)
    return p.run(p.syntactic_term), p.finish()


def parse_syntactic_factor(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[SyntacticFactor, int]:
    p = _Parser(src, pos, options)
    return p.run(p.syntactic_factor), p.finish()


def parse_syntactic_primary(src: str, pos: int = 0, options: Optional[ParseOptions] = None) -> Tuple[SyntacticPrimary, int]:
    p = _Parser(src, pos, options)
    return p.run(p.syntactic_primary), p.finish()
