"""isoebnf: ISO/IEC 14977 Extended BNF reader.

This package provides:
- an immutable syntax tree for ISO 14977 grammars
- a recursive-descent parser with typed, located diagnostics
- the symbol table of ISO-equivalent spellings and the lexical helpers

It does not execute, print or analyse the grammars it reads.
"""

from .errors import (
    EbnfSyntaxError, EmptyDefinitionList, EmptySingleDefinition,
    EmptyTerminalString, InvalidRepetitionCount, NestingTooDeep,
    TrailingInput, UnexpectedSymbol, UnknownSymbolError, UnmatchedBracket,
    UnterminatedComment, UnterminatedSpecialSequence, UnterminatedTerminalString,
)
from .options import ParseOptions
from .grammar.ast import (
    DefinitionList, EmptySequence, GroupedSequence, MetaIdentifier,
    OptionalSequence, RepeatedSequence, SingleDefinition, Span,
    SpecialSequence, Syntax, SyntacticFactor, SyntacticPrimary,
    SyntacticTerm, SyntaxRule, TerminalString,
)
from .grammar.symbols import Symbol, spellings_of, symbol_of
from .grammar.parser import (
    parse_definition_list, parse_ebnf, parse_single_definition,
    parse_syntactic_factor, parse_syntactic_primary, parse_syntactic_term,
    parse_syntax, parse_syntax_rule,
)

__version__ = "0.1.0"
