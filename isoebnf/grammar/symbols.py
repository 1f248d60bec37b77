"""ISO 14977 symbol table: canonical tags and their permitted spellings.

ISO 14977 (section 7) lets several representations stand for one symbol,
e.g. an option may be written `[ ... ]` or `(/ ... /)`. The parser only ever
sees the canonical tag, so the AST cannot tell the spellings apart.
"""

from __future__ import annotations
from typing     import Dict, Iterable, List, Optional, Tuple

from ..errors   import UnknownSymbolError


class Symbol:
    """Canonical symbol tags."""
    CONCATENATE          = "concatenate-symbol"
    DEFINING             = "defining-symbol"
    DEFINITION_SEPARATOR = "definition-separator-symbol"
    END_COMMENT          = "end-comment-symbol"
    END_GROUP            = "end-group-symbol"
    END_OPTION           = "end-option-symbol"
    END_REPEAT           = "end-repeat-symbol"
    EXCEPT               = "except-symbol"
    FIRST_QUOTE          = "first-quote-symbol"
    REPETITION           = "repetition-symbol"
    SECOND_QUOTE         = "second-quote-symbol"
    SPECIAL_SEQUENCE     = "special-sequence-symbol"
    START_COMMENT        = "start-comment-symbol"
    START_GROUP          = "start-group-symbol"
    START_OPTION         = "start-option-symbol"
    START_REPEAT         = "start-repeat-symbol"
    TERMINATOR           = "terminator-symbol"


# first spelling is the preferred one
_SPELLINGS: Dict[str, Tuple[str, ...]] = {
    Symbol.CONCATENATE:          (",",),
    Symbol.DEFINING:             ("=",),
    Symbol.DEFINITION_SEPARATOR: ("|", "/", "!"),
    Symbol.END_COMMENT:          ("*)",),
    Symbol.END_GROUP:            (")",),
    Symbol.END_OPTION:           ("]", "/)"),
    Symbol.END_REPEAT:           ("}", ":)"),
    Symbol.EXCEPT:               ("-",),
    Symbol.FIRST_QUOTE:          ("'",),
    Symbol.REPETITION:           ("*",),
    Symbol.SECOND_QUOTE:         ('"',),
    Symbol.SPECIAL_SEQUENCE:     ("?",),
    Symbol.START_COMMENT:        ("(*",),
    Symbol.START_GROUP:          ("(",),
    Symbol.START_OPTION:         ("[", "(/"),
    Symbol.START_REPEAT:         ("{", "(:"),
    Symbol.TERMINATOR:           (";", "."),
}

_BY_SPELLING: Dict[str, str] = {
    spelling: tag for tag, spellings in _SPELLINGS.items() for spelling in spellings
}

# Longest spelling first: "(*" before "(", "/)" before "/".
_MATCH_ORDER: List[Tuple[str, str]] = sorted(
    ((spelling, tag) for tag, spellings in _SPELLINGS.items() for spelling in spellings),
    key=lambda p: -len(p[0]),
)

# Operator binding strength, strongest first (ISO 14977 section 4).
OPERATOR_PRECEDENCE: Dict[str, int] = {
    Symbol.REPETITION:           6,
    Symbol.EXCEPT:               5,
    Symbol.CONCATENATE:          4,
    Symbol.DEFINITION_SEPARATOR: 3,
    Symbol.DEFINING:             2,
    Symbol.TERMINATOR:           1,
}


def all_symbols() -> Tuple[str, ...]:
    return tuple(_SPELLINGS)


def spellings_of(tag: str) -> Tuple[str, ...]:
    """All ISO-legal spellings of a tag. Unknown tag -> KeyError."""
    return _SPELLINGS[tag]


def canonical_spelling(tag: str) -> str:
    return _SPELLINGS[tag][0]


def symbol_of(text: str) -> str:
    """Canonical tag of an exact spelling. Unknown text -> UnknownSymbolError."""
    try:
        return _BY_SPELLING[text]
    except KeyError:
        raise UnknownSymbolError(text) from None


def match_symbol(src: str, pos: int, candidates: Optional[Iterable[str]] = None) -> Optional[Tuple[str, int]]:
    """
    Longest symbol spelling starting at src[pos].
    - returns (tag, end) or None
    - with `candidates`, the longest match must be one of those tags;
      a longer match of another tag wins and yields None (maximal munch).
    """
    wanted = None if candidates is None else frozenset(candidates)
    for spelling, tag in _MATCH_ORDER:
        if src.startswith(spelling, pos):
            if wanted is not None and tag not in wanted:
                return None
            return tag, pos + len(spelling)
    return None


def binds_tighter(a: str, b: str) -> bool:
    """True if operator `a` binds more strongly than operator `b`."""
    try:
        return OPERATOR_PRECEDENCE[a] > OPERATOR_PRECEDENCE[b]
    except KeyError as e:
        raise KeyError(f"{e.args[0]!r} is not an Extended BNF operator") from None
