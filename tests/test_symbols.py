"""Tests for the ISO 14977 symbol table."""

import pytest

from isoebnf.errors import UnknownSymbolError
from isoebnf.grammar.symbols import (
    Symbol, all_symbols, binds_tighter, canonical_spelling, match_symbol,
    spellings_of, symbol_of,
)


def test_alternate_spellings():
    assert spellings_of(Symbol.END_OPTION) == ("]", "/)")
    assert spellings_of(Symbol.END_REPEAT) == ("}", ":)")
    assert spellings_of(Symbol.START_OPTION) == ("[", "(/")
    assert spellings_of(Symbol.START_REPEAT) == ("{", "(:")
    assert spellings_of(Symbol.DEFINITION_SEPARATOR) == ("|", "/", "!")
    assert spellings_of(Symbol.TERMINATOR) == (";", ".")


@pytest.mark.parametrize("text, tag", [
    ("*", Symbol.REPETITION),
    ("-", Symbol.EXCEPT),
    (",", Symbol.CONCATENATE),
    ("|", Symbol.DEFINITION_SEPARATOR),
    ("!", Symbol.DEFINITION_SEPARATOR),
    ("=", Symbol.DEFINING),
    (";", Symbol.TERMINATOR),
    (".", Symbol.TERMINATOR),
    ("(/", Symbol.START_OPTION),
    (":)", Symbol.END_REPEAT),
])
def test_symbol_of(text, tag):
    assert symbol_of(text) == tag


def test_symbol_of_unknown_text():
    with pytest.raises(UnknownSymbolError) as exc:
        symbol_of("#")
    assert "ISO 14977" in str(exc.value)
    assert exc.value.text == "#"


def test_spellings_of_unknown_tag():
    with pytest.raises(KeyError):
        spellings_of("no-such-symbol")


def test_every_tag_round_trips_through_its_spellings():
    for tag in all_symbols():
        for spelling in spellings_of(tag):
            assert symbol_of(spelling) == tag
        assert canonical_spelling(tag) == spellings_of(tag)[0]


def test_match_symbol_prefers_longest_spelling():
    assert match_symbol("(* c *)", 0) == (Symbol.START_COMMENT, 2)
    assert match_symbol("(/ x /)", 0) == (Symbol.START_OPTION, 2)
    assert match_symbol("/)", 0) == (Symbol.END_OPTION, 2)
    assert match_symbol("/ x", 0) == (Symbol.DEFINITION_SEPARATOR, 1)
    assert match_symbol("( x )", 0) == (Symbol.START_GROUP, 1)


def test_match_symbol_with_candidates():
    assert match_symbol("x ;", 2, [Symbol.TERMINATOR]) == (Symbol.TERMINATOR, 3)
    assert match_symbol(";", 0, [Symbol.DEFINING]) is None
    # "(/" is an option start, never a group start followed by "/"
    assert match_symbol("(/", 0, [Symbol.START_GROUP]) is None
    assert match_symbol("abc", 0) is None
    assert match_symbol("", 0) is None


def test_operator_binding_order():
    assert binds_tighter(Symbol.REPETITION, Symbol.EXCEPT)
    assert binds_tighter(Symbol.EXCEPT, Symbol.CONCATENATE)
    assert binds_tighter(Symbol.CONCATENATE, Symbol.DEFINITION_SEPARATOR)
    assert binds_tighter(Symbol.DEFINITION_SEPARATOR, Symbol.DEFINING)
    assert binds_tighter(Symbol.DEFINING, Symbol.TERMINATOR)
    assert not binds_tighter(Symbol.TERMINATOR, Symbol.REPETITION)


def test_binds_tighter_rejects_brackets():
    with pytest.raises(KeyError):
        binds_tighter(Symbol.START_GROUP, Symbol.EXCEPT)
