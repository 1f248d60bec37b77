"""Tests for gap, comment and token-wrapping helpers."""

import pytest

from isoebnf.errors import UnexpectedSymbol, UnterminatedComment
from isoebnf.grammar.symbols import Symbol
from isoebnf.lex import (
    Scanner, is_gap_separator, lexeme, skip_comment, skip_gaps,
    skip_insignificant,
)


@pytest.mark.parametrize("ch", [" ", "\t", "\r", "\n", "\x0b"])
def test_gap_separators(ch):
    assert is_gap_separator(ch)


@pytest.mark.parametrize("ch", ["a", "_", "(", "", "\xa0"])
def test_not_gap_separators(ch):
    assert not is_gap_separator(ch)


def test_skip_gaps():
    assert skip_gaps(" \r\n\t\n\x0babc", 0) == 6
    assert skip_gaps("abc", 0) == 0
    assert skip_gaps("", 0) == 0
    assert skip_gaps("a  b", 1) == 3


def test_skip_comment_flat():
    src = "(* hello *)rest"
    assert skip_comment(src, 0) == src.index("rest")


def test_skip_comment_nested():
    src = "(* outer (* inner *) still outer *) id"
    assert skip_comment(src, 0) == src.index(" id")


def test_skip_comment_not_a_comment():
    assert skip_comment("( x )", 0) == 0
    assert skip_comment("x", 0) == 0


def test_unterminated_comment():
    with pytest.raises(UnterminatedComment) as exc:
        skip_comment("ab (* never (* closed *)", 3)
    assert exc.value.pos == 3
    assert "unterminated comment" in str(exc.value)


def test_quotes_inside_comment_are_plain_text():
    src = "(* don't *) rest"
    assert skip_comment(src, 0) == src.index(" rest")
    # the first "*)" closes the comment, quoted or not
    src = '(* "*)" *)'
    assert skip_comment(src, 0) == src.index('" *)')


def test_skip_insignificant_mixes_gaps_and_comments():
    src = "  (* a *)\n (* b (* c *) *)\t x"
    assert skip_insignificant(src, 0) == src.index("x")
    assert skip_insignificant("x", 0) == 0


def test_lexeme_wrapper_skips_both_sides():
    def word(src, pos):
        end = pos
        while end < len(src) and src[end].isalpha():
            end += 1
        return src[pos:end], end

    wrapped = lexeme(word)
    value, end = wrapped("  (* c *) abc (* d *)  ;", 0)
    assert value == "abc"
    assert end == len("  (* c *) abc (* d *)  ")


def test_scanner_symbols():
    sc = Scanner("  = (* c *) ;")
    assert sc.peek_symbol(Symbol.TERMINATOR) is None
    assert sc.match_symbol(Symbol.DEFINING) == Symbol.DEFINING
    assert sc.pos == 3
    assert sc.match_symbol(Symbol.TERMINATOR) == Symbol.TERMINATOR
    sc.skip()
    assert sc.at_end()


def test_scanner_expect_symbol_failure():
    sc = Scanner("a = b")
    sc.pos = 5
    with pytest.raises(UnexpectedSymbol) as exc:
        sc.expect_symbol(Symbol.TERMINATOR, context=["syntax-rule 'a'"])
    err = exc.value
    assert err.expected == (";", ".")
    assert err.context == ("syntax-rule 'a'",)
    assert "end of input" in err.description


def test_scanner_line_col():
    sc = Scanner("a = b;\nc = d;")
    assert sc.line_col(7) == (2, 1)
    assert sc.line_col(0) == (1, 1)
