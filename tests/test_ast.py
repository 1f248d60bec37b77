"""Tests for syntax tree invariants."""

import dataclasses

import pytest

from isoebnf import (
    DefinitionList, EmptySequence, MetaIdentifier, SingleDefinition, Span,
    Syntax, SyntacticFactor, SyntacticTerm, SyntaxRule, TerminalString,
)


def _rule(name: str, text: str) -> SyntaxRule:
    definitions = DefinitionList([
        SingleDefinition([SyntacticTerm(SyntacticFactor(TerminalString(text)))]),
    ])
    return SyntaxRule(MetaIdentifier(name), definitions)


@pytest.mark.parametrize("name", ["a", "Z", "letter", "rule42", "x1y2"])
def test_valid_meta_identifiers(name):
    assert MetaIdentifier(name).name == name
    assert str(MetaIdentifier(name)) == name


@pytest.mark.parametrize("name", ["", "1a", "_a", "a_b", "a-b", "a b"])
def test_invalid_meta_identifiers(name):
    with pytest.raises(ValueError):
        MetaIdentifier(name)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        SyntacticFactor(EmptySequence(), -1)


def test_zero_count_allowed():
    assert SyntacticFactor(EmptySequence(), 0).count == 0


def test_empty_containers_rejected():
    with pytest.raises(ValueError):
        SingleDefinition(())
    with pytest.raises(ValueError):
        DefinitionList(())
    with pytest.raises(ValueError):
        Syntax(())


def test_sequences_are_stored_as_tuples():
    rule = _rule("a", "x")
    assert isinstance(rule.definitions.definitions, tuple)
    assert isinstance(rule.definitions.definitions[0].terms, tuple)


def test_nodes_are_frozen():
    ident = MetaIdentifier("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ident.name = "b"


def test_span_ignored_in_equality():
    assert MetaIdentifier("a", span=Span(0, 1, 1, 1)) == MetaIdentifier("a", span=Span(5, 6, 2, 3))


def test_syntax_helpers_keep_duplicates():
    syntax = Syntax([_rule("a", "x"), _rule("b", "y"), _rule("a", "z")])
    assert len(syntax) == 3
    assert syntax.rule_names() == ["a", "b"]
    assert [r.definitions.definitions[0].terms[0].factor.primary.text
            for r in syntax.rules_named("a")] == ["x", "z"]
    assert syntax.rules_named("missing") == []
    assert [r.name for r in syntax] == ["a", "b", "a"]


def test_nodes_are_hashable():
    assert hash(_rule("a", "x")) == hash(_rule("a", "x"))
