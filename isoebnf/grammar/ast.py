# isoebnf/grammar/ast.py
"""ISO 14977 syntax tree

    Syntax            := SyntaxRule+
    SyntaxRule        := MetaIdentifier DefinitionList
    DefinitionList    := SingleDefinition+          (alternatives, source order)
    SingleDefinition  := SyntacticTerm+             (concatenation)
    SyntacticTerm     := SyntacticFactor [exception: SyntacticFactor]
    SyntacticFactor   := count x Primary
    Primary           := OptionalSequence | RepeatedSequence | GroupedSequence
                       | MetaIdentifier | TerminalString | SpecialSequence
                       | EmptySequence

All nodes are frozen. Equality is structural: spans and the quote style of
terminal strings are not compared.
"""

from __future__  import annotations
from dataclasses import dataclass, field
from typing      import Iterator, List, Optional, Tuple, Union

import regex as re

_META_ID_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    line: int
    col: int


# ---- leaves ----

@dataclass(frozen=True)
class MetaIdentifier:
    name: str
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not _META_ID_RE.fullmatch(self.name):
            raise ValueError(f"invalid meta identifier {self.name!r}: "
                             "must be a letter followed by letters or digits")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TerminalString:
    text: str                   # verbatim, gaps inside are significant
    quote: str = field(default='"', compare=False)
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("a terminal string cannot be empty")
        if self.quote not in ("'", '"'):
            raise ValueError(f"unknown quote {self.quote!r}")


@dataclass(frozen=True)
class SpecialSequence:
    text: str                   # opaque to the parser
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class EmptySequence:
    pass


# ---- bracketed ----

@dataclass(frozen=True)
class OptionalSequence:
    definitions: "DefinitionList"


@dataclass(frozen=True)
class RepeatedSequence:
    definitions: "DefinitionList"


@dataclass(frozen=True)
class GroupedSequence:
    definitions: "DefinitionList"


SyntacticPrimary = Union[
    OptionalSequence, RepeatedSequence, GroupedSequence,
    MetaIdentifier, TerminalString, SpecialSequence, EmptySequence,
]


# ---- composite ----

@dataclass(frozen=True)
class SyntacticFactor:
    primary: SyntacticPrimary
    count: int = 1              # 0 matches nothing

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 0:
            raise ValueError(f"repetition count must be a non-negative integer, got {self.count!r}")


@dataclass(frozen=True)
class SyntacticTerm:
    """`factor - exception`: the language of factor minus that of exception."""
    factor: SyntacticFactor
    exception: Optional[SyntacticFactor] = None


@dataclass(frozen=True)
class SingleDefinition:
    terms: Tuple[SyntacticTerm, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))
        if not self.terms:
            raise ValueError("a single definition needs at least one term")

    def __iter__(self) -> Iterator[SyntacticTerm]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)


@dataclass(frozen=True)
class DefinitionList:
    definitions: Tuple[SingleDefinition, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "definitions", tuple(self.definitions))
        if not self.definitions:
            raise ValueError("a definition list needs at least one single definition")

    def __iter__(self) -> Iterator[SingleDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)


@dataclass(frozen=True)
class SyntaxRule:
    identifier: MetaIdentifier
    definitions: DefinitionList
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.identifier.name


@dataclass(frozen=True)
class Syntax:
    """Root. Rules keep source order; duplicate names stay separate entries."""
    rules: Tuple[SyntaxRule, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        if not self.rules:
            raise ValueError("a syntax needs at least one syntax rule")

    def __iter__(self) -> Iterator[SyntaxRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def rule_names(self) -> List[str]:
        """Distinct names in first-seen order."""
        seen = set()
        out: List[str] = []
        for r in self.rules:
            if r.name not in seen:
                out.append(r.name); seen.add(r.name)
        return out

    def rules_named(self, name: str) -> List[SyntaxRule]:
        return [r for r in self.rules if r.name == name]
