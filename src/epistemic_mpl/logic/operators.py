"""Operator tables for the formula parser and renderer.

An operator is described by its surface symbol, the node kind it builds,
a precedence rank (higher binds tighter) and, for binary operators, an
associativity. The parser compiles a ``ParserConfig`` into a grammar and
the renderer reads the same table to print formulas back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from epistemic_mpl.types import NodeKind


class Associativity(str, Enum):
    """Associativity of a binary operator."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorSpec:
    """One row of an operator table.

    Attributes:
        symbol: Surface syntax, e.g. ``"->"``.
        key: Node kind the operator builds.
        precedence: Binding strength; higher binds tighter.
        associativity: Only meaningful for binary operators.
    """

    symbol: str
    key: NodeKind
    precedence: int
    associativity: Associativity = Associativity.RIGHT

    def __post_init__(self) -> None:
        if not self.symbol or self.symbol.strip() != self.symbol:
            raise ValueError(f"Operator symbol must be non-empty without spaces: {self.symbol!r}")
        if self.key == NodeKind.PROP:
            raise ValueError("'prop' is reserved for variables")


UNARY_KINDS = frozenset({NodeKind.NEG, NodeKind.NEC, NodeKind.POSS})
BINARY_KINDS = frozenset(NodeKind) - UNARY_KINDS - {NodeKind.PROP}


DEFAULT_UNARIES: tuple[OperatorSpec, ...] = (
    OperatorSpec("~", NodeKind.NEG, 4),
    OperatorSpec("[]", NodeKind.NEC, 4),
    OperatorSpec("<>", NodeKind.POSS, 4),
)

DEFAULT_BINARIES: tuple[OperatorSpec, ...] = (
    OperatorSpec(",", NodeKind.GROUP, 5),
    OperatorSpec("&", NodeKind.CONJ, 3),
    OperatorSpec("|", NodeKind.DISJ, 2),
    OperatorSpec("->", NodeKind.IMPL, 1),
    OperatorSpec("<->", NodeKind.EQUI, 0),
    OperatorSpec("?", NodeKind.KNOW, 0),
    OperatorSpec("?E", NodeKind.EVERYONE, 0),
    OperatorSpec("?D", NodeKind.DISTRIBUTED, 0),
    OperatorSpec("?C", NodeKind.COMMON, 0),
)


@dataclass
class ParserConfig:
    """Configuration for the formula parser and ASCII renderer."""

    unaries: tuple[OperatorSpec, ...] = DEFAULT_UNARIES
    """Prefix operators"""

    binaries: tuple[OperatorSpec, ...] = DEFAULT_BINARIES
    """Infix operators"""

    variable_pattern: str = r"[a-z][a-z0-9_]*"
    """Regular expression for proposition and agent names.

    The model wire format is narrower: agent names there may not contain
    digits, since a run like ``a10`` would not say where the name ends.
    Models whose agents are named e.g. ``a1`` still round-trip through
    ``model_to_dict``.
    """

    symbols: dict[NodeKind, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.unaries = tuple(self.unaries)
        self.binaries = tuple(self.binaries)
        for spec in self.unaries:
            if spec.key not in UNARY_KINDS:
                raise ValueError(f"{spec.key.value!r} is not a unary operator")
        for spec in self.binaries:
            if spec.key not in BINARY_KINDS:
                raise ValueError(f"{spec.key.value!r} is not a binary operator")

        self.symbols = {}
        for spec in self.unaries + self.binaries:
            if spec.key in self.symbols:
                raise ValueError(f"Operator {spec.key.value!r} configured twice")
            self.symbols[spec.key] = spec.symbol

        seen = [spec.symbol for spec in self.unaries + self.binaries]
        duplicates = {s for s in seen if seen.count(s) > 1}
        if duplicates:
            raise ValueError(f"Duplicate operator symbols: {sorted(duplicates)}")
        clashes = [s for s in seen if re.fullmatch(self.variable_pattern, s)]
        if clashes:
            raise ValueError(f"Operator symbols look like variables: {clashes}")

        # Mixed associativity on one level makes ``a op b op' c`` ambiguous.
        by_level: dict[int, set[Associativity]] = {}
        for spec in self.binaries:
            by_level.setdefault(spec.precedence, set()).add(spec.associativity)
        mixed = sorted(level for level, assoc in by_level.items() if len(assoc) > 1)
        if mixed:
            raise ValueError(f"Mixed associativity at precedence levels {mixed}")

    def symbol_for(self, kind: NodeKind) -> str:
        """Surface symbol of an operator kind.

        Raises:
            KeyError: If the kind has no configured operator.
        """
        return self.symbols[kind]

    def precedence_levels(self) -> list[int]:
        """Distinct precedence ranks, loosest first."""
        return sorted({spec.precedence for spec in self.unaries + self.binaries})


DEFAULT_CONFIG = ParserConfig()


__all__ = [
    "Associativity",
    "OperatorSpec",
    "ParserConfig",
    "UNARY_KINDS",
    "BINARY_KINDS",
    "DEFAULT_UNARIES",
    "DEFAULT_BINARIES",
    "DEFAULT_CONFIG",
]
