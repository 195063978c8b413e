"""Formula tree for multi-agent epistemic modal logic.

This module provides:
- One frozen dataclass per node kind (Prop, Neg, Nec, Poss, Conj, Disj,
  Impl, Equi, Know, Group, EveryoneKnows, Distributed, Common)
- Structural checks on the operands of the epistemic operators
- Small construction helpers (``group``, ``agents_of``)

Semantics (over Kripke structures with one relation per agent):
- []φ: φ holds in every successor, whichever agent's relation is used
- <>φ: φ holds in some successor, whichever agent's relation is used
- K_a φ: φ holds in every world agent a considers possible
- E_G φ: every agent in G knows φ
- D_G φ: φ holds in every world all agents of G can reach
- C_G φ: φ holds in every world some agent of G can reach

The agent operand of ``Know`` and the leaves of a ``Group`` are ``Prop``
nodes whose name is read as an agent identifier. That is how a formula
parser built from operator tables hands agents over.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from epistemic_mpl.types import InvalidFormula, NodeKind


class Formula(ABC):
    """Abstract base class for formula tree nodes."""

    kind: ClassVar[NodeKind]

    @abstractmethod
    def __repr__(self) -> str: ...

    @abstractmethod
    def children(self) -> tuple[Formula, ...]:
        """Direct sub-formulas, left to right."""
        ...


# --- Atomic ---


@dataclass(frozen=True, repr=False)
class Prop(Formula):
    """Propositional variable, or an agent name in an agent position.

    Attributes:
        name: The name of the proposition.
    """

    kind: ClassVar[NodeKind] = NodeKind.PROP

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidFormula(f"Proposition name must be a non-empty string: {self.name!r}")

    def __repr__(self) -> str:
        return self.name

    def children(self) -> tuple[Formula, ...]:
        return ()


# --- Unary ---


@dataclass(frozen=True, repr=False)
class _Unary(Formula):
    formula: Formula

    symbol: ClassVar[str] = ""

    def __post_init__(self) -> None:
        _check_formula(self.formula, self.kind)

    def __repr__(self) -> str:
        return f"{self.symbol}{self.formula!r}"

    def children(self) -> tuple[Formula, ...]:
        return (self.formula,)


class Neg(_Unary):
    """Negation: ¬φ."""

    kind: ClassVar[NodeKind] = NodeKind.NEG
    symbol: ClassVar[str] = "¬"


class Nec(_Unary):
    """Necessity: □φ, over the union of all agents' relations."""

    kind: ClassVar[NodeKind] = NodeKind.NEC
    symbol: ClassVar[str] = "□"


class Poss(_Unary):
    """Possibility: ◊φ, over the union of all agents' relations."""

    kind: ClassVar[NodeKind] = NodeKind.POSS
    symbol: ClassVar[str] = "◊"


# --- Binary connectives ---


@dataclass(frozen=True, repr=False)
class _Binary(Formula):
    left: Formula
    right: Formula

    symbol: ClassVar[str] = ""

    def __post_init__(self) -> None:
        _check_formula(self.left, self.kind)
        _check_formula(self.right, self.kind)

    def __repr__(self) -> str:
        return f"({self.left!r} {self.symbol} {self.right!r})"

    def children(self) -> tuple[Formula, ...]:
        return (self.left, self.right)


class Conj(_Binary):
    """Conjunction: φ ∧ ψ."""

    kind: ClassVar[NodeKind] = NodeKind.CONJ
    symbol: ClassVar[str] = "∧"


class Disj(_Binary):
    """Disjunction: φ ∨ ψ."""

    kind: ClassVar[NodeKind] = NodeKind.DISJ
    symbol: ClassVar[str] = "∨"


class Impl(_Binary):
    """Material implication: φ → ψ."""

    kind: ClassVar[NodeKind] = NodeKind.IMPL
    symbol: ClassVar[str] = "→"


class Equi(_Binary):
    """Equivalence: φ ↔ ψ."""

    kind: ClassVar[NodeKind] = NodeKind.EQUI
    symbol: ClassVar[str] = "↔"


# --- Epistemic ---


@dataclass(frozen=True, repr=False)
class Know(Formula):
    """Individual knowledge: K_a φ.

    Attributes:
        agent: Agent leaf (a ``Prop`` carrying the agent identifier).
        formula: What the agent knows.
    """

    kind: ClassVar[NodeKind] = NodeKind.KNOW

    agent: Prop | str
    formula: Formula

    def __post_init__(self) -> None:
        if isinstance(self.agent, str):
            object.__setattr__(self, "agent", Prop(self.agent))
        if not isinstance(self.agent, Prop):
            raise InvalidFormula(f"Knowledge operand must be a single agent, got {self.agent!r}")
        _check_formula(self.formula, self.kind)

    def __repr__(self) -> str:
        return f"K_{self.agent.name}({self.formula!r})"

    def children(self) -> tuple[Formula, ...]:
        return (self.agent, self.formula)


@dataclass(frozen=True, repr=False)
class Group(Formula):
    """Right-associated list of agents: ``a, (b, (c, ...))``.

    Only ever appears as the group operand of EveryoneKnows, Distributed
    or Common.

    Attributes:
        agent: First agent leaf.
        rest: Next agent leaf, or the remaining group.
    """

    kind: ClassVar[NodeKind] = NodeKind.GROUP

    agent: Prop
    rest: Prop | Group

    def __post_init__(self) -> None:
        if not isinstance(self.agent, Prop):
            raise InvalidFormula(f"Group member must be an agent, got {self.agent!r}")
        if not isinstance(self.rest, (Prop, Group)):
            raise InvalidFormula(f"Group tail must be an agent or a group, got {self.rest!r}")

    def __repr__(self) -> str:
        return ",".join(self.agents())

    def children(self) -> tuple[Formula, ...]:
        return (self.agent, self.rest)

    def agents(self) -> tuple[str, ...]:
        """Distinct agent names, in order of first appearance."""
        names: list[str] = []
        node: Prop | Group = self
        while isinstance(node, Group):
            names.append(node.agent.name)
            node = node.rest
        names.append(node.name)
        return tuple(dict.fromkeys(names))


@dataclass(frozen=True, repr=False)
class _GroupOperator(Formula):
    group: Prop | Group | str
    formula: Formula

    prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if isinstance(self.group, str):
            object.__setattr__(self, "group", Prop(self.group))
        if not isinstance(self.group, (Prop, Group)):
            raise InvalidFormula(f"Group operand must be an agent or a group, got {self.group!r}")
        _check_formula(self.formula, self.kind)

    def __repr__(self) -> str:
        return f"{self.prefix}_{{{self.group!r}}}({self.formula!r})"

    def children(self) -> tuple[Formula, ...]:
        return (self.group, self.formula)


class EveryoneKnows(_GroupOperator):
    """Everyone in G knows φ: E_G φ."""

    kind: ClassVar[NodeKind] = NodeKind.EVERYONE
    prefix: ClassVar[str] = "E"


class Distributed(_GroupOperator):
    """Distributed knowledge of G: D_G φ."""

    kind: ClassVar[NodeKind] = NodeKind.DISTRIBUTED
    prefix: ClassVar[str] = "D"


class Common(_GroupOperator):
    """Common knowledge of G: C_G φ."""

    kind: ClassVar[NodeKind] = NodeKind.COMMON
    prefix: ClassVar[str] = "C"


def _check_formula(operand: object, kind: NodeKind) -> None:
    if not isinstance(operand, Formula):
        raise InvalidFormula(f"Operand of {kind.value} is not a formula: {operand!r}")
    if isinstance(operand, Group):
        raise InvalidFormula(f"A group cannot be an operand of {kind.value}")


# =============================================================================
# Helpers
# =============================================================================

NODE_TYPES: dict[NodeKind, type[Formula]] = {
    cls.kind: cls
    for cls in (
        Prop,
        Neg,
        Nec,
        Poss,
        Conj,
        Disj,
        Impl,
        Equi,
        Know,
        Group,
        EveryoneKnows,
        Distributed,
        Common,
    )
}
"""Node class for each kind."""


def group(*agents: str) -> Prop | Group:
    """Build a group operand from agent names.

    A single name gives a bare agent leaf (a group of size one).

    Example:
        >>> group("a", "b", "c")
        a,b,c
    """
    if not agents:
        raise InvalidFormula("A group needs at least one agent")
    node: Prop | Group = Prop(agents[-1])
    for name in reversed(agents[:-1]):
        node = Group(Prop(name), node)
    return node


def agents_of(operand: Prop | Group) -> tuple[str, ...]:
    """Resolve a group operand to its ordered, distinct agent names."""
    if isinstance(operand, Group):
        return operand.agents()
    if isinstance(operand, Prop):
        return (operand.name,)
    raise InvalidFormula(f"Not a group operand: {operand!r}")


__all__ = [
    "Formula",
    "Prop",
    "Neg",
    "Nec",
    "Poss",
    "Conj",
    "Disj",
    "Impl",
    "Equi",
    "Know",
    "Group",
    "EveryoneKnows",
    "Distributed",
    "Common",
    "NODE_TYPES",
    "group",
    "agents_of",
]
