"""
Foundation Types for epistemic model checking.

Shared aliases, the formula node kinds and the error hierarchy. This module
sits below ``logic``, ``model`` and ``verification`` so that all three can
raise and catch the same exceptions without circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

AgentId = str
"""Opaque agent identifier, used as a relation key on every world."""

WorldIndex = int
"""Position of a world in a model. Stable across deletions."""

Valuation = frozenset[str]
"""Read view of the propositions true at a world."""


class NodeKind(str, Enum):
    """Kinds of formula tree nodes.

    The value of each member is the key used by the operator tables and by
    the JSON form of a formula.
    """

    PROP = "prop"  # p
    NEG = "neg"  # ~φ
    NEC = "nec"  # []φ
    POSS = "poss"  # <>φ
    CONJ = "conj"  # φ & ψ
    DISJ = "disj"  # φ | ψ
    IMPL = "impl"  # φ -> ψ
    EQUI = "equi"  # φ <-> ψ
    KNOW = "know"  # K_a φ
    GROUP = "group"  # a, b
    EVERYONE = "everyone"  # E_G φ
    DISTRIBUTED = "distributed"  # D_G φ
    COMMON = "common"  # C_G φ


# =============================================================================
# Errors
# =============================================================================


class EpistemicError(Exception):
    """Base class for every error raised by this package."""


class InvalidModel(EpistemicError, TypeError):
    """The evaluator was handed something that is not a Kripke model."""

    def __init__(self, obj: object) -> None:
        super().__init__(f"Invalid model: expected KripkeModel, got {type(obj).__name__}")
        self.obj = obj


class InvalidWff(EpistemicError, TypeError):
    """The evaluator was handed something that is not a well-formed formula."""

    def __init__(self, obj: object, reason: str = "") -> None:
        message = f"Invalid wff: {type(obj).__name__}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.obj = obj


@dataclass
class StateNotFound(EpistemicError, LookupError):
    """A world index is out of range or refers to a deleted world.

    Attributes:
        world: The index that was looked up.
    """

    world: int

    def __str__(self) -> str:
        return f"State {self.world} not found"


class InvalidFormula(EpistemicError, ValueError):
    """A formula node matches none of the recognized kinds or is malformed."""


class EmptyGroupError(EpistemicError, ValueError):
    """Distributed knowledge was requested over a group with no agents."""


class ModelFormatError(EpistemicError, ValueError):
    """A serialized model is malformed or a model cannot be serialized."""


@dataclass
class FormulaSyntaxError(EpistemicError, ValueError):
    """Formula text could not be parsed.

    Attributes:
        message: Error message
        text: The text being parsed
        column: 1-based column of the offending character, when known
    """

    message: str
    text: str = ""
    column: int | None = None

    def __str__(self) -> str:
        if self.column is not None:
            return f"{self.message} at column {self.column}"
        return self.message


__all__ = [
    "AgentId",
    "WorldIndex",
    "Valuation",
    "NodeKind",
    "EpistemicError",
    "InvalidModel",
    "InvalidWff",
    "StateNotFound",
    "InvalidFormula",
    "EmptyGroupError",
    "ModelFormatError",
    "FormulaSyntaxError",
]
