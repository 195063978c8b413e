"""Truth evaluation of epistemic formulas at worlds of a Kripke model.

This module provides:
- ``evaluate``: recursive truth function over the formula tree
- ``truth``: checked public entry point
- ``satisfying_worlds`` / ``check``: the satisfaction set of a formula and
  a result object in the style of the CTL model checker

Semantics at world w:
- p: p is in the valuation of w
- ¬, ∧, ∨, →, ↔: classical, → is material implication
- □φ: φ holds at every successor of w under any agent (vacuous if none)
- ◊φ: φ holds at some successor of w under any agent (false if none)
- K_a φ: φ holds at every a-successor of w (vacuous if a has none)
- E_G φ: K_a φ for every a in G
- D_G φ: φ holds at every world each agent of G reaches (intersection of
  the agents' multi-step closures)
- C_G φ: φ holds at every world some agent of G reaches (union of the
  agents' multi-step closures)

Evaluation only reads the model. Errors propagate to the caller; a single
bad sub-formula fails the whole evaluation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from epistemic_mpl.logic.formula import (
    Common,
    Conj,
    Disj,
    Distributed,
    Equi,
    EveryoneKnows,
    Formula,
    Group,
    Impl,
    Know,
    Nec,
    Neg,
    Poss,
    Prop,
    agents_of,
)
from epistemic_mpl.logic.wff import Wff
from epistemic_mpl.model.kripke import KripkeModel
from epistemic_mpl.model.reachability import intersect_reachable, union_reachable
from epistemic_mpl.types import (
    AgentId,
    InvalidFormula,
    InvalidModel,
    InvalidWff,
    StateNotFound,
    WorldIndex,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Result
# =============================================================================


@dataclass
class EvaluationResult:
    """Result of checking a formula at a world.

    Attributes:
        satisfied: Whether the formula holds at the requested world.
        world: The requested world.
        satisfying_worlds: Every live world where the formula holds.
        formula: The formula that was checked.
    """

    satisfied: bool
    world: WorldIndex
    satisfying_worlds: set[WorldIndex] = field(default_factory=set)
    formula: Formula | None = None


# =============================================================================
# Evaluation
# =============================================================================


def resolve_group(node: Formula) -> tuple[AgentId, ...]:
    """Agents named by a group operand, distinct, in order of appearance.

    Raises:
        InvalidFormula: If ``node`` is neither an agent leaf nor a group.
    """
    if not isinstance(node, (Prop, Group)):
        raise InvalidFormula(f"Not a group of agents: {node!r}")
    return agents_of(node)


def _every(model: KripkeModel, worlds: Iterable[WorldIndex] | None, formula: Formula) -> bool:
    return all(evaluate(model, w, formula) for w in worlds or ())


def evaluate(model: KripkeModel, world: WorldIndex, formula: Formula) -> bool:
    """Truth value of ``formula`` at ``world``.

    Args:
        model: The Kripke model (read only).
        world: Index of a live world.
        formula: The formula tree.

    Returns:
        True iff the formula holds at the world.

    Raises:
        StateNotFound: If ``world`` (or a world reached while recursing) is
            missing or deleted.
        InvalidFormula: If a node is not a recognized formula.
        EmptyGroupError: If distributed knowledge is taken over no agents.
    """
    if not model.has_world(world):
        raise StateNotFound(world)

    # --- Atomic ---
    if isinstance(formula, Prop):
        return model.valuation(formula.name, world)

    # --- Boolean ---
    if isinstance(formula, Neg):
        return not evaluate(model, world, formula.formula)

    if isinstance(formula, Conj):
        return evaluate(model, world, formula.left) and evaluate(model, world, formula.right)

    if isinstance(formula, Disj):
        return evaluate(model, world, formula.left) or evaluate(model, world, formula.right)

    if isinstance(formula, Impl):
        return not evaluate(model, world, formula.left) or evaluate(model, world, formula.right)

    if isinstance(formula, Equi):
        return evaluate(model, world, formula.left) == evaluate(model, world, formula.right)

    # --- Modal: every agent's relation merged ---
    if isinstance(formula, Nec):
        return _every(model, model.all_successors(world), formula.formula)

    if isinstance(formula, Poss):
        return any(
            evaluate(model, w, formula.formula) for w in model.all_successors(world) or ()
        )

    # --- Epistemic ---
    if isinstance(formula, Know):
        return _every(model, model.successors(world, formula.agent.name), formula.formula)

    if isinstance(formula, EveryoneKnows):
        return all(
            _every(model, model.successors(world, agent), formula.formula)
            for agent in resolve_group(formula.group)
        )

    if isinstance(formula, Distributed):
        reachable = intersect_reachable(model, world, resolve_group(formula.group))
        return _every(model, sorted(reachable), formula.formula)

    if isinstance(formula, Common):
        reachable = union_reachable(model, world, resolve_group(formula.group))
        return _every(model, sorted(reachable), formula.formula)

    if isinstance(formula, Group):
        raise InvalidFormula(f"Agent group {formula!r} has no truth value")

    raise InvalidFormula(f"Invalid formula: {type(formula).__name__}")


# =============================================================================
# Public API
# =============================================================================


def _unwrap(wff: object) -> Formula:
    if isinstance(wff, Wff):
        return wff.formula
    if isinstance(wff, Group):
        raise InvalidWff(wff, "a bare agent group has no truth value")
    if isinstance(wff, Formula):
        return wff
    raise InvalidWff(wff)


def truth(model: KripkeModel, world: WorldIndex, wff: Wff | Formula) -> bool:
    """Evaluate a formula at a world, checking the arguments first.

    Args:
        model: The Kripke model.
        world: Index of the world to evaluate at.
        wff: A ``Wff`` or a formula tree.

    Returns:
        True iff the formula holds at the world.

    Raises:
        InvalidModel: If ``model`` is not a ``KripkeModel``.
        InvalidWff: If ``wff`` is not a formula.
        StateNotFound: If ``world`` is missing or deleted.

    Example:
        >>> m = KripkeModel()
        >>> m.add_world({"p": True}), m.add_world()
        (0, 1)
        >>> m.add_transition(0, 1, "a")
        >>> truth(m, 0, Wff("a ? p"))
        False
    """
    if not isinstance(model, KripkeModel):
        raise InvalidModel(model)
    formula = _unwrap(wff)
    if not model.has_world(world):
        raise StateNotFound(world)
    return evaluate(model, world, formula)


def satisfying_worlds(model: KripkeModel, wff: Wff | Formula) -> set[WorldIndex]:
    """Every live world at which the formula holds."""
    if not isinstance(model, KripkeModel):
        raise InvalidModel(model)
    formula = _unwrap(wff)
    return {w for w in model.live_worlds() if evaluate(model, w, formula)}


def check(model: KripkeModel, world: WorldIndex, wff: Wff | Formula) -> EvaluationResult:
    """Evaluate a formula at a world and collect its satisfaction set.

    Example:
        >>> result = check(model, 0, Wff("a,b ?C p"))
        >>> result.satisfied, sorted(result.satisfying_worlds)
        (True, [0, 2])
    """
    satisfied = truth(model, world, wff)
    formula = _unwrap(wff)
    sat_set = satisfying_worlds(model, formula)
    logger.debug(
        "check %r at %d: %s (%d satisfying worlds)", formula, world, satisfied, len(sat_set)
    )
    return EvaluationResult(
        satisfied=satisfied,
        world=world,
        satisfying_worlds=sat_set,
        formula=formula,
    )


__all__ = [
    "EvaluationResult",
    "resolve_group",
    "evaluate",
    "truth",
    "satisfying_worlds",
    "check",
]
