"""Serialization for Kripke models and formula trees.

Round-trip guarantees:
- ``model_from_string(model_to_string(m)) == m``
- ``model_from_dict(model_to_dict(m)) == m``
- ``formula_from_json(formula_to_json(f)) == f``

Model wire format: one token per world slot, each terminated by ``;``. A
deleted world is an empty token. A live world is::

    A<true props, comma-separated>S<agent><targets, comma-separated>...

with one ``<agent><targets>`` run per agent that has successors. For example
``'AqSa0,2b1;;AS;'`` is three slots: world 0 with ``q`` true and edges
``0 -a-> 0``, ``0 -a-> 2``, ``0 -b-> 1``; a deleted world 1; and an empty
world 2. Proposition names must match ``[a-z0-9_]+`` and agent names
``[A-Za-z_]+``, otherwise the encoding would be ambiguous.

Formula JSON form: a single-key dict per node, keyed by the node kind:
``{"prop": "p"}``, ``{"neg": {...}}``, ``{"conj": [{...}, {...}]}``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from epistemic_mpl.logic.formula import NODE_TYPES, Formula, Prop
from epistemic_mpl.logic.operators import UNARY_KINDS
from epistemic_mpl.model.kripke import KripkeModel, World
from epistemic_mpl.types import InvalidFormula, ModelFormatError, NodeKind

logger = logging.getLogger(__name__)

_PROP = r"[a-z0-9_]+"
_AGENT = r"[A-Za-z_]+"
_TARGETS = r"\d+(?:,\d+)*"

_PROP_RE = re.compile(_PROP)
_AGENT_RE = re.compile(_AGENT)
_TOKEN_RE = re.compile(rf"A((?:{_PROP}(?:,{_PROP})*)?)S((?:{_AGENT}{_TARGETS})*)")
_RUN_RE = re.compile(rf"({_AGENT})({_TARGETS})")
_MODEL_RE = re.compile(rf"(?:(?:A(?:{_PROP}(?:,{_PROP})*)?S(?:{_AGENT}{_TARGETS})*)?;)*")


# ── Model wire format ──────────────────────────────────────────────────


def model_to_string(model: KripkeModel) -> str:
    """Encode a model in the compact wire format.

    Args:
        model: The model to encode.

    Returns:
        The model string.

    Raises:
        ModelFormatError: If a proposition or agent name cannot be encoded.
            Agent names with digits (valid in formulas, e.g. ``a1``) are
            among them; use :func:`model_to_dict` for such models.
    """
    parts: list[str] = []
    for index, valuation in enumerate(model.list_worlds()):
        if valuation is None:
            parts.append(";")
            continue

        for prop in valuation:
            if not _PROP_RE.fullmatch(prop):
                raise ModelFormatError(f"Proposition {prop!r} at world {index} cannot be encoded")
        token = "A" + ",".join(sorted(valuation)) + "S"

        for agent, targets in (model.relation(index) or {}).items():
            if not targets:
                continue
            if not _AGENT_RE.fullmatch(agent):
                raise ModelFormatError(f"Agent {agent!r} at world {index} cannot be encoded")
            token += agent + ",".join(str(t) for t in targets)

        parts.append(token + ";")
    return "".join(parts)


def model_from_string(model_string: str) -> KripkeModel:
    """Decode a model from the wire format.

    Every agent's successor list is restored in order, duplicates included.

    Args:
        model_string: String produced by :func:`model_to_string`.

    Returns:
        A new model.

    Raises:
        ModelFormatError: If the string fails the structural check or a
            transition targets a missing or deleted world.
    """
    if not isinstance(model_string, str) or not _MODEL_RE.fullmatch(model_string):
        logger.warning("Rejected malformed model string: %.60r", model_string)
        raise ModelFormatError(f"Malformed model string: {model_string!r}")

    tokens = model_string.split(";")[:-1]
    worlds: list[World | None] = []
    for token in tokens:
        if not token:
            worlds.append(None)
            continue
        match = _TOKEN_RE.fullmatch(token)
        if match is None:  # pragma: no cover - guarded by _MODEL_RE
            raise ModelFormatError(f"Malformed world token: {token!r}")
        props, relation = match.groups()
        world = World(valuation=set(props.split(",")) if props else set())
        for agent, targets in _RUN_RE.findall(relation):
            world.successors.setdefault(agent, []).extend(int(t) for t in targets.split(","))
        worlds.append(world)

    _check_targets(worlds)
    return KripkeModel.from_worlds(worlds)


def _check_targets(worlds: list[World | None]) -> None:
    for source, world in enumerate(worlds):
        if world is None:
            continue
        for agent, targets in world.successors.items():
            for target in targets:
                if target >= len(worlds) or worlds[target] is None:
                    raise ModelFormatError(
                        f"Transition {source} -{agent}-> {target} targets a missing world"
                    )


# ── Model dict form ────────────────────────────────────────────────────


def model_to_dict(model: KripkeModel) -> dict[str, Any]:
    """Serialize a model to a JSON-compatible dict.

    Returns:
        ``{"worlds": [None | {"valuation": [...], "successors": {...}}]}``
    """
    worlds: list[dict[str, Any] | None] = []
    for index, valuation in enumerate(model.list_worlds()):
        if valuation is None:
            worlds.append(None)
            continue
        relation = model.relation(index) or {}
        worlds.append(
            {
                "valuation": sorted(valuation),
                "successors": {agent: list(targets) for agent, targets in relation.items()},
            }
        )
    return {"worlds": worlds}


def model_from_dict(data: dict[str, Any]) -> KripkeModel:
    """Reconstruct a model from :func:`model_to_dict` output.

    Raises:
        ModelFormatError: If the dict is malformed or a transition targets
            a missing world.
    """
    try:
        raw_worlds = data["worlds"]
        worlds: list[World | None] = []
        for raw in raw_worlds:
            if raw is None:
                worlds.append(None)
                continue
            successors = {
                str(agent): [int(t) for t in targets]
                for agent, targets in raw.get("successors", {}).items()
            }
            valuation = {str(p) for p in raw.get("valuation", [])}
            worlds.append(World(valuation=valuation, successors=successors))
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ModelFormatError(f"Malformed model dict: {e}") from e

    for world in worlds:
        if world is not None and any(t < 0 for ts in world.successors.values() for t in ts):
            raise ModelFormatError("Negative world index in model dict")
    _check_targets(worlds)
    return KripkeModel.from_worlds(worlds)


# ── Formula JSON form ──────────────────────────────────────────────────


def formula_to_json(formula: Formula) -> dict[str, Any]:
    """Serialize a formula tree to its JSON form.

    Raises:
        InvalidFormula: If a node is not a recognized formula.
    """
    if isinstance(formula, Prop):
        return {NodeKind.PROP.value: formula.name}
    if not isinstance(formula, Formula):
        raise InvalidFormula(f"Invalid formula: {formula!r}")

    children = [formula_to_json(child) for child in formula.children()]
    if len(children) == 1:
        return {formula.kind.value: children[0]}
    return {formula.kind.value: children}


def formula_from_json(data: Any) -> Formula:
    """Reconstruct a formula tree from its JSON form.

    Raises:
        InvalidFormula: If a node has no recognized kind or the wrong shape.
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidFormula(f"Invalid formula: {data!r}")

    [(tag, payload)] = data.items()
    try:
        kind = NodeKind(tag)
    except ValueError:
        raise InvalidFormula(f"Invalid formula: unknown node kind {tag!r}") from None

    if kind == NodeKind.PROP:
        if not isinstance(payload, str):
            raise InvalidFormula(f"Invalid proposition: {payload!r}")
        return Prop(payload)

    node_type = NODE_TYPES[kind]
    if kind in UNARY_KINDS and isinstance(payload, dict):
        return node_type(formula_from_json(payload))
    if kind not in UNARY_KINDS and isinstance(payload, list) and len(payload) == 2:
        return node_type(*(formula_from_json(item) for item in payload))
    raise InvalidFormula(f"Invalid operands for {tag!r}: {payload!r}")


__all__ = [
    "model_to_string",
    "model_from_string",
    "model_to_dict",
    "model_from_dict",
    "formula_to_json",
    "formula_from_json",
]
