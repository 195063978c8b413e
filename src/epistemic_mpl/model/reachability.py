"""Reachability closure over agent relations.

This module provides:
- One-step successor sets for a single agent
- Multi-step reachability (transitive closure) for a single agent via BFS
- Union and intersection of closures over a group of agents, which give
  the accessibility relations of common and distributed knowledge
- Boolean adjacency matrices and their transitive closure (NumPy), an
  independent matrix formulation of the same relations

All functions are pure: they read the model, keep their visited sets
local and never cache across calls.

Semantics:
- all_reachable(w, a): worlds reachable from w in one or more a-steps
- union_reachable(w, G): reachable by some agent of G (common knowledge)
- intersect_reachable(w, G): reachable by every agent of G (distributed
  knowledge)
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

import numpy as np

from epistemic_mpl.model.kripke import KripkeModel
from epistemic_mpl.types import AgentId, EmptyGroupError, WorldIndex

logger = logging.getLogger(__name__)


def direct_successors(model: KripkeModel, world: WorldIndex, agent: AgentId) -> set[WorldIndex]:
    """Worlds one ``agent``-step away from ``world``.

    Returns the empty set for a missing world.
    """
    return set(model.successors(world, agent) or ())


def all_reachable(model: KripkeModel, world: WorldIndex, agent: AgentId) -> set[WorldIndex]:
    """Worlds reachable from ``world`` in one or more ``agent``-steps.

    Breadth-first search seeded with the direct successors. A world is
    expanded at most once, so cyclic relations terminate. ``world`` itself
    is included only if some cycle leads back to it.

    Args:
        model: The Kripke model.
        world: Starting world.
        agent: Agent whose relation is followed.

    Returns:
        Set of reachable world indices.
    """
    visited = direct_successors(model, world, agent)
    queue = deque(visited)

    while queue:
        current = queue.popleft()
        for target in model.successors(current, agent) or ():
            if target not in visited:
                visited.add(target)
                queue.append(target)

    return visited


def union_reachable(
    model: KripkeModel,
    world: WorldIndex,
    agents: Iterable[AgentId],
) -> set[WorldIndex]:
    """Worlds some agent of the group reaches in one or more steps.

    An empty group reaches nothing.
    """
    result: set[WorldIndex] = set()
    for agent in agents:
        result |= all_reachable(model, world, agent)
    return result


def intersect_reachable(
    model: KripkeModel,
    world: WorldIndex,
    agents: Iterable[AgentId],
) -> set[WorldIndex]:
    """Worlds every agent of the group reaches in one or more steps.

    Raises:
        EmptyGroupError: If ``agents`` is empty. The intersection over no
            agents has no defined value here.
    """
    result: set[WorldIndex] | None = None
    for agent in agents:
        reached = all_reachable(model, world, agent)
        result = reached if result is None else result & reached
        if not result:
            break

    if result is None:
        raise EmptyGroupError("Distributed knowledge needs at least one agent")

    logger.debug("intersect_reachable(%d): %d worlds", world, len(result))
    return result


# =============================================================================
# Matrix formulation
# =============================================================================


def relation_matrix(model: KripkeModel, agents: Iterable[AgentId]) -> np.ndarray:
    """Boolean adjacency matrix of the union of the agents' relations.

    Rows and columns run over all slots of the model; deleted worlds have
    empty rows and columns.
    """
    size = len(model)
    matrix = np.zeros((size, size), dtype=bool)
    agent_list = list(agents)
    for source in model.live_worlds():
        for agent in agent_list:
            for target in model.successors(source, agent) or ():
                matrix[source, target] = True
    return matrix


def closure_matrix(model: KripkeModel, agents: Iterable[AgentId]) -> np.ndarray:
    """Transitive (not reflexive) closure of :func:`relation_matrix`.

    Warshall's algorithm, one vectorized update per pivot. Entry ``[i, j]``
    is True iff ``j`` is reachable from ``i`` in one or more steps of the
    combined relation. For a single agent a row equals ``all_reachable``;
    for a group, paths may switch agents, so a row contains
    ``union_reachable``.
    """
    reach = relation_matrix(model, agents)
    for k in range(reach.shape[0]):
        reach |= np.outer(reach[:, k], reach[k, :])
    return reach


__all__ = [
    "direct_successors",
    "all_reachable",
    "union_reachable",
    "intersect_reachable",
    "relation_matrix",
    "closure_matrix",
]
