"""Kripke models with one accessibility relation per agent.

A model is an arena of worlds addressed by index. Each world holds the set
of propositions true there and, per agent, an ordered list of successor
indices. Deleting a world leaves a hole at its index so that indices stay
valid everywhere they are referenced (transitions, evaluation calls, the
wire format).

Mutators are bulk-editing primitives: out-of-range or deleted indices make
them no-ops. Queries that need a world to exist raise ``StateNotFound``.

Example:
    >>> m = KripkeModel()
    >>> m.add_world({"p": True})
    0
    >>> m.add_world()
    1
    >>> m.add_transition(0, 1, "a")
    >>> m.successors(0, "a")
    (1,)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from epistemic_mpl.types import AgentId, StateNotFound, Valuation, WorldIndex

logger = logging.getLogger(__name__)

ValuationInput = Mapping[str, bool] | Iterable[str]
"""Either ``{"p": True, "q": False}`` or an iterable of true propositions."""


@dataclass
class World:
    """A live world.

    Attributes:
        valuation: Propositions true at this world. False ones are never stored.
        successors: Per-agent successor indices, in insertion order.
    """

    valuation: set[str] = field(default_factory=set)
    successors: dict[AgentId, list[WorldIndex]] = field(default_factory=dict)


def _true_props(valuation: ValuationInput | None) -> set[str]:
    if valuation is None:
        return set()
    if isinstance(valuation, Mapping):
        return {prop for prop, value in valuation.items() if value is True}
    if isinstance(valuation, str):
        return {valuation}
    return set(valuation)


def _agent_list(agents: AgentId | Iterable[AgentId]) -> list[AgentId]:
    if isinstance(agents, str):
        return [agents]
    return list(dict.fromkeys(agents))


class KripkeModel:
    """Multi-agent Kripke model.

    Worlds are stored as a list of optional records; ``None`` marks a
    deleted world. The model owns all world records and hands out
    read-only views (frozensets and tuples) only.
    """

    def __init__(self) -> None:
        self._worlds: list[World | None] = []

    # -------------------------------------------------------------------------
    # Worlds
    # -------------------------------------------------------------------------

    def _get(self, index: int) -> World | None:
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            return None
        if index >= len(self._worlds):
            return None
        return self._worlds[index]

    def has_world(self, index: int) -> bool:
        """Whether ``index`` refers to a live world."""
        return self._get(index) is not None

    def add_world(self, valuation: ValuationInput | None = None) -> WorldIndex:
        """Append a world and return its index.

        Args:
            valuation: Initial assignment. Only propositions mapped to
                ``True`` (or listed) are stored.

        Returns:
            Index of the new world.
        """
        self._worlds.append(World(valuation=_true_props(valuation)))
        return len(self._worlds) - 1

    def remove_world(self, index: int) -> None:
        """Delete a world and every transition that targets it.

        The slot becomes a hole; other indices do not move.
        """
        if self._get(index) is None:
            logger.debug("remove_world(%r): no such world, ignored", index)
            return

        self._worlds[index] = None
        for world in self._worlds:
            if world is None:
                continue
            for agent in list(world.successors):
                targets = world.successors[agent]
                if index in targets:
                    kept = [t for t in targets if t != index]
                    if kept:
                        world.successors[agent] = kept
                    else:
                        del world.successors[agent]

    def edit_valuation(self, index: int, partial: Mapping[str, bool]) -> None:
        """Set propositions true (``True``) or false (``False``) at a world."""
        world = self._get(index)
        if world is None:
            logger.debug("edit_valuation(%r): no such world, ignored", index)
            return
        for prop, value in partial.items():
            if value is True:
                world.valuation.add(prop)
            elif value is False:
                world.valuation.discard(prop)

    def valuation(self, prop: str, index: int) -> bool:
        """Truth value of ``prop`` at a world.

        Raises:
            StateNotFound: If the world does not exist.
        """
        world = self._get(index)
        if world is None:
            raise StateNotFound(index)
        return prop in world.valuation

    def true_props(self, index: int) -> Valuation | None:
        """Propositions true at a world, or ``None`` if it does not exist."""
        world = self._get(index)
        return None if world is None else frozenset(world.valuation)

    def list_worlds(self) -> list[Valuation | None]:
        """Valuation of every slot, ``None`` for deleted worlds."""
        return [None if w is None else frozenset(w.valuation) for w in self._worlds]

    def live_worlds(self) -> Iterator[WorldIndex]:
        """Indices of live worlds, ascending."""
        return (i for i, w in enumerate(self._worlds) if w is not None)

    @property
    def num_worlds(self) -> int:
        """Number of live worlds."""
        return sum(1 for w in self._worlds if w is not None)

    def __len__(self) -> int:
        """Number of slots, deleted worlds included."""
        return len(self._worlds)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def add_transition(
        self,
        source: int,
        target: int,
        agents: AgentId | Iterable[AgentId],
    ) -> None:
        """Add ``source -> target`` to each agent's relation.

        Duplicates are kept: adding the same edge twice lists the target twice.
        """
        world = self._get(source)
        if world is None or self._get(target) is None:
            logger.debug("add_transition(%r, %r): missing endpoint, ignored", source, target)
            return
        for agent in _agent_list(agents):
            world.successors.setdefault(agent, []).append(target)

    def remove_transition(
        self,
        source: int,
        target: int,
        agents: AgentId | Iterable[AgentId],
    ) -> None:
        """Remove the first ``source -> target`` edge from each agent's relation."""
        world = self._get(source)
        if world is None:
            logger.debug("remove_transition(%r, %r): no such source, ignored", source, target)
            return
        for agent in _agent_list(agents):
            targets = world.successors.get(agent)
            if targets is None or target not in targets:
                continue
            targets.remove(target)
            if not targets:
                del world.successors[agent]

    def successors(self, index: int, agent: AgentId) -> tuple[WorldIndex, ...] | None:
        """Successors of a world for one agent.

        Returns:
            The agent's successor indices (empty if it has none here), or
            ``None`` if the world does not exist.
        """
        world = self._get(index)
        if world is None:
            return None
        return tuple(world.successors.get(agent, ()))

    def all_successors(self, index: int) -> tuple[WorldIndex, ...] | None:
        """Successors of a world under any agent, distinct, first-seen order."""
        world = self._get(index)
        if world is None:
            return None
        merged: dict[WorldIndex, None] = {}
        for targets in world.successors.values():
            merged.update(dict.fromkeys(targets))
        return tuple(merged)

    def relation(self, index: int) -> dict[AgentId, tuple[WorldIndex, ...]] | None:
        """Copy of a world's full relation, or ``None`` if it does not exist."""
        world = self._get(index)
        if world is None:
            return None
        return {agent: tuple(targets) for agent, targets in world.successors.items()}

    # -------------------------------------------------------------------------
    # Agents
    # -------------------------------------------------------------------------

    def agents_at(self, index: int) -> tuple[AgentId, ...]:
        """Agents with at least one outgoing edge at a world."""
        world = self._get(index)
        if world is None:
            return ()
        return tuple(world.successors)

    def all_agents(self) -> frozenset[AgentId]:
        """Agents that appear in the relation of any live world."""
        agents: set[AgentId] = set()
        for world in self._worlds:
            if world is not None:
                agents.update(world.successors)
        return frozenset(agents)

    # -------------------------------------------------------------------------
    # Wire format
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """Compact string form, e.g. ``'AqSa0,2;;AS;'``.

        See :func:`epistemic_mpl.serialization.model_to_string`.
        """
        from epistemic_mpl.serialization import model_to_string

        return model_to_string(self)

    def load_string(self, model_string: str) -> None:
        """Replace this model's worlds with those encoded in ``model_string``.

        Raises:
            ModelFormatError: If the string is malformed. The model is left
                unchanged.
        """
        from epistemic_mpl.serialization import model_from_string

        restored = model_from_string(model_string)
        self._worlds = restored._worlds

    @classmethod
    def from_worlds(cls, worlds: Iterable[World | None]) -> KripkeModel:
        """Build a model directly from world records (copied).

        Transitions to missing worlds are dropped, so the result always
        satisfies the model's invariants.
        """
        model = cls()
        records = list(worlds)
        model._worlds = [
            None if w is None else World(valuation=set(w.valuation)) for w in records
        ]
        for source, record in enumerate(records):
            if record is None:
                continue
            for agent, targets in record.successors.items():
                for target in targets:
                    model.add_transition(source, target, agent)
        return model

    def copy(self) -> KripkeModel:
        """Independent deep copy."""
        return KripkeModel.from_worlds(self._worlds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KripkeModel):
            return NotImplemented
        return self._worlds == other._worlds

    def __repr__(self) -> str:
        return f"KripkeModel(worlds={self.num_worlds}, slots={len(self)})"


__all__ = [
    "World",
    "KripkeModel",
    "ValuationInput",
]
