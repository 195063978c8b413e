"""Shared Kripke model fixtures."""

from __future__ import annotations

import pytest

from epistemic_mpl.model.kripke import KripkeModel


@pytest.fixture
def empty_model() -> KripkeModel:
    """Model with no worlds."""
    return KripkeModel()


@pytest.fixture
def two_world_model() -> KripkeModel:
    """Worlds [{p}, {}] with 0 -a-> 1."""
    model = KripkeModel()
    model.add_world({"p": True})
    model.add_world()
    model.add_transition(0, 1, "a")
    return model


@pytest.fixture
def cyclic_model() -> KripkeModel:
    """Two-cycle for agent a: 0 -a-> 1 -a-> 0; q holds at 1."""
    model = KripkeModel()
    model.add_world({"p": True})
    model.add_world({"q": True})
    model.add_transition(0, 1, "a")
    model.add_transition(1, 0, "a")
    return model


@pytest.fixture
def chain_model() -> KripkeModel:
    """Chains that only meet far from the root.

         0 -a-> 1 -a-> 3
         0 -b-> 2 -b-> 3
         3 -a-> 4

    Labels: {0: {p}, 1: {p, q}, 2: {q}, 3: {p, q}, 4: {q}}
    """
    model = KripkeModel()
    model.add_world({"p": True})
    model.add_world({"p": True, "q": True})
    model.add_world({"q": True})
    model.add_world({"p": True, "q": True})
    model.add_world({"q": True})
    model.add_transition(0, 1, "a")
    model.add_transition(1, 3, "a")
    model.add_transition(0, 2, "b")
    model.add_transition(2, 3, "b")
    model.add_transition(3, 4, "a")
    return model


@pytest.fixture
def muddy_children() -> KripkeModel:
    """Muddy children with two children, a and b.

    Worlds are the four mud assignments: 0 = {}, 1 = {ma}, 2 = {mb},
    3 = {ma, mb}. Each child sees the other's forehead but not its own,
    so a cannot tell worlds apart that differ only in ``ma`` (and likewise
    for b). Relations are reflexive.
    """
    model = KripkeModel()
    model.add_world({})
    model.add_world({"ma": True})
    model.add_world({"mb": True})
    model.add_world({"ma": True, "mb": True})
    for w in range(4):
        model.add_transition(w, w, ["a", "b"])
    for x, y in [(0, 1), (2, 3)]:
        model.add_transition(x, y, "a")
        model.add_transition(y, x, "a")
    for x, y in [(0, 2), (1, 3)]:
        model.add_transition(x, y, "b")
        model.add_transition(y, x, "b")
    return model
