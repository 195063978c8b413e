"""Tests for reachability closure over agent relations."""

from __future__ import annotations

import numpy as np
import pytest

from epistemic_mpl.model.kripke import KripkeModel
from epistemic_mpl.model.reachability import (
    all_reachable,
    closure_matrix,
    direct_successors,
    intersect_reachable,
    relation_matrix,
    union_reachable,
)
from epistemic_mpl.types import EmptyGroupError


class TestDirectSuccessors:
    def test_direct(self, chain_model: KripkeModel) -> None:
        assert direct_successors(chain_model, 0, "a") == {1}
        assert direct_successors(chain_model, 0, "c") == set()

    def test_missing_world(self, chain_model: KripkeModel) -> None:
        assert direct_successors(chain_model, 10, "a") == set()


class TestAllReachable:
    """Single-agent multi-step closure."""

    def test_chain(self, chain_model: KripkeModel) -> None:
        assert all_reachable(chain_model, 0, "a") == {1, 3, 4}
        assert all_reachable(chain_model, 0, "b") == {2, 3}

    def test_start_not_included_without_cycle(self, chain_model: KripkeModel) -> None:
        assert 0 not in all_reachable(chain_model, 0, "a")

    def test_two_cycle_terminates(self, cyclic_model: KripkeModel) -> None:
        assert all_reachable(cyclic_model, 0, "a") == {0, 1}

    def test_self_loop(self, empty_model: KripkeModel) -> None:
        empty_model.add_world()
        empty_model.add_transition(0, 0, "a")
        assert all_reachable(empty_model, 0, "a") == {0}

    def test_unknown_agent(self, chain_model: KripkeModel) -> None:
        assert all_reachable(chain_model, 0, "zed") == set()

    def test_does_not_mutate(self, chain_model: KripkeModel) -> None:
        before = chain_model.copy()
        all_reachable(chain_model, 0, "a")
        union_reachable(chain_model, 0, ["a", "b"])
        intersect_reachable(chain_model, 0, ["a", "b"])
        assert chain_model == before


class TestGroupReachability:
    """Union (common knowledge) and intersection (distributed knowledge)."""

    def test_union(self, chain_model: KripkeModel) -> None:
        assert union_reachable(chain_model, 0, ["a", "b"]) == {1, 2, 3, 4}

    def test_intersection(self, chain_model: KripkeModel) -> None:
        assert intersect_reachable(chain_model, 0, ["a", "b"]) == {3}

    def test_union_contains_each_closure(self, chain_model: KripkeModel) -> None:
        union = union_reachable(chain_model, 0, {"a", "b"})
        assert union >= all_reachable(chain_model, 0, "a")
        assert union >= all_reachable(chain_model, 0, "b")

    def test_intersection_within_each_closure(self, chain_model: KripkeModel) -> None:
        inter = intersect_reachable(chain_model, 0, {"a", "b"})
        assert inter <= all_reachable(chain_model, 0, "a")
        assert inter <= all_reachable(chain_model, 0, "b")

    def test_single_agent_group(self, chain_model: KripkeModel) -> None:
        assert intersect_reachable(chain_model, 0, ["a"]) == all_reachable(chain_model, 0, "a")
        assert union_reachable(chain_model, 0, ["a"]) == all_reachable(chain_model, 0, "a")

    def test_disjoint_intersection_is_empty(self, chain_model: KripkeModel) -> None:
        assert intersect_reachable(chain_model, 0, ["a", "c"]) == set()

    def test_empty_union(self, chain_model: KripkeModel) -> None:
        assert union_reachable(chain_model, 0, []) == set()

    def test_empty_intersection_raises(self, chain_model: KripkeModel) -> None:
        with pytest.raises(EmptyGroupError):
            intersect_reachable(chain_model, 0, [])


class TestMatrices:
    """NumPy relation and closure matrices."""

    def test_relation_matrix(self, chain_model: KripkeModel) -> None:
        matrix = relation_matrix(chain_model, ["a"])
        assert matrix.shape == (5, 5)
        assert matrix.dtype == bool
        assert {tuple(x) for x in np.argwhere(matrix)} == {(0, 1), (1, 3), (3, 4)}

    def test_removed_world_is_empty_row_and_column(self, chain_model: KripkeModel) -> None:
        chain_model.remove_world(3)
        matrix = relation_matrix(chain_model, ["a", "b"])
        assert not matrix[3].any()
        assert not matrix[:, 3].any()

    def test_closure_matches_bfs_single_agent(self, chain_model: KripkeModel) -> None:
        closure = closure_matrix(chain_model, ["a"])
        for world in chain_model.live_worlds():
            assert set(np.flatnonzero(closure[world])) == all_reachable(chain_model, world, "a")

    def test_group_closure_contains_union(self, chain_model: KripkeModel) -> None:
        chain_model.add_transition(4, 2, "b")
        closure = closure_matrix(chain_model, ["a", "b"])
        union = union_reachable(chain_model, 0, ["a", "b"])
        assert union <= set(np.flatnonzero(closure[0]))

    def test_closure_of_cycle(self, cyclic_model: KripkeModel) -> None:
        assert closure_matrix(cyclic_model, ["a"]).all()
