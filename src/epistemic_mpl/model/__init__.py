"""Kripke models and reachability over agent relations.

This module provides:
- ``KripkeModel``: worlds, valuations and per-agent successor lists
- Reachability closure for single agents and agent groups
"""

from __future__ import annotations

from epistemic_mpl.model.kripke import KripkeModel, World
from epistemic_mpl.model.reachability import (
    all_reachable,
    closure_matrix,
    direct_successors,
    intersect_reachable,
    relation_matrix,
    union_reachable,
)

__all__ = [
    "World",
    "KripkeModel",
    "direct_successors",
    "all_reachable",
    "union_reachable",
    "intersect_reachable",
    "relation_matrix",
    "closure_matrix",
]
