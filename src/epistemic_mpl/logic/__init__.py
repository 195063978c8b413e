"""Formula language for multi-agent epistemic modal logic.

This module provides:
- The formula tree (propositions, connectives, modal and epistemic operators)
- Operator tables and a parser generated from them
- ASCII, LaTeX and Unicode rendering
- ``Wff``: a formula bundled with its text representations
"""

from __future__ import annotations

from epistemic_mpl.logic.formula import (
    NODE_TYPES,
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
    group,
)
from epistemic_mpl.logic.operators import (
    DEFAULT_CONFIG,
    Associativity,
    OperatorSpec,
    ParserConfig,
)
from epistemic_mpl.logic.parser import build_grammar, parse, parse_tree
from epistemic_mpl.logic.rendering import ascii_to_latex, ascii_to_unicode, to_ascii
from epistemic_mpl.logic.wff import Wff

__all__ = [
    # --- Formula tree ---
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
    # --- Operator tables ---
    "Associativity",
    "OperatorSpec",
    "ParserConfig",
    "DEFAULT_CONFIG",
    # --- Parsing & rendering ---
    "build_grammar",
    "parse_tree",
    "parse",
    "to_ascii",
    "ascii_to_latex",
    "ascii_to_unicode",
    "Wff",
]
