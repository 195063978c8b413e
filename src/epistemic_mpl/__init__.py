"""
epistemic-mpl -- Multi-agent epistemic modal logic over Kripke models.

Parse formulas with knowledge operators (K, E, D, C), build Kripke models
with one accessibility relation per agent, and evaluate formulas at worlds.

Minimal dependencies (NumPy, Lark). Pure Python.
"""

from epistemic_mpl._version import __version__
from epistemic_mpl.logic import (
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
    Wff,
    group,
    parse,
)
from epistemic_mpl.model import KripkeModel
from epistemic_mpl.types import (
    EmptyGroupError,
    EpistemicError,
    FormulaSyntaxError,
    InvalidFormula,
    InvalidModel,
    InvalidWff,
    ModelFormatError,
    StateNotFound,
)
from epistemic_mpl.verification import check, evaluate, truth

# NOTE: Full subpackage APIs are accessible via direct imports:
#   from epistemic_mpl.logic import ParserConfig, OperatorSpec, to_ascii, ...
#   from epistemic_mpl.model import all_reachable, union_reachable, ...
#   from epistemic_mpl.serialization import model_to_string, ...

__all__ = [
    "__version__",
    # Formula tree
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
    "group",
    "parse",
    "Wff",
    # Model
    "KripkeModel",
    # Evaluation
    "evaluate",
    "truth",
    "check",
    # Errors
    "EpistemicError",
    "InvalidModel",
    "InvalidWff",
    "StateNotFound",
    "InvalidFormula",
    "EmptyGroupError",
    "ModelFormatError",
    "FormulaSyntaxError",
]
