"""Verification of epistemic formulas against Kripke models.

This module provides:
- Recursive truth evaluation with individual, everyone, distributed and
  common knowledge
- A checked entry point and satisfaction-set queries
"""

from __future__ import annotations

from epistemic_mpl.verification.evaluator import (
    EvaluationResult,
    check,
    evaluate,
    resolve_group,
    satisfying_worlds,
    truth,
)

__all__ = [
    "EvaluationResult",
    "resolve_group",
    "evaluate",
    "truth",
    "satisfying_worlds",
    "check",
]
