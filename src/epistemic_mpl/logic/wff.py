"""Well-formed formula value with its four representations."""

from __future__ import annotations

from typing import Any

from epistemic_mpl.logic.formula import Formula, Group
from epistemic_mpl.logic.operators import DEFAULT_CONFIG, ParserConfig
from epistemic_mpl.logic.parser import parse
from epistemic_mpl.logic.rendering import ascii_to_latex, ascii_to_unicode, to_ascii
from epistemic_mpl.serialization import formula_from_json, formula_to_json
from epistemic_mpl.types import InvalidWff


class Wff:
    """A well-formed formula.

    Built from formula text, a formula tree, or the JSON form of a tree.
    The tree is the source of truth; ASCII, LaTeX and Unicode strings are
    derived from it once, at construction.

    Example:
        >>> w = Wff("a ? (p & q)")
        >>> w.unicode
        '(K_a (p ∧ q))'
    """

    __slots__ = ("_formula", "_ascii", "_latex", "_unicode")

    def __init__(
        self,
        source: str | Formula | dict[str, Any],
        config: ParserConfig = DEFAULT_CONFIG,
    ) -> None:
        if isinstance(source, Formula):
            formula = source
        elif isinstance(source, str):
            formula = parse(source, config)
        elif isinstance(source, dict):
            formula = formula_from_json(source)
        else:
            raise InvalidWff(source, "expected text, a formula tree or its JSON form")
        if isinstance(formula, Group):
            raise InvalidWff(formula, "a bare agent group has no truth value")

        self._formula = formula
        self._ascii = to_ascii(formula, config)
        self._latex = ascii_to_latex(self._ascii)
        self._unicode = ascii_to_unicode(self._ascii)

    @property
    def formula(self) -> Formula:
        """The formula tree."""
        return self._formula

    @property
    def ascii(self) -> str:
        return self._ascii

    @property
    def latex(self) -> str:
        return self._latex

    @property
    def unicode(self) -> str:
        return self._unicode

    @property
    def json(self) -> dict[str, Any]:
        """JSON-compatible form of the tree."""
        return formula_to_json(self._formula)

    def __repr__(self) -> str:
        return f"Wff({self._ascii!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Wff) and self._formula == other._formula

    def __hash__(self) -> int:
        return hash(("Wff", self._formula))


__all__ = ["Wff"]
