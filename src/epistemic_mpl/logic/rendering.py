"""Rendering formulas as ASCII, LaTeX and Unicode text.

``to_ascii`` prints a formula tree in the parser's surface syntax, fully
parenthesizing binary operators so the output parses back to the same
tree. The LaTeX and Unicode forms are plain substitutions over that text.
"""

from __future__ import annotations

import re

from epistemic_mpl.logic.formula import Formula, Group, Prop
from epistemic_mpl.logic.operators import DEFAULT_CONFIG, ParserConfig
from epistemic_mpl.types import InvalidFormula

# Longest symbols first so "<->" is rewritten before "->" and "?E" before "?".
_LATEX_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("~", "\\lnot{}"),
    ("[]", "\\Box{}"),
    ("<>", "\\Diamond{}"),
    (" <-> ", "\\leftrightarrow{}"),
    (" -> ", "\\rightarrow{}"),
    (" & ", "\\land{}"),
    (" | ", "\\lor{}"),
    (" ?E ", "\\mathrel{E}"),
    (" ?D ", "\\mathrel{D}"),
    (" ?C ", "\\mathrel{C}"),
    (" ? ", "\\mathrel{K}"),
)

_UNICODE_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("~", "¬"),
    ("[]", "□"),
    ("<>", "◊"),
    ("<->", "↔"),
    ("->", "→"),
    ("&", "∧"),
    ("|", "∨"),
)

# "(a ? " and "(a, b ?C " become the prefix forms "(K_a " and "(C_{a,b} ".
_EPISTEMIC_RE = re.compile(r"\((\w+(?:, \w+)*) \?([EDC]?) ")


def to_ascii(formula: Formula, config: ParserConfig = DEFAULT_CONFIG) -> str:
    """Render a formula tree as canonical text.

    Args:
        formula: The formula tree.
        config: Operator table supplying the symbols.

    Returns:
        Text that ``parse`` maps back to an equal tree.

    Raises:
        InvalidFormula: If the node kind is unknown or has no symbol.
    """
    if isinstance(formula, Prop):
        return formula.name
    if not isinstance(formula, Formula):
        raise InvalidFormula(f"Invalid formula: {formula!r}")

    try:
        symbol = config.symbol_for(formula.kind)
    except KeyError:
        raise InvalidFormula(f"No symbol configured for {formula.kind.value!r}") from None

    # The group operator binds tightest, so members need no parentheses.
    if isinstance(formula, Group):
        return f"{to_ascii(formula.agent, config)}{symbol} {to_ascii(formula.rest, config)}"

    children = formula.children()
    if len(children) == 1:
        return symbol + to_ascii(children[0], config)

    left, right = children
    return f"({to_ascii(left, config)} {symbol} {to_ascii(right, config)})"


def _substitute(text: str, table: tuple[tuple[str, str], ...]) -> str:
    for old, new in table:
        text = text.replace(old, new)
    return text


def ascii_to_latex(ascii_text: str) -> str:
    """Rewrite canonical text with LaTeX operators."""
    return _substitute(ascii_text, _LATEX_SUBSTITUTIONS)


def _epistemic_prefix(match: re.Match[str]) -> str:
    agents, operator = match.groups()
    if not operator:
        return f"(K_{agents} "
    return f"({operator}_{{{agents.replace(', ', ',')}}} "


def ascii_to_unicode(ascii_text: str) -> str:
    """Rewrite canonical text with Unicode operators.

    Knowledge operators move in front of their operand, as in the tree's
    repr: ``(a ? p)`` becomes ``(K_a p)`` and ``(a, b ?C p)`` becomes
    ``(C_{a,b} p)``.
    """
    text = _EPISTEMIC_RE.sub(_epistemic_prefix, ascii_text)
    return _substitute(text, _UNICODE_SUBSTITUTIONS)


__all__ = [
    "to_ascii",
    "ascii_to_latex",
    "ascii_to_unicode",
]
