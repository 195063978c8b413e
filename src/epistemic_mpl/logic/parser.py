"""Text to formula tree.

The grammar is generated from a ``ParserConfig``: one rule per precedence
level, loosest first, so the operator table alone decides binding and
associativity. Parsing uses Lark's LALR parser and a transformer that
builds ``Formula`` nodes.

Example:
    >>> parse("a,b ?C (p -> []q)")
    C_{a,b}((p → □q))
"""

from __future__ import annotations

import functools
import json
import logging
from typing import Any

from lark import Lark, Transformer, Tree
from lark.exceptions import LarkError, UnexpectedInput, VisitError

from epistemic_mpl.logic.formula import NODE_TYPES, Formula, Prop
from epistemic_mpl.logic.operators import DEFAULT_CONFIG, Associativity, ParserConfig
from epistemic_mpl.types import FormulaSyntaxError, InvalidFormula, NodeKind

logger = logging.getLogger(__name__)


def build_grammar(config: ParserConfig = DEFAULT_CONFIG) -> str:
    """Generate the Lark grammar for an operator table.

    Args:
        config: Operator tables and variable pattern.

    Returns:
        Grammar text accepted by ``lark.Lark``.
    """
    levels = config.precedence_levels()
    rules = ["?start: lvl0" if levels else "?start: atom"]

    for i, precedence in enumerate(levels):
        below = f"lvl{i + 1}" if i + 1 < len(levels) else "atom"
        alternatives: list[str] = []
        for spec in config.binaries:
            if spec.precedence != precedence:
                continue
            symbol = json.dumps(spec.symbol)
            if spec.associativity == Associativity.RIGHT:
                alternatives.append(f"{below} {symbol} lvl{i} -> {spec.key.value}")
            else:
                alternatives.append(f"lvl{i} {symbol} {below} -> {spec.key.value}")
        for spec in config.unaries:
            if spec.precedence == precedence:
                alternatives.append(f"{json.dumps(spec.symbol)} lvl{i} -> {spec.key.value}")
        alternatives.append(below)
        rules.append(f"?lvl{i}: " + "\n    | ".join(alternatives))

    top = "lvl0" if levels else "atom"
    rules.append(f'?atom: VARIABLE -> prop\n    | "(" {top} ")"')
    rules.append(f"VARIABLE: /{config.variable_pattern}/")
    rules.append("%import common.WS\n%ignore WS")
    return "\n\n".join(rules) + "\n"


@functools.lru_cache(maxsize=16)
def _compile(grammar: str) -> Lark:
    logger.debug("Compiling formula grammar (%d chars)", len(grammar))
    return Lark(grammar, parser="lalr")


class _FormulaBuilder(Transformer):
    """Turns a parse tree into formula nodes, keyed by rule alias."""

    def prop(self, children: list[Any]) -> Prop:
        return Prop(str(children[0]))

    def __default__(self, data: Any, children: list[Any], meta: Any) -> Formula:
        try:
            kind = NodeKind(str(data))
        except ValueError:
            raise InvalidFormula(f"Unknown operator key: {data}") from None
        return NODE_TYPES[kind](*children)


def parse_tree(text: str, config: ParserConfig = DEFAULT_CONFIG) -> Tree:
    """Parse text into a raw Lark tree, without building formula nodes."""
    try:
        return _compile(build_grammar(config)).parse(text)
    except UnexpectedInput as e:
        raise FormulaSyntaxError(
            f"Unexpected input in formula {text!r}", text=text, column=e.column
        ) from e
    except LarkError as e:
        raise FormulaSyntaxError(str(e), text=text) from e


def parse(text: str, config: ParserConfig = DEFAULT_CONFIG) -> Formula:
    """Parse formula text into a formula tree.

    Args:
        text: Formula in the surface syntax of ``config``.
        config: Operator tables; defaults to the standard epistemic table.

    Returns:
        The formula tree.

    Raises:
        FormulaSyntaxError: If the text does not parse, or parses into an
            ill-formed tree (e.g. a compound formula in an agent position).
    """
    tree = parse_tree(text, config)
    try:
        return _FormulaBuilder().transform(tree)
    except VisitError as e:
        raise FormulaSyntaxError(f"{e.orig_exc} in formula {text!r}", text=text) from e.orig_exc
    except InvalidFormula as e:
        # __default__ is called outside Lark's VisitError wrapping
        raise FormulaSyntaxError(f"{e} in formula {text!r}", text=text) from e


__all__ = [
    "build_grammar",
    "parse_tree",
    "parse",
]
