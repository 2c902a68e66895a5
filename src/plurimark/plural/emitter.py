"""Emit plural rules as target-agnostic condition source text.

Output uses only ``==``, ``!=``, ``>=``, ``<=``, ``<``, ``>``, ``%``, ``&&``,
``||`` and parentheses, so hosts can splice it into C-family code templates.
The one exception is an always-true rule, emitted as ``true``.

Parenthesization:
    - ``op = lo..hi`` emits ``op >= lo && op <= hi`` bare
    - ``op != lo..hi`` emits ``(op < lo || op > hi)``
    - a relation with several values or ranges is always wrapped
    - relations in an AND-chain join with `` && `` unwrapped
    - with two or more OR-branches, each multi-relation branch is wrapped

Python 3.13+.
"""

from collections.abc import Mapping

from plurimark.constants import DEFAULT_CATEGORY_PREFIX, DEFAULT_INDENT
from plurimark.enums import PluralCategory

from .ast import AndChain, OrExpr, Range, Relation

__all__ = ["TRUE_CONDITION", "emit_category_dispatch", "emit_condition"]

TRUE_CONDITION = "true"


def _operand_expr(relation: Relation) -> str:
    if relation.modulus is None:
        return relation.operand
    return f"{relation.operand} % {relation.modulus}"


def _emit_range(op: str, item: Range, *, negated: bool, grouped: bool) -> str:
    """Emit one range of a relation.

    grouped: the range is one of several alternatives and joins other
    predicates, so a two-sided comparison needs its own parentheses.
    """
    if item.high is None:
        return f"{op} != {item.low}" if negated else f"{op} == {item.low}"
    if negated:
        return f"({op} < {item.low} || {op} > {item.high})"
    bounds = f"{op} >= {item.low} && {op} <= {item.high}"
    return f"({bounds})" if grouped else bounds


def _emit_relation(relation: Relation) -> str:
    op = _operand_expr(relation)
    grouped = len(relation.ranges) > 1
    parts = [
        _emit_range(op, item, negated=relation.negated, grouped=grouped)
        for item in relation.ranges
    ]
    if not grouped:
        return parts[0]
    joiner = " && " if relation.negated else " || "
    return f"({joiner.join(parts)})"


def _emit_chain(chain: AndChain) -> str:
    return " && ".join(_emit_relation(r) for r in chain.relations)


def emit_condition(expr: OrExpr | None) -> str | None:
    """Emit a rule as a boolean condition.

    Args:
        expr: Rule AST (normally simplified), or None

    Returns:
        Condition text, or None for None input. A rule that holds for every
        count (an empty AND-chain after simplification) yields the literal
        ``true`` (:data:`TRUE_CONDITION`), the one output outside the
        comparison and ``&&``/``||`` operator set. Dispatch never emits it;
        it turns such a category into an unconditional return instead.

    Example:
        >>> from plurimark.plural.parser import parse_rule
        >>> emit_condition(parse_rule("n % 100 != 12..14"))
        '(n % 100 < 12 || n % 100 > 14)'
    """
    if expr is None:
        return None
    if expr.is_always_true:
        return TRUE_CONDITION
    if len(expr.branches) == 1:
        return _emit_chain(expr.branches[0])
    return " || ".join(
        f"({_emit_chain(branch)})" if len(branch.relations) > 1 else _emit_chain(branch)
        for branch in expr.branches
    )


def emit_category_dispatch(
    rules: Mapping[PluralCategory, OrExpr | None],
    indent: str = DEFAULT_INDENT,
    *,
    category_prefix: str = DEFAULT_CATEGORY_PREFIX,
) -> str:
    """Emit an if/return chain selecting a plural category.

    Categories are checked in CLDR order. ``Other`` is never tested; the chain
    always ends in ``return Other;``. A category whose rule is None or always
    true returns unconditionally, and no later category is checked.

    Args:
        rules: Rule per category; dead categories must already be removed
        indent: Prefix of every emitted line
        category_prefix: Text placed before each category name

    Returns:
        Newline-separated statements, without a trailing newline

    Example:
        >>> from plurimark.plural.parser import parse_rule
        >>> print(emit_category_dispatch({PluralCategory.ONE: parse_rule("n = 1")}))
            if (n == 1) return PluralCategory.One;
            return PluralCategory.Other;
    """
    lines: list[str] = []
    for category in PluralCategory:
        if category is PluralCategory.OTHER or category not in rules:
            continue
        target = f"{category_prefix}{category.pascal_name}"
        condition = emit_condition(rules[category])
        if condition is None or condition == TRUE_CONDITION:
            lines.append(f"{indent}return {target};")
            break
        lines.append(f"{indent}if ({condition}) return {target};")
    lines.append(f"{indent}return {category_prefix}{PluralCategory.OTHER.pascal_name};")
    return "\n".join(lines)
