"""Evaluate plural rules for integer counts.

Works on raw or simplified rules: operands are extracted the CLDR way for an
integer (``n`` and ``i`` are the absolute value, every fraction and exponent
operand is zero), so a raw rule and its simplified form always agree.

Python 3.13+.
"""

from collections.abc import Mapping

from plurimark.enums import PluralCategory

from .ast import AndChain, OrExpr, Relation

__all__ = ["evaluate", "integer_operands", "select_category"]


def integer_operands(n: int) -> dict[str, int]:
    """CLDR operand values for an integer.

    Example:
        >>> integer_operands(-3)["i"]
        3
    """
    magnitude = abs(n)
    return {
        "n": magnitude,
        "i": magnitude,
        "v": 0,
        "w": 0,
        "f": 0,
        "t": 0,
        "e": 0,
        "c": 0,
    }


def _holds(relation: Relation, operands: Mapping[str, int]) -> bool:
    value = operands[relation.operand]
    if relation.modulus is not None:
        value %= relation.modulus
    matched = any(r.contains(value) for r in relation.ranges)
    return matched != relation.negated


def _chain_holds(chain: AndChain, operands: Mapping[str, int]) -> bool:
    return all(_holds(r, operands) for r in chain.relations)


def evaluate(expr: OrExpr | None, n: int) -> bool:
    """Check whether a rule applies to the count n.

    None (unconditional) applies to every count.

    Example:
        >>> from plurimark.plural.parser import parse_rule
        >>> evaluate(parse_rule("n % 10 = 1 and n % 100 != 11"), 21)
        True
    """
    if expr is None:
        return True
    operands = integer_operands(n)
    return any(_chain_holds(branch, operands) for branch in expr.branches)


def select_category(rules: Mapping[PluralCategory, OrExpr | None], n: int) -> PluralCategory:
    """Pick the first category in CLDR order whose rule applies, else OTHER.

    Mirrors the chain emitted by
    :func:`~plurimark.plural.emitter.emit_category_dispatch`.
    """
    for category in PluralCategory:
        if category is PluralCategory.OTHER or category not in rules:
            continue
        if evaluate(rules[category], n):
            return category
    return PluralCategory.OTHER
