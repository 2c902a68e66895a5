"""Integer-domain simplification of plural rules.

Compiled plural selection only ever sees integer counts. For an integer:

- ``i`` equals ``n`` (both are the absolute value)
- ``v``, ``w``, ``f``, ``t``, ``e`` and ``c`` are all zero

Under that substitution every relation on a zero operand is a constant: a
true relation is dropped from its chain, a false one kills the chain. A rule
whose chains are all dead can never apply to a count, so its category is
omitted from the locale's compiled set.

The substitution lives in :class:`IntegerDomain` so the assumption is one
value that callers can inspect or replace.

Python 3.13+.
"""

import logging
from dataclasses import dataclass, replace

from .ast import AndChain, OrExpr, Relation

__all__ = ["INTEGER_DOMAIN", "IntegerDomain", "simplify"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IntegerDomain:
    """Operand substitution table for the integer-count domain.

    Attributes:
        canonical_operand: Operand that survives simplification
        aliases: Operands identical to the canonical one, renamed to it
        zero_operands: Operands that are identically zero
    """

    canonical_operand: str = "n"
    aliases: frozenset[str] = frozenset({"i"})
    zero_operands: frozenset[str] = frozenset({"v", "w", "f", "t", "e", "c"})

    def __post_init__(self) -> None:
        """Reject tables where an operand is both an alias and zero."""
        overlap = (self.aliases | {self.canonical_operand}) & self.zero_operands
        if overlap:
            msg = f"Operands cannot be both live and zero: {sorted(overlap)}"
            raise ValueError(msg)


INTEGER_DOMAIN = IntegerDomain()


def _constant_truth(relation: Relation) -> bool:
    """Truth value of a relation whose operand is zero."""
    value = 0  # 0 % m == 0 for every modulus
    matched = any(r.contains(value) for r in relation.ranges)
    return matched != relation.negated


def _simplify_chain(chain: AndChain, domain: IntegerDomain) -> AndChain | None:
    """Simplify one AND-chain; None if it can never hold."""
    kept: list[Relation] = []
    for relation in chain.relations:
        if relation.operand in domain.zero_operands:
            if not _constant_truth(relation):
                return None
            continue
        if relation.operand in domain.aliases:
            relation = replace(relation, operand=domain.canonical_operand)
        kept.append(relation)
    return AndChain(tuple(kept))


def simplify(expr: OrExpr | None, domain: IntegerDomain = INTEGER_DOMAIN) -> OrExpr | None:
    """Simplify a rule under the integer-count assumption.

    Args:
        expr: Parsed rule, or None (unconditional)
        domain: Operand substitution table

    Returns:
        Simplified rule, or None if expr is None or every branch is dead.
        When some branch becomes always true the result is a single empty
        AndChain, since the whole disjunction then always holds.

    Example:
        >>> from plurimark.plural.parser import parse_rule
        >>> str(simplify(parse_rule("i = 1 and v = 0")))
        'n = 1'
        >>> simplify(parse_rule("v != 0")) is None
        True
    """
    if expr is None:
        return None

    live: list[AndChain] = []
    for branch in expr.branches:
        simplified = _simplify_chain(branch, domain)
        if simplified is None:
            continue
        if simplified.is_always_true:
            return OrExpr((simplified,))
        live.append(simplified)

    if not live:
        logger.debug("Plural rule %r is dead for integer counts", str(expr))
        return None
    return OrExpr(tuple(live))
