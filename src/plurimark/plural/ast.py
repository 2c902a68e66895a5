"""Plural rule AST.

A rule is an OR of AND-chains of relations. ``None`` in place of an
:class:`OrExpr` means "unconditional" (the ``other`` catch-all, or a category
that always applies). An :class:`AndChain` with no relations is always true.

``str()`` of any node renders canonical CLDR rule syntax, e.g.
``n % 10 = 1 and n % 100 != 11``.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["OPERANDS", "AndChain", "OrExpr", "Range", "Relation"]

# CLDR plural operands: absolute value, integer digits, visible fraction
# digit count with/without trailing zeros, visible fraction digits
# with/without trailing zeros, compact decimal exponent (c is its synonym).
OPERANDS: frozenset[str] = frozenset({"n", "i", "v", "w", "f", "t", "e", "c"})


@dataclass(frozen=True, slots=True)
class Range:
    """Single value (high is None) or inclusive range ``low..high``."""

    low: int
    high: int | None = None

    def __post_init__(self) -> None:
        """Validate bounds."""
        if self.low < 0:
            msg = f"Range bound must be non-negative, got {self.low}"
            raise ValueError(msg)
        if self.high is not None and self.high < self.low:
            msg = f"Range high ({self.high}) is below low ({self.low})"
            raise ValueError(msg)

    @property
    def is_single(self) -> bool:
        """True for a single value."""
        return self.high is None

    @property
    def upper(self) -> int:
        """Inclusive upper bound (low for a single value)."""
        return self.low if self.high is None else self.high

    def contains(self, value: int) -> bool:
        """Check if value falls within the range."""
        return self.low <= value <= self.upper

    def __str__(self) -> str:
        return str(self.low) if self.high is None else f"{self.low}..{self.high}"


@dataclass(frozen=True, slots=True)
class Relation:
    """``operand [% modulus] (=|!=) range, range, ...``

    Attributes:
        operand: One of OPERANDS
        ranges: Non-empty alternatives; the relation holds if any contains the value
        modulus: Optional positive modulus applied to the operand
        negated: True for ``!=``
    """

    operand: str
    ranges: tuple[Range, ...]
    modulus: int | None = None
    negated: bool = False

    def __post_init__(self) -> None:
        """Validate operand, ranges and modulus."""
        if self.operand not in OPERANDS:
            msg = f"Unknown plural operand: {self.operand!r}"
            raise ValueError(msg)
        if not self.ranges:
            msg = "Relation requires at least one range"
            raise ValueError(msg)
        if self.modulus is not None and self.modulus <= 0:
            msg = f"Modulus must be positive, got {self.modulus}"
            raise ValueError(msg)

    def __str__(self) -> str:
        left = self.operand if self.modulus is None else f"{self.operand} % {self.modulus}"
        operator = "!=" if self.negated else "="
        return f"{left} {operator} {','.join(str(r) for r in self.ranges)}"


@dataclass(frozen=True, slots=True)
class AndChain:
    """Conjunction of relations; empty means always true."""

    relations: tuple[Relation, ...]

    @property
    def is_always_true(self) -> bool:
        """True when no relation constrains the chain."""
        return not self.relations

    def __str__(self) -> str:
        return " and ".join(str(r) for r in self.relations)


@dataclass(frozen=True, slots=True)
class OrExpr:
    """Disjunction of AND-chains (at least one)."""

    branches: tuple[AndChain, ...]

    def __post_init__(self) -> None:
        """Validate that at least one branch exists."""
        if not self.branches:
            msg = "OrExpr requires at least one branch; use None for unconditional"
            raise ValueError(msg)

    @property
    def is_always_true(self) -> bool:
        """True when any branch is always true."""
        return any(branch.is_always_true for branch in self.branches)

    def __str__(self) -> str:
        return " or ".join(str(b) for b in self.branches)
