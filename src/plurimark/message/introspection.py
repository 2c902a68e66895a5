"""Structured-message introspection.

Extracts the variables, plural selectors, plural categories and placeholder
markers a message uses. Validation compares these between a source message
and its translation.

Python 3.13+.
"""

from dataclasses import dataclass

from plurimark.constants import PLACEHOLDER_PATTERN
from plurimark.syntax.tokens import PluralBlockToken, Token

from .nodes import Node, PluralNode, VariableNode

__all__ = [
    "PlaceholderUsage",
    "collect_placeholder_indices",
    "collect_plural_branches",
    "collect_plural_selectors",
    "collect_variables",
]


@dataclass(frozen=True, slots=True)
class PlaceholderUsage:
    """Placeholder markers found in a message, in document order.

    Attributes:
        opening: Indices of ``<N>`` markers
        closing: Indices of ``</N>`` markers
    """

    opening: tuple[int, ...]
    closing: tuple[int, ...]

    @property
    def indices(self) -> frozenset[int]:
        """Every index that appears in an opening or closing marker."""
        return frozenset(self.opening) | frozenset(self.closing)

    @property
    def is_balanced(self) -> bool:
        """True if every index is closed exactly as often as it is opened."""
        return sorted(self.opening) == sorted(self.closing)


def collect_variables(nodes: tuple[Node, ...]) -> frozenset[str]:
    """Names of all variables referenced, plural selectors included.

    Example:
        >>> from plurimark.message import parse_message
        >>> sorted(collect_variables(parse_message("{a} {n, plural, other {{b}}}")))
        ['a', 'b', 'n']
    """
    names: set[str] = set()
    for node in nodes:
        match node:
            case VariableNode(name=name):
                names.add(name)
            case PluralNode(variable=variable, branches=branches):
                names.add(variable)
                for branch in branches:
                    names |= collect_variables(branch.content)
            case _:
                pass
    return frozenset(names)


def collect_plural_branches(nodes: tuple[Node, ...]) -> dict[str, frozenset[str]]:
    """Map each plural selector to the union of branch categories it declares."""
    found: dict[str, set[str]] = {}
    for node in nodes:
        if isinstance(node, PluralNode):
            found.setdefault(node.variable, set()).update(b.category for b in node.branches)
            for branch in node.branches:
                for variable, categories in collect_plural_branches(branch.content).items():
                    found.setdefault(variable, set()).update(categories)
    return {variable: frozenset(categories) for variable, categories in found.items()}


def collect_plural_selectors(tokens: tuple[Token, ...]) -> frozenset[str]:
    """Selector names of the plural blocks in a markup token stream."""
    return frozenset(
        token.selector for token in tokens if isinstance(token, PluralBlockToken)
    )


def collect_placeholder_indices(text: str) -> PlaceholderUsage:
    """Find ``<N>`` and ``</N>`` markers in structured-message text.

    Example:
        >>> collect_placeholder_indices("Click <0>here</0>").opening
        (0,)
    """
    opening: list[int] = []
    closing: list[int] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        target = closing if match.group(1) else opening
        target.append(int(match.group(2)))
    return PlaceholderUsage(tuple(opening), tuple(closing))
