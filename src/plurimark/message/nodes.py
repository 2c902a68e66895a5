"""Structured-message node tree.

The lenient structured-message parser produces these nodes; the serializer,
introspection helpers, pseudo-localizer, validator and runtime formatter
consume them. The node set is closed.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from plurimark.syntax.tokens import (
    PluralBlockToken,
    SelectorRefToken,
    TextToken,
    Token,
    VariableToken,
)

__all__ = [
    "Branch",
    "HashNode",
    "Node",
    "PluralNode",
    "TextNode",
    "VariableNode",
    "tokens_to_nodes",
]


@dataclass(frozen=True, slots=True)
class TextNode:
    """Literal text, quoting already resolved."""

    value: str


@dataclass(frozen=True, slots=True)
class VariableNode:
    """Variable reference: {name}"""

    name: str


@dataclass(frozen=True, slots=True)
class HashNode:
    """Reference to the enclosing plural's selector value: #"""


@dataclass(frozen=True, slots=True)
class Branch:
    """One plural branch.

    Attributes:
        category: CLDR category name or an exact match key such as ``=0``
        content: Nodes of the branch
    """

    category: str
    content: tuple["Node", ...]


@dataclass(frozen=True, slots=True)
class PluralNode:
    """Plural construct: {variable, plural, one {...} other {...}}"""

    variable: str
    branches: tuple[Branch, ...]

    def branch(self, category: str) -> Branch | None:
        """Return the branch for category, or None if absent."""
        for branch in self.branches:
            if branch.category == category:
                return branch
        return None


type Node = TextNode | VariableNode | HashNode | PluralNode


def tokens_to_nodes(tokens: tuple[Token, ...]) -> tuple[Node, ...]:
    """Map markup tokens to the node tree their rendering parses back to.

    Hidden selectors map to nothing, since they render nothing.

    Example:
        >>> tokens_to_nodes((TextToken("Hi "), VariableToken("name")))
        (TextNode(value='Hi '), VariableNode(name='name'))
    """
    nodes: list[Node] = []
    for token in tokens:
        match token:
            case TextToken(value=value):
                nodes.append(TextNode(value))
            case VariableToken(name=name):
                nodes.append(VariableNode(name))
            case SelectorRefToken():
                nodes.append(HashNode())
            case PluralBlockToken(selector=selector, forms=forms):
                branches = tuple(
                    Branch(form.category, tokens_to_nodes(form.content)) for form in forms
                )
                nodes.append(PluralNode(selector, branches))
    return tuple(nodes)
