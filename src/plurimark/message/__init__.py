"""Structured-message codec and tooling.

Renders markup tokens as structured-message text, parses such text leniently
into a node tree, and provides introspection, pseudo-localization and runtime
formatting over that tree.

Python 3.13+.
"""

from .formatter import format_message
from .introspection import (
    PlaceholderUsage,
    collect_placeholder_indices,
    collect_plural_branches,
    collect_plural_selectors,
    collect_variables,
)
from .nodes import Branch, HashNode, Node, PluralNode, TextNode, VariableNode, tokens_to_nodes
from .parser import parse_message
from .pseudo import accent, pseudo_localize
from .serializer import escape_text, render_message, serialize_nodes

__all__ = [
    "Branch",
    "HashNode",
    "Node",
    "PlaceholderUsage",
    "PluralNode",
    "TextNode",
    "VariableNode",
    "accent",
    "collect_placeholder_indices",
    "collect_plural_branches",
    "collect_plural_selectors",
    "collect_variables",
    "escape_text",
    "format_message",
    "parse_message",
    "pseudo_localize",
    "render_message",
    "serialize_nodes",
    "tokens_to_nodes",
]
