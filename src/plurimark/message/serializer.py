"""Serialize tokens and nodes to structured-message text.

Two writers:

- :func:`render_message` turns markup tokens into structured-message text.
  Text passes through verbatim except for apostrophes the parser would
  read as quoting, which are doubled (``it''{x}``, ``a''''b``).
- :func:`serialize_nodes` writes a node tree back to text, quoting literal
  text that the parser would otherwise read as syntax. Use it when text nodes
  may carry arbitrary content (pseudo-localized or edited trees).

Python 3.13+.
"""

from plurimark.constants import SELECTOR_MARKER
from plurimark.syntax.tokens import (
    PluralBlockToken,
    SelectorRefToken,
    TextToken,
    Token,
    VariableToken,
)

from .nodes import HashNode, Node, PluralNode, TextNode, VariableNode

__all__ = ["escape_text", "render_message", "serialize_nodes"]

_QUOTE = "'"
_BRACES = frozenset("{}")
_PLURAL_SPECIALS = frozenset("{}" + SELECTOR_MARKER)


def render_message(tokens: tuple[Token, ...], *, _in_plural: bool = False) -> str:
    """Render markup tokens as a structured-message string.

    Args:
        tokens: Output of :func:`~plurimark.syntax.parse_markup`

    Returns:
        Structured-message text

    Example:
        >>> from plurimark.syntax import parse_markup
        >>> render_message(parse_markup("You have $#x# book|#x# books$"))
        'You have {x, plural, one {# book} other {# books}}'
    """
    rendered = [_render_token(token) for token in tokens]
    parts: list[str] = []
    for position, token in enumerate(tokens):
        if isinstance(token, TextToken):
            if position + 1 < len(rendered):
                following = rendered[position + 1][:1]
            else:
                following = "}" if _in_plural else ""
            parts.append(_protect_apostrophes(token.value, following, in_plural=_in_plural))
        else:
            parts.append(rendered[position])
    return "".join(parts)


def _render_token(token: Token) -> str:
    match token:
        case TextToken(value=value):
            return value
        case VariableToken(name=name):
            return f"{{{name}}}"
        case SelectorRefToken():
            return SELECTOR_MARKER
        case PluralBlockToken(selector=selector, forms=forms):
            branches = "".join(
                f" {form.category} {{{render_message(form.content, _in_plural=True)}}}"
                for form in forms
            )
            return f"{{{selector}, plural,{branches}}}"
    return ""


def _protect_apostrophes(value: str, following: str, *, in_plural: bool) -> str:
    """Double each apostrophe the parser would read as a quote or escape.

    ``following`` is the first character rendered after the text.
    """
    if _QUOTE not in value:
        return value
    specials = _PLURAL_SPECIALS if in_plural else _BRACES
    lookahead = [*value[1:], following]
    return "".join(
        _QUOTE * 2 if ch == _QUOTE and (nxt == _QUOTE or nxt in specials) else ch
        for ch, nxt in zip(value, lookahead, strict=True)
    )


def escape_text(value: str, *, in_plural: bool = False) -> str:
    """Quote literal text so the structured-message parser reads it back unchanged.

    Apostrophes double (``'`` -> ``''``). Runs of braces, plus ``#`` inside a
    plural branch, are wrapped in a single quoted segment.

    Example:
        >>> escape_text("It's {x}")
        "It''s '{'x'}'"
    """
    specials = _PLURAL_SPECIALS if in_plural else _BRACES
    parts: list[str] = []
    quoted = False
    for ch in value:
        if ch == _QUOTE:
            parts.append(_QUOTE * 2)
        elif ch in specials:
            if not quoted:
                parts.append(_QUOTE)
                quoted = True
            parts.append(ch)
        else:
            if quoted:
                parts.append(_QUOTE)
                quoted = False
            parts.append(ch)
    if quoted:
        parts.append(_QUOTE)
    return "".join(parts)


def serialize_nodes(nodes: tuple[Node, ...], *, _in_plural: bool = False) -> str:
    """Serialize a node tree to structured-message text.

    Args:
        nodes: Node tree, typically from :func:`~plurimark.message.parse_message`

    Returns:
        Text that :func:`~plurimark.message.parse_message` parses back to an
        equal tree (adjacent text nodes aside)
    """
    parts: list[str] = []
    for node in nodes:
        match node:
            case TextNode(value=value):
                parts.append(escape_text(value, in_plural=_in_plural))
            case VariableNode(name=name):
                parts.append(f"{{{name}}}")
            case HashNode():
                parts.append(SELECTOR_MARKER)
            case PluralNode(variable=variable, branches=branches):
                parts.append(f"{{{variable}, plural,")
                for branch in branches:
                    content = serialize_nodes(branch.content, _in_plural=True)
                    parts.append(f" {branch.category} {{{content}}}")
                parts.append("}")
    return "".join(parts)
