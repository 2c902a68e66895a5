"""Pseudo-localization of structured messages.

Accents every letter of the literal text so untranslated or truncated strings
stand out in a running UI, while variables, ``#``, plural structure and
``<N>``/``</N>`` placeholder markers are left intact.

Python 3.13+.
"""

import unicodedata

from plurimark.constants import PLACEHOLDER_PATTERN

from .nodes import Branch, Node, PluralNode, TextNode
from .parser import parse_message
from .serializer import serialize_nodes

__all__ = ["accent", "pseudo_localize"]

_RING_ABOVE = "\u030a"
_DIAERESIS = "\u0308"
_DOT_ABOVE = "\u0307"
_TILDE = "\u0303"
_CEDILLA = "\u0327"
_ACUTE = "\u0301"

_COMBINING: dict[str, str] = {
    **dict.fromkeys("au", _RING_ABOVE),
    **dict.fromkeys("eihowxy", _DIAERESIS),
    **dict.fromkeys("bdfq", _DOT_ABOVE),
    "v": _TILDE,
    "t": _CEDILLA,
}


def accent(ch: str) -> str:
    """Return ch with a combining accent, NFC-composed where possible.

    Non-letters are returned unchanged.

    Example:
        >>> accent("a")
        'å'
        >>> accent("1")
        '1'
    """
    if not ch.isalpha():
        return ch
    mark = _COMBINING.get(ch.lower(), _ACUTE)
    return unicodedata.normalize("NFC", ch + mark)


def _accent_text(text: str) -> str:
    parts: list[str] = []
    last = 0
    for match in PLACEHOLDER_PATTERN.finditer(text):
        parts.extend(accent(ch) for ch in text[last : match.start()])
        parts.append(match.group(0))
        last = match.end()
    parts.extend(accent(ch) for ch in text[last:])
    return "".join(parts)


def _accent_nodes(nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    result: list[Node] = []
    for node in nodes:
        match node:
            case TextNode(value=value):
                result.append(TextNode(_accent_text(value)))
            case PluralNode(variable=variable, branches=branches):
                result.append(
                    PluralNode(
                        variable,
                        tuple(Branch(b.category, _accent_nodes(b.content)) for b in branches),
                    )
                )
            case _:
                result.append(node)
    return tuple(result)


def pseudo_localize(text: str) -> str:
    """Pseudo-localize structured-message text.

    Args:
        text: Structured-message text

    Returns:
        Text with accented letters; empty input is returned unchanged

    Example:
        >>> pseudo_localize("Hi {name}")
        '\u1e26\xef {name}'
    """
    if not text:
        return text
    return serialize_nodes(_accent_nodes(parse_message(text)))
