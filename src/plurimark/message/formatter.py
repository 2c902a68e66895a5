"""Runtime formatting of structured messages.

Resolves a structured message against argument values for one locale:

- ``{name}`` renders the argument (missing arguments render as "")
- a plural picks the exact ``=N`` branch, then the locale's category for the
  count, then ``other``
- ``#`` renders the selector value, grouped per locale via Babel

Python 3.13+. Uses Babel for number formatting.
"""

import logging
from collections.abc import Mapping

from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError

from plurimark.constants import SELECTOR_MARKER
from plurimark.enums import PluralCategory
from plurimark.locale_utils import get_babel_locale
from plurimark.plural.cldr import select_plural_category

from .nodes import Branch, HashNode, Node, PluralNode, TextNode, VariableNode
from .parser import parse_message

__all__ = ["format_message"]

logger = logging.getLogger(__name__)

_DEFAULT_LOCALE = "en"

# Selector value outside any plural, where "#" is literal.
_NO_PLURAL = object()


def _as_count(value: object) -> int | None:
    """Integer count of a selector value, or None if it is not a count."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _format_count(value: object, locale: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return str(value)
    try:
        return babel_numbers.format_decimal(value, locale=get_babel_locale(locale))
    except (UnknownLocaleError, ValueError):
        return str(value)


def _choose_branch(node: PluralNode, value: object, locale: str) -> Branch | None:
    count = _as_count(value)
    if count is not None:
        exact = node.branch(f"={count}")
        if exact is not None:
            return exact
        chosen = node.branch(select_plural_category(count, locale).value)
        if chosen is not None:
            return chosen
    return node.branch(PluralCategory.OTHER.value)


def _resolve(
    nodes: tuple[Node, ...],
    args: Mapping[str, object],
    locale: str,
    selector_value: object,
    parts: list[str],
) -> None:
    for node in nodes:
        match node:
            case TextNode(value=value):
                parts.append(value)
            case VariableNode(name=name):
                if name in args:
                    parts.append(str(args[name]))
                else:
                    logger.debug("Missing message argument %r", name)
            case HashNode():
                if selector_value is _NO_PLURAL:
                    parts.append(SELECTOR_MARKER)
                elif selector_value is not None:
                    parts.append(_format_count(selector_value, locale))
            case PluralNode(variable=variable):
                value = args.get(variable)
                if value is None:
                    logger.debug("Missing plural selector argument %r", variable)
                branch = _choose_branch(node, value, locale)
                if branch is not None:
                    _resolve(branch.content, args, locale, value, parts)


def format_message(
    message: str | tuple[Node, ...],
    args: Mapping[str, object] | None = None,
    locale: str = _DEFAULT_LOCALE,
) -> str:
    """Format a structured message.

    Args:
        message: Structured-message text or an already parsed node tree
        args: Argument values by variable name
        locale: Locale whose plural rules and number grouping apply

    Returns:
        The formatted string

    Example:
        >>> format_message("{n, plural, one {# file} other {# files}}", {"n": 1200})
        '1,200 files'
        >>> format_message("{n, plural, =0 {none} other {#}}", {"n": 0})
        'none'
    """
    nodes = parse_message(message) if isinstance(message, str) else message
    parts: list[str] = []
    _resolve(nodes, args or {}, locale, _NO_PLURAL, parts)
    return "".join(parts)
