"""Authoring markup parsing package.

Provides the markup parser, its token types, and the immutable cursor shared
with the plural rule parser.

Python 3.13+.
"""

from .cursor import Cursor, ParseResult
from .parser import MarkupParser, parse_markup
from .tokens import (
    PluralBlockToken,
    PluralForm,
    SelectorRefToken,
    TextToken,
    Token,
    VariableToken,
)

__all__ = [
    "Cursor",
    "MarkupParser",
    "ParseResult",
    "PluralBlockToken",
    "PluralForm",
    "SelectorRefToken",
    "TextToken",
    "Token",
    "VariableToken",
    "parse_markup",
]
