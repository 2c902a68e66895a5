"""Markup token definitions.

The markup parser produces a flat tuple of tokens per message. The token set
is closed: every consumer matches exhaustively over ``Token``.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from plurimark.constants import ZERO_FORM_CATEGORY

__all__ = [
    "PluralBlockToken",
    "PluralForm",
    "SelectorRefToken",
    "TextToken",
    "Token",
    "VariableToken",
]


@dataclass(frozen=True, slots=True)
class TextToken:
    """Literal text, escapes already resolved."""

    value: str

    @staticmethod
    def guard(token: object) -> TypeIs["TextToken"]:
        """Type guard for TextToken."""
        return isinstance(token, TextToken)


@dataclass(frozen=True, slots=True)
class VariableToken:
    """Variable reference: $name$"""

    name: str

    @staticmethod
    def guard(token: object) -> TypeIs["VariableToken"]:
        """Type guard for VariableToken."""
        return isinstance(token, VariableToken)


@dataclass(frozen=True, slots=True)
class SelectorRefToken:
    """Rendered count of the enclosing plural block: #name#

    Only appears inside a PluralForm. Hidden references (#~name#) and the
    zero-form declaration do not produce a token at all.
    """

    name: str

    @staticmethod
    def guard(token: object) -> TypeIs["SelectorRefToken"]:
        """Type guard for SelectorRefToken."""
        return isinstance(token, SelectorRefToken)


@dataclass(frozen=True, slots=True)
class PluralForm:
    """One alternative of a plural block.

    Attributes:
        category: "=0", "one" or "other"
        content: Tokens of this form (never contains a PluralBlockToken)
    """

    category: str
    content: tuple["Token", ...]


@dataclass(frozen=True, slots=True)
class PluralBlockToken:
    """Plural block: $#count# item|#count# items$

    Attributes:
        selector: Name of the count variable
        selector_rendered: False when declared hidden (#~count#)
        has_zero_form: True when declared with #count=0#
        forms: ("one", "other") forms, or ("=0", "one", "other") with a zero form
    """

    selector: str
    selector_rendered: bool
    has_zero_form: bool
    forms: tuple[PluralForm, ...]

    def __post_init__(self) -> None:
        """Validate form arity against the zero-form flag."""
        expected = 3 if self.has_zero_form else 2
        if len(self.forms) != expected:
            msg = f"PluralBlockToken requires {expected} forms, got {len(self.forms)}"
            raise ValueError(msg)
        if self.has_zero_form and self.forms[0].category != ZERO_FORM_CATEGORY:
            msg = f"First form of a zero-form block must be '{ZERO_FORM_CATEGORY}'"
            raise ValueError(msg)

    @staticmethod
    def guard(token: object) -> TypeIs["PluralBlockToken"]:
        """Type guard for PluralBlockToken."""
        return isinstance(token, PluralBlockToken)


type Token = TextToken | VariableToken | SelectorRefToken | PluralBlockToken
