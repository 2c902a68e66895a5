"""Markup to structured-message conversion.

Single-call entry points for the common path: authoring markup in,
structured-message text (and placeholder mappings) out.

Python 3.13+.
"""

from plurimark.markdown import ExtractionResult, compile_markdown_with_mappings
from plurimark.message import render_message
from plurimark.syntax import parse_markup

__all__ = ["to_structured_message", "to_structured_message_with_markdown"]


def to_structured_message(markup: str, *, source_location: str | None = None) -> str:
    """Convert authoring markup to structured-message text.

    Raises:
        MarkupSyntaxError: If the markup is malformed

    Example:
        >>> to_structured_message("Hello, $name$!")
        'Hello, {name}!'
    """
    return render_message(parse_markup(markup, source_location=source_location))


def to_structured_message_with_markdown(
    markup: str, *, source_location: str | None = None
) -> ExtractionResult:
    """Convert authoring markup, turning inline markdown into placeholders.

    Raises:
        MarkupSyntaxError: If the markup is malformed

    Example:
        >>> to_structured_message_with_markdown("Read the **$doc$** guide").text
        'Read the <0>{doc}</0> guide'
    """
    return compile_markdown_with_mappings(
        parse_markup(markup, source_location=source_location)
    )
