"""plurimark - translation markup, structured messages and plural rule compilation.

Turns compact authoring markup such as ``You have $#n# file|#n# files$`` into
structured-message text with numbered placeholders for inline markdown, and
compiles CLDR plural rules into simplified condition and dispatch code for
integer counts.

Public API:
    parse_markup - Parse authoring markup into tokens
    render_message - Render tokens as structured-message text
    parse_message - Leniently parse structured-message text into nodes
    compile_markdown - Render tokens with markdown converted to placeholders
    extract_placeholders - Convert inline markdown in plain text
    parse_rule / simplify / emit_condition / emit_category_dispatch -
        CLDR plural rule compiler
    format_message - Format a structured message for a locale
    validate_translation - Compare a translation with its source

Exceptions:
    PlurimarkError - Base exception class
    MarkupSyntaxError - Malformed authoring markup
    PluralRuleSyntaxError - Malformed plural rule text
    PluralRuleDataError - Missing or invalid locale plural data

Submodules:
    plurimark.syntax - Markup parser, tokens, immutable cursor
    plurimark.message - Structured-message codec and tooling
    plurimark.markdown - Markdown placeholder compiler
    plurimark.plural - Plural rule compiler and CLDR bridge
    plurimark.diagnostics - Error types, diagnostics and validation results
    plurimark.validation - Translation validation
"""

from .convert import to_structured_message, to_structured_message_with_markdown
from .diagnostics import (
    MarkupSyntaxError,
    PluralRuleDataError,
    PluralRuleError,
    PluralRuleSyntaxError,
    PlurimarkError,
)
from .enums import PluralCategory
from .markdown import (
    PlaceholderMapping,
    apply_placeholders,
    compile_markdown,
    extract_placeholders,
)
from .message import format_message, parse_message, pseudo_localize, render_message
from .plural import (
    emit_category_dispatch,
    emit_condition,
    parse_rule,
    plural_rules_for_locale,
    select_plural_category,
    simplify,
)
from .syntax import parse_markup
from .validation import validate_catalog, validate_translation

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("plurimark")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "MarkupSyntaxError",
    "PlaceholderMapping",
    "PluralCategory",
    "PluralRuleDataError",
    "PluralRuleError",
    "PluralRuleSyntaxError",
    "PlurimarkError",
    "__version__",
    "apply_placeholders",
    "compile_markdown",
    "emit_category_dispatch",
    "emit_condition",
    "extract_placeholders",
    "format_message",
    "parse_markup",
    "parse_message",
    "parse_rule",
    "plural_rules_for_locale",
    "pseudo_localize",
    "render_message",
    "select_plural_category",
    "simplify",
    "to_structured_message",
    "to_structured_message_with_markdown",
    "validate_catalog",
    "validate_translation",
]
