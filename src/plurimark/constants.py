"""Shared constants for plurimark.

Single source of truth for the reserved characters of the authoring markup,
the sentinel used by the markdown compiler, and the input and depth limits
applied by the parsers.

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Markup syntax
    "BLOCK_DELIMITER",
    "FORM_SEPARATOR",
    "SELECTOR_MARKER",
    "HIDDEN_MARKER",
    "ZERO_FORM_SUFFIX",
    "ZERO_FORM_CATEGORY",
    # Markdown compiler
    "SELECTOR_SENTINEL",
    "PLACEHOLDER_PATTERN",
    # Limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
    # Code emission
    "DEFAULT_INDENT",
    "DEFAULT_CATEGORY_PREFIX",
]

# ============================================================================
# MARKUP SYNTAX
# ============================================================================

# Opens and closes a variable or plural block. Doubled ($$) it is a literal.
BLOCK_DELIMITER: str = "$"

# Separates plural forms inside a block. Doubled (||) it is a literal.
FORM_SEPARATOR: str = "|"

# Opens and closes a selector reference inside a plural block (##: literal).
SELECTOR_MARKER: str = "#"

# Prefix of a selector reference that must not render the count.
HIDDEN_MARKER: str = "~"

# Suffix of a selector declaration that adds an explicit zero form.
ZERO_FORM_SUFFIX: str = "=0"

# Structured-message category emitted for the explicit zero form.
ZERO_FORM_CATEGORY: str = "=0"

# ============================================================================
# MARKDOWN COMPILER
# ============================================================================

# Stands in for the plural "#" while markdown runs, so it never collides with
# markdown syntax. U+FFF2 is an unassigned code point and never appears in
# authored text.
SELECTOR_SENTINEL: str = "\ufff2"

# Numbered placeholder marker: <N> opens span N, </N> closes it.
PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"<(/?)(\d+)>")

# ============================================================================
# LIMITS
# ============================================================================

# Maximum nesting of plural constructs the lenient structured-message parser
# descends into. A deeper plural degrades to a plain variable reference.
MAX_DEPTH: int = 100

# Maximum markup source size in characters (DoS prevention).
MAX_SOURCE_SIZE: int = 1024 * 1024

# ============================================================================
# CODE EMISSION
# ============================================================================

DEFAULT_INDENT: str = "    "

DEFAULT_CATEGORY_PREFIX: str = "PluralCategory."
