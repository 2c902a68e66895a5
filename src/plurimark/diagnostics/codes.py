"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Markup syntax errors (authoring syntax)
        2000-2999: Plural rule errors (CLDR rule text and locale data)
        3000-3999: Cursor-level errors
        5000-5099: Translation validation errors
        5100-5199: Translation validation warnings
    """

    # Markup syntax errors (1000-1999)
    MARKUP_EMPTY = 1001
    MARKUP_UNMATCHED_DELIMITER = 1002
    MARKUP_UNMATCHED_SELECTOR = 1003
    MARKUP_FORM_COUNT = 1004
    MARKUP_NO_SELECTOR = 1005
    MARKUP_SELECTOR_MISMATCH = 1006
    MARKUP_SOURCE_TOO_LARGE = 1007

    # Plural rule errors (2000-2999)
    RULE_UNEXPECTED_TOKEN = 2001
    RULE_UNKNOWN_OPERAND = 2002
    RULE_EXPECTED_NUMBER = 2003
    RULE_INVALID_RANGE = 2004
    RULE_UNKNOWN_CATEGORY = 2005
    RULE_UNKNOWN_LOCALE = 2006

    # Cursor errors (3000-3999)
    UNEXPECTED_EOF = 3001

    # Translation validation errors (5000-5099)
    VALIDATION_MISSING_TRANSLATION = 5001
    VALIDATION_MISSING_VARIABLE = 5002
    VALIDATION_EXTRA_VARIABLE = 5003
    VALIDATION_MISSING_PLURAL_FORM = 5004
    VALIDATION_PLACEHOLDER_MISMATCH = 5005

    # Translation validation warnings (5100-5199)
    VALIDATION_UNTRANSLATED = 5101
    VALIDATION_UNKNOWN_PLURAL_CATEGORY = 5102


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools (editors, extraction pipelines).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when no position applies)
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        source_location: Where the offending text came from, as reported by
            the caller (e.g. "app/views.py:12" or a catalog key)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    help_url: str | None = None
    source_location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[MARKUP_UNMATCHED_DELIMITER]: Unmatched '$' at position 10
              --> line 1, column 11
              = help: Close the block with '$' or write '$$' for a literal dollar sign

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
