"""plurimark exception hierarchy with structured diagnostics.

All exceptions may store Diagnostic objects for rich error information.
Only the strict paths raise: the markup parser and the plural rule parser.
The structured-message parser and the markdown compiler never raise.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class PlurimarkError(Exception):
    """Base exception for all plurimark errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PlurimarkError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class MarkupSyntaxError(PlurimarkError):
    """Authoring markup could not be parsed.

    Raised for empty input, an unmatched block delimiter, an unterminated
    selector reference, or a plural block with the wrong number of forms.
    Malformed authoring input must block compilation, so there is no
    recovery mode.

    Attributes:
        position: Character offset of the offending opening delimiter
        source: The markup that failed to parse
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        position: int = 0,
        source: str = "",
    ) -> None:
        """Initialize MarkupSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            position: Offset of the opening delimiter that caused the error
            source: Markup text being parsed
        """
        super().__init__(message)
        self.position = position
        self.source = source


class PluralRuleError(PlurimarkError):
    """Base class for plural rule compilation failures."""


class PluralRuleSyntaxError(PluralRuleError):
    """CLDR plural rule text violates the rule grammar.

    Rule text comes from curated locale data, so any violation is a defect
    in that data and is reported immediately.

    Attributes:
        position: Character offset in the rule text
        rule: The rule text that failed to parse
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        position: int = 0,
        rule: str = "",
    ) -> None:
        """Initialize PluralRuleSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            position: Offset in the rule text where parsing stopped
            rule: The rule text
        """
        super().__init__(message)
        self.position = position
        self.rule = rule


class PluralRuleDataError(PluralRuleError):
    """Locale plural data is unavailable or names an unknown category."""
