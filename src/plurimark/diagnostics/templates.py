"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # Base documentation URL for CLDR plural rule syntax
    _CLDR_DOCS = "https://unicode.org/reports/tr35/tr35-numbers.html#Language_Plural_Rules"

    # ------------------------------------------------------------------
    # Markup syntax
    # ------------------------------------------------------------------

    @staticmethod
    def markup_empty(span: SourceSpan | None = None) -> Diagnostic:
        """Markup string is empty.

        Returns:
            Diagnostic for MARKUP_EMPTY
        """
        return Diagnostic(
            code=DiagnosticCode.MARKUP_EMPTY,
            message="Empty message string.",
            span=span,
            hint="Translatable messages must contain at least one character",
        )

    @staticmethod
    def unmatched_delimiter(position: int, span: SourceSpan | None = None) -> Diagnostic:
        """Block delimiter '$' has no closing counterpart.

        Args:
            position: Offset of the opening '$'
            span: Source location of the opening '$'

        Returns:
            Diagnostic for MARKUP_UNMATCHED_DELIMITER
        """
        msg = f"Unmatched '$' at position {position}."
        return Diagnostic(
            code=DiagnosticCode.MARKUP_UNMATCHED_DELIMITER,
            message=msg,
            span=span,
            hint="Close the block with '$' or write '$$' for a literal dollar sign",
        )

    @staticmethod
    def unmatched_selector(position: int, span: SourceSpan | None = None) -> Diagnostic:
        """Selector reference '#' has no closing counterpart.

        Args:
            position: Offset of the opening '#'
            span: Source location of the opening '#'

        Returns:
            Diagnostic for MARKUP_UNMATCHED_SELECTOR
        """
        msg = f"Unmatched '#' at position {position}."
        return Diagnostic(
            code=DiagnosticCode.MARKUP_UNMATCHED_SELECTOR,
            message=msg,
            span=span,
            hint="Close the selector with '#' or write '##' for a literal hash",
        )

    @staticmethod
    def wrong_form_count(
        *, has_zero_form: bool, expected: int, actual: int, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Plural block has the wrong number of forms.

        Args:
            has_zero_form: Whether the block declares an explicit zero form
            expected: Required number of forms
            actual: Number of forms found

        Returns:
            Diagnostic for MARKUP_FORM_COUNT
        """
        qualifier = "with" if has_zero_form else "without"
        msg = f"Plural block {qualifier} =0 requires exactly {expected} forms, got {actual}."
        return Diagnostic(
            code=DiagnosticCode.MARKUP_FORM_COUNT,
            message=msg,
            span=span,
            hint="Separate forms with '|' and write '||' for a literal pipe",
        )

    @staticmethod
    def no_selector(span: SourceSpan | None = None) -> Diagnostic:
        """Plural block declares no selector variable.

        Returns:
            Diagnostic for MARKUP_NO_SELECTOR
        """
        return Diagnostic(
            code=DiagnosticCode.MARKUP_NO_SELECTOR,
            message="Plural block does not declare a selector.",
            span=span,
            hint="Reference the count as #name#, #~name# or #name=0# in the first form",
        )

    @staticmethod
    def selector_mismatch(
        declared: str, found: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Plural block references two different selector variables.

        Args:
            declared: Selector declared by the first reference
            found: Conflicting selector name

        Returns:
            Diagnostic for MARKUP_SELECTOR_MISMATCH
        """
        msg = f"Plural block selects on '{declared}' but references '{found}'."
        return Diagnostic(
            code=DiagnosticCode.MARKUP_SELECTOR_MISMATCH,
            message=msg,
            span=span,
            hint="Every #...# reference in a plural block must name the same variable",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Markup exceeds the configured size limit.

        Args:
            size: Length of the input
            limit: Configured maximum

        Returns:
            Diagnostic for MARKUP_SOURCE_TOO_LARGE
        """
        msg = f"Markup size ({size:,} characters) exceeds maximum ({limit:,} characters)."
        return Diagnostic(
            code=DiagnosticCode.MARKUP_SOURCE_TOO_LARGE,
            message=msg,
            hint="Configure max_source_size in the MarkupParser constructor to raise the limit",
        )

    # ------------------------------------------------------------------
    # Plural rules
    # ------------------------------------------------------------------

    @staticmethod
    def rule_unexpected_token(found: str, expected: str, position: int) -> Diagnostic:
        """Rule text contains an unexpected token.

        Args:
            found: Text found at the error position ("" at end of input)
            expected: Description of what the grammar allows here
            position: Offset in the rule text

        Returns:
            Diagnostic for RULE_UNEXPECTED_TOKEN
        """
        shown = repr(found) if found else "end of rule"
        msg = f"Expected {expected} at position {position}, found {shown}"
        return Diagnostic(
            code=DiagnosticCode.RULE_UNEXPECTED_TOKEN,
            message=msg,
            help_url=ErrorTemplate._CLDR_DOCS,
        )

    @staticmethod
    def rule_unknown_operand(operand: str, position: int) -> Diagnostic:
        """Rule names an operand outside the CLDR operand set.

        Args:
            operand: The unknown operand
            position: Offset in the rule text

        Returns:
            Diagnostic for RULE_UNKNOWN_OPERAND
        """
        msg = f"Unknown plural operand '{operand}' at position {position}"
        return Diagnostic(
            code=DiagnosticCode.RULE_UNKNOWN_OPERAND,
            message=msg,
            hint="CLDR operands are n, i, v, w, f, t, e and c",
            help_url=ErrorTemplate._CLDR_DOCS,
        )

    @staticmethod
    def rule_expected_number(found: str, position: int) -> Diagnostic:
        """Rule has a non-numeric value where a number is required.

        Args:
            found: Text found at the error position
            position: Offset in the rule text

        Returns:
            Diagnostic for RULE_EXPECTED_NUMBER
        """
        shown = repr(found) if found else "end of rule"
        msg = f"Expected a number at position {position}, found {shown}"
        return Diagnostic(
            code=DiagnosticCode.RULE_EXPECTED_NUMBER,
            message=msg,
            help_url=ErrorTemplate._CLDR_DOCS,
        )

    @staticmethod
    def rule_invalid_range(low: int, high: int, position: int) -> Diagnostic:
        """Range has its bounds reversed.

        Args:
            low: Lower bound as written
            high: Upper bound as written
            position: Offset of the range in the rule text

        Returns:
            Diagnostic for RULE_INVALID_RANGE
        """
        msg = f"Invalid range {low}..{high} at position {position}: lower bound exceeds upper"
        return Diagnostic(
            code=DiagnosticCode.RULE_INVALID_RANGE,
            message=msg,
            help_url=ErrorTemplate._CLDR_DOCS,
        )

    @staticmethod
    def rule_unknown_category(name: str) -> Diagnostic:
        """Locale data names a category outside zero/one/two/few/many/other.

        Args:
            name: The unknown category name

        Returns:
            Diagnostic for RULE_UNKNOWN_CATEGORY
        """
        msg = f"Unknown plural category: {name}"
        return Diagnostic(
            code=DiagnosticCode.RULE_UNKNOWN_CATEGORY,
            message=msg,
            hint="CLDR categories are zero, one, two, few, many and other",
        )

    @staticmethod
    def rule_unknown_locale(locale_code: str, reason: str) -> Diagnostic:
        """No plural data is available for a locale.

        Args:
            locale_code: Requested locale
            reason: Underlying lookup failure

        Returns:
            Diagnostic for RULE_UNKNOWN_LOCALE
        """
        msg = f"No plural rules for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.RULE_UNKNOWN_LOCALE,
            message=msg,
            hint="Use a CLDR locale identifier such as 'en', 'pt_BR' or 'sr-Latn'",
        )

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of input.

        Args:
            position: Offset where EOF was hit

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
        )
