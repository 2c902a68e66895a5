"""Tests for diagnostics: codes, spans, templates, formatter, errors and results."""

from __future__ import annotations

import json

import pytest

from plurimark.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    MarkupSyntaxError,
    OutputFormat,
    PluralRuleDataError,
    PluralRuleError,
    PluralRuleSyntaxError,
    PlurimarkError,
    SourceSpan,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)

# ============================================================================
# CODES AND SPANS
# ============================================================================


class TestDiagnosticCode:
    """Code numbering by category."""

    def test_codes_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("prefix", "low", "high"),
        [("MARKUP_", 1000, 1999), ("RULE_", 2000, 2999), ("VALIDATION_", 5000, 5199)],
    )
    def test_ranges(self, prefix: str, low: int, high: int) -> None:
        """Each category stays within its numeric range."""
        for code in DiagnosticCode:
            if code.name.startswith(prefix):
                assert low <= code.value <= high


class TestSourceSpan:
    """SourceSpan invariants."""

    def test_valid(self) -> None:
        """A well-formed span is accepted."""
        span = SourceSpan(start=3, end=4, line=1, column=4)
        assert (span.start, span.end, span.line, span.column) == (3, 4, 1, 4)

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid(self, start: int, end: int, line: int, column: int) -> None:
        """Negative offsets, reversed bounds and zero line or column are rejected."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start=start, end=end, line=line, column=column)


# ============================================================================
# TEMPLATES
# ============================================================================


class TestErrorTemplate:
    """Templates build diagnostics with code, message and hint."""

    def test_unmatched_delimiter(self) -> None:
        """Position appears in the message."""
        diagnostic = ErrorTemplate.unmatched_delimiter(10)

        assert diagnostic.code is DiagnosticCode.MARKUP_UNMATCHED_DELIMITER
        assert diagnostic.message == "Unmatched '$' at position 10."
        assert diagnostic.hint is not None

    def test_form_count(self) -> None:
        """The zero-form qualifier and counts are reported."""
        diagnostic = ErrorTemplate.wrong_form_count(has_zero_form=True, expected=3, actual=2)
        assert diagnostic.message == "Plural block with =0 requires exactly 3 forms, got 2."

    def test_source_too_large(self) -> None:
        """Sizes are formatted with grouping."""
        diagnostic = ErrorTemplate.source_too_large(2_000_000, 1_048_576)
        assert "2,000,000" in diagnostic.message
        assert "1,048,576" in diagnostic.message

    def test_rule_templates_link_to_cldr(self) -> None:
        """Rule diagnostics point at the CLDR plural rule syntax."""
        diagnostic = ErrorTemplate.rule_unknown_operand("x", 0)

        assert diagnostic.code is DiagnosticCode.RULE_UNKNOWN_OPERAND
        assert diagnostic.help_url is not None
        assert "tr35" in diagnostic.help_url

    def test_end_of_rule(self) -> None:
        """An empty found token reads as end of rule."""
        diagnostic = ErrorTemplate.rule_unexpected_token("", "plural operand", 8)
        assert diagnostic.message == "Expected plural operand at position 8, found end of rule"

    def test_unknown_locale(self) -> None:
        """The locale and reason are included."""
        diagnostic = ErrorTemplate.rule_unknown_locale("xx", "unknown locale 'xx'")

        assert diagnostic.code is DiagnosticCode.RULE_UNKNOWN_LOCALE
        assert "'xx'" in diagnostic.message


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """Rust, simple and JSON output."""

    SPAN = SourceSpan(start=10, end=11, line=2, column=3)

    def _diagnostic(self, **overrides: object) -> Diagnostic:
        base = ErrorTemplate.unmatched_delimiter(10, self.SPAN)
        fields = {
            "code": base.code,
            "message": base.message,
            "span": base.span,
            "hint": base.hint,
        }
        fields.update(overrides)
        return Diagnostic(**fields)  # type: ignore[arg-type]

    def test_rust_style(self) -> None:
        """Header, location and help lines."""
        output = DiagnosticFormatter().format(self._diagnostic())

        assert output.splitlines() == [
            "error[MARKUP_UNMATCHED_DELIMITER]: Unmatched '$' at position 10.",
            "  --> line 2, column 3",
            "  = help: Close the block with '$' or write '$$' for a literal dollar sign",
        ]

    def test_rust_style_with_source_location(self) -> None:
        """The caller's source location prefixes the line and column."""
        output = DiagnosticFormatter().format(
            self._diagnostic(source_location="app/views.py:12")
        )
        assert "  --> app/views.py:12 (line 2, column 3)" in output.splitlines()

    def test_rust_style_help_url(self) -> None:
        """Help URLs are rendered as a note."""
        output = DiagnosticFormatter().format(ErrorTemplate.rule_invalid_range(5, 2, 4))
        assert output.splitlines()[-1].startswith("  = note: see https://")

    def test_color(self) -> None:
        """Color mode wraps the severity in ANSI codes."""
        output = DiagnosticFormatter(color=True).format(self._diagnostic())
        assert output.startswith("\033[1;31merror\033[0m[")

    def test_warning_color(self) -> None:
        """Warnings use yellow."""
        output = DiagnosticFormatter(color=True).format(self._diagnostic(severity="warning"))
        assert output.startswith("\033[1;33mwarning\033[0m[")

    def test_simple(self) -> None:
        """Single line: code and message."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format(self._diagnostic()) == (
            "MARKUP_UNMATCHED_DELIMITER: Unmatched '$' at position 10."
        )

    def test_json(self) -> None:
        """JSON carries code, span and hint."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(self._diagnostic()))

        assert data["code"] == "MARKUP_UNMATCHED_DELIMITER"
        assert data["code_value"] == DiagnosticCode.MARKUP_UNMATCHED_DELIMITER.value
        assert (data["line"], data["column"], data["start"], data["end"]) == (2, 3, 10, 11)
        assert data["severity"] == "error"
        assert "hint" in data

    def test_sanitize_truncates(self) -> None:
        """Sanitized output truncates long messages."""
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        output = formatter.format(self._diagnostic(message="x" * 50))
        assert output == "MARKUP_UNMATCHED_DELIMITER: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        """Diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostic = self._diagnostic()
        assert formatter.format_all([diagnostic, diagnostic]).count("\n\n") == 1

    def test_format_error_delegates(self) -> None:
        """Diagnostic.format_error uses the default formatter."""
        diagnostic = self._diagnostic()
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)
        assert str(diagnostic) == diagnostic.message

    def test_format_validation_result(self) -> None:
        """Summary line, then errors and warnings."""
        result = ValidationResult(
            errors=(ValidationError("VALIDATION_MISSING_VARIABLE", "Missing {x}", "Hi {x}"),),
            warnings=(ValidationWarning("VALIDATION_UNTRANSLATED", "Same", "Hi"),),
        )

        output = DiagnosticFormatter().format_validation_result(result)

        assert output.startswith("Validation failed: 1 error(s), 1 warning(s)")
        assert "[VALIDATION_MISSING_VARIABLE]: Missing {x}" in output
        assert "[VALIDATION_UNTRANSLATED]: Same (Hi)" in output

    def test_format_validation_passed(self) -> None:
        """A valid result says so."""
        output = DiagnosticFormatter().format_validation_result(ValidationResult.valid())
        assert output == "Validation passed"


# ============================================================================
# ERRORS
# ============================================================================


class TestErrors:
    """Exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Every error derives from PlurimarkError."""
        assert issubclass(MarkupSyntaxError, PlurimarkError)
        assert issubclass(PluralRuleSyntaxError, PluralRuleError)
        assert issubclass(PluralRuleDataError, PluralRuleError)
        assert issubclass(PluralRuleError, PlurimarkError)

    def test_diagnostic_message(self) -> None:
        """A Diagnostic becomes the exception message."""
        error = MarkupSyntaxError(ErrorTemplate.markup_empty(), position=0, source="")

        assert str(error) == "Empty message string."
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.MARKUP_EMPTY

    def test_plain_message(self) -> None:
        """A plain string leaves the diagnostic empty."""
        error = PluralRuleDataError("no data")

        assert str(error) == "no data"
        assert error.diagnostic is None

    def test_rule_error_attributes(self) -> None:
        """Rule syntax errors keep position and rule text."""
        error = PluralRuleSyntaxError("bad", position=4, rule="n = a")
        assert (error.position, error.rule) == (4, "n = a")


# ============================================================================
# VALIDATION RESULTS
# ============================================================================


class TestValidationResult:
    """ValidationResult and its entries."""

    ERROR = ValidationError("VALIDATION_EXTRA_VARIABLE", "Extra {y}", "Hi {x}")
    WARNING = ValidationWarning("VALIDATION_UNTRANSLATED", "Same")

    def test_valid(self) -> None:
        """valid() has no findings."""
        result = ValidationResult.valid()

        assert result.is_valid
        assert (result.error_count, result.warning_count) == (0, 0)
        assert result.format() == "Validation passed: no errors or warnings"

    def test_warnings_do_not_invalidate(self) -> None:
        """Warnings alone keep the result valid."""
        assert ValidationResult.invalid(warnings=(self.WARNING,)).is_valid

    def test_merge(self) -> None:
        """merge concatenates findings in order."""
        merged = ValidationResult.invalid(errors=(self.ERROR,)).merge(
            ValidationResult.invalid(warnings=(self.WARNING,))
        )

        assert merged.errors == (self.ERROR,)
        assert merged.warnings == (self.WARNING,)
        assert not merged.is_valid

    def test_format(self) -> None:
        """Errors and warnings are listed under headers."""
        output = ValidationResult.invalid(errors=(self.ERROR,), warnings=(self.WARNING,)).format()

        assert output.splitlines() == [
            "Errors (1):",
            "  [VALIDATION_EXTRA_VARIABLE]: Extra {y} (content: 'Hi {x}')",
            "Warnings (1):",
            "  [VALIDATION_UNTRANSLATED]: Same",
        ]

    def test_format_without_warnings(self) -> None:
        """Warnings can be left out."""
        output = ValidationResult.invalid(warnings=(self.WARNING,)).format(include_warnings=False)
        assert output == "Validation passed: no errors or warnings"

    def test_error_format_location_and_sanitize(self) -> None:
        """Line and column are shown; sanitizing redacts content."""
        error = ValidationError("CODE", "msg", "secret text", line=3, column=7)

        assert error.format() == "[CODE] at line 3, column 7: msg (content: 'secret text')"
        assert error.format(sanitize=True, redact_content=True).endswith(
            "(content: '[content redacted]')"
        )

    def test_error_format_truncates(self) -> None:
        """Long content is truncated when sanitizing."""
        error = ValidationError("CODE", "msg", "a" * 150)
        assert "a" * 100 + "..." in error.format(sanitize=True)
