"""Translation validation.

Compares a translated structured message with its source message. Both are
parsed leniently; problems are reported as ValidationError/ValidationWarning
entries rather than raised.

Checks:
    1. Every source variable appears in the translation
    2. The translation introduces no variable absent from the source
    3. Each translated plural has a branch for every category the target
       locale uses for integer counts (``=0`` satisfies ``zero``)
    4. The translation uses the same placeholder indices as the source,
       each closed as often as it is opened

Python 3.13+.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from plurimark.diagnostics import (
    DiagnosticCode,
    PluralRuleDataError,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from plurimark.enums import PluralCategory
from plurimark.message import (
    Node,
    PluralNode,
    TextNode,
    collect_placeholder_indices,
    collect_variables,
    parse_message,
)
from plurimark.plural import plural_categories

__all__ = ["CatalogValidationReport", "validate_catalog", "validate_translation"]

logger = logging.getLogger(__name__)

_CATEGORY_NAMES = frozenset(category.value for category in PluralCategory)
_EXACT_PREFIX = "="


def _error(code: DiagnosticCode, message: str, content: str) -> ValidationError:
    return ValidationError(code=code.name, message=message, content=content)


def _check_variables(
    source_nodes: tuple[Node, ...], translated_nodes: tuple[Node, ...], source: str
) -> list[ValidationError]:
    expected = collect_variables(source_nodes)
    found = collect_variables(translated_nodes)
    errors = [
        _error(
            DiagnosticCode.VALIDATION_MISSING_VARIABLE,
            f"Missing variable {{{name}}} in translation",
            source,
        )
        for name in sorted(expected - found)
    ]
    errors.extend(
        _error(
            DiagnosticCode.VALIDATION_EXTRA_VARIABLE,
            f"Extra variable {{{name}}} in translation",
            source,
        )
        for name in sorted(found - expected)
    )
    return errors


def _check_plural_forms(
    nodes: tuple[Node, ...],
    required: tuple[PluralCategory, ...],
    locale: str,
    source: str,
    errors: list[ValidationError],
    warnings: list[ValidationWarning],
) -> None:
    for node in nodes:
        if not isinstance(node, PluralNode):
            continue
        present = {branch.category for branch in node.branches}
        for category in required:
            if category.value in present:
                continue
            if category is PluralCategory.ZERO and f"{_EXACT_PREFIX}0" in present:
                continue
            errors.append(
                _error(
                    DiagnosticCode.VALIDATION_MISSING_PLURAL_FORM,
                    f"Missing plural form '{category.value}' for locale '{locale}' "
                    f"in {{{node.variable}, plural}}",
                    source,
                )
            )
        for name in sorted(present):
            if name not in _CATEGORY_NAMES and not name.startswith(_EXACT_PREFIX):
                warnings.append(
                    ValidationWarning(
                        code=DiagnosticCode.VALIDATION_UNKNOWN_PLURAL_CATEGORY.name,
                        message=f"Unknown plural category '{name}' is never selected",
                        context=source,
                    )
                )
        for branch in node.branches:
            _check_plural_forms(branch.content, required, locale, source, errors, warnings)


def _has_words(nodes: tuple[Node, ...]) -> bool:
    """True if any literal text contains a letter."""
    for node in nodes:
        match node:
            case TextNode(value=value) if any(ch.isalpha() for ch in value):
                return True
            case PluralNode(branches=branches) if any(_has_words(b.content) for b in branches):
                return True
            case _:
                pass
    return False


def _check_placeholders(source: str, translation: str) -> list[ValidationError]:
    expected = collect_placeholder_indices(source)
    found = collect_placeholder_indices(translation)
    if expected.indices == found.indices and found.is_balanced:
        return []
    missing = sorted(expected.indices - found.indices)
    extra = sorted(found.indices - expected.indices)
    details = []
    if missing:
        details.append(f"missing {missing}")
    if extra:
        details.append(f"unexpected {extra}")
    if not found.is_balanced:
        details.append("unbalanced markers")
    return [
        _error(
            DiagnosticCode.VALIDATION_PLACEHOLDER_MISMATCH,
            f"Placeholder mismatch in translation: {', '.join(details)}",
            source,
        )
    ]


def validate_translation(
    source: str, translation: str, locale: str | None = None
) -> ValidationResult:
    """Validate one translation against its source message.

    Args:
        source: Source structured message
        translation: Translated structured message
        locale: Target locale; enables the plural-form check

    Returns:
        ValidationResult (never raises)

    Example:
        >>> result = validate_translation("Hi {name}", "Salut {nom}")
        >>> [error.code for error in result.errors]
        ['VALIDATION_MISSING_VARIABLE', 'VALIDATION_EXTRA_VARIABLE']
    """
    source_nodes = parse_message(source)
    translated_nodes = parse_message(translation)

    errors = _check_variables(source_nodes, translated_nodes, source)
    warnings: list[ValidationWarning] = []

    if locale is not None:
        try:
            required = plural_categories(locale)
        except PluralRuleDataError as error:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.RULE_UNKNOWN_LOCALE.name,
                    message=f"Plural forms not checked: {error}",
                    context=locale,
                )
            )
        else:
            _check_plural_forms(translated_nodes, required, locale, source, errors, warnings)

    errors.extend(_check_placeholders(source, translation))

    if translation == source and _has_words(source_nodes):
        warnings.append(
            ValidationWarning(
                code=DiagnosticCode.VALIDATION_UNTRANSLATED.name,
                message="Translation is identical to the source",
                context=source,
            )
        )

    if errors:
        logger.debug("Translation of %r has %d errors", source, len(errors))
    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))


@dataclass(frozen=True, slots=True)
class CatalogValidationReport:
    """Outcome of validating a set of (source, translation) pairs.

    Attributes:
        total: Number of entries examined
        missing: Number of entries without a translation
        results: (source, result) per entry, in input order
    """

    total: int
    missing: int
    results: tuple[tuple[str, ValidationResult], ...]

    @property
    def errors(self) -> tuple[ValidationError, ...]:
        """All errors across entries, in input order."""
        return tuple(error for _, result in self.results for error in result.errors)

    @property
    def warnings(self) -> tuple[ValidationWarning, ...]:
        """All warnings across entries, in input order."""
        return tuple(w for _, result in self.results for w in result.warnings)

    @property
    def is_valid(self) -> bool:
        """True if no entry has errors."""
        return all(result.is_valid for _, result in self.results)


def validate_catalog(
    entries: Iterable[tuple[str, str]],
    locale: str | None = None,
    *,
    strict: bool = False,
) -> CatalogValidationReport:
    """Validate every (source, translation) pair of a catalog.

    Empty translations are counted as missing and skipped; in strict mode
    each one is also reported as an error.

    Args:
        entries: (source, translation) pairs
        locale: Target locale for plural-form checks
        strict: Report missing translations as errors

    Returns:
        CatalogValidationReport
    """
    total = 0
    missing = 0
    results: list[tuple[str, ValidationResult]] = []
    for source, translation in entries:
        total += 1
        if not translation:
            missing += 1
            if strict:
                error = _error(
                    DiagnosticCode.VALIDATION_MISSING_TRANSLATION,
                    "Missing translation",
                    source,
                )
                results.append((source, ValidationResult.invalid(errors=(error,))))
            continue
        results.append((source, validate_translation(source, translation, locale)))

    logger.debug("Validated %d catalog entries (%d missing)", total, missing)
    return CatalogValidationReport(total=total, missing=missing, results=tuple(results))
