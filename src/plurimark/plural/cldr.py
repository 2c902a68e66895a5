"""CLDR plural data bridge.

Feeds locale plural rule text into the rule compiler:

- :func:`locale_rule_texts` reads a locale's rules from Babel's CLDR data
- :func:`rule_texts_from_cldr_json` reads the CLDR supplemental JSON table
- :func:`compile_plural_rules` parses and simplifies one locale's rules into
  an immutable :class:`CompiledPluralRules`

Categories that are dead for integer counts (decimal-only categories) are
dropped during compilation; ``other`` is always present and never tested.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from babel.core import UnknownLocaleError

from plurimark.constants import DEFAULT_CATEGORY_PREFIX, DEFAULT_INDENT
from plurimark.diagnostics import ErrorTemplate, PluralRuleDataError
from plurimark.enums import PluralCategory
from plurimark.locale_utils import get_babel_locale, normalize_locale

from .ast import OrExpr
from .emitter import emit_category_dispatch, emit_condition
from .evaluator import select_category
from .parser import parse_rule
from .simplifier import INTEGER_DOMAIN, IntegerDomain, simplify

__all__ = [
    "CompiledPluralRules",
    "clear_plural_rules_cache",
    "compile_plural_rules",
    "locale_rule_texts",
    "plural_categories",
    "plural_rules_for_locale",
    "rule_texts_from_cldr_json",
    "select_plural_category",
]

logger = logging.getLogger(__name__)

_CLDR_RULE_KEY_PREFIX = "pluralRule-count-"


@dataclass(frozen=True, slots=True)
class CompiledPluralRules:
    """Simplified plural rules of one locale.

    Attributes:
        rules: (category, rule) pairs in CLDR order, ``other`` excluded.
            A rule of None applies unconditionally.
    """

    rules: tuple[tuple[PluralCategory, OrExpr | None], ...]

    @property
    def categories(self) -> tuple[PluralCategory, ...]:
        """Live categories in CLDR order, ending with OTHER."""
        return (*(category for category, _ in self.rules), PluralCategory.OTHER)

    def as_mapping(self) -> dict[PluralCategory, OrExpr | None]:
        """Rules keyed by category."""
        return dict(self.rules)

    def select(self, n: int) -> PluralCategory:
        """Category for the count n."""
        return select_category(self.as_mapping(), n)

    def conditions(self) -> dict[PluralCategory, str | None]:
        """Emitted condition text per category (None: unconditional)."""
        return {category: emit_condition(rule) for category, rule in self.rules}

    def dispatch(
        self,
        indent: str = DEFAULT_INDENT,
        *,
        category_prefix: str = DEFAULT_CATEGORY_PREFIX,
    ) -> str:
        """Emitted category-selection chain for these rules."""
        return emit_category_dispatch(
            self.as_mapping(), indent, category_prefix=category_prefix
        )


def _category(name: str) -> PluralCategory:
    try:
        return PluralCategory(name)
    except ValueError:
        raise PluralRuleDataError(ErrorTemplate.rule_unknown_category(name)) from None


def compile_plural_rules(
    rule_texts: Mapping[str, str], *, domain: IntegerDomain = INTEGER_DOMAIN
) -> CompiledPluralRules:
    """Parse and simplify one locale's plural rules.

    Args:
        rule_texts: Rule text keyed by category name; ``other`` may be absent
        domain: Operand substitution used for simplification

    Returns:
        CompiledPluralRules with dead categories removed

    Raises:
        PluralRuleDataError: If a category name is unknown
        PluralRuleSyntaxError: If rule text is malformed

    Example:
        >>> rules = compile_plural_rules({"one": "i = 1 and v = 0"})
        >>> rules.conditions()
        {<PluralCategory.ONE: 'one'>: 'n == 1'}
    """
    compiled: dict[PluralCategory, OrExpr | None] = {}
    for name, text in rule_texts.items():
        category = _category(name)
        if category is PluralCategory.OTHER:
            continue
        raw = parse_rule(text)
        simplified = simplify(raw, domain)
        if raw is not None and simplified is None:
            logger.debug("Dropping plural category %s: dead for integer counts", category)
            continue
        compiled[category] = simplified
    ordered = tuple(sorted(compiled.items(), key=lambda item: item[0].ordinal))
    return CompiledPluralRules(ordered)


def locale_rule_texts(locale: str) -> dict[str, str]:
    """Plural rule text of a locale from Babel's CLDR data.

    Args:
        locale: Locale code (BCP-47 or POSIX)

    Returns:
        Rule text keyed by category name, ``other`` omitted

    Raises:
        PluralRuleDataError: If Babel has no data for the locale
    """
    try:
        babel_locale = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError) as error:
        raise PluralRuleDataError(
            ErrorTemplate.rule_unknown_locale(locale, str(error))
        ) from error
    return dict(babel_locale.plural_form.rules)


def rule_texts_from_cldr_json(data: Mapping[str, Any]) -> dict[str, dict[str, str]]:
    """Read the CLDR supplemental ``plurals.json`` cardinal table.

    Args:
        data: Parsed JSON: ``{"supplemental": {"plurals-type-cardinal":
            {locale: {"pluralRule-count-<category>": text}}}}``

    Returns:
        Rule text keyed by locale, then by category name

    Raises:
        PluralRuleDataError: If the cardinal table is missing
    """
    try:
        table = data["supplemental"]["plurals-type-cardinal"]
    except (KeyError, TypeError) as error:
        msg = "CLDR plural data has no supplemental/plurals-type-cardinal table"
        raise PluralRuleDataError(msg) from error

    result: dict[str, dict[str, str]] = {}
    for locale, entries in table.items():
        result[locale] = {
            key.removeprefix(_CLDR_RULE_KEY_PREFIX): text
            for key, text in entries.items()
            if key.startswith(_CLDR_RULE_KEY_PREFIX)
        }
    return result


@functools.lru_cache(maxsize=128)
def _compiled_for_locale(locale: str) -> CompiledPluralRules:
    return compile_plural_rules(locale_rule_texts(locale))


def plural_rules_for_locale(locale: str) -> CompiledPluralRules:
    """Compiled plural rules of a locale, cached per normalized locale code.

    Raises:
        PluralRuleDataError: If Babel has no data for the locale
    """
    return _compiled_for_locale(normalize_locale(locale))


def clear_plural_rules_cache() -> None:
    """Discard cached compiled rules."""
    _compiled_for_locale.cache_clear()


def plural_categories(locale: str) -> tuple[PluralCategory, ...]:
    """Categories a locale uses for integer counts, in CLDR order.

    Example:
        >>> plural_categories("ru")
        (<PluralCategory.ONE: 'one'>, <PluralCategory.FEW: 'few'>, \
<PluralCategory.MANY: 'many'>, <PluralCategory.OTHER: 'other'>)
    """
    return plural_rules_for_locale(locale).categories


def select_plural_category(n: int, locale: str) -> PluralCategory:
    """Select the CLDR plural category of a count.

    Falls back to OTHER for every count when the locale is unknown, which is
    the CLDR root behaviour.

    Example:
        >>> select_plural_category(22, "pl")
        <PluralCategory.FEW: 'few'>
    """
    try:
        rules = plural_rules_for_locale(locale)
    except PluralRuleDataError:
        logger.warning("No plural rules for locale %r; using 'other' for every count", locale)
        return PluralCategory.OTHER
    return rules.select(n)
