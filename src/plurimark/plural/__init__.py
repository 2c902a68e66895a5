"""Plural rule compiler.

Parses CLDR plural rule text, simplifies it for integer counts, evaluates it,
and emits condition and category-dispatch source text.

Python 3.13+.
"""

from .ast import OPERANDS, AndChain, OrExpr, Range, Relation
from .cldr import (
    CompiledPluralRules,
    clear_plural_rules_cache,
    compile_plural_rules,
    locale_rule_texts,
    plural_categories,
    plural_rules_for_locale,
    rule_texts_from_cldr_json,
    select_plural_category,
)
from .emitter import TRUE_CONDITION, emit_category_dispatch, emit_condition
from .evaluator import evaluate, integer_operands, select_category
from .parser import parse_rule
from .simplifier import INTEGER_DOMAIN, IntegerDomain, simplify

__all__ = [
    "INTEGER_DOMAIN",
    "OPERANDS",
    "TRUE_CONDITION",
    "AndChain",
    "CompiledPluralRules",
    "IntegerDomain",
    "OrExpr",
    "Range",
    "Relation",
    "clear_plural_rules_cache",
    "compile_plural_rules",
    "emit_category_dispatch",
    "emit_condition",
    "evaluate",
    "integer_operands",
    "locale_rule_texts",
    "parse_rule",
    "plural_categories",
    "plural_rules_for_locale",
    "rule_texts_from_cldr_json",
    "select_category",
    "select_plural_category",
    "simplify",
]
