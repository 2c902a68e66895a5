"""Tests for the CLDR plural rule parser and rule AST.

Covers the TR35 syntax, the legacy spelling emitted by Babel, sample
stripping, and error diagnostics.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from plurimark.diagnostics import DiagnosticCode, PluralRuleSyntaxError
from plurimark.plural import AndChain, OrExpr, Range, Relation, parse_rule
from tests.strategies import rules


def _only_relation(expr: OrExpr | None) -> Relation:
    assert expr is not None
    (branch,) = expr.branches
    (relation,) = branch.relations
    return relation


# ============================================================================
# SYNTAX
# ============================================================================


class TestParseRule:
    """TR35 rule syntax."""

    def test_simple_equality(self) -> None:
        """n = 1 is one relation with a single value."""
        relation = _only_relation(parse_rule("n = 1"))

        assert relation.operand == "n"
        assert relation.modulus is None
        assert not relation.negated
        assert relation.ranges == (Range(1),)
        assert relation.ranges[0].is_single

    def test_modulus_and_range(self) -> None:
        """n % 100 = 3..10 carries modulus and an inclusive range."""
        relation = _only_relation(parse_rule("n % 100 = 3..10"))

        assert relation.modulus == 100
        assert relation.ranges == (Range(3, 10),)
        assert not relation.ranges[0].is_single

    def test_and_chain(self) -> None:
        """and joins relations into one chain."""
        expr = parse_rule("n % 10 = 2..4 and n % 100 != 12..14")

        assert expr is not None
        (branch,) = expr.branches
        first, second = branch.relations
        assert (first.modulus, first.ranges) == (10, (Range(2, 4),))
        assert second.negated
        assert (second.modulus, second.ranges) == (100, (Range(12, 14),))

    def test_value_list(self) -> None:
        """Comma-separated values and ranges form one relation."""
        relation = _only_relation(parse_rule("i = 0,1,3..5"))

        assert relation.operand == "i"
        assert relation.ranges == (Range(0), Range(1), Range(3, 5))

    def test_or_branches(self) -> None:
        """or separates AND-chains."""
        expr = parse_rule("v = 0 and i % 10 = 1 or v != 0 and f % 10 = 1")

        assert expr is not None
        assert len(expr.branches) == 2
        assert [r.operand for r in expr.branches[0].relations] == ["v", "i"]
        assert [r.operand for r in expr.branches[1].relations] == ["v", "f"]
        assert expr.branches[1].relations[0].negated

    def test_samples_discarded(self) -> None:
        """@integer and @decimal samples are ignored."""
        assert parse_rule("i = 1 and v = 0 @integer 1 @decimal 1.0") == parse_rule(
            "i = 1 and v = 0"
        )

    @pytest.mark.parametrize("text", ["", "   ", "@integer 0~15, 100"])
    def test_empty_condition(self, text: str) -> None:
        """An empty condition is unconditional (None)."""
        assert parse_rule(text) is None

    def test_all_operands(self) -> None:
        """Every CLDR operand is accepted."""
        for operand in "nivwftec":
            assert _only_relation(parse_rule(f"{operand} = 0")).operand == operand

    def test_whitespace_insensitive(self) -> None:
        """Tokens need no surrounding spaces."""
        assert parse_rule("n%10=1,2..3") == parse_rule("n % 10 = 1,2..3")


class TestLegacySyntax:
    """Spellings Babel uses when rendering rules."""

    @pytest.mark.parametrize(
        ("legacy", "modern"),
        [
            ("n is 1", "n = 1"),
            ("n is not 1", "n != 1"),
            ("n in 2..4", "n = 2..4"),
            ("n not in 2..4", "n != 2..4"),
            ("n within 0..2", "n = 0..2"),
            ("n not within 0..2", "n != 0..2"),
            ("n mod 10 in 2..4", "n % 10 = 2..4"),
            (
                "n mod 10 in 2..4 and n mod 100 not in 12..14",
                "n % 10 = 2..4 and n % 100 != 12..14",
            ),
        ],
    )
    def test_equivalent(self, legacy: str, modern: str) -> None:
        """Legacy relations parse to the same AST."""
        assert parse_rule(legacy) == parse_rule(modern)


# ============================================================================
# ERRORS
# ============================================================================


class TestRuleErrors:
    """Grammar violations raise PluralRuleSyntaxError."""

    @staticmethod
    def _error_for(text: str) -> PluralRuleSyntaxError:
        with pytest.raises(PluralRuleSyntaxError) as info:
            parse_rule(text)
        return info.value

    @pytest.mark.parametrize(
        ("text", "code", "position"),
        [
            ("x = 1", DiagnosticCode.RULE_UNKNOWN_OPERAND, 0),
            ("n = ", DiagnosticCode.RULE_EXPECTED_NUMBER, 4),
            ("n = a", DiagnosticCode.RULE_EXPECTED_NUMBER, 4),
            ("n 1", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 2),
            ("n = 5..2", DiagnosticCode.RULE_INVALID_RANGE, 4),
            ("n % 0 = 1", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 4),
            ("n = 1 n", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 6),
            ("n & 1", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 2),
            ("= 1", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 0),
            ("n = 1 or", DiagnosticCode.RULE_UNEXPECTED_TOKEN, 8),
        ],
    )
    def test_error(self, text: str, code: DiagnosticCode, position: int) -> None:
        """Each violation reports its code and offset."""
        error = self._error_for(text)

        assert error.diagnostic is not None
        assert error.diagnostic.code == code
        assert error.position == position
        assert error.rule == text

    def test_message_names_end_of_rule(self) -> None:
        """Running out of input is described as end of rule."""
        assert "end of rule" in str(self._error_for("n = 1 or"))


# ============================================================================
# AST
# ============================================================================


class TestRuleAst:
    """AST validation and rendering."""

    def test_str_is_canonical(self) -> None:
        """str() renders CLDR syntax."""
        text = "n % 10 = 1 and n % 100 != 11 or n = 0,2..4"
        assert str(parse_rule(text)) == text

    def test_range_contains(self) -> None:
        """Ranges are inclusive."""
        assert Range(3, 5).contains(3)
        assert Range(3, 5).contains(5)
        assert not Range(3, 5).contains(6)
        assert Range(7).contains(7)
        assert Range(7).upper == 7

    @pytest.mark.parametrize(
        "build",
        [
            lambda: Range(-1),
            lambda: Range(5, 2),
            lambda: Relation("x", (Range(1),)),
            lambda: Relation("n", ()),
            lambda: Relation("n", (Range(1),), modulus=0),
            lambda: OrExpr(()),
        ],
    )
    def test_invalid_nodes_rejected(self, build: object) -> None:
        """Nodes validate their invariants on construction."""
        with pytest.raises(ValueError):
            build()  # type: ignore[operator]

    def test_empty_chain_is_always_true(self) -> None:
        """An AND-chain without relations always holds."""
        assert AndChain(()).is_always_true
        assert OrExpr((AndChain(()),)).is_always_true

    @given(rules())
    def test_str_parses_back(self, expr: OrExpr) -> None:
        """Rendering a rule and parsing it again is lossless."""
        assert parse_rule(str(expr)) == expr

    @pytest.mark.fuzz
    @settings(max_examples=5000)
    @given(st.text(alphabet="nivwftec0123456789 %=!.,andormodisnotwithin@~x&", max_size=40))
    def test_arbitrary_text_fails_cleanly(self, text: str) -> None:
        """Any input parses or raises PluralRuleSyntaxError, nothing else."""
        try:
            parse_rule(text)
        except PluralRuleSyntaxError as error:
            assert 0 <= error.position <= len(text)
