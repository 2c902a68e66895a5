"""CLDR plural rule parser.

Grammar (CLDR TR35 "Language Plural Rules", plus the legacy spelling used by
Babel's rule output):

    condition     ::= and_condition ("or" and_condition)*
    and_condition ::= relation ("and" relation)*
    relation      ::= expr ("=" | "!=") range_list
                    | expr "is" ["not"] value
                    | expr ["not"] ("in" | "within") range_list
    expr          ::= operand [("%" | "mod") value]
    range_list    ::= (range | value) ("," (range | value))*
    range         ::= value ".." value
    samples       ::= ("@integer" | "@decimal") ...    # discarded

``within`` differs from ``in`` only for fractional values, so both map to
the same relation.

Rule text comes from curated locale data; any grammar violation raises
:class:`~plurimark.diagnostics.PluralRuleSyntaxError` immediately.

Python 3.13+.
"""

import logging
from dataclasses import dataclass

from plurimark.diagnostics import Diagnostic, ErrorTemplate, PluralRuleSyntaxError
from plurimark.syntax.cursor import Cursor

from .ast import OPERANDS, AndChain, OrExpr, Range, Relation

__all__ = ["parse_rule"]

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_SYMBOLS = ("!=", "..", "=", "%", ",")
_SAMPLE_MARKER = "@"
_END = "end"


@dataclass(frozen=True, slots=True)
class _RuleToken:
    kind: str  # "word", "number", "symbol" or "end"
    text: str
    position: int


def _tokenize(rule: str) -> list[_RuleToken]:
    """Split rule text into tokens, stopping at the sample annotations."""
    tokens: list[_RuleToken] = []
    c = Cursor(rule, 0)
    while True:
        c = c.skip_spaces()
        if c.is_eof or c.current == _SAMPLE_MARKER:
            break
        start = c.pos
        ch = c.current
        if ch in _DIGITS:
            while not c.is_eof and c.current in _DIGITS:
                c = c.advance()
            tokens.append(_RuleToken("number", c.source[start : c.pos], start))
        elif ch.isascii() and ch.isalpha():
            while not c.is_eof and c.current.isascii() and c.current.isalpha():
                c = c.advance()
            tokens.append(_RuleToken("word", c.source[start : c.pos], start))
        else:
            symbol = next((s for s in _SYMBOLS if c.startswith(s)), None)
            if symbol is None:
                raise PluralRuleSyntaxError(
                    ErrorTemplate.rule_unexpected_token(ch, "operand, number or operator", start),
                    position=start,
                    rule=rule,
                )
            tokens.append(_RuleToken("symbol", symbol, start))
            c = c.advance(len(symbol))
    tokens.append(_RuleToken(_END, "", c.pos))
    return tokens


class _RuleParser:
    """Recursive-descent parser over the token list of one rule."""

    __slots__ = ("_index", "_rule", "_tokens")

    def __init__(self, rule: str) -> None:
        self._rule = rule
        self._tokens = _tokenize(rule)
        self._index = 0

    def _fail(self, diagnostic: Diagnostic, position: int) -> PluralRuleSyntaxError:
        return PluralRuleSyntaxError(diagnostic, position=position, rule=self._rule)

    def _peek(self) -> _RuleToken:
        return self._tokens[self._index]

    def _next(self) -> _RuleToken:
        token = self._tokens[self._index]
        if token.kind != _END:
            self._index += 1
        return token

    def _accept(self, kind: str, text: str) -> bool:
        token = self._peek()
        if token.kind == kind and token.text == text:
            self._index += 1
            return True
        return False

    def _unexpected(self, token: _RuleToken, expected: str) -> PluralRuleSyntaxError:
        return self._fail(
            ErrorTemplate.rule_unexpected_token(token.text, expected, token.position),
            token.position,
        )

    def parse(self) -> OrExpr | None:
        if self._peek().kind == _END:
            return None
        branches = [self._and_chain()]
        while self._accept("word", "or"):
            branches.append(self._and_chain())
        token = self._peek()
        if token.kind != _END:
            raise self._unexpected(token, "'and', 'or' or end of rule")
        return OrExpr(tuple(branches))

    def _and_chain(self) -> AndChain:
        relations = [self._relation()]
        while self._accept("word", "and"):
            relations.append(self._relation())
        return AndChain(tuple(relations))

    def _relation(self) -> Relation:
        token = self._next()
        if token.kind != "word":
            raise self._unexpected(token, "plural operand")
        if token.text not in OPERANDS:
            raise self._fail(
                ErrorTemplate.rule_unknown_operand(token.text, token.position), token.position
            )

        modulus: int | None = None
        if self._accept("symbol", "%") or self._accept("word", "mod"):
            modulus_token = self._peek()
            modulus = self._number()
            if modulus == 0:
                raise self._unexpected(modulus_token, "positive modulus")

        if self._accept("word", "is"):
            negated = self._accept("word", "not")
            ranges: tuple[Range, ...] = (Range(self._number()),)
        elif self._accept("symbol", "="):
            negated = False
            ranges = self._range_list()
        elif self._accept("symbol", "!="):
            negated = True
            ranges = self._range_list()
        else:
            negated = self._accept("word", "not")
            if not (self._accept("word", "in") or self._accept("word", "within")):
                raise self._unexpected(self._peek(), "'=', '!=', 'is', 'in' or 'within'")
            ranges = self._range_list()

        return Relation(token.text, ranges, modulus=modulus, negated=negated)

    def _range_list(self) -> tuple[Range, ...]:
        ranges = [self._range()]
        while self._accept("symbol", ","):
            ranges.append(self._range())
        return tuple(ranges)

    def _range(self) -> Range:
        position = self._peek().position
        low = self._number()
        if not self._accept("symbol", ".."):
            return Range(low)
        high = self._number()
        if high < low:
            raise self._fail(ErrorTemplate.rule_invalid_range(low, high, position), position)
        return Range(low, high)

    def _number(self) -> int:
        token = self._next()
        if token.kind != "number":
            raise self._fail(
                ErrorTemplate.rule_expected_number(token.text, token.position), token.position
            )
        return int(token.text)


def parse_rule(rule: str) -> OrExpr | None:
    """Parse CLDR plural rule condition text.

    Args:
        rule: Condition text, optionally followed by ``@integer``/``@decimal``
            samples, e.g. ``"i = 1 and v = 0 @integer 1"``

    Returns:
        Rule AST, or None for an empty condition (unconditional)

    Raises:
        PluralRuleSyntaxError: If the text violates the rule grammar

    Example:
        >>> str(parse_rule("n % 10 = 2..4 and n % 100 != 12..14"))
        'n % 10 = 2..4 and n % 100 != 12..14'
        >>> parse_rule("  @integer 0~15") is None
        True
    """
    expr = _RuleParser(rule).parse()
    logger.debug("Parsed plural rule %r -> %s", rule, expr)
    return expr
