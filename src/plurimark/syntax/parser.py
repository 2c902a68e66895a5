"""Parser for the compact translation authoring markup.

Markup grammar (informal):

    message      ::= (text | "$$" | block)+
    block        ::= "$" (variable | plural) "$"
    variable     ::= name
    plural       ::= form ("|" form)+          # 2 forms, or 3 with #name=0#
    form         ::= (text | "##" | "||" | "$$" | "$" name "$" | ref)*
    ref          ::= "#" ["~"] name ["=0"] "#"

The first ``#...#`` reference of a plural block declares its selector.
``~`` hides the count at that reference, ``=0`` adds an explicit zero form.

Architecture:
    Module-level sub-parsers take an immutable
    :class:`~plurimark.syntax.cursor.Cursor` and return positions or
    :class:`~plurimark.syntax.cursor.ParseResult` values. The
    :class:`MarkupParser` class owns configuration (size limit) and raises
    :class:`~plurimark.diagnostics.MarkupSyntaxError` on malformed input.
    There is no recovery: authoring errors must block compilation.
"""

import logging
from dataclasses import dataclass, replace

from plurimark.constants import (
    BLOCK_DELIMITER,
    FORM_SEPARATOR,
    HIDDEN_MARKER,
    MAX_SOURCE_SIZE,
    SELECTOR_MARKER,
    ZERO_FORM_CATEGORY,
    ZERO_FORM_SUFFIX,
)
from plurimark.diagnostics import ErrorTemplate, MarkupSyntaxError, SourceSpan
from plurimark.enums import PluralCategory
from plurimark.syntax.cursor import Cursor, ParseResult
from plurimark.syntax.tokens import (
    PluralBlockToken,
    PluralForm,
    SelectorRefToken,
    TextToken,
    Token,
    VariableToken,
)

__all__ = ["MarkupParser", "parse_markup"]

logger = logging.getLogger(__name__)


def is_identifier_char(ch: str) -> bool:
    """Check if character may appear in a nested variable name."""
    return ch.isalnum() or ch == "_"


def _span_at(source: str, position: int, length: int = 1) -> SourceSpan:
    return Cursor(source, position).span(length)


def _nested_variable_end(cursor: Cursor) -> int | None:
    """Position after a nested ``$identifier$`` starting at cursor, if any.

    Only called with cursor on a ``$`` inside a plural block. Returns None when
    the ``$`` is not followed by an identifier and another ``$``, which makes it
    the closing delimiter of the block.
    """
    c = cursor.advance()
    start = c.pos
    while not c.is_eof and is_identifier_char(c.current):
        c = c.advance()
    if c.pos == start or c.is_eof or c.current != BLOCK_DELIMITER:
        return None
    return c.pos + 1


def _block_has_separator(cursor: Cursor) -> bool:
    """Pre-scan a block body for an unescaped form separator.

    Skips ``$$`` and ``||`` escapes and nested ``$name$`` references. Stops at
    the first ``$`` that can only be the block's closing delimiter.
    """
    c = cursor
    while not c.is_eof:
        ch = c.current
        if ch == BLOCK_DELIMITER:
            if c.peek(1) == BLOCK_DELIMITER:
                c = c.advance(2)
                continue
            nested_end = _nested_variable_end(c)
            if nested_end is None:
                return False
            c = Cursor(c.source, nested_end)
        elif ch == FORM_SEPARATOR:
            if c.peek(1) != FORM_SEPARATOR:
                return True
            c = c.advance(2)
        else:
            c = c.advance()
    return False


def _find_block_end(cursor: Cursor, *, is_plural: bool) -> int | None:
    """Position of the closing ``$`` of the block body starting at cursor.

    A simple variable closes at its first ``$``. A plural block skips ``$$``
    escapes and nested variable references.
    """
    c = cursor
    while not c.is_eof:
        if c.current == BLOCK_DELIMITER:
            if not is_plural:
                return c.pos
            if c.peek(1) == BLOCK_DELIMITER:
                c = c.advance(2)
                continue
            nested_end = _nested_variable_end(c)
            if nested_end is None:
                return c.pos
            c = Cursor(c.source, nested_end)
        else:
            c = c.advance()
    return None


def _split_forms(body: str, offset: int) -> list[tuple[str, int]]:
    """Split a plural body on unescaped ``|``.

    Returns (form text, absolute offset) pairs. ``||`` stays in the form text
    and is unescaped while the form is parsed.
    """
    forms: list[tuple[str, int]] = []
    c = Cursor(body, 0)
    form_start = 0
    while not c.is_eof:
        if c.current == FORM_SEPARATOR:
            if c.peek(1) == FORM_SEPARATOR:
                c = c.advance(2)
                continue
            forms.append((body[form_start : c.pos], offset + form_start))
            form_start = c.pos + 1
        c = c.advance()
    forms.append((body[form_start:], offset + form_start))
    return forms


@dataclass(frozen=True, slots=True)
class _SelectorRef:
    """Decoded ``#...#`` reference; end is the offset after its closing ``#``."""

    name: str
    hidden: bool
    zero_form: bool
    end: int


def _read_reference(cursor: Cursor) -> _SelectorRef | None:
    """Decode a reference with cursor on its opening ``#``.

    Returns None if the reference is never closed.
    """
    close = cursor.source.find(SELECTOR_MARKER, cursor.pos + 1)
    if close < 0:
        return None
    raw = cursor.source[cursor.pos + 1 : close]
    hidden = raw.startswith(HIDDEN_MARKER)
    if hidden:
        raw = raw[len(HIDDEN_MARKER) :]
    zero_form = raw.endswith(ZERO_FORM_SUFFIX)
    if zero_form:
        raw = raw[: -len(ZERO_FORM_SUFFIX)]
    return _SelectorRef(raw, hidden=hidden, zero_form=zero_form, end=close + 1)


class MarkupParser:
    """Authoring markup parser using the immutable cursor pattern.

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 1 MiB characters, far beyond any translatable string

    Attributes:
        max_source_size: Maximum allowed source size in characters
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with an optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 1 MiB).
                             Set to 0 to disable the limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str, *, source_location: str | None = None) -> tuple[Token, ...]:
        """Parse authoring markup into tokens.

        Args:
            source: Markup text, e.g. ``"You have $#n# book|#n# books$"``
            source_location: Where the text was found (e.g. ``"app.py:12"``),
                attached to the diagnostic of any error raised

        Returns:
            Tuple of tokens in document order. Adjacent literal text is merged
            into a single TextToken.

        Raises:
            MarkupSyntaxError: On empty input, an unmatched ``$`` or ``#``,
                a plural block without selector, with conflicting selectors,
                or with the wrong number of forms

        Example:
            >>> tokens = MarkupParser().parse("Hello, $name$!")
            >>> tokens[1]
            VariableToken(name='name')
        """
        try:
            return self._parse(source)
        except MarkupSyntaxError as error:
            if source_location is not None and error.diagnostic is not None:
                located = replace(error.diagnostic, source_location=source_location)
                raise MarkupSyntaxError(
                    located, position=error.position, source=error.source
                ) from error
            raise

    def _parse(self, source: str) -> tuple[Token, ...]:
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            raise MarkupSyntaxError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size),
                source=source,
            )
        if not source:
            raise MarkupSyntaxError(ErrorTemplate.markup_empty(), source=source)

        tokens: list[Token] = []
        text: list[str] = []
        cursor = Cursor(source, 0)

        while not cursor.is_eof:
            if cursor.current != BLOCK_DELIMITER:
                text.append(cursor.current)
                cursor = cursor.advance()
                continue
            if cursor.peek(1) == BLOCK_DELIMITER:
                text.append(BLOCK_DELIMITER)
                cursor = cursor.advance(2)
                continue
            if text:
                tokens.append(TextToken("".join(text)))
                text.clear()
            result = self._parse_block(cursor)
            tokens.append(result.value)
            cursor = result.cursor

        if text:
            tokens.append(TextToken("".join(text)))

        logger.debug("Parsed markup into %d tokens", len(tokens))
        return tuple(tokens)

    def _parse_block(self, cursor: Cursor) -> ParseResult[Token]:
        """Parse a ``$...$`` block with cursor on the opening delimiter."""
        source = cursor.source
        open_pos = cursor.pos
        body_start = cursor.advance()
        is_plural = _block_has_separator(body_start)

        close = _find_block_end(body_start, is_plural=is_plural)
        if close is None:
            raise MarkupSyntaxError(
                ErrorTemplate.unmatched_delimiter(open_pos, _span_at(source, open_pos)),
                position=open_pos,
                source=source,
            )

        after = Cursor(source, close + 1)
        body = body_start.slice_to(close)
        if not is_plural:
            return ParseResult(VariableToken(body), after)
        block = _parse_plural_block(source, open_pos, body, body_start.pos)
        return ParseResult(block, after)


def _find_declaration(source: str, open_pos: int, body: str, offset: int) -> _SelectorRef:
    """Locate the first selector reference anywhere in the plural body."""
    c = Cursor(body, 0)
    while not c.is_eof:
        if c.current == SELECTOR_MARKER:
            if c.peek(1) == SELECTOR_MARKER:
                c = c.advance(2)
                continue
            ref = _read_reference(c)
            if ref is None:
                position = offset + c.pos
                raise MarkupSyntaxError(
                    ErrorTemplate.unmatched_selector(position, _span_at(source, position)),
                    position=position,
                    source=source,
                )
            if not ref.name:
                break
            return ref
        c = c.advance()
    raise MarkupSyntaxError(
        ErrorTemplate.no_selector(_span_at(source, open_pos, len(body) + 2)),
        position=open_pos,
        source=source,
    )


def _parse_plural_block(
    source: str, open_pos: int, body: str, offset: int
) -> PluralBlockToken:
    declaration = _find_declaration(source, open_pos, body, offset)
    forms = _split_forms(body, offset)

    if declaration.zero_form:
        categories = (ZERO_FORM_CATEGORY, PluralCategory.ONE.value, PluralCategory.OTHER.value)
    else:
        categories = (PluralCategory.ONE.value, PluralCategory.OTHER.value)

    if len(forms) != len(categories):
        raise MarkupSyntaxError(
            ErrorTemplate.wrong_form_count(
                has_zero_form=declaration.zero_form,
                expected=len(categories),
                actual=len(forms),
                span=_span_at(source, open_pos, len(body) + 2),
            ),
            position=open_pos,
            source=source,
        )

    parsed = tuple(
        PluralForm(
            category,
            _parse_form(
                source,
                form_text,
                form_offset,
                selector=declaration.name,
                is_first=index == 0,
                zero_form=declaration.zero_form,
            ),
        )
        for index, (category, (form_text, form_offset)) in enumerate(
            zip(categories, forms, strict=True)
        )
    )
    return PluralBlockToken(
        selector=declaration.name,
        selector_rendered=not declaration.hidden,
        has_zero_form=declaration.zero_form,
        forms=parsed,
    )


def _parse_form(  # noqa: PLR0913
    source: str,
    form_text: str,
    offset: int,
    *,
    selector: str,
    is_first: bool,
    zero_form: bool,
) -> tuple[Token, ...]:
    """Parse the content of one plural form.

    Args:
        source: Whole markup text (for error positions)
        form_text: Raw form content with escapes still in place
        offset: Absolute offset of form_text in source
        selector: Declared selector name every reference must match
        is_first: True for the first form, which may carry the declaration
        zero_form: True when the block declares an explicit zero form
    """
    tokens: list[Token] = []
    text: list[str] = []
    seen_reference = False
    c = Cursor(form_text, 0)

    def flush() -> None:
        if text:
            tokens.append(TextToken("".join(text)))
            text.clear()

    while not c.is_eof:
        ch = c.current
        doubled = c.peek(1) == ch

        if ch == SELECTOR_MARKER:
            if doubled:
                text.append(SELECTOR_MARKER)
                c = c.advance(2)
                continue
            ref = _read_reference(c)
            position = offset + c.pos
            if ref is None:
                raise MarkupSyntaxError(
                    ErrorTemplate.unmatched_selector(position, _span_at(source, position)),
                    position=position,
                    source=source,
                )
            if ref.name != selector:
                raise MarkupSyntaxError(
                    ErrorTemplate.selector_mismatch(
                        selector, ref.name, _span_at(source, position, ref.end - c.pos)
                    ),
                    position=position,
                    source=source,
                )
            declares_zero = is_first and zero_form and not seen_reference and ref.zero_form
            seen_reference = True
            if not ref.hidden and not declares_zero:
                flush()
                tokens.append(SelectorRefToken(ref.name))
            c = Cursor(form_text, ref.end)

        elif ch == BLOCK_DELIMITER:
            if doubled:
                text.append(BLOCK_DELIMITER)
                c = c.advance(2)
                continue
            close = form_text.find(BLOCK_DELIMITER, c.pos + 1)
            if close < 0:
                position = offset + c.pos
                raise MarkupSyntaxError(
                    ErrorTemplate.unmatched_delimiter(position, _span_at(source, position)),
                    position=position,
                    source=source,
                )
            flush()
            tokens.append(VariableToken(form_text[c.pos + 1 : close]))
            c = Cursor(form_text, close + 1)

        elif ch == FORM_SEPARATOR and doubled:
            text.append(FORM_SEPARATOR)
            c = c.advance(2)

        else:
            text.append(ch)
            c = c.advance()

    flush()
    return tuple(tokens)


_DEFAULT_PARSER = MarkupParser()


def parse_markup(source: str, *, source_location: str | None = None) -> tuple[Token, ...]:
    """Parse authoring markup with the default parser.

    Example:
        >>> parse_markup("You have $#n# book|#n# books$")[1].selector
        'n'
    """
    return _DEFAULT_PARSER.parse(source, source_location=source_location)
