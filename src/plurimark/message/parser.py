"""Lenient structured-message parser.

Parses ``{name}`` variables, ``{name, plural, cat {...} ...}`` constructs,
apostrophe quoting, and ``#`` inside plural branches. Catalog content may be
hand-edited, so this parser never raises: malformed input degrades to the
closest text/variable reading and anomalies are left to semantic validation.

Quoting:
    ``''`` is a literal apostrophe. A ``'`` directly before ``{`` or ``}``
    (or ``#`` inside a plural branch) opens a quoted run that is taken
    verbatim up to the next lone ``'`` (``''`` inside the run is again a
    literal apostrophe). Any other ``'`` is ordinary text, so ``Don't``
    needs no escaping.

Degradation rules:
    - ``{name, keyword, ...}`` with a keyword other than ``plural`` becomes
      a variable; its body is skipped by brace counting
    - ``{`` with no closing brace before end of input is dropped
    - ``}`` outside a plural branch is ordinary text
    - plurals nested deeper than MAX_DEPTH degrade to a variable

Python 3.13+.
"""

from plurimark.constants import MAX_DEPTH, SELECTOR_MARKER
from plurimark.syntax.cursor import Cursor, ParseResult

from .nodes import Branch, HashNode, Node, PluralNode, TextNode, VariableNode

__all__ = ["parse_message"]

_QUOTE = "'"
_QUOTABLE = "{}"
_PLURAL_QUOTABLE = "{}" + SELECTOR_MARKER
_PLURAL_KEYWORD = "plural"


def parse_message(text: str) -> tuple[Node, ...]:
    """Parse structured-message text into a node tree.

    Args:
        text: Structured-message text

    Returns:
        Tuple of nodes; empty for empty input

    Example:
        >>> parse_message("Hi {name}")
        (TextNode(value='Hi '), VariableNode(name='name'))
    """
    if not text:
        return ()
    return _parse_sequence(Cursor(text, 0), in_plural=False, depth=0).value


def _read_until(cursor: Cursor, stops: str) -> ParseResult[str]:
    """Read up to (not including) the first character in stops, stripped."""
    c = cursor
    while not c.is_eof and c.current not in stops:
        c = c.advance()
    return ParseResult(cursor.slice_to(c.pos).strip(), c)


def _skip_to_closing_brace(cursor: Cursor) -> Cursor:
    """Skip past the ``}`` closing an already-open brace, counting nesting."""
    depth = 1
    c = cursor
    while not c.is_eof and depth > 0:
        if c.current == "{":
            depth += 1
        elif c.current == "}":
            depth -= 1
        c = c.advance()
    return c


def _read_quoted(cursor: Cursor, text: list[str], *, in_plural: bool) -> Cursor:
    """Consume a quote sequence starting at ``'``, appending its literal text."""
    c = cursor.advance()
    following = c.peek()
    if following == _QUOTE:
        text.append(_QUOTE)
        return c.advance()
    if following is None or following not in (_PLURAL_QUOTABLE if in_plural else _QUOTABLE):
        text.append(_QUOTE)
        return c
    while not c.is_eof:
        if c.current == _QUOTE:
            c = c.advance()
            if c.peek() != _QUOTE:
                break
            text.append(_QUOTE)
            c = c.advance()
        else:
            text.append(c.current)
            c = c.advance()
    return c


def _parse_sequence(cursor: Cursor, *, in_plural: bool, depth: int) -> ParseResult[tuple[Node, ...]]:
    """Parse nodes until end of input, or until ``}`` inside a plural branch.

    The terminating ``}`` is not consumed.
    """
    nodes: list[Node] = []
    text: list[str] = []
    c = cursor

    def flush() -> None:
        if text:
            nodes.append(TextNode("".join(text)))
            text.clear()

    while not c.is_eof:
        ch = c.current
        if ch == SELECTOR_MARKER and in_plural:
            flush()
            nodes.append(HashNode())
            c = c.advance()
        elif ch == "{":
            flush()
            result = _parse_placeholder(c.advance(), depth=depth)
            if result.value is not None:
                nodes.append(result.value)
            c = result.cursor
        elif ch == "}" and in_plural:
            break
        elif ch == _QUOTE:
            c = _read_quoted(c, text, in_plural=in_plural)
        else:
            text.append(ch)
            c = c.advance()

    flush()
    return ParseResult(tuple(nodes), c)


def _parse_placeholder(cursor: Cursor, *, depth: int) -> ParseResult[Node | None]:
    """Parse the inside of ``{...}`` with cursor just after the ``{``."""
    name_result = _read_until(cursor, "},")
    name = name_result.value
    c = name_result.cursor

    if c.is_eof:
        return ParseResult(None, c)

    if c.current == "}":
        return ParseResult(VariableNode(name), c.advance())

    keyword_result = _read_until(c.advance(), ",}")
    c = keyword_result.cursor
    if keyword_result.value == _PLURAL_KEYWORD and c.peek() == "," and depth < MAX_DEPTH:
        branches = _parse_branches(c.advance(), depth=depth + 1)
        return ParseResult(PluralNode(name, branches.value), branches.cursor)

    return ParseResult(VariableNode(name), _skip_to_closing_brace(c))


def _parse_branches(cursor: Cursor, *, depth: int) -> ParseResult[tuple[Branch, ...]]:
    """Parse ``cat {...} cat {...}}`` up to and including the closing brace."""
    branches: list[Branch] = []
    c = cursor.skip_spaces()

    while not c.is_eof and c.current != "}":
        category_result = _read_until(c, "{}")
        c = category_result.cursor
        if not c.is_eof and c.current == "{":
            content = _parse_sequence(c.advance(), in_plural=True, depth=depth)
            c = content.cursor
            if not c.is_eof:
                c = c.advance()
            branches.append(Branch(category_result.value, content.value))
        c = c.skip_spaces()

    if not c.is_eof:
        c = c.advance()
    return ParseResult(tuple(branches), c)
