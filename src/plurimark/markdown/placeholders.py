"""Inline markdown to numbered placeholder compilation.

Translators see ``Click <0>here</0>`` instead of ``Click **here**``: every
formatting span becomes a numbered ``<N>...</N>`` pair and a
:class:`PlaceholderMapping` records the concrete tags for index N.

Pipeline for markup tokens:

1. Assemble tokens into text (``{name}`` for variables, a private sentinel
   for the plural ``#`` so it never reads as markdown)
2. Run the CommonMark inline pass (markdown-it-py) and walk its tokens,
   numbering spans in document order, outer span before inner span
3. Turn the sentinel back into ``#`` and restore edge spaces the pass dropped

Plural forms are compiled one at a time with the index threaded through, so
indices stay unique and increasing across a whole message.

Malformed markdown is never an error; CommonMark leaves it as literal text.
Entities and backslash escapes are decoded (``&amp;`` -> ``&``, ``\\*`` -> ``*``).
Link and image destinations are kept exactly as authored.

Python 3.13+. Uses markdown-it-py for the inline pass.
"""

import logging
import re
from dataclasses import dataclass

from markdown_it import MarkdownIt
from markdown_it.token import Token as MarkdownToken

from plurimark.constants import PLACEHOLDER_PATTERN, SELECTOR_MARKER, SELECTOR_SENTINEL
from plurimark.syntax.tokens import (
    PluralBlockToken,
    SelectorRefToken,
    TextToken,
    Token,
    VariableToken,
)

__all__ = [
    "ExtractionResult",
    "PlaceholderMapping",
    "apply_placeholders",
    "compile_markdown",
    "compile_markdown_with_mappings",
    "extract_placeholders",
]

logger = logging.getLogger(__name__)

_MARKDOWN = MarkdownIt("commonmark")
# Destinations are recorded as authored so {name} variables survive in href/src.
_MARKDOWN.normalizeLink = lambda url: url

# Opening token type -> (open tag, close tag); links and images carry attributes.
_SPAN_TAGS: dict[str, tuple[str, str]] = {
    "strong_open": ("<strong>", "</strong>"),
    "em_open": ("<em>", "</em>"),
}
_CLOSE_TYPES = frozenset({"strong_close", "em_close", "link_close"})


@dataclass(frozen=True, slots=True)
class PlaceholderMapping:
    """Concrete tags standing behind placeholder index N."""

    index: int
    open_tag: str
    close_tag: str


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Placeholder text, the mappings it uses, and the next free index."""

    text: str
    mappings: tuple[PlaceholderMapping, ...]
    next_index: int


class _Extraction:
    """Output buffer and index counter for one inline walk."""

    __slots__ = ("index", "mappings", "parts")

    def __init__(self, start_index: int) -> None:
        self.index = start_index
        self.mappings: list[PlaceholderMapping] = []
        self.parts: list[str] = []

    def open_span(self, open_tag: str, close_tag: str) -> int:
        index = self.index
        self.index += 1
        self.mappings.append(PlaceholderMapping(index, open_tag, close_tag))
        self.parts.append(f"<{index}>")
        return index

    def close_span(self, index: int) -> None:
        self.parts.append(f"</{index}>")


def _walk(children: list[MarkdownToken], extraction: _Extraction) -> None:
    open_spans: list[int] = []
    for token in children:
        kind = token.type
        if kind in _SPAN_TAGS:
            open_spans.append(extraction.open_span(*_SPAN_TAGS[kind]))
        elif kind == "link_open":
            href = token.attrGet("href") or ""
            open_spans.append(extraction.open_span(f'<a href="{href}">', "</a>"))
        elif kind in _CLOSE_TYPES:
            if open_spans:
                extraction.close_span(open_spans.pop())
        elif kind == "code_inline":
            index = extraction.open_span("<code>", "</code>")
            extraction.parts.append(token.content)
            extraction.close_span(index)
        elif kind == "image":
            src = token.attrGet("src") or ""
            index = extraction.open_span(f'<img src="{src}" alt="', '">')
            extraction.parts.append(token.content)
            extraction.close_span(index)
        elif kind in ("softbreak", "hardbreak"):
            extraction.parts.append("\n")
        else:
            # text, text_special, html_inline
            extraction.parts.append(token.content)
    while open_spans:
        extraction.close_span(open_spans.pop())


def extract_placeholders(text: str, start_index: int = 0) -> ExtractionResult:
    """Replace inline markdown in text with numbered placeholders.

    Args:
        text: Plain text that may contain inline markdown
        start_index: First placeholder index to assign

    Returns:
        ExtractionResult with the placeholder text, the mappings, and the
        index to continue numbering from

    Example:
        >>> result = extract_placeholders("Click **here** to continue")
        >>> result.text
        'Click <0>here</0> to continue'
        >>> result.mappings[0].open_tag
        '<strong>'
    """
    extraction = _Extraction(start_index)
    if text:
        for block in _MARKDOWN.parseInline(text):
            _walk(block.children or [], extraction)
    return ExtractionResult(
        "".join(extraction.parts), tuple(extraction.mappings), extraction.index
    )


def _leading_spaces(text: str) -> int:
    return len(text) - len(text.lstrip(" "))


def _trailing_spaces(text: str) -> int:
    return len(text) - len(text.rstrip(" "))


class _Compilation:
    """State of one compile call: output, mappings and the shared index."""

    __slots__ = ("index", "mappings", "parts")

    def __init__(self) -> None:
        self.index = 0
        self.mappings: list[PlaceholderMapping] = []
        self.parts: list[str] = []

    def emit_markdown(self, assembled: list[str]) -> None:
        """Compile assembled text, then clear it."""
        if not assembled:
            return
        text = "".join(assembled)
        assembled.clear()

        result = extract_placeholders(text, self.index)
        self.index = result.next_index
        self.mappings.extend(result.mappings)
        compiled = result.text.replace(SELECTOR_SENTINEL, SELECTOR_MARKER)

        if not compiled.strip(" "):
            self.parts.append(text.replace(SELECTOR_SENTINEL, SELECTOR_MARKER))
            return
        self.parts.append(" " * max(0, _leading_spaces(text) - _leading_spaces(compiled)))
        self.parts.append(compiled)
        self.parts.append(" " * max(0, _trailing_spaces(text) - _trailing_spaces(compiled)))

    def emit_plural(self, block: PluralBlockToken) -> None:
        self.parts.append(f"{{{block.selector}, plural,")
        for form in block.forms:
            self.parts.append(f" {form.category} {{")
            assembled: list[str] = []
            _assemble(form.content, assembled)
            self.emit_markdown(assembled)
            self.parts.append("}")
        self.parts.append("}")


def _assemble(tokens: tuple[Token, ...], assembled: list[str]) -> None:
    """Append the text of plain tokens; plural blocks never reach here."""
    for token in tokens:
        match token:
            case TextToken(value=value):
                assembled.append(value)
            case VariableToken(name=name):
                assembled.append(f"{{{name}}}")
            case SelectorRefToken():
                assembled.append(SELECTOR_SENTINEL)
            case PluralBlockToken():
                msg = "Plural blocks cannot nest inside plural forms"
                raise ValueError(msg)


def compile_markdown_with_mappings(tokens: tuple[Token, ...]) -> ExtractionResult:
    """Render tokens as structured-message text with markdown placeholders.

    Args:
        tokens: Output of :func:`~plurimark.syntax.parse_markup`

    Returns:
        ExtractionResult with the compiled text and every mapping, indices
        unique across the whole message

    Example:
        >>> from plurimark.syntax import parse_markup
        >>> result = compile_markdown_with_mappings(
        ...     parse_markup("$#n# *new* file|#n# *new* files$")
        ... )
        >>> result.text
        '{n, plural, one {# <0>new</0> file} other {# <1>new</1> files}}'
    """
    compilation = _Compilation()
    assembled: list[str] = []
    for token in tokens:
        if isinstance(token, PluralBlockToken):
            compilation.emit_markdown(assembled)
            compilation.emit_plural(token)
        else:
            _assemble((token,), assembled)
    compilation.emit_markdown(assembled)

    logger.debug("Compiled markdown with %d placeholders", len(compilation.mappings))
    return ExtractionResult(
        "".join(compilation.parts), tuple(compilation.mappings), compilation.index
    )


def compile_markdown(tokens: tuple[Token, ...]) -> str:
    """Structured-message text with markdown converted to placeholders."""
    return compile_markdown_with_mappings(tokens).text


def apply_placeholders(text: str, mappings: tuple[PlaceholderMapping, ...]) -> str:
    """Replace ``<N>``/``</N>`` markers with the tags recorded for N.

    Markers whose index has no mapping are left as they are.

    Example:
        >>> apply_placeholders("<0>hi</0>", (PlaceholderMapping(0, "<em>", "</em>"),))
        '<em>hi</em>'
    """
    by_index = {mapping.index: mapping for mapping in mappings}

    def substitute(match: re.Match[str]) -> str:
        mapping = by_index.get(int(match.group(2)))
        if mapping is None:
            return match.group(0)
        return mapping.close_tag if match.group(1) else mapping.open_tag

    return PLACEHOLDER_PATTERN.sub(substitute, text)
