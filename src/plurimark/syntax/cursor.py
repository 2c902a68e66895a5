"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern shared by the markup parser and the
plural rule parser. Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (only for errors)
"""

from dataclasses import dataclass

from plurimark.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Current character.

        Raises:
            EOFError: If at end of input. Check is_eof first:
                ``while not cursor.is_eof:``
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character at position + offset, or None beyond EOF.

        Use for lookahead: ``if cursor.peek(1) == "$":``
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Source substring from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def skip_spaces(self) -> "Cursor":
        """Skip whitespace (space, tab, newline, carriage return).

        Example:
            >>> Cursor("  \\t n", 0).skip_spaces().current
            'n'
        """
        c = self
        while not c.is_eof and c.current in " \t\n\r":
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume char if it is current, otherwise return None.

        Example:
            >>> Cursor("=1", 0).expect("=").pos
            1
            >>> Cursor("=1", 0).expect("!") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def startswith(self, prefix: str) -> bool:
        """True if the source continues with prefix at the current position."""
        return self.source.startswith(prefix, self.pos)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def span(self, length: int = 1) -> SourceSpan:
        """SourceSpan starting at the current position.

        Args:
            length: Number of characters covered by the span

        Returns:
            SourceSpan with line/column of the current position
        """
        line, column = self.compute_line_col()
        end = min(self.pos + length, len(self.source))
        return SourceSpan(start=self.pos, end=max(end, self.pos), line=line, column=column)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parsed value together with the cursor positioned after it.

    Every sub-parser returns ParseResult[T] so callers continue from
    ``result.cursor`` without tracking positions by hand.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor
