"""Immutable cursor infrastructure for the restricted parsers.

Shared by the descriptor parser (build time) and the ICU message parser
(runtime). Python 3.13+. Zero external dependencies.

Design:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult"]

# Whitespace accepted between tokens of a source-code fragment.
_WHITESPACE = frozenset(" \t\n\r\f\v")


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
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected end of input at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF.
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces, tabs and line breaks."""
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value
    """

    value: T
    cursor: Cursor
