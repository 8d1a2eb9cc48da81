"""Character reader that tracks line and column positions."""

from __future__ import annotations

from dataclasses import dataclass

_TAB_WIDTH = 4


@dataclass(frozen=True)
class Position:
    """A line and column in a template."""

    line: int = 0
    column: int = 0


class StreamReader:
    """Reads text one chunk at a time, keeping track of the current position."""

    def __init__(self, text: str, start_position: Position | None = None) -> None:
        self._text = text
        self._index = 0
        self._line = 0
        self._column = 0
        self._start = start_position if start_position is not None else Position(1, 1)

    def read(self, size: int = 1) -> str:
        """Consume up to ``size`` characters; return them, or '' if fewer were left."""
        chunk = self._text[self._index:self._index + size]
        self._index += len(chunk)
        for ch in chunk:
            if ch == "\n":
                self._line += 1
                self._column = 0
            elif ch == "\t":
                self._column += _TAB_WIDTH
            else:
                self._column += 1
        if len(chunk) < size:
            return ""
        return chunk

    def peek(self, size: int = 1) -> str:
        """Return the next ``size`` characters without consuming them, or '' if fewer are left."""
        chunk = self._text[self._index:self._index + size]
        if len(chunk) < size:
            return ""
        return chunk

    def skip(self, size: int) -> None:
        """Consume ``size`` characters."""
        self.read(size)

    def at_end(self) -> bool:
        """Whether no characters are left."""
        return not self.peek()

    def position(self) -> Position:
        """The position of the next character to be read."""
        return Position(self._start.line + self._line, self._start.column + self._column)