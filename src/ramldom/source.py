"""
Text sources: where navigation reads lines from.

The navigator only ever asks for one line at a time, the line count, and the
caret position. Any editor buffer can be adapted by implementing TextSource.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Cursor:
    """Caret position, both coordinates 0-based."""
    line: int = 0
    column: int = 0


class TextSource(ABC):
    """Line-addressable document with a cursor."""

    @abstractmethod
    def get_line(self, index: int) -> str | None:
        """Return line text, or None for any index outside [0, line_count)."""
        ...

    @property
    @abstractmethod
    def line_count(self) -> int:
        ...

    @property
    @abstractmethod
    def cursor(self) -> Cursor:
        ...


class LinesTextSource(TextSource):
    """In-memory list of lines, as an editor buffer presents them."""

    def __init__(self, lines: list[str], cursor: Cursor | None = None):
        self._lines = list(lines)
        self._cursor = cursor or Cursor()

    @classmethod
    def from_text(cls, content: str, cursor: Cursor | None = None) -> LinesTextSource:
        """
        Split on newlines. A trailing newline yields a final empty line, the
        same way an editor shows the line after it.
        """
        lines = [line.removesuffix("\r") for line in content.split("\n")]
        return cls(lines, cursor)

    @classmethod
    def from_path(cls, path: str | Path, cursor: Cursor | None = None) -> LinesTextSource:
        with open(path, encoding="utf-8") as f:
            return cls.from_text(f.read(), cursor)

    def get_line(self, index: int) -> str | None:
        # Negative indexes must not wrap around to the end
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    def move_cursor(self, line: int, column: int = 0) -> None:
        self._cursor = Cursor(line=line, column=column)
