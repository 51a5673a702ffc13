"""Error types with formatted source context."""

from __future__ import annotations

import re

from tale.tokens import Position

# \n, \r and \r\n only, matching the lexer's line counting
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class LexError(Exception):
    """Raised by strict scanning, with position and source context."""

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        filename: str = "input.tale",
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def source_line(self) -> str:
        """Return the text of the offending line, without its line break."""
        lines = _LINE_BREAK.split(self.source)
        idx = self.position.line - 1
        return lines[idx] if 0 <= idx < len(lines) else ""

    def format(self, filename: str | None = None) -> str:
        """Render ``error: ...`` with a gutter, the source line and a caret marker.

        *filename* overrides the one the error was raised with.
        """
        line, col = self.position.line, self.position.column
        text = self.source_line()
        # Mark the offending character and the next one when it exists
        width = 2 if col < len(text) else 1

        number = str(line)
        margin = " " * len(number)
        rows = [
            f"error: {self.message}",
            f"{margin} --> {filename or self.filename}:{line}:{col}",
            f"{margin} |",
            f"{number} | {text}",
            f"{margin} | {' ' * (col - 1)}{'^' * width}",
        ]
        return "\n".join(rows)
