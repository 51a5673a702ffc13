"""Tale lexer: converts source text into a flat, position-annotated token stream."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum, auto

from tale.errors import LexError
from tale.tokens import (
    Position,
    Token,
    TokenType,
    is_action_end,
    is_action_start,
    is_header_marker,
    is_horizontal_whitespace,
    is_input_header_marker,
    is_line_break,
    is_state_header_marker,
    is_whitespace,
)


class Capture(Enum):
    INPUT_HEADER = auto()
    STATE_HEADER = auto()
    ACTION = auto()
    NAME = auto()


_HEADER_MARKERS: dict[Capture, Callable[[str], bool]] = {
    Capture.INPUT_HEADER: is_input_header_marker,
    Capture.STATE_HEADER: is_state_header_marker,
}


class CaptureStack:
    """Stack of active capture modes; the top decides how input is read."""

    __slots__ = ("_modes",)

    def __init__(self) -> None:
        self._modes: list[Capture] = []

    def __len__(self) -> int:
        return len(self._modes)

    def __bool__(self) -> bool:
        return bool(self._modes)

    @property
    def top(self) -> Capture | None:
        return self._modes[-1] if self._modes else None

    def snapshot(self) -> tuple[Capture, ...]:
        """Return the modes bottom first."""
        return tuple(self._modes)

    def push(self, mode: Capture) -> None:
        self._modes.append(mode)

    def pop(self) -> Capture | None:
        """Pop and return the top mode; popping an empty stack is a no-op."""
        if self._modes:
            return self._modes.pop()
        return None

    def top_is(self, mode: Capture) -> bool:
        return bool(self._modes) and self._modes[-1] is mode

    def top_is_any_of(self, *modes: Capture) -> bool:
        return bool(self._modes) and self._modes[-1] in modes

    def pop_matching_in_order(self, *modes: Capture) -> None:
        """Pop each of *modes* in turn for as long as it is on top.

        ``pop_matching_in_order(NAME, ACTION)`` closes an action whether or
        not its name has already been consumed.
        """
        for mode in modes:
            if self.top_is(mode):
                self._modes.pop()


class Lexer:
    """Tokenize Tale source text one token at a time.

    Lexer instances are single-use: all state (cursor, line/column, capture
    stack) belongs to the instance, and there is no rewind. Create one per
    source string and drive it from a single caller.
    """

    def __init__(self, source: str, filename: str = "input.tale") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._captures = CaptureStack()
        self._action_start: Position | None = None
        self._line_start = True

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return

    @property
    def captures(self) -> tuple[Capture, ...]:
        """Active capture modes, bottom first. Non-empty at EOF means an open action."""
        return self._captures.snapshot()

    def next_token(self) -> Token:
        """Scan and return the next token. Returns EOF forever once input is exhausted."""
        while True:
            if self._captures.top_is_any_of(Capture.INPUT_HEADER, Capture.STATE_HEADER):
                return self._lex_header_arg()

            if self._captures.top_is_any_of(Capture.ACTION, Capture.NAME):
                return self._lex_action()

            if self._at_eof():
                return Token(TokenType.EOF, "", self._current_pos())

            ch = self._peek()

            if self._line_start and is_header_marker(ch):
                return self._lex_header_start()

            if is_action_start(ch):
                return self._lex_action_start()

            text, start = self._scan_while_text()
            if text:
                return Token(TokenType.TEXT, text, start)

    def check(self) -> None:
        """Raise LexError if the input ended inside an action."""
        if self._action_start is not None and self._at_eof():
            raise LexError(
                "unterminated action", self._action_start, self._source, self._filename
            )

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _at_eof(self) -> bool:
        return self._pos >= len(self._source)

    def _at_eol(self) -> bool:
        return self._at_eof() or is_line_break(self._source[self._pos])

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\r":
            self._line += 1
            self._col = 1
            self._line_start = True
        elif ch == "\n":
            # The \r of a \r\n pair already moved to the next line
            if self._pos < 2 or self._source[self._pos - 2] != "\r":
                self._line += 1
                self._col = 1
            self._line_start = True
        else:
            self._col += 1
            # Indentation keeps a line open for a header marker
            if not is_horizontal_whitespace(ch):
                self._line_start = False
        return ch

    def _scan_while(self, predicate: Callable[[str], bool]) -> tuple[str, Position]:
        start = self._current_pos()
        begin = self._pos
        while self._pos < len(self._source) and predicate(self._source[self._pos]):
            self._advance()
        return self._source[begin : self._pos], start

    def _scan_until(self, predicate: Callable[[str], bool]) -> tuple[str, Position]:
        return self._scan_while(lambda ch: not predicate(ch))

    def _scan_next(self) -> tuple[str, Position]:
        start = self._current_pos()
        if self._at_eof():
            return "", start
        return self._advance(), start

    def _scan_line_break(self) -> tuple[str, Position]:
        """Consume one logical line break: \\n, \\r, or \\r\\n. Nothing at EOF."""
        start = self._current_pos()
        begin = self._pos
        ch = self._peek()
        if ch == "\r":
            self._advance()
            if self._peek() == "\n":
                self._advance()
        elif ch == "\n":
            self._advance()
        return self._source[begin : self._pos], start

    # ------------------------------------------------------------------
    # Block headers
    # ------------------------------------------------------------------

    def _lex_header_start(self) -> Token:
        marker = self._peek()
        run, start = self._scan_while(lambda ch: ch == marker)
        if is_input_header_marker(marker):
            self._captures.push(Capture.INPUT_HEADER)
            return Token(TokenType.INPUT_HEADER, run, start)
        self._captures.push(Capture.STATE_HEADER)
        return Token(TokenType.STATE_HEADER, run, start)

    def _lex_header_arg(self) -> Token:
        is_marker = _HEADER_MARKERS[self._captures.top]

        self._scan_while(is_horizontal_whitespace)
        closer, closer_start = self._scan_while(is_marker)
        self._scan_while(is_horizontal_whitespace)

        if self._at_eol():
            self._captures.pop()
            line_break, break_start = self._scan_line_break()
            if closer:
                return Token(TokenType.HEADER_END, closer, closer_start)
            return Token(TokenType.HEADER_END, line_break, break_start)

        # A marker run with more header content after it is an ordinary argument
        if closer:
            return Token(TokenType.ARG, closer, closer_start)

        arg, start = self._scan_until(lambda ch: is_whitespace(ch) or is_marker(ch))
        return Token(TokenType.ARG, arg, start)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _lex_action_start(self) -> Token:
        ch, start = self._scan_next()
        self._captures.push(Capture.ACTION)
        self._captures.push(Capture.NAME)
        self._action_start = start
        return Token(TokenType.ACTION, ch, start)

    def _lex_action(self) -> Token:
        # Actions may span lines
        self._scan_while(is_whitespace)

        if self._at_eof():
            # Left open; check() reports it in strict mode
            return Token(TokenType.EOF, "", self._current_pos())

        if is_action_end(self._peek()):
            ch, start = self._scan_next()
            self._captures.pop_matching_in_order(Capture.NAME, Capture.ACTION)
            self._action_start = None
            return Token(TokenType.ACTION_END, ch, start)

        word, start = self._scan_until(lambda ch: is_whitespace(ch) or is_action_end(ch))
        if self._captures.top_is(Capture.NAME):
            self._captures.pop()
            return Token(TokenType.NAME, word, start)
        return Token(TokenType.ARG, word, start)

    # ------------------------------------------------------------------
    # Prose
    # ------------------------------------------------------------------

    def _scan_while_text(self) -> tuple[str, Position]:
        """Scan a prose block, line by line, and return (text, start).

        Blank lines between contentful lines are kept verbatim, including any
        horizontal whitespace on them. Blank lines before the first or after
        the last contentful line are dropped, and the start position moves
        past leading ones. Indentation and trailing whitespace on contentful
        lines are never trimmed.

        Stops before a header marker at the start of a line and before an
        action start anywhere. An empty result means nothing worth a TEXT
        token was found.
        """
        text = ""
        padding = ""
        start = self._current_pos()

        while True:
            indent, _ = self._scan_while(is_horizontal_whitespace)
            ch = self._peek()

            if self._line_start and is_header_marker(ch):
                return text, start

            if is_action_start(ch):
                if text:
                    text += padding + indent
                return text, start

            if self._at_eof():
                return text, start

            if is_line_break(ch):
                line_break, _ = self._scan_line_break()
                if text:
                    padding += indent + line_break
                else:
                    start = self._current_pos()
                continue

            content, _ = self._scan_until(lambda c: is_line_break(c) or is_action_start(c))
            text += padding + indent + content
            padding = ""

            if not is_line_break(self._peek()):
                return text, start
            padding, _ = self._scan_line_break()


def tokenize(source: str, filename: str = "input.tale", *, strict: bool = False) -> list[Token]:
    """Convenience function: tokenize source text and return the token list, EOF included.

    With ``strict=True``, raise LexError if the input ends inside an action.
    """
    lexer = Lexer(source, filename)
    tokens = list(lexer)
    if strict:
        lexer.check()
    return tokens
