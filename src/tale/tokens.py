"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    EOF = auto()

    # Content
    TEXT = auto()  # prose run, blank-line trimmed at block edges
    ARG = auto()  # header or action argument word
    NAME = auto()  # first word of an action

    # Block headers
    INPUT_HEADER = auto()  # run of >
    STATE_HEADER = auto()  # run of =
    HEADER_END = auto()  # closing marker run, line break, or "" at EOF

    # Actions
    ACTION = auto()  # <
    ACTION_END = auto()  # >

    # Reserved for the grammar layer, never produced by the lexer
    NUMBER = auto()
    FLAG = auto()
    INSERT = auto()
    INSERT_END = auto()
    QUOTE = auto()
    IS = auto()
    HAS = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    UNKNOWN = auto()

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"Input Header"``."""
        return _LABELS[self]

    @property
    def is_reserved(self) -> bool:
        """True for kinds the lexer never emits."""
        return self in _RESERVED


_LABELS = {
    TokenType.EOF: "End of File",
    TokenType.TEXT: "Text",
    TokenType.ARG: "Argument",
    TokenType.NAME: "Name",
    TokenType.INPUT_HEADER: "Input Header",
    TokenType.STATE_HEADER: "State Header",
    TokenType.HEADER_END: "Header End",
    TokenType.ACTION: "Action",
    TokenType.ACTION_END: "Action End",
    TokenType.NUMBER: "Number",
    TokenType.FLAG: "Flag",
    TokenType.INSERT: "Insert",
    TokenType.INSERT_END: "Insert End",
    TokenType.QUOTE: "Quote",
    TokenType.IS: "Keyword: is",
    TokenType.HAS: "Keyword: has",
    TokenType.AND: "Keyword: and",
    TokenType.OR: "Keyword: or",
    TokenType.NOT: "Keyword: not",
    TokenType.UNKNOWN: "Keyword: unknown",
}

_RESERVED = frozenset(
    {
        TokenType.NUMBER,
        TokenType.FLAG,
        TokenType.INSERT,
        TokenType.INSERT_END,
        TokenType.QUOTE,
        TokenType.IS,
        TokenType.HAS,
        TokenType.AND,
        TokenType.OR,
        TokenType.NOT,
        TokenType.UNKNOWN,
    }
)

# Keyword spellings for the grammar layer
KEYWORDS = {
    "is": TokenType.IS,
    "has": TokenType.HAS,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "unknown": TokenType.UNKNOWN,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based code point offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token and the position of its first code point."""

    type: TokenType
    literal: str
    position: Position

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column


# The lexer uses "" as the end-of-input sentinel; every predicate rejects it.


def is_line_break(ch: str) -> bool:
    return ch == "\n" or ch == "\r"


def is_horizontal_whitespace(ch: str) -> bool:
    return ch == " " or ch == "\t"


def is_whitespace(ch: str) -> bool:
    return is_line_break(ch) or is_horizontal_whitespace(ch)


def is_input_header_marker(ch: str) -> bool:
    return ch == ">"


def is_state_header_marker(ch: str) -> bool:
    return ch == "="


def is_header_marker(ch: str) -> bool:
    """Return True if ch opens a block header when it starts a line."""
    return is_input_header_marker(ch) or is_state_header_marker(ch)


def is_action_start(ch: str) -> bool:
    return ch == "<"


def is_action_end(ch: str) -> bool:
    """Same glyph as the input header marker; only the capture mode tells them apart."""
    return ch == ">"
