"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from tale.lexer import Lexer, tokenize
from tale.tokens import Token, TokenType

# (type, literal, line, column)
Expected = tuple[TokenType, str, int, int]


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_literals(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_tokens(source: str, expected: list[Expected]) -> Lexer:
    """Pull one token per expected entry from a fresh lexer and compare each.

    Returns the lexer so callers can keep pulling or inspect its captures.
    """
    lexer = Lexer(source)
    for i, (tt, literal, line, column) in enumerate(expected):
        tok = lexer.next_token()
        actual = (tok.type, tok.literal, tok.line, tok.column)
        assert actual == (tt, literal, line, column), (
            f"[{i}] expected={(tt, literal, line, column)}, got={actual}"
        )
    return lexer
