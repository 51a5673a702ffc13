"""Test the token taxonomy, token values, and character classifiers."""

import pytest

from tale.tokens import (
    KEYWORDS,
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

EMITTED = {
    TokenType.EOF,
    TokenType.TEXT,
    TokenType.ARG,
    TokenType.NAME,
    TokenType.INPUT_HEADER,
    TokenType.STATE_HEADER,
    TokenType.HEADER_END,
    TokenType.ACTION,
    TokenType.ACTION_END,
}


class TestTokenType:
    def test_emitted_kinds_not_reserved(self):
        for tt in EMITTED:
            assert not tt.is_reserved, tt

    def test_everything_else_reserved(self):
        for tt in set(TokenType) - EMITTED:
            assert tt.is_reserved, tt

    def test_every_kind_has_label(self):
        for tt in TokenType:
            assert tt.label

    def test_labels(self):
        assert TokenType.INPUT_HEADER.label == "Input Header"
        assert TokenType.EOF.label == "End of File"
        assert TokenType.ARG.label == "Argument"
        assert TokenType.IS.label == "Keyword: is"

    def test_keywords_map_to_reserved_kinds(self):
        assert set(KEYWORDS) == {"is", "has", "and", "or", "not", "unknown"}
        assert KEYWORDS["has"] is TokenType.HAS
        assert all(tt.is_reserved for tt in KEYWORDS.values())


class TestToken:
    def test_line_and_column(self):
        tok = Token(TokenType.TEXT, "hi", Position(3, 7, 20))
        assert tok.line == 3
        assert tok.column == 7
        assert tok.position.offset == 20

    def test_frozen(self):
        tok = Token(TokenType.TEXT, "hi", Position(1, 1, 0))
        with pytest.raises(AttributeError):
            tok.literal = "bye"

    def test_equality(self):
        a = Token(TokenType.ARG, "x", Position(1, 2, 1))
        b = Token(TokenType.ARG, "x", Position(1, 2, 1))
        assert a == b


class TestClassifiers:
    def test_line_breaks(self):
        assert is_line_break("\n")
        assert is_line_break("\r")
        assert not is_line_break(" ")
        assert not is_line_break("\t")

    def test_horizontal_whitespace(self):
        assert is_horizontal_whitespace(" ")
        assert is_horizontal_whitespace("\t")
        assert not is_horizontal_whitespace("\n")
        assert not is_horizontal_whitespace("a")

    def test_whitespace_is_union(self):
        for ch in " \t\r\n":
            assert is_whitespace(ch), repr(ch)
        assert not is_whitespace("x")

    def test_header_markers(self):
        assert is_input_header_marker(">")
        assert is_state_header_marker("=")
        assert not is_input_header_marker("=")
        assert not is_state_header_marker(">")
        assert is_header_marker(">")
        assert is_header_marker("=")
        assert not is_header_marker("<")

    def test_action_markers(self):
        assert is_action_start("<")
        assert is_action_end(">")
        assert not is_action_start(">")
        assert not is_action_end("<")

    def test_action_end_shares_input_header_glyph(self):
        assert is_action_end(">") and is_input_header_marker(">")

    def test_eof_sentinel_rejected(self):
        predicates = [
            is_line_break,
            is_horizontal_whitespace,
            is_whitespace,
            is_input_header_marker,
            is_state_header_marker,
            is_header_marker,
            is_action_start,
            is_action_end,
        ]
        for pred in predicates:
            assert not pred(""), pred.__name__
