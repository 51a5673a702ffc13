"""Token listings: plain text and JSON output, and the --debug capture trace."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from tale.lexer import Lexer
from tale.tokens import Token


def format_token(tok: Token, *, labels: bool = False) -> str:
    """Render one token as ``line:col TYPE 'literal'``."""
    kind = tok.type.label if labels else tok.type.name
    return f"{tok.line}:{tok.column} {kind} {tok.literal!r}"


def format_tokens(tokens: list[Token], *, labels: bool = False) -> str:
    return "".join(format_token(tok, labels=labels) + "\n" for tok in tokens)


def tokens_to_json(tokens: list[Token]) -> str:
    payload = [
        {
            "type": tok.type.name,
            "literal": tok.literal,
            "line": tok.line,
            "column": tok.column,
        }
        for tok in tokens
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def dump_trace(lexer: Lexer, *, file: TextIO | None = None) -> list[Token]:
    """Drain *lexer*, writing each token indented by capture depth to *file*.

    Writes to stderr by default. Returns the tokens so the caller can still
    render them normally.
    """
    if file is None:
        file = sys.stderr
    tokens: list[Token] = []
    for tok in lexer:
        captures = lexer.captures
        modes = " ".join(c.name for c in captures) or "-"
        file.write(f"{_indent(len(captures))}{format_token(tok)}  [{modes}]\n")
        tokens.append(tok)
    return tokens


def _indent(depth: int) -> str:
    return "  " * depth
