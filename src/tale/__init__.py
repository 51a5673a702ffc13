"""Lexical scanner for the Tale interactive-narrative scripting language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tale.tokens import Token

__version__ = "0.1.0"


def scan(source: str, filename: str = "input.tale", *, strict: bool = False) -> list[Token]:
    """Tokenize Tale source into a list of tokens ending with EOF."""
    from tale.lexer import tokenize

    return tokenize(source, filename, strict=strict)
