"""Lexer."""

from frontmatterpy.lexer.lexer import Lexer, dump_tokens
from frontmatterpy.lexer.tokens import Token, TokenKind

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "dump_tokens",
]
