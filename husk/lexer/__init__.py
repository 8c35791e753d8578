"""
Husk Lexer Package

Tokenizer built from an ordered, pluggable list of token matchers.

Key Features:
- Matcher list injected per Lexer instance (no global registry)
- Keyword matchers guard against identifier prefixes (`lethal` is one name)
- 1-based line/column tracking for diagnostics
- Fail-fast on the first unexpected character

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .matchers import (
    Cursor, TokenMatcher, KeywordMatcher, SingleCharMatcher,
    IntLitMatcher, IdentifierMatcher, default_matchers,
)
from .lexer import Lexer, tokenize_string
from .errors import LexError, UnexpectedCharacter

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "Cursor",
    "TokenMatcher",
    "KeywordMatcher",
    "SingleCharMatcher",
    "IntLitMatcher",
    "IdentifierMatcher",
    "default_matchers",
    "LexError",
    "UnexpectedCharacter",
]
