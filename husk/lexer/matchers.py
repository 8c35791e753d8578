"""
Pluggable token matchers.

A matcher answers two questions at a position in the source: "do I match
here?" and "consume my token". The lexer walks an ordered list of matchers
and takes the first that matches, so order matters: keywords have to be tried
before the generic identifier matcher.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS
from .errors import LexError


def is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


@dataclass
class Cursor:
    """Mutable scan position shared between the lexer and its matchers."""
    filename: str = ""
    pos: int = 0
    line: int = 1
    column: int = 1

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def advance(self, count: int = 1):
        """Move forward on the current line."""
        self.pos += count
        self.column += count


class TokenMatcher(ABC):
    """Interface for a single token recognizer."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def matches(self, source: str, pos: int) -> bool:
        """Check whether this matcher recognizes a token starting at pos."""

    @abstractmethod
    def parse(self, source: str, cursor: Cursor) -> Token:
        """Consume the token at the cursor, advancing it past the token."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class KeywordMatcher(TokenMatcher):
    """Matches a reserved word that is not the prefix of a longer name."""

    def __init__(self, keyword: str, token_type: TokenType):
        self.keyword = keyword
        self.token_type = token_type
        self.name = keyword
        self.description = f"{keyword} keyword"

    def matches(self, source: str, pos: int) -> bool:
        if not source.startswith(self.keyword, pos):
            return False
        # `lethal` is an identifier, not `let` followed by `hal`
        end = pos + len(self.keyword)
        return end >= len(source) or not is_alnum(source[end])

    def parse(self, source: str, cursor: Cursor) -> Token:
        if not self.matches(source, cursor.pos):
            raise LexError(f"Keyword parsing failed for '{self.keyword}'",
                           cursor.line, cursor.column)

        location = cursor.location()
        cursor.advance(len(self.keyword))
        return Token(self.token_type, self.keyword, None, location)


class SingleCharMatcher(TokenMatcher):
    """Matches one fixed punctuation or operator character."""

    def __init__(self, char: str, token_type: TokenType):
        self.char = char
        self.token_type = token_type
        self.name = char
        self.description = f"{char} operator"

    def matches(self, source: str, pos: int) -> bool:
        return pos < len(source) and source[pos] == self.char

    def parse(self, source: str, cursor: Cursor) -> Token:
        if not self.matches(source, cursor.pos):
            raise LexError(f"Single character parsing failed for '{self.char}'",
                           cursor.line, cursor.column)

        location = cursor.location()
        cursor.advance()
        return Token(self.token_type, self.char, None, location)


class IntLitMatcher(TokenMatcher):
    """Matches a run of decimal digits."""

    name = "int_lit"
    description = "Integer literal"

    def matches(self, source: str, pos: int) -> bool:
        return pos < len(source) and is_digit(source[pos])

    def parse(self, source: str, cursor: Cursor) -> Token:
        location = cursor.location()
        start = cursor.pos
        while cursor.pos < len(source) and is_digit(source[cursor.pos]):
            cursor.advance()

        lexeme = source[start:cursor.pos]
        return Token(TokenType.INT_LIT, lexeme, lexeme, location)


class IdentifierMatcher(TokenMatcher):
    """Matches a letter followed by letters and digits."""

    name = "ident"
    description = "Identifier"

    def matches(self, source: str, pos: int) -> bool:
        return pos < len(source) and is_alpha(source[pos])

    def parse(self, source: str, cursor: Cursor) -> Token:
        location = cursor.location()
        start = cursor.pos
        cursor.advance()
        while cursor.pos < len(source) and is_alnum(source[cursor.pos]):
            cursor.advance()

        lexeme = source[start:cursor.pos]
        return Token(TokenType.IDENT, lexeme, lexeme, location)


def default_matchers() -> List[TokenMatcher]:
    """
    Build the standard Husk matcher list.

    A fresh list is returned on every call so lexers never share state.
    Keywords come first, then single characters, then the catch-all
    literal and identifier matchers.
    """
    matchers: List[TokenMatcher] = []

    for keyword, token_type in KEYWORDS.items():
        matchers.append(KeywordMatcher(keyword, token_type))

    for char, token_type in SINGLE_CHAR_TOKENS.items():
        matchers.append(SingleCharMatcher(char, token_type))

    matchers.append(IntLitMatcher())
    matchers.append(IdentifierMatcher())

    return matchers
