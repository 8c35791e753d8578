"""
Token definitions for the Husk lexer.

Husk has a deliberately small vocabulary:
- Keywords: let, print, fn, return
- Punctuation: ( ) { } = ;
- Operators: + - * /
- Integer literals and identifiers

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """
    Enumeration of all token types in Husk.
    """

    # Literals and names
    INT_LIT = auto()                # 42
    IDENT = auto()                  # x, total1

    # Keywords
    LET = auto()                    # let
    PRINT = auto()                  # print
    FN = auto()                     # fn
    RETURN = auto()                 # return

    # Punctuation
    OPEN_PAREN = auto()             # (
    CLOSE_PAREN = auto()            # )
    OPEN_CURLY = auto()             # {
    CLOSE_CURLY = auto()            # }
    EQ = auto()                     # =
    SEMI = auto()                   # ;

    # Arithmetic operators
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    STAR = auto()                   # *
    FSLASH = auto()                 # /

    @property
    def description(self) -> str:
        """Human readable name used in parser diagnostics."""
        return TOKEN_DESCRIPTIONS[self]


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based; offset is the 0-based index into the source.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    ``lexeme`` is the raw source text. ``value`` is the literal text for
    integer literals and identifiers and None for everything else.
    """
    type: TokenType
    lexeme: str
    value: Optional[str]
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.type.name}({self.value!r})"
        return self.type.name

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")


TOKEN_DESCRIPTIONS = {
    TokenType.INT_LIT: "integer literal",
    TokenType.IDENT: "identifier",
    TokenType.LET: "'let'",
    TokenType.PRINT: "'print'",
    TokenType.FN: "'fn'",
    TokenType.RETURN: "'return'",
    TokenType.OPEN_PAREN: "'('",
    TokenType.CLOSE_PAREN: "')'",
    TokenType.OPEN_CURLY: "'{'",
    TokenType.CLOSE_CURLY: "'}'",
    TokenType.EQ: "'='",
    TokenType.SEMI: "';'",
    TokenType.PLUS: "'+'",
    TokenType.MINUS: "'-'",
    TokenType.STAR: "'*'",
    TokenType.FSLASH: "'/'",
}

# Reserved words, in the order the default matcher list tries them
KEYWORDS = {
    "return": TokenType.RETURN,
    "print": TokenType.PRINT,
    "let": TokenType.LET,
    "fn": TokenType.FN,
}

SINGLE_CHAR_TOKENS = {
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "{": TokenType.OPEN_CURLY,
    "}": TokenType.CLOSE_CURLY,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.FSLASH,
    "=": TokenType.EQ,
    ";": TokenType.SEMI,
}

BINARY_OPERATORS = frozenset({
    TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.FSLASH,
})
