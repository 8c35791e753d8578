"""
Husk Lexer - turns source text into a list of tokens

Driven entirely by the matcher list it is given; the lexer itself only skips
whitespace and keeps line/column bookkeeping.

xwest
"""

import logging
from typing import List, Optional, Sequence

from .tokens import Token
from .matchers import Cursor, TokenMatcher, default_matchers
from .errors import UnexpectedCharacter
from ..diagnostics import ErrorReporter

logger = logging.getLogger(__name__)


class Lexer:
    """
    Husk lexical analyzer.

    Tokenizing is fail-fast: the first character no matcher accepts aborts
    the scan with UnexpectedCharacter and no tokens are returned.
    """

    def __init__(self, source: str, filename: str = "",
                 matchers: Optional[Sequence[TokenMatcher]] = None,
                 reporter: Optional[ErrorReporter] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            matchers: Ordered token matchers; defaults to default_matchers()
            reporter: Formats diagnostics; one is created when not given
        """
        self.source = source
        self.filename = filename
        self.matchers: List[TokenMatcher] = (
            list(matchers) if matchers is not None else default_matchers()
        )
        self.reporter = reporter or ErrorReporter(source, filename)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens (there is no EOF sentinel)

        Raises:
            UnexpectedCharacter: at the first unrecognized character
        """
        tokens: List[Token] = []
        cursor = Cursor(self.filename)

        while cursor.pos < len(self.source):
            if self._skip_whitespace(cursor):
                continue
            tokens.append(self._next_token(cursor))

        logger.debug("Tokenized %s into %d tokens", self.filename or "<source>", len(tokens))
        return tokens

    def _skip_whitespace(self, cursor: Cursor) -> bool:
        """Skip one whitespace character, updating line/column."""
        current = self.source[cursor.pos]
        if not current.isspace():
            return False

        if current == "\n":
            cursor.pos += 1
            cursor.line += 1
            cursor.column = 1
        else:
            cursor.advance()
        return True

    def _next_token(self, cursor: Cursor) -> Token:
        """Lex the next token using the first matcher that accepts it."""
        for matcher in self.matchers:
            if matcher.matches(self.source, cursor.pos):
                return matcher.parse(self.source, cursor)

        raise self.reporter.report(
            UnexpectedCharacter(self.source[cursor.pos], cursor.line, cursor.column)
        )


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """Convenience function to tokenize a source string."""
    return Lexer(source, filename).tokenize()
