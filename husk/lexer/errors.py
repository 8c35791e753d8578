"""
Error handling for the Husk lexer.

Author: xwest
"""

from ..diagnostics import CompilerError


class LexError(CompilerError):
    """Base class for errors raised while tokenizing."""


class UnexpectedCharacter(LexError):
    """No registered matcher accepts the character at this position."""

    def __init__(self, char: str, line: int, column: int):
        if char.isprintable():
            help_text = f"The character '{char}' is not valid in Husk source code."
        else:
            help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."
        super().__init__(
            f"Unexpected character '{char}'",
            line,
            column,
            code="L001",
            help_text=help_text,
        )
        self.char = char


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unexpected character",
}
