"""
Error handling for the Husk parser.

Parsing is fail-fast: the first error is raised and nothing is recovered.

Author: xwest
"""

from typing import Optional

from ..diagnostics import CompilerError
from ..lexer.tokens import Token


class ParseError(CompilerError):
    """Base class for syntax errors."""


class ExpectedToken(ParseError):
    """A specific token (or construct) was required but something else was found."""

    def __init__(self, expected: str, found: Optional[Token] = None):
        if found is None:
            message = f"Expected {expected} at end of input"
            line = column = None
        else:
            message = f"Expected {expected}, got {found.type.description}"
            line, column = found.line, found.column
        super().__init__(
            message,
            line,
            column,
            code="P001",
            help_text=f"The parser expected to see {expected} at this position.",
        )
        self.expected = expected
        self.found = found


class ExpectedExpression(ParseError):
    """No integer literal or identifier where an expression must start."""

    def __init__(self, found: Optional[Token] = None):
        line = found.line if found is not None else None
        column = found.column if found is not None else None
        super().__init__(
            "Expected expression",
            line,
            column,
            code="P002",
            help_text="An expression starts with an integer literal or a variable name.",
        )
        self.found = found


class MissingMainFunction(ParseError):
    """The program defines no function named `main`."""

    def __init__(self):
        super().__init__(
            "Program must have a 'main' function",
            code="P003",
            help_text="Add `fn main() { ... }` as the program entry point.",
        )


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected token not found",
    "P002": "Expected expression",
    "P003": "Missing main function",
}


def create_top_level_error(found: Token) -> ExpectedToken:
    """Create the error for a statement written outside of a function."""
    return ExpectedToken("function definition (top-level statements not allowed)", found)
