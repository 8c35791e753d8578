"""
Code generation error handling for Husk.

Name resolution happens only while lowering, so undefined and duplicate
variables are reported here rather than by the parser.

Author: xwest
"""

from typing import Optional

from ..diagnostics import CompilerError
from ..lexer.tokens import Token


class CodeGenError(CompilerError):
    """
    Base class for lowering errors.

    ``function`` is filled in by the generator; once set the message is
    prefixed with the function it occurred in.
    """

    def __init__(self, detail: str, token: Optional[Token] = None,
                 code: Optional[str] = None, help_text: Optional[str] = None):
        line = token.line if token is not None else None
        column = token.column if token is not None else None
        super().__init__(detail, line, column, code=code, help_text=help_text)
        self.detail = detail
        self.function: Optional[str] = None

    def in_function(self, name: str) -> "CodeGenError":
        self.function = name
        self.message = f"In function '{name}': {self.detail}"
        return self


class UndefinedVariable(CodeGenError):
    def __init__(self, name: str, token: Optional[Token] = None):
        super().__init__(
            f"Undefined variable: {name}",
            token,
            code="G001",
            help_text=f"Declare '{name}' with `let` before using it.",
        )
        self.name = name


class DuplicateVariable(CodeGenError):
    def __init__(self, name: str, token: Optional[Token] = None):
        super().__init__(
            f"Variable '{name}' is already declared in this scope",
            token,
            code="G002",
            help_text="Variables cannot be redeclared within one function.",
        )
        self.name = name


class UnsupportedOperator(CodeGenError):
    def __init__(self, op: str, token: Optional[Token] = None):
        super().__init__(f"Unsupported binary operator '{op}'", token, code="G003")
        self.op = op


class IntegerOutOfRange(CodeGenError):
    """Literal does not fit the 32-bit signed integer type."""

    def __init__(self, literal: str, token: Optional[Token] = None):
        super().__init__(
            f"Integer literal {literal} does not fit in i32",
            token,
            code="G004",
            help_text="Integer literals must be at most 2147483647.",
        )
        self.literal = literal


class DuplicateFunction(CodeGenError):
    def __init__(self, name: str, token: Optional[Token] = None):
        super().__init__(
            f"Function '{name}' is already defined",
            token,
            code="G005",
            help_text="Every function in a program needs a distinct name.",
        )
        self.name = name


class ReservedFunctionName(CodeGenError):
    """The name belongs to a runtime function the compiler declares itself."""

    def __init__(self, name: str, token: Optional[Token] = None):
        super().__init__(
            f"Function name '{name}' is reserved by the runtime",
            token,
            code="G006",
            help_text="Choose another name; 'print' output goes through this function.",
        )
        self.name = name


CODEGEN_ERROR_CODES = {
    "G001": "Undefined variable",
    "G002": "Duplicate variable",
    "G003": "Unsupported operator",
    "G004": "Integer literal out of range",
    "G005": "Duplicate function",
    "G006": "Reserved function name",
}
