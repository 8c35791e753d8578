"""
Husk Parser Package

Recursive descent parser producing an immutable AST of frozen dataclasses.

Key Features:
- One-token lookahead
- Right-nested binary expressions, no operator precedence
- Fail-fast diagnostics with source locations
- `main` presence checked once the whole program is parsed

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_string
from .errors import ParseError, ExpectedToken, ExpectedExpression, MissingMainFunction

__all__ = [
    # Core parser
    "Parser",
    "parse_string",

    # AST nodes
    "Program", "Function",
    "Statement", "LetStmt", "PrintStmt", "ExprStmt", "ReturnStmt",
    "Expression", "PrimaryExpr", "BinaryExpr",

    # Error handling
    "ParseError", "ExpectedToken", "ExpectedExpression", "MissingMainFunction",
]
