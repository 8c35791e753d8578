"""
Abstract Syntax Tree node definitions for Husk.

The AST is pure data: frozen dataclasses grouped into closed unions. Every
node keeps the tokens it was built from, so later stages can point back at
the source.

Author: xwest
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..lexer.tokens import Token, TokenType


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class PrimaryExpr:
    """Integer literal or variable reference; exactly one is set."""
    int_lit: Optional[Token] = None
    ident: Optional[Token] = None

    def __post_init__(self):
        if (self.int_lit is None) == (self.ident is None):
            raise ValueError("PrimaryExpr needs exactly one of int_lit or ident")
        if self.int_lit is not None and self.int_lit.type != TokenType.INT_LIT:
            raise ValueError(f"int_lit must be an INT_LIT token, got {self.int_lit.type.name}")
        if self.ident is not None and self.ident.type != TokenType.IDENT:
            raise ValueError(f"ident must be an IDENT token, got {self.ident.type.name}")

    @property
    def token(self) -> Token:
        return self.int_lit if self.int_lit is not None else self.ident


@dataclass(frozen=True)
class BinaryExpr:
    """
    Binary arithmetic.

    The left operand is always a single primary; the right operand is a full
    expression, so `a - b - c` is `a - (b - c)`.
    """
    lhs: PrimaryExpr
    op: Token
    rhs: "Expression"


Expression = Union[PrimaryExpr, BinaryExpr]


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class LetStmt:
    """let <name> = <expr>;"""
    name: Token
    expr: Expression


@dataclass(frozen=True)
class PrintStmt:
    """print(<expr>);"""
    expr: Expression


@dataclass(frozen=True)
class ExprStmt:
    """<expr>;"""
    expr: Expression


@dataclass(frozen=True)
class ReturnStmt:
    """return <expr>;"""
    expr: Expression


Statement = Union[LetStmt, PrintStmt, ExprStmt, ReturnStmt]


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass(frozen=True)
class Function:
    """fn <name>() { <statements> }"""
    name: Token
    body: Tuple[Statement, ...] = ()

    @property
    def name_text(self) -> str:
        return self.name.value or self.name.lexeme


@dataclass(frozen=True)
class Program:
    """Root node: the functions of one source file, in order."""
    functions: Tuple[Function, ...] = ()

    def has_main(self) -> bool:
        return self.get_function("main") is not None

    def get_function(self, name: str) -> Optional[Function]:
        for func in self.functions:
            if func.name_text == name:
                return func
        return None
