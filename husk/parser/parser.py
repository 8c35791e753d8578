"""
Husk recursive descent parser.

Grammar:

    Program    := Function*
    Function   := 'fn' ident '(' ')' '{' Statement* '}'
    Statement  := LetStmt | PrintStmt | ReturnStmt | ExprStmt
    LetStmt    := 'let' ident '=' Expr ';'
    PrintStmt  := 'print' '(' Expr ')' ';'
    ReturnStmt := 'return' Expr ';'
    ExprStmt   := Expr ';'
    Expr       := Primary ( ('+'|'-'|'*'|'/') Expr )?
    Primary    := IntLit | Ident

There is no operator precedence: the right operand of a binary operator is a
whole expression, so chains group to the right.

Author: xwest
"""

import logging
from typing import List, Optional

from ..lexer.tokens import Token, TokenType, BINARY_OPERATORS
from ..diagnostics import CompilerError, ErrorReporter
from .ast_nodes import (
    Program, Function, Statement, LetStmt, PrintStmt, ExprStmt, ReturnStmt,
    Expression, PrimaryExpr, BinaryExpr,
)
from .errors import (
    ExpectedToken, ExpectedExpression, MissingMainFunction, create_top_level_error,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Husk parser.

    One token of lookahead, no error recovery: the first structural mismatch
    raises a ParseError.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
            reporter: Formats diagnostics with source context; without one
                errors carry only their bare message
        """
        self.tokens = tokens
        self.current = 0
        self.reporter = reporter

    def parse(self) -> Program:
        """
        Parse the token list into an AST.

        Raises:
            ParseError: on the first syntax error, or MissingMainFunction
                when the program has no `main`
        """
        self.current = 0
        functions: List[Function] = []

        while self._peek() is not None:
            token = self._peek()
            if token.type != TokenType.FN:
                raise self._error(create_top_level_error(token))
            self._advance()
            functions.append(self._parse_function())

        program = Program(tuple(functions))
        if not program.has_main():
            raise self._error(MissingMainFunction())

        logger.debug("Parsed %d functions", len(functions))
        return program

    def _parse_function(self) -> Function:
        """Parse `name() { ... }` after the `fn` keyword."""
        name = self._expect(TokenType.IDENT, "function name after 'fn'")
        self._expect(TokenType.OPEN_PAREN, "'('")
        self._expect(TokenType.CLOSE_PAREN, "')' (parameters not yet supported)")
        self._expect(TokenType.OPEN_CURLY, "'{' to start function body")

        body: List[Statement] = []
        while self._peek() is not None and not self._check(TokenType.CLOSE_CURLY):
            body.append(self._parse_statement())

        self._expect(TokenType.CLOSE_CURLY, "'}' to end function body")
        return Function(name, tuple(body))

    def _parse_statement(self) -> Statement:
        token = self._peek()

        if token.type == TokenType.LET:
            self._advance()
            stmt = self._parse_let()
            self._expect_semicolon("let")
            return stmt

        if token.type == TokenType.PRINT:
            self._advance()
            stmt = self._parse_print()
            self._expect_semicolon("print")
            return stmt

        if token.type == TokenType.RETURN:
            self._advance()
            expr = self._parse_expression()
            self._expect_semicolon("return")
            return ReturnStmt(expr)

        expr = self._parse_expression()
        self._expect_semicolon("expression")
        return ExprStmt(expr)

    def _parse_let(self) -> LetStmt:
        # let <ident> = <expr>
        name = self._expect(TokenType.IDENT, "identifier after 'let'")
        self._expect(TokenType.EQ, "'=' after identifier")
        return LetStmt(name, self._parse_expression())

    def _parse_print(self) -> PrintStmt:
        # print ( <expr> )
        self._expect(TokenType.OPEN_PAREN, "'('")
        expr = self._parse_expression()
        self._expect(TokenType.CLOSE_PAREN, "')'")
        return PrintStmt(expr)

    def _parse_expression(self) -> Expression:
        """Parse a primary optionally followed by an operator and another expression."""
        primary = self._parse_primary()
        if primary is None:
            raise self._error(ExpectedExpression(self._peek()))

        token = self._peek()
        if token is not None and token.type in BINARY_OPERATORS:
            op = self._advance()
            return BinaryExpr(primary, op, self._parse_expression())

        return primary

    def _parse_primary(self) -> Optional[PrimaryExpr]:
        if self._check(TokenType.INT_LIT):
            return PrimaryExpr(int_lit=self._advance())
        if self._check(TokenType.IDENT):
            return PrimaryExpr(ident=self._advance())
        return None

    # Utility methods

    def _expect_semicolon(self, context: str) -> Token:
        return self._expect(TokenType.SEMI, f"semicolon after {context}")

    def _expect(self, token_type: TokenType, context: str) -> Token:
        """Consume a token of the given type or raise ExpectedToken."""
        if self._check(token_type):
            return self._advance()
        raise self._error(ExpectedToken(context, self._peek()))

    def _check(self, token_type: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type == token_type

    def _peek(self) -> Optional[Token]:
        """Return the current token without consuming it, None at end of input."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _error(self, error: CompilerError) -> CompilerError:
        if self.reporter is not None:
            return self.reporter.report(error)
        return error


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Raises:
        LexError, ParseError: on the first failure
    """
    from ..lexer import Lexer

    reporter = ErrorReporter(source, filename)
    tokens = Lexer(source, filename, reporter=reporter).tokenize()
    return Parser(tokens, reporter).parse()
