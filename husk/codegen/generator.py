"""
LLVM IR generator for Husk.

Walks the AST and lowers it to an llvmlite IR module. Every variable lives in
an i32 stack slot (alloca) registered in a per-function SymbolTable; print
statements call the C runtime's printf.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from llvmlite import ir

from ..lexer.tokens import Token, TokenType
from ..parser.ast_nodes import (
    Program, Function, Statement, LetStmt, PrintStmt, ExprStmt, ReturnStmt,
    Expression, PrimaryExpr, BinaryExpr,
)
from .symbol_table import SymbolTable
from .errors import (
    CodeGenError, UndefinedVariable, DuplicateVariable, UnsupportedOperator,
    IntegerOutOfRange, DuplicateFunction, ReservedFunctionName,
)

logger = logging.getLogger(__name__)

I32 = ir.IntType(32)
I8_PTR = ir.IntType(8).as_pointer()

I32_MIN = -(2 ** 31)
I32_MAX = 2 ** 31 - 1

PRINT_FORMAT = "%d\n"

# Symbols declared by the generator for the C runtime
RESERVED_NAMES = frozenset({"printf"})


@dataclass
class FunctionContext:
    """State for the function currently being lowered."""
    name: str
    function: ir.Function
    builder: ir.IRBuilder
    symbols: SymbolTable


class CodeGenerator:
    """
    Generates LLVM IR from a Husk Program.

    Each function becomes `i32 name()` with a single `entry` block. A function
    whose body contains no return statement gets an implicit `ret i32 0`.
    """

    def __init__(self, module_name: str = "husk", target_triple: Optional[str] = None):
        self.module_name = module_name
        self.target_triple = target_triple
        self.module: Optional[ir.Module] = None
        self.context: Optional[FunctionContext] = None
        self._printf: Optional[ir.Function] = None
        self._format_string: Optional[ir.GlobalVariable] = None

        self._statement_handlers: Dict[Type, Callable[[Statement], None]] = {
            LetStmt: self._generate_let,
            PrintStmt: self._generate_print,
            ExprStmt: self._generate_expression_statement,
            ReturnStmt: self._generate_return,
        }
        self._expression_handlers: Dict[Type, Callable[[Expression], ir.Value]] = {
            PrimaryExpr: self._generate_primary,
            BinaryExpr: self._generate_binary,
        }
        self._binary_ops: Dict[TokenType, Callable[[ir.IRBuilder], Callable]] = {
            TokenType.PLUS: lambda b: b.add,
            TokenType.MINUS: lambda b: b.sub,
            TokenType.STAR: lambda b: b.mul,
            TokenType.FSLASH: lambda b: b.sdiv,
        }
        self._op_names = {
            TokenType.PLUS: "addtmp",
            TokenType.MINUS: "subtmp",
            TokenType.STAR: "multmp",
            TokenType.FSLASH: "divtmp",
        }

    def generate(self, program: Program) -> ir.Module:
        """
        Lower a whole program.

        Returns:
            The llvmlite IR module

        Raises:
            CodeGenError: on the first undefined or duplicate variable
        """
        self.module = ir.Module(name=self.module_name)
        if self.target_triple:
            self.module.triple = self.target_triple
        self._printf = None
        self._format_string = None

        for func in program.functions:
            self.generate_function(func)

        logger.debug("Generated module %s with %d functions",
                     self.module_name, len(program.functions))
        return self.module

    def generate_function(self, func: Function) -> ir.Function:
        """Lower one function into the current module."""
        name = func.name_text
        if name in RESERVED_NAMES:
            raise ReservedFunctionName(name, func.name).in_function(name)
        if name in self.module.globals:
            raise DuplicateFunction(name, func.name).in_function(name)

        function = ir.Function(self.module, ir.FunctionType(I32, []), name=name)
        entry = function.append_basic_block(name="entry")
        self.context = FunctionContext(name, function, ir.IRBuilder(entry), SymbolTable(name))

        try:
            for stmt in func.body:
                self.generate_statement(stmt)
        except CodeGenError as e:
            e.in_function(name)
            raise

        builder = self.context.builder
        if not any(isinstance(stmt, ReturnStmt) for stmt in func.body):
            builder.ret(ir.Constant(I32, 0))
        elif not builder.block.is_terminated:
            # Code after a return went into a dead block
            builder.unreachable()

        logger.debug("Generated function %s (%d variables)", name, len(self.context.symbols))
        self.context = None
        return function

    def generate_statement(self, stmt: Statement) -> None:
        handler = self._statement_handlers.get(type(stmt))
        if handler is None:
            raise TypeError(f"Unhandled statement type: {type(stmt).__name__}")

        builder = self.context.builder
        if builder.block.is_terminated:
            dead = self.context.function.append_basic_block(name="after.return")
            builder.position_at_end(dead)

        handler(stmt)

    def generate_expression(self, expr: Expression) -> ir.Value:
        handler = self._expression_handlers.get(type(expr))
        if handler is None:
            raise TypeError(f"Unhandled expression type: {type(expr).__name__}")
        return handler(expr)

    # Statements

    def _generate_let(self, stmt: LetStmt) -> None:
        name = stmt.name.value
        symbols = self.context.symbols
        if name in symbols:
            raise DuplicateVariable(name, stmt.name)

        slot = self.context.builder.alloca(I32, name=name)
        value = self.generate_expression(stmt.expr)
        self.context.builder.store(value, slot)
        symbols.define(name, slot)

    def _generate_print(self, stmt: PrintStmt) -> None:
        value = self.generate_expression(stmt.expr)
        builder = self.context.builder
        fmt = builder.bitcast(self._get_format_string(), I8_PTR)
        builder.call(self._get_printf(), [fmt, value])

    def _generate_expression_statement(self, stmt: ExprStmt) -> None:
        # Evaluated for side effects; the value is dropped
        self.generate_expression(stmt.expr)

    def _generate_return(self, stmt: ReturnStmt) -> None:
        value = self.generate_expression(stmt.expr)
        self.context.builder.ret(value)

    # Expressions

    def _generate_primary(self, primary: PrimaryExpr) -> ir.Value:
        if primary.int_lit is not None:
            return self._generate_integer_literal(primary.int_lit)
        return self._generate_variable_access(primary.ident)

    def _generate_integer_literal(self, token: Token) -> ir.Constant:
        value = int(token.value)
        if not I32_MIN <= value <= I32_MAX:
            raise IntegerOutOfRange(token.value, token)
        return ir.Constant(I32, value)

    def _generate_variable_access(self, token: Token) -> ir.Value:
        name = token.value
        slot = self.context.symbols.lookup(name)
        if slot is None:
            raise UndefinedVariable(name, token)
        return self.context.builder.load(slot, name=name)

    def _generate_binary(self, expr: BinaryExpr) -> ir.Value:
        lhs = self._generate_primary(expr.lhs)
        rhs = self.generate_expression(expr.rhs)

        op_type = expr.op.type
        emit = self._binary_ops.get(op_type)
        if emit is None:
            raise UnsupportedOperator(expr.op.lexeme, expr.op)

        # sdiv truncates toward zero; dividing by zero is left to the target
        return emit(self.context.builder)(lhs, rhs, name=self._op_names[op_type])

    # Runtime support

    def _get_printf(self) -> ir.Function:
        """Declare `i32 printf(i8*, ...)` once per module."""
        if self._printf is None:
            printf_type = ir.FunctionType(I32, [I8_PTR], var_arg=True)
            self._printf = ir.Function(self.module, printf_type, name="printf")
        return self._printf

    def _get_format_string(self) -> ir.GlobalVariable:
        """Private constant holding "%d\\n" with its NUL terminator."""
        if self._format_string is None:
            data = bytearray(PRINT_FORMAT.encode("ascii") + b"\0")
            fmt_type = ir.ArrayType(ir.IntType(8), len(data))
            fmt = ir.GlobalVariable(self.module, fmt_type, name=".fmt.int")
            fmt.linkage = "private"
            fmt.global_constant = True
            fmt.initializer = ir.Constant(fmt_type, data)
            self._format_string = fmt
        return self._format_string


def generate_module(program: Program, module_name: str = "husk",
                    target_triple: Optional[str] = None) -> ir.Module:
    """Convenience function to lower a parsed program."""
    return CodeGenerator(module_name, target_triple).generate(program)
