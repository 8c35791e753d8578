"""
Husk Code Generation Package

Lowers the AST to LLVM IR with llvmlite.

Author: xwest
"""

from .generator import CodeGenerator, generate_module
from .symbol_table import SymbolTable
from .errors import (
    CodeGenError, UndefinedVariable, DuplicateVariable, UnsupportedOperator,
    IntegerOutOfRange, DuplicateFunction, ReservedFunctionName,
)

__all__ = [
    "CodeGenerator",
    "generate_module",
    "SymbolTable",
    "CodeGenError",
    "UndefinedVariable",
    "DuplicateVariable",
    "UnsupportedOperator",
    "IntegerOutOfRange",
    "DuplicateFunction",
    "ReservedFunctionName",
]
