"""
Husk Compiler Package

A small compiled language: integer variables, arithmetic, print and return,
lowered to LLVM IR through llvmlite.

Architecture:
    husk/
    ├── lexer/           # Pluggable token matchers and the tokenizer
    ├── parser/          # Recursive descent parser and AST
    ├── codegen/         # Symbol table and LLVM IR generation
    ├── backend/         # Verification, emission, linking, JIT
    ├── diagnostics.py   # Error base class and source-context reporter
    ├── pipeline.py      # lex -> parse -> generate driver
    └── cli.py           # `husk` command

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .diagnostics import CompilerError, ErrorReporter
from .options import CompilerOptions
from .lexer import Lexer
from .parser import Parser
from .codegen import CodeGenerator
from .pipeline import compile_source, compile_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "CodeGenerator",
    "CompilerError",
    "ErrorReporter",
    "CompilerOptions",

    # Pipeline
    "compile_source",
    "compile_file",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
