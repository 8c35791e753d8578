"""
Husk compilation pipeline.

Runs the stages strictly in order (tokenize all, parse all, generate all).
The first error from any stage is raised with its diagnostic already
formatted, so `str(error)` is the text to show the user.

Author: xwest
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from llvmlite import ir

from .diagnostics import ErrorReporter
from .options import CompilerOptions
from .lexer import Lexer, Token
from .parser import Parser, Program
from .codegen import CodeGenerator, CodeGenError

logger = logging.getLogger(__name__)


def _reporter(source: str, filename: str, options: CompilerOptions) -> ErrorReporter:
    return ErrorReporter(source, filename, use_color=options.use_color)


def tokenize(source: str, filename: str = "",
             options: Optional[CompilerOptions] = None) -> List[Token]:
    """Run only the lexer."""
    options = options or CompilerOptions()
    return Lexer(source, filename, reporter=_reporter(source, filename, options)).tokenize()


def parse(source: str, filename: str = "",
          options: Optional[CompilerOptions] = None) -> Program:
    """Run the lexer and parser."""
    options = options or CompilerOptions()
    reporter = _reporter(source, filename, options)
    tokens = Lexer(source, filename, reporter=reporter).tokenize()
    return Parser(tokens, reporter).parse()


def compile_source(source: str, filename: str = "",
                   options: Optional[CompilerOptions] = None) -> ir.Module:
    """
    Compile Husk source text to an LLVM IR module.

    Args:
        source: Source code string
        filename: Used only to decorate diagnostics
        options: Compiler options; defaults apply when omitted

    Returns:
        The generated llvmlite IR module

    Raises:
        CompilerError: the first lex, parse or codegen error
    """
    options = options or CompilerOptions()
    reporter = _reporter(source, filename, options)

    tokens = Lexer(source, filename, reporter=reporter).tokenize()
    program = Parser(tokens, reporter).parse()

    generator = CodeGenerator(options.module_name, options.target_triple)
    try:
        module = generator.generate(program)
    except CodeGenError as e:
        reporter.report(e)
        raise

    logger.info("Compiled %s", filename or "<source>")
    return module


def compile_file(path: Union[str, Path],
                 options: Optional[CompilerOptions] = None) -> ir.Module:
    """Read a source file and compile it."""
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    options = options or CompilerOptions()
    if options.module_name == CompilerOptions.module_name:
        options = options.with_changes(module_name=path.stem)
    return compile_source(source, str(path), options)
