"""
Command line interface for the Husk compiler.

    husk build hello.hk               # writes hello.ll
    husk build hello.hk --emit exe    # links ./hello with $CC
    husk run hello.hk                 # JIT-executes main
    husk tokens hello.hk              # dumps the token stream

Any compiler error is printed to stderr and the process exits with status 1.

Author: xwest
"""

import logging
import sys
from pathlib import Path

import click
import colorama

from . import __version__
from .diagnostics import CompilerError
from .options import CompilerOptions
from .pipeline import compile_file, tokenize
from .backend import LLVMBackend

logger = logging.getLogger(__name__)

EMIT_SUFFIXES = {
    "llvm-ir": ".ll",
    "asm": ".s",
    "obj": ".o",
    "exe": "",
}

LOG_LEVELS = ["debug", "info", "warning", "error"]


def _fail(error: CompilerError):
    click.echo(str(error), err=True)
    if error.help_text:
        click.echo(f"help: {error.help_text}", err=True)
    logger.debug("Compilation stopped with %s", error.code or type(error).__name__)
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="husk")
@click.option("--log", "log_level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default="warning", show_default=True, help="Log level.")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
@click.pass_context
def main(ctx, log_level, no_color):
    """Husk compiler."""
    logging.basicConfig(level=getattr(logging, log_level.upper()),
                        format="%(levelname)s %(name)s: %(message)s")
    colorama.just_fix_windows_console()

    options = CompilerOptions.from_env()
    if no_color or not sys.stderr.isatty():
        options = options.with_changes(use_color=False)
    ctx.obj = options


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              help="Output path (defaults to SOURCE with the matching suffix).")
@click.option("--emit", type=click.Choice(list(EMIT_SUFFIXES)), default="llvm-ir",
              show_default=True, help="What to produce.")
@click.pass_obj
def build(options, source, output, emit):
    """Compile SOURCE to LLVM IR, assembly, an object file or an executable."""
    if output is None:
        output = source.with_suffix(EMIT_SUFFIXES[emit])
        if output == source:
            output = source.with_suffix(".out")

    try:
        module = compile_file(source, options)
        backend = LLVMBackend(options.target_triple, options.linker)
        if emit == "exe":
            backend.link_executable(module, str(output))
        else:
            backend.write_output(module, str(output), emit)
    except CompilerError as e:
        _fail(e)

    logger.info("Built %s", output)


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def run(options, source):
    """JIT-compile SOURCE and run main; its result becomes the exit status."""
    try:
        module = compile_file(source, options)
        result = LLVMBackend(linker=options.linker).run(module)
    except CompilerError as e:
        _fail(e)

    sys.exit(result & 0xFF)


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def tokens(options, source):
    """Print the tokens of SOURCE, one per line."""
    try:
        token_list = tokenize(source.read_text(encoding="utf-8"), str(source), options)
    except CompilerError as e:
        _fail(e)

    for token in token_list:
        click.echo(f"{token.line}:{token.column}\t{token}")


if __name__ == "__main__":
    main()
