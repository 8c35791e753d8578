"""
Diagnostics for the Husk compiler.

Holds the base exception every compiler stage raises and the reporter that
renders an error message together with the offending source line and a caret.

Author: xwest
"""

from typing import List, Optional

from colorama import Fore, Style

_DISPLAY_SPACES = {ord(c): " " for c in "\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029"}


class CompilerError(Exception):
    """
    Base class for every error raised by the Husk pipeline.

    Carries the bare message, an optional 1-based line/column, a short error
    code and help text. Once passed through ErrorReporter.report() the fully
    formatted text is available as ``diagnostic`` and returned by ``str()``.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.code = code
        self.help_text = help_text
        self.diagnostic: Optional[str] = None

    @property
    def location(self):
        """(line, column) or None for program-level errors."""
        if self.line is None or self.column is None:
            return None
        return self.line, self.column

    def __str__(self) -> str:
        if self.diagnostic is not None:
            return self.diagnostic
        return self.message


class ErrorReporter:
    """
    Formats messages with source context.

    With a location the output shows the previous line (when there is one),
    the offending line, and a caret under the reported column:

        Error: Unexpected character '@' in demo.hk
          1 | fn main() {
          2 |   let x = @;
                      ^
    """

    def __init__(self, source: str, filename: str = "", use_color: bool = True):
        self.source = source
        self.filename = filename
        self.use_color = use_color
        # Only '\n' ends a line, as in the lexer; other vertical whitespace
        # is shown as a space so columns still line up.
        self.lines: List[str] = [
            line.rstrip("\r").translate(_DISPLAY_SPACES) for line in source.split("\n")
        ]

    def format(self, message: str, line: Optional[int] = None,
               column: Optional[int] = None) -> str:
        """Render a message, with source context when a location is given."""
        location_info = f" in {self.filename}" if self.filename else ""
        header = f"{self._label('Error:')} {message}{location_info}"

        if line is None or column is None or not 1 <= line <= len(self.lines):
            return header

        result = [header]
        if line > 1:
            result.append(f"  {line - 1} | {self.lines[line - 2]}")

        source_line = self.lines[line - 1]
        result.append(f"  {line} | {source_line}")

        # Clamp so a caret at end of input still lands just past the line
        actual_column = max(1, min(column, len(source_line) + 1))
        prefix_len = len(f"  {line} | ")
        result.append(" " * (prefix_len + actual_column - 1) + self._caret())

        return "\n".join(result)

    def report(self, error: CompilerError) -> CompilerError:
        """Attach the formatted diagnostic to an error and return it."""
        error.diagnostic = self.format(error.message, error.line, error.column)
        return error

    def _label(self, text: str) -> str:
        if not self.use_color:
            return text
        return f"{Style.BRIGHT}{Fore.RED}{text}{Style.RESET_ALL}"

    def _caret(self) -> str:
        if not self.use_color:
            return "^"
        return f"{Fore.RED}^{Style.RESET_ALL}"
