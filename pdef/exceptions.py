"""
Exception hierarchy for pdef.

Lexical problems never raise: the tokenizer reports them as ERROR tokens and
the parser turns them into syntax errors. Only two things raise:

- ParseError: a token did not fit the grammar (recoverable, accumulated)
- SourceReadError: the input stream failed mid-read (fatal)
"""

from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .frontend.tokenizer import Token, TokenType


class PDefError(Exception):
    """Base class for all pdef errors."""


class ParseError(PDefError):
    """Exception raised for syntax errors.

    Attributes:
        message: Human-readable description of what was expected
        token: The offending lookahead token
        expected: Token types that would have been accepted here
    """

    def __init__(self, message: str, token: "Token", expected: Tuple["TokenType", ...] = ()):
        self.message = message
        self.token = token
        self.expected = tuple(expected)
        super().__init__(self._format_message())

    @property
    def lineno(self) -> int:
        return self.token.line

    @property
    def col_offset(self) -> int:
        return self.token.column

    def _format_message(self) -> str:
        seen = self.token.type.name
        if self.token.text:
            seen += f"({self.token.text!r})"
        return f"Line {self.lineno}, col {self.col_offset}: {self.message}, but saw {seen}"


class SourceReadError(PDefError):
    """Exception raised when the underlying character stream cannot be read."""

    def __init__(self, message: str, lineno: int = 0, col_offset: int = 0):
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.lineno > 0:
            return f"Line {self.lineno}, col {self.col_offset}: {self.message}"
        return self.message
