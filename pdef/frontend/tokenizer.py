"""
Tokenizer module for pdef.

This module implements the PDef-light tokenizer: a character-level finite
state machine that pulls characters from an open text stream on demand and
turns them into Token objects. The lexical rules are:

     Lexeme                         TokenType
     ,  =  {  }  (  )               COMMA ASSIGN LBRACE RBRACE LPAREN RPAREN
     +  -  *  /  %                  ADD SUB MUL DIV MOD
     int | char | float             TYPE
     [letters]+                     IDENT
     0 | [1-9][0-9]*                INT
     (0 | [1-9][0-9]*).[0-9]+       FLOAT
     0[0-9]+ and N. (no fraction)   ERROR
     end of input                   EOF

Tokens extend as far as they legally can. The first character that cannot
continue a token is pushed back (one slot) so the next token starts with it.
"""

import io
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterator, List, Optional, TextIO, Tuple

from ..exceptions import SourceReadError
from ..utils.trace import NULL_CHANNEL, TraceChannel


class TokenType(Enum):
    """Token types for PDef-light."""
    # Punctuation
    COMMA = auto()       # ,
    ASSIGN = auto()      # =
    LBRACE = auto()      # {
    RBRACE = auto()      # }
    LPAREN = auto()      # (
    RPAREN = auto()      # )

    # Operators
    ADD = auto()         # +
    SUB = auto()         # -
    MUL = auto()         # *
    DIV = auto()         # /
    MOD = auto()         # %

    # Words
    TYPE = auto()        # int, char, float
    IDENT = auto()       # letters only

    # Literals
    INT = auto()
    FLOAT = auto()

    # Special
    ERROR = auto()       # malformed literal or stray character
    EOF = auto()         # end of input


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        type: The token type
        text: The exact lexeme ("" for EOF)
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
    """
    type: TokenType
    text: str
    line: int
    column: int

    def __str__(self) -> str:
        if self.text:
            return f"{self.type.name}({self.text!r}) <{self.line},{self.column}>"
        return f"{self.type.name} <{self.line},{self.column}>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, line={self.line}, col={self.column})"


class _State(Enum):
    START = auto()
    IDENT = auto()
    ZERO = auto()
    INT = auto()
    PERIOD = auto()
    FLOAT = auto()
    ERROR_INT = auto()
    ERROR_FLOAT = auto()
    DONE = auto()


_EOF = ""
_BLANKS = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")


class Tokenizer:
    """Pull-based tokenizer over a text stream.

    The tokenizer only reads from ``stream``; opening and closing it is the
    caller's job. Every call to ``next_token`` consumes exactly the characters
    of one token (plus any blanks before it).

    Example:
        >>> tokenizer = Tokenizer(io.StringIO("{int x}"))
        >>> tokenizer.next_token()
        Token(LBRACE, '{', line=1, col=1)
    """

    _PUNCTUATION: Dict[str, TokenType] = {
        ',': TokenType.COMMA,
        '=': TokenType.ASSIGN,
        '{': TokenType.LBRACE,
        '}': TokenType.RBRACE,
        '(': TokenType.LPAREN,
        ')': TokenType.RPAREN,
        '+': TokenType.ADD,
        '-': TokenType.SUB,
        '*': TokenType.MUL,
        '/': TokenType.DIV,
        '%': TokenType.MOD,
    }

    _TYPE_NAMES = frozenset({"int", "char", "float"})

    def __init__(
        self,
        stream: TextIO,
        echo: bool = False,
        echo_stream: Optional[TextIO] = None,
        trace: Optional[TraceChannel] = None,
    ):
        """Initialize the tokenizer.

        Args:
            stream: Open text stream supporting ``read(1)``
            echo: Write each character to ``echo_stream`` as it is consumed
            echo_stream: Destination for echoed input (default: sys.stdout)
            trace: Trace channel for the state machine (default: off)
        """
        self._stream = stream
        self._echo = echo
        self._echo_stream = echo_stream
        self._trace = trace or NULL_CHANNEL

        # Position of the next character to be read
        self._line = 1
        self._column = 1
        # Position before the most recent read, restored on pushback
        self._previous: Tuple[int, int] = (1, 1)
        self._peeked: Optional[str] = None
        self._exhausted = False

        # Current token being assembled
        self._text = ""
        self._kind = TokenType.ERROR

        self._handlers: Dict[_State, Callable[[str], _State]] = {
            _State.START: self._in_start,
            _State.IDENT: self._in_ident,
            _State.ZERO: self._in_zero,
            _State.INT: self._in_int,
            _State.PERIOD: self._in_period,
            _State.FLOAT: self._in_float,
            _State.ERROR_INT: self._in_error_int,
            _State.ERROR_FLOAT: self._in_error_float,
        }

    @property
    def position(self) -> Tuple[int, int]:
        """(line, column) of the next character to be read."""
        return self._line, self._column

    def next_token(self) -> Token:
        """Read the next token from the stream.

        Returns:
            The next Token; EOF once the stream is exhausted

        Raises:
            SourceReadError: If the stream cannot be read
        """
        self._trace.show("Entering next_token")
        state = _State.START
        self._text = ""
        self._kind = TokenType.ERROR
        start_line, start_column = self._line, self._column

        while state is not _State.DONE:
            if state is _State.START:
                # Blanks are skipped, so the token starts at the next read
                start_line, start_column = self._line, self._column
            ch = self._read_char()
            self._trace.show("\tEntering state -- %s: %r", state.name, ch)
            next_state = self._handlers[state](ch)
            self._trace.show("\tLeaving state -- %s: %r", state.name, ch)
            state = next_state

        token = Token(self._kind, self._text, start_line, start_column)
        self._trace.show("Leaving next_token: %s", token)
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    # State handlers: each consumes ``ch`` or pushes it back, and returns the
    # next state.

    def _in_start(self, ch: str) -> _State:
        if ch in _BLANKS:
            return _State.START
        if ch == _EOF:
            self._kind = TokenType.EOF
            return _State.DONE
        self._text += ch
        if ch == "0":
            return _State.ZERO
        if ch in _DIGITS:
            return _State.INT
        if ch.isalpha():
            return _State.IDENT
        self._kind = self._PUNCTUATION.get(ch, TokenType.ERROR)
        return _State.DONE

    def _in_ident(self, ch: str) -> _State:
        if ch.isalpha():
            self._text += ch
            return _State.IDENT
        kind = TokenType.TYPE if self._text in self._TYPE_NAMES else TokenType.IDENT
        return self._finish(ch, kind)

    def _in_zero(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.ERROR_INT
        if ch == ".":
            self._text += ch
            return _State.PERIOD
        return self._finish(ch, TokenType.INT)

    def _in_int(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.INT
        if ch == ".":
            self._text += ch
            return _State.PERIOD
        return self._finish(ch, TokenType.INT)

    def _in_period(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.FLOAT
        # The period stays in the malformed lexeme
        return self._finish(ch, TokenType.ERROR)

    def _in_float(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.FLOAT
        return self._finish(ch, TokenType.FLOAT)

    def _in_error_int(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.ERROR_INT
        if ch == ".":
            self._text += ch
            return _State.ERROR_FLOAT
        return self._finish(ch, TokenType.ERROR)

    def _in_error_float(self, ch: str) -> _State:
        if ch in _DIGITS:
            self._text += ch
            return _State.ERROR_FLOAT
        return self._finish(ch, TokenType.ERROR)

    def _finish(self, ch: str, kind: TokenType) -> _State:
        """Close the current token, returning ``ch`` to the stream."""
        self._put_back(ch)
        self._kind = kind
        return _State.DONE

    # Character helpers

    def _read_char(self) -> str:
        """Consume one character, or return "" at end of input."""
        self._previous = (self._line, self._column)

        if self._peeked is not None:
            ch = self._peeked
            self._peeked = None
        elif self._exhausted:
            ch = _EOF
        else:
            try:
                ch = self._stream.read(1)
            except (OSError, UnicodeDecodeError) as e:
                raise SourceReadError(
                    f"Could not read input: {e}", self._line, self._column
                ) from e
            if ch == _EOF:
                self._exhausted = True
            elif self._echo:
                (self._echo_stream or sys.stdout).write(ch)

        if ch == "\n":
            self._line += 1
            self._column = 1
        elif ch != _EOF:
            self._column += 1
        return ch

    def _put_back(self, ch: str) -> None:
        """Return the last character read so the next read sees it again."""
        if ch == _EOF:
            return
        self._trace.show("Pushing back %r", ch)
        if self._peeked is not None:
            raise RuntimeError("pushback slot already holds a character")
        self._peeked = ch
        self._line, self._column = self._previous


def tokenize_source(source: str, **kwargs) -> List[Token]:
    """Convenience function to tokenize a string.

    Args:
        source: PDef-light source text
        **kwargs: Passed through to Tokenizer

    Returns:
        List of Token objects ending with EOF
    """
    return list(Tokenizer(io.StringIO(source), **kwargs))
