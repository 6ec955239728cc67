"""
Parser module for pdef.

This module provides a recursive descent parser for PDef-light:

    Program     ::= Block EOF
    Block       ::= '{' StmtList '}'
    StmtList    ::= Stmt { ',' Stmt }
    Stmt        ::= Declaration | Assignment | Block
    Declaration ::= TYPE IDENT
    Assignment  ::= IDENT '=' Exp
    Exp         ::= Term { ('+' | '-') Term }
    Term        ::= Factor { ('*' | '/' | '%') Factor }
    Factor      ::= INT | FLOAT | IDENT | '(' Exp ')'

Each nonterminal has one method. Every method is entered with the next token
to examine already in ``self._current``. Syntax errors are raised as
ParseError, caught at statement level, recorded, and recovered from by
skipping to the next ',' or '}' (panic mode).
"""

import io
from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import ParseError
from ..utils.trace import NULL_CHANNEL, TraceChannel
from .tokenizer import Token, TokenType, Tokenizer


# Tokens that can legally follow a statement
_STATEMENT_END = frozenset({TokenType.COMMA, TokenType.RBRACE, TokenType.EOF})

_ADD_OPS = frozenset({TokenType.ADD, TokenType.SUB})
_MUL_OPS = frozenset({TokenType.MUL, TokenType.DIV, TokenType.MOD})
_OPERANDS = (TokenType.INT, TokenType.FLOAT, TokenType.IDENT)


@dataclass
class ParseResult:
    """Result of parsing a program.

    Attributes:
        errors: Every syntax error found, in source order
    """
    errors: List[ParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class Parser:
    """Recursive descent parser for PDef-light.

    Pulls tokens from a Tokenizer one at a time and checks them against the
    grammar. No tree is built; the result is the list of syntax errors.

    Example:
        >>> parser = Parser(Tokenizer(io.StringIO("{int x, x = 1}")))
        >>> parser.parse_program().success
        True
    """

    def __init__(self, tokenizer: Tokenizer, trace: Optional[TraceChannel] = None):
        """Initialize the parser and read the first lookahead token.

        Args:
            tokenizer: Source of tokens
            trace: Trace channel for grammar procedures (default: off)
        """
        self._tokenizer = tokenizer
        self._trace = trace or NULL_CHANNEL
        self._errors: List[ParseError] = []
        self._current: Token = tokenizer.next_token()

    @property
    def current_token(self) -> Token:
        """The lookahead token."""
        return self._current

    def parse_program(self) -> ParseResult:
        """Parse a whole program.

        Grammar Rule: Program ::= Block EOF

        Errors outside any statement (a missing outer brace, tokens after
        the outer block) cannot be resynchronised and end the parse.

        Returns:
            ParseResult listing every syntax error found

        Raises:
            SourceReadError: If the input stream fails
        """
        self._trace.show(">>> Entering parse_program")
        try:
            self._parse_block()
            self._consume(TokenType.EOF)
        except ParseError as e:
            self._report(e)
        self._trace.show("<<< Leaving parse_program")
        return ParseResult(errors=list(self._errors))

    def _parse_block(self) -> None:
        # Block ::= '{' StmtList '}'
        self._trace.show(">>> Entering parse_block")
        self._consume(TokenType.LBRACE)
        self._parse_stmt_list()
        self._consume(TokenType.RBRACE)
        self._trace.show("<<< Leaving parse_block")

    def _parse_stmt_list(self) -> None:
        # StmtList ::= Stmt { ',' Stmt }
        self._trace.show(">>> Entering parse_stmt_list")
        self._parse_stmt()
        while self._current.type is TokenType.COMMA:
            self._consume(TokenType.COMMA)
            self._parse_stmt()
        self._trace.show("<<< Leaving parse_stmt_list")

    def _parse_stmt(self) -> None:
        """Parse one statement, recovering from any error inside it.

        Grammar Rule: Stmt ::= Declaration | Assignment | Block

        On return the lookahead is always a statement terminator
        (COMMA, RBRACE or EOF).
        """
        self._trace.show(">>> Entering parse_stmt")
        try:
            kind = self._current.type
            if kind is TokenType.TYPE:
                self._parse_declaration()
            elif kind is TokenType.IDENT:
                self._parse_assignment()
            elif kind is TokenType.LBRACE:
                self._parse_block()
            else:
                raise ParseError(
                    "Expected a type, identifier or '{' to start a statement",
                    self._current,
                    expected=(TokenType.TYPE, TokenType.IDENT, TokenType.LBRACE),
                )
            if self._current.type not in _STATEMENT_END:
                raise ParseError(
                    "Expected ',' or '}' after a statement",
                    self._current,
                    expected=(TokenType.COMMA, TokenType.RBRACE),
                )
        except ParseError as e:
            self._report(e)
            self._skip_to_statement_end()
        self._trace.show("<<< Leaving parse_stmt")

    def _parse_declaration(self) -> None:
        # Declaration ::= TYPE IDENT
        self._trace.show(">>> Entering parse_declaration")
        self._consume(TokenType.TYPE)
        self._consume(TokenType.IDENT)
        self._trace.show("<<< Leaving parse_declaration")

    def _parse_assignment(self) -> None:
        # Assignment ::= IDENT '=' Exp
        self._trace.show(">>> Entering parse_assignment")
        self._consume(TokenType.IDENT)
        self._consume(TokenType.ASSIGN)
        self._parse_exp()
        self._trace.show("<<< Leaving parse_assignment")

    def _parse_exp(self) -> None:
        # Exp ::= Term { ('+' | '-') Term }
        self._trace.show(">>> Entering parse_exp")
        self._parse_term()
        while self._current.type in _ADD_OPS:
            self._advance()
            self._parse_term()
        self._trace.show("<<< Leaving parse_exp")

    def _parse_term(self) -> None:
        # Term ::= Factor { ('*' | '/' | '%') Factor }
        self._trace.show(">>> Entering parse_term")
        self._parse_factor()
        while self._current.type in _MUL_OPS:
            self._advance()
            self._parse_factor()
        self._trace.show("<<< Leaving parse_term")

    def _parse_factor(self) -> None:
        # Factor ::= INT | FLOAT | IDENT | '(' Exp ')'
        self._trace.show(">>> Entering parse_factor")
        kind = self._current.type
        if kind in _OPERANDS:
            self._advance()
        elif kind is TokenType.LPAREN:
            self._consume(TokenType.LPAREN)
            self._parse_exp()
            self._consume(TokenType.RPAREN)
        else:
            raise ParseError(
                "Expected an integer, float, identifier or '('",
                self._current,
                expected=_OPERANDS + (TokenType.LPAREN,),
            )
        self._trace.show("<<< Leaving parse_factor")

    # Helpers

    def _advance(self) -> None:
        """Replace the lookahead with the next token from the tokenizer."""
        self._current = self._tokenizer.next_token()

    def _consume(self, expected: TokenType) -> None:
        """Match the lookahead against ``expected`` and advance past it.

        Raises:
            ParseError: If the lookahead has another type; the lookahead is
                left in place
        """
        if self._current.type is not expected:
            raise ParseError(f"Expected {expected.name}", self._current, expected=(expected,))
        self._advance()

    def _skip_to_statement_end(self) -> None:
        while self._current.type not in _STATEMENT_END:
            self._trace.show("Skipping %s", self._current)
            self._advance()

    def _report(self, error: ParseError) -> None:
        self._trace.show("Syntax error: %s", error)
        self._errors.append(error)


def parse_source(source: str, trace: Optional[TraceChannel] = None) -> ParseResult:
    """Convenience function to parse a string.

    Args:
        source: PDef-light source text
        trace: Trace channel for the parser

    Returns:
        ParseResult for the program
    """
    parser = Parser(Tokenizer(io.StringIO(source)), trace=trace)
    return parser.parse_program()
