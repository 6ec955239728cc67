"""
Unit tests for the PDef-light recursive descent parser.
"""

import io
import logging

import pytest
from pdef.frontend import Parser, ParseError, ParseResult, Tokenizer, TokenType, parse_source
from pdef.utils import Diagnostics

STMT_START = "Expected a type, identifier or '{' to start a statement"
BAD_FACTOR = "Expected an integer, float, identifier or '('"


class TestParserValid:
    """Tests for programs that parse without errors."""

    @pytest.mark.parametrize("source", [
        "{int x, x = 1}",
        "{float a, a = 1 + 2 * (3 - 4)}",
        "{char c}",
        "{x = y}",
        "{x = 0.5 % y / (z - 1)}",
        "{int x, {char c, c = x}, x = 10}",
        "{{{int deep}}}",
        "{x = ((((1))))}",
        "{x = a - b - c * d * e % f}",
        "{\n\tint x,\n\tx = 1\n}\n",
    ])
    def test_valid_programs(self, source):
        """Test that well-formed programs are accepted."""
        result = parse_source(source)
        assert isinstance(result, ParseResult)
        assert result.success
        assert result.errors == []


class TestParserErrors:
    """Tests for syntax error detection and recovery."""

    def test_missing_statement(self):
        """Test that an assignment without a target is one error."""
        result = parse_source("{int x, = 1}")
        assert not result.success
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.message == STMT_START
        assert error.token.type == TokenType.ASSIGN
        assert (error.lineno, error.col_offset) == (1, 9)
        assert error.expected == (TokenType.TYPE, TokenType.IDENT, TokenType.LBRACE)

    def test_empty_block(self):
        """Test that a block needs at least one statement."""
        result = parse_source("{}")
        assert len(result.errors) == 1
        assert result.errors[0].token.type == TokenType.RBRACE
        assert result.errors[0].col_offset == 2

    def test_empty_nested_block(self):
        """Test that an empty inner block is reported and recovered."""
        result = parse_source("{int x, {}, x = 1}")
        assert len(result.errors) == 1
        assert result.errors[0].col_offset == 10

    def test_missing_separator(self):
        """Test that two statements without a comma are one error."""
        result = parse_source("{int x int y}")
        assert len(result.errors) == 1
        assert result.errors[0].message == "Expected ',' or '}' after a statement"
        assert result.errors[0].token.type == TokenType.TYPE
        assert result.errors[0].col_offset == 8

    def test_errors_accumulate(self):
        """Test that each malformed statement is reported once."""
        result = parse_source("{int 5, x = , y = 1, char}")
        assert [e.col_offset for e in result.errors] == [6, 13, 26]
        assert result.errors[0].expected == (TokenType.IDENT,)
        assert result.errors[1].message == BAD_FACTOR
        assert result.errors[2].token.type == TokenType.RBRACE

    @pytest.mark.parametrize("source, lexeme", [
        ("{x = 012}", "012"),
        ("{x = 1.}", "1."),
        ("{x = 2 + 3.}", "3."),
        ("{x = @}", "@"),
    ])
    def test_lexical_errors(self, source, lexeme):
        """Test that ERROR tokens surface as syntax errors."""
        result = parse_source(source)
        assert len(result.errors) == 1
        assert result.errors[0].token.type == TokenType.ERROR
        assert result.errors[0].token.text == lexeme

    def test_error_token_at_statement_start(self):
        """Test recovery when a statement starts with a malformed literal."""
        result = parse_source("{0.x = 1, int y}")
        assert len(result.errors) == 1
        assert result.errors[0].token.text == "0."

    def test_unbalanced_parenthesis(self):
        """Test that a missing ')' is reported at the closing brace."""
        result = parse_source("{x = (1 + 2}")
        assert len(result.errors) == 1
        assert result.errors[0].expected == (TokenType.RPAREN,)
        assert result.errors[0].token.type == TokenType.RBRACE

    def test_inner_block_recovery(self):
        """Test that an error inside a nested block does not leak out."""
        result = parse_source("{ {int x, = 2}, y = 3 }")
        assert len(result.errors) == 1
        assert result.errors[0].token.type == TokenType.ASSIGN

    def test_missing_outer_brace(self):
        """Test that a program must start with '{'."""
        result = parse_source("int x")
        assert len(result.errors) == 1
        assert result.errors[0].expected == (TokenType.LBRACE,)

    def test_missing_closing_brace(self):
        """Test that running out of input inside a block is one error."""
        result = parse_source("{int x")
        assert len(result.errors) == 1
        assert result.errors[0].token.type == TokenType.EOF
        assert (result.errors[0].lineno, result.errors[0].col_offset) == (1, 7)

    def test_trailing_tokens(self):
        """Test that nothing may follow the outer block."""
        result = parse_source("{int x} y")
        assert len(result.errors) == 1
        assert result.errors[0].expected == (TokenType.EOF,)
        assert result.errors[0].token.text == "y"

    def test_error_positions_on_later_lines(self):
        """Test that errors carry the line of the offending token."""
        result = parse_source("{\n  int x,\n  = 1\n}")
        assert (result.errors[0].lineno, result.errors[0].col_offset) == (3, 3)


class TestParseErrorFormat:
    """Tests for syntax error messages."""

    def test_message_with_lexeme(self):
        """Test the message for a token that has text."""
        error = parse_source("{int x, = 1}").errors[0]
        assert str(error) == f"Line 1, col 9: {STMT_START}, but saw ASSIGN('=')"

    def test_message_at_eof(self):
        """Test the message for EOF, which has no text."""
        error = parse_source("{int x").errors[0]
        assert str(error) == "Line 1, col 7: Expected RBRACE, but saw EOF"

    def test_is_exception(self):
        """Test that ParseError can be raised and caught."""
        error = parse_source("{}").errors[0]
        with pytest.raises(ParseError):
            raise error


class TestParserLookahead:
    """Tests for the one-token lookahead."""

    def test_constructor_reads_first_token(self):
        """Test that the lookahead is primed before parsing starts."""
        stream = io.StringIO("{int x}")
        parser = Parser(Tokenizer(stream))
        assert parser.current_token.type == TokenType.LBRACE
        assert stream.tell() == 1

    def test_parse_ends_at_eof(self):
        """Test that a successful parse leaves EOF in the lookahead."""
        parser = Parser(Tokenizer(io.StringIO("{x = 1}")))
        assert parser.parse_program().success
        assert parser.current_token.type == TokenType.EOF

    def test_trace_channel(self, caplog):
        """Test that an enabled channel logs grammar procedures."""
        diagnostics = Diagnostics()
        diagnostics.register_flag("p")
        caplog.set_level(logging.DEBUG, logger="pdef.parser")
        parse_source("{x = (1)}", trace=diagnostics.channel("parser"))
        messages = [r.getMessage() for r in caplog.records if r.name == "pdef.parser"]
        assert ">>> Entering parse_program" in messages
        assert ">>> Entering parse_factor" in messages
        assert messages[-1] == "<<< Leaving parse_program"

    def test_trace_logs_syntax_errors(self, caplog):
        """Test that recovered errors appear on the parser channel."""
        diagnostics = Diagnostics()
        diagnostics.register_flag("p")
        caplog.set_level(logging.DEBUG, logger="pdef.parser")
        parse_source("{int x, = 1}", trace=diagnostics.channel("parser"))
        messages = [r.getMessage() for r in caplog.records if r.name == "pdef.parser"]
        assert any(m.startswith("Syntax error: Line 1, col 9") for m in messages)
        assert any(m.startswith("Skipping ASSIGN") for m in messages)
