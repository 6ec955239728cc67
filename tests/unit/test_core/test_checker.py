"""
Unit tests for the SyntaxChecker driver.
"""

import io

import pytest
from pdef import SyntaxChecker, CheckResult
from pdef.frontend import TokenType
from pdef.utils import Settings


class TestSyntaxChecker:
    """Tests for checking sources, streams and files."""

    def test_check_source_success(self, checker):
        """Test a valid program from a string."""
        result = checker.check_source("{int x, x = 1}")
        assert isinstance(result, CheckResult)
        assert result.success
        assert not result.fatal
        assert result.errors == []

    def test_check_source_errors(self, checker):
        """Test that syntax errors are collected, not raised."""
        result = checker.check_source("{int x, = 1}")
        assert not result.success
        assert not result.fatal
        assert len(result.errors) == 1

    def test_check_file(self, checker, sample_pdef_file):
        """Test checking a file on disk."""
        result = checker.check_file(sample_pdef_file)
        assert result.success

    def test_check_file_accepts_str(self, checker, broken_pdef_file):
        """Test that a string path works as well as a Path."""
        result = checker.check_file(str(broken_pdef_file))
        assert len(result.errors) == 1

    def test_missing_file(self, checker, temp_dir):
        """Test that an unopenable file is a fatal result."""
        missing = temp_dir / "missing.pdef"
        result = checker.check_file(missing)
        assert not result.success
        assert result.fatal
        assert result.error_message == f"Could not open file `{missing}'"

    def test_read_failure(self, checker, failing_stream):
        """Test that a stream failing mid-read is a fatal result."""
        result = checker.check_stream(failing_stream("{int"))
        assert result.fatal
        assert "device not ready" in result.error_message
        assert result.errors == []

    def test_stream_left_open(self, checker):
        """Test that the checker does not close a caller's stream."""
        stream = io.StringIO("{x = 1}")
        checker.check_stream(stream)
        assert not stream.closed

    def test_echo_setting(self):
        """Test that the echo setting copies input to the echo stream."""
        echo = io.StringIO()
        checker = SyntaxChecker(Settings(echo=True), echo_stream=echo)
        checker.check_source("{int x}\n")
        assert echo.getvalue() == "{int x}\n"

    def test_tokens(self, checker):
        """Test lazy tokenization through the checker."""
        tokens = list(checker.tokens(io.StringIO("{x}")))
        assert [t.type for t in tokens] == [
            TokenType.LBRACE, TokenType.IDENT, TokenType.RBRACE, TokenType.EOF,
        ]
