"""
Syntax-check orchestration module for pdef.

This module provides the high-level SyntaxChecker class that opens the
input, wires the tokenizer and parser together and collects the outcome.
The tokenizer and parser never open or close anything themselves.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Union

from ..exceptions import ParseError, SourceReadError
from ..frontend.parser import Parser
from ..frontend.tokenizer import Token, Tokenizer
from ..utils.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a syntax check.

    Attributes:
        success: Whether the input is a syntactically valid program
        errors: Syntax errors found (empty on success)
        error_message: Set when the input could not be read at all
    """
    success: bool
    errors: List[ParseError] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def fatal(self) -> bool:
        """True when checking stopped because the input was unreadable."""
        return self.error_message is not None


class SyntaxChecker:
    """Main driver class for pdef.

    Example:
        >>> checker = SyntaxChecker(Settings.from_flags("p"))
        >>> result = checker.check_file(Path("prog.pdef"))
        >>> for error in result.errors:
        ...     print(error)
    """

    def __init__(self, settings: Optional[Settings] = None, echo_stream: Optional[TextIO] = None):
        """Initialize the checker.

        Args:
            settings: Echo and trace settings (default: all off)
            echo_stream: Where echoed input goes (default: sys.stdout)
        """
        self._settings = settings or Settings()
        self._echo_stream = echo_stream
        self._diagnostics = self._settings.diagnostics()

    def _tokenizer(self, stream: TextIO) -> Tokenizer:
        return Tokenizer(
            stream,
            echo=self._settings.echo,
            echo_stream=self._echo_stream,
            trace=self._diagnostics.channel("tokenizer"),
        )

    def check_stream(self, stream: TextIO) -> CheckResult:
        """Check an already-open text stream.

        Args:
            stream: Readable text stream; it is not closed

        Returns:
            CheckResult: The outcome of the check
        """
        try:
            parser = Parser(self._tokenizer(stream), trace=self._diagnostics.channel("parser"))
            parsed = parser.parse_program()
        except SourceReadError as e:
            logger.error("Read failed: %s", e)
            return CheckResult(success=False, error_message=str(e))
        return CheckResult(success=parsed.success, errors=parsed.errors)

    def check_source(self, source: str) -> CheckResult:
        """Check PDef-light source text."""
        return self.check_stream(io.StringIO(source))

    def check_file(self, path: Union[str, Path]) -> CheckResult:
        """Check a PDef-light source file.

        Args:
            path: Path to the source file

        Returns:
            CheckResult: The outcome; ``fatal`` is set if the file
            could not be opened or read
        """
        path = Path(path)
        logger.info("Checking %s", path)
        try:
            stream = path.open("r", encoding="utf-8")
        except OSError as e:
            logger.debug("Open failed: %s", e)
            return CheckResult(success=False, error_message=f"Could not open file `{path}'")
        with stream:
            return self.check_stream(stream)

    def tokens(self, stream: TextIO) -> Iterator[Token]:
        """Tokenize an open stream lazily, ending with EOF.

        Raises:
            SourceReadError: If the stream fails mid-read
        """
        return iter(self._tokenizer(stream))
