"""
Pytest configuration and fixtures for pdef tests.
"""

import io
import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def sample_pdef_file(temp_dir):
    """Create a valid PDef-light file for testing."""
    pdef_file = temp_dir / "sample.pdef"
    pdef_file.write_text("{int x, x = 1 + 2}\n")
    return pdef_file


@pytest.fixture
def broken_pdef_file(temp_dir):
    """Create a PDef-light file with one syntax error."""
    pdef_file = temp_dir / "broken.pdef"
    pdef_file.write_text("{int x, = 1}\n")
    return pdef_file


@pytest.fixture
def checker():
    """Provide a SyntaxChecker instance."""
    from pdef import SyntaxChecker
    return SyntaxChecker()


@pytest.fixture
def make_tokenizer():
    """Build a Tokenizer over a string."""
    from pdef.frontend import Tokenizer

    def _make(source, **kwargs):
        return Tokenizer(io.StringIO(source), **kwargs)
    return _make


class FailingStream:
    """Text stream that raises OSError after ``good`` characters."""

    def __init__(self, good: str = ""):
        self._chars = list(good)

    def read(self, size=-1):
        if self._chars:
            return self._chars.pop(0)
        raise OSError("device not ready")


@pytest.fixture
def failing_stream():
    return FailingStream
