"""
Test suite for pdef.

This package contains tests for the pdef syntax checker including:
- Unit tests for the tokenizer, parser and driver
- Fixture tests running the CLI over sample programs
"""

__version__ = "0.1.0"
