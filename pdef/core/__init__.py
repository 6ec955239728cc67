"""
Core module for pdef.

This module contains the syntax-check orchestration that wires an input
source, the tokenizer and the parser together.
"""

from ..frontend.parser import Parser, ParseError
from .checker import SyntaxChecker, CheckResult

__all__ = [
    "Parser",
    "ParseError",
    "SyntaxChecker",
    "CheckResult",
]
