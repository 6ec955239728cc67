"""
pdef - PDef-light syntax checker

A tokenizer and recursive descent parser for PDef-light, a small
block-structured language with typed declarations, assignments and
arithmetic expressions. The front end reports every syntax error it finds,
recovering at statement boundaries.

Example:
    >>> from pdef import SyntaxChecker
    >>> result = SyntaxChecker().check_source("{int x, x = 1}")
    >>> if result.success:
    ...     print("Program parsed!")

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "pdef Team"

from .core import SyntaxChecker, CheckResult, Parser, ParseError

__all__ = [
    "__version__",
    "__author__",
    "SyntaxChecker",
    "CheckResult",
    "Parser",
    "ParseError",
]
