"""
Frontend module for pdef.

This module provides the tokenizer and parser components of the PDef-light
front end. The parser pulls tokens from the tokenizer lazily; no token list
is ever built.
"""

from ..exceptions import ParseError, SourceReadError
from .tokenizer import Tokenizer, Token, TokenType, tokenize_source
from .parser import Parser, ParseResult, parse_source

__all__ = [
    # Tokenizer components
    "Tokenizer",
    "Token",
    "TokenType",
    "tokenize_source",
    "SourceReadError",
    # Parser components
    "Parser",
    "ParseResult",
    "ParseError",
    "parse_source",
]
