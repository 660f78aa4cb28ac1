"""
MicroLang Lexer Package

Implements a pull-based lexical analyzer for MicroLang source text.

Key Features:
- One token per call, no token buffering
- Numeric literals as 64-bit floats (at most one decimal point)
- Identifiers of letters, digits and underscores
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, iter_tokens
from .errors import Diagnostic, LexerError, LexerWarning

__all__ = [
    "Lexer",
    "iter_tokens",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "LexerWarning",
]
