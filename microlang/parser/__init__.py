"""
MicroLang Parser Package

Implements a recursive descent parser producing an exclusively owned
Abstract Syntax Tree.

Key Features:
- Two left-associative precedence tiers (+ - below * /)
- Parenthesized sub-expressions
- Source spans on every node
- Lenient operand-chain recovery reported as warnings

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_source
from .errors import ParseError, ParseWarning

__all__ = [
    # Core parser
    "Parser", "parse_source",

    # AST nodes
    "ASTNode", "ASTNodeType", "SourceSpan", "walk",
    "Program", "Assignment", "Expression",
    "BinaryOp", "BinaryOperator", "Identifier", "Number",

    # Error handling
    "ParseError", "ParseWarning",
]
