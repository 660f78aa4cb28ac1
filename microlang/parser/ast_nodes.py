"""
Abstract Syntax Tree node definitions for MicroLang.

Every node owns its children exclusively: a node may be attached to one
parent only, so the tree can never become a DAG.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    PROGRAM = "Program"
    ASSIGNMENT = "Assignment"
    BINARY_OP = "BinaryOp"
    IDENTIFIER = "Identifier"
    NUMBER = "Number"


class BinaryOperator(Enum):
    """The four arithmetic operators."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> 'BinaryOperator':
        """Map an operator token type to its BinaryOperator."""
        try:
            return _TOKEN_TO_OPERATOR[token_type]
        except KeyError:
            raise ValueError(f"Token {token_type.name} is not a binary operator") from None


_TOKEN_TO_OPERATOR = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
    TokenType.MULTIPLY: BinaryOperator.MULTIPLY,
    TokenType.DIVIDE: BinaryOperator.DIVIDE,
}


@dataclass
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    Equality is structural; source spans and parent links are ignored.
    """

    def __init__(self, node_type: ASTNodeType, span: Optional[SourceSpan] = None):
        self.node_type = node_type
        self.span = span
        self.parent: Optional['ASTNode'] = None

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def _key(self) -> Tuple[Any, ...]:
        """Fields that define structural equality."""
        pass

    def set_parent(self, parent: 'ASTNode'):
        """Attach this node to its (single) parent."""
        if self.parent is not None and self.parent is not parent:
            raise ValueError(
                f"{self.node_type.value} node already belongs to a {self.parent.node_type.value} node"
            )
        self.parent = parent

    @property
    def location(self) -> Optional[SourceLocation]:
        """Start location of this node, if known."""
        return self.span.start if self.span is not None else None

    def __eq__(self, other) -> bool:
        if not isinstance(other, ASTNode) or other.node_type != self.node_type:
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"


# ============================================================================
# Top-level nodes
# ============================================================================

class Program(ASTNode):
    """Root AST node: statements in source order."""
    statements: List['Assignment']

    def __init__(self, statements: List['ASTNode'], span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.PROGRAM, span)
        self.statements = statements
        for statement in statements:
            statement.set_parent(self)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def _key(self) -> Tuple[Any, ...]:
        return tuple(self.statements)

    def __repr__(self) -> str:
        return f"Program({self.statements!r})"


# ============================================================================
# Statements
# ============================================================================

class Assignment(ASTNode):
    """Variable assignment statement: ``variable = value;``"""
    variable: str
    value: 'Expression'

    def __init__(self, variable: str, value: 'Expression', span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.ASSIGNMENT, span)
        self.variable = variable
        self.value = value

        value.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.value]

    def _key(self) -> Tuple[Any, ...]:
        return (self.variable, self.value)

    def __repr__(self) -> str:
        return f"Assignment({self.variable!r}, {self.value!r})"


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


class BinaryOp(Expression):
    """Binary operation expression."""
    left: Expression
    operator: BinaryOperator
    right: Expression

    def __init__(self, left: Expression, operator: BinaryOperator, right: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.left = left
        self.operator = operator
        self.right = right

        left.set_parent(self)
        right.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def _key(self) -> Tuple[Any, ...]:
        return (self.left, self.operator, self.right)

    def __repr__(self) -> str:
        return f"BinaryOp({self.left!r}, {self.operator.name}, {self.right!r})"


class Identifier(Expression):
    """Variable reference."""
    name: str

    def __init__(self, name: str, span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.IDENTIFIER, span)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []

    def _key(self) -> Tuple[Any, ...]:
        return (self.name,)

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"


class Number(Expression):
    """Numeric literal (always a 64-bit float)."""
    value: float

    def __init__(self, value: float, span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.NUMBER, span)
        self.value = float(value)

    def children(self) -> List[ASTNode]:
        return []

    def _key(self) -> Tuple[Any, ...]:
        return (self.value,)

    def __repr__(self) -> str:
        return f"Number({self.value!r})"


def walk(node: ASTNode):
    """Yield ``node`` and all of its descendants in pre-order."""
    yield node
    for child in node.children():
        yield from walk(child)

