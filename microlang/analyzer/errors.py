"""
Semantic analysis error handling for MicroLang.

Semantic errors are collected, not raised out of the analyzer: a single
analysis run reports every undefined variable, duplicate declaration and
type mismatch it finds.

Author: xwest
"""

from typing import Optional, List
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic


class SemanticErrorType(Enum):
    """Categories of semantic findings."""
    UNDEFINED_VARIABLE = "undefined_variable"
    DUPLICATE_DECLARATION = "duplicate_declaration"
    TYPE_MISMATCH = "type_mismatch"


class SemanticError(Exception):
    """
    A semantic finding.

    Raised by the symbol table, caught and recorded by the analyzer.
    """

    def __init__(
        self,
        message: str,
        error_type: SemanticErrorType,
        location: Optional[SourceLocation] = None,
        symbol: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.location = location
        self.symbol = symbol
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"SemanticError({self.error_type.name}, {self.message!r})"


class SymbolTableError(Exception):
    """Raised when the scope stack is misused (e.g. exiting the global scope)."""
    pass


class SemanticAnalysisFailed(Exception):
    """
    Raised by the pipeline when analysis reported errors.

    Carries the complete, ordered error list.
    """

    def __init__(self, errors: List[SemanticError]):
        self.errors = list(errors)
        super().__init__(f"Semantic analysis failed with {len(self.errors)} error(s)")

    def __str__(self) -> str:
        lines = [super().__str__()]
        lines.extend(str(error) for error in self.errors)
        return "\n".join(lines)


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    "S001": "Type mismatch",
    "S010": "Undefined variable",
    "S011": "Duplicate declaration",
}


def create_type_mismatch_error(
    left_type: str,
    right_type: str,
    location: Optional[SourceLocation] = None
) -> SemanticError:
    """Create a type mismatch error between two operands."""
    return SemanticError(
        message=f"Type mismatch between operands: {left_type} and {right_type}",
        error_type=SemanticErrorType.TYPE_MISMATCH,
        location=location,
        code="S001",
        help_text="Both operands of an arithmetic operator must have the same type."
    )


def create_undefined_variable_error(
    name: str,
    location: Optional[SourceLocation] = None,
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an undefined variable error."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{candidate}'?" for candidate in similar_names[:3]])
    suggestions.append(f"Assign '{name}' before using it")

    return SemanticError(
        message=f"Variable not in scope: '{name}'",
        error_type=SemanticErrorType.UNDEFINED_VARIABLE,
        location=location,
        symbol=name,
        code="S010",
        help_text=f"The variable '{name}' is not defined in the current scope.",
        suggestions=suggestions
    )


def create_duplicate_declaration_error(
    name: str,
    location: Optional[SourceLocation] = None,
    previous_location: Optional[SourceLocation] = None
) -> SemanticError:
    """Create an error for a second declaration of a name in one scope."""
    help_text = f"'{name}' is already declared in this scope"
    if previous_location is not None:
        help_text += f" (first declared at {previous_location})"

    return SemanticError(
        message=f"Duplicate declaration of variable '{name}'",
        error_type=SemanticErrorType.DUPLICATE_DECLARATION,
        location=location,
        symbol=name,
        code="S011",
        help_text=help_text + "."
    )
