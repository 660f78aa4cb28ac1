"""
Error handling for the MicroLang parser.

ParseError is fatal and ends parsing. ParseWarning records the operand
chains the parser truncated instead of rejecting.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


class ParseWarning:
    """
    Represents a parser warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        cause: Optional[ParseError] = None
    ):
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text
        )
        self.token = token
        self.cause = cause

    def __str__(self) -> str:
        return str(self.diagnostic)


# Token types paired with a hint for when they are missing
MISSING_TOKEN_SUGGESTIONS = {
    TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
    TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
    TokenType.ASSIGN: ["Add an assignment operator '='"],
    TokenType.IDENTIFIER: ["Statements must start with a variable name"],
}


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P100": "Expression truncated after operator",
}


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = found.type.name
    suggestions = MISSING_TOKEN_SUGGESTIONS.get(expected, []) if isinstance(expected, TokenType) else []

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_invalid_expression_error(reason: str, token: Token) -> ParseError:
    """Create an error for an expression that has no operand to start from."""
    return ParseError(
        message=f"Invalid expression: {reason}",
        location=token.location,
        token=token,
        code="P005",
        help_text=reason,
        suggestions=["Expressions start with a number, a variable or '('"]
    )


def create_truncated_expression_warning(operator: Token, cause: ParseError) -> ParseWarning:
    """Create a warning for an operand chain cut short after ``operator``."""
    return ParseWarning(
        message=f"Expression truncated after '{operator.lexeme}': {cause.message}",
        location=operator.location,
        token=operator,
        code="P100",
        help_text="The operator and everything the parser could not read after it were dropped.",
        cause=cause
    )
