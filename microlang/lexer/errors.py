"""
Error handling for the MicroLang lexer.

Provides the shared Diagnostic record used by every compiler stage, plus the
lexer's fatal error and non-fatal warning types.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix = f"{severity_prefix}[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    The lexer has no recovery channel for malformed literals, so this
    always ends tokenization.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
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

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
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

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognised character (input truncated)",
    "L003": "Invalid numeric literal",
    "L005": "Malformed identifier",
}


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for an invalid numeric literal."""
    return LexerError(
        message=f"Invalid numeric literal: '{lexeme}'",
        location=location,
        code="L003",
        help_text=reason,
        suggestions=["Numeric literals are digits with at most one decimal point"]
    )


def create_malformed_identifier_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an identifier run that could not be read."""
    return LexerError(
        message=f"Malformed identifier starting at '{char}'",
        location=location,
        code="L005",
        help_text="Identifiers start with a letter or underscore.",
    )


def create_unrecognised_character_warning(char: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a character that ends the token stream."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in MicroLang source; input ends here."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) ends the input here."

    return LexerWarning(
        message=f"Unrecognised character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text
    )
