"""
MicroLang Lexer - turns source text into a pull-based stream of tokens.

The parser asks for one token at a time through next_token(); nothing is
buffered beyond the current character.

xwest
"""

import logging
from typing import Iterator, List, Optional, Union

from .tokens import Token, TokenType, SourceLocation, OPERATORS
from .errors import (
    LexerError, LexerWarning, create_invalid_number_error,
    create_malformed_identifier_error, create_unrecognised_character_warning
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    MicroLang lexical analyzer.

    Produces tokens lazily. Once the end of input is reached the EOF token is
    returned on every further call, so the stream is finite and cannot be
    restarted.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.warnings: List[LexerWarning] = []
        self._eof_token: Optional[Token] = None

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Produce the next token and advance past it.

        Raises:
            LexerError: If a numeric or identifier run is malformed
        """
        if self._eof_token is not None:
            return self._eof_token

        self._skip_whitespace()

        location = self._location()
        current_char = self._current_char()

        if current_char is None:
            return self._make_eof(location)

        # Operators and punctuation
        token_type = OPERATORS.get(current_char)
        if token_type is not None:
            self._advance()
            return Token(token_type, current_char, None, location)

        # Numbers
        if current_char.isdigit() or current_char == '.':
            return self._tokenize_number(location)

        # Identifiers
        if self._is_identifier_start(current_char):
            return self._tokenize_identifier(location)

        # Anything else ends the stream; leave a trace of what was dropped
        warning = create_unrecognised_character_warning(current_char, location)
        self.warnings.append(warning)
        logger.warning("%s: unrecognised character %r, treating as end of input",
                       location, current_char)
        return self._make_eof(location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize a run of digits containing at most one decimal point."""
        start_pos = self.pos
        seen_decimal = False

        while self._current_char() is not None:
            char = self._current_char()
            if char.isdigit():
                self._advance()
            elif char == '.':
                # A second point ends the literal and is left for the next call
                if seen_decimal:
                    break
                seen_decimal = True
                self._advance()
            else:
                break

        lexeme = self.source[start_pos:self.pos]
        if not lexeme:
            raise create_invalid_number_error(
                self._current_char() or "",
                location,
                "Expected a digit or decimal point"
            )

        try:
            value = float(lexeme)
        except ValueError:
            # A bare '.' has no digits; it reads as zero
            value = 0.0

        return Token(TokenType.NUMBER, lexeme, value, location)

    def _tokenize_identifier(self, location: SourceLocation) -> Token:
        """Tokenize an identifier."""
        start_pos = self.pos

        if self._is_identifier_start(self._current_char() or ""):
            self._advance()
            while (self._current_char() is not None and
                   self._is_identifier_continue(self._current_char())):
                self._advance()

        lexeme = self.source[start_pos:self.pos]
        if not lexeme:
            raise create_malformed_identifier_error(self._current_char() or "?", location)

        return Token(TokenType.IDENTIFIER, lexeme, lexeme, location)

    def _make_eof(self, location: SourceLocation) -> Token:
        self._eof_token = Token(TokenType.EOF, "", None, location)
        return self._eof_token

    @staticmethod
    def _is_identifier_start(char: str) -> bool:
        """Check if character can start an identifier."""
        return char.isalpha() or char == '_'

    @staticmethod
    def _is_identifier_continue(char: str) -> bool:
        """Check if character can continue an identifier."""
        return char.isalpha() or char.isdigit() or char == '_'

    def _skip_whitespace(self):
        while self._current_char() is not None and self._current_char().isspace():
            self._advance()

    def _current_char(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def has_warnings(self) -> bool:
        """Check if lexer recorded any warnings."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[Union[LexerError, LexerWarning]]:
        """Get all recorded diagnostics. Errors are raised, never stored."""
        return list(self.warnings)


def iter_tokens(source: str, filename: str = "<string>") -> Iterator[Token]:
    """
    Convenience generator over the tokens of a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Yields:
        Tokens, ending with EOF

    Raises:
        LexerError: If lexing fails
    """
    return iter(Lexer(source, filename))
