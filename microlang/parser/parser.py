"""
MicroLang Recursive Descent Parser

Two precedence tiers: terms (+, -) bind looser than factors (*, /).
Both tiers are left-associative.

Author: xwest
"""

import logging
from typing import List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Program, Assignment, Expression, BinaryOp, BinaryOperator, Identifier, Number,
    SourceSpan
)
from .errors import (
    ParseError, ParseWarning, create_unexpected_token_error,
    create_invalid_expression_error, create_truncated_expression_warning
)

logger = logging.getLogger(__name__)

TERM_OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS})
FACTOR_OPERATORS = frozenset({TokenType.MULTIPLY, TokenType.DIVIDE})


class Parser:
    """
    MicroLang parser.

    Pulls tokens from a Lexer with one token of look-ahead. Grammar::

        program    := statement* EOF
        statement  := assignment
        assignment := IDENT '=' expression ';'
        expression := term
        term       := factor ( ('+' | '-') factor )*
        factor     := primary ( ('*' | '/') primary )*
        primary    := NUMBER | IDENT | '(' expression ')'

    When the operand after a '+', '-', '*' or '/' cannot be parsed, the
    expression built so far is kept and the failure is recorded in
    ``warnings`` instead of being raised.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser with a lexer.

        Args:
            lexer: Token source; its first token is read immediately
        """
        self.lexer = lexer
        self.warnings: List[ParseWarning] = []
        self.current_token: Token = lexer.next_token()
        self.previous_token: Optional[Token] = None

    def parse_program(self) -> Program:
        """
        Parse the whole token stream.

        Returns:
            Program AST node

        Raises:
            ParseError: On the first error that occurs before an operand is parsed
            LexerError: If the lexer hits a malformed literal
        """
        start = self.current_token.location
        statements = []

        while self.current_token.type != TokenType.EOF:
            statements.append(self._parse_statement())

        end = self.previous_token.location if self.previous_token else start
        program = Program(statements, SourceSpan(start, end))
        logger.debug("Parsed %d statement(s) with %d warning(s)",
                     len(statements), len(self.warnings))
        return program

    def _parse_statement(self) -> Assignment:
        return self._parse_assignment()

    def _parse_assignment(self) -> Assignment:
        """Parse ``IDENT '=' expression ';'``."""
        name_token = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.ASSIGN)
        value = self._parse_expression()
        end_token = self._consume(TokenType.SEMICOLON)

        return Assignment(
            name_token.value,
            value,
            SourceSpan(name_token.location, end_token.location)
        )

    def _parse_expression(self) -> Expression:
        return self._parse_term()

    def _parse_term(self) -> Expression:
        """Parse additive chains."""
        left = self._parse_factor()

        while self.current_token.type in TERM_OPERATORS:
            operator_token = self._advance()
            try:
                right = self._parse_factor()
            except ParseError as e:
                self._record_truncation(operator_token, e)
                return left
            left = self._make_binary(left, operator_token, right)

        return left

    def _parse_factor(self) -> Expression:
        """Parse multiplicative chains."""
        left = self._parse_primary()

        while self.current_token.type in FACTOR_OPERATORS:
            operator_token = self._advance()
            try:
                right = self._parse_primary()
            except ParseError as e:
                self._record_truncation(operator_token, e)
                return left
            left = self._make_binary(left, operator_token, right)

        return left

    def _parse_primary(self) -> Expression:
        """Parse a number, an identifier or a parenthesized expression."""
        token = self.current_token

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN)
            return expression

        if token.type == TokenType.NUMBER:
            self._advance()
            return Number(token.value, SourceSpan(token.location, token.location))

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(token.value, SourceSpan(token.location, token.location))

        raise create_invalid_expression_error(
            f"expected a number, a variable or '(', found {token.type.name}",
            token
        )

    def _make_binary(self, left: Expression, operator_token: Token, right: Expression) -> BinaryOp:
        span = None
        if left.span is not None and right.span is not None:
            span = SourceSpan(left.span.start, right.span.end)
        return BinaryOp(left, BinaryOperator.from_token_type(operator_token.type), right, span)

    def _record_truncation(self, operator_token: Token, error: ParseError):
        warning = create_truncated_expression_warning(operator_token, error)
        self.warnings.append(warning)
        logger.warning("%s: %s", operator_token.location, warning.message)

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token
        self.previous_token = token
        self.current_token = self.lexer.next_token()
        return token

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self.current_token.type == token_type:
            return self._advance()
        raise create_unexpected_token_error(token_type, self.current_token)


def parse_source(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    return Parser(Lexer(source, filename)).parse_program()
