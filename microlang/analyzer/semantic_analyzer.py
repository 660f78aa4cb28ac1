"""
Semantic analyzer for MicroLang.

Walks the AST once, declaring assigned variables in the symbol table and
collecting every semantic error without stopping at the first one.

Author: xwest
"""

import logging
from typing import List, Optional
from dataclasses import dataclass, field

from ..parser.ast_nodes import ASTNode, Program, Assignment, BinaryOp, Identifier, Number
from .symbol_table import SymbolTable, SymbolType
from .errors import (
    SemanticError, create_type_mismatch_error, create_undefined_variable_error
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    ast: ASTNode
    symbol_table: SymbolTable
    errors: List[SemanticError] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return len(self.errors) > 0


class SemanticAnalyzer:
    """
    MicroLang semantic analyzer.

    Owns the symbol table that the virtual machine later consults, so the
    analyzer and the VM must see the same program. The AST is never mutated.
    """

    def __init__(self):
        self.symbol_table = SymbolTable()
        self.errors: List[SemanticError] = []

    def analyze(self, ast: ASTNode) -> AnalysisResult:
        """
        Analyze ``ast`` (normally a Program, but any node is accepted).

        Returns:
            AnalysisResult whose ``errors`` lists findings in traversal order
        """
        self.errors = []
        self._visit(ast)

        errors, self.errors = self.errors, []
        logger.debug("Semantic analysis finished with %d error(s)", len(errors))
        return AnalysisResult(ast=ast, symbol_table=self.symbol_table, errors=errors)

    def _visit(self, node: ASTNode):
        if isinstance(node, Program):
            for statement in node.statements:
                self._visit(statement)
        elif isinstance(node, Assignment):
            self._visit_assignment(node)
        elif isinstance(node, BinaryOp):
            self._visit_binary_op(node)
        elif isinstance(node, Identifier):
            if self.symbol_table.lookup_variable(node.name) is None:
                self._add_error(create_undefined_variable_error(
                    node.name,
                    node.location,
                    similar_names=self.symbol_table.get_similar_names(node.name)
                ))
        elif isinstance(node, Number):
            pass
        else:
            raise TypeError(f"Unknown AST node: {node!r}")

    def _visit_assignment(self, node: Assignment):
        self._visit(node.value)

        # An undefined right-hand side has already been reported; declare the
        # target anyway so later uses don't cascade into more errors.
        var_type = self._get_expression_type(node.value) or SymbolType.INTEGER

        try:
            self.symbol_table.declare_variable(node.variable, var_type, node.location)
        except SemanticError as e:
            self._add_error(e)

    def _visit_binary_op(self, node: BinaryOp):
        self._visit(node.left)
        self._visit(node.right)

        # An undeclared operand has no type; it only mismatches a known one
        left_type = self._get_expression_type(node.left)
        right_type = self._get_expression_type(node.right)
        if left_type != right_type:
            self._add_error(create_type_mismatch_error(
                self._type_name(left_type), self._type_name(right_type), node.location
            ))

    def _get_expression_type(self, node: ASTNode) -> Optional[SymbolType]:
        """Infer the type of an expression; None when it names an undeclared variable."""
        if isinstance(node, (Number, BinaryOp)):
            return SymbolType.INTEGER
        if isinstance(node, Identifier):
            symbol = self.symbol_table.lookup_variable(node.name)
            return symbol.symbol_type if symbol is not None else None
        return None

    @staticmethod
    def _type_name(symbol_type: Optional[SymbolType]) -> str:
        return str(symbol_type) if symbol_type is not None else "unknown"

    def _add_error(self, error: SemanticError):
        logger.debug("%s", error.message)
        self.errors.append(error)
