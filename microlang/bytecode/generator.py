"""
Bytecode generator for MicroLang.

Lowers the AST to stack machine instructions with a post-order walk.
No semantic checks happen here; the tree is assumed to be well-formed.

Author: xwest
"""

import logging
from typing import List, Tuple

from ..parser.ast_nodes import (
    ASTNode, Program, Assignment, BinaryOp, BinaryOperator, Identifier, Number
)
from .instructions import Instruction, Opcode

logger = logging.getLogger(__name__)


class BytecodeGenerator:
    """
    Generates a flat instruction sequence from an AST.

    Binary operations push the left operand before the right one, so at
    evaluation time the right operand is on top of the stack.
    """

    OPERATOR_OPCODES = {
        BinaryOperator.ADD: Opcode.ADD,
        BinaryOperator.SUBTRACT: Opcode.SUBTRACT,
        BinaryOperator.MULTIPLY: Opcode.MULTIPLY,
        BinaryOperator.DIVIDE: Opcode.DIVIDE,
    }

    def __init__(self):
        self.instructions: List[Instruction] = []

    def generate(self, ast: ASTNode) -> Tuple[Instruction, ...]:
        """
        Generate instructions for ``ast``.

        Returns:
            Immutable instruction tuple ending in exactly one STOP
        """
        self.instructions = []
        self._generate_node(ast)
        self.instructions.append(Instruction.stop())

        program = tuple(self.instructions)
        logger.debug("Generated %d instruction(s)", len(program))
        return program

    def _generate_node(self, node: ASTNode):
        if isinstance(node, Number):
            self._emit(Instruction.load_constant(node.value))
        elif isinstance(node, Identifier):
            self._emit(Instruction.load_variable(node.name))
        elif isinstance(node, BinaryOp):
            self._generate_node(node.left)
            self._generate_node(node.right)
            self._emit(Instruction(self.OPERATOR_OPCODES[node.operator]))
        elif isinstance(node, Assignment):
            self._generate_node(node.value)
            self._emit(Instruction.store_variable(node.variable))
        elif isinstance(node, Program):
            for statement in node.statements:
                self._generate_node(statement)
        else:
            raise TypeError(f"Unknown AST node: {node!r}")

    def _emit(self, instruction: Instruction):
        self.instructions.append(instruction)
