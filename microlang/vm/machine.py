"""
MicroLang stack virtual machine.

Executes a compiled instruction sequence against an operand stack and a
variable store. The store is the program's observable result.

Author: xwest
"""

import logging
from typing import Dict, List, Sequence, Tuple

from ..analyzer.symbol_table import SymbolTable
from ..bytecode.instructions import Instruction, Opcode
from .errors import (
    VMError, StackUnderflowFault, DivisionByZeroFault,
    UndefinedVariableFault, UninitializedVariableFault
)

logger = logging.getLogger(__name__)


class VirtualMachine:
    """
    Stack machine for MicroLang bytecode.

    The symbol table is only consulted to check that loaded names exist.
    Each execute() call starts from an empty stack and store, so running
    the same machine twice gives the same result.
    """

    def __init__(self, instructions: Sequence[Instruction], symbol_table: SymbolTable,
                 trace: bool = False):
        """
        Args:
            instructions: Program produced by BytecodeGenerator
            symbol_table: Table filled by the SemanticAnalyzer for the same program
            trace: Log every executed instruction at DEBUG level
        """
        self.instructions = tuple(instructions)
        self.symbol_table = symbol_table
        self.trace = trace
        self.storage: Dict[str, float] = {}
        self.stack: List[float] = []
        self.program_counter = 0

    def execute(self) -> Dict[str, float]:
        """
        Run the program from the first instruction.

        Returns:
            Copy of the variable store (name -> last stored value)

        Raises:
            VMError: On stack underflow, division by zero or a bad variable load
        """
        self.storage = {}
        self.stack = []
        self.program_counter = 0

        while self.program_counter < len(self.instructions):
            instruction = self.instructions[self.program_counter]
            # Traced before execution so a faulting instruction still shows up
            if self.trace:
                logger.debug("%4d  %-24s stack=%s", self.program_counter,
                             instruction, list(self.stack))
            self._execute_instruction(instruction)
            self.program_counter += 1

        logger.debug("Execution finished, %d variable(s) stored", len(self.storage))
        return dict(self.storage)

    def _execute_instruction(self, instruction: Instruction):
        opcode = instruction.opcode

        if opcode == Opcode.LOAD_CONSTANT:
            self.stack.append(instruction.operand)

        elif opcode == Opcode.LOAD_VARIABLE:
            name = instruction.operand
            if self.symbol_table.lookup_variable(name) is None:
                raise UndefinedVariableFault(
                    f"Variable not in scope: '{name}'",
                    self.program_counter, instruction,
                    help_text="The program was not analyzed with this symbol table."
                )
            if name not in self.storage:
                raise UninitializedVariableFault(
                    f"Variable '{name}' read before it was assigned",
                    self.program_counter, instruction
                )
            self.stack.append(self.storage[name])

        elif opcode == Opcode.STORE_VARIABLE:
            if not self.stack:
                raise StackUnderflowFault(
                    f"Stack is empty, cannot store variable '{instruction.operand}'",
                    self.program_counter, instruction
                )
            self.storage[instruction.operand] = self.stack.pop()

        elif opcode == Opcode.ADD:
            lhs, rhs = self._pop_operands(instruction)
            self.stack.append(lhs + rhs)

        elif opcode == Opcode.SUBTRACT:
            lhs, rhs = self._pop_operands(instruction)
            self.stack.append(lhs - rhs)

        elif opcode == Opcode.MULTIPLY:
            lhs, rhs = self._pop_operands(instruction)
            self.stack.append(lhs * rhs)

        elif opcode == Opcode.DIVIDE:
            lhs, rhs = self._pop_operands(instruction)
            if rhs == 0.0:
                raise DivisionByZeroFault(
                    "Cannot divide by zero", self.program_counter, instruction
                )
            self.stack.append(lhs / rhs)

        elif opcode == Opcode.STOP:
            pass

        else:
            raise VMError(f"Unknown opcode: {opcode!r}", self.program_counter, instruction)

    def _pop_operands(self, instruction: Instruction) -> Tuple[float, float]:
        """Pop the right operand (top) and then the left operand."""
        if len(self.stack) < 2:
            raise StackUnderflowFault(
                f"{instruction.opcode.name} needs two operands, stack has {len(self.stack)}",
                self.program_counter, instruction
            )
        rhs = self.stack.pop()
        lhs = self.stack.pop()
        return lhs, rhs
