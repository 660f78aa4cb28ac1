"""
MicroLang bytecode instruction set.

A compiled program is a flat, immutable tuple of instructions for a stack
machine, always terminated by a single STOP.

Author: xwest
"""

from typing import Optional, Sequence, Union
from dataclasses import dataclass
from enum import Enum


class Opcode(Enum):
    """Stack machine opcodes."""
    LOAD_CONSTANT = "load_constant"     # push operand (float)
    LOAD_VARIABLE = "load_variable"     # push value of operand (name)
    STORE_VARIABLE = "store_variable"   # pop into operand (name)
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    STOP = "stop"


@dataclass(frozen=True)
class Instruction:
    """A single stack machine instruction."""
    opcode: Opcode
    operand: Optional[Union[float, str]] = None

    @classmethod
    def load_constant(cls, value: float) -> 'Instruction':
        return cls(Opcode.LOAD_CONSTANT, float(value))

    @classmethod
    def load_variable(cls, name: str) -> 'Instruction':
        return cls(Opcode.LOAD_VARIABLE, name)

    @classmethod
    def store_variable(cls, name: str) -> 'Instruction':
        return cls(Opcode.STORE_VARIABLE, name)

    @classmethod
    def stop(cls) -> 'Instruction':
        return cls(Opcode.STOP)

    def __str__(self) -> str:
        if self.operand is None:
            return self.opcode.name
        return f"{self.opcode.name} {self.operand}"


def format_bytecode(instructions: Sequence[Instruction]) -> str:
    """Render a numbered listing of ``instructions``."""
    width = len(str(max(len(instructions) - 1, 0)))
    return "\n".join(
        f"{index:>{width}}  {instruction}"
        for index, instruction in enumerate(instructions)
    )
