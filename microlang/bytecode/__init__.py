"""
MicroLang Bytecode Package

Compiles the AST into a linear instruction sequence for the stack machine
in ``microlang.vm``.

Author: xwest
"""

from .instructions import Instruction, Opcode, format_bytecode
from .generator import BytecodeGenerator

__all__ = [
    "BytecodeGenerator",
    "Instruction",
    "Opcode",
    "format_bytecode",
]
