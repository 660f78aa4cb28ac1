"""
Runtime faults raised by the MicroLang virtual machine.

Every fault is fatal for the current execute() call.

Author: xwest
"""

from typing import Optional

from ..lexer.errors import Diagnostic
from ..bytecode.instructions import Instruction


class VMError(Exception):
    """Base class for runtime faults."""

    code: Optional[str] = None

    def __init__(self, message: str, program_counter: int,
                 instruction: Optional[Instruction] = None,
                 help_text: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.program_counter = program_counter
        self.instruction = instruction
        self.diagnostic = Diagnostic(
            message=f"{message} (at instruction {program_counter}: {instruction})",
            location=None,
            severity="error",
            code=self.code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class StackUnderflowFault(VMError):
    code = "R001"


class DivisionByZeroFault(VMError):
    code = "R002"


class UndefinedVariableFault(VMError):
    """The program loads a name the symbol table has never seen."""
    code = "R003"


class UninitializedVariableFault(VMError):
    """The program reads a variable before anything was stored in it."""
    code = "R004"


RUNTIME_ERROR_CODES = {
    "R001": "Stack underflow",
    "R002": "Division by zero",
    "R003": "Undefined variable",
    "R004": "Variable read before assignment",
}
