"""
MicroLang Virtual Machine Package

Author: xwest
"""

from .machine import VirtualMachine
from .errors import (
    VMError, StackUnderflowFault, DivisionByZeroFault,
    UndefinedVariableFault, UninitializedVariableFault
)

__all__ = [
    "VirtualMachine",
    "VMError",
    "StackUnderflowFault",
    "DivisionByZeroFault",
    "UndefinedVariableFault",
    "UninitializedVariableFault",
]
