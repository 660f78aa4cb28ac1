"""
MicroLang Compiler Package

A small expression language: semicolon-terminated assignments of arithmetic
expressions over 64-bit floats, compiled to bytecode and run on a stack
machine.

Architecture:
    microlang/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── analyzer/        # Scoped symbol resolution and type checking
    ├── bytecode/        # Stack machine instruction generation
    ├── vm/              # Bytecode execution
    └── pipeline.py      # End-to-end helpers

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@microlang.org"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser
from .analyzer import SemanticAnalyzer
from .bytecode import BytecodeGenerator
from .vm import VirtualMachine
from .pipeline import PipelineOptions, compile_source, run_source, run_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "BytecodeGenerator",
    "VirtualMachine",

    # Pipeline
    "PipelineOptions",
    "compile_source",
    "run_source",
    "run_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
