"""
MicroLang Semantic Analyzer Package

Implements semantic analysis:
- Scoped symbol resolution with shadowing
- Type inference for assignments
- Operand type checking
- Error collection without early exit

Author: xwest
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult
from .symbol_table import SymbolTable, Symbol, SymbolType
from .errors import (
    SemanticError, SemanticErrorType, SymbolTableError, SemanticAnalysisFailed
)

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult",

    # Symbol management
    "SymbolTable", "Symbol", "SymbolType",

    # Error handling
    "SemanticError", "SemanticErrorType", "SymbolTableError", "SemanticAnalysisFailed",
]
