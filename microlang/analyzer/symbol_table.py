"""
Symbol table and scope management for MicroLang semantic analysis.

Scopes are kept as an ordered list of dictionaries with an explicit cursor
(``current_scope``). Scope 0 is the global scope and always exists.

Author: xwest
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation
from .errors import SymbolTableError, create_duplicate_declaration_error


class SymbolType(Enum):
    """Types known to the analyzer."""
    INTEGER = "Integer"
    FUNCTION = "Function"  # reserved; no expression produces it yet

    def __str__(self) -> str:
        return self.value


@dataclass
class Symbol:
    """Represents a declared name."""
    name: str
    symbol_type: SymbolType
    scope_level: int
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.symbol_type}"


class SymbolTable:
    """
    Manages nested scopes.

    Lookup walks from the current scope down to the global scope and
    returns the first match, so inner declarations shadow outer ones.
    """

    def __init__(self):
        """Initialize the symbol table with a global scope."""
        self.scopes: List[Dict[str, Symbol]] = [{}]
        self.current_scope = 0

    def enter_scope(self):
        """Enter a new nested scope."""
        self.current_scope += 1
        while len(self.scopes) <= self.current_scope:
            self.scopes.append({})

    def exit_scope(self):
        """
        Discard the current scope and return to its parent.

        Raises:
            SymbolTableError: If the current scope is the global scope
        """
        if self.current_scope == 0:
            raise SymbolTableError("Attempting to exit the global scope")

        del self.scopes[self.current_scope:]
        self.current_scope -= 1

    def declare_variable(self, name: str, var_type: SymbolType,
                         location: Optional[SourceLocation] = None) -> Symbol:
        """
        Declare ``name`` in the current scope.

        Raises:
            SemanticError: DUPLICATE_DECLARATION if the current scope already has ``name``
        """
        scope = self.scopes[self.current_scope]
        if name in scope:
            raise create_duplicate_declaration_error(name, location, scope[name].location)

        symbol = Symbol(name, var_type, self.current_scope, location)
        scope[name] = symbol
        return symbol

    def lookup_variable(self, name: str) -> Optional[Symbol]:
        """Find the innermost visible declaration of ``name``."""
        for level in range(self.current_scope, -1, -1):
            symbol = self.scopes[level].get(name)
            if symbol is not None:
                return symbol
        return None

    def lookup_local(self, name: str) -> Optional[Symbol]:
        """Look up a symbol only in the current scope."""
        return self.scopes[self.current_scope].get(name)

    def visible_names(self) -> List[str]:
        """Names visible from the current scope, innermost first."""
        seen: List[str] = []
        for level in range(self.current_scope, -1, -1):
            for name in self.scopes[level]:
                if name not in seen:
                    seen.append(name)
        return seen

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get visible names similar to ``name`` (for error suggestions)."""
        def levenshtein_distance(s1: str, s2: str) -> int:
            """Calculate edit distance between two strings."""
            if len(s1) < len(s2):
                return levenshtein_distance(s2, s1)

            if len(s2) == 0:
                return len(s1)

            previous_row = list(range(len(s2) + 1))
            for i, c1 in enumerate(s1):
                current_row = [i + 1]
                for j, c2 in enumerate(s2):
                    insertions = previous_row[j + 1] + 1
                    deletions = current_row[j] + 1
                    substitutions = previous_row[j] + (c1 != c2)
                    current_row.append(min(insertions, deletions, substitutions))
                previous_row = current_row

            return previous_row[-1]

        similar_names = []
        for candidate in self.visible_names():
            distance = levenshtein_distance(name.lower(), candidate.lower())
            if distance <= max_distance:
                similar_names.append((candidate, distance))

        similar_names.sort(key=lambda x: x[1])
        return [candidate for candidate, _ in similar_names[:5]]

    def __str__(self) -> str:
        return f"SymbolTable(scopes: {len(self.scopes)}, current: {self.current_scope})"
