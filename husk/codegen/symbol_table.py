"""
Per-function symbol table for Husk code generation.

Maps a variable name to the stack slot holding its value. A new, empty table
is created for every function; there are no nested scopes.

Author: xwest
"""

from typing import Dict, Iterator, Optional

from llvmlite import ir


class SymbolTable:
    """Variable name -> alloca slot, scoped to a single function."""

    def __init__(self, function_name: str = ""):
        self.function_name = function_name
        self._slots: Dict[str, ir.AllocaInstr] = {}

    def define(self, name: str, slot: ir.AllocaInstr) -> None:
        """Register a slot. The caller checks for duplicates first."""
        if name in self._slots:
            raise KeyError(f"'{name}' is already defined in {self.function_name or 'this function'}")
        self._slots[name] = slot

    def lookup(self, name: str) -> Optional[ir.AllocaInstr]:
        return self._slots.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)
