"""
Compiler configuration.

Options are passed explicitly through the pipeline; `from_env` lets the CLI
pick up the conventional environment variables.

Author: xwest
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class CompilerOptions:
    """Settings shared by the pipeline, the backend and the CLI."""
    module_name: str = "husk"
    target_triple: Optional[str] = None  # None means the host triple
    use_color: bool = True
    linker: str = "cc"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompilerOptions":
        """
        Read HUSK_TARGET (target triple), NO_COLOR and CC.
        """
        env = os.environ if environ is None else environ
        return cls(
            target_triple=env.get("HUSK_TARGET") or None,
            use_color="NO_COLOR" not in env,
            linker=env.get("CC") or "cc",
        )

    def with_changes(self, **changes) -> "CompilerOptions":
        return replace(self, **changes)
