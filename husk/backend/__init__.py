"""
Husk Backend Package.

Turns generated LLVM IR into text, assembly, objects, executables, or runs it
in-process.

Author: xwest
"""

from .llvm_backend import LLVMBackend, BackendError, OUTPUT_KINDS

__all__ = ['LLVMBackend', 'BackendError', 'OUTPUT_KINDS']
