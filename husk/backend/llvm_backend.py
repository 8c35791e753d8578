"""
LLVM Backend for Husk.

Takes the llvmlite IR module produced by the code generator and turns it into
something runnable: verified LLVM IR text, target assembly, an object file,
a linked executable, or a direct in-process JIT call of `main`.

Author: xwest
"""

import ctypes
import logging
import os
import subprocess
import sys
import tempfile
from typing import Optional

import llvmlite.binding as llvm
from llvmlite import ir

from ..diagnostics import CompilerError

logger = logging.getLogger(__name__)

OUTPUT_KINDS = ("llvm-ir", "asm", "obj")


class BackendError(CompilerError):
    """Verification, emission, linking or JIT failure."""

    def __init__(self, message: str, help_text: Optional[str] = None):
        super().__init__(message, code="B001", help_text=help_text)


def _c_runtime() -> ctypes.CDLL:
    """The C library providing printf and fflush to JIT-compiled code."""
    return ctypes.cdll.msvcrt if sys.platform == "win32" else ctypes.CDLL(None)


class LLVMBackend:
    """
    LLVM backend for Husk.

    Handles:
    - Module verification
    - Textual IR, assembly and object emission
    - Linking through an external C compiler
    - JIT execution with MCJIT
    """

    def __init__(self, target_triple: Optional[str] = None, linker: str = "cc"):
        """
        Initialize the LLVM backend.

        Args:
            target_triple: Target triple (e.g., "x86_64-pc-linux-gnu");
                defaults to the host
            linker: C compiler driver used to link executables
        """
        llvm.initialize_native_target()
        llvm.initialize_native_asmprinter()

        self.target_triple = target_triple or llvm.get_process_triple()
        self.linker = linker

    def verify(self, module: ir.Module, target_triple: Optional[str] = None) -> "llvm.ModuleRef":
        """
        Parse and verify the module.

        Returns:
            The verified llvmlite binding module, retargeted to the backend's
            triple and data layout

        Raises:
            BackendError: if LLVM rejects the IR
        """
        triple = target_triple or self.target_triple
        try:
            llvm_module = llvm.parse_assembly(str(module))
            llvm_module.verify()
        except RuntimeError as e:
            raise BackendError(f"LLVM module verification failed: {e}") from e

        target_machine = self._create_target_machine(triple)
        llvm_module.triple = triple
        llvm_module.data_layout = str(target_machine.target_data)
        return llvm_module

    def emit_llvm_ir(self, module: ir.Module) -> str:
        """Get the verified LLVM IR as a string."""
        return str(self.verify(module))

    def emit_assembly(self, module: ir.Module) -> str:
        llvm_module = self.verify(module)
        return self._create_target_machine(self.target_triple).emit_assembly(llvm_module)

    def emit_object(self, module: ir.Module) -> bytes:
        llvm_module = self.verify(module)
        return self._create_target_machine(self.target_triple).emit_object(llvm_module)

    def write_output(self, module: ir.Module, output_path: str, kind: str = "llvm-ir"):
        """
        Write the module to disk.

        Args:
            module: IR module
            output_path: Destination file
            kind: One of "llvm-ir", "asm" or "obj"
        """
        if kind == "llvm-ir":
            data = self.emit_llvm_ir(module).encode("utf-8")
        elif kind == "asm":
            data = self.emit_assembly(module).encode("utf-8")
        elif kind == "obj":
            data = self.emit_object(module)
        else:
            raise ValueError(f"Unknown output kind {kind!r}, expected one of {OUTPUT_KINDS}")

        with open(output_path, "wb") as f:
            f.write(data)
        logger.info("Wrote %s to %s", kind, output_path)

    def link_executable(self, module: ir.Module, output_path: str,
                        linker: Optional[str] = None):
        """
        Compile the module to an object file and link it with the C runtime.

        Raises:
            BackendError: if the linker is missing or fails
        """
        linker = linker or self.linker
        obj_bytes = self.emit_object(module)

        with tempfile.NamedTemporaryFile(suffix=".o", delete=False) as obj_file:
            obj_file.write(obj_bytes)
            obj_path = obj_file.name

        try:
            link_cmd = [linker, "-o", output_path, obj_path]
            logger.debug("Linking: %s", " ".join(link_cmd))
            try:
                result = subprocess.run(link_cmd, capture_output=True, text=True)
            except OSError as e:
                raise BackendError(
                    f"Could not run linker '{linker}': {e}",
                    help_text="Set CC to a working C compiler driver.",
                ) from e

            if result.returncode != 0:
                raise BackendError(f"Linking failed: {result.stderr.strip()}")
        finally:
            os.unlink(obj_path)

        logger.info("Linked executable %s", output_path)

    def run(self, module: ir.Module, entry: str = "main") -> int:
        """
        JIT-compile the module and call `entry`.

        Output written by the program through printf is flushed before
        returning.

        Returns:
            The i32 value returned by the entry function
        """
        llvm_module = self.verify(module, llvm.get_process_triple())
        target_machine = self._create_target_machine(llvm.get_process_triple())

        # MCJIT only sees symbols registered with it
        libc = _c_runtime()
        llvm.add_symbol("printf", ctypes.cast(libc.printf, ctypes.c_void_p).value)

        engine = llvm.create_mcjit_compiler(llvm_module, target_machine)
        engine.finalize_object()
        engine.run_static_constructors()

        address = engine.get_function_address(entry)
        if not address:
            raise BackendError(f"Entry function '{entry}' not found in module")

        entry_func = ctypes.CFUNCTYPE(ctypes.c_int32)(address)
        try:
            result = entry_func()
        finally:
            libc.fflush(None)

        logger.debug("%s returned %d", entry, result)
        return result

    def _create_target_machine(self, triple: str) -> "llvm.TargetMachine":
        try:
            target = llvm.Target.from_triple(triple)
        except RuntimeError as e:
            raise BackendError(f"Unsupported target '{triple}': {e}") from e
        # PIC so objects link into position independent executables
        return target.create_target_machine(reloc="pic", codemodel="default")
