#!/usr/bin/env python3
"""
Main test runner for Husk compiler tests.

Runs a quick smoke test of the whole pipeline, then the unittest suites in
tests/. Use `pytest tests/` to also run the pytest-style tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


SMOKE_PROGRAM = """
fn helper() {
    return 1;
}

fn main() {
    let a = 6;
    let b = a * 7;
    return b - 40;
}
"""


def run_smoke_test():
    """Compile and JIT-run a small program through every stage."""
    print("🚀 Husk Compiler Test Suite")
    print("=" * 60)

    try:
        from husk.lexer import Lexer
        from husk.parser import Parser
        from husk.codegen import CodeGenerator
        from husk.backend import LLVMBackend
        print("✅ All compiler modules imported successfully")
    except ImportError as e:
        print(f"❌ Failed to import compiler modules: {e}")
        return False

    print("Testing simple compilation pipeline...")
    try:
        print("  🔧 Lexing...")
        tokens = Lexer(SMOKE_PROGRAM, "smoke.hk").tokenize()
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        program = Parser(tokens).parse()
        print(f"     Parsed {len(program.functions)} functions")

        print("  🔧 IR Generation...")
        module = CodeGenerator("smoke").generate(program)

        print("  🔧 JIT execution...")
        result = LLVMBackend().run(module)
        if result != 2:
            print(f"     ❌ main returned {result}, expected 2")
            return False
        print("     ✅ main returned 2")
    except Exception as e:
        print(f"❌ Compilation pipeline test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False

    print()
    print("Generated LLVM IR:")
    print("-" * 40)
    print(str(module))
    print("-" * 40)
    print()
    return True


def run_unit_tests():
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"), pattern="test_*.py")
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_smoke_test() and run_unit_tests()
    sys.exit(0 if success else 1)
