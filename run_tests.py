#!/usr/bin/env python3
"""
Main test runner for MicroLang tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_pipeline_check():
    """Run a sample program through every stage and print what each one produced."""

    print("🚀 MicroLang Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from microlang.lexer import Lexer
        from microlang.parser import Parser
        from microlang.analyzer import SemanticAnalyzer
        from microlang.bytecode import BytecodeGenerator, format_bytecode
        from microlang.vm import VirtualMachine

        print("✅ All pipeline modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import pipeline modules: {e}")
        return False

    print("Testing simple compilation pipeline...")
    code = """
    x = (10 + 5 * 2) / 4;
    y = x + 10;
    z = y - y / 5;
    """

    print("  🔧 Lexing...")
    tokens = list(Lexer(code))
    print(f"     Generated {len(tokens)} tokens")

    print("  🔧 Parsing...")
    ast = Parser(Lexer(code)).parse_program()
    print(f"     Generated AST with {len(ast.statements)} statements")

    print("  🔧 Semantic Analysis...")
    analyzer = SemanticAnalyzer()
    analysis_result = analyzer.analyze(ast)
    if analysis_result.has_errors():
        print(f"     ❌ Semantic errors: {len(analysis_result.errors)}")
        for error in analysis_result.errors:
            print(f"        {error.message}")
        return False
    print("     ✅ No semantic errors")

    print("  🔧 Bytecode Generation...")
    instructions = BytecodeGenerator().generate(ast)
    print(f"     Generated {len(instructions)} instructions")

    print("  🔧 Execution...")
    storage = VirtualMachine(instructions, analyzer.symbol_table).execute()
    expected = {"x": 5.0, "y": 15.0, "z": 12.0}
    if storage != expected:
        print(f"     ❌ Expected {expected}, got {storage}")
        return False
    print(f"     ✅ {storage}")
    print()

    print("Generated bytecode:")
    print("-" * 40)
    print(format_bytecode(instructions))
    print("-" * 40)
    print()
    return True


def run_all_tests():
    """Run the pipeline check followed by the unit test suite."""
    if not run_pipeline_check():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    if not result.wasSuccessful():
        return False

    print()
    print("🎉 All tests PASSED!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
