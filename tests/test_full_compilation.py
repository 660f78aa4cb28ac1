"""
End-to-end tests for MicroLang.

Tests the full pipeline from source text to the final variable store.

Author: xwest
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from microlang import (
    Lexer, Parser, SemanticAnalyzer, BytecodeGenerator, VirtualMachine,
    PipelineOptions, compile_source, run_source, run_file
)
from microlang.analyzer import SemanticAnalysisFailed, SemanticErrorType
from microlang.bytecode import Opcode
from microlang.parser import ParseError
from microlang.vm import DivisionByZeroFault


class TestFullCompilation(unittest.TestCase):
    """Test the full compilation pipeline."""

    def _run_stages(self, code: str):
        """Drive every stage by hand."""
        lexer = Lexer(code)
        parser = Parser(lexer)
        ast = parser.parse_program()

        analyzer = SemanticAnalyzer()
        analysis = analyzer.analyze(ast)
        self.assertFalse(analysis.has_errors(), f"Unexpected errors: {analysis.errors}")

        instructions = BytecodeGenerator().generate(ast)
        return VirtualMachine(instructions, analyzer.symbol_table).execute()

    def test_reference_program(self):
        code = "x = (10 + 5 * 2) / 4;\ny = x + 10;\nz = y - y / 5;"
        self.assertEqual(self._run_stages(code), {"x": 5.0, "y": 15.0, "z": 12.0})

    def test_left_associativity(self):
        self.assertEqual(run_source("x = 10 - 5 - 2;"), {"x": 3.0})
        self.assertEqual(run_source("x = 16 / 4 / 2;"), {"x": 2.0})

    def test_precedence(self):
        self.assertEqual(run_source("x = 2 + 3 * 4;"), {"x": 14.0})

    def test_parentheses(self):
        self.assertEqual(run_source("x = (2 + 3) * 4;"), {"x": 20.0})

    def test_floating_point_literals(self):
        result = run_source("a = .5;\nb = 4.;\nc = a * b;")
        self.assertEqual(result, {"a": 0.5, "b": 4.0, "c": 2.0})

    def test_division_by_zero(self):
        with self.assertRaises(DivisionByZeroFault):
            run_source("x = 1 / 0;")

    def test_division_by_computed_zero(self):
        with self.assertRaises(DivisionByZeroFault):
            run_source("a = 3;\nb = 10 / (a - 3);")

    def test_semantic_errors_stop_execution(self):
        with self.assertRaises(SemanticAnalysisFailed) as ctx:
            run_source("x = y;\nx = 2;")
        types = [e.error_type for e in ctx.exception.errors]
        self.assertEqual(types, [
            SemanticErrorType.UNDEFINED_VARIABLE,
            SemanticErrorType.DUPLICATE_DECLARATION,
        ])

    def test_semantic_check_can_be_disabled(self):
        """Reassignment is only a static finding; the VM simply overwrites."""
        options = PipelineOptions(check_semantics=False)
        self.assertEqual(run_source("x = 1;\nx = x + 1;", options), {"x": 2.0})

    def test_syntax_errors_propagate(self):
        with self.assertRaises(ParseError):
            run_source("x = (1 + 2;")

    def test_truncated_expression_runs_with_warning(self):
        with self.assertLogs("microlang.parser.parser", level="WARNING"):
            result = compile_source("x = 7 - ;")
        self.assertEqual(len(result.parse_warnings), 1)

        vm = VirtualMachine(result.instructions, result.analysis.symbol_table)
        self.assertEqual(vm.execute(), {"x": 7.0})

    def test_compile_source_reports_everything(self):
        result = compile_source("a = 1;\nb = a * 2;", PipelineOptions(filename="calc.ml"))

        self.assertFalse(result.has_errors())
        self.assertEqual(result.ast.statements[0].location.filename, "calc.ml")
        self.assertEqual(result.instructions[-1].opcode, Opcode.STOP)
        self.assertIn("STORE_VARIABLE b", result.listing())
        self.assertEqual(result.lexer_warnings, [])

    def test_one_store_per_assignment_executed(self):
        code = "a = 1;\nb = a + 1;\nc = b + 1;"
        result = compile_source(code)
        stores = [i.operand for i in result.instructions if i.opcode == Opcode.STORE_VARIABLE]
        self.assertEqual(stores, ["a", "b", "c"])
        self.assertEqual(set(run_source(code)), {"a", "b", "c"})

    def test_run_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "prog.ml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("radius = 2;\narea = radius * radius * 3.5;\n")

            self.assertEqual(run_file(path), {"radius": 2.0, "area": 14.0})

    def test_run_file_reports_path_in_errors(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "bad.ml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("x = ;")

            with self.assertRaises(ParseError) as ctx:
                run_file(path)
            self.assertEqual(ctx.exception.location.filename, path)


if __name__ == '__main__':
    unittest.main()
