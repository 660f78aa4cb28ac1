"""
Test suite for MicroLang bytecode generation.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from microlang.parser import parse_source, Program, Assignment, Number
from microlang.bytecode import BytecodeGenerator, Instruction, Opcode, format_bytecode


class TestBytecodeGenerator(unittest.TestCase):
    """Test cases for the bytecode generator."""

    def setUp(self):
        self.generator = BytecodeGenerator()

    def _compile(self, code: str):
        return self.generator.generate(parse_source(code))

    def test_post_order_emission(self):
        instructions = self._compile("x = 10 + 5 * 2;")

        self.assertEqual(instructions, (
            Instruction.load_constant(10.0),
            Instruction.load_constant(5.0),
            Instruction.load_constant(2.0),
            Instruction(Opcode.MULTIPLY),
            Instruction(Opcode.ADD),
            Instruction.store_variable("x"),
            Instruction.stop(),
        ))

    def test_left_operand_is_pushed_first(self):
        instructions = self._compile("d = a - b;")
        self.assertEqual(instructions[:3], (
            Instruction.load_variable("a"),
            Instruction.load_variable("b"),
            Instruction(Opcode.SUBTRACT),
        ))

    def test_statements_in_order(self):
        instructions = self._compile("a = 1;\nb = a / 2;")
        self.assertEqual([i.opcode for i in instructions], [
            Opcode.LOAD_CONSTANT, Opcode.STORE_VARIABLE,
            Opcode.LOAD_VARIABLE, Opcode.LOAD_CONSTANT, Opcode.DIVIDE, Opcode.STORE_VARIABLE,
            Opcode.STOP,
        ])

    def test_empty_program_is_just_stop(self):
        self.assertEqual(self.generator.generate(Program([])), (Instruction.stop(),))

    def test_single_stop_terminator(self):
        for code in ("x = 1;", "x = (1 + 2) * 3;\ny = x - 4;", ""):
            instructions = self._compile(code)
            self.assertEqual(instructions[-1].opcode, Opcode.STOP)
            self.assertEqual(sum(1 for i in instructions if i.opcode == Opcode.STOP), 1)

    def test_one_store_per_assignment(self):
        code = "x = 1;\ny = x;\nx2 = y * y;\nw = 3;"
        instructions = self._compile(code)
        stores = [i.operand for i in instructions if i.opcode == Opcode.STORE_VARIABLE]
        self.assertEqual(stores, ["x", "y", "x2", "w"])

    def test_generator_is_reusable(self):
        first = self.generator.generate(Program([Assignment("a", Number(1.0))]))
        second = self.generator.generate(Program([Assignment("b", Number(2.0))]))
        self.assertEqual(len(first), 3)
        self.assertEqual(second[1], Instruction.store_variable("b"))

    def test_instructions_are_immutable(self):
        instructions = self._compile("x = 1;")
        self.assertIsInstance(instructions, tuple)

    def test_listing(self):
        listing = format_bytecode(self._compile("x = 1;"))
        self.assertEqual(listing.splitlines(), [
            "0  LOAD_CONSTANT 1.0",
            "1  STORE_VARIABLE x",
            "2  STOP",
        ])


if __name__ == '__main__':
    unittest.main()
