"""
End-to-end MicroLang pipeline.

Wires lexer, parser, semantic analyzer, bytecode generator and virtual
machine together for callers that just want results.

Author: xwest
"""

import logging
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from .lexer import Lexer, LexerWarning
from .parser import Parser, Program, ParseWarning
from .analyzer import SemanticAnalyzer, AnalysisResult, SemanticAnalysisFailed
from .bytecode import BytecodeGenerator, Instruction, format_bytecode
from .vm import VirtualMachine

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Settings for a pipeline run."""
    filename: str = "<string>"
    check_semantics: bool = True    # refuse to execute programs with semantic errors
    trace: bool = False             # log every VM instruction at DEBUG level


@dataclass
class CompilationResult:
    """Everything produced before execution."""
    ast: Program
    analysis: AnalysisResult
    instructions: Tuple[Instruction, ...]
    lexer_warnings: List[LexerWarning] = field(default_factory=list)
    parse_warnings: List[ParseWarning] = field(default_factory=list)

    def has_errors(self) -> bool:
        return self.analysis.has_errors()

    def listing(self) -> str:
        return format_bytecode(self.instructions)


def compile_source(source: str, options: Optional[PipelineOptions] = None) -> CompilationResult:
    """
    Lex, parse, analyze and compile ``source``.

    Semantic errors are reported in the result, not raised.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    options = options or PipelineOptions()

    lexer = Lexer(source, options.filename)
    parser = Parser(lexer)
    ast = parser.parse_program()

    analysis = SemanticAnalyzer().analyze(ast)
    instructions = BytecodeGenerator().generate(ast)

    logger.debug("Compiled %s: %d statement(s), %d instruction(s)",
                 options.filename, len(ast.statements), len(instructions))

    return CompilationResult(
        ast=ast,
        analysis=analysis,
        instructions=instructions,
        lexer_warnings=list(lexer.warnings),
        parse_warnings=list(parser.warnings)
    )


def run_source(source: str, options: Optional[PipelineOptions] = None) -> Dict[str, float]:
    """
    Compile and execute ``source``.

    Returns:
        Final value of every assigned variable

    Raises:
        LexerError, ParseError: On syntax errors
        SemanticAnalysisFailed: If analysis reports errors and check_semantics is on
        VMError: On a runtime fault
    """
    options = options or PipelineOptions()
    result = compile_source(source, options)

    if options.check_semantics and result.has_errors():
        raise SemanticAnalysisFailed(result.analysis.errors)

    vm = VirtualMachine(result.instructions, result.analysis.symbol_table, trace=options.trace)
    return vm.execute()


def run_file(filepath: str, options: Optional[PipelineOptions] = None) -> Dict[str, float]:
    """
    Compile and execute a source file.

    Raises:
        IOError: If the file cannot be read
        (plus everything run_source raises)
    """
    options = options or PipelineOptions()
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    file_options = PipelineOptions(
        filename=filepath,
        check_semantics=options.check_semantics,
        trace=options.trace
    )
    return run_source(source, file_options)
