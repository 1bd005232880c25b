"""
Code Generator for the x86 C Compiler.

Lowers the AST into the assembly model defined in asm_nodes. The mapping
is structural and total: every AST the parser can build has exactly one
lowering, and no new error kind is introduced here.

Calling convention:
  - The return value is left in %eax before ``ret``.
"""

from __future__ import annotations
import logging
from typing import List

from .ast_nodes import ConstantInt, Expression, Function, Program, ReturnStmt, Statement
from .asm_nodes import (
    AsmFunction, AsmProgram, Immediate, Instruction, Mov, Operand, Register, Ret,
)

log = logging.getLogger(__name__)


class CodeGenerator:
    """Lowers a Program AST into an AsmProgram."""

    def lower(self, program: Program) -> AsmProgram:
        func = self._lower_function(program.function)
        log.debug("lowered %s: %d instructions", func.name, len(func.instructions))
        return AsmProgram(func)

    def _lower_function(self, func: Function) -> AsmFunction:
        return AsmFunction(func.name, self._lower_statement(func.body))

    def _lower_statement(self, stmt: Statement) -> List[Instruction]:
        if isinstance(stmt, ReturnStmt):
            return [
                Mov(src=self._lower_expression(stmt.value), dst=Register()),
                Ret(),
            ]
        raise TypeError(f"cannot lower statement {stmt!r}")

    def _lower_expression(self, expr: Expression) -> Operand:
        if isinstance(expr, ConstantInt):
            return Immediate(expr.value)
        raise TypeError(f"cannot lower expression {expr!r}")
