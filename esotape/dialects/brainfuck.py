"""Brainfuck lexer.

One character per instruction; every other character is a comment.
Brainfuck has no spelling for EXIT or PRINT.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from esotape.dialects.base import Dialect, Lexer, register_dialect
from esotape.instructions import Instruction

logger = logging.getLogger(__name__)

_COMMANDS: Dict[str, Instruction] = {
    ">": Instruction.RIGHT,
    "<": Instruction.LEFT,
    "+": Instruction.INCR,
    "-": Instruction.DECR,
    ".": Instruction.OUT,
    ",": Instruction.IN,
    "[": Instruction.BEGIN,
    "]": Instruction.END,
}


@register_dialect
class BrainfuckLexer(Lexer):
    dialect = Dialect.BRAINFUCK

    def _lex(self, source: str) -> List[Instruction]:
        instructions = [_COMMANDS[ch] for ch in source if ch in _COMMANDS]
        logger.debug("brainfuck: %d instructions from %d characters",
                     len(instructions), len(source))
        return instructions
