"""Spoon lexer.

Spoon spells instructions with a binary prefix code:

    1         INCR        0011      END
    000       DECR        00100     BEGIN
    010       RIGHT       001010    OUT
    011       LEFT        0010110   IN
    00101110  PRINT       00101111  EXIT

Bits are collected into an eight-slot word; after each bit the lexer tests
only the slot(s) that decide a code at that position. Characters other
than ``0`` and ``1`` are ignored and a trailing partial word is dropped.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from esotape.dialects.base import Dialect, Lexer, register_dialect
from esotape.instructions import Instruction

logger = logging.getLogger(__name__)

WORD_SIZE = 8


def _match(word: List[str], position: int) -> Optional[Instruction]:
    """Decode the word once ``position`` has just been written."""
    bit = word[position]
    if position == 0:
        return Instruction.INCR if bit == "1" else None
    if position == 2:
        return {
            "10": Instruction.RIGHT,
            "11": Instruction.LEFT,
            "00": Instruction.DECR,
        }.get(word[1] + word[2])
    if position == 3:
        return Instruction.END if bit == "1" else None
    if position == 4:
        return Instruction.BEGIN if bit == "0" else None
    if position == 5:
        return Instruction.OUT if bit == "0" else None
    if position == 6:
        return Instruction.IN if bit == "0" else None
    if position == 7:
        return Instruction.PRINT if bit == "0" else Instruction.EXIT
    return None


@register_dialect
class SpoonLexer(Lexer):
    dialect = Dialect.SPOON

    def _lex(self, source: str) -> List[Instruction]:
        instructions: List[Instruction] = []
        word = ["0"] * WORD_SIZE
        position = 0

        for ch in source:
            if ch not in "01":
                continue
            word[position] = ch
            instruction = _match(word, position)
            if instruction is not None:
                instructions.append(instruction)
                position = 0
            elif position == WORD_SIZE - 1:
                position = 0
            else:
                position += 1

        if position:
            logger.debug("spoon: dropping %d trailing bit(s)", position)
        logger.debug("spoon: %d instructions from %d characters",
                     len(instructions), len(source))
        return instructions
