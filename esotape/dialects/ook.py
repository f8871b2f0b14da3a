"""Ook lexer.

An instruction is spelled as two words, each one of ``Ook.``, ``Ook?`` or
``Ook!``. Only the trailing punctuation distinguishes words, so the lexer
walks the letters ``O``, ``o``, ``k`` with a head and decodes the pair of
punctuation marks once the second word completes.

Characters that are not part of the grammar are ignored wherever they
appear, even between the letters of a word. A grammar character that is
not the one the head expects is an error.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from esotape.dialects.base import Dialect, Lexer, register_dialect
from esotape.errors import (
    InternalError,
    SourceLocation,
    TruncatedWord,
    UnexpectedCharacter,
    UnpairedWord,
    internal_error,
    truncated_word,
    unexpected_character,
    unpaired_word,
)
from esotape.instructions import Instruction

logger = logging.getLogger(__name__)

WORD = "Ook"
PUNCTUATION = ".?!"

# What the head expects at each position of a word.
_EXPECTED = ("O", "o", "k", PUNCTUATION)

_PAIRS: Dict[Tuple[str, str], Instruction] = {
    (".", "?"): Instruction.RIGHT,
    ("?", "."): Instruction.LEFT,
    (".", "."): Instruction.INCR,
    ("!", "!"): Instruction.DECR,
    ("!", "."): Instruction.OUT,
    (".", "!"): Instruction.IN,
    ("!", "?"): Instruction.BEGIN,
    ("?", "!"): Instruction.END,
    ("?", "?"): Instruction.EXIT,
}


@register_dialect
class OokLexer(Lexer):
    dialect = Dialect.OOK

    def _lex(self, source: str) -> List[Instruction]:
        instructions: List[Instruction] = []
        head = 0
        word_loc: Optional[SourceLocation] = None
        first: Optional[str] = None
        first_loc: Optional[SourceLocation] = None

        for ch, loc in self._scan(source):
            if ch in PUNCTUATION:
                if head != len(WORD):
                    raise UnexpectedCharacter(unexpected_character(ch, _EXPECTED[head], loc))
                head = 0
                if first is None:
                    first, first_loc = ch, word_loc
                else:
                    instructions.append(self._decode(first, ch))
                    first = None
            elif ch in WORD:
                if head >= len(WORD) or ch != WORD[head]:
                    raise UnexpectedCharacter(unexpected_character(ch, _EXPECTED[head], loc))
                if head == 0:
                    word_loc = loc
                head += 1

        if head != 0:
            raise TruncatedWord(truncated_word(WORD[:head], _EXPECTED[head], word_loc))
        if first is not None:
            raise UnpairedWord(unpaired_word(WORD + first, first_loc))

        logger.debug("ook: %d instructions from %d characters",
                     len(instructions), len(source))
        return instructions

    @staticmethod
    def _decode(first: str, second: str) -> Instruction:
        instruction = _PAIRS.get((first, second))
        if instruction is None:
            raise InternalError(internal_error(
                "Logic error: unknown Ook pair", first=first, second=second,
            ))
        return instruction
