"""Dialect lexers: Brainfuck, Ook and Spoon onto one instruction set."""

from __future__ import annotations

from typing import Any, Dict, List, Union

from esotape.dialects.base import (
    DEFAULT_DIALECT,
    Dialect,
    Lexer,
    get_lexer,
    register_dialect,
    registered_dialects,
)
from esotape.dialects.brainfuck import BrainfuckLexer
from esotape.dialects.ook import OokLexer
from esotape.dialects.spoon import SpoonLexer
from esotape.instructions import InstructionSequence


def lex(source: str, dialect: Union[str, Dialect] = DEFAULT_DIALECT,
        filename: str = "<program>") -> InstructionSequence:
    """Lex ``source`` written in ``dialect`` into an InstructionSequence."""
    return get_lexer(dialect, filename).lex(source)


def supported_dialects() -> List[Dict[str, Any]]:
    """List all registered dialects with their lexer class."""
    return [
        {"id": d.value, "lexer": get_lexer(d).__class__.__name__}
        for d in registered_dialects()
    ]


__all__ = [
    "DEFAULT_DIALECT",
    "Dialect",
    "Lexer",
    "BrainfuckLexer",
    "OokLexer",
    "SpoonLexer",
    "get_lexer",
    "lex",
    "register_dialect",
    "registered_dialects",
    "supported_dialects",
]
