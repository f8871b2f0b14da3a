"""esotape dialect framework.

Every dialect is a Lexer: it turns the source text of one surface syntax
into the shared InstructionSequence. Lexers register themselves against a
Dialect tag so callers pick one with ``get_lexer(Dialect.OOK)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterator, List, Tuple, Type, Union

from esotape.errors import SourceLocation
from esotape.instructions import Instruction, InstructionSequence


class Dialect(Enum):
    BRAINFUCK = "brainfuck"
    OOK = "ook"
    SPOON = "spoon"

    @classmethod
    def parse(cls, value: Union[str, Dialect]) -> Dialect:
        if isinstance(value, Dialect):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = ", ".join(d.value for d in cls)
            raise ValueError(
                f"Unsupported dialect: '{value}'. Supported: {supported}"
            ) from None


DEFAULT_DIALECT = Dialect.BRAINFUCK


class Lexer(ABC):
    """Base class for dialect lexers.

    Subclasses implement ``_lex`` and receive characters together with
    their source location through ``_scan``.
    """

    dialect: Dialect

    def __init__(self, filename: str = "<program>"):
        self.filename = filename
        self.line = 1
        self.column = 1

    def reset(self) -> None:
        """Reset location state between invocations."""
        self.line = 1
        self.column = 1

    def _loc(self) -> SourceLocation:
        return SourceLocation(self.line, self.column, self.filename)

    def _scan(self, source: str) -> Iterator[Tuple[str, SourceLocation]]:
        for ch in source:
            loc = self._loc()
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            yield ch, loc

    def lex(self, source: str) -> InstructionSequence:
        self.reset()
        return InstructionSequence.of(self._lex(source), self.dialect.value)

    @abstractmethod
    def _lex(self, source: str) -> List[Instruction]:
        ...


# ---------------------------------------------------------------------------
# Dialect Registry
# ---------------------------------------------------------------------------

_REGISTRY: Dict[Dialect, Type[Lexer]] = {}


def register_dialect(lexer_class: Type[Lexer]) -> Type[Lexer]:
    """Register a lexer class under its dialect. Usable as a decorator."""
    _REGISTRY[lexer_class.dialect] = lexer_class
    return lexer_class


def get_lexer(dialect: Union[str, Dialect] = DEFAULT_DIALECT,
              filename: str = "<program>") -> Lexer:
    """Get a lexer instance for a dialect."""
    dialect = Dialect.parse(dialect)
    cls = _REGISTRY.get(dialect)
    if cls is None:
        supported = ", ".join(sorted(d.value for d in _REGISTRY))
        raise ValueError(
            f"No lexer registered for '{dialect.value}'. Supported: {supported}"
        )
    return cls(filename)


def registered_dialects() -> List[Dialect]:
    return sorted(_REGISTRY, key=lambda d: d.value)
