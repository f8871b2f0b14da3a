"""esotape instruction model.

Ten payload-free instructions shared by every dialect. Lexers produce an
InstructionSequence; the engine consumes it read-only.
JSON-serializable for the ``tokens`` command.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Union, overload


class Instruction(Enum):
    RIGHT = "right"
    LEFT = "left"
    INCR = "incr"
    DECR = "decr"
    OUT = "out"
    IN = "in"
    BEGIN = "begin"
    END = "end"
    EXIT = "exit"
    PRINT = "print"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def __repr__(self) -> str:
        return f"Instruction.{self.name}"


_SYMBOLS: dict[Instruction, str] = {
    Instruction.RIGHT: ">",
    Instruction.LEFT: "<",
    Instruction.INCR: "+",
    Instruction.DECR: "-",
    Instruction.OUT: ".",
    Instruction.IN: ",",
    Instruction.BEGIN: "[",
    Instruction.END: "]",
    Instruction.EXIT: "!",
    Instruction.PRINT: "#",
}


@dataclass(frozen=True)
class InstructionSequence:
    """An immutable, index-addressable run of instructions."""
    instructions: tuple[Instruction, ...] = ()
    dialect: str = "brainfuck"

    @classmethod
    def of(cls, instructions: Iterable[Instruction], dialect: str = "brainfuck") -> InstructionSequence:
        return cls(tuple(instructions), dialect)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    @overload
    def __getitem__(self, index: int) -> Instruction: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Instruction, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self.instructions[index]

    def count(self, instruction: Instruction) -> int:
        return self.instructions.count(instruction)

    def to_symbols(self) -> str:
        return "".join(i.symbol for i in self.instructions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dialect": self.dialect,
            "length": len(self.instructions),
            "instructions": [i.value for i in self.instructions],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
