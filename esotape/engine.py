"""esotape execution engine.

Runs an InstructionSequence against a fixed-size Tape:

1. Fetch the instruction at ``program_head``
2. Apply it to the tape, the input cursor or the output buffer
3. Advance ``program_head`` (loop markers may first move it)

Execution halts when ``program_head`` runs off the end of the sequence, on
EXIT, or when a loop marker has no partner in the direction of travel.

Loop markers are matched one of two ways. LINEAR, the default, reproduces
the reference interpreter: BEGIN scans forward to the first END and END
scans backward to the first BEGIN, with no notion of nesting, so nested
loops pair with the wrong marker. NESTED precomputes a jump table pairing
each BEGIN with its properly nested END.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Union

from esotape.errors import ExecutionError, InputExhausted, input_exhausted
from esotape.instructions import Instruction
from esotape.tape import MEMORY_SIZE, BoundsPolicy, Tape

logger = logging.getLogger(__name__)


class ExecStatus(Enum):
    COMPLETED = "completed"            # ran off the end of the program
    EXITED = "exited"                  # EXIT instruction
    UNMATCHED_LOOP = "unmatched_loop"  # a loop scan found no partner


class LoopMatching(Enum):
    LINEAR = "linear"
    NESTED = "nested"


@dataclass
class ExecutionResult:
    """Outcome of a run. Unpacks as ``output, status``."""
    output: bytes
    status: ExecStatus
    steps: int = 0
    program_head: int = 0
    memory_head: int = 0
    tape: bytes = field(default=b"", repr=False)

    def __iter__(self) -> Iterator[Any]:
        yield self.output
        yield self.status

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "output": self.text,
            "output_bytes": list(self.output),
            "steps": self.steps,
            "program_head": self.program_head,
            "memory_head": self.memory_head,
        }


def build_jump_table(instructions: Sequence[Instruction]) -> Dict[int, int]:
    """Pair every BEGIN with its nested END, in both directions.

    Unbalanced markers are left out of the table.
    """
    jumps: Dict[int, int] = {}
    open_loops: list[int] = []
    for pc, instruction in enumerate(instructions):
        if instruction is Instruction.BEGIN:
            open_loops.append(pc)
        elif instruction is Instruction.END and open_loops:
            begin = open_loops.pop()
            jumps[begin] = pc
            jumps[pc] = begin
    return jumps


class Engine:
    """Tape machine for one run.

    Usage:
        engine = Engine(lex("++[-]"), b"")
        output, status = engine.run()

    An Engine owns its tape and is not reusable; build a new one per run.
    """

    def __init__(
        self,
        instructions: Sequence[Instruction],
        input: Union[bytes, bytearray, Iterable[int]] = b"",
        *,
        tape_size: int = MEMORY_SIZE,
        bounds: Union[str, BoundsPolicy] = BoundsPolicy.STRICT,
        loop_matching: Union[str, LoopMatching] = LoopMatching.LINEAR,
    ) -> None:
        self.instructions = instructions
        self.input = bytes(input)
        self.tape = Tape(tape_size, BoundsPolicy(bounds))
        self.loop_matching = LoopMatching(loop_matching)
        self.output = bytearray()
        self.program_head = 0
        self.input_head = 0
        self.steps = 0
        self._jumps: Optional[Dict[int, int]] = None
        if self.loop_matching is LoopMatching.NESTED:
            self._jumps = build_jump_table(instructions)

    @property
    def memory_head(self) -> int:
        return self.tape.head

    def run(self) -> ExecutionResult:
        logger.debug(
            "executing %d instructions (tape=%d, bounds=%s, loops=%s, input=%d bytes)",
            len(self.instructions), len(self.tape), self.tape.policy.value,
            self.loop_matching.value, len(self.input),
        )
        try:
            status = self._run()
        except ExecutionError as e:
            e.output = bytes(self.output)
            logger.debug("run failed after %d steps: %s", self.steps, e)
            raise
        logger.debug("halted: %s after %d steps", status.value, self.steps)
        return ExecutionResult(
            output=bytes(self.output),
            status=status,
            steps=self.steps,
            program_head=self.program_head,
            memory_head=self.tape.head,
            tape=self.tape.snapshot(),
        )

    def _run(self) -> ExecStatus:
        program = self.instructions
        tape = self.tape
        length = len(program)

        while self.program_head < length:
            instruction = program[self.program_head]
            self.steps += 1

            if instruction is Instruction.RIGHT:
                tape.right()
            elif instruction is Instruction.LEFT:
                tape.left()
            elif instruction is Instruction.INCR:
                tape.increment()
            elif instruction is Instruction.DECR:
                tape.decrement()
            elif instruction is Instruction.OUT:
                self.output.append(tape.read())
            elif instruction is Instruction.IN:
                tape.write(self._next_input())
            elif instruction is Instruction.PRINT:
                self.output.extend(tape.cells)
            elif instruction is Instruction.EXIT:
                return ExecStatus.EXITED
            elif instruction is Instruction.BEGIN:
                if tape.read() == 0:
                    target = self._matching_end()
                    if target is None:
                        self.program_head = length
                        return ExecStatus.UNMATCHED_LOOP
                    self.program_head = target
            elif instruction is Instruction.END:
                if tape.read() != 0:
                    target = self._matching_begin()
                    if target is None:
                        return ExecStatus.UNMATCHED_LOOP
                    self.program_head = target

            self.program_head += 1

        return ExecStatus.COMPLETED

    def _next_input(self) -> int:
        if self.input_head >= len(self.input):
            raise InputExhausted(input_exhausted(self.input_head, self.program_head))
        value = self.input[self.input_head]
        self.input_head += 1
        return value

    def _matching_end(self) -> Optional[int]:
        if self._jumps is not None:
            return self._jumps.get(self.program_head)
        program = self.instructions
        for pc in range(self.program_head, len(program)):
            if program[pc] is Instruction.END:
                return pc
        return None

    def _matching_begin(self) -> Optional[int]:
        if self._jumps is not None:
            return self._jumps.get(self.program_head)
        program = self.instructions
        for pc in range(self.program_head, -1, -1):
            if program[pc] is Instruction.BEGIN:
                return pc
        return None


def execute(
    instructions: Sequence[Instruction],
    input: Union[bytes, bytearray, Iterable[int]] = b"",
    *,
    tape_size: int = MEMORY_SIZE,
    bounds: Union[str, BoundsPolicy] = BoundsPolicy.STRICT,
    loop_matching: Union[str, LoopMatching] = LoopMatching.LINEAR,
) -> ExecutionResult:
    """Run ``instructions`` on a fresh tape and return the result."""
    return Engine(
        instructions,
        input,
        tape_size=tape_size,
        bounds=bounds,
        loop_matching=loop_matching,
    ).run()
