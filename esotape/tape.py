"""The engine's memory: a fixed-size tape of unsigned bytes."""

from __future__ import annotations

from enum import Enum

from esotape.errors import TapeBoundsViolation, tape_bounds_violation

MEMORY_SIZE = 30_000


class BoundsPolicy(Enum):
    STRICT = "strict"  # leaving the tape is an error
    WRAP = "wrap"      # the cursor wraps around the ends


class Tape:
    """Byte cells addressed by a single cursor.

    All cursor movement goes through ``right``/``left`` so the bounds policy
    is enforced in one place.
    """

    def __init__(self, size: int = MEMORY_SIZE, policy: BoundsPolicy = BoundsPolicy.STRICT):
        if size <= 0:
            raise ValueError(f"tape size must be positive, got {size}")
        self.policy = policy
        self.cells = bytearray(size)
        self._head = 0

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def head(self) -> int:
        return self._head

    def right(self) -> None:
        self._move(self._head + 1)

    def left(self) -> None:
        self._move(self._head - 1)

    def _move(self, position: int) -> None:
        size = len(self.cells)
        if 0 <= position < size:
            self._head = position
        elif self.policy is BoundsPolicy.WRAP:
            self._head = position % size
        else:
            raise TapeBoundsViolation(tape_bounds_violation(position, size))

    def read(self) -> int:
        return self.cells[self._head]

    def write(self, value: int) -> None:
        self.cells[self._head] = value & 0xFF

    def increment(self) -> None:
        self.write(self.read() + 1)

    def decrement(self) -> None:
        self.write(self.read() - 1)

    def snapshot(self) -> bytes:
        return bytes(self.cells)
