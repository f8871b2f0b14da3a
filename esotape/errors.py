"""Structured error objects for the esotape interpreter.

Every failure carries a machine-readable record: a kind, a message, an
optional source location and a details dict. The exception classes below
wrap exactly one record each so that callers can either catch by class or
serialize the record as JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    UNEXPECTED_CHARACTER = "unexpected_character"
    TRUNCATED_WORD = "truncated_word"
    UNPAIRED_WORD = "unpaired_word"
    INPUT_EXHAUSTED = "input_exhausted"
    TAPE_BOUNDS_VIOLATION = "tape_bounds_violation"
    CONFIG_ERROR = "config_error"
    INTERNAL_ERROR = "internal_error"


@dataclass
class SourceLocation:
    line: int
    column: int
    file: str = "<program>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass
class EsotapeError:
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.location:
            d["location"] = {
                "file": self.location.file,
                "line": self.location.line,
                "column": self.location.column,
            }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        return f"[{self.kind.value}]{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------

def unexpected_character(
    got: str,
    expected: str,
    location: Optional[SourceLocation] = None,
) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.UNEXPECTED_CHARACTER,
        message=f"Encountered {got!r} but expected {expected!r}",
        location=location,
        details={"got": got, "expected": expected},
    )


def truncated_word(
    fragment: str,
    expected: str,
    location: Optional[SourceLocation] = None,
) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.TRUNCATED_WORD,
        message=f"Last Ook has been partially eaten ({fragment!r}); expected {expected!r} next",
        location=location,
        details={"got": None, "expected": expected, "fragment": fragment},
    )


def unpaired_word(
    word: str,
    location: Optional[SourceLocation] = None,
) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.UNPAIRED_WORD,
        message=f"Last Ook is alone ({word!r}); it needs a second word",
        location=location,
        details={"got": None, "expected": "O", "word": word},
    )


def input_exhausted(consumed: int, program_head: int) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.INPUT_EXHAUSTED,
        message=f"Input is empty after {consumed} byte(s)",
        details={"consumed": consumed, "program_head": program_head},
    )


def tape_bounds_violation(position: int, size: int) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.TAPE_BOUNDS_VIOLATION,
        message=f"Cursor moved to {position}, outside the tape [0, {size})",
        details={"position": position, "size": size},
    )


def config_error(key: str, value: Any, allowed: str) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.CONFIG_ERROR,
        message=f"Invalid value {value!r} for '{key}'; expected {allowed}",
        details={"key": key, "value": value, "allowed": allowed},
    )


def internal_error(message: str, **details: Any) -> EsotapeError:
    return EsotapeError(
        kind=ErrorKind.INTERNAL_ERROR,
        message=message,
        details=details,
    )


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class _RecordError(Exception):
    """Exception wrapping a single EsotapeError record."""

    def __init__(self, error: EsotapeError):
        self.error = error
        super().__init__(str(error))

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.error.location

    def to_dict(self) -> dict[str, Any]:
        return self.error.to_dict()

    def to_json(self, indent: int = 2) -> str:
        return self.error.to_json(indent=indent)


class LexError(_RecordError):
    """A program could not be lexed. No instructions are returned."""

    @property
    def got(self) -> Optional[str]:
        return self.error.details.get("got")

    @property
    def expected(self) -> Optional[str]:
        return self.error.details.get("expected")


class UnexpectedCharacter(LexError):
    pass


class TruncatedWord(LexError):
    pass


class UnpairedWord(LexError):
    pass


class ExecutionError(_RecordError):
    """A run failed. ``output`` holds what was produced before the failure."""

    def __init__(self, error: EsotapeError, output: bytes = b""):
        super().__init__(error)
        self.output = output


class InputExhausted(ExecutionError):
    pass


class TapeBoundsViolation(ExecutionError):
    pass


class ConfigError(_RecordError):
    pass


class InternalError(_RecordError):
    """Internal consistency fault. Reaching this is a bug."""
