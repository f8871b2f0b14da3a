"""esotape output formatters — human-friendly terminal output.

Provides the output modes of ``esotape run``:
    pretty — bold colored status lines, then the output as text (default)
    raw    — the output bytes, nothing else
    json   — machine-readable result or error
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List

from esotape.engine import ExecStatus, ExecutionResult
from esotape.instructions import InstructionSequence


# ── ANSI color helpers ───────────────────────────────────────────────────

_NO_COLOR = os.environ.get("NO_COLOR") is not None or not sys.stderr.isatty()


def _c(code: str, text: str) -> str:
    if _NO_COLOR:
        return text
    return f"\033[{code}m{text}\033[0m"


def red(t: str) -> str:
    return _c("1;31", t)


def green(t: str) -> str:
    return _c("1;32", t)


def blue(t: str) -> str:
    return _c("1;34", t)


def yellow(t: str) -> str:
    return _c("1;33", t)


def dim(t: str) -> str:
    return _c("2", t)


# ── Status lines ─────────────────────────────────────────────────────────

def status(message: str) -> str:
    """A progress line such as 'Tokenizing...'."""
    return blue(message)


def success(message: str) -> str:
    return green(message)


def failure(message: str) -> str:
    return red(message)


_HALT_NOTES = {
    ExecStatus.COMPLETED: "",
    ExecStatus.EXITED: "Program exited early.",
    ExecStatus.UNMATCHED_LOOP: "Halted on a loop marker without a partner.",
}


# ── Pretty formatter (default) ──────────────────────────────────────────

def format_tokens(sequence: InstructionSequence) -> str:
    """Compact one-line listing, e.g. ``[Incr, Incr, Out]``."""
    names = ", ".join(i.name.capitalize() for i in sequence)
    return f"[{names}]"


def format_result_header(result: ExecutionResult) -> str:
    lines: List[str] = [success("Executed! Here is the output:")]
    note = _HALT_NOTES[result.status]
    if note:
        lines.insert(0, yellow(note))
    return "\n".join(lines)


def format_error_pretty(error: Dict[str, Any]) -> str:
    """Format a serialized EsotapeError as one red line."""
    loc = error.get("location")
    where = ""
    if loc:
        where = f"{loc['file']}:{loc['line']}:{loc['column']}: "
    return failure(f"{where}{error.get('message', 'Unknown error')}.")


# ── JSON formatter ──────────────────────────────────────────────────────

def format_result_json(result: ExecutionResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def format_error_json(error: Dict[str, Any], output: bytes = b"") -> str:
    payload: Dict[str, Any] = {"error": error}
    if output:
        payload["output"] = output.decode("utf-8", errors="replace")
    return json.dumps(payload, indent=2)
