"""One-call entry point: lex a program and run it."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from esotape.config import EsotapeConfig
from esotape.dialects import Dialect, lex
from esotape.engine import ExecutionResult, execute


def run(
    source: str,
    input: Union[bytes, bytearray, Iterable[int]] = b"",
    dialect: Optional[Union[str, Dialect]] = None,
    config: Optional[EsotapeConfig] = None,
    filename: str = "<program>",
) -> ExecutionResult:
    """Lex ``source`` and execute it against ``input``.

    ``dialect`` overrides the configured one. Lex and execution errors
    propagate to the caller unchanged.
    """
    config = config or EsotapeConfig()
    sequence = lex(source, dialect or config.dialect, filename)
    return execute(
        sequence,
        input,
        tape_size=config.tape_size,
        bounds=config.bounds,
        loop_matching=config.loop_matching,
    )
