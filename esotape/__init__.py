"""esotape — interpreter for Brainfuck, Ook and Spoon on a shared tape machine."""

__version__ = "0.1.0"

from esotape.instructions import Instruction, InstructionSequence
from esotape.dialects import Dialect, get_lexer, lex, supported_dialects
from esotape.tape import MEMORY_SIZE, BoundsPolicy, Tape
from esotape.engine import Engine, ExecStatus, ExecutionResult, LoopMatching, execute
from esotape.config import EsotapeConfig, load_config
from esotape.api import run
from esotape.errors import (
    ConfigError,
    ExecutionError,
    InputExhausted,
    InternalError,
    LexError,
    TapeBoundsViolation,
    TruncatedWord,
    UnexpectedCharacter,
    UnpairedWord,
)

__all__ = [
    "Instruction",
    "InstructionSequence",
    "Dialect",
    "get_lexer",
    "lex",
    "supported_dialects",
    "MEMORY_SIZE",
    "BoundsPolicy",
    "Tape",
    "Engine",
    "ExecStatus",
    "ExecutionResult",
    "LoopMatching",
    "execute",
    "EsotapeConfig",
    "load_config",
    "run",
    "ConfigError",
    "ExecutionError",
    "InputExhausted",
    "InternalError",
    "LexError",
    "TapeBoundsViolation",
    "TruncatedWord",
    "UnexpectedCharacter",
    "UnpairedWord",
]
