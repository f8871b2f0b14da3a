"""esotape CLI — Command-line interface for the esotape interpreter.

Commands:
  esotape run <program> [--ook | --spoon]   — Lex and execute a program
  esotape run -f <file>                     — Same, reading the program from a file
  esotape tokens <program>                  — Emit the instruction sequence (JSON)
  esotape dialects                          — List supported dialects
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from esotape import __version__
from esotape.config import OUTPUT_FORMATS, EsotapeConfig, load_config
from esotape.dialects import Dialect, lex, supported_dialects
from esotape.engine import LoopMatching, execute
from esotape.errors import ConfigError, ExecutionError, LexError
from esotape.formatters import (
    format_error_json,
    format_error_pretty,
    format_result_header,
    format_result_json,
    format_tokens,
    status,
    success,
)
from esotape.instructions import Instruction
from esotape.tape import BoundsPolicy

logger = logging.getLogger(__name__)


def _read_program(args: argparse.Namespace) -> Tuple[str, str]:
    """Return (source, filename) for the program argument."""
    if not args.file:
        return args.program, "<program>"
    with open(args.program, "r") as f:
        return f.read(), args.program


def _resolve_config(args: argparse.Namespace) -> EsotapeConfig:
    """Load the config file, then apply command-line overrides."""
    config = load_config(getattr(args, "config", None))
    if args.dialect:
        config.dialect = Dialect.parse(args.dialect)
    if getattr(args, "tape_size", None):
        config.tape_size = args.tape_size
    if getattr(args, "bounds", None):
        config.bounds = BoundsPolicy(args.bounds)
    if getattr(args, "loop_matching", None):
        config.loop_matching = LoopMatching(args.loop_matching)
    if getattr(args, "output_format", None):
        config.format = args.output_format
    if getattr(args, "show_tokens", False):
        config.show_tokens = True
    if getattr(args, "echo_program", False):
        config.echo_program = True
    return config


def _report(error: dict, fmt: str, output: bytes = b"") -> None:
    if fmt == "json":
        print(format_error_json(error, output))
        return
    if output and fmt == "pretty":
        print(output.decode("utf-8", errors="replace"))
    elif output:
        sys.stdout.buffer.write(output)
        sys.stdout.flush()
    print(format_error_pretty(error), file=sys.stderr)


def cmd_run(args: argparse.Namespace) -> int:
    """Lex the program in the selected dialect and execute it."""
    try:
        config = _resolve_config(args)
    except ConfigError as e:
        _report(e.to_dict(), getattr(args, "output_format", None) or "pretty")
        return 1

    logger.debug("config: %s", config.to_dict())
    fmt = config.format
    pretty = fmt == "pretty"
    err = sys.stderr

    if pretty:
        print(status("Reading code..."), file=err)
    try:
        source, filename = _read_program(args)
    except OSError as e:
        _report({"kind": "file_error", "message": f"Cannot read {args.program}: {e.strerror}"}, fmt)
        return 1
    if pretty and config.echo_program:
        print(source, file=err)

    if pretty:
        print(status("Tokenizing..."), file=err)
    try:
        sequence = lex(source, config.dialect, filename)
    except LexError as e:
        _report(e.to_dict(), fmt)
        return 1
    if pretty and config.show_tokens:
        print(format_tokens(sequence), file=err)

    if args.input is not None:
        data = args.input.encode("utf-8")
    elif Instruction.IN in sequence:
        if pretty:
            print(success("Ready to brainfuck?"), file=err)
            print(status("Please provide the input:"), file=err)
        data = sys.stdin.buffer.readline()
        if pretty:
            print(status("Input provided!"), file=err)
    else:
        data = b""

    if pretty:
        print(status("Executing..."), file=err)
    try:
        result = execute(
            sequence,
            data,
            tape_size=config.tape_size,
            bounds=config.bounds,
            loop_matching=config.loop_matching,
        )
    except ExecutionError as e:
        _report(e.to_dict(), fmt, e.output)
        return 1

    if fmt == "json":
        print(format_result_json(result))
    elif fmt == "raw":
        sys.stdout.buffer.write(result.output)
        sys.stdout.flush()
    else:
        print(format_result_header(result), file=err)
        print(result.text)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Emit the instruction sequence as JSON."""
    try:
        source, filename = _read_program(args)
    except OSError as e:
        print(json.dumps({"error": f"Cannot read {args.program}: {e.strerror}"}))
        return 1

    try:
        sequence = lex(source, args.dialect or Dialect.BRAINFUCK, filename)
    except LexError as e:
        print(e.to_json())
        return 1

    print(sequence.to_json())
    return 0


def cmd_dialects(args: argparse.Namespace) -> int:
    """List the supported dialects."""
    print(json.dumps(supported_dialects(), indent=2))
    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def _add_program_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("program", help="Program text (or a path with --file)")
    p.add_argument("-f", "--file", action="store_true", help="Treat PROGRAM as a file path")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--dialect", choices=[d.value for d in Dialect],
                       help="Source dialect (default: brainfuck)")
    for d in Dialect:
        group.add_argument(f"--{d.value}", dest="dialect", action="store_const", const=d.value,
                           help=f"Shorthand for --dialect {d.value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esotape",
        description="esotape — Brainfuck, Ook and Spoon interpreter",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    p_run = subparsers.add_parser("run", help="Lex and execute a program")
    _add_program_args(p_run)
    p_run.add_argument("--input", help="Input text (default: one line read from stdin when needed)")
    p_run.add_argument("--tape-size", type=_positive_int, dest="tape_size", help="Number of tape cells")
    p_run.add_argument("--bounds", choices=[b.value for b in BoundsPolicy],
                       help="What happens when the cursor leaves the tape")
    p_run.add_argument("--loop-matching", choices=[m.value for m in LoopMatching], dest="loop_matching",
                       help="linear reproduces the reference interpreter; nested pairs loops properly")
    p_run.add_argument("--format", choices=list(OUTPUT_FORMATS), dest="output_format",
                       help="Output format (default: pretty)")
    p_run.add_argument("--show-tokens", action="store_true", dest="show_tokens",
                       help="Print the instruction sequence before executing")
    p_run.add_argument("--echo-program", action="store_true", dest="echo_program",
                       help="Print the program text before lexing")
    p_run.add_argument("--config", help="Path to a config file (default: search for .esotaperc.yml)")
    p_run.set_defaults(func=cmd_run)

    # tokens
    p_tokens = subparsers.add_parser("tokens", help="Emit the instruction sequence as JSON")
    _add_program_args(p_tokens)
    p_tokens.set_defaults(func=cmd_tokens)

    # dialects
    p_dialects = subparsers.add_parser("dialects", help="List supported dialects")
    p_dialects.set_defaults(func=cmd_dialects)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
