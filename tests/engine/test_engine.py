"""esotape Engine Tests — EXEC-001 through EXEC-008.

Tests for:
  - Cell arithmetic, output and input
  - EXIT and PRINT
  - Input exhaustion
  - Tape bounds under the strict and wrap policies
  - Linear (reference) versus nested loop matching
  - Unmatched loop markers
"""

import pytest

from esotape.dialects import lex
from esotape.engine import (
    Engine,
    ExecStatus,
    ExecutionResult,
    LoopMatching,
    build_jump_table,
    execute,
)
from esotape.errors import ErrorKind, ExecutionError, InputExhausted, TapeBoundsViolation
from esotape.instructions import Instruction
from esotape.tape import MEMORY_SIZE, BoundsPolicy, Tape

I = Instruction


# ===========================================================================
# EXEC-001: Arithmetic and output
# ===========================================================================

class TestEXEC001:
    """EXEC-001: Cells wrap modulo 256 and OUT appends the current cell."""

    def test_increment_twice_then_output(self):
        """Two increments then an output emit 2."""
        result = execute(lex("++."), b"")
        assert result.output == b"\x02"
        assert result.status is ExecStatus.COMPLETED

    @pytest.mark.parametrize("n", [0, 1, 65, 255, 256, 300, 513])
    def test_n_increments(self, n):
        """Cells wrap modulo 256."""
        output, _ = execute(lex("+" * n + "."))
        assert output == bytes([n % 256])

    def test_decrement_wraps(self):
        """Decrementing zero gives 255."""
        assert execute(lex("-.")).output == b"\xff"

    def test_hello(self):
        """A multiplication loop prints 'AB'."""
        program = "++++++++[>++++++++<-]>+.+."
        assert execute(lex(program)).output == b"AB"

    def test_empty_program(self):
        """An empty program completes with no output."""
        result = execute(lex(""))
        assert result.output == b""
        assert result.status is ExecStatus.COMPLETED
        assert result.steps == 0

    def test_result_unpacks(self):
        """Results unpack as (output, status)."""
        output, status = execute(lex("+."))
        assert output == b"\x01"
        assert status is ExecStatus.COMPLETED


# ===========================================================================
# EXEC-002: Input
# ===========================================================================

class TestEXEC002:
    """EXEC-002: IN consumes one input byte per instruction, left to right."""

    def test_echo(self):
        """IN then OUT echoes one byte."""
        assert execute(lex(",."), b"\x41").output == b"\x41"

    def test_consumes_in_order(self):
        """Input bytes are consumed left to right."""
        assert execute(lex(",.,.,."), b"xyz").output == b"xyz"

    def test_extra_input_is_ignored(self):
        """Unread input is not an error."""
        assert execute(lex(",."), b"abc").output == b"a"

    def test_input_as_list_of_ints(self):
        """Input may be any iterable of ints."""
        assert execute(lex(",+."), [9]).output == b"\x0a"


# ===========================================================================
# EXEC-003: Input exhaustion
# ===========================================================================

class TestEXEC003:
    """EXEC-003: Reading past the input is an error, never an implicit zero."""

    def test_empty_input(self):
        """Reading from empty input raises InputExhausted."""
        with pytest.raises(InputExhausted) as exc:
            execute(lex(","), b"")
        assert exc.value.kind is ErrorKind.INPUT_EXHAUSTED

    def test_partial_output_is_kept(self):
        """The error carries the output produced so far."""
        with pytest.raises(InputExhausted) as exc:
            execute(lex(",.,.,."), b"ab")
        assert exc.value.output == b"ab"
        assert exc.value.error.details == {"consumed": 2, "program_head": 4}

    def test_is_execution_error(self):
        """InputExhausted is an ExecutionError."""
        with pytest.raises(ExecutionError):
            execute(lex(",,"), b"a")


# ===========================================================================
# EXEC-004: EXIT and PRINT
# ===========================================================================

class TestEXEC004:
    """EXEC-004: EXIT halts immediately; PRINT dumps the whole tape."""

    def test_exit_stops_execution(self):
        """Nothing after EXIT runs."""
        result = execute([I.INCR, I.OUT, I.EXIT, I.INCR, I.OUT])
        assert result.output == b"\x01"
        assert result.status is ExecStatus.EXITED
        assert result.steps == 3
        assert result.tape[0] == 1

    def test_exit_from_ook(self):
        """Ook spells EXIT as '? ?'."""
        source = "Ook. Ook. Ook! Ook. Ook? Ook? Ook. Ook. Ook! Ook."
        result = execute(lex(source, "ook"))
        assert result.output == b"\x01"
        assert result.status is ExecStatus.EXITED

    def test_exit_skips_pending_input(self):
        """EXIT halts before a later IN can fail."""
        result = execute([I.EXIT, I.IN], b"")
        assert result.status is ExecStatus.EXITED

    def test_print_dumps_tape(self):
        """PRINT appends every tape cell."""
        program = [I.INCR, I.RIGHT, I.INCR, I.INCR, I.PRINT]
        assert execute(program, tape_size=4).output == b"\x01\x02\x00\x00"

    def test_print_default_tape_size(self):
        """PRINT on the default tape emits 30,000 bytes."""
        assert len(execute([I.PRINT]).output) == MEMORY_SIZE

    def test_spoon_print(self):
        """Spoon programs can PRINT."""
        result = execute(lex("1 00101110", "spoon"), tape_size=2)
        assert result.output == b"\x01\x00"


# ===========================================================================
# EXEC-005: Tape bounds
# ===========================================================================

class TestEXEC005:
    """EXEC-005: Leaving the tape fails under STRICT and wraps under WRAP."""

    def test_left_of_zero_is_strict_error(self):
        """Moving left of cell 0 raises under STRICT."""
        with pytest.raises(TapeBoundsViolation) as exc:
            execute(lex("<"))
        assert exc.value.kind is ErrorKind.TAPE_BOUNDS_VIOLATION
        assert exc.value.error.details["position"] == -1

    def test_past_the_end_is_strict_error(self):
        """Moving past the last cell raises under STRICT."""
        assert execute(lex(">>"), tape_size=3).memory_head == 2
        with pytest.raises(TapeBoundsViolation) as exc:
            execute(lex("+.>>>"), tape_size=3)
        assert exc.value.error.details == {"position": 3, "size": 3}
        assert exc.value.output == b"\x01"

    def test_wrap_left(self):
        """WRAP moves from cell 0 to the last cell."""
        result = execute(lex("<+."), tape_size=4, bounds=BoundsPolicy.WRAP)
        assert result.memory_head == 3
        assert result.tape == b"\x00\x00\x00\x01"

    def test_wrap_right(self):
        """WRAP moves from the last cell to cell 0."""
        result = execute(lex(">>>>+"), tape_size=4, bounds="wrap")
        assert result.memory_head == 0
        assert result.tape[0] == 1


class TestTape:
    """The tape exposes only cursor moves and cell reads/writes."""

    def test_zero_initialized(self):
        """A new tape is all zeros with the head at 0."""
        tape = Tape(8)
        assert len(tape) == 8
        assert tape.snapshot() == bytes(8)
        assert tape.head == 0

    def test_cell_wraps(self):
        """Cell writes are reduced modulo 256."""
        tape = Tape(1)
        tape.decrement()
        assert tape.read() == 255
        tape.increment()
        assert tape.read() == 0
        tape.write(258)
        assert tape.read() == 2

    def test_strict_move(self):
        """A failed move leaves the head in place."""
        tape = Tape(2)
        tape.right()
        with pytest.raises(TapeBoundsViolation):
            tape.right()
        assert tape.head == 1

    def test_invalid_size(self):
        """A tape needs at least one cell."""
        with pytest.raises(ValueError):
            Tape(0)


# ===========================================================================
# EXEC-006: Loops
# ===========================================================================

class TestEXEC006:
    """EXEC-006: Flat loops repeat until the current cell is zero."""

    def test_clear_loop(self):
        """'[-]' zeroes the current cell."""
        result = execute(lex("++[-]"))
        assert result.status is ExecStatus.COMPLETED
        assert result.tape[0] == 0
        assert result.memory_head == 0

    def test_skipped_loop(self):
        """A loop on a zero cell is skipped."""
        assert execute(lex("[+.]+.")).output == b"\x01"

    def test_move_loop(self):
        """A transfer loop multiplies into the next cell."""
        result = execute(lex("+++++[>++<-]>."))
        assert result.output == b"\x0a"

    @pytest.mark.parametrize("matching", list(LoopMatching))
    def test_flat_loops_agree(self, matching):
        """Both matching modes agree on unnested loops."""
        program = lex("+++[>+<-]>[>++<-]>.")
        assert execute(program, loop_matching=matching).output == b"\x06"


# ===========================================================================
# EXEC-007: Nested loops
# ===========================================================================

class TestEXEC007:
    """EXEC-007: LINEAR pairs each marker with the nearest opposite one.

    The reference interpreter does not count nesting depth. LINEAR keeps
    that behavior; NESTED pairs loops properly.
    """

    NESTED_COUNTDOWN = ">+++[.-<[-]>]"

    def test_linear_backward_scan_stops_at_inner_begin(self):
        """LINEAR jumps back to the inner BEGIN."""
        result = execute(lex(self.NESTED_COUNTDOWN))
        assert result.output == b"\x03"
        assert result.status is ExecStatus.COMPLETED
        assert result.memory_head == 2

    def test_nested_matching_repeats_outer_loop(self):
        """NESTED repeats the outer loop."""
        result = execute(lex(self.NESTED_COUNTDOWN), loop_matching=LoopMatching.NESTED)
        assert result.output == b"\x03\x02\x01"

    def test_linear_forward_scan_stops_at_inner_end(self):
        """LINEAR skips only to the first END."""
        program = lex("[[-]++.>]")
        assert execute(program).output == b"\x02"
        assert execute(program, loop_matching="nested").output == b""

    def test_jump_table(self):
        """Nested markers pair inside out."""
        table = build_jump_table(lex("[[]]"))
        assert table == {0: 3, 3: 0, 1: 2, 2: 1}

    def test_jump_table_skips_unbalanced(self):
        """Unbalanced markers stay out of the table."""
        assert build_jump_table(lex("][")) == {}


# ===========================================================================
# EXEC-008: Unmatched markers
# ===========================================================================

class TestEXEC008:
    """EXEC-008: A loop scan that runs off the program halts the run."""

    @pytest.mark.parametrize("matching", list(LoopMatching))
    def test_begin_without_end(self, matching):
        """A skipped BEGIN with no END halts the run."""
        result = execute(lex(".[+."), loop_matching=matching)
        assert result.output == b"\x00"
        assert result.status is ExecStatus.UNMATCHED_LOOP

    @pytest.mark.parametrize("matching", list(LoopMatching))
    def test_end_without_begin(self, matching):
        """A taken END with no BEGIN halts the run."""
        result = execute(lex("+.]+."), loop_matching=matching)
        assert result.output == b"\x01"
        assert result.status is ExecStatus.UNMATCHED_LOOP

    def test_end_on_zero_falls_through(self):
        """An END on a zero cell needs no partner."""
        result = execute(lex("]+."))
        assert result.output == b"\x01"
        assert result.status is ExecStatus.COMPLETED


class TestEngine:
    """Engine state and result serialization."""

    def test_engine_state_after_run(self):
        """The engine exposes its final heads."""
        engine = Engine([I.INCR, I.RIGHT, I.INCR], b"")
        result = engine.run()
        assert isinstance(result, ExecutionResult)
        assert engine.memory_head == 1
        assert engine.program_head == 3
        assert result.steps == 3

    def test_to_dict(self):
        """Results serialize with status, output and heads."""
        d = execute(lex("++++++++[>++++++++<-]>+.")).to_dict()
        assert d["status"] == "completed"
        assert d["output"] == "A"
        assert d["output_bytes"] == [65]
        assert set(d) == {"status", "output", "output_bytes", "steps",
                          "program_head", "memory_head"}
