#!/usr/bin/env python3
"""
Test actual execution of Brainfuck programs.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import contextlib
import io

import numpy as np
import pytest

from bfrun import (
    BFIOError,
    ConfigurationError,
    ExecutionStatus,
    FileReadError,
    Interpreter,
    InterpreterOptions,
    MaxInstructionsExceededError,
    MismatchedBracketsError,
    run_file,
    run_string,
)

EXAMPLES = os.path.join(os.path.dirname(__file__), '..', 'examples')
HELLO = ("++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---."
         "+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.")


def execute_bf_code(code, input_data=None, **options):
    """Execute BrainFuck code and return (report, output)."""
    opts = InterpreterOptions(bench_execution=False, **options)
    result = run_string(code, input_data=input_data, options=opts)
    return result.report, result.output


def test_scenario_small_program():
    report, output = execute_bf_code("++>++<-.")
    assert report.cells == (1, 2)
    assert report.mem_size == 2
    assert report.pointer == 0
    # every one of the eight characters is an instruction
    assert report.instructions == 8
    assert report.code_len == 8
    assert output == "\x01"


def test_comments_are_not_counted():
    report, _ = execute_bf_code("add two + and + then done")
    assert report.cells == (2,)
    assert report.instructions == 2
    assert report.code_len == len("add two + and + then done")


def test_hello_world():
    _, output = execute_bf_code(HELLO)
    assert output == "Hello World!\n"


def test_hello_world_to_console(capsys):
    Interpreter(HELLO).execute()
    assert capsys.readouterr().out == "Hello World!\n"


def test_loop_runs_while_cell_nonzero():
    report, _ = execute_bf_code("+++[>+<-]>")
    assert report.cells == (0, 3)
    assert report.pointer == 1
    # '[' is evaluated once per iteration plus the final failing check
    assert report.instructions == 3 + 3 * 6 + 1 + 1


def test_loop_skipped_when_cell_zero():
    report, _ = execute_bf_code("[+>+]+")
    assert report.cells == (1,)
    assert report.instructions == 2


def test_nested_loops_multiply():
    report, _ = execute_bf_code("++++[>+++[>++<-]<-]>>")
    assert report.cells == (0, 0, 24)


def test_cell_wraparound_default_and_custom_max():
    report, _ = execute_bf_code("-")
    assert report.cells == (255,)
    report, _ = execute_bf_code("-", max_cell_value=15)
    assert report.cells == (15,)
    report, _ = execute_bf_code("+" * 16, max_cell_value=15)
    assert report.cells == (0,)


def test_fixed_memory_wraps_pointer():
    report, _ = execute_bf_code("<+", memory_size=5)
    assert report.cells == (0, 0, 0, 0, 1)
    assert report.pointer == 4
    report, _ = execute_bf_code(">>>+", memory_size=3)
    assert report.cells == (1, 0, 0)
    assert report.pointer == 0


def test_growable_memory_left_wraps_to_end():
    report, _ = execute_bf_code(">><<<+")
    assert report.cells == (0, 0, 1)
    assert report.pointer == 2


def test_input_bytes_then_fallback():
    report, _ = execute_bf_code(",>,>,", input_data=b"AB")
    assert report.cells == (65, 66, 0)


def test_input_fallback_character():
    report, _ = execute_bf_code(",>,", input_data=b"A", fallback_input="x")
    assert report.cells == (65, 120)


def test_input_reduced_to_cell_range():
    report, _ = execute_bf_code(",", input_data="A", max_cell_value=15)
    assert report.cells == (1,)


def test_echo_input():
    _, output = execute_bf_code(",[.,]", input_data="echo me")
    assert output == "echo me"


def test_output_multibyte_character():
    report, output = execute_bf_code("-.", max_cell_value=1000)
    assert report.cells == (1000,)
    assert output == "Ϩ"


def test_output_skips_invalid_code_point():
    _, output = execute_bf_code("-.", max_cell_value=0x110000)
    assert output == ""


def test_instruction_limit_trips_inside_loop():
    interp = Interpreter("+[-]").with_instructions_limit(2).with_output_ref(io.BytesIO())
    with pytest.raises(MaxInstructionsExceededError) as info:
        interp.execute()
    assert info.value.limit == 2
    assert interp.instructions_count == 3
    assert interp.status is ExecutionStatus.FAILED


def test_instruction_limit_stops_infinite_loop():
    with pytest.raises(MaxInstructionsExceededError):
        execute_bf_code("+[]", instructions_limit=1000)


def test_instruction_limit_not_hit_exactly_at_cap():
    report, _ = execute_bf_code("+++", instructions_limit=3)
    assert report.instructions == 3


def test_mismatched_brackets_rejected_before_running():
    sink = io.BytesIO()
    interp = Interpreter("+.[").with_output_ref(sink)
    with pytest.raises(MismatchedBracketsError) as info:
        interp.execute()
    assert (info.value.opening, info.value.closing) == (1, 0)
    assert sink.getvalue() == b""
    assert interp.instructions_count == 0


def test_misordered_brackets_fail_when_reached():
    with pytest.raises(MismatchedBracketsError) as info:
        execute_bf_code("+][")
    assert "has no partner" in str(info.value)
    with pytest.raises(MismatchedBracketsError):
        execute_bf_code("+][", precompute_jumps=False)


def test_text_scans_match_jump_table():
    fast, fast_out = execute_bf_code(HELLO)
    slow, slow_out = execute_bf_code(HELLO, precompute_jumps=False)
    assert fast == slow
    assert fast_out == slow_out


def test_execute_restarts_cleanly():
    interp = Interpreter("+>++").with_bench_execution(False).with_mem_size(4)
    first = interp.execute()
    second = interp.execute()
    assert first == second
    assert second.cells == (1, 2, 0, 0)
    assert interp.instructions_count == 4
    assert interp.status is ExecutionStatus.COMPLETED


def test_builder_configuration_persists_across_code_changes():
    interp = Interpreter("-").with_max_value(7).with_bench_execution(False)
    assert interp.execute().cells == (7,)
    interp.with_code("--")
    assert interp.execute().cells == (6,)


def test_status_starts_ready():
    assert Interpreter("+").status is ExecutionStatus.READY


def test_bench_execution_sets_elapsed():
    sink = io.BytesIO()
    report = Interpreter("+").with_output_ref(sink).execute()
    assert isinstance(report.elapsed, float)
    report = Interpreter("+").with_output_ref(sink).with_bench_execution(False).execute()
    assert report.elapsed is None


def test_output_failure_propagates():
    class BrokenSink(io.RawIOBase):
        def writable(self):
            return True

        def write(self, b):
            raise OSError("pipe closed")

    interp = Interpreter("+.").with_output_ref(BrokenSink())
    with pytest.raises(BFIOError):
        interp.execute()
    assert interp.status is ExecutionStatus.FAILED


def test_flush_policy():
    class CountingSink(io.BytesIO):
        flushes = 0

        def flush(self):
            self.flushes += 1
            super().flush()

    sink = CountingSink()
    Interpreter("+...").with_output_ref(sink).execute()
    assert sink.flushes == 4

    sink = CountingSink()
    Interpreter("+...").with_output_ref(sink).with_flush(False).execute()
    # end-of-run flush only
    assert sink.flushes == 1


def test_context_manager_closes_owned_streams():
    out = io.BytesIO()
    src = io.BytesIO(b"z")
    with Interpreter(",.").with_input(src).with_output(out) as interp:
        interp.execute()
        assert out.getvalue() == b"z"
    assert out.closed
    assert src.closed


def test_borrowed_streams_stay_open():
    out = io.BytesIO()
    src = io.BytesIO(b"z")
    with Interpreter(",.").with_input_ref(src).with_output_ref(out) as interp:
        interp.execute()
    assert not interp.output.owned
    assert interp.input.stream is src
    assert not out.closed
    assert not src.closed
    assert out.getvalue() == b"z"


def test_console_input_when_no_source(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("hey\n"))
    interp = Interpreter(",>,>,>,").prompt_stdin_once(True).with_output_ref(io.BytesIO())
    assert interp.execute().cells == (104, 101, 121, 0)

    monkeypatch.setattr(sys, "stdin", io.StringIO("hey\nyo\n"))
    interp = Interpreter(",>,>,").with_fallback_input("!").with_output_ref(io.BytesIO())
    assert interp.execute().cells == (104, 121, 33)


def test_invalid_configuration():
    with pytest.raises(ConfigurationError):
        InterpreterOptions(max_cell_value=-1)
    with pytest.raises(ConfigurationError):
        Interpreter("+").with_mem_size(0)
    with pytest.raises(ValueError):
        Interpreter("+").with_fallback_input("ab")


def test_report_numpy_and_format():
    report, _ = execute_bf_code("++>++<-")
    arr = report.as_numpy()
    assert arr.dtype == np.uint8
    assert arr.tolist() == [1, 2]
    assert report.format_cells() == "[  1]   2"
    assert "pointer: 0" in str(report)

    report, _ = execute_bf_code("-", max_cell_value=1000)
    assert report.as_numpy().dtype == np.uint16


def test_from_file_example():
    interp = Interpreter.from_file(os.path.join(EXAMPLES, 'hello_world.bf'))
    out = io.BytesIO()
    interp.with_output_ref(out).execute()
    assert out.getvalue() == b"Hello World!\n"


def test_run_file_sierpinski():
    result = run_file(os.path.join(EXAMPLES, 'sierpinski.bf'))
    lines = result.output.splitlines()
    assert len(lines) == 32
    assert lines[0].strip() == "*"
    assert result.report.instructions > 0


def test_from_file_missing(tmp_path):
    missing = tmp_path / "nope.bf"
    with pytest.raises(FileReadError) as info:
        Interpreter.from_file(missing)
    assert info.value.path == str(missing)
    assert isinstance(info.value.cause, OSError)


def test_from_file_bad_encoding(tmp_path):
    path = tmp_path / "latin.bf"
    path.write_bytes(b"+\xff+")
    with pytest.raises(FileReadError):
        Interpreter.from_file(path)


def test_console_output_to_plain_text_object():
    class TextSink:
        def __init__(self):
            self.parts = []

        def write(self, s):
            self.parts.append(s)

        def flush(self):
            pass

    sink = TextSink()
    with contextlib.redirect_stdout(sink):
        Interpreter("++++++++[>++++++++<-]>+.-.").execute()
    assert sink.parts == ["A", "@"]


def test_interrupted_read_marks_run_failed():
    class InterruptingSource(io.RawIOBase):
        def readable(self):
            return True

        def read(self, size=-1):
            raise KeyboardInterrupt

    interp = Interpreter("+,").with_input_ref(InterruptingSource()).with_output_ref(io.BytesIO())
    with pytest.raises(KeyboardInterrupt):
        interp.execute()
    assert interp.status is ExecutionStatus.FAILED
    assert interp.instructions_count == 1
