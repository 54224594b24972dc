from __future__ import annotations

import dataclasses
import io
import logging
import time
from pathlib import Path
from typing import IO, Callable, Dict, Optional, Union

from .errors import make_file_error, make_limit_error, make_unmatched_error
from .lexer import NO_PARTNER, build_jump_table, scan_backward, scan_forward, validate
from .options import InterpreterOptions
from .report import ExecutionReport
from .state import ExecutionState, ExecutionStatus
from .streams import ConsoleInput, ConsoleWriter, Reader, Writer, to_char
from .tape import Tape

logger = logging.getLogger(__name__)

InputLike = Union[IO, bytes, bytearray, str]


def _as_stream(data: InputLike) -> IO:
    if isinstance(data, (bytes, bytearray)):
        return io.BytesIO(bytes(data))
    if isinstance(data, str):
        return io.BytesIO(data.encode('utf-8'))
    return data


class Interpreter:
    """
    Brainfuck interpreter.

    Configure it with the ``with_*`` builder methods, each of which returns
    the interpreter, then call ``execute()``. Every call runs the program
    from a fresh tape; the configuration carries over between calls.

    >>> Interpreter('++>+').with_bench_execution(False).execute().cells
    (2, 1)
    """

    def __init__(self, code: str = "", options: Optional[InterpreterOptions] = None):
        self.code = code
        self.options = options or InterpreterOptions()
        self._input: Optional[Reader] = None
        self._output: Optional[Writer] = None
        self._console = ConsoleInput(once=self.options.prompt_stdin_once)
        self._state = ExecutionState()
        self._dispatch: Dict[str, Callable[[], None]] = {
            '+': self._increment,
            '-': self._decrement,
            '>': self._move_right,
            '<': self._move_left,
            '.': self._output_cell,
            ',': self._input_cell,
            '[': self._open_loop,
            ']': self._close_loop,
        }

    @classmethod
    def from_file(cls, path: Union[str, Path], *, encoding: str = "utf-8",
                  options: Optional[InterpreterOptions] = None) -> "Interpreter":
        p = Path(path)
        try:
            code = p.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise make_file_error(str(p), e) from e
        return cls(code, options)

    # ---------------- builder ----------------
    def _configure(self, **changes) -> "Interpreter":
        self.options = dataclasses.replace(self.options, **changes)
        return self

    def with_code(self, code: str) -> "Interpreter":
        self.code = code
        return self

    def with_input(self, stream: InputLike) -> "Interpreter":
        """Read ',' bytes from ``stream``; the interpreter closes it on ``close()``."""
        self._input = Reader.take(_as_stream(stream))
        return self

    def with_input_ref(self, stream: IO) -> "Interpreter":
        """Read ',' bytes from ``stream``, leaving it open for the caller."""
        self._input = Reader.borrow(stream)
        return self

    def with_output(self, stream: IO) -> "Interpreter":
        self._output = Writer.take(stream)
        return self

    def with_output_ref(self, stream: IO) -> "Interpreter":
        self._output = Writer.borrow(stream)
        return self

    def with_max_value(self, cell_value: int) -> "Interpreter":
        return self._configure(max_cell_value=cell_value)

    def with_mem_size(self, mem_size: int) -> "Interpreter":
        return self._configure(memory_size=mem_size)

    def with_flush(self, flush: bool) -> "Interpreter":
        return self._configure(flush_output=flush)

    def prompt_stdin_once(self, once: bool) -> "Interpreter":
        self._console = ConsoleInput(once=once)
        return self._configure(prompt_stdin_once=once)

    def with_instructions_limit(self, limit: int) -> "Interpreter":
        return self._configure(instructions_limit=limit)

    def with_bench_execution(self, bench: bool) -> "Interpreter":
        return self._configure(bench_execution=bench)

    def with_fallback_input(self, fallback: str) -> "Interpreter":
        return self._configure(fallback_input=fallback)

    def with_precomputed_jumps(self, enabled: bool) -> "Interpreter":
        return self._configure(precompute_jumps=enabled)

    # ---------------- accessors ----------------
    @property
    def instructions_count(self) -> int:
        """Instructions executed so far by the current or last run."""
        return self._state.instructions

    @property
    def status(self) -> ExecutionStatus:
        return self._state.status

    @property
    def input(self) -> Optional[Reader]:
        return self._input

    @property
    def output(self) -> Optional[Writer]:
        return self._output

    # ---------------- instructions ----------------
    def _increment(self) -> None:
        self._state.tape.increment()

    def _decrement(self) -> None:
        self._state.tape.decrement()

    def _move_right(self) -> None:
        self._state.tape.move_right()

    def _move_left(self) -> None:
        self._state.tape.move_left()

    def _output_cell(self) -> None:
        ch = to_char(self._state.tape.read())
        if ch is None:
            return
        writer = self._writer()
        writer.write_char(ch)
        if self.options.flush_output:
            writer.flush()

    def _input_cell(self) -> None:
        if self._input is not None:
            value = self._input.read_byte()
        else:
            value = self._console.read_value()
        if value is None:
            value = self.options.fallback_value
            logger.debug("input exhausted at cursor %d, using fallback %d", self._state.cursor, value)
        self._state.tape.write(value)

    def _open_loop(self) -> None:
        if self._state.tape.read() == 0:
            self._state.cursor = self._partner(self._state.cursor)

    def _close_loop(self) -> None:
        # land one before the '[' so the cursor advance re-evaluates it
        self._state.cursor = self._partner(self._state.cursor) - 1

    def _partner(self, cursor: int) -> int:
        if self.options.precompute_jumps:
            target = self._state.jumps[cursor]
        elif self.code[cursor] == '[':
            target = scan_forward(self.code, cursor)
        else:
            target = scan_backward(self.code, cursor)
        if target == NO_PARTNER:
            raise make_unmatched_error(source=self.code, position=cursor)
        return target

    def _writer(self) -> Writer:
        if self._output is None:
            self._output = ConsoleWriter()
        return self._output

    # ---------------- driver ----------------
    def execute(self) -> ExecutionReport:
        """Run the program from a fresh tape and report the final state.

        Raises MismatchedBracketsError before touching the tape when the
        bracket counts differ, MaxInstructionsExceededError once more than
        ``instructions_limit`` instructions have run, and BFIOError when the
        output sink fails.
        """
        code = self.code
        opts = self.options
        state = self._state

        validate(code)
        state.reset(tape=Tape(opts.max_cell_value, opts.memory_size))
        if opts.precompute_jumps:
            state.jumps = build_jump_table(code)
            logger.debug("jump table built for %d brackets", sum(1 for t in state.jumps if t != NO_PARTNER))
        self._console.reset()

        logger.debug("executing %d characters (limit=%s, memory_size=%s, max_cell_value=%d)",
                     len(code), opts.instructions_limit, opts.memory_size, opts.max_cell_value)

        limit = opts.instructions_limit
        length = len(code)
        dispatch = self._dispatch
        start = time.perf_counter() if opts.bench_execution else None

        state.status = ExecutionStatus.RUNNING
        try:
            while state.cursor < length:
                op = dispatch.get(code[state.cursor])
                if op is not None:
                    op()
                    state.instructions += 1
                state.cursor += 1
                if limit is not None and state.instructions > limit:
                    raise make_limit_error(limit)
            self._writer().flush()
        except BaseException:
            state.status = ExecutionStatus.FAILED
            raise

        elapsed = time.perf_counter() - start if start is not None else None
        state.status = ExecutionStatus.COMPLETED
        tape = state.tape
        logger.debug("completed after %d instructions", state.instructions)

        return ExecutionReport(
            cells=tape.snapshot(),
            mem_size=len(tape),
            pointer=tape.pointer,
            code_len=state.cursor,
            instructions=state.instructions,
            elapsed=elapsed,
            max_cell_value=opts.max_cell_value,
        )

    # ---------------- resources ----------------
    def close(self) -> None:
        """Close the input and output streams the interpreter owns."""
        if self._input is not None:
            self._input.close()
        if self._output is not None:
            self._output.close()

    def __enter__(self) -> "Interpreter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
