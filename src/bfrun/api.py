from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional, Union

from .interpreter import InputLike, Interpreter
from .options import InterpreterOptions
from .report import ExecutionReport


@dataclass(frozen=True)
class RunResult:
    report: ExecutionReport
    # captured program output; None when the caller supplied a sink
    output: Optional[str]


def run_interpreter(interp: Interpreter, *, input_data: Optional[InputLike] = None,
                    output: Optional[IO] = None) -> RunResult:
    if input_data is not None:
        interp.with_input(input_data)
    buf: Optional[io.BytesIO] = None
    if output is None:
        buf = io.BytesIO()
        interp.with_output_ref(buf)
    else:
        interp.with_output_ref(output)

    with interp:
        report = interp.execute()

    captured = None if buf is None else buf.getvalue().decode('utf-8')
    return RunResult(report=report, output=captured)


def run_string(code: str, *, input_data: Optional[InputLike] = None,
               options: Optional[InterpreterOptions] = None, output: Optional[IO] = None) -> RunResult:
    return run_interpreter(Interpreter(code, options), input_data=input_data, output=output)


def run_file(path: Union[str, Path], *, input_data: Optional[InputLike] = None,
             options: Optional[InterpreterOptions] = None, output: Optional[IO] = None,
             encoding: str = "utf-8") -> RunResult:
    interp = Interpreter.from_file(path, encoding=encoding, options=options)
    return run_interpreter(interp, input_data=input_data, output=output)
