from .api import RunResult, run_file, run_string
from .errors import (
    BFError,
    BFIOError,
    ConfigurationError,
    FileReadError,
    MaxInstructionsExceededError,
    MismatchedBracketsError,
)
from .interpreter import Interpreter
from .lexer import build_jump_table, count_brackets, filter_code, validate
from .options import InterpreterOptions
from .report import ExecutionReport
from .state import ExecutionStatus
from .streams import Reader, Writer
from .tape import DEFAULT_MAX_CELL_VALUE, Tape

__all__ = [
    'Interpreter',
    'InterpreterOptions',
    'ExecutionReport',
    'ExecutionStatus',
    'Tape',
    'Reader',
    'Writer',
    'DEFAULT_MAX_CELL_VALUE',
    'validate',
    'count_brackets',
    'filter_code',
    'build_jump_table',
    'BFError',
    'BFIOError',
    'ConfigurationError',
    'FileReadError',
    'MaxInstructionsExceededError',
    'MismatchedBracketsError',
    'RunResult',
    'run_string',
    'run_file',
]
