from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError
from .tape import DEFAULT_MAX_CELL_VALUE


@dataclass(frozen=True)
class InterpreterOptions:
    max_cell_value: int = DEFAULT_MAX_CELL_VALUE
    # None means a growable tape
    memory_size: Optional[int] = None
    flush_output: bool = True
    # only consulted when reading from the console
    prompt_stdin_once: bool = False
    instructions_limit: Optional[int] = None
    bench_execution: bool = True
    fallback_input: Optional[str] = None
    precompute_jumps: bool = True

    def __post_init__(self) -> None:
        if self.max_cell_value < 0:
            raise ConfigurationError(message=f"max_cell_value must be >= 0, got {self.max_cell_value}")
        if self.memory_size is not None and self.memory_size < 1:
            raise ConfigurationError(message=f"memory_size must be >= 1, got {self.memory_size}")
        if self.instructions_limit is not None and self.instructions_limit < 0:
            raise ConfigurationError(message=f"instructions_limit must be >= 0, got {self.instructions_limit}")
        if self.fallback_input is not None and len(self.fallback_input) != 1:
            raise ConfigurationError(message=f"fallback_input must be a single character, got {self.fallback_input!r}")

    @property
    def fallback_value(self) -> int:
        return 0 if self.fallback_input is None else ord(self.fallback_input)
