from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .tape import DEFAULT_MAX_CELL_VALUE


@dataclass(frozen=True)
class ExecutionReport:
    """Final state of one successful ``Interpreter.execute()`` call."""

    cells: Tuple[int, ...]
    mem_size: int
    pointer: int
    code_len: int
    instructions: int
    # seconds; None when benchmarking is disabled
    elapsed: Optional[float] = None
    max_cell_value: int = DEFAULT_MAX_CELL_VALUE

    def as_numpy(self) -> np.ndarray:
        """Cells as the smallest unsigned integer array that holds ``max_cell_value``.

        Values beyond uint64 fall back to an object array.
        """
        return np.array(self.cells, dtype=np.min_scalar_type(self.max_cell_value))

    def format_cells(self, *, per_line: int = 16) -> str:
        width = len(str(self.max_cell_value))
        parts = []
        for i, value in enumerate(self.cells):
            text = f"{value:>{width}}"
            parts.append(f"[{text}]" if i == self.pointer else f" {text} ")
        lines = [
            "".join(parts[i:i + per_line]).rstrip()
            for i in range(0, len(parts), per_line)
        ]
        return "\n".join(lines)

    def __str__(self) -> str:
        out = [
            f"cells ({self.mem_size}):",
            self.format_cells(),
            f"pointer: {self.pointer}",
            f"instructions: {self.instructions}",
            f"code length: {self.code_len}",
        ]
        if self.elapsed is not None:
            out.append(f"elapsed: {self.elapsed * 1000:.2f} ms")
        return "\n".join(out)
