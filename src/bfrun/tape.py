from __future__ import annotations

from typing import List, Optional, Tuple

DEFAULT_MAX_CELL_VALUE = 255


class Tape:
    """Bounded cells plus the data pointer.

    With ``size`` set the tape is fixed and the pointer wraps at both ends.
    Without it the tape starts as a single cell and grows by one cell each
    time the pointer moves past the end; moving left from 0 wraps to the
    current last cell.
    """

    def __init__(self, max_cell_value: int = DEFAULT_MAX_CELL_VALUE, size: Optional[int] = None):
        self.max_cell_value = max_cell_value
        self.size = size
        self.cells: List[int] = [0] * (size if size is not None else 1)
        self.pointer = 0

    def __len__(self) -> int:
        return len(self.cells)

    def read(self) -> int:
        return self.cells[self.pointer]

    def write(self, value: int) -> None:
        self.cells[self.pointer] = value % (self.max_cell_value + 1)

    def increment(self) -> None:
        if self.cells[self.pointer] >= self.max_cell_value:
            self.cells[self.pointer] = 0
        else:
            self.cells[self.pointer] += 1

    def decrement(self) -> None:
        if self.cells[self.pointer] == 0:
            self.cells[self.pointer] = self.max_cell_value
        else:
            self.cells[self.pointer] -= 1

    def move_right(self) -> int:
        self.pointer += 1
        if self.size is not None:
            if self.pointer >= self.size:
                self.pointer = 0
        elif self.pointer >= len(self.cells):
            self.cells.append(0)
        return self.pointer

    def move_left(self) -> int:
        if self.pointer == 0:
            self.pointer = len(self.cells) - 1
        else:
            self.pointer -= 1
        return self.pointer

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self.cells)
