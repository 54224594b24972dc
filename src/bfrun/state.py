from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List

from .tape import Tape


class ExecutionStatus(enum.Enum):
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ExecutionState:
    tape: Tape = field(default_factory=Tape)
    cursor: int = 0
    instructions: int = 0
    status: ExecutionStatus = ExecutionStatus.READY
    jumps: List[int] = field(default_factory=list)

    def reset(self, *, tape: Tape) -> None:
        self.tape = tape
        self.cursor = 0
        self.instructions = 0
        self.jumps = []
        self.status = ExecutionStatus.READY
