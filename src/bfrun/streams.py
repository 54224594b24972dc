"""Byte sources and sinks for the ',' and '.' instructions.

Every endpoint is either *owned* (the interpreter closes it when it is
closed) or *borrowed* (the caller keeps it open and is responsible for it).
Binary streams exchange bytes directly; text streams are bridged through
UTF-8 so the interpreter always sees single bytes on input and writes
whole characters on output.
"""
from __future__ import annotations

import io
import logging
import sys
from typing import IO, Any, List, Optional

from .errors import make_io_error

logger = logging.getLogger(__name__)

MAX_CODE_POINT = 0x10FFFF


def _is_text(stream: Any) -> bool:
    return isinstance(stream, io.TextIOBase)


def to_char(value: int) -> Optional[str]:
    """Character for a cell value, or None if it is not encodable."""
    if value > MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF:
        return None
    return chr(value)


class Writer:
    def __init__(self, stream: IO, *, owned: bool):
        self.stream = stream
        self.owned = owned

    @classmethod
    def take(cls, stream: IO) -> "Writer":
        return cls(stream, owned=True)

    @classmethod
    def borrow(cls, stream: IO) -> "Writer":
        return cls(stream, owned=False)

    def _target(self) -> IO:
        return self.stream

    def write_char(self, ch: str) -> None:
        target = self._target()
        try:
            if _is_text(target):
                target.write(ch)
            else:
                target.write(ch.encode('utf-8'))
        except (OSError, ValueError) as e:
            raise make_io_error(e) from e

    def flush(self) -> None:
        try:
            self._target().flush()
        except (OSError, ValueError) as e:
            raise make_io_error(e) from e

    def close(self) -> None:
        if self.owned:
            self.stream.close()


class ConsoleWriter(Writer):
    """Writes to whatever ``sys.stdout`` is at the time of the write."""

    def __init__(self):
        super().__init__(None, owned=False)

    def _target(self) -> IO:
        return sys.stdout

    def write_char(self, ch: str) -> None:
        # sys.stdout is a text stream, whatever object stands in for it
        try:
            sys.stdout.write(ch)
        except (OSError, ValueError) as e:
            raise make_io_error(e) from e


class Reader:
    def __init__(self, stream: IO, *, owned: bool):
        self.stream = stream
        self.owned = owned
        # remaining UTF-8 bytes of a character read from a text stream
        self._pending: List[int] = []

    @classmethod
    def take(cls, stream: IO) -> "Reader":
        return cls(stream, owned=True)

    @classmethod
    def borrow(cls, stream: IO) -> "Reader":
        return cls(stream, owned=False)

    def read_byte(self) -> Optional[int]:
        """Next byte from the stream, or None on end of input or read failure."""
        if self._pending:
            return self._pending.pop(0)
        try:
            data = self.stream.read(1)
        except (OSError, ValueError) as e:
            logger.debug("input read failed: %s", e)
            return None
        if not data:
            return None
        if isinstance(data, str):
            encoded = data.encode('utf-8')
            self._pending.extend(encoded[1:])
            return encoded[0]
        return data[0]

    def close(self) -> None:
        if self.owned:
            self.stream.close()


class ConsoleInput:
    """Line-based input from ``sys.stdin`` when no source is configured.

    once=True reads a single line on first use and serves every later read
    from it; once=False reads a new line for each read and uses its first
    character. The line terminator is not part of the input, so an empty
    line yields None just like end of input.
    """

    PROMPT = "Input: "

    def __init__(self, once: bool = False):
        self.once = once
        self._buffer: Optional[List[int]] = None

    def _readline(self) -> str:
        if sys.stdin.isatty():
            print(self.PROMPT, end="", file=sys.stderr, flush=True)
        try:
            line = sys.stdin.readline()
        except (OSError, ValueError) as e:
            logger.debug("console read failed: %s", e)
            return ""
        return line.rstrip('\r\n')

    def read_value(self) -> Optional[int]:
        if self.once:
            if self._buffer is None:
                self._buffer = list(self._readline().encode('utf-8'))
            if not self._buffer:
                return None
            return self._buffer.pop(0)

        line = self._readline()
        if not line:
            return None
        return ord(line[0])

    def reset(self) -> None:
        self._buffer = None
