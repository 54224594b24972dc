from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def _build_context(lines: List[str], line_no_1: int, col_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (col_no_1 - 1)}^")
    return "\n".join(out)


def _locate(source: str, index: int) -> Tuple[int, int]:
    line = source.count('\n', 0, index) + 1
    col = index - (source.rfind('\n', 0, index) + 1) + 1
    return line, col


def _first_unmatched(source: str) -> Optional[int]:
    stack: List[int] = []
    for i, ch in enumerate(source):
        if ch == '[':
            stack.append(i)
        elif ch == ']':
            if not stack:
                return i
            stack.pop()
    return stack[0] if stack else None


def _hint_for(bracket: str) -> str:
    if bracket == "[":
        return "Add a closing ']' for every loop that is opened."
    return "Remove the stray ']' or add the '[' it should close."


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(BFError, ValueError):
    pass


@dataclass
class MismatchedBracketsError(BFError):
    opening: int
    closing: int
    context: str = ""


@dataclass
class MaxInstructionsExceededError(BFError):
    limit: int


@dataclass
class BFIOError(BFError):
    cause: Optional[BaseException] = field(default=None, repr=False)


@dataclass
class FileReadError(BFError):
    path: str
    cause: Optional[BaseException] = field(default=None, repr=False)


def make_mismatch_error(*, source: str, opening: int, closing: int) -> MismatchedBracketsError:
    message = f"MismatchedBrackets: {opening} '[' but {closing} ']'"
    ctx = ""
    pos = _first_unmatched(source)
    if pos is not None:
        line, col = _locate(source, pos)
        ctx = _build_context(source.split('\n'), line, col)
        message += f" (unmatched {source[pos]!r} at line {line}, column {col})\n{ctx}"
    message += f"\nHint: {_hint_for('[' if opening > closing else ']')}"
    return MismatchedBracketsError(message=message, opening=opening, closing=closing, context=ctx)


def make_unmatched_error(*, source: str, position: int) -> MismatchedBracketsError:
    opening, closing = source.count('['), source.count(']')
    line, col = _locate(source, position)
    ctx = _build_context(source.split('\n'), line, col)
    return MismatchedBracketsError(
        message=(
            f"MismatchedBrackets: {source[position]!r} at line {line}, column {col} has no partner\n"
            f"{ctx}\nHint: {_hint_for(source[position])}"
        ),
        opening=opening,
        closing=closing,
        context=ctx,
    )


def make_limit_error(limit: int) -> MaxInstructionsExceededError:
    return MaxInstructionsExceededError(
        message=f"MaxInstructionsExceeded: program executed more than {limit} instructions",
        limit=limit,
    )


def make_io_error(exc: BaseException) -> BFIOError:
    return BFIOError(message=f"IoError: {exc}", cause=exc)


def make_file_error(path: str, exc: BaseException) -> FileReadError:
    return FileReadError(message=f"FileReadError: could not read {path}: {exc}", path=path, cause=exc)
