from __future__ import annotations

from typing import List, Tuple

from .errors import make_mismatch_error

BF_OPS = frozenset('+-<>.,[]')

NO_PARTNER = -1


def filter_code(source: str) -> str:
    """Drop everything that is not one of the 8 instructions."""
    return ''.join(ch for ch in source if ch in BF_OPS)


def count_brackets(source: str) -> Tuple[int, int]:
    return source.count('['), source.count(']')


def validate(source: str) -> None:
    """Reject a program whose '[' and ']' counts differ.

    Only the counts are compared, so ``][`` passes validation; reaching
    one of its brackets at run time raises instead (see ``scan_forward``).
    """
    opening, closing = count_brackets(source)
    if opening != closing:
        raise make_mismatch_error(source=source, opening=opening, closing=closing)


def scan_forward(source: str, cursor: int) -> int:
    """Index of the ']' matching the '[' at ``cursor``.

    Returns ``NO_PARTNER`` when the text runs out first.
    """
    depth = 1
    end = len(source)
    while depth > 0:
        cursor += 1
        if cursor >= end:
            return NO_PARTNER
        ch = source[cursor]
        if ch == '[':
            depth += 1
        elif ch == ']':
            depth -= 1
    return cursor


def scan_backward(source: str, cursor: int) -> int:
    """Index of the '[' matching the ']' at ``cursor``.

    Returns ``NO_PARTNER`` when the start of the text is reached first.
    """
    depth = 1
    while depth > 0:
        cursor -= 1
        if cursor < 0:
            return NO_PARTNER
        ch = source[cursor]
        if ch == '[':
            depth -= 1
        elif ch == ']':
            depth += 1
    return cursor


def build_jump_table(source: str) -> List[int]:
    """Map every bracket index to its partner index.

    Non-bracket positions and brackets without a partner hold
    ``NO_PARTNER``. The pairs are the ones ``scan_forward`` and
    ``scan_backward`` find.
    """
    table = [NO_PARTNER] * len(source)
    stack: List[int] = []
    for pos, ch in enumerate(source):
        if ch == '[':
            stack.append(pos)
        elif ch == ']' and stack:
            start = stack.pop()
            table[start] = pos
            table[pos] = start
    return table
