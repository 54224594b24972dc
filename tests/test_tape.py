#!/usr/bin/env python3
"""
Tests for cell wraparound and pointer motion.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun.tape import Tape


@pytest.mark.parametrize("max_value", [1, 15, 255, 65535])
def test_increment_wraps_to_zero(max_value):
    tape = Tape(max_value)
    tape.write(max_value)
    tape.increment()
    assert tape.read() == 0


@pytest.mark.parametrize("max_value", [1, 15, 255, 65535])
def test_decrement_wraps_to_max(max_value):
    tape = Tape(max_value)
    tape.decrement()
    assert tape.read() == max_value


def test_write_reduces_modulo():
    tape = Tape(15)
    tape.write(65)
    assert tape.read() == 1


def test_growable_tape_grows_one_cell_per_step():
    tape = Tape()
    assert len(tape) == 1
    for expected in range(1, 6):
        assert tape.move_right() == expected
        assert len(tape) == expected + 1
    assert tape.snapshot() == (0,) * 6


def test_growable_tape_left_wraps_to_last_cell():
    tape = Tape()
    assert tape.move_left() == 0
    tape.move_right()
    tape.move_right()
    tape.move_left()
    tape.move_left()
    assert tape.move_left() == 2
    assert len(tape) == 3


def test_growable_tape_does_not_grow_when_revisiting():
    tape = Tape()
    tape.move_right()
    tape.move_left()
    tape.move_right()
    assert len(tape) == 2


def test_fixed_tape_wraps_both_ends():
    tape = Tape(size=3)
    assert len(tape) == 3
    assert tape.move_left() == 2
    assert tape.move_right() == 0
    tape.move_right()
    tape.move_right()
    assert tape.move_right() == 0
    assert len(tape) == 3

