"""Tests for the sample sequence helpers."""

from scratchdir.handle import ScratchDir
from scratchdir.samples import (
    fill_with_generator,
    fill_with_seq,
    fill_with_seq_gen,
    fill_with_value,
)


def test_fill_with_value() -> None:
    target = [0] * 5

    fill_with_value(target, 7)

    assert target == [7, 7, 7, 7, 7]


def test_fill_with_value_bytearray() -> None:
    target = bytearray(4)

    fill_with_value(target, 0xAB)

    assert bytes(target) == b"\xab\xab\xab\xab"


def test_fill_with_value_empty() -> None:
    target: list[int] = []

    fill_with_value(target, 1)

    assert target == []


def test_fill_with_seq() -> None:
    target = [0] * 5

    fill_with_seq(target, 10, 3)

    assert target == [10, 13, 16, 19, 22]


def test_fill_with_seq_floats() -> None:
    target = [0.0] * 3

    fill_with_seq(target, 1.5, 0.5)

    assert target == [1.5, 2.0, 2.5]


def test_fill_with_seq_gen_collatz() -> None:
    target = [0] * 6

    fill_with_seq_gen(target, 5, lambda v: v // 2 if v % 2 == 0 else 3 * v + 1)

    assert target == [5, 16, 8, 4, 2, 1]


def test_fill_with_generator_fibonacci() -> None:
    state = [0, 1]

    def next_fib(s: list[int]) -> int:
        value = s[0]
        s[0], s[1] = s[1], s[0] + s[1]
        return value

    target = [0] * 6
    fill_with_generator(target, state, next_fib)

    assert target == [0, 1, 1, 2, 3, 5]
    assert state == [8, 13]


def test_filled_buffer_written_to_scratch(scratch_dir: ScratchDir) -> None:
    """Sample buffers are meant to become scratch file contents."""
    buffer = bytearray(16)
    fill_with_seq(buffer, 0, 1)

    scratch_dir.write_file("seq.bin", bytes(buffer))

    assert scratch_dir.read_file("seq.bin") == bytes(range(16))
