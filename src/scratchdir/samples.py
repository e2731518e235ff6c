"""Helpers that fill mutable sequences with sample values.

Useful for building file contents before writing them into a scratch
directory, e.g. ``fill_with_seq(buf, 0, 1)`` on a ``bytearray``. All helpers
modify ``target`` in place and never change its length.
"""

from collections.abc import Callable, MutableSequence
from typing import Any, TypeVar

T = TypeVar("T")
G = TypeVar("G")


def fill_with_value(target: MutableSequence[T], value: T) -> None:
    """Set every element of ``target`` to ``value``."""
    for i in range(len(target)):
        target[i] = value


def fill_with_seq(target: MutableSequence[Any], initial: Any, inc: Any) -> None:
    """Fill ``target`` with the arithmetic sequence initial, initial + inc, ...

    Example:
        >>> buf = [0] * 4
        >>> fill_with_seq(buf, 10, 5)
        >>> buf
        [10, 15, 20, 25]
    """
    current = initial
    for i in range(len(target)):
        target[i] = current
        current += inc


def fill_with_seq_gen(target: MutableSequence[T], initial: T, gen: Callable[[T], T]) -> None:
    """Fill ``target`` starting at ``initial``, each next value being ``gen(previous)``.

    Example:
        >>> buf = [0] * 6
        >>> fill_with_seq_gen(buf, 5, lambda v: v // 2 if v % 2 == 0 else 3 * v + 1)
        >>> buf
        [5, 16, 8, 4, 2, 1]
    """
    current = initial
    for i in range(len(target)):
        target[i] = current
        current = gen(current)


def fill_with_generator(
    target: MutableSequence[T], generator: G, next_value: Callable[[G], T]
) -> None:
    """Fill ``target`` with successive values of ``next_value(generator)``.

    ``generator`` holds the state; ``next_value`` advances it and returns the
    value to store.
    """
    for i in range(len(target)):
        target[i] = next_value(generator)
