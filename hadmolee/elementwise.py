"""Element-wise arithmetic on sequences of floats."""

from __future__ import annotations

from collections.abc import Sequence


def _same_length(lhs: Sequence[float], rhs: Sequence[float]) -> None:
    if len(lhs) != len(rhs):
        raise ValueError(
            f"Cannot combine sequences of different sizes ({len(lhs)} and {len(rhs)})"
        )


def add(lhs: Sequence[float], rhs: Sequence[float]) -> list[float]:
    """Sum two equally long sequences element by element."""
    _same_length(lhs, rhs)
    return [a + b for a, b in zip(lhs, rhs)]


def subtract(lhs: Sequence[float], rhs: Sequence[float]) -> list[float]:
    """Difference of two equally long sequences element by element."""
    _same_length(lhs, rhs)
    return [a - b for a, b in zip(lhs, rhs)]


def scale(values: Sequence[float], factor: float) -> list[float]:
    """Multiply every element by ``factor``."""
    return [v * factor for v in values]


def divide(values: Sequence[float], divisor: float) -> list[float]:
    """Divide every element by ``divisor``."""
    return [v / divisor for v in values]


def negate(values: Sequence[float]) -> list[float]:
    """Flip the sign of every element."""
    return [-v for v in values]


def shift(values: Sequence[float], offset: float) -> list[float]:
    """Add ``offset`` to every element."""
    return [v + offset for v in values]