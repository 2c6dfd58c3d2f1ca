"""Checked integer arithmetic on token amounts — pure functions, no I/O.

Amounts are plain ``int`` values in the smallest token unit. The supported
range is that of the on-chain balance type, an unsigned 128-bit integer.
"""
from __future__ import annotations

from .errors import ArithmeticOverflow

MAX_AMOUNT = 2**128 - 1
MAX_SMALL_DIVISOR = 2**32


def checked(value: int, operation: str = "") -> int:
    """Return ``value`` if it is a valid amount, else raise ArithmeticOverflow."""
    # bool is an int subclass but never a meaningful amount
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Amount must be an int, got {type(value).__name__}")
    if value < 0 or value > MAX_AMOUNT:
        raise ArithmeticOverflow(value, operation)
    return value


def add(a: int, b: int) -> int:
    checked(a, "add")
    checked(b, "add")
    return checked(a + b, "add")


def sub_saturating(a: int, b: int) -> int:
    """Return ``a - b``, or 0 when ``b >= a``.

    Examples:
        sub_saturating(10, 3) → 7
        sub_saturating(3, 10) → 0
    """
    checked(a, "sub_saturating")
    checked(b, "sub_saturating")
    return a - b if a >= b else 0


def max_amount(a: int, b: int) -> int:
    return max(checked(a, "max"), checked(b, "max"))


def min_amount(a: int, b: int) -> int:
    return min(checked(a, "min"), checked(b, "min"))


def div_by_small_integer(a: int, divisor: int) -> int:
    """Truncating division of an amount by a small positive integer."""
    checked(a, "div")
    if isinstance(divisor, bool) or not isinstance(divisor, int):
        raise TypeError(f"Divisor must be an int, got {type(divisor).__name__}")
    if divisor <= 0 or divisor > MAX_SMALL_DIVISOR:
        raise ValueError(f"Divisor must be in 1..{MAX_SMALL_DIVISOR}, got {divisor}")
    return a // divisor


def mul_div(a: int, numerator: int, denominator: int) -> int:
    """Compute ``a * numerator // denominator`` without losing precision.

    The intermediate product is unbounded; only the result is range-checked.
    """
    checked(a, "mul_div")
    if numerator < 0 or denominator <= 0:
        raise ValueError(
            f"mul_div needs numerator >= 0 and denominator > 0, "
            f"got {numerator}/{denominator}"
        )
    return checked(a * numerator // denominator, "mul_div")
