"""Quantizer: cut a trade amount into P cumulative input levels.

Level i (0-indexed) is floor(T * (i + 1) / P), so the last level is T itself.
Levels may repeat when T is small relative to P; repeated levels simply quote
to repeated values.
"""
from __future__ import annotations

from typing import Tuple

from .core import (
    MAX_PARTS,
    InvalidStepCount,
    InvalidTradeAmount,
    InvariantViolation,
    checked_mul,
    floor_div,
    require_u64,
    to_u128,
)


def validate_parts(parts: int, max_parts: int = MAX_PARTS) -> int:
    """Return `parts` if it is an int in [1, max_parts], else raise InvalidStepCount."""
    if isinstance(parts, bool) or not isinstance(parts, int):
        raise InvalidStepCount(parts, max_parts)
    if parts < 1 or parts > max_parts:
        raise InvalidStepCount(parts, max_parts)
    return parts


def quantize(amount: int, parts: int, *, max_parts: int = MAX_PARTS) -> Tuple[int, ...]:
    """Return the P cumulative input levels for `amount`.

    Raises
    ------
    InvalidStepCount
        parts < 1 or parts > max_parts.
    InvalidTradeAmount
        amount <= 0.
    ArithmeticOverflow
        amount exceeds u64, or amount * (i + 1) exceeds the u128 working width.
    """
    validate_parts(parts, max_parts)
    require_u64(amount, name="amount_in")
    if amount == 0:
        raise InvalidTradeAmount("amount_in must be > 0")
    wide = to_u128(amount)
    return tuple(floor_div(checked_mul(wide, i + 1), parts) for i in range(parts))


def amount_for_quanta(amount: int, parts: int, quanta: int) -> int:
    """Map a quanta count back to token units with the quantizer's mapping.

    0 quanta -> 0; k quanta -> floor(amount * k / parts).
    """
    if quanta < 0 or quanta > parts:
        raise InvariantViolation(f"quanta={quanta} outside [0, {parts}]")
    if quanta == 0:
        return 0
    return floor_div(checked_mul(to_u128(amount), quanta), parts)


__all__ = ["quantize", "amount_for_quanta", "validate_parts"]
