"""
Checked integer arithmetic for token amounts (unsigned 64-bit inputs, 128-bit work).

- Token amounts are plain Python ints validated against U64_MAX at the boundary.
- Products are checked against the 128-bit working width instead of wrapping.
- Division helpers are floor/ceil on the non-negative domain only.

Python ints never overflow, so every width check here is explicit.
"""

from __future__ import annotations

from .constants import U64_MAX, U128_MAX
from .exc import ArithmeticOverflow, InvalidTradeAmount

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Boundary validation
# ----------------------------

def require_u64(value: int, *, name: str = "amount") -> int:
    """Return `value` if it is an int in [0, U64_MAX], else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTradeAmount(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidTradeAmount(f"{name} must be >= 0, got {value}")
    if value > U64_MAX:
        raise ArithmeticOverflow(f"{name}={value} exceeds the 64-bit input width")
    return value


def to_u128(value: int) -> int:
    """Widen a u64 to the 128-bit working width (identity on Python ints, checked)."""
    if value < 0 or value > U128_MAX:
        raise ArithmeticOverflow(f"value={value} does not fit in 128 bits")
    return value


# ----------------------------
# Checked arithmetic
# ----------------------------

def checked_mul(a: int, b: int, *, limit: int = U128_MAX) -> int:
    if a < 0 or b < 0:
        raise ArithmeticOverflow(f"checked_mul expects non-negative operands: a={a}, b={b}")
    r = a * b
    if r > limit:
        raise ArithmeticOverflow(f"{a} * {b} exceeds working width")
    _dbg(f"checked_mul: {a} * {b} = {r}")
    return r


def checked_add(a: int, b: int, *, limit: int = U128_MAX) -> int:
    r = a + b
    if r < 0 or r > limit:
        raise ArithmeticOverflow(f"{a} + {b} exceeds working width")
    return r


def floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise ArithmeticOverflow("floor_div expects a>=0 and b>0")
    return a // b


def ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise ArithmeticOverflow("ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


__all__ = [
    "require_u64",
    "to_u128",
    "checked_mul",
    "checked_add",
    "floor_div",
    "ceil_div",
]
