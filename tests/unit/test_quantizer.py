import pytest

from split_router.core import (
    U64_MAX,
    ArithmeticOverflow,
    InvalidStepCount,
    InvalidTradeAmount,
    InvariantViolation,
)
from split_router.quantizer import amount_for_quanta, quantize, validate_parts


# -----------------------------
# Levels: shape and bounds
# -----------------------------

@pytest.mark.parametrize("amount,parts", [
    (1, 1),
    (100, 4),
    (7, 3),
    (3, 5),
    (1_000_000, 255),
    (U64_MAX, 255),
    (U64_MAX, 1),
])
def test_levels_length_monotone_and_end_at_amount(amount, parts):
    levels = quantize(amount, parts)
    print(f"[quantize] T={amount} P={parts} -> first={levels[0]} last={levels[-1]}")
    assert len(levels) == parts
    assert all(a <= b for a, b in zip(levels, levels[1:]))
    assert levels[-1] == amount


def test_levels_are_floor_of_cumulative_share():
    assert quantize(100, 4) == (25, 50, 75, 100)
    assert quantize(10, 3) == (3, 6, 10)


def test_small_amount_repeats_levels():
    # floor(3*k/5) for k=1..5
    levels = quantize(3, 5)
    print("[quantize] T=3 P=5 ->", levels)
    assert levels == (0, 1, 1, 2, 3)


def test_u64_max_uses_wide_intermediate():
    # T * 255 overflows u64 but not the 128-bit working width
    levels = quantize(U64_MAX, 255)
    assert levels[0] == U64_MAX // 255
    assert levels[127] == (U64_MAX * 128) // 255


# -----------------------------
# Errors
# -----------------------------

@pytest.mark.parametrize("parts", [0, -1, 256])
def test_invalid_step_count_raises(parts):
    with pytest.raises(InvalidStepCount):
        quantize(100, parts)


def test_step_count_respects_custom_max():
    assert validate_parts(8, max_parts=8) == 8
    with pytest.raises(InvalidStepCount):
        quantize(100, 9, max_parts=8)


def test_non_integer_step_count_raises():
    with pytest.raises(InvalidStepCount):
        quantize(100, 2.0)  # type: ignore[arg-type]
    with pytest.raises(InvalidStepCount):
        quantize(100, True)  # type: ignore[arg-type]


def test_zero_or_negative_amount_raises():
    with pytest.raises(InvalidTradeAmount):
        quantize(0, 4)
    with pytest.raises(InvalidTradeAmount):
        quantize(-5, 4)


def test_amount_above_u64_raises_overflow():
    with pytest.raises(ArithmeticOverflow):
        quantize(U64_MAX + 1, 4)


# -----------------------------
# Quanta -> token amount
# -----------------------------

def test_amount_for_quanta_matches_levels():
    levels = quantize(1_234_567, 7)
    assert amount_for_quanta(1_234_567, 7, 0) == 0
    for k in range(1, 8):
        assert amount_for_quanta(1_234_567, 7, k) == levels[k - 1]


def test_amount_for_quanta_out_of_range_raises():
    with pytest.raises(InvariantViolation):
        amount_for_quanta(100, 4, 5)
    with pytest.raises(InvariantViolation):
        amount_for_quanta(100, 4, -1)
