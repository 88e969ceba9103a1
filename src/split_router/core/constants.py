"""
Split Router Core Constants (integer domain)
============================================

Integer widths and bounds shared by the quantizer, quote matrix and optimizer.
Display-only Decimal helpers live in `fmt.py`.
"""

# NOTE: Token amounts enter the router as unsigned 64-bit integers. Intermediate
# products in the quantizer are widened to 128 bits before dividing.

# ---------------------------------------------------------------------------
# Integer widths
# ---------------------------------------------------------------------------

#: Largest unsigned 64-bit value (trade amounts, reserves, quoted outputs).
U64_MAX: int = (1 << 64) - 1

#: Largest unsigned 128-bit value (working width for T * (i + 1)).
U128_MAX: int = (1 << 128) - 1


# ---------------------------------------------------------------------------
# Value matrix sentinel
# ---------------------------------------------------------------------------

#: Marks a (venue, level) cell whose quote was rejected by the curve.
SENTINEL: int = -(10 ** 36)

#: Totals at or below this value include at least one SENTINEL cell.
#: Quoted outputs are bounded by U64_MAX, so V * U64_MAX for any realistic V
#: stays far above it.
UNREACHABLE_CUTOFF: int = SENTINEL // 2


# ---------------------------------------------------------------------------
# Step count bounds
# ---------------------------------------------------------------------------

#: Step counts travel as a single byte in the route instruction.
MAX_PARTS: int = 255

DEFAULT_PARTS: int = 10

#: Basis points denominator for slippage tolerances.
BPS_DENOMINATOR: int = 10_000

DEFAULT_SLIPPAGE_BPS: int = 50


__all__ = [
    "U64_MAX",
    "U128_MAX",
    "SENTINEL",
    "UNREACHABLE_CUTOFF",
    "MAX_PARTS",
    "DEFAULT_PARTS",
    "BPS_DENOMINATOR",
    "DEFAULT_SLIPPAGE_BPS",
]
