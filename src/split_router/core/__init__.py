"""
Split Router Core
=================

Unified exports for the integer-domain primitives shared by the quantizer,
quote matrix builder, optimiser and reconstructor.
Decimal helpers are provided *only* for display formatting.
"""

# NOTE:
#   All amounts are plain Python ints in token base units. Width limits (u64
#   inputs, u128 working products) are enforced explicitly by `amounts`.
#   Decimal functions exist only for I/O formatting and display.

# Integer-domain constants
from .constants import (
    U64_MAX,
    U128_MAX,
    SENTINEL,
    UNREACHABLE_CUTOFF,
    MAX_PARTS,
    DEFAULT_PARTS,
    BPS_DENOMINATOR,
    DEFAULT_SLIPPAGE_BPS,
)

# Checked arithmetic
from .amounts import (
    require_u64,
    to_u128,
    checked_mul,
    checked_add,
    floor_div,
    ceil_div,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import (
    units_to_decimal,
    fmt_units,
    fmt_value,
    fmt_bps,
    fmt_share,
)

# Core datatypes
from .datatypes import (
    Venue,
    QuoteMatrix,
    Distribution,
    Allocation,
    SwapLeg,
    SplitResult,
)

# Core exceptions
from .exc import (
    InvalidStepCount,
    InvalidTradeAmount,
    ArithmeticOverflow,
    CurveError,
    NoViableRoute,
    InvariantViolation,
    InvalidInstruction,
    SnapshotError,
)

__all__ = [
    # constants
    "U64_MAX",
    "U128_MAX",
    "SENTINEL",
    "UNREACHABLE_CUTOFF",
    "MAX_PARTS",
    "DEFAULT_PARTS",
    "BPS_DENOMINATOR",
    "DEFAULT_SLIPPAGE_BPS",
    # amounts
    "require_u64",
    "to_u128",
    "checked_mul",
    "checked_add",
    "floor_div",
    "ceil_div",
    # fmt
    "units_to_decimal",
    "fmt_units",
    "fmt_value",
    "fmt_bps",
    "fmt_share",
    # datatypes
    "Venue",
    "QuoteMatrix",
    "Distribution",
    "Allocation",
    "SwapLeg",
    "SplitResult",
    # exceptions
    "InvalidStepCount",
    "InvalidTradeAmount",
    "ArithmeticOverflow",
    "CurveError",
    "NoViableRoute",
    "InvariantViolation",
    "InvalidInstruction",
    "SnapshotError",
]
