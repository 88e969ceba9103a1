"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses plain integers. Decimal here is only for display of token
base units as human amounts (CLI output, test prints).
"""

from decimal import Decimal, getcontext

from .constants import BPS_DENOMINATOR, UNREACHABLE_CUTOFF

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default global precision for Decimal-based formatting. u64 amounts need 20
#: significant digits; keep headroom for the fractional part.
DEFAULT_DECIMAL_PRECISION: int = 40
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def units_to_decimal(units: int, decimals: int = 0) -> Decimal:
    """Convert integer base units to a Decimal token amount (display only)."""
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    _dbg(f"units_to_decimal: units={units}, decimals={decimals}")
    return Decimal(units).scaleb(-decimals)


def fmt_units(units: int, decimals: int = 0) -> str:
    """Format base units with a fixed number of fractional digits, e.g. 1500000, 6 -> '1.500000'."""
    if decimals == 0:
        return str(units)
    return f"{units_to_decimal(units, decimals):.{decimals}f}"


def fmt_value(value: int, decimals: int = 0) -> str:
    """Like fmt_units, but renders SENTINEL-derived totals as 'unreachable'."""
    if value <= UNREACHABLE_CUTOFF:
        return "unreachable"
    return fmt_units(value, decimals)


def fmt_bps(bps: int) -> str:
    """Format basis points as a percentage string, e.g. 50 -> '0.50%'."""
    pct = Decimal(bps) * 100 / Decimal(BPS_DENOMINATOR)
    return f"{pct:.2f}%"


def fmt_share(quanta: int, parts: int) -> str:
    """Format a quanta count as 'k/P (xx.x%)'."""
    if parts <= 0:
        raise ValueError("parts must be > 0")
    pct = Decimal(quanta) * 100 / Decimal(parts)
    return f"{quanta}/{parts} ({pct:.1f}%)"


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "units_to_decimal",
    "fmt_units",
    "fmt_value",
    "fmt_bps",
    "fmt_share",
]
