"""
Venue pricing curves (constant product, fee on input): **pool math only**.

A curve answers one question: how much OUT does a given IN buy against a
reserve snapshot. It never mutates the snapshot; the quote matrix builder relies
on every level being priced against the same untouched reserves.

Fees are charged on the input side as trade fee + owner fee, each
floor(amount * num / den) but at least one unit when the fee rate is non-zero.
The destination side is rounded against the trader (ceil on new reserve).
"""
from __future__ import annotations

from typing import Callable, Tuple

from .core import CurveError, Venue, ceil_div, checked_mul

# --- Debug utilities (toggleable) ---
DEBUG_CURVE = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE:
        print(f"[CURVE] {msg}")

#: Curve adapter signature consumed by the quote matrix builder.
QuoteFn = Callable[[Venue, int], int]


def _calculate_fee(amount: int, fee_num: int, fee_den: int) -> int:
    if fee_num == 0 or amount == 0:
        return 0
    fee = (amount * fee_num) // fee_den
    return fee if fee > 0 else 1


def _ceil_div_adjusted(num: int, den: int) -> Tuple[int, int]:
    """Return (ceil(num / den), adjusted_den) the way the token-swap curve does.

    A zero quotient means the trade would take the whole pool; it is rejected
    instead of rounded up to one.
    """
    if num < den:
        raise CurveError("trade would empty the destination reserve")
    quotient = ceil_div(num, den)
    if num % den > 0:
        den = ceil_div(num, quotient)
    return quotient, den


class ConstantProductCurve:
    """x * y = k curve with input-side trade and owner fees.

    Orientation: source reserve receives IN, destination reserve pays OUT.
    """

    def __init__(self,
                 trade_fee_numerator: int = 0,
                 trade_fee_denominator: int = 1,
                 owner_trade_fee_numerator: int = 0,
                 owner_trade_fee_denominator: int = 1) -> None:
        for num, den, name in (
            (trade_fee_numerator, trade_fee_denominator, "trade fee"),
            (owner_trade_fee_numerator, owner_trade_fee_denominator, "owner trade fee"),
        ):
            if den <= 0:
                raise ValueError(f"{name} denominator must be > 0")
            if num < 0 or num >= den:
                raise ValueError(f"{name} must satisfy 0 ≤ fee < 1")
        self.trade_fee_numerator = trade_fee_numerator
        self.trade_fee_denominator = trade_fee_denominator
        self.owner_trade_fee_numerator = owner_trade_fee_numerator
        self.owner_trade_fee_denominator = owner_trade_fee_denominator

    @classmethod
    def from_bps(cls, trade_fee_bps: int = 0, owner_fee_bps: int = 0) -> "ConstantProductCurve":
        return cls(trade_fee_bps, 10_000, owner_fee_bps, 10_000)

    def __repr__(self) -> str:
        return (f"ConstantProductCurve(trade_fee={self.trade_fee_numerator}/{self.trade_fee_denominator}, "
                f"owner_fee={self.owner_trade_fee_numerator}/{self.owner_trade_fee_denominator})")

    def trading_fee(self, amount: int) -> int:
        return _calculate_fee(amount, self.trade_fee_numerator, self.trade_fee_denominator)

    def owner_trading_fee(self, amount: int) -> int:
        return _calculate_fee(amount, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator)

    def swap_out(self, amount_in: int, source_reserve: int, destination_reserve: int) -> int:
        """Return OUT (net to trader) for `amount_in` against the given reserves."""
        if amount_in <= 0:
            raise CurveError("amount_in must be > 0")
        if source_reserve <= 0 or destination_reserve <= 0:
            raise CurveError("empty reserves")
        fees = self.trading_fee(amount_in) + self.owner_trading_fee(amount_in)
        amount_less_fees = amount_in - fees
        if amount_less_fees <= 0:
            raise CurveError(f"amount_in={amount_in} is consumed by fees")
        invariant = checked_mul(source_reserve, destination_reserve)
        new_source = source_reserve + amount_less_fees
        new_destination, _ = _ceil_div_adjusted(invariant, new_source)
        out = destination_reserve - new_destination
        _dbg(f"swap_out: in={amount_in} fees={fees} new_source={new_source} "
             f"new_destination={new_destination} out={out}")
        if out <= 0:
            raise CurveError(f"amount_in={amount_in} yields zero trading tokens")
        return out


def quote_venue(venue: Venue, amount_in: int) -> int:
    """Default curve adapter: price `amount_in` on the venue's curve and snapshot."""
    if venue.curve is None:
        raise CurveError(f"venue {venue.venue_id} has no curve")
    if not venue.has_liquidity():
        raise CurveError(f"venue {venue.venue_id} has an empty reserve")
    return venue.curve.swap_out(amount_in, venue.source_reserve, venue.destination_reserve)


__all__ = ["ConstantProductCurve", "QuoteFn", "quote_venue"]
