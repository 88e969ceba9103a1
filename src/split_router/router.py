"""Routing interface: split one trade across venues to maximise total OUT.

Pipeline per request: quantize the trade into P levels, quote every venue at
every level against its snapshot reserves, run the group-knapsack optimiser,
walk the backpointers into a venue-indexed allocation, and convert quanta back
to token amounts with the quantizer's own mapping. Each leg carries a
slippage-adjusted minimum OUT for the executor to enforce; nothing here
executes or enforces anything.

Because legs are floored per venue, their inputs may sum to slightly less than
the trade amount; the difference is reported as `dust`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .core import (
    BPS_DENOMINATOR,
    DEFAULT_PARTS,
    DEFAULT_SLIPPAGE_BPS,
    MAX_PARTS,
    Allocation,
    QuoteMatrix,
    SplitResult,
    SwapLeg,
    Venue,
)
from .curve import QuoteFn, quote_venue
from .optimizer import find_distribution
from .quantizer import amount_for_quanta, quantize, validate_parts
from .quote_matrix import build_quote_matrix
from .reconstruct import reconstruct_allocation

# Debug printing control
DEBUG_ROUTER = False

def _dbg(msg: str) -> None:
    if DEBUG_ROUTER:
        print(f"[ROUTER] {msg}")


@dataclass(frozen=True)
class SplitConfig:
    """Router configuration.

    parts: number of quanta P the trade is cut into (DP cost grows with P^2).
    max_parts: upper bound on P; the route instruction carries it in one byte.
    slippage_bps: tolerance used to derive each leg's minimum OUT.
    max_workers: thread count for quoting venues; 1 quotes sequentially.
    """
    parts: int = DEFAULT_PARTS
    max_parts: int = MAX_PARTS
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.max_parts < 1 or self.max_parts > MAX_PARTS:
            raise ValueError(f"max_parts must satisfy 1 ≤ max_parts ≤ {MAX_PARTS}")
        validate_parts(self.parts, self.max_parts)
        if self.slippage_bps < 0 or self.slippage_bps > BPS_DENOMINATOR:
            raise ValueError(f"slippage_bps must satisfy 0 ≤ slippage_bps ≤ {BPS_DENOMINATOR}")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


def minimum_out(expected_out: int, slippage_bps: int) -> int:
    """floor(expected_out * (1 - slippage)) with slippage in basis points."""
    if expected_out <= 0:
        return 0
    return (expected_out * (BPS_DENOMINATOR - slippage_bps)) // BPS_DENOMINATOR


def build_legs(amount_in: int,
               allocation: Allocation,
               matrix: QuoteMatrix,
               *,
               slippage_bps: int = DEFAULT_SLIPPAGE_BPS) -> List[SwapLeg]:
    """Convert an allocation into legs for every venue with nonzero quanta."""
    parts = matrix.parts
    legs: List[SwapLeg] = []
    for v, (venue, quanta) in enumerate(allocation):
        if quanta == 0:
            continue
        leg_in = amount_for_quanta(amount_in, parts, quanta)
        expected = matrix.value(v, quanta)
        legs.append(SwapLeg(
            venue=venue,
            quanta=quanta,
            amount_in=leg_in,
            expected_out=expected,
            minimum_out=minimum_out(expected, slippage_bps),
        ))
    return legs


def split_route(amount_in: int,
                venues: Sequence[Venue],
                *,
                config: SplitConfig | None = None,
                quote: QuoteFn = quote_venue) -> SplitResult:
    """Find the OUT-maximising split of `amount_in` across `venues`.

    Parameters
    ----------
    amount_in : int
        Total input in base units (1 ≤ amount_in ≤ 2^64 - 1).
    venues : Sequence[Venue]
        Venues in caller order; order only matters for tie-breaks.
    config : SplitConfig | None, optional
        Router configuration; defaults to SplitConfig().
    quote : QuoteFn, optional
        Curve adapter; defaults to pricing each venue's own curve.

    Raises
    ------
    InvalidStepCount, InvalidTradeAmount, ArithmeticOverflow
        Bad request parameters.
    NoViableRoute
        No venues, or every allocation touches an unreachable quote.
    """
    cfg = config or SplitConfig()
    venues_t = tuple(venues)

    levels = quantize(amount_in, cfg.parts, max_parts=cfg.max_parts)
    matrix = build_quote_matrix(venues_t, levels, quote=quote, max_workers=cfg.max_workers)
    dist = find_distribution(matrix)
    allocation = reconstruct_allocation(dist, venues_t)
    legs = build_legs(amount_in, allocation, matrix, slippage_bps=cfg.slippage_bps)

    res = SplitResult(
        amount_in=amount_in,
        parts=cfg.parts,
        allocation=allocation,
        expected_out=dist.value,
        legs=tuple(legs),
        minimum_out=minimum_out(dist.value, cfg.slippage_bps),
        matrix=matrix,
    )
    _dbg(f"amount_in={amount_in} parts={cfg.parts} value={dist.value} "
         f"quanta={allocation.quanta} dust={res.dust}")
    return res


__all__ = ["SplitConfig", "split_route", "build_legs", "minimum_out"]
