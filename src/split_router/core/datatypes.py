"""
Core datatypes used by the split router.

These datatypes are intentionally minimal and immutable so that the quoting,
optimisation and reconstruction stages stay pure and testable.

Notes:
- Amounts are plain ints (token base units); see `amounts.py` for bounds.
- Quanta counts are 1-based ("give venue v k quanta"); every per-venue table is
  sized P+1 with column 0 the zero-allocation identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

from .constants import UNREACHABLE_CUTOFF


# ---------------------------------------------------------------------------
# Venue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Venue:
    """One liquidity venue and its reserve snapshot for the trade direction.

    Fields:
    - venue_id: opaque identifier (pool address, name); order of venues in a
      request only affects tie-breaks.
    - source_reserve: reserve of the token the trader pays in.
    - destination_reserve: reserve of the token the trader receives.
    - curve: pricing curve used by the default adapter (`quote_venue`).
    """

    venue_id: str
    source_reserve: int = 0
    destination_reserve: int = 0
    curve: Optional[Any] = field(default=None, compare=False)

    def has_liquidity(self) -> bool:
        return self.source_reserve > 0 and self.destination_reserve > 0


# ---------------------------------------------------------------------------
# Quote matrix
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuoteMatrix:
    """V x (P+1) value table plus the cumulative input levels it was quoted at.

    rows[v][k] is the output for giving venue v exactly k quanta; rows[v][0] == 0.
    levels[k-1] is the input amount behind k quanta.
    """

    levels: Tuple[int, ...]
    rows: Tuple[Tuple[int, ...], ...]

    @property
    def parts(self) -> int:
        return len(self.levels)

    @property
    def venue_count(self) -> int:
        return len(self.rows)

    def value(self, venue_index: int, quanta: int) -> int:
        return self.rows[venue_index][quanta]

    def is_reachable(self, venue_index: int, quanta: int) -> bool:
        return self.rows[venue_index][quanta] > UNREACHABLE_CUTOFF


# ---------------------------------------------------------------------------
# Optimiser output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Distribution:
    """DP tables from the optimiser (answer / parent), each V x (P+1)."""

    answer: Tuple[Tuple[int, ...], ...]
    parent: Tuple[Tuple[int, ...], ...]
    parts: int

    @property
    def value(self) -> int:
        """Best total output using all venues with all P quanta committed."""
        return self.answer[-1][self.parts]


@dataclass(frozen=True)
class Allocation:
    """Venue-indexed quanta counts; always as long as the venue list."""

    venues: Tuple[Venue, ...]
    quanta: Tuple[int, ...]

    def __iter__(self) -> Iterator[Tuple[Venue, int]]:
        return iter(zip(self.venues, self.quanta))

    def __len__(self) -> int:
        return len(self.quanta)

    @property
    def total_quanta(self) -> int:
        return sum(self.quanta)

    def used(self) -> List[Tuple[Venue, int]]:
        """Return (venue, quanta) pairs with nonzero quanta, in venue order."""
        return [(v, q) for v, q in self if q > 0]


# ---------------------------------------------------------------------------
# Router output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwapLeg:
    """One venue's share of the trade in token units.

    minimum_out is the slippage-adjusted floor of expected_out; enforcing it is
    the executor's job.
    """

    venue: Venue
    quanta: int
    amount_in: int
    expected_out: int
    minimum_out: int


@dataclass(frozen=True)
class SplitResult:
    """Output of `split_route`: allocation, DP-optimal value and executable legs."""

    amount_in: int
    parts: int
    allocation: Allocation
    expected_out: int
    legs: Tuple[SwapLeg, ...]
    minimum_out: int
    matrix: QuoteMatrix = field(repr=False)

    @property
    def allocated_in(self) -> int:
        return sum(leg.amount_in for leg in self.legs)

    @property
    def dust(self) -> int:
        """Input left unallocated by flooring the per-leg amounts."""
        return self.amount_in - self.allocated_in


__all__ = [
    "Venue",
    "QuoteMatrix",
    "Distribution",
    "Allocation",
    "SwapLeg",
    "SplitResult",
]
