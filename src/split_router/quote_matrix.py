"""Quote matrix: price every venue at every cumulative level.

Row v holds the outputs for giving venue v 0..P quanta, all quoted against the
venue's starting reserves (no sequential depletion). A rejected quote becomes
SENTINEL so the optimiser's plain max-comparison skips it.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple

from .core import SENTINEL, CurveError, QuoteMatrix, Venue
from .curve import QuoteFn, quote_venue

# Debug printing control
DEBUG_QUOTES = False

def _dbg(msg: str) -> None:
    if DEBUG_QUOTES:
        print(f"[QUOTES] {msg}")


def quote_row(venue: Venue, levels: Sequence[int], quote: QuoteFn = quote_venue) -> Tuple[int, ...]:
    """Return (0, M[1], ..., M[P]) for one venue."""
    row: List[int] = [0]
    for amount_in in levels:
        try:
            out = quote(venue, amount_in)
        except CurveError as e:
            _dbg(f"{venue.venue_id}: in={amount_in} unreachable ({e})")
            out = SENTINEL
        row.append(out)
    return tuple(row)


def build_quote_matrix(venues: Sequence[Venue],
                       levels: Sequence[int],
                       *,
                       quote: QuoteFn = quote_venue,
                       max_workers: int = 1) -> QuoteMatrix:
    """Quote all venues at all levels.

    Parameters
    ----------
    venues : Sequence[Venue]
        Venues in request order; row order follows it.
    levels : Sequence[int]
        Cumulative input levels from `quantize`.
    quote : QuoteFn, optional
        Curve adapter; must be pure. Defaults to `quote_venue`.
    max_workers : int, optional
        When > 1 and there is more than one venue, rows are quoted on a thread pool.
    """
    levels_t = tuple(levels)
    if max_workers > 1 and len(venues) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(venues))) as ex:
            rows = list(ex.map(lambda v: quote_row(v, levels_t, quote), venues))
    else:
        rows = [quote_row(v, levels_t, quote) for v in venues]
    _dbg(f"built {len(rows)} x {len(levels_t) + 1} matrix")
    return QuoteMatrix(levels=levels_t, rows=tuple(rows))


__all__ = ["build_quote_matrix", "quote_row"]
