"""
Distribution optimiser: group knapsack over (venue, quanta).

With column 0 the zero-allocation identity:

    answer[0][j] = M[0][j]
    answer[v][j] = max_{k in [0, j]} answer[v-1][j-k] + M[v][k]
    parent[v][j] = j - k*

k is scanned ascending and only a strictly better total replaces the current
one, so on ties the later venue gets the fewest quanta. The result for all P
quanta is answer[V-1][P]. Cost is O(V * P^2) time and O(V * P) space.
"""
from __future__ import annotations

from typing import List, Sequence

from .core import (
    UNREACHABLE_CUTOFF,
    Distribution,
    NoViableRoute,
    QuoteMatrix,
    Venue,
    Allocation,
)

# Debug printing control
DEBUG_OPTIMIZER = False

def _dbg(msg: str) -> None:
    if DEBUG_OPTIMIZER:
        print(f"[DP] {msg}")


def find_distribution(matrix: QuoteMatrix) -> Distribution:
    """Run the DP and return answer/parent tables.

    Raises NoViableRoute when there are no venues or every way of placing all
    P quanta touches an unreachable quote.
    """
    parts = matrix.parts
    rows = matrix.rows
    if not rows:
        raise NoViableRoute("no venues to route through", parts=parts)

    answer: List[List[int]] = [list(rows[0])]
    parent: List[List[int]] = [[0] * (parts + 1)]

    for v in range(1, len(rows)):
        prev = answer[v - 1]
        row = rows[v]
        cur = [0] * (parts + 1)
        cut = [0] * (parts + 1)
        for j in range(parts + 1):
            # k = 0: venue v takes nothing
            best = prev[j]
            best_cut = j
            for k in range(1, j + 1):
                cand = prev[j - k] + row[k]
                if cand > best:
                    best = cand
                    best_cut = j - k
            cur[j] = best
            cut[j] = best_cut
        answer.append(cur)
        parent.append(cut)
        _dbg(f"venue {v}: answer[P]={cur[parts]} parent[P]={cut[parts]}")

    dist = Distribution(
        answer=tuple(tuple(r) for r in answer),
        parent=tuple(tuple(r) for r in parent),
        parts=parts,
    )
    if dist.value <= UNREACHABLE_CUTOFF:
        raise NoViableRoute(
            f"no allocation of {parts} quanta avoids an unreachable quote",
            best_value=dist.value,
            parts=parts,
        )
    return dist


def evaluate_allocation(matrix: QuoteMatrix, quanta: Sequence[int]) -> int:
    """Sum M[v][quanta[v]] over venues (total OUT a given split is quoted at)."""
    if len(quanta) != matrix.venue_count:
        raise ValueError("quanta must have one entry per venue")
    return sum(matrix.value(v, k) for v, k in enumerate(quanta))


def best_single_venue(matrix: QuoteMatrix, venues: Sequence[Venue]) -> Allocation:
    """Allocation that sends all quanta to the single best-quoting venue.

    Baseline for comparing the split against; ties keep the earliest venue.
    """
    if not venues:
        raise NoViableRoute("no venues to route through", parts=matrix.parts)
    parts = matrix.parts
    best_v = 0
    for v in range(1, matrix.venue_count):
        if matrix.value(v, parts) > matrix.value(best_v, parts):
            best_v = v
    quanta = [0] * len(venues)
    quanta[best_v] = parts
    return Allocation(venues=tuple(venues), quanta=tuple(quanta))


__all__ = ["find_distribution", "evaluate_allocation", "best_single_venue"]
