from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .core import UNREACHABLE_CUTOFF, NoViableRoute, Venue
from .curve import QuoteFn, quote_venue
from .optimizer import best_single_venue, evaluate_allocation
from .router import SplitConfig, split_route


@dataclass(frozen=True)
class PartsPoint:
    """One point on the parts curve: the optimal split for a given P.

    `baseline_out` is what the best single venue alone quotes for the full
    amount; `improvement` is expected_out - baseline_out (0 when infeasible).
    """
    parts: int
    feasible: bool
    expected_out: Optional[int]
    baseline_out: Optional[int]
    quanta: Tuple[int, ...]

    @property
    def improvement(self) -> int:
        if not self.feasible or self.expected_out is None or self.baseline_out is None:
            return 0
        return self.expected_out - self.baseline_out


@dataclass(frozen=True)
class PartsScanResult:
    """Parts scan over a user-supplied grid of step counts."""
    points: List[PartsPoint]
    best_parts: Optional[int]
    best_out: Optional[int]


def scan_parts(amount_in: int,
               venues: Sequence[Venue],
               parts_grid: Iterable[int],
               *,
               config: SplitConfig | None = None,
               quote: QuoteFn = quote_venue) -> PartsScanResult:
    """Run `split_route` for each P in `parts_grid` and report the best.

    Finer grids that are multiples of coarser ones never do worse; arbitrary
    grids can, since floor(T*k/P) levels differ. Ties keep the smallest P.
    Infeasible step counts are recorded, not raised.
    """
    base = config or SplitConfig()
    points: List[PartsPoint] = []
    best_parts: Optional[int] = None
    best_out: Optional[int] = None

    for p in sorted(set(parts_grid)):
        cfg = replace(base, parts=p)
        try:
            res = split_route(amount_in, venues, config=cfg, quote=quote)
        except NoViableRoute:
            points.append(PartsPoint(parts=p, feasible=False, expected_out=None,
                                     baseline_out=None, quanta=()))
            continue
        baseline: Optional[int] = evaluate_allocation(
            res.matrix, best_single_venue(res.matrix, venues).quanta)
        if baseline <= UNREACHABLE_CUTOFF:
            baseline = None
        points.append(PartsPoint(
            parts=p,
            feasible=True,
            expected_out=res.expected_out,
            baseline_out=baseline,
            quanta=res.allocation.quanta,
        ))
        if best_out is None or res.expected_out > best_out:
            best_out = res.expected_out
            best_parts = p

    return PartsScanResult(points=points, best_parts=best_parts, best_out=best_out)


__all__ = ["PartsPoint", "PartsScanResult", "scan_parts"]
