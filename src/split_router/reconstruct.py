"""Walk the optimiser's backpointers into a venue-indexed allocation."""
from __future__ import annotations

from typing import Sequence

from .core import Allocation, Distribution, InvariantViolation, Venue


def reconstruct_allocation(dist: Distribution, venues: Sequence[Venue]) -> Allocation:
    """Return the quanta per venue for the optimal split of all P quanta.

    Venues skipped because the remaining quanta reached zero keep 0. The
    reconstructed total must equal P; anything else means the tables disagree
    on what an index means.
    """
    venue_count = len(dist.parent)
    if len(venues) != venue_count:
        raise InvariantViolation(
            f"distribution covers {venue_count} venues, got {len(venues)}")

    quanta = [0] * venue_count
    j = dist.parts
    for v in range(venue_count - 1, -1, -1):
        cut = dist.parent[v][j]
        if cut < 0 or cut > j:
            raise InvariantViolation(f"parent[{v}][{j}]={cut} outside [0, {j}]")
        quanta[v] = j - cut
        j = cut

    total = sum(quanta)
    if total != dist.parts:
        raise InvariantViolation(
            f"reconstructed {total} quanta, expected {dist.parts} (quanta={quanta})")
    return Allocation(venues=tuple(venues), quanta=tuple(quanta))


__all__ = ["reconstruct_allocation"]
