from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from split_router.core import CurveError, Venue
from split_router.curve import ConstantProductCurve
from split_router.quantizer import quantize


# -----------------------------
# Test helpers (pure functions)
# -----------------------------


class TableQuote:
    """Curve adapter stub that answers from explicit per-venue tables.

    tables[venue_id][k-1] is the output for k quanta of (amount_in, parts);
    None in a table means the curve rejects that level.
    Records every (venue_id, amount_in, reserves) it was asked for.
    """

    def __init__(self, amount_in: int, parts: int, tables: Dict[str, Sequence[Optional[int]]]) -> None:
        self.levels = quantize(amount_in, parts)
        self._by_level: Dict[Tuple[str, int], Optional[int]] = {}
        for venue_id, values in tables.items():
            if len(values) != parts:
                raise ValueError(f"table for {venue_id} needs {parts} values")
            for level, value in zip(self.levels, values):
                self._by_level[(venue_id, level)] = value
        self.calls: List[Tuple[str, int, int, int]] = []

    def __call__(self, venue: Venue, amount_in: int) -> int:
        self.calls.append((venue.venue_id, amount_in, venue.source_reserve, venue.destination_reserve))
        value = self._by_level[(venue.venue_id, amount_in)]
        if value is None:
            raise CurveError(f"{venue.venue_id} rejects {amount_in}")
        return value


def venues_for(*ids: str) -> List[Venue]:
    return [Venue(venue_id=i, source_reserve=1, destination_reserve=1) for i in ids]


def cp_venue(venue_id: str, source: int, destination: int, fee_bps: int = 0) -> Venue:
    return Venue(venue_id=venue_id, source_reserve=source, destination_reserve=destination,
                 curve=ConstantProductCurve.from_bps(fee_bps))


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def table_quote():
    """Factory: table_quote(amount_in, parts, {venue_id: [out_k1, ..., out_kP]})."""
    return TableQuote


@pytest.fixture()
def make_venues():
    return venues_for


@pytest.fixture()
def make_cp_venue():
    return cp_venue


@pytest.fixture()
def linear_quote() -> TableQuote:
    # T=100, P=4: levels 25/50/75/100
    return TableQuote(100, 4, {
        "v0": [10, 20, 30, 40],
        "v1": [9, 18, 27, 36],
    })


@pytest.fixture()
def concave_quote() -> TableQuote:
    return TableQuote(100, 4, {
        "v0": [5, 9, 12, 14],
        "v1": [4, 7, 9, 10],
    })


@pytest.fixture()
def two_venues() -> List[Venue]:
    return venues_for("v0", "v1")


@pytest.fixture()
def cp_venues() -> List[Venue]:
    """Three constant-product pools of different depth and fee."""
    return [
        cp_venue("deep", 2_000_000_000, 1_980_000_000, fee_bps=30),
        cp_venue("mid", 800_000_000, 805_000_000, fee_bps=20),
        cp_venue("thin", 150_000_000, 152_000_000, fee_bps=30),
    ]
