import pytest

from split_router import SplitConfig, split_route
from split_router.core import (
    ArithmeticOverflow,
    InvalidStepCount,
    InvalidTradeAmount,
    NoViableRoute,
    U64_MAX,
)
from split_router.router import build_legs, minimum_out


# -----------------------------
# Config
# -----------------------------

def test_default_config_is_valid():
    cfg = SplitConfig()
    assert cfg.parts == 10
    assert cfg.max_parts == 255


@pytest.mark.parametrize("kwargs,exc", [
    ({"parts": 0}, InvalidStepCount),
    ({"parts": 256}, InvalidStepCount),
    ({"parts": 20, "max_parts": 16}, InvalidStepCount),
    ({"max_parts": 0}, ValueError),
    ({"slippage_bps": -1}, ValueError),
    ({"slippage_bps": 10_001}, ValueError),
    ({"max_workers": 0}, ValueError),
])
def test_invalid_config_rejected(kwargs, exc):
    with pytest.raises(exc):
        SplitConfig(**kwargs)


def test_minimum_out_floors_slippage():
    assert minimum_out(10_000, 50) == 9_950
    assert minimum_out(999, 50) == 994   # 999 * 9950 / 10000 = 994.005
    assert minimum_out(0, 50) == 0
    assert minimum_out(1234, 0) == 1234


# -----------------------------
# End-to-end on table quotes
# -----------------------------

def test_concave_table_route(concave_quote, two_venues):
    res = split_route(100, two_venues, config=SplitConfig(parts=4, slippage_bps=0), quote=concave_quote)
    print(f"[route] out={res.expected_out} quanta={res.allocation.quanta} legs={res.legs}")
    assert res.expected_out == 16
    assert res.allocation.quanta == (3, 1)
    assert [(leg.venue.venue_id, leg.amount_in, leg.expected_out) for leg in res.legs] == [
        ("v0", 75, 12),
        ("v1", 25, 4),
    ]
    assert res.dust == 0
    assert res.minimum_out == 16


def test_flooring_legs_reports_dust(table_quote, make_venues):
    # T=10, P=3 -> levels 3/6/10; best split is a=1, b=2 (5 + 9)
    q = table_quote(10, 3, {"a": [5, 6, 7], "b": [4, 9, 10]})
    res = split_route(10, make_venues("a", "b"), config=SplitConfig(parts=3), quote=q)
    assert res.allocation.quanta == (1, 2)
    assert res.expected_out == 14
    assert [leg.amount_in for leg in res.legs] == [3, 6]
    assert res.allocated_in == 9
    assert res.dust == 1
    # dust is derived from the legs, not stored beside them
    assert res.dust == res.amount_in - sum(leg.amount_in for leg in res.legs)


def test_zero_quanta_venues_produce_no_leg(linear_quote, two_venues):
    res = split_route(100, two_venues, config=SplitConfig(parts=4), quote=linear_quote)
    assert res.allocation.quanta == (4, 0)
    assert len(res.legs) == 1
    assert res.legs[0].amount_in == 100
    assert res.legs[0].minimum_out == minimum_out(40, 50)


def test_unreachable_everywhere_raises(table_quote, make_venues):
    q = table_quote(100, 2, {"a": [None, None], "b": [None, None]})
    with pytest.raises(NoViableRoute):
        split_route(100, make_venues("a", "b"), config=SplitConfig(parts=2), quote=q)


def test_empty_venue_list_raises():
    with pytest.raises(NoViableRoute):
        split_route(100, [], config=SplitConfig(parts=2))


def test_bad_amounts_surface_before_quoting(cp_venues):
    with pytest.raises(InvalidTradeAmount):
        split_route(0, cp_venues)
    with pytest.raises(ArithmeticOverflow):
        split_route(U64_MAX + 1, cp_venues)


# -----------------------------
# End-to-end on constant-product pools
# -----------------------------

def test_identical_pools_split_evenly(make_cp_venue):
    venues = [make_cp_venue("a", 1_000_000, 1_000_000), make_cp_venue("b", 1_000_000, 1_000_000)]
    res = split_route(100_000, venues, config=SplitConfig(parts=2))
    # 2 x 47619 beats 90909 on one pool
    assert res.allocation.quanta == (1, 1)
    assert res.expected_out == 2 * 47_619


def test_cp_route_legs_are_consistent(cp_venues):
    amount = 250_000_000
    res = split_route(amount, cp_venues, config=SplitConfig(parts=20, slippage_bps=30))
    print(f"[cp-route] quanta={res.allocation.quanta} out={res.expected_out} dust={res.dust}")
    assert res.allocation.total_quanta == 20
    assert res.allocated_in + res.dust == amount
    assert 0 <= res.dust < len(cp_venues)
    assert sum(leg.expected_out for leg in res.legs) == res.expected_out
    for leg in res.legs:
        assert leg.expected_out == leg.venue.curve.swap_out(
            leg.amount_in, leg.venue.source_reserve, leg.venue.destination_reserve)
        assert leg.minimum_out == minimum_out(leg.expected_out, 30)
    assert res.minimum_out == minimum_out(res.expected_out, 30)


def test_threaded_quoting_gives_same_split(cp_venues):
    a = split_route(250_000_000, cp_venues, config=SplitConfig(parts=25))
    b = split_route(250_000_000, cp_venues, config=SplitConfig(parts=25, max_workers=4))
    assert a.allocation == b.allocation
    assert a.expected_out == b.expected_out


def test_venue_order_does_not_change_value(cp_venues):
    fwd = split_route(250_000_000, cp_venues, config=SplitConfig(parts=15))
    rev = split_route(250_000_000, list(reversed(cp_venues)), config=SplitConfig(parts=15))
    assert fwd.expected_out == rev.expected_out


def test_build_legs_skips_empty_venues(linear_quote, two_venues):
    res = split_route(100, two_venues, config=SplitConfig(parts=4), quote=linear_quote)
    legs = build_legs(100, res.allocation, res.matrix, slippage_bps=100)
    assert len(legs) == 1
    assert legs[0].minimum_out == 39  # floor(40 * 0.99)
