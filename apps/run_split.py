#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Split one trade across the venues of a snapshot JSON and print the result,
using production split_router APIs.

Printing policy:
1) Trade (amount, parts, slippage) and venue reserves.
2) Optimal allocation per venue + legs in token units.
3) Optional parts scan (--scan 5,10,20).
4) Optional hex route instruction payload (--encode).
5) Errors.
"""

import argparse
import sys

from split_router import SplitConfig, split_route, scan_parts, encode_route_instruction
from split_router.core import (
    ArithmeticOverflow,
    InvalidInstruction,
    InvalidStepCount,
    InvalidTradeAmount,
    NoViableRoute,
    SnapshotError,
)
from split_router.core.fmt import fmt_bps, fmt_share, fmt_units, fmt_value
from split_router.snapshot import load_snapshot


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Split a trade across constant-product venues.")
    p.add_argument("--input", required=True, help="Path to snapshot JSON")
    p.add_argument("--parts", type=int, default=None, help="Override trade.parts")
    p.add_argument("--slippage-bps", type=int, default=None, help="Override trade.slippage_bps")
    p.add_argument("--workers", type=int, default=1, help="Threads used to quote venues")
    p.add_argument("--rpc", default=None, help="JSON-RPC url for venues given as token accounts")
    p.add_argument("--scan", default=None, help="Comma-separated step counts to compare, e.g. 5,10,20")
    p.add_argument("--encode", action="store_true", help="Print the hex route instruction payload")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        snap = load_snapshot(args.input, rpc_url=args.rpc)
        cfg = SplitConfig(
            parts=args.parts if args.parts is not None else snap.parts,
            slippage_bps=args.slippage_bps if args.slippage_bps is not None else snap.slippage_bps,
            max_workers=args.workers,
        )
    except (SnapshotError, InvalidStepCount, InvalidTradeAmount, ArithmeticOverflow, ValueError) as e:
        print("\n=== Errors ===")
        print(f"error: {e}")
        return 2

    din, dout = snap.decimals_in, snap.decimals_out

    # -----------------------------
    # 1) PRINT: trade + venues
    # -----------------------------
    print("\n=== Trade ===")
    print(f"amount_in      : {fmt_units(snap.amount_in, din)}")
    print(f"parts          : {cfg.parts}")
    print(f"slippage       : {fmt_bps(cfg.slippage_bps)}")
    print("\n=== Venues ===")
    for v in snap.venues:
        print(f"{v.venue_id:<16}: source={fmt_units(v.source_reserve, din)} "
              f"destination={fmt_units(v.destination_reserve, dout)} {v.curve!r}")

    # -----------------------------
    # 2) Route
    # -----------------------------
    try:
        res = split_route(snap.amount_in, snap.venues, config=cfg)
    except (NoViableRoute, InvalidStepCount, InvalidTradeAmount, ArithmeticOverflow) as e:
        print("\n=== Errors ===")
        print(f"error: {e}")
        return 1

    print("\n=== Allocation ===")
    for v, q in res.allocation:
        print(f"{v.venue_id:<16}: {fmt_share(q, res.parts)}")
    print(f"expected_out   : {fmt_value(res.expected_out, dout)}")
    print(f"minimum_out    : {fmt_units(res.minimum_out, dout)}")
    print(f"dust_in        : {fmt_units(res.dust, din)}")

    print("\n=== Legs ===")
    for leg in res.legs:
        print(f"{leg.venue.venue_id:<16}: in={fmt_units(leg.amount_in, din)} "
              f"out={fmt_units(leg.expected_out, dout)} min_out={fmt_units(leg.minimum_out, dout)}")

    # -----------------------------
    # 3) Optional parts scan
    # -----------------------------
    if args.scan:
        try:
            grid = [int(x) for x in args.scan.split(",") if x.strip()]
            scan = scan_parts(snap.amount_in, snap.venues, grid, config=cfg)
        except (ValueError, InvalidStepCount) as e:
            print("\n=== Errors ===")
            print(f"error: bad --scan grid: {e}")
            return 2
        print("\n=== Parts scan ===")
        for pt in scan.points:
            if not pt.feasible:
                print(f"parts={pt.parts:<4}: no viable route")
                continue
            print(f"parts={pt.parts:<4}: out={fmt_units(pt.expected_out, dout)} "
                  f"vs single={fmt_value(pt.baseline_out, dout) if pt.baseline_out is not None else 'N/A'} "
                  f"quanta={list(pt.quanta)}")
        if scan.best_parts is not None:
            print(f"best_parts     : {scan.best_parts}")

    # -----------------------------
    # 4) Optional payload
    # -----------------------------
    if args.encode:
        try:
            payload = encode_route_instruction(res.legs)
        except InvalidInstruction as e:
            print("\n=== Errors ===")
            print(f"error: {e}")
            return 1
        print("\n=== Instruction ===")
        print(payload.hex())

    return 0


if __name__ == "__main__":
    sys.exit(main())
