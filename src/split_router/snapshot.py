"""
Venue snapshots: read a trade request plus venue reserves from JSON, resolving
reserves over JSON-RPC when the snapshot names token accounts instead of amounts.

Snapshot layout::

    {
      "rpc": "https://api.mainnet-beta.solana.com",      # optional
      "trade": {"amount_in": 1000000, "parts": 20, "slippage_bps": 50,
                "decimals_in": 6, "decimals_out": 6},
      "venues": [
        {"id": "pool-a", "source_reserve": 5000000000, "destination_reserve": 4900000000,
         "fees": {"trade_fee_bps": 25, "owner_fee_bps": 5}},
        {"id": "pool-b", "source_account": "<token account>", "destination_account": "<token account>",
         "fees": {"trade_fee_numerator": 25, "trade_fee_denominator": 10000}}
      ]
    }

Reserves are quoted once per request; nothing is cached between loads.
"""
from __future__ import annotations

import json
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from .core import (
    DEFAULT_PARTS,
    DEFAULT_SLIPPAGE_BPS,
    ArithmeticOverflow,
    InvalidTradeAmount,
    SnapshotError,
    Venue,
    require_u64,
)
from .curve import ConstantProductCurve


@dataclass(frozen=True)
class Snapshot:
    amount_in: int
    venues: Tuple[Venue, ...]
    parts: int = DEFAULT_PARTS
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    decimals_in: int = 0
    decimals_out: int = 0


# ---------------------------------------------------------------------------
# JSON-RPC
# ---------------------------------------------------------------------------

class _RateLimited(Exception):
    pass


def rpc(
    session: requests.Session,
    url: str,
    method: str,
    params: List[Any],
    *,
    retries: int = 5,
    backoff_base: float = 0.25,
    backoff_max: float = 10.0,
) -> Dict[str, Any]:
    """POST one JSON-RPC call and return its `result`, retrying transport errors and rate limits."""
    payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

    last_exc: Exception | None = None
    for attempt in range(retries + 1):
        try:
            r = session.post(url, json=payload, timeout=30)

            # Hard rate limit: HTTP 429
            if r.status_code == 429:
                raise _RateLimited("HTTP 429")

            r.raise_for_status()
            out = r.json()
            if not isinstance(out, dict):
                raise SnapshotError(f"{method} returned a non-object reply: {out!r}")

            if out.get("error") is not None:
                err = out["error"]
                msg = str(err.get("message", "") if isinstance(err, dict) else err)
                if "rate" in msg.lower() or "limit" in msg.lower() or "too many" in msg.lower():
                    raise _RateLimited(f"JSON-RPC rate limit: {msg}")
                raise SnapshotError(f"{method} failed: {json.dumps(err)}")
            if "result" not in out:
                raise SnapshotError(f"{method} returned no result")
            return out["result"]

        except (requests.RequestException, _RateLimited) as e:
            last_exc = e
            if attempt >= retries:
                break
            # Exponential backoff with jitter
            sleep_s = min(backoff_max, backoff_base * (2 ** attempt))
            sleep_s = sleep_s * (0.5 + random.random())
            time.sleep(sleep_s)

    raise SnapshotError(f"{method} failed after {retries + 1} attempts: {last_exc}")


def fetch_token_balance(session: requests.Session, url: str, account: str, **rpc_kwargs) -> int:
    """Return the raw (base unit) balance of an SPL token account."""
    res = rpc(session, url, "getTokenAccountBalance", [account], **rpc_kwargs)
    try:
        return require_u64(int(res["value"]["amount"]), name=f"balance of {account}")
    except (KeyError, TypeError, ValueError, InvalidTradeAmount, ArithmeticOverflow) as e:
        raise SnapshotError(f"malformed balance for {account}: {res!r}") from e


def resolve_reserves(session: requests.Session,
                     url: str,
                     source_account: str,
                     destination_account: str,
                     **rpc_kwargs) -> Tuple[int, int]:
    """Fetch (source_reserve, destination_reserve) from the pool's two token accounts."""
    src = fetch_token_balance(session, url, source_account, **rpc_kwargs)
    dst = fetch_token_balance(session, url, destination_account, **rpc_kwargs)
    return src, dst


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def curve_from_fees(fees: Optional[Dict[str, Any]]) -> ConstantProductCurve:
    if not fees:
        return ConstantProductCurve()
    if "trade_fee_bps" in fees or "owner_fee_bps" in fees:
        return ConstantProductCurve.from_bps(int(fees.get("trade_fee_bps", 0)),
                                             int(fees.get("owner_fee_bps", 0)))
    return ConstantProductCurve(
        int(fees.get("trade_fee_numerator", 0)),
        int(fees.get("trade_fee_denominator", 1)),
        int(fees.get("owner_trade_fee_numerator", 0)),
        int(fees.get("owner_trade_fee_denominator", 1)),
    )


def parse_venue(entry: Dict[str, Any],
                *,
                session: Optional[requests.Session] = None,
                rpc_url: Optional[str] = None) -> Venue:
    """Build a Venue from one snapshot entry, fetching reserves if only accounts are given."""
    if not isinstance(entry, dict):
        raise SnapshotError(f"venue entry must be an object: {entry!r}")
    try:
        venue_id = str(entry["id"])
    except (KeyError, TypeError) as e:
        raise SnapshotError(f"venue entry without id: {entry!r}") from e

    try:
        curve = curve_from_fees(entry.get("fees"))
    except (TypeError, ValueError, AttributeError) as e:
        raise SnapshotError(f"venue {venue_id}: bad fees: {e}") from e

    if "source_reserve" in entry and "destination_reserve" in entry:
        try:
            src = int(entry["source_reserve"])
            dst = int(entry["destination_reserve"])
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"venue {venue_id}: reserves must be integers") from e
    elif "source_account" in entry and "destination_account" in entry:
        if rpc_url is None:
            raise SnapshotError(f"venue {venue_id} names token accounts but no rpc url is set")
        src, dst = resolve_reserves(session or requests.Session(), rpc_url,
                                    entry["source_account"], entry["destination_account"])
    else:
        raise SnapshotError(f"venue {venue_id} needs reserves or token accounts")

    try:
        require_u64(src, name=f"{venue_id}.source_reserve")
        require_u64(dst, name=f"{venue_id}.destination_reserve")
    except (InvalidTradeAmount, ArithmeticOverflow) as e:
        raise SnapshotError(f"venue {venue_id}: {e}") from e
    return Venue(venue_id=venue_id, source_reserve=src, destination_reserve=dst, curve=curve)


def parse_snapshot(doc: Dict[str, Any],
                   *,
                   session: Optional[requests.Session] = None,
                   rpc_url: Optional[str] = None) -> Snapshot:
    try:
        trade = doc["trade"]
        entries = doc["venues"]
        amount_in = int(trade["amount_in"])
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"snapshot needs trade.amount_in and venues: {e}") from e
    if not isinstance(entries, list):
        raise SnapshotError(f"snapshot venues must be a list, got {type(entries).__name__}")
    url = rpc_url or doc.get("rpc")
    try:
        parts = int(trade.get("parts", DEFAULT_PARTS))
        slippage_bps = int(trade.get("slippage_bps", DEFAULT_SLIPPAGE_BPS))
        decimals_in = int(trade.get("decimals_in", 0))
        decimals_out = int(trade.get("decimals_out", 0))
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"snapshot trade fields must be integers: {e}") from e
    venues = tuple(parse_venue(e, session=session, rpc_url=url) for e in entries)
    return Snapshot(
        amount_in=amount_in,
        venues=venues,
        parts=parts,
        slippage_bps=slippage_bps,
        decimals_in=decimals_in,
        decimals_out=decimals_out,
    )


def load_snapshot(path: str,
                  *,
                  session: Optional[requests.Session] = None,
                  rpc_url: Optional[str] = None) -> Snapshot:
    """Read a snapshot JSON file; see the module docstring for the layout."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"cannot read snapshot {path}: {e}") from e
    return parse_snapshot(doc, session=session, rpc_url=rpc_url)


__all__ = [
    "Snapshot",
    "rpc",
    "fetch_token_balance",
    "resolve_reserves",
    "curve_from_fees",
    "parse_venue",
    "parse_snapshot",
    "load_snapshot",
]
