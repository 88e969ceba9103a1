"""Route instruction payload: the byte layout the on-chain router expects.

    tag: u8 (0 = route swap)
    leg_count: u8
    leg_count x { amount_in: u64 LE, minimum_amount_out: u64 LE }

Only legs with nonzero input are encoded; their order matches the venue
accounts the caller appends to the transaction.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Sequence

from .core import InvalidInstruction, SwapLeg, U64_MAX

ROUTE_SWAP_TAG = 0

_HEADER = struct.Struct("<BB")
_LEG = struct.Struct("<QQ")

#: leg_count travels as a single byte.
MAX_LEGS = 255


@dataclass(frozen=True)
class LegPayload:
    amount_in: int
    minimum_amount_out: int


def legs_to_payloads(legs: Sequence[SwapLeg]) -> List[LegPayload]:
    return [LegPayload(leg.amount_in, leg.minimum_out) for leg in legs if leg.amount_in > 0]


def encode_route_instruction(legs: Sequence[SwapLeg]) -> bytes:
    """Pack the legs of a split into a route instruction payload."""
    payloads = legs_to_payloads(legs)
    if not payloads:
        raise InvalidInstruction("route instruction needs at least one leg")
    if len(payloads) > MAX_LEGS:
        raise InvalidInstruction(f"too many legs: {len(payloads)} > {MAX_LEGS}")
    out = bytearray(_HEADER.pack(ROUTE_SWAP_TAG, len(payloads)))
    for p in payloads:
        if not (0 <= p.amount_in <= U64_MAX and 0 <= p.minimum_amount_out <= U64_MAX):
            raise InvalidInstruction(f"leg amounts must fit u64: {p}")
        out += _LEG.pack(p.amount_in, p.minimum_amount_out)
    return bytes(out)


def decode_route_instruction(data: bytes) -> List[LegPayload]:
    """Unpack a route instruction payload into its legs."""
    if len(data) < 1:
        raise InvalidInstruction("empty instruction")
    tag = data[0]
    if tag != ROUTE_SWAP_TAG:
        raise InvalidInstruction(f"unknown instruction tag {tag}")
    if len(data) < _HEADER.size:
        raise InvalidInstruction("missing leg count")
    _, leg_count = _HEADER.unpack_from(data)
    if leg_count == 0:
        raise InvalidInstruction("instruction carries no legs")
    body = data[_HEADER.size:]
    if len(body) % _LEG.size != 0:
        raise InvalidInstruction(f"leg data length {len(body)} is not a multiple of {_LEG.size}")
    if len(body) // _LEG.size != leg_count:
        raise InvalidInstruction(
            f"leg count {leg_count} does not match {len(body) // _LEG.size} encoded legs")
    return [LegPayload(*_LEG.unpack_from(body, i * _LEG.size)) for i in range(leg_count)]


__all__ = [
    "ROUTE_SWAP_TAG",
    "MAX_LEGS",
    "LegPayload",
    "legs_to_payloads",
    "encode_route_instruction",
    "decode_route_instruction",
]
