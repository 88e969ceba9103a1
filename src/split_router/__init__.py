"""
Top-level API for split_router (integer-domain).

This module exposes the stable interface for splitting one trade across
several constant-product venues:
  - split_route / SplitConfig: quantize → quote → optimise → reconstruct
  - ConstantProductCurve / quote_venue: default venue pricing
  - encode_route_instruction / decode_route_instruction: leg payload codec

Stage functions (quantize, build_quote_matrix, find_distribution,
reconstruct_allocation) are exported for callers that need the intermediate
tables.
"""

from __future__ import annotations

from .router import SplitConfig, split_route, build_legs, minimum_out
from .quantizer import quantize, amount_for_quanta
from .quote_matrix import build_quote_matrix
from .optimizer import find_distribution, evaluate_allocation, best_single_venue
from .reconstruct import reconstruct_allocation
from .curve import ConstantProductCurve, quote_venue
from .instruction import encode_route_instruction, decode_route_instruction
from .scan import scan_parts

from .core import (
    Venue,
    QuoteMatrix,
    Distribution,
    Allocation,
    SwapLeg,
    SplitResult,
    SENTINEL,
    InvalidStepCount,
    InvalidTradeAmount,
    ArithmeticOverflow,
    CurveError,
    NoViableRoute,
    InvariantViolation,
)

__all__ = [
    # pipeline
    "SplitConfig",
    "split_route",
    "build_legs",
    "minimum_out",
    # stages
    "quantize",
    "amount_for_quanta",
    "build_quote_matrix",
    "find_distribution",
    "evaluate_allocation",
    "best_single_venue",
    "reconstruct_allocation",
    "scan_parts",
    # curves
    "ConstantProductCurve",
    "quote_venue",
    # payload codec
    "encode_route_instruction",
    "decode_route_instruction",
    # core data types
    "Venue",
    "QuoteMatrix",
    "Distribution",
    "Allocation",
    "SwapLeg",
    "SplitResult",
    "SENTINEL",
    # errors surfaced to callers
    "InvalidStepCount",
    "InvalidTradeAmount",
    "ArithmeticOverflow",
    "CurveError",
    "NoViableRoute",
    "InvariantViolation",
]
