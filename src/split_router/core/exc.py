"""
Core exception types for split_router.core.

These are dependency-free and may be imported by all modules.
"""

__all__ = [
    "InvalidStepCount",
    "InvalidTradeAmount",
    "ArithmeticOverflow",
    "CurveError",
    "NoViableRoute",
    "InvariantViolation",
    "InvalidInstruction",
    "SnapshotError",
]


class InvalidStepCount(Exception):
    """Raised when the number of quanta is below 1 or above the configured maximum."""

    def __init__(self, parts, max_parts=None):
        if max_parts is None:
            msg = f"step count must be >= 1, got {parts}"
        else:
            msg = f"step count must be in [1, {max_parts}], got {parts}"
        super().__init__(msg)
        self.parts = parts
        self.max_parts = max_parts


class InvalidTradeAmount(Exception):
    """Raised when the trade amount is not a positive integer."""
    pass


class ArithmeticOverflow(Exception):
    """Raised when checked arithmetic would exceed the working integer width."""
    pass


class CurveError(Exception):
    """Raised by a curve when it cannot quote a given input (e.g. zero trading tokens).

    The quote matrix builder turns this into a SENTINEL cell; it never reaches
    the caller of `split_route`.
    """
    pass


class NoViableRoute(Exception):
    """Raised when every allocation of the requested quanta hits an unreachable quote.

    Attributes
    ----------
    best_value : int | None
        The best aggregate value the optimizer found (SENTINEL-derived), for context.
    parts : int | None
        The number of quanta that could not be placed.
    """

    def __init__(self, message, *, best_value=None, parts=None):
        super().__init__(message)
        self.best_value = best_value
        self.parts = parts


class InvariantViolation(Exception):
    """Raised when reconstruction or arithmetic would break core invariants."""
    pass


class InvalidInstruction(Exception):
    """Raised when a route instruction payload cannot be encoded or decoded."""
    pass


class SnapshotError(Exception):
    """Raised when a venue snapshot is malformed or reserves cannot be fetched."""
    pass
