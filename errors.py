"""Failure taxonomy for puzzle generation.

Only :class:`RetriesExhausted` leaves :func:`solver.orchestrator.generate`; the
others mark a single discarded attempt.
"""

from __future__ import annotations

from typing import Any, Optional


class GenerationError(Exception):
    reason = "generation_error"


class PlacementExhausted(GenerationError):
    """Some piece had no valid position/orientation on the attempt's grid."""

    reason = "placement_exhausted"

    def __init__(self, shape_name: str, index: int):
        super().__init__(f"no valid placement for piece {index} ({shape_name})")
        self.shape_name = shape_name
        self.index = index


class TooLoose(GenerationError):
    reason = "too_loose"

    def __init__(self, count: int, cap: int):
        super().__init__(f"at least {count} solutions (cap {cap})")
        self.count = count
        self.cap = cap


class ConsistencyFailure(GenerationError):
    reason = "consistency_failure"


class RetriesExhausted(GenerationError):
    reason = "retries_exhausted"

    def __init__(self, config: Any, attempts: int, last_reason: Optional[str] = None):
        msg = f"failed to generate puzzle after {attempts} attempts"
        if last_reason:
            msg += f" (last: {last_reason})"
        super().__init__(msg)
        self.config = config
        self.attempts = attempts
        self.last_reason = last_reason


__all__ = [
    "GenerationError",
    "PlacementExhausted",
    "TooLoose",
    "ConsistencyFailure",
    "RetriesExhausted",
]
