"""Depth limiting for nested message references.

A template may reference another message with ``{@'id'}``; that message may
reference a third one, and so on. Nothing stops two messages from referencing
each other, so resolution carries a DepthGuard and gives up once the chain
reaches the ceiling.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from intlkit.constants import MAX_REFERENCE_DEPTH
from intlkit.diagnostics import ErrorTemplate, ReferenceDepthError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in substitution:
        guard = DepthGuard()
        with guard:
            value = self._format_reference(message_id, guard)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Each formatting call creates its own DepthGuard instance, so
        concurrent calls never share depth state.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_REFERENCE_DEPTH)
        current_depth: Current recursion depth
        tripped: Set once the ceiling has been hit; stays set for the life
            of the guard so sibling references stop resolving too
    """

    max_depth: int = MAX_REFERENCE_DEPTH
    current_depth: int = field(default=0, init=False)
    tripped: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing. __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            self.tripped = True
            raise ReferenceDepthError(ErrorTemplate.reference_depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each nested reference costs several stack frames (substitute, format,
    lookup), so the ceiling is kept well below sys.getrecursionlimit().

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // 4
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested reference depth %d exceeds what the recursion limit (%d) allows. "
            "Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
