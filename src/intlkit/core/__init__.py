"""Core utilities shared across the runtime and extraction layers.

Exports:
    DepthGuard: Context manager for nested reference depth limiting

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
