"""
Replay: reconstruct state by folding a reduce function over actions.

Must be 100% deterministic: same baseline and actions -> same state.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
