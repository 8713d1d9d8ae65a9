"""
Replay runner: fold reduce over an action sequence.

Replay is pure: applies reduce to each action in order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying actions
        applied: Number of actions applied
    """
    state: Any
    applied: int


def replay(
    reduce: Callable[[Any, Any], Any],
    state: Any,
    actions: Iterable[Any],
    to_index: Optional[int] = None,
) -> ReplayResult:
    """
    Replay actions over a starting state.

    Args:
        reduce: Pure reduce(state, action) -> state
        state: Starting state (usually an envelope baseline)
        actions: Actions in application order
        to_index: Stop after this index (inclusive, None = all)

    Returns:
        ReplayResult with final state and count
    """
    count = 0
    for index, action in enumerate(actions):
        if to_index is not None and index > to_index:
            break
        state = reduce(state, action)
        count += 1

    return ReplayResult(state=state, applied=count)
