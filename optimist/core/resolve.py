"""
Resolution algorithms: commit and revert a pending transition.

Both take an envelope whose pending history already ends with the
resolution action, plus the index of the BEGIN record being resolved.
They return a new envelope and never touch the input.
"""

from dataclasses import replace
from typing import Any, Callable

from .actions import optimistic_meta, with_optimistic
from .envelope import Envelope
from .search import find_index
from ..replay import replay

Reduce = Callable[[Any, Any], Any]


def is_outstanding(action: Any) -> bool:
    """True for records still awaiting a COMMIT or REVERT."""
    opt = optimistic_meta(action)
    return opt is not None and not opt.resolved


def apply_commit(env: Envelope, target_index: int, reduce: Reduce) -> Envelope:
    """
    Accept a pending transition.

    Committing the oldest transition trims history up to the next
    outstanding one and folds the trimmed actions into the baseline.
    Committing any other transition strips its metadata in place so it
    replays as a permanent action. `current` is never changed here.
    """
    history = env.pending

    if target_index == 0:
        rest = history[1:]
        next_index = find_index(rest, is_outstanding)
        if next_index == -1:
            return replace(env, baseline=None, pending=())

        # rest[next_index] is history[next_index + 1]; everything before it
        # can no longer be reverted and moves into the baseline.
        baseline = replay(reduce, env.baseline, history, to_index=next_index).state
        return replace(env, baseline=baseline, pending=rest[next_index:])

    settled = with_optimistic(history[target_index], None)
    pending = history[:target_index] + (settled,) + history[target_index + 1:]
    return replace(env, pending=pending)


def apply_revert(env: Envelope, target_index: int, reduce: Reduce) -> Envelope:
    """
    Undo a pending transition.

    The target record leaves history and `current` is rebuilt by replaying
    the retained history over the unchanged baseline.
    """
    history = env.pending

    if target_index == 0:
        rest = history[1:]
        next_index = find_index(rest, is_outstanding)
        if next_index == -1:
            current = replay(reduce, env.baseline, rest).state
            return Envelope(baseline=None, pending=(), current=current)
        pending = rest[next_index:]
    else:
        pending = history[:target_index] + history[target_index + 1:]

    current = replay(reduce, env.baseline, pending).state
    return Envelope(baseline=env.baseline, pending=pending, current=current)
