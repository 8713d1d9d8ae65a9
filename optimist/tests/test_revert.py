"""
Tests for the revert algorithm.

Critical: after a revert, current must equal a replay of the retained
history over the baseline.
"""

from optimist.core import Action, begin, commit, make_optimistic_reducer, optimistic_meta, revert
from optimist.replay import replay


def counter(n, action):
    if action.type == "ADD":
        return n + action.payload["amount"]
    return n


def add(amount):
    return Action("ADD", {"amount": amount})


def test_revert_example_scenario():
    """BEGIN +5, ordinary +2, REVERT -> only +2 remains."""
    r = make_optimistic_reducer(counter)

    env = r(0, begin(add(5), 1))
    assert (env.current, env.baseline, len(env.pending)) == (5, 0, 1)

    env = r(env, add(2))
    assert (env.current, len(env.pending)) == (7, 2)

    env = r(env, revert(Action("FAILED"), 1))
    assert env.pending == ()
    assert env.baseline is None
    assert env.current == 2


def test_revert_oldest_keeps_history_from_next_outstanding():
    r = make_optimistic_reducer(counter)
    env = r(0, begin(add(5), "a"))
    env = r(env, begin(add(10), "b"))
    env = r(env, revert(Action("FAILED"), "a"))

    assert env.baseline == 0
    assert env.current == 10
    assert optimistic_meta(env.pending[0]).id == "b"

    env = r(env, commit(Action("SAVED"), "b"))
    assert env.pending == ()
    assert env.current == 10


def test_revert_oldest_drops_records_before_next_outstanding():
    """History restarts at the next outstanding transition; baseline stays."""
    r = make_optimistic_reducer(counter)
    env = r(0, begin(add(5), "a"))
    env = r(env, add(2))
    env = r(env, begin(add(10), "b"))
    env = r(env, revert(Action("FAILED"), "a"))

    assert env.baseline == 0
    assert optimistic_meta(env.pending[0]).id == "b"
    assert env.current == 10
    assert env.current == replay(counter, env.baseline, env.pending).state


def test_revert_newer_removes_only_that_record():
    r = make_optimistic_reducer(counter)
    env = r(0, begin(add(5), "a"))
    env = r(env, add(1))
    env = r(env, begin(add(10), "b"))
    env = r(env, add(100))
    env = r(env, revert(Action("FAILED"), "b"))

    assert env.baseline == 0
    assert env.current == 106
    amounts = [a.payload.get("amount") for a in env.pending]
    assert amounts == [5, 1, 100, None]

    env = r(env, commit(Action("SAVED"), "a"))
    assert env.pending == ()
    assert env.current == 106


def test_revert_replays_with_reducer():
    """Non-commutative reducer: replay order must be preserved."""
    def reduce(state, action):
        if action.type == "APPEND":
            return state + [action.payload["v"]]
        return state

    r = make_optimistic_reducer(reduce)
    env = r([], begin(Action("APPEND", {"v": "a"}), 1))
    env = r(env, Action("APPEND", {"v": "b"}))
    env = r(env, begin(Action("APPEND", {"v": "c"}), 2))
    env = r(env, Action("APPEND", {"v": "d"}))
    env = r(env, revert(Action("FAILED"), 2))

    assert env.current == ["a", "b", "d"]
    assert env.baseline == []
