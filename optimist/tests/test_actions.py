"""
Tests for action metadata parsing and tagging.
"""

from optimist.core.actions import (
    BEGIN,
    COMMIT,
    REVERT,
    Action,
    Optimistic,
    begin,
    commit,
    optimistic_meta,
    revert,
    with_optimistic,
)


def test_tokens_are_stable_strings():
    assert BEGIN == "@@optimist/BEGIN"
    assert COMMIT == "@@optimist/COMMIT"
    assert REVERT == "@@optimist/REVERT"


def test_helpers_tag_actions():
    a = Action("ADD", {"amount": 1})
    assert optimistic_meta(begin(a, 1)) == Optimistic(BEGIN, 1)
    assert optimistic_meta(commit(a, 1)) == Optimistic(COMMIT, 1)
    assert optimistic_meta(revert(a, 1)) == Optimistic(REVERT, 1)


def test_tagging_does_not_mutate_input():
    a = Action("ADD", {"amount": 1}, meta={"user": "u1"})
    tagged = begin(a, "t")

    assert "optimistic" not in a.meta
    assert tagged.meta["user"] == "u1"
    assert tagged.payload == a.payload


def test_ordinary_actions_have_no_metadata():
    assert optimistic_meta(Action("ADD")) is None
    assert optimistic_meta({"type": "ADD"}) is None
    assert optimistic_meta("ADD") is None
    assert optimistic_meta(None) is None


def test_mapping_actions_are_read():
    action = {"type": "ADD", "meta": {"optimistic": {"type": BEGIN, "id": "x"}}}
    assert optimistic_meta(action) == Optimistic(BEGIN, "x")


def test_mapping_resolved_flag_is_read():
    action = {"meta": {"optimistic": {"type": COMMIT, "id": 3, "isNotOptimistic": True}}}
    assert optimistic_meta(action).resolved


def test_malformed_metadata_counts_as_absent():
    no_id = Action("ADD", meta={"optimistic": {"type": BEGIN}})
    bad_type = Action("ADD", meta={"optimistic": {"type": "SOMETHING", "id": 1}})
    not_a_mapping = Action("ADD", meta={"optimistic": "yes"})

    assert optimistic_meta(no_id) is None
    assert optimistic_meta(bad_type) is None
    assert optimistic_meta(not_a_mapping) is None


def test_falsy_ids_are_valid():
    assert optimistic_meta(begin(Action("ADD"), 0)).id == 0
    assert optimistic_meta(begin(Action("ADD"), "")).id == ""


def test_with_optimistic_none_strips_metadata():
    tagged = begin(Action("ADD", meta={"user": "u1"}), 1)
    plain = with_optimistic(tagged, None)

    assert optimistic_meta(plain) is None
    assert plain.meta == {"user": "u1"}
    assert optimistic_meta(tagged) is not None


def test_with_optimistic_on_mapping_returns_new_dict():
    action = {"type": "ADD", "meta": {}}
    tagged = with_optimistic(action, Optimistic(BEGIN, 1))

    assert tagged is not action
    assert action["meta"] == {}
    assert tagged["meta"]["optimistic"] == Optimistic(BEGIN, 1)


def test_mark_resolved():
    opt = Optimistic(COMMIT, 1)
    assert opt.mark_resolved().resolved
    assert not opt.resolved
