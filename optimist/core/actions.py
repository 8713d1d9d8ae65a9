"""
Action model and optimistic transition metadata.

An action takes part in the transition protocol when its meta carries an
"optimistic" entry of the form {type: BEGIN|COMMIT|REVERT, id: <any>}.
Everything else is an ordinary action.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

BEGIN = "@@optimist/BEGIN"
COMMIT = "@@optimist/COMMIT"
REVERT = "@@optimist/REVERT"

# Seeds `current` when a bare state is wrapped. Reducers ignore it.
INIT = "@@optimist/INIT"

TRANSITION_TYPES = (BEGIN, COMMIT, REVERT)


@dataclass(frozen=True)
class Action:
    """
    Immutable action record.

    Fields:
        type: Action type (e.g., "ADD", "TodoAdded")
        payload: Action-specific data
        meta: Metadata; meta["optimistic"] holds transition metadata
    """
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Optimistic:
    """
    Transition metadata attached to an action.

    Fields:
        type: BEGIN, COMMIT or REVERT
        id: Caller-chosen transaction id (any equality-comparable value)
        resolved: Set on COMMIT/REVERT records once the engine processed them
    """
    type: str
    id: Any
    resolved: bool = False

    def mark_resolved(self) -> "Optimistic":
        return replace(self, resolved=True)


def _meta_of(action: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(action, Action):
        meta = action.meta
    elif isinstance(action, Mapping):
        meta = action.get("meta")
    else:
        return None
    return meta if isinstance(meta, Mapping) else None


def optimistic_meta(action: Any) -> Optional[Optimistic]:
    """
    Read transition metadata from an action.

    Accepts Action instances and mapping-shaped actions
    ({"type": ..., "meta": {"optimistic": {...}}}). Metadata with an
    unknown type or a missing id counts as absent.

    Returns:
        Optimistic or None for ordinary actions
    """
    meta = _meta_of(action)
    if meta is None:
        return None

    raw = meta.get("optimistic")
    if isinstance(raw, Optimistic):
        opt = raw
    elif isinstance(raw, Mapping):
        opt = Optimistic(
            type=raw.get("type"),
            id=raw.get("id"),
            resolved=bool(raw.get("resolved", raw.get("isNotOptimistic", False))),
        )
    else:
        return None

    if opt.type not in TRANSITION_TYPES or opt.id is None:
        return None
    return opt


def with_optimistic(action: Any, opt: Optional[Optimistic]) -> Any:
    """
    Copy of action with its transition metadata replaced.

    Passing None drops the metadata, turning the copy into an ordinary
    action. The input action is never mutated.

    Raises:
        TypeError: If action is neither an Action nor a mapping
    """
    meta = dict(_meta_of(action) or {})
    if opt is None:
        meta.pop("optimistic", None)
    else:
        meta["optimistic"] = opt

    if isinstance(action, Action):
        return replace(action, meta=meta)
    if isinstance(action, Mapping):
        updated = dict(action)
        updated["meta"] = meta
        return updated
    raise TypeError(f"Cannot attach optimistic metadata to {type(action).__name__}")


def begin(action: Any, txn_id: Any) -> Any:
    """Tag action as the start of transaction txn_id."""
    return with_optimistic(action, Optimistic(BEGIN, txn_id))


def commit(action: Any, txn_id: Any) -> Any:
    """Tag action as the commit of transaction txn_id."""
    return with_optimistic(action, Optimistic(COMMIT, txn_id))


def revert(action: Any, txn_id: Any) -> Any:
    """Tag action as the revert of transaction txn_id."""
    return with_optimistic(action, Optimistic(REVERT, txn_id))
